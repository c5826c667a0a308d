"""High-score persistence.

The game keeps exactly one value between runs: the best score. It is stored
under a string key as a decimal string in a small key/value store, so the
store itself knows nothing about scores.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from .config import HIGH_SCORE_KEY

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """
    A JSON object of string -> string on disk.

    A missing or unreadable file reads as an empty store. Every `set` rewrites
    the whole file, which is fine for the handful of keys kept here.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError:
            logger.warning(f"Ignoring store file {self.path}: not valid UTF-8")
            return {}
        try:
            data = json.loads(text)
        except ValueError:
            logger.warning(f"Ignoring corrupt store file {self.path}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring store file {self.path}: not a JSON object")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")


class HighScoreStore:
    """Reads and writes the best score through a `KeyValueStore`."""

    def __init__(self, store: KeyValueStore, key: str = HIGH_SCORE_KEY):
        self.store = store
        self.key = key

    def load_high_score(self) -> int:
        try:
            raw = self.store.get(self.key)
        except OSError as e:
            logger.warning(f"Could not read high score: {e}")
            return 0
        if raw is None:
            return 0
        try:
            value = int(raw.strip())
        except ValueError:
            logger.debug(f"Non-numeric high score {raw!r}, using 0")
            return 0
        return max(value, 0)

    def save_high_score(self, score: int) -> None:
        try:
            self.store.set(self.key, str(int(score)))
        except OSError as e:
            logger.warning(f"Could not save high score {score}: {e}")
