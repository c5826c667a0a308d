# src/snake/__init__.py
"""Single-player grid snake: engine, storage, input and pygame front end."""

from .engine import GameEngine, GameFull, GameState, Snapshot, SnakeError
from .storage import HighScoreStore, JsonFileStore, MemoryStore

__all__ = [
    "GameEngine",
    "GameFull",
    "GameState",
    "Snapshot",
    "SnakeError",
    "HighScoreStore",
    "JsonFileStore",
    "MemoryStore",
]
