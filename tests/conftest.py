from __future__ import annotations

import os
import random

# Headless pygame for every test module
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest  # noqa: E402

from snake.engine import GameEngine  # noqa: E402
from snake.storage import HighScoreStore, MemoryStore  # noqa: E402


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def engine(store: MemoryStore) -> GameEngine:
    return GameEngine(high_scores=HighScoreStore(store), rng=random.Random(1234))


@pytest.fixture
def running(engine: GameEngine) -> GameEngine:
    """A started game with the food parked out of the snake's way."""
    engine.start()
    engine.food = (0, 0)
    return engine
