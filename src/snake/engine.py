# engine.py
from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .config import BOARD_SIZE, DIRECTIONS, INITIAL_DIRECTION, INITIAL_SNAKE
from .storage import HighScoreStore, MemoryStore

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]
Direction = Tuple[int, int]


class SnakeError(Exception):
    """Base class for game errors."""


class GameFull(SnakeError):
    """Raised when there is no free cell left to place food on."""


class GameState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


# ---------- Helpers ----------
def is_opposite(a: Direction, b: Direction) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


def in_bounds(cell: Cell) -> bool:
    x, y = cell
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def free_cells(snake: Sequence[Cell]) -> List[Cell]:
    occupied = set(snake)
    return [
        (x, y)
        for x in range(BOARD_SIZE)
        for y in range(BOARD_SIZE)
        if (x, y) not in occupied
    ]


def random_free_cell(snake: Sequence[Cell], rng: random.Random) -> Cell:
    """Pick a cell not covered by `snake`, uniformly. Raises GameFull if none."""
    cells = free_cells(snake)
    if not cells:
        raise GameFull(f"snake covers all {BOARD_SIZE * BOARD_SIZE} cells")
    return rng.choice(cells)


# ---------- Read-only view for renderers ----------
@dataclass(frozen=True)
class Snapshot:
    snake: Tuple[Cell, ...]        # head at index 0
    food: Optional[Cell]
    direction: Direction
    score: int
    high_score: int
    state: GameState

    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def body(self) -> Tuple[Cell, ...]:
        return self.snake[1:]


# ---------- Engine ----------
class GameEngine:
    """
    Owns one game session: snake, direction, food, score and lifecycle.

    The engine never looks at a clock. Whoever drives it calls `tick()` at the
    move interval while the state is RUNNING and forwards input through
    `set_direction()`; input is buffered and consumed by the next tick, so at
    most one turn happens per tick and it is always the latest one.
    """

    def __init__(
        self,
        high_scores: Optional[HighScoreStore] = None,
        rng: Optional[random.Random] = None,
    ):
        self.high_scores = high_scores or HighScoreStore(MemoryStore())
        self.rng = rng or random.Random()
        self.high_score = self.high_scores.load_high_score()
        self.listeners: List[Callable[[int], None]] = []

        self.snake: List[Cell] = []
        self.direction: Direction = INITIAL_DIRECTION
        self.pending: Optional[Direction] = None
        self.food: Optional[Cell] = None
        self.score = 0
        self.state = GameState.IDLE
        self._seed()

    def _seed(self) -> None:
        self.snake = list(INITIAL_SNAKE)
        self.direction = INITIAL_DIRECTION
        self.pending = None
        self.food = random_free_cell(self.snake, self.rng)
        self.score = 0

    def add_listener(self, fn: Callable[[int], None]) -> None:
        """Register `fn(high_score)`, called whenever a new high score is set."""
        self.listeners.append(fn)

    # ---------- Lifecycle ----------
    def start(self) -> None:
        if self.state in (GameState.RUNNING, GameState.PAUSED):
            return
        self._seed()
        self.state = GameState.RUNNING
        logger.debug(f"Game started, food at {self.food}")

    def pause(self) -> None:
        if self.state is GameState.RUNNING:
            self.state = GameState.PAUSED

    def resume(self) -> None:
        if self.state is GameState.PAUSED:
            self.state = GameState.RUNNING

    def toggle_pause(self) -> None:
        if self.state is GameState.RUNNING:
            self.pause()
        elif self.state is GameState.PAUSED:
            self.resume()

    def reset(self) -> None:
        self._seed()
        self.state = GameState.IDLE
        logger.debug("Game reset")

    def _game_over(self, reason: str) -> None:
        self.state = GameState.OVER
        logger.info(f"Game over ({reason}), score {self.score}")

    # ---------- Input ----------
    def set_direction(self, direction: Direction) -> None:
        """Buffer a turn for the next tick; reversals and junk are ignored."""
        if direction not in DIRECTIONS:
            logger.debug(f"Ignoring unknown direction {direction}")
            return
        if is_opposite(direction, self.direction):
            logger.debug(f"Ignoring reversal {direction}")
            return
        self.pending = direction

    # ---------- Update ----------
    def tick(self) -> bool:
        """Advance one cell. Returns True if the snake moved."""
        if self.state is not GameState.RUNNING:
            return False

        # Commit direction once per tick
        if self.pending is not None:
            self.direction = self.pending
            self.pending = None

        hx, hy = self.snake[0]
        dx, dy = self.direction
        new_head = (hx + dx, hy + dy)

        if not in_bounds(new_head):
            self._game_over("wall")
            return False
        if new_head in self.snake:
            self._game_over("self")
            return False

        if new_head == self.food:
            self.snake.insert(0, new_head)
            self.score += 1
            try:
                self.food = random_free_cell(self.snake, self.rng)
            except GameFull:
                self.food = None
                self._game_over("board full")
            if self.score > self.high_score:
                self._new_high_score()
        else:
            self.snake.insert(0, new_head)
            self.snake.pop()
        return True

    def _new_high_score(self) -> None:
        self.high_score = self.score
        self.high_scores.save_high_score(self.high_score)
        logger.info(f"New high score: {self.high_score}")
        for fn in self.listeners:
            fn(self.high_score)

    # ---------- Query ----------
    def snapshot(self) -> Snapshot:
        return Snapshot(
            snake=tuple(self.snake),
            food=self.food,
            direction=self.direction,
            score=self.score,
            high_score=self.high_score,
            state=self.state,
        )
