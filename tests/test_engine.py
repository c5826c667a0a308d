from __future__ import annotations

import random

import pytest

from snake.config import BOARD_SIZE, DIRECTIONS, DOWN, HIGH_SCORE_KEY, INITIAL_SNAKE, LEFT, RIGHT, UP
from snake.engine import (
    GameEngine,
    GameFull,
    GameState,
    free_cells,
    is_opposite,
    random_free_cell,
)
from snake.storage import HighScoreStore, MemoryStore


def test_new_engine_is_idle_with_initial_snake(engine):
    assert engine.state is GameState.IDLE
    assert engine.snake == [(8, 10), (7, 10)]
    assert engine.direction == RIGHT
    assert engine.pending is None
    assert engine.score == 0
    assert engine.food not in engine.snake


def test_tick_moves_forward_without_growth(running):
    assert running.tick() is True
    assert running.snake == [(9, 10), (8, 10)]
    assert running.score == 0


def test_pending_direction_applies_on_next_tick(running):
    running.set_direction(UP)
    assert running.pending == UP
    assert running.direction == RIGHT  # not committed yet

    running.tick()
    assert running.snake[0] == (8, 9)
    assert running.direction == UP
    assert running.pending is None


def test_latest_input_before_tick_wins(running):
    running.set_direction(UP)
    running.set_direction(DOWN)
    running.tick()
    assert running.snake[0] == (8, 11)


def test_reversal_is_ignored(running):
    running.set_direction(LEFT)
    assert running.pending is None
    running.set_direction(UP)
    running.set_direction(LEFT)
    assert running.pending == UP


def test_unknown_direction_is_ignored(running):
    running.set_direction((1, 1))
    running.set_direction((0, 0))
    assert running.pending is None


def test_wall_collision_ends_game_and_keeps_snake(running):
    running.snake = [(19, 10), (18, 10)]
    assert running.tick() is False
    assert running.state is GameState.OVER
    assert running.snake == [(19, 10), (18, 10)]


@pytest.mark.parametrize(
    "snake, direction",
    [
        ([(0, 5), (1, 5)], LEFT),
        ([(5, 0), (5, 1)], UP),
        ([(5, 19), (5, 18)], DOWN),
    ],
)
def test_every_wall_is_deadly(running, snake, direction):
    running.snake = list(snake)
    running.direction = direction
    running.tick()
    assert running.state is GameState.OVER
    assert running.snake == snake


def test_self_collision_ends_game(running):
    running.snake = [(5, 5), (4, 5), (4, 6), (5, 6), (6, 6)]
    running.set_direction(DOWN)
    running.tick()
    assert running.state is GameState.OVER
    assert running.snake == [(5, 5), (4, 5), (4, 6), (5, 6), (6, 6)]


def test_moving_into_current_tail_is_a_collision(running):
    running.snake = [(5, 5), (4, 5), (4, 6), (5, 6)]
    running.set_direction(DOWN)
    running.tick()
    assert running.state is GameState.OVER


def test_eating_grows_scores_and_sets_high_score(running, store):
    fired = []
    running.add_listener(fired.append)
    running.food = (9, 10)

    running.tick()

    assert running.snake == [(9, 10), (8, 10), (7, 10)]
    assert running.score == 1
    assert running.high_score == 1
    assert fired == [1]
    assert store.get(HIGH_SCORE_KEY) == "1"
    assert running.food is not None
    assert running.food not in running.snake


def test_no_signal_below_existing_high_score():
    store = MemoryStore({HIGH_SCORE_KEY: "5"})
    engine = GameEngine(HighScoreStore(store), rng=random.Random(0))
    fired = []
    engine.add_listener(fired.append)
    engine.start()
    engine.food = (9, 10)

    engine.tick()

    assert engine.score == 1
    assert engine.high_score == 5
    assert fired == []
    assert store.get(HIGH_SCORE_KEY) == "5"


def test_high_score_read_from_store_once():
    store = MemoryStore({HIGH_SCORE_KEY: "12"})
    engine = GameEngine(HighScoreStore(store))
    store.set(HIGH_SCORE_KEY, "99")
    assert engine.high_score == 12


def test_malformed_stored_high_score_defaults_to_zero():
    engine = GameEngine(HighScoreStore(MemoryStore({HIGH_SCORE_KEY: "lots"})))
    assert engine.high_score == 0


def test_consecutive_meals_keep_high_score_in_step(running):
    fired = []
    running.add_listener(fired.append)
    for expected in (1, 2, 3):
        hx, hy = running.snake[0]
        running.food = (hx + 1, hy)
        running.tick()
        assert running.score == expected
        assert running.high_score == expected
    assert fired == [1, 2, 3]


@pytest.mark.parametrize("state", [GameState.IDLE, GameState.PAUSED, GameState.OVER])
def test_tick_is_noop_unless_running(running, state):
    running.state = state
    before = list(running.snake)
    assert running.tick() is False
    assert running.snake == before
    assert running.state is state


def test_pause_and_resume(running):
    running.pause()
    assert running.state is GameState.PAUSED
    running.pause()
    assert running.state is GameState.PAUSED
    running.resume()
    assert running.state is GameState.RUNNING
    running.toggle_pause()
    assert running.state is GameState.PAUSED
    running.toggle_pause()
    assert running.state is GameState.RUNNING


@pytest.mark.parametrize("state", [GameState.IDLE, GameState.OVER])
def test_pause_controls_are_noops_outside_a_game(engine, state):
    engine.state = state
    engine.pause()
    engine.resume()
    engine.toggle_pause()
    assert engine.state is state


def test_start_is_noop_during_a_game(running):
    running.tick()
    running.start()
    assert running.snake == [(9, 10), (8, 10)]

    running.pause()
    running.start()
    assert running.state is GameState.PAUSED
    assert running.snake == [(9, 10), (8, 10)]


def test_start_after_game_over_begins_fresh(running):
    running.snake = [(19, 10), (18, 10)]
    running.score = 4
    running.tick()
    assert running.state is GameState.OVER

    running.start()
    assert running.state is GameState.RUNNING
    assert running.snake == list(INITIAL_SNAKE)
    assert running.score == 0
    assert running.direction == RIGHT


@pytest.mark.parametrize("state", list(GameState))
def test_reset_from_any_state(running, state):
    running.tick()
    running.set_direction(UP)
    running.score = 3
    running.state = state

    running.reset()

    assert running.state is GameState.IDLE
    assert running.snake == list(INITIAL_SNAKE)
    assert running.direction == RIGHT
    assert running.pending is None
    assert running.score == 0
    assert running.food not in running.snake


def test_reset_keeps_high_score(running):
    running.food = (9, 10)
    running.tick()
    running.reset()
    assert running.high_score == 1


def test_snapshot_is_a_detached_view(running):
    snap = running.snapshot()
    running.tick()
    assert snap.snake == ((8, 10), (7, 10))
    assert snap.head == (8, 10)
    assert snap.body == ((7, 10),)
    assert snap.state is GameState.RUNNING
    assert running.snapshot().snake == ((9, 10), (8, 10))
    with pytest.raises(AttributeError):
        snap.score = 10


def test_board_full_ends_game_instead_of_crashing(running):
    every = [(x, y) for y in range(BOARD_SIZE) for x in range(BOARD_SIZE)]
    running.snake = [(1, 0)] + [c for c in every if c not in ((0, 0), (1, 0))]
    running.direction = LEFT
    running.food = (0, 0)

    running.tick()

    assert running.state is GameState.OVER
    assert running.food is None
    assert len(running.snake) == BOARD_SIZE * BOARD_SIZE


def test_random_free_cell_avoids_snake_and_raises_when_full():
    rng = random.Random(7)
    snake = [(x, 0) for x in range(BOARD_SIZE)]
    for _ in range(50):
        assert random_free_cell(snake, rng) not in snake

    everything = [(x, y) for x in range(BOARD_SIZE) for y in range(BOARD_SIZE)]
    assert free_cells(everything) == []
    with pytest.raises(GameFull):
        random_free_cell(everything, rng)


def test_free_cells_count():
    assert len(free_cells(list(INITIAL_SNAKE))) == BOARD_SIZE * BOARD_SIZE - 2


def test_is_opposite():
    assert is_opposite(UP, DOWN)
    assert is_opposite(LEFT, RIGHT)
    assert not is_opposite(UP, LEFT)
    assert not is_opposite(UP, UP)


def test_invariants_hold_over_random_play():
    rng = random.Random(42)
    engine = GameEngine(HighScoreStore(MemoryStore()), rng=random.Random(42))
    best = 0
    engine.start()
    for _ in range(3000):
        if engine.state is GameState.OVER:
            engine.start()
        engine.set_direction(rng.choice(DIRECTIONS))
        engine.tick()

        snake = engine.snake
        assert len(snake) >= 2
        assert len(set(snake)) == len(snake)
        assert all(0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE for x, y in snake)
        for (ax, ay), (bx, by) in zip(snake, snake[1:]):
            assert abs(ax - bx) + abs(ay - by) == 1
        assert engine.score == len(snake) - 2
        assert engine.food not in snake
        assert engine.high_score >= engine.score
        assert engine.high_score >= best
        best = engine.high_score
