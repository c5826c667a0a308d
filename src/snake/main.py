# main.py
from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path
from typing import List, Optional

import pygame  # type: ignore

from .config import WIDTH, HEIGHT, FPS, MOVE_INTERVAL_MS, DEFAULT_STORE_PATH, THEMES, Config, Session
from .controls import TICK_EVENT, SwipeTracker, handle_input
from .engine import GameEngine, GameState
from .render import draw_game
from .storage import HighScoreStore, JsonFileStore, MemoryStore


class TickTimer:
    """Arms the pygame move timer only while the engine is RUNNING."""

    def __init__(self, interval_ms: int = MOVE_INTERVAL_MS):
        self.interval_ms = interval_ms
        self.armed = False

    def sync(self, state: GameState) -> None:
        want = state is GameState.RUNNING
        if want and not self.armed:
            pygame.time.set_timer(TICK_EVENT, self.interval_ms)
        elif self.armed and not want:
            pygame.time.set_timer(TICK_EVENT, 0)
        self.armed = want


def parse_args(argv: Optional[List[str]] = None) -> Config:
    parser = argparse.ArgumentParser(prog="snake-game", description="Play snake.")
    parser.add_argument(
        "--store",
        type=Path,
        default=DEFAULT_STORE_PATH,
        help="JSON file the best score is kept in",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Keep the best score in memory only",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for food placement")
    parser.add_argument("--theme", choices=THEMES, default="light")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args(argv)
    return Config(
        seed=args.seed,
        store_path=args.store,
        save=not args.no_save,
        theme=args.theme,
        log_level=args.log_level,
    )


def build_engine(cfg: Config) -> GameEngine:
    store = JsonFileStore(cfg.store_path) if cfg.save else MemoryStore()
    return GameEngine(high_scores=HighScoreStore(store), rng=random.Random(cfg.seed))


def notify_high_scores(engine: GameEngine, session: Session) -> None:
    """Show the "New High Score!" notice whenever the engine sets a new best."""
    engine.add_listener(lambda _best: session.show_notice(pygame.time.get_ticks()))


def main(argv: Optional[List[str]] = None) -> None:
    cfg = parse_args(argv)
    logging.basicConfig(level=cfg.log_level, format="%(levelname)s %(name)s: %(message)s")

    engine = build_engine(cfg)
    session = Session(theme=cfg.theme)
    notify_high_scores(engine, session)
    print(f"[GAME] Best score so far: {engine.high_score}")
    if cfg.save:
        print(f"[GAME] Saving best score to {cfg.store_path}")

    pygame.init()
    font = pygame.font.SysFont(None, 26)
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Snake Game")
    clock = pygame.time.Clock()
    swipe = SwipeTracker()
    timer = TickTimer()

    running = True
    while running:
        # 1) input + ticks
        running = handle_input(engine, session, swipe)

        # 2) move timer follows the state
        timer.sync(engine.state)

        # 3) render
        draw_game(screen, font, engine.snapshot(), session, pygame.time.get_ticks())
        pygame.display.flip()
        clock.tick(FPS)  # movement is paced by TICK_EVENT, not the frame rate

    pygame.quit()
    print(f"[GAME] Last score {engine.score}, best {engine.high_score}")


if __name__ == "__main__":
    main()
