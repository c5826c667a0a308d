# render.py
from __future__ import annotations

from typing import Dict, Tuple

import numpy as np  # type: ignore
import pygame  # type: ignore

from .config import (
    BOARD_SIZE, CELL_SIZE, BOARD_PX, BOARD_TOP, PANEL_H, WIDTH, HEIGHT,
    Color, Session,
)
from .engine import GameState, Snapshot

# Cell codes in the grid handed to the drawing code
EMPTY, BODY, HEAD, FOOD = 0, 1, 2, 3

BUTTONS = ("start", "pause", "reset", "theme")
BUTTON_W, BUTTON_H, BUTTON_GAP = 74, 30, 6


def cell_grid(snap: Snapshot) -> np.ndarray:
    """
    BOARD_SIZE x BOARD_SIZE array indexed [y, x]. Food is written first so a
    snake cell always wins if both ever coincide.
    """
    grid = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.uint8)
    if snap.food is not None:
        fx, fy = snap.food
        grid[fy, fx] = FOOD
    for x, y in snap.body:
        grid[y, x] = BODY
    hx, hy = snap.head
    grid[hy, hx] = HEAD
    return grid


# ---------- Layout ----------
def cell_rect(gx: int, gy: int) -> pygame.Rect:
    return pygame.Rect(gx * CELL_SIZE, BOARD_TOP + gy * CELL_SIZE, CELL_SIZE, CELL_SIZE)


def board_rect() -> pygame.Rect:
    return pygame.Rect(0, BOARD_TOP, BOARD_PX, BOARD_PX)


def button_rects() -> Dict[str, pygame.Rect]:
    """Start / Pause / Reset / theme, right-aligned in the top panel."""
    total = len(BUTTONS) * BUTTON_W + (len(BUTTONS) - 1) * BUTTON_GAP
    left = WIDTH - total - 10
    top = (PANEL_H - BUTTON_H) // 2
    return {
        name: pygame.Rect(left + i * (BUTTON_W + BUTTON_GAP), top, BUTTON_W, BUTTON_H)
        for i, name in enumerate(BUTTONS)
    }


def button_enabled(name: str, state: GameState) -> bool:
    if name == "start":
        return state not in (GameState.RUNNING, GameState.PAUSED)
    if name == "pause":
        return state in (GameState.RUNNING, GameState.PAUSED)
    return True


def button_label(name: str, state: GameState, theme: str = "light") -> str:
    if name == "theme":
        # Names the theme a click switches to
        return "Dark" if theme == "light" else "Light"
    if name == "pause":
        return "Resume" if state is GameState.PAUSED else "Pause"
    return name.capitalize()


# ---------- Draw ----------
def draw_board(screen: pygame.Surface, snap: Snapshot, palette: Dict[str, Color]) -> None:
    pygame.draw.rect(screen, palette["board"], board_rect())
    colors = {
        BODY: palette["snake"],
        HEAD: palette["head"],
        FOOD: palette["food"],
    }
    for (gy, gx), code in np.ndenumerate(cell_grid(snap)):
        rect = cell_rect(gx, gy)
        if code == EMPTY:
            pygame.draw.rect(screen, palette["grid"], rect, 1)
        else:
            pygame.draw.rect(screen, colors[int(code)], rect.inflate(-2, -2), border_radius=4)


def draw_panel(screen: pygame.Surface, font: pygame.font.Font, snap: Snapshot,
               session: Session) -> None:
    palette = session.palette
    label = font.render("Score", True, palette["muted"])
    value = font.render(str(snap.score), True, palette["text"])
    best_label = font.render("Best", True, palette["muted"])
    best = font.render(str(snap.high_score), True, palette["text"])
    screen.blit(label, (12, 14))
    screen.blit(value, (12, 40))
    screen.blit(best_label, (80, 14))
    screen.blit(best, (80, 40))

    for name, rect in button_rects().items():
        enabled = button_enabled(name, snap.state)
        pygame.draw.rect(
            screen, palette["button"] if enabled else palette["button_off"], rect,
            border_radius=6,
        )
        txt = font.render(button_label(name, snap.state, session.theme), True, palette["button_text"])
        screen.blit(txt, txt.get_rect(center=rect.center))


def draw_notice(screen: pygame.Surface, font: pygame.font.Font, text: str,
                palette: Dict[str, Color], center: Tuple[int, int]) -> None:
    txt = font.render(text, True, palette["notice_text"])
    box = txt.get_rect(center=center).inflate(28, 16)
    pygame.draw.rect(screen, palette["notice"], box, border_radius=8)
    screen.blit(txt, txt.get_rect(center=box.center))


def draw_game(screen: pygame.Surface, font: pygame.font.Font, snap: Snapshot,
              session: Session, now_ms: int) -> None:
    palette = session.palette
    screen.fill(palette["bg"])
    draw_panel(screen, font, snap, session)
    draw_board(screen, snap, palette)

    board = board_rect()
    if snap.state is GameState.OVER:
        draw_notice(screen, font, f"Game Over! Score: {snap.score}", palette, board.center)
        hint = "Press Reset or Space to play again"
    elif session.notice_visible(now_ms):
        draw_notice(screen, font, "New High Score!", palette, (board.centerx, board.top + 40))
        hint = None
    elif snap.state is GameState.IDLE:
        hint = "Press Start or Space to begin"
    elif snap.state is GameState.PAUSED:
        hint = "Paused - Space to resume"
    else:
        hint = None

    footer = hint or "Arrows / WASD / swipe. Space: start, pause, reset. T: theme"
    txt = font.render(footer, True, palette["muted"])
    screen.blit(txt, txt.get_rect(center=(WIDTH // 2, (board.bottom + HEIGHT) // 2)))
