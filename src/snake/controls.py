# controls.py
"""Keyboard, swipe and button input, turned into engine calls."""

from __future__ import annotations

import enum
import logging
from typing import Iterable, Optional, Tuple

import pygame  # type: ignore

from .config import UP, DOWN, LEFT, RIGHT, SWIPE_THRESHOLD_PX, WIDTH, HEIGHT, Session
from .engine import Direction, GameEngine, GameState
from .render import board_rect, button_enabled, button_rects

logger = logging.getLogger(__name__)

# Fired by pygame.time.set_timer while the game is running
TICK_EVENT = pygame.USEREVENT + 1

KEY_DIRECTIONS = {
    pygame.K_UP: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_w: UP,
    pygame.K_s: DOWN,
    pygame.K_a: LEFT,
    pygame.K_d: RIGHT,
}


class Control(enum.Enum):
    START = "start"
    TOGGLE_PAUSE = "pause"
    RESET = "reset"
    THEME = "theme"


def direction_for_key(key: int) -> Optional[Direction]:
    return KEY_DIRECTIONS.get(key)


def space_action(state: GameState) -> Control:
    """Space resets after a game over, pauses/resumes a game, else starts one."""
    if state is GameState.OVER:
        return Control.RESET
    if state in (GameState.RUNNING, GameState.PAUSED):
        return Control.TOGGLE_PAUSE
    return Control.START


def apply_control(engine: GameEngine, session: Session, control: Control) -> None:
    if control is Control.START:
        engine.start()
    elif control is Control.TOGGLE_PAUSE:
        engine.toggle_pause()
    elif control is Control.RESET:
        engine.reset()
        session.clear_notice()
    elif control is Control.THEME:
        logger.debug(f"Theme -> {session.toggle_theme()}")


def swipe_direction(dx: float, dy: float,
                    threshold: float = SWIPE_THRESHOLD_PX) -> Optional[Direction]:
    """Dominant axis of a drag once it is long enough; ties count as vertical."""
    if abs(dx) < threshold and abs(dy) < threshold:
        return None
    if abs(dx) > abs(dy):
        return RIGHT if dx > 0 else LEFT
    return DOWN if dy > 0 else UP


class SwipeTracker:
    """Follows one touch or mouse drag and reports swipes as directions."""

    def __init__(self, threshold: float = SWIPE_THRESHOLD_PX):
        self.threshold = threshold
        self.origin: Optional[Tuple[float, float]] = None

    def begin(self, pos: Tuple[float, float]) -> None:
        self.origin = pos

    def move(self, pos: Tuple[float, float]) -> Optional[Direction]:
        if self.origin is None:
            self.origin = pos
            return None
        d = swipe_direction(pos[0] - self.origin[0], pos[1] - self.origin[1], self.threshold)
        if d is not None:
            # A long drag can turn more than once
            self.origin = pos
        return d

    def end(self) -> None:
        self.origin = None


def _finger_pos(event: pygame.event.Event) -> Tuple[float, float]:
    # Finger events carry coordinates normalised to [0, 1]
    return event.x * WIDTH, event.y * HEIGHT


def button_at(pos: Tuple[int, int]) -> Optional[Control]:
    for name, rect in button_rects().items():
        if rect.collidepoint(pos):
            return Control(name)
    return None


def handle_event(event: pygame.event.Event, engine: GameEngine, session: Session,
                 swipe: SwipeTracker) -> bool:
    """Apply a single event. Return False to quit."""
    if event.type == pygame.QUIT:
        return False

    if event.type == TICK_EVENT:
        engine.tick()

    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key == pygame.K_SPACE:
            apply_control(engine, session, space_action(engine.state))
        elif event.key == pygame.K_p:
            apply_control(engine, session, Control.TOGGLE_PAUSE)
        elif event.key == pygame.K_r:
            apply_control(engine, session, Control.RESET)
        elif event.key == pygame.K_t:
            apply_control(engine, session, Control.THEME)
        else:
            d = direction_for_key(event.key)
            if d is not None:
                engine.set_direction(d)

    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        control = button_at(event.pos)
        if control is not None:
            if button_enabled(control.value, engine.state):
                apply_control(engine, session, control)
        elif board_rect().collidepoint(event.pos):
            swipe.begin(event.pos)

    elif event.type == pygame.MOUSEMOTION and swipe.origin is not None:
        d = swipe.move(event.pos)
        if d is not None:
            engine.set_direction(d)

    elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
        swipe.end()

    elif event.type == pygame.FINGERDOWN:
        swipe.begin(_finger_pos(event))

    elif event.type == pygame.FINGERMOTION:
        d = swipe.move(_finger_pos(event))
        if d is not None:
            engine.set_direction(d)

    elif event.type == pygame.FINGERUP:
        swipe.end()

    return True


def handle_input(engine: GameEngine, session: Session, swipe: SwipeTracker,
                 events: Optional[Iterable[pygame.event.Event]] = None) -> bool:
    """Process pending events (or the given ones). Return False to quit."""
    if events is None:
        events = pygame.event.get()
    for event in events:
        if not handle_event(event, engine, session, swipe):
            return False
    return True
