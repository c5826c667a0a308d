from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

# ----- Board -----
BOARD_SIZE = 20
INITIAL_SNAKE: Tuple[Tuple[int, int], ...] = ((8, 10), (7, 10))

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)
INITIAL_DIRECTION = RIGHT

# ----- Timing -----
MOVE_INTERVAL_MS = 110
NOTICE_MS = 2200
FPS = 60

# ----- Input -----
SWIPE_THRESHOLD_PX = 30

# ----- Persistence -----
HIGH_SCORE_KEY = "highScore-snake-v1"
DEFAULT_STORE_PATH = Path.home() / ".snake" / "storage.json"

# ----- Window layout -----
CELL_SIZE = 24
BOARD_PX = BOARD_SIZE * CELL_SIZE
PANEL_H = 76
FOOTER_H = 30
WIDTH = BOARD_PX
HEIGHT = PANEL_H + BOARD_PX + FOOTER_H
BOARD_TOP = PANEL_H

# ----- Colors -----
Color = Tuple[int, int, int]

PALETTES: Dict[str, Dict[str, Color]] = {
    "light": {
        "bg": (255, 255, 255),
        "board": (248, 249, 250),
        "grid": (233, 236, 239),
        "snake": (24, 165, 88),
        "head": (249, 200, 70),
        "food": (39, 52, 105),
        "text": (40, 44, 52),
        "muted": (108, 117, 125),
        "button": (24, 165, 88),
        "button_off": (173, 181, 189),
        "button_text": (255, 255, 255),
        "notice": (249, 200, 70),
        "notice_text": (40, 44, 52),
    },
    "dark": {
        "bg": (26, 26, 26),
        "board": (40, 44, 52),
        "grid": (58, 63, 73),
        "snake": (24, 165, 88),
        "head": (249, 200, 70),
        "food": (97, 218, 251),
        "text": (255, 255, 255),
        "muted": (160, 166, 175),
        "button": (24, 165, 88),
        "button_off": (85, 91, 102),
        "button_text": (255, 255, 255),
        "notice": (249, 200, 70),
        "notice_text": (40, 44, 52),
    },
}
THEMES = tuple(PALETTES)


# ----- Run options (filled from the CLI) -----
@dataclass
class Config:
    seed: Optional[int] = None
    store_path: Path = DEFAULT_STORE_PATH
    save: bool = True
    theme: str = "light"
    log_level: str = "WARNING"


# ----- Presentation state shared by the loop and the renderer -----
@dataclass
class Session:
    theme: str = "light"
    notice_until: int = 0          # ms timestamp; 0 means no notice
    palette: Dict[str, Color] = field(init=False)

    def __post_init__(self) -> None:
        if self.theme not in PALETTES:
            raise ValueError(f"Unknown theme: {self.theme}")
        self.palette = PALETTES[self.theme]

    def toggle_theme(self) -> str:
        self.theme = "dark" if self.theme == "light" else "light"
        self.palette = PALETTES[self.theme]
        return self.theme

    def show_notice(self, now_ms: int) -> None:
        self.notice_until = now_ms + NOTICE_MS

    def clear_notice(self) -> None:
        self.notice_until = 0

    def notice_visible(self, now_ms: int) -> bool:
        return now_ms < self.notice_until
