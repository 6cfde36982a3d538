"""
Core types and constants.

This module contains the fundamental types used throughout the engine:
- Mark: cell / player values (int8-compatible)
- Direction: the eight window slide directions
- Outcome: per-player game result
- Board geometry constants
"""

from __future__ import annotations

from enum import Enum, IntEnum, auto


# ╔═════════════════════════════════════════════════════════════════════════════╗
# ║                              BOARD GEOMETRY                                 ║
# ║                                                                             ║
# ║  5x5 grid, row-major indices 0..24. Only a 3x3 window is live at a time.    ║
# ║                                                                             ║
# ║       0  1  2  3  4                                                         ║
# ║       5 [6  7  8] 9        window offset 0 = centred window                 ║
# ║      10 [11 12 13] 14                                                       ║
# ║      15 [16 17 18] 19                                                       ║
# ║      20 21 22 23 24                                                         ║
# ╚═════════════════════════════════════════════════════════════════════════════╝

GRID_SIZE = 5
WINDOW_SIZE = 3
NUM_CELLS = GRID_SIZE * GRID_SIZE

PIECES_PER_PLAYER = 4

# Total turns that must elapse before a player may slide the window
SLIDE_THRESHOLD = 4


class Mark(IntEnum):
    """Cell contents. X moves first."""

    EMPTY = 0
    X = 1
    O = 2

    @property
    def opponent(self) -> "Mark":
        if self is Mark.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return Mark(3 - self.value)  # Toggle 1↔2


# Cell strings: each cell value maps to its display string
CELL_STRINGS = {Mark.EMPTY: " ", Mark.X: "X", Mark.O: "O"}


class Direction(str, Enum):
    """Window slide directions. Values are the persisted/CLI spellings."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    UP_LEFT = "upLeft"
    UP_RIGHT = "upRight"
    DOWN_LEFT = "downLeft"
    DOWN_RIGHT = "downRight"


class Outcome(Enum):
    WIN = auto()
    LOSS = auto()
    NEUTRAL = auto()
