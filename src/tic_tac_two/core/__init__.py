"""
Core module - fundamental types, errors and hashing.

This module provides the building blocks used throughout the engine.
"""

from tic_tac_two.core.types import (
    Mark,
    Direction,
    Outcome,
    CELL_STRINGS,
    GRID_SIZE,
    WINDOW_SIZE,
    NUM_CELLS,
    PIECES_PER_PLAYER,
    SLIDE_THRESHOLD,
)
from tic_tac_two.core.errors import (
    GameError,
    InvalidMove,
    NoReserve,
    BlockedMove,
    DecodeError,
)
from tic_tac_two.core.hashing import hash_board

__all__ = [
    # Types
    "Mark",
    "Direction",
    "Outcome",
    # Constants
    "CELL_STRINGS",
    "GRID_SIZE",
    "WINDOW_SIZE",
    "NUM_CELLS",
    "PIECES_PER_PLAYER",
    "SLIDE_THRESHOLD",
    # Errors
    "GameError",
    "InvalidMove",
    "NoReserve",
    "BlockedMove",
    "DecodeError",
    # Functions
    "hash_board",
]
