"""
Active-window arithmetic for the 5x5 grid.

The live 3x3 window is described by a single integer offset added to the
centred window's indices. Moving one row shifts the offset by GRID_SIZE,
one column by 1.
"""

from __future__ import annotations

from typing import Dict, List

import numpy as np

from tic_tac_two.core.types import Direction, GRID_SIZE, NUM_CELLS, WINDOW_SIZE

# Board indices of the centred window (offset 0)
_BASE_WINDOW = np.array([
    6, 7, 8,
    11, 12, 13,
    16, 17, 18,
], dtype=np.int64)

DIRECTION_DELTAS: Dict[Direction, int] = {
    Direction.UP: -GRID_SIZE,
    Direction.DOWN: GRID_SIZE,
    Direction.LEFT: -1,
    Direction.RIGHT: 1,
    Direction.UP_LEFT: -GRID_SIZE - 1,
    Direction.UP_RIGHT: -GRID_SIZE + 1,
    Direction.DOWN_LEFT: GRID_SIZE - 1,
    Direction.DOWN_RIGHT: GRID_SIZE + 1,
}

# Every offset that keeps the window fully inside the grid
VALID_OFFSETS = frozenset(
    dr * GRID_SIZE + dc for dr in (-1, 0, 1) for dc in (-1, 0, 1)
)


def active_window(offset: int) -> np.ndarray:
    """Return the 9 live board indices, row-major within the window."""
    return _BASE_WINDOW + offset


def is_valid_offset(offset: int) -> bool:
    return offset in VALID_OFFSETS


def _can_go_up(window: np.ndarray) -> bool:
    return int(window.min()) - GRID_SIZE >= 0


def _can_go_down(window: np.ndarray) -> bool:
    return int(window.max()) + GRID_SIZE <= NUM_CELLS - 1


def _can_go_left(window: np.ndarray) -> bool:
    return bool(np.all(window % GRID_SIZE > 0))


def _can_go_right(window: np.ndarray) -> bool:
    return bool(np.all(window % GRID_SIZE < GRID_SIZE - 1))


_CHECKS = {
    Direction.UP: (_can_go_up,),
    Direction.DOWN: (_can_go_down,),
    Direction.LEFT: (_can_go_left,),
    Direction.RIGHT: (_can_go_right,),
    Direction.UP_LEFT: (_can_go_up, _can_go_left),
    Direction.UP_RIGHT: (_can_go_up, _can_go_right),
    Direction.DOWN_LEFT: (_can_go_down, _can_go_left),
    Direction.DOWN_RIGHT: (_can_go_down, _can_go_right),
}


def can_slide(offset: int, direction: Direction) -> bool:
    """
    Return True if the window at `offset` can move one step in `direction`.

    Diagonals require both of their single-axis checks, evaluated against
    the current window.
    """
    window = active_window(offset)
    return all(check(window) for check in _CHECKS[Direction(direction)])


def legal_directions(offset: int) -> List[Direction]:
    return [d for d in Direction if can_slide(offset, d)]


def window_cells(board: np.ndarray, offset: int) -> np.ndarray:
    """Return the window's cells as a 3x3 copy (local coordinates)."""
    return board[active_window(offset)].reshape(WINDOW_SIZE, WINDOW_SIZE)
