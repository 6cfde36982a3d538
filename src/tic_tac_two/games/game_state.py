"""
GameState - mutable game state container.

Optimized for fast copying and comparison.
"""

from __future__ import annotations

import numpy as np

from tic_tac_two.core.types import Mark, NUM_CELLS, PIECES_PER_PLAYER


class Reserve:
    """
    Off-board piece counts for the two players.

    Fixed two-slot structure indexed by Mark, so there is no
    missing-key case and the total is always checkable.
    """
    __slots__ = ('x', 'o')

    def __init__(self, x: int = PIECES_PER_PLAYER, o: int = PIECES_PER_PLAYER):
        self.x = x
        self.o = o

    def __getitem__(self, mark: Mark) -> int:
        if mark == Mark.X:
            return self.x
        if mark == Mark.O:
            return self.o
        raise KeyError(mark)

    def __setitem__(self, mark: Mark, count: int) -> None:
        if mark == Mark.X:
            self.x = count
        elif mark == Mark.O:
            self.o = count
        else:
            raise KeyError(mark)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reserve):
            return NotImplemented
        return self.x == other.x and self.o == other.o

    def __repr__(self) -> str:
        return f"Reserve(x={self.x}, o={self.o})"

    def copy(self) -> "Reserve":
        return Reserve(self.x, self.o)


class GameState:
    """
    Lightweight game state container.

    Uses a flat int8 board of 25 cells (row-major 5x5):
        0 = empty
        1 = X
        2 = O

    The active window is derived from window_offset, never stored.
    """
    __slots__ = ('board', 'turn_count', 'current_player', 'reserve', 'window_offset')

    def __init__(
        self,
        board: np.ndarray | None = None,
        turn_count: int = 0,
        current_player: Mark = Mark.X,
        reserve: Reserve | None = None,
        window_offset: int = 0,
    ):
        if board is None:
            board = np.zeros(NUM_CELLS, dtype=np.int8)
        self.board = board
        self.turn_count = turn_count
        self.current_player = Mark(current_player)
        self.reserve = reserve if reserve is not None else Reserve()
        self.window_offset = window_offset

    def copy(self) -> "GameState":
        """Fast copy - board.copy() is optimized for contiguous int arrays."""
        return GameState(
            self.board.copy(),
            self.turn_count,
            self.current_player,
            self.reserve.copy(),
            self.window_offset,
        )

    def pieces_on_board(self, mark: Mark) -> int:
        return int(np.count_nonzero(self.board == mark))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return (
            np.array_equal(self.board, other.board)
            and self.turn_count == other.turn_count
            and self.current_player == other.current_player
            and self.reserve == other.reserve
            and self.window_offset == other.window_offset
        )

    __hash__ = None  # Mutable

    def __repr__(self) -> str:
        return (
            f"GameState(turn_count={self.turn_count}, "
            f"current_player={self.current_player.name}, "
            f"reserve={self.reserve!r}, window_offset={self.window_offset})"
        )
