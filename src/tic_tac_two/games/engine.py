"""
Rules engine for Tic-Tac-Two.

All operations take a GameState and mutate it in place. Every precondition
is checked before anything is written, so a raised error always leaves the
state exactly as it was.

Turn alternation happens in one place only: complete_turn(). Placement,
relocation and window slides never toggle the player themselves, which lets
different front-ends choreograph a turn however they like.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np

from tic_tac_two.core.errors import BlockedMove, InvalidMove, NoReserve
from tic_tac_two.core.types import (
    CELL_STRINGS,
    Direction,
    GRID_SIZE,
    Mark,
    NUM_CELLS,
    SLIDE_THRESHOLD,
)
from tic_tac_two.games.game_state import GameState
from tic_tac_two.games.window import (
    DIRECTION_DELTAS,
    active_window,
    can_slide,
    window_cells,
)

logger = logging.getLogger(__name__)

# Win lines in window-local coordinates (indices into the 9 active cells).
# Order is fixed: rows, columns, main diagonal, anti-diagonal.
_WIN_LINES = np.array([
    [0, 1, 2], [3, 4, 5], [6, 7, 8],  # rows
    [0, 3, 6], [1, 4, 7], [2, 5, 8],  # cols
    [0, 4, 8], [2, 4, 6],             # diagonals
], dtype=np.int8)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def new_game() -> GameState:
    """Fresh state: empty board, X to move, full reserves, centred window."""
    return GameState()


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def _in_window(state: GameState, index: int) -> bool:
    return index in active_window(state.window_offset)


def is_cell_playable(state: GameState, index: int) -> bool:
    """True iff `index` is inside the active window and empty."""
    if not 0 <= index < NUM_CELLS:
        return False
    return _in_window(state, index) and state.board[index] == Mark.EMPTY


def can_slide_window(state: GameState, threshold: int = SLIDE_THRESHOLD) -> bool:
    """Window slides are offered once `threshold` turns have been played."""
    return state.turn_count >= threshold


def valid_placements(state: GameState) -> List[int]:
    """Cells the current player could place into (empty if no reserve)."""
    if state.reserve[state.current_player] < 1:
        return []
    window = active_window(state.window_offset)
    return [int(i) for i in window if state.board[i] == Mark.EMPTY]


def valid_relocations(state: GameState) -> List[Tuple[int, int]]:
    """(from, to) pairs for the current player's on-board pieces."""
    sources = np.flatnonzero(state.board == state.current_player)
    window = active_window(state.window_offset)
    targets = [int(i) for i in window if state.board[i] == Mark.EMPTY]
    return [(int(src), dst) for src in sources for dst in targets]


def check_winner(state: GameState) -> Optional[Mark]:
    """
    Return the mark completing a line in the active window, else None.

    Only the 9 live cells are considered; pieces stranded outside the
    window never count.
    """
    cells = window_cells(state.board, state.window_offset).ravel()
    for line in _WIN_LINES:
        v = cells[line[0]]
        if v != Mark.EMPTY and cells[line[1]] == v and cells[line[2]] == v:
            winner = Mark(int(v))
            logger.debug("Winner %s on window line %s", winner.name, line.tolist())
            return winner
    return None


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

def apply_placement(state: GameState, index: int) -> None:
    """
    Move one reserve piece of the current player onto `index`.

    Does not complete the turn.

    Raises:
        NoReserve: the current player has no pieces left to place.
        InvalidMove: the cell is occupied or outside the active window.
    """
    player = state.current_player
    if state.reserve[player] < 1:
        logger.debug("Placement rejected: %s has no reserve", player.name)
        raise NoReserve(f"{player.name} has no pieces left to place")
    if not is_cell_playable(state, index):
        logger.debug("Placement rejected: cell %s not playable", index)
        raise InvalidMove(f"Cell {index} is occupied or outside the active window")

    state.reserve[player] -= 1
    state.board[index] = player


def apply_relocation(state: GameState, from_index: int, to_index: int) -> None:
    """
    Move one of the current player's on-board pieces to an empty live cell.

    Does not complete the turn.

    Raises:
        InvalidMove: wrong owner, destination occupied or outside the window.
    """
    player = state.current_player
    if not 0 <= from_index < NUM_CELLS or state.board[from_index] != player:
        logger.debug("Relocation rejected: %s does not own cell %s", player.name, from_index)
        raise InvalidMove(f"Cell {from_index} does not hold a {player.name} piece")
    if not is_cell_playable(state, to_index):
        logger.debug("Relocation rejected: cell %s not playable", to_index)
        raise InvalidMove(f"Cell {to_index} is occupied or outside the active window")

    state.board[from_index] = Mark.EMPTY
    state.board[to_index] = player


def move_window(
    state: GameState,
    direction: Direction | str,
    *,
    enforce_threshold: bool = False,
    threshold: int = SLIDE_THRESHOLD,
) -> None:
    """
    Slide the active window one step. Board cells are never touched.

    Does not complete the turn.

    Raises:
        BlockedMove: the window would leave the grid, or `enforce_threshold`
            is set and fewer than `threshold` turns have been played.
        ValueError: unknown direction name.
    """
    direction = Direction(direction)
    if enforce_threshold and not can_slide_window(state, threshold):
        raise BlockedMove(
            f"Window slides unlock after {threshold} turns (played {state.turn_count})"
        )
    if not can_slide(state.window_offset, direction):
        logger.debug("Slide %s blocked at offset %d", direction.value, state.window_offset)
        raise BlockedMove(f"Window cannot move {direction.value}")

    state.window_offset += DIRECTION_DELTAS[direction]


def complete_turn(state: GameState) -> None:
    """Advance the turn counter and hand over to the other player."""
    state.turn_count += 1
    state.current_player = state.current_player.opponent


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

def state_string(state: GameState) -> str:
    """Box-drawn board; live window cells are wrapped in brackets."""
    window = set(active_window(state.window_offset).tolist())
    lines = ["╭─────┬─────┬─────┬─────┬─────╮"]
    for r in range(GRID_SIZE):
        cells = []
        for c in range(GRID_SIZE):
            i = r * GRID_SIZE + c
            s = CELL_STRINGS[Mark(int(state.board[i]))]
            cells.append(f"[{s}]" if i in window else f" {s} ")
        lines.append("│ " + " │ ".join(cells) + " │")
        if r < GRID_SIZE - 1:
            lines.append("├─────┼─────┼─────┼─────┼─────┤")
    lines.append("╰─────┴─────┴─────┴─────┴─────╯")
    x, o = state.reserve[Mark.X], state.reserve[Mark.O]
    lines.append(
        f"turn {state.turn_count} · {state.current_player.name} to move · reserve X={x} O={o}"
    )
    return "\n".join(lines)


class GameEngine:
    """
    Object facade over the module-level rules.

    Holds only the slide threshold; the GameState is always passed in.
    """

    def __init__(self, slide_threshold: int = SLIDE_THRESHOLD):
        self.slide_threshold = slide_threshold

    new_game = staticmethod(new_game)
    is_cell_playable = staticmethod(is_cell_playable)
    apply_placement = staticmethod(apply_placement)
    apply_relocation = staticmethod(apply_relocation)
    complete_turn = staticmethod(complete_turn)
    check_winner = staticmethod(check_winner)
    valid_placements = staticmethod(valid_placements)
    valid_relocations = staticmethod(valid_relocations)
    state_string = staticmethod(state_string)

    def can_slide_window(self, state: GameState) -> bool:
        return can_slide_window(state, self.slide_threshold)

    def move_window(
        self,
        state: GameState,
        direction: Direction | str,
        *,
        enforce_threshold: bool = False,
    ) -> None:
        move_window(
            state,
            direction,
            enforce_threshold=enforce_threshold,
            threshold=self.slide_threshold,
        )
