"""
Games module - state model, window arithmetic, rules engine and the
turn-level TicTacTwo game.
"""

from tic_tac_two.games.game_state import GameState, Reserve
from tic_tac_two.games.game_base import GameBase
from tic_tac_two.games.window import (
    active_window,
    can_slide,
    is_valid_offset,
    legal_directions,
    window_cells,
    VALID_OFFSETS,
)
from tic_tac_two.games.engine import (
    GameEngine,
    new_game,
    is_cell_playable,
    apply_placement,
    apply_relocation,
    complete_turn,
    move_window,
    check_winner,
    can_slide_window,
    state_string,
)
from tic_tac_two.games.tic_tac_two import TicTacTwo, Move

__all__ = [
    "GameState",
    "Reserve",
    "GameBase",
    "GameEngine",
    "TicTacTwo",
    "Move",
    "active_window",
    "can_slide",
    "is_valid_offset",
    "legal_directions",
    "window_cells",
    "VALID_OFFSETS",
    "new_game",
    "is_cell_playable",
    "apply_placement",
    "apply_relocation",
    "complete_turn",
    "move_window",
    "check_winner",
    "can_slide_window",
    "state_string",
]
