"""
GameBase - abstract base class for turn-based board games.
"""

from abc import ABC, abstractmethod
from typing import List

from tic_tac_two.core.types import Outcome
from tic_tac_two.games.game_state import GameState


class GameBase(ABC):
    """
    Abstract base class for board games driven by a front-end.

    IMPORTANT ARCHITECTURE NOTE:
    -----------------------------
    - Games expose MOVES; the rules engine validates and applies them.
    - apply_move() is a whole turn: it finalises the turn exactly once.
    - State is plain data so it can be persisted by a session store.
    """

    @abstractmethod
    def game_id(self) -> str:
        """Return a stable identifier (e.g. 'tic_tac_two')."""
        pass

    @abstractmethod
    def num_players(self) -> int:
        """Return number of players in the game."""
        pass

    @abstractmethod
    def clone(self) -> "GameBase":
        """Shallow copy (shares state)."""
        pass

    @abstractmethod
    def deep_clone(self) -> "GameBase":
        """Deep copy of game + state."""
        pass

    @abstractmethod
    def get_state(self) -> GameState:
        """Return the current game state."""
        pass

    @abstractmethod
    def set_state(self, game_state: GameState) -> None:
        """Replace the current game state."""
        pass

    @abstractmethod
    def current_player(self) -> int:
        """Return ID of player to act."""
        pass

    @abstractmethod
    def valid_moves(self) -> List:
        """Return all legal moves from the current state."""
        pass

    @abstractmethod
    def apply_move(self, move) -> None:
        """
        Apply a move and finish the turn. Mutates internal state.

        Raises the engine's rule errors for illegal moves, leaving the
        state unchanged.
        """
        pass

    @abstractmethod
    def is_over(self) -> bool:
        """Return True if the game has ended."""
        pass

    @abstractmethod
    def get_result(self, player: int) -> Outcome:
        """
        Return the outcome for a player:
            WIN / LOSS / NEUTRAL
        """
        pass

    @abstractmethod
    def get_cell_strings(self) -> dict[int, str]:
        """
        Return a dictionary of [int -> str] where each cell value maps to its display string
            (e.g. {0: " ", 1: "X", 2: "O"})
        """
        pass

    @abstractmethod
    def state_string(self) -> str:
        """Pretty string representation of the state."""
        pass
