"""
TicTacTwo game - one full turn per move.

A move is one of:
    place     - bring a reserve piece onto an empty live cell
    relocate  - move an on-board piece to an empty live cell
    slide     - shift the active window (after the slide threshold)

apply_move() runs the engine action and then completes the turn once.
"""

from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional, Tuple

from tic_tac_two.core.errors import InvalidMove
from tic_tac_two.core.types import CELL_STRINGS, Direction, Mark, Outcome, SLIDE_THRESHOLD
from tic_tac_two.games import engine
from tic_tac_two.games.game_base import GameBase
from tic_tac_two.games.game_state import GameState
from tic_tac_two.games.window import legal_directions

logger = logging.getLogger(__name__)


class Move(NamedTuple):
    """Tagged move value. Unused fields are None."""

    kind: str
    index: Optional[int] = None
    to_index: Optional[int] = None
    direction: Optional[Direction] = None

    @classmethod
    def place(cls, index: int) -> "Move":
        return cls("place", index=index)

    @classmethod
    def relocate(cls, from_index: int, to_index: int) -> "Move":
        return cls("relocate", index=from_index, to_index=to_index)

    @classmethod
    def slide(cls, direction: Direction | str) -> "Move":
        return cls("slide", direction=Direction(direction))

    @classmethod
    def parse(cls, text: str) -> "Move":
        """
        Parse the compact move notation:
            p:<i>          place at cell i
            r:<a>-<b>      relocate from a to b
            s:<direction>  slide (e.g. s:upLeft)
        """
        tag, sep, arg = text.partition(":")
        if not sep or not arg:
            raise ValueError(f"Malformed move: '{text}'")
        try:
            if tag == "p":
                return cls.place(int(arg))
            if tag == "r":
                src, dst = arg.split("-")
                return cls.relocate(int(src), int(dst))
            if tag == "s":
                return cls.slide(arg)
        except ValueError as e:
            raise ValueError(f"Malformed move: '{text}'") from e
        raise ValueError(f"Unknown move type '{tag}' in '{text}'")

    def __str__(self) -> str:
        if self.kind == "place":
            return f"p:{self.index}"
        if self.kind == "relocate":
            return f"r:{self.index}-{self.to_index}"
        return f"s:{self.direction.value}"


class TicTacTwo(GameBase):
    """Tic-Tac-Two on a 5x5 grid with a sliding 3x3 window."""

    __slots__ = ('state', 'winner', 'slide_threshold')

    def __init__(self, slide_threshold: int = SLIDE_THRESHOLD):
        self.state = engine.new_game()
        self.winner = 0  # 0=none, 1=X, 2=O
        self.slide_threshold = slide_threshold

    def get_cell_strings(self) -> dict[int, str]:
        return {int(k): v for k, v in CELL_STRINGS.items()}

    def game_id(self) -> str:
        return "tic_tac_two"

    def num_players(self) -> int:
        return 2

    def clone(self) -> "TicTacTwo":
        g = TicTacTwo.__new__(TicTacTwo)
        g.state = self.state
        g.winner = self.winner
        g.slide_threshold = self.slide_threshold
        return g

    def deep_clone(self) -> "TicTacTwo":
        g = self.clone()
        g.state = self.state.copy()
        return g

    def get_state(self) -> GameState:
        return self.state

    def set_state(self, game_state: GameState) -> None:
        self.state = game_state
        # Recompute winner from state
        winner = engine.check_winner(game_state)
        self.winner = int(winner) if winner is not None else 0

    def current_player(self) -> int:
        return int(self.state.current_player)

    def valid_moves(self) -> List[Move]:
        if self.is_over():
            return []
        moves = [Move.place(i) for i in engine.valid_placements(self.state)]
        moves.extend(Move.relocate(a, b) for a, b in engine.valid_relocations(self.state))
        if engine.can_slide_window(self.state, self.slide_threshold):
            moves.extend(Move.slide(d) for d in legal_directions(self.state.window_offset))
        return moves

    def apply_move(self, move: Move) -> None:
        if self.is_over():
            raise InvalidMove("Game is already over")

        if move.kind == "place":
            engine.apply_placement(self.state, move.index)
        elif move.kind == "relocate":
            engine.apply_relocation(self.state, move.index, move.to_index)
        elif move.kind == "slide":
            engine.move_window(
                self.state,
                move.direction,
                enforce_threshold=True,
                threshold=self.slide_threshold,
            )
        else:
            raise InvalidMove(f"Unknown move kind: {move.kind}")

        mover = self.state.current_player
        engine.complete_turn(self.state)
        logger.debug("Turn %d: %s played %s", self.state.turn_count, mover.name, move)

        winner = engine.check_winner(self.state)
        if winner is not None:
            self.winner = int(winner)
            logger.info("%s wins after %d turns", winner.name, self.state.turn_count)

    def apply_moves(self, moves: List[Move]) -> None:
        for move in moves:
            self.apply_move(move)

    def is_over(self) -> bool:
        return self.winner != 0

    def get_result(self, player: int) -> Outcome:
        if self.winner == player:
            return Outcome.WIN
        if self.winner != 0:
            return Outcome.LOSS
        return Outcome.NEUTRAL

    def state_string(self) -> str:
        return engine.state_string(self.state)

    def reserve_counts(self) -> Tuple[int, int]:
        return self.state.reserve[Mark.X], self.state.reserve[Mark.O]
