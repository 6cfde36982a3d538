"""
Tic-Tac-Two - rules engine for tic-tac-toe on a 5x5 grid with a sliding
3x3 active window.

Quick Start:
    from tic_tac_two import TicTacTwo, Move, open_store

    game = TicTacTwo()
    game.apply_move(Move.place(12))
    with open_store("sessions.db") as store:
        store.save("my game", game.get_state())

Modules:
    core    - Marks, directions, constants, error types, hashing
    games   - GameState, window arithmetic, rules engine, TicTacTwo
    session - JSON encode/decode and named session stores
    utils   - Configuration and default paths
"""

from tic_tac_two.core import (
    Mark,
    Direction,
    Outcome,
    GameError,
    InvalidMove,
    NoReserve,
    BlockedMove,
    DecodeError,
)
from tic_tac_two.games import GameEngine, GameState, Move, Reserve, TicTacTwo, new_game
from tic_tac_two.session import SessionStore, decode, encode, open_store

__version__ = "1.0.0"

__all__ = [
    # Game
    "TicTacTwo",
    "Move",
    "GameEngine",
    "GameState",
    "Reserve",
    "new_game",
    # Persistence
    "SessionStore",
    "encode",
    "decode",
    "open_store",
    # Types
    "Mark",
    "Direction",
    "Outcome",
    # Errors
    "GameError",
    "InvalidMove",
    "NoReserve",
    "BlockedMove",
    "DecodeError",
]
