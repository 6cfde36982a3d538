"""
Error types raised by the engine and the session layer.

Every rule violation leaves the GameState untouched.
"""


class GameError(Exception):
    """Base class for all engine errors."""


class InvalidMove(GameError, ValueError):
    """Placement/relocation targets an occupied or out-of-window cell,
    or the relocation source is not owned by the mover."""


class NoReserve(GameError, ValueError):
    """Placement attempted with no pieces left in reserve."""


class BlockedMove(GameError, ValueError):
    """Window slide would leave the 5x5 grid (or is not yet allowed)."""


class DecodeError(GameError):
    """Persisted snapshot failed structural validation."""
