"""
GameState <-> JSON text.

Field names follow the persisted format:
    totalMoves, board, currentPlayer, piecesRemaining, gridOffset

Cells and players are written as display symbols ("", "X", "O").
"""

from __future__ import annotations

import json
from typing import Any, Dict, Union

import numpy as np

from tic_tac_two.core.errors import DecodeError
from tic_tac_two.core.types import CELL_STRINGS, Mark, NUM_CELLS, PIECES_PER_PLAYER
from tic_tac_two.games.game_state import GameState, Reserve
from tic_tac_two.games.window import is_valid_offset

_SYMBOLS = {Mark.EMPTY: "", Mark.X: CELL_STRINGS[Mark.X], Mark.O: CELL_STRINGS[Mark.O]}
_MARKS = {s: m for m, s in _SYMBOLS.items()}

_KEYS = ("totalMoves", "board", "currentPlayer", "piecesRemaining", "gridOffset")


def to_dict(state: GameState) -> Dict[str, Any]:
    return {
        "totalMoves": int(state.turn_count),
        "board": [_SYMBOLS[Mark(int(v))] for v in state.board],
        "currentPlayer": _SYMBOLS[state.current_player],
        "piecesRemaining": {
            _SYMBOLS[Mark.X]: state.reserve[Mark.X],
            _SYMBOLS[Mark.O]: state.reserve[Mark.O],
        },
        "gridOffset": int(state.window_offset),
    }


def encode(state: GameState) -> str:
    """Serialize a state to compact JSON text."""
    return json.dumps(to_dict(state), separators=(",", ":"))


def _require_int(value: Any, field: str) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{field} must be an integer, got {value!r}")
    return value


def _player(symbol: Any, field: str) -> Mark:
    mark = _MARKS.get(symbol) if isinstance(symbol, str) else None
    if mark is None or mark is Mark.EMPTY:
        raise DecodeError(f"{field} must be 'X' or 'O', got {symbol!r}")
    return mark


def from_dict(data: Any) -> GameState:
    """Validate a decoded mapping and build a GameState from it."""
    if not isinstance(data, dict):
        raise DecodeError("Snapshot must be a JSON object")
    missing = [k for k in _KEYS if k not in data]
    if missing:
        raise DecodeError(f"Snapshot missing keys: {', '.join(missing)}")

    turn_count = _require_int(data["totalMoves"], "totalMoves")
    if turn_count < 0:
        raise DecodeError(f"totalMoves must be non-negative, got {turn_count}")

    cells = data["board"]
    if not isinstance(cells, list) or len(cells) != NUM_CELLS:
        raise DecodeError(f"board must be a list of {NUM_CELLS} cells")
    try:
        board = np.array([_MARKS[c] for c in cells], dtype=np.int8)
    except (KeyError, TypeError) as e:
        raise DecodeError(f"board holds an unknown cell value: {e}") from e

    current_player = _player(data["currentPlayer"], "currentPlayer")

    pieces = data["piecesRemaining"]
    if not isinstance(pieces, dict):
        raise DecodeError("piecesRemaining must be an object")
    reserve = Reserve()
    for mark in (Mark.X, Mark.O):
        symbol = _SYMBOLS[mark]
        if symbol not in pieces:
            raise DecodeError(f"piecesRemaining missing '{symbol}'")
        count = _require_int(pieces[symbol], f"piecesRemaining[{symbol}]")
        if not 0 <= count <= PIECES_PER_PLAYER:
            raise DecodeError(
                f"piecesRemaining[{symbol}] must be in [0, {PIECES_PER_PLAYER}], got {count}"
            )
        reserve[mark] = count
    extra = set(pieces) - {_SYMBOLS[Mark.X], _SYMBOLS[Mark.O]}
    if extra:
        raise DecodeError(f"piecesRemaining has unknown players: {sorted(extra)}")

    offset = _require_int(data["gridOffset"], "gridOffset")
    if not is_valid_offset(offset):
        raise DecodeError(f"gridOffset {offset} puts the window outside the grid")

    # Pieces are never created or destroyed
    for mark in (Mark.X, Mark.O):
        on_board = int(np.count_nonzero(board == mark))
        if on_board + reserve[mark] != PIECES_PER_PLAYER:
            raise DecodeError(
                f"{_SYMBOLS[mark]} has {on_board} pieces on the board and {reserve[mark]} in reserve; "
                f"expected {PIECES_PER_PLAYER} in total"
            )

    return GameState(board, turn_count, current_player, reserve, offset)


def decode(payload: Union[str, bytes, bytearray]) -> GameState:
    """
    Parse JSON text (or UTF-8 bytes) into a GameState.

    Raises:
        DecodeError: malformed JSON or a snapshot that fails validation.
    """
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError, RecursionError) as e:
        raise DecodeError(f"Snapshot is not valid JSON: {e}") from e
    return from_dict(data)
