"""
Named session storage.

A SessionStore maps a session name to an encoded GameState. Front-ends get
a store injected rather than reaching for a process-wide singleton.

Implementations:
    InMemorySessionStore - dict-backed, for tests and throwaway sessions
    SqliteSessionStore   - persistent, one row per session
"""

from __future__ import annotations

import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from tic_tac_two.core.errors import DecodeError
from tic_tac_two.core.hashing import hash_board
from tic_tac_two.games.game_state import GameState
from tic_tac_two.session.schema import SCHEMA, SCHEMA_VERSION
from tic_tac_two.session.serializers import decode, encode

logger = logging.getLogger(__name__)


def _check_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"Session name must be a non-empty string, got {name!r}")
    return name


class SessionStore(ABC):
    """Abstract list/save/load/delete over name -> GameState."""

    @abstractmethod
    def list_sessions(self) -> List[str]:
        """Return saved session names, sorted."""
        pass

    @abstractmethod
    def save(self, name: str, state: GameState) -> None:
        """Store (or overwrite) a session."""
        pass

    @abstractmethod
    def load(self, name: str) -> GameState:
        """
        Return a fresh GameState for `name`.

        Raises:
            KeyError: no session with that name.
            DecodeError: the stored snapshot is corrupt.
        """
        pass

    @abstractmethod
    def delete(self, name: str) -> None:
        """Remove a session. Unknown names are ignored."""
        pass

    def close(self) -> None:
        pass

    def __contains__(self, name: str) -> bool:
        return name in self.list_sessions()

    def __enter__(self) -> "SessionStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class InMemorySessionStore(SessionStore):
    """Keeps encoded snapshots in a dict; nothing survives the process."""

    def __init__(self):
        self._sessions: Dict[str, str] = {}

    def list_sessions(self) -> List[str]:
        return sorted(self._sessions)

    def save(self, name: str, state: GameState) -> None:
        self._sessions[_check_name(name)] = encode(state)

    def load(self, name: str) -> GameState:
        if name not in self._sessions:
            raise KeyError(name)
        return decode(self._sessions[name])

    def delete(self, name: str) -> None:
        self._sessions.pop(name, None)

    def __contains__(self, name: str) -> bool:
        return name in self._sessions


class SqliteSessionStore(SessionStore):
    """Sessions persisted in an sqlite database file."""

    def __init__(self, db_path: str | Path):
        if str(db_path) == ":memory:":
            self.db_path = None
            target = ":memory:"
        else:
            self.db_path = Path(db_path).resolve()
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            target = str(self.db_path)
        self._closed = False

        self.conn = sqlite3.connect(target)
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA synchronous=NORMAL")
        self.conn.executescript(SCHEMA)
        self.conn.execute(
            "INSERT OR IGNORE INTO metadata (key, value) VALUES ('schema_version', ?)",
            (SCHEMA_VERSION,),
        )
        self.conn.commit()

    def list_sessions(self) -> List[str]:
        rows = self.conn.execute("SELECT name FROM sessions ORDER BY name").fetchall()
        return [r[0] for r in rows]

    def save(self, name: str, state: GameState) -> None:
        _check_name(name)
        saved_at = datetime.now(timezone.utc).isoformat()
        self.conn.execute(
            "INSERT OR REPLACE INTO sessions (name, payload, board_hash, saved_at) "
            "VALUES (?, ?, ?, ?)",
            (name, encode(state), hash_board(state.board), saved_at),
        )
        self.conn.commit()
        logger.info("Saved session '%s' (turn %d)", name, state.turn_count)

    def load(self, name: str) -> GameState:
        row = self.conn.execute(
            "SELECT payload, board_hash FROM sessions WHERE name = ?", (name,)
        ).fetchone()
        if row is None:
            raise KeyError(name)

        payload, board_hash = row
        state = decode(payload)
        if hash_board(state.board) != board_hash:
            raise DecodeError(f"Session '{name}' failed its board integrity check")
        return state

    def saved_at(self, name: str) -> Optional[datetime]:
        row = self.conn.execute(
            "SELECT saved_at FROM sessions WHERE name = ?", (name,)
        ).fetchone()
        return datetime.fromisoformat(row[0]) if row else None

    def delete(self, name: str) -> None:
        cur = self.conn.execute("DELETE FROM sessions WHERE name = ?", (name,))
        self.conn.commit()
        if cur.rowcount:
            logger.info("Deleted session '%s'", name)

    def __contains__(self, name: str) -> bool:
        row = self.conn.execute(
            "SELECT 1 FROM sessions WHERE name = ?", (name,)
        ).fetchone()
        return row is not None

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.conn.close()


def open_store(db_path: str | Path | None = None) -> SessionStore:
    """sqlite store at `db_path`, or an in-memory store when None."""
    if db_path is None:
        return InMemorySessionStore()
    return SqliteSessionStore(db_path)
