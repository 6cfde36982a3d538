"""
Session module - persistence of named games.

    from tic_tac_two.session import open_store

    with open_store("games.db") as store:
        store.save("lunch break", state)
        state = store.load("lunch break")
"""

from tic_tac_two.session.serializers import encode, decode
from tic_tac_two.session.store import (
    SessionStore,
    InMemorySessionStore,
    SqliteSessionStore,
    open_store,
)

__all__ = [
    "encode",
    "decode",
    "SessionStore",
    "InMemorySessionStore",
    "SqliteSessionStore",
    "open_store",
]
