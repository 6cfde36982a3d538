"""
Shared test fixtures for tic_tac_two tests.

Design principles:
- Fresh state per test (GameState is mutable)
- Clean imports at module level
- Minimal, focused fixtures
"""

import tempfile
from pathlib import Path
from typing import Generator

import numpy as np
import pytest

from tic_tac_two.core.types import Mark
from tic_tac_two.games.engine import new_game
from tic_tac_two.games.game_state import GameState, Reserve
from tic_tac_two.session.store import SqliteSessionStore


# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def temp_db_path() -> Generator[Path, None, None]:
    """Temporary database file with cleanup."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    yield path
    for suffix in ["", "-wal", "-shm"]:
        p = Path(str(path) + suffix)
        if p.exists():
            p.unlink()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Temporary directory with cleanup."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


# =============================================================================
# State Fixtures
# =============================================================================

@pytest.fixture
def fresh_state() -> GameState:
    """Brand new game."""
    return new_game()


@pytest.fixture
def mid_game_state() -> GameState:
    """
    Six turns in, window shifted up-left, one X piece stranded.

        X . . . .      window covers rows 0-2, cols 0-2
        . O . . .
        . . X . .
        . . . X O      cell 18 (X) sits outside the window
        . . . . .
    """
    board = np.zeros(25, dtype=np.int8)
    board[[0, 12, 18]] = Mark.X
    board[[6, 19]] = Mark.O
    return GameState(
        board=board,
        turn_count=6,
        current_player=Mark.X,
        reserve=Reserve(x=1, o=2),
        window_offset=-6,
    )


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def sqlite_store(temp_db_path: Path) -> Generator[SqliteSessionStore, None, None]:
    """SqliteSessionStore on a temporary database."""
    store = SqliteSessionStore(temp_db_path)
    yield store
    store.close()
