"""
Tests for tic_tac_two.session.schema

Tests database schema validity.
"""

import sqlite3

import pytest

from tic_tac_two.session.schema import SCHEMA


class TestSchemaValidity:
    """Schema SQL validity tests."""

    def test_schema_executes(self):
        conn = sqlite3.connect(":memory:")
        conn.executescript(SCHEMA)
        conn.close()

    def test_schema_idempotent(self):
        """Schema can be executed multiple times."""
        conn = sqlite3.connect(":memory:")
        conn.executescript(SCHEMA)
        conn.executescript(SCHEMA)
        conn.close()


class TestRequiredTables:

    @pytest.fixture
    def conn(self):
        conn = sqlite3.connect(":memory:")
        conn.executescript(SCHEMA)
        yield conn
        conn.close()

    @pytest.mark.parametrize("table", ["sessions", "metadata"])
    def test_table_exists(self, conn, table):
        result = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table,)
        ).fetchone()
        assert result is not None
