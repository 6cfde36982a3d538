"""
Database schema for saved sessions.

Tables:
    sessions - Named game snapshots (encoded JSON + board fingerprint)
    metadata - Key-value store for settings
"""

SCHEMA_VERSION = "1"

SCHEMA = """
CREATE TABLE IF NOT EXISTS sessions (
    name TEXT PRIMARY KEY,
    payload TEXT NOT NULL,
    board_hash TEXT NOT NULL,
    saved_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""
