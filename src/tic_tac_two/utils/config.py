"""
Configuration and default paths.
"""

import logging
from pathlib import Path

from tic_tac_two.core.types import SLIDE_THRESHOLD


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).parent.parent  # src/tic_tac_two/
DATA_DIR = PACKAGE_DIR / "data"
SESSION_DB = DATA_DIR / "sessions.db"


# ---------------------------------------------------------------------------
# Default Settings
# ---------------------------------------------------------------------------

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class Config:
    """Runtime configuration with sensible defaults."""

    def __init__(
        self,
        db_path: str | Path = SESSION_DB,
        slide_threshold: int = SLIDE_THRESHOLD,
        log_level: str = "WARNING",
    ):
        if slide_threshold < 0:
            raise ValueError(f"slide_threshold must be >= 0, got {slide_threshold}")
        log_level = log_level.upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {log_level}. Available: {', '.join(LOG_LEVELS)}")

        self.db_path = Path(db_path)
        self.slide_threshold = slide_threshold
        self.log_level = log_level

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


# Default configuration
DEFAULT_CONFIG = Config()
