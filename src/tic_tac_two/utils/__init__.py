"""
Utilities - configuration.
"""

from tic_tac_two.utils.config import Config, DEFAULT_CONFIG, SESSION_DB

__all__ = ["Config", "DEFAULT_CONFIG", "SESSION_DB"]
