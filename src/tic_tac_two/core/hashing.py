"""
Board hashing utilities - optimized for int8 arrays.
"""

import hashlib
import numpy as np


def hash_board(board: np.ndarray) -> str:
    """
    Fast fingerprint for a board.

    The board is normalised to contiguous int8 first so equal boards
    hash equal regardless of the dtype they were built with.
    """
    data = np.ascontiguousarray(board, dtype=np.int8).tobytes()
    return hashlib.sha256(data).hexdigest()[:16]
