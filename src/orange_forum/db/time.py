# src/orange_forum/db/time.py
"""Time utilities for database models."""

import time


def now_epoch() -> int:
    """Return the current wall-clock time as integer epoch seconds."""
    return int(time.time())
