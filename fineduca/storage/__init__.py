"""
FinEduca Storage - Key-value stores and slice synchronization.

This module provides:
- KeyValueStore protocol with MemoryStore and SQLiteStore
- PersistenceSynchronizer: per-slice read-through / write-through
"""

from .kv import (
    KeyValueStore,
    MemoryStore,
    SQLiteStore,
    DEFAULT_STATE_DIR,
    DEFAULT_STATE_DB,
)

from .sync import (
    PersistenceSynchronizer,
    StateSnapshot,
    course_key,
    PROGRESS_KEY,
    GOALS_KEY,
    POINTS_KEY,
    AVATAR_KEY,
    THEME_KEY,
    COURSE_KEY_PREFIX,
)

__all__ = [
    # Stores
    "KeyValueStore",
    "MemoryStore",
    "SQLiteStore",
    "DEFAULT_STATE_DIR",
    "DEFAULT_STATE_DB",
    # Sync
    "PersistenceSynchronizer",
    "StateSnapshot",
    "course_key",
    "PROGRESS_KEY",
    "GOALS_KEY",
    "POINTS_KEY",
    "AVATAR_KEY",
    "THEME_KEY",
    "COURSE_KEY_PREFIX",
]
