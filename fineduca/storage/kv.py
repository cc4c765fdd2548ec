"""
Key-value stores for FinEduca state.

Whole-value string storage addressed by key:
- MemoryStore: in-process dict (tests, ephemeral sessions)
- SQLiteStore: single-table SQLite file in ~/.fineduca/state.db
"""

import sqlite3
from pathlib import Path
from typing import Optional, Protocol


DEFAULT_STATE_DIR = Path.home() / ".fineduca"
DEFAULT_STATE_DB = DEFAULT_STATE_DIR / "state.db"


class KeyValueStore(Protocol):
    """Synchronous string store."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...


class MemoryStore:
    """Dict-backed store."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class SQLiteStore:
    """
    Key-value store in a SQLite database.

    Each call opens its own connection, so the store can be shared between
    Streamlit reruns without holding a connection open.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize store.

        Args:
            db_path: Path to the database (default: ~/.fineduca/state.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_STATE_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def get(self, key: str) -> Optional[str]:
        conn = self._get_connection()
        try:
            cursor = conn.execute("SELECT value FROM kv WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = self._get_connection()
        try:
            conn.execute(
                """INSERT INTO kv (key, value) VALUES (?, ?)
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                (key, value)
            )
            conn.commit()
        finally:
            conn.close()

    def delete(self, key: str) -> None:
        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()

    def keys(self) -> list[str]:
        conn = self._get_connection()
        try:
            cursor = conn.execute("SELECT key FROM kv ORDER BY key")
            return [row["key"] for row in cursor.fetchall()]
        finally:
            conn.close()
