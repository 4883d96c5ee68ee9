"""
Key-value string store (SQLite).

Both features persist whole JSON collections under a single string key.
Writes overwrite the previous value; last writer wins.
"""
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_DB = Path.home() / ".local" / "share" / "focusdesk" / "focusdesk.db"


def _connect(db_path: str) -> sqlite3.Connection:
    """Open a connection in WAL mode with dict-like rows."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode = WAL")
    return conn


class KeyValueStore:
    """SQLite-backed string store with get/set persisted across sessions."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize store and create the table if needed."""
        if db_path is None:
            db_path = str(DEFAULT_DB)
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _init_schema(self):
        with _connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key was never written."""
        with _connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ? LIMIT 1",
                (key,)
            ).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        """Overwrite the value stored under key."""
        now = datetime.now(timezone.utc).isoformat()
        with _connect(self.db_path) as conn:
            conn.execute("""
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at
            """, (key, value, now))
            conn.commit()
        logger.debug("Stored %d chars under %s", len(value), key)

    def delete(self, key: str) -> bool:
        """Remove a key. Returns True if something was deleted."""
        with _connect(self.db_path) as conn:
            cur = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
            return cur.rowcount > 0
