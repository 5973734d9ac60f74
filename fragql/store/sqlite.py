"""
SQLite post store.

Persists posts in a single SQLite file. A connection is opened per operation;
writes are serialized with an asyncio lock and run in explicit transactions.

Table schema:
    posts:
        - id INTEGER PRIMARY KEY AUTOINCREMENT
        - title TEXT
        - body TEXT
        - published INTEGER (0/1)
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, List, Mapping, Optional

from .base import Post, StoreError, validate_filter, validate_new_fields

logger = logging.getLogger(__name__)


class SqlitePostStore:
    """SQLite implementation of PostStore.

    Example:
        >>> store = SqlitePostStore("/var/lib/fragql/posts.db")
        >>> await store.initialize()
        >>> post = await store.create_record({"title": "Nexus", "body": "..."})
    """

    def __init__(self, path: str, busy_timeout_ms: int = 5000) -> None:
        """Initialize the store.

        Args:
            path: SQLite database file path
            busy_timeout_ms: SQLite busy timeout
        """
        self.path = Path(path)
        self.busy_timeout_ms = busy_timeout_ms
        self._initialized = False
        self._lock = asyncio.Lock()

    @contextmanager
    def _get_connection(self) -> Iterator[sqlite3.Connection]:
        """Open a connection for one operation."""
        if not self._initialized:
            raise StoreError(f"Store not initialized: {self.path}")

        conn = sqlite3.connect(
            str(self.path),
            timeout=self.busy_timeout_ms / 1000.0,
            isolation_level=None,  # Autocommit by default, explicit transactions
        )
        conn.row_factory = sqlite3.Row
        try:
            conn.execute(f"PRAGMA busy_timeout = {self.busy_timeout_ms}")
            yield conn
        finally:
            conn.close()

    async def initialize(self) -> None:
        """Create the database file and table if they don't exist."""
        async with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._initialized = True
            with self._get_connection() as conn:
                conn.executescript("""
                    CREATE TABLE IF NOT EXISTS posts (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        title TEXT NOT NULL,
                        body TEXT NOT NULL,
                        published INTEGER NOT NULL DEFAULT 0
                    );

                    CREATE INDEX IF NOT EXISTS idx_posts_published ON posts(published);
                """)
        logger.info("Initialized post database", extra={"path": str(self.path)})

    @staticmethod
    def _row_to_post(row: sqlite3.Row) -> Post:
        return Post(
            id=row["id"],
            title=row["title"],
            body=row["body"],
            published=bool(row["published"]),
        )

    async def list_records(self, filter: Optional[Mapping[str, Any]] = None) -> List[Post]:
        criteria = validate_filter(filter)
        clauses = [f"{name} = ?" for name in criteria]
        params = [int(v) if isinstance(v, bool) else v for v in criteria.values()]
        sql = "SELECT * FROM posts"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY id"

        with self._get_connection() as conn:
            cursor = conn.execute(sql, params)
            return [self._row_to_post(row) for row in cursor.fetchall()]

    async def create_record(self, fields: Mapping[str, Any]) -> Post:
        values = validate_new_fields(fields)
        async with self._lock:
            with self._get_connection() as conn:
                conn.execute("BEGIN IMMEDIATE")
                try:
                    cursor = conn.execute(
                        "INSERT INTO posts (title, body, published) VALUES (?, ?, ?)",
                        (values["title"], values["body"], int(values["published"])),
                    )
                    post_id = cursor.lastrowid
                    conn.execute("COMMIT")
                except Exception:
                    conn.execute("ROLLBACK")
                    raise

        logger.debug("Created post", extra={"post_id": post_id})
        return Post(id=post_id, **values)

    async def get_record(self, record_id: int) -> Optional[Post]:
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM posts WHERE id = ?", (record_id,)).fetchone()
            return self._row_to_post(row) if row else None

    async def close(self) -> None:
        """Connections are per-operation; nothing to release."""
        logger.debug("SqlitePostStore closed", extra={"path": str(self.path)})
