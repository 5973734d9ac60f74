"""
In-memory post store.

Used for:
- Unit and integration tests
- Local development without a database file

Invariants:
    - All data is lost on process exit
    - Ids are assigned under a lock, so concurrent creates never collide
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from .base import Post, validate_filter, validate_new_fields

logger = logging.getLogger(__name__)


class InMemoryPostStore:
    """In-memory implementation of PostStore.

    Thread safety:
        Uses an asyncio lock. Safe to use from multiple coroutines.

    Example:
        >>> store = InMemoryPostStore([{"id": 1, "title": "Nexus", "body": "..."}])
        >>> await store.create_record({"title": "A", "body": "B"})
        Post(id=2, title='A', body='B', published=False)
    """

    def __init__(self, records: Optional[Iterable[Union[Post, Mapping[str, Any]]]] = None) -> None:
        """Initialize the store, optionally seeded with records.

        Args:
            records: Initial records (Post instances or dicts with an id)
        """
        self._records: List[Post] = [
            r if isinstance(r, Post) else Post.from_dict(r) for r in (records or [])
        ]
        ids = [r.id for r in self._records]
        if len(ids) != len(set(ids)):
            raise ValueError("Seed records contain duplicate ids")
        self._next_id = max(ids, default=0) + 1
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """No-op for in-memory."""
        logger.debug("InMemoryPostStore initialized")

    async def list_records(self, filter: Optional[Mapping[str, Any]] = None) -> List[Post]:
        criteria = validate_filter(filter)
        async with self._lock:
            return sorted(
                (r for r in self._records if r.matches(criteria)),
                key=lambda r: r.id,
            )

    async def create_record(self, fields: Mapping[str, Any]) -> Post:
        values = validate_new_fields(fields)
        async with self._lock:
            post = Post(id=self._next_id, **values)
            self._next_id += 1
            self._records.append(post)

        logger.debug("Created post", extra={"post_id": post.id})
        return post

    async def get_record(self, record_id: int) -> Optional[Post]:
        async with self._lock:
            for r in self._records:
                if r.id == record_id:
                    return r
        return None

    async def close(self) -> None:
        """Clear all data."""
        async with self._lock:
            self._records.clear()
        logger.debug("InMemoryPostStore closed")
