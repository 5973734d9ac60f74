"""
Base protocol and types for the record store abstraction.

Resolvers reach data only through the PostStore protocol, so the in-memory
and SQLite backends can be swapped without touching resolver code.

Invariants:
    - id is assigned by the store and never reused
    - published defaults to False at creation
    - Implementations are safe under concurrent coroutines

How to change safely:
    - New operations (update, delete) are added to the protocol and to
      every backend together
    - Keep Post fields in sync with POST_FIELDS
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    runtime_checkable,
)

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)

POST_FIELDS = ("id", "title", "body", "published")
WRITABLE_FIELDS = ("title", "body", "published")
REQUIRED_FIELDS = ("title", "body")


class StoreError(Exception):
    """Base exception for store operations."""

    pass


@dataclass(frozen=True)
class Post:
    """A stored post record.

    Attributes:
        id: Store-assigned unique identifier
        title: Post title
        body: Post body
        published: Whether the post is published (drafts are unpublished)
    """

    id: int
    title: str
    body: str
    published: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Post:
        """Create from dictionary representation."""
        return cls(
            id=data["id"],
            title=data["title"],
            body=data["body"],
            published=bool(data.get("published", False)),
        )

    def matches(self, filter: Optional[Mapping[str, Any]]) -> bool:
        """Whether every filter entry equals the record's value."""
        if not filter:
            return True
        return all(getattr(self, key) == value for key, value in filter.items())


def validate_filter(filter: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Check filter keys against the Post fields.

    Raises:
        ValueError: On an unknown filter key
    """
    filter = dict(filter or {})
    unknown = set(filter) - set(POST_FIELDS)
    if unknown:
        raise ValueError(f"Unknown filter fields: {sorted(unknown)}")
    return filter


def validate_new_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Check and complete the fields of a record about to be created.

    Raises:
        ValueError: On unknown, store-assigned, missing or mistyped fields
    """
    fields = dict(fields)
    if "id" in fields:
        raise ValueError("id is assigned by the store")
    unknown = set(fields) - set(WRITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown fields: {sorted(unknown)}")
    missing = [name for name in REQUIRED_FIELDS if fields.get(name) is None]
    if missing:
        raise ValueError(f"Missing required fields: {missing}")
    for name in REQUIRED_FIELDS:
        if not isinstance(fields[name], str):
            raise ValueError(f"Field '{name}' must be a string")
    published = fields.get("published")
    if published is None:
        fields["published"] = False
    elif not isinstance(published, bool):
        raise ValueError("Field 'published' must be a boolean")
    return fields


@runtime_checkable
class PostStore(Protocol):
    """Protocol for post record backends.

    Example:
        >>> store = InMemoryPostStore()
        >>> post = await store.create_record({"title": "Nexus", "body": "..."})
        >>> drafts = await store.list_records({"published": False})
    """

    async def initialize(self) -> None:
        """Prepare the backend (create tables, etc.)."""
        ...

    async def list_records(self, filter: Optional[Mapping[str, Any]] = None) -> List[Post]:
        """List records whose fields equal every filter entry, in id order.

        Raises:
            ValueError: On an unknown filter key
        """
        ...

    async def create_record(self, fields: Mapping[str, Any]) -> Post:
        """Create a record with a fresh unique id.

        Raises:
            ValueError: If fields are invalid
        """
        ...

    async def get_record(self, record_id: int) -> Optional[Post]:
        """Get a record by id, or None."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...


def create_store(settings: "Settings") -> PostStore:
    """Create the store backend selected by configuration.

    Args:
        settings: Application settings

    Returns:
        PostStore implementation

    Raises:
        ValueError: If the backend is unknown
    """
    backend = settings.store_backend.lower()
    if backend == "memory":
        from .memory import InMemoryPostStore

        logger.info("Using in-memory post store")
        return InMemoryPostStore()
    if backend == "sqlite":
        from .sqlite import SqlitePostStore

        logger.info("Using SQLite post store", extra={"path": settings.sqlite_path})
        return SqlitePostStore(settings.sqlite_path)
    raise ValueError(f"Unknown store backend: {settings.store_backend}")
