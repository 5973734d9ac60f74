"""
Request-scoped context for resolvers.

Every operation gets its own RequestContext bundling the store handle. The
store itself is shared across operations and must be concurrency-safe; the
context object never is.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from ..store.base import PostStore


@dataclass(frozen=True)
class RequestContext:
    """Value passed as the third argument to every resolver.

    Attributes:
        db: Data store handle
        request_id: Identifier used to correlate log lines of one operation
    """

    db: PostStore
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)


class ContextFactory:
    """Builds a fresh RequestContext per operation.

    Example:
        >>> factory = ContextFactory(InMemoryPostStore())
        >>> ctx = factory()
        >>> ctx is factory()
        False
    """

    def __init__(self, db: PostStore) -> None:
        self.db = db

    def create(self, request_id: str | None = None) -> RequestContext:
        if request_id is None:
            return RequestContext(db=self.db)
        return RequestContext(db=self.db, request_id=request_id)

    def __call__(self, request_id: str | None = None) -> RequestContext:
        return self.create(request_id)
