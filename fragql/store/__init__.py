"""
Record store module for fragql.

Backends:
- InMemoryPostStore: tests and local development
- SqlitePostStore: single-file persistent store

Resolvers depend only on the PostStore protocol.
"""

from .base import Post, PostStore, StoreError, create_store
from .memory import InMemoryPostStore
from .sqlite import SqlitePostStore

__all__ = [
    "Post",
    "PostStore",
    "StoreError",
    "create_store",
    "InMemoryPostStore",
    "SqlitePostStore",
]
