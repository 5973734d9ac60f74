"""
Blog schema built from fragments.

- Post: the record type
- Query: drafts, posts, post(id)
- Mutation: createDraft(title, body)
"""

from ..schema import TypeRegistry
from .mutations import PostMutations
from .queries import PostQueries
from .types import PostType

ALL_FRAGMENTS = [
    PostType,
    PostQueries,
    PostMutations,
]


def build_registry() -> TypeRegistry:
    """Create a registry holding every blog fragment."""
    registry = TypeRegistry()
    registry.register_all(ALL_FRAGMENTS)
    return registry


__all__ = ["ALL_FRAGMENTS", "build_registry", "PostType", "PostQueries", "PostMutations"]
