"""
Object types of the blog schema.
"""

from ..schema import field, object_type

PostType = object_type(
    "Post",
    field("id", "Int"),
    field("title", "String"),
    field("body", "String"),
    field("published", "Boolean"),
    description="A blog post; drafts are unpublished posts",
)
