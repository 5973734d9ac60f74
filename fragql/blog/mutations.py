"""
Mutation fields of the blog schema.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..execution.context import RequestContext
from ..schema import extend_mutation, field
from ..store.base import Post


async def resolve_create_draft(
    parent: Any, args: Mapping[str, Any], ctx: RequestContext
) -> Post:
    # published is left to the store default, so every new post is a draft
    return await ctx.db.create_record({"title": args["title"], "body": args["body"]})


PostMutations = extend_mutation(
    field(
        "createDraft",
        "Post!",
        resolve=resolve_create_draft,
        args={"title": "String!", "body": "String!"},
    ),
)
