"""
Query fields of the blog schema.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..execution.context import RequestContext
from ..schema import extend_query, field
from ..store.base import Post


async def resolve_drafts(parent: Any, args: Mapping[str, Any], ctx: RequestContext) -> list[Post]:
    return await ctx.db.list_records({"published": False})


async def resolve_posts(parent: Any, args: Mapping[str, Any], ctx: RequestContext) -> list[Post]:
    return await ctx.db.list_records({"published": True})


async def resolve_post(parent: Any, args: Mapping[str, Any], ctx: RequestContext) -> Post | None:
    return await ctx.db.get_record(args["id"])


PostQueries = extend_query(
    field("drafts", "[Post!]!", resolve=resolve_drafts, description="Unpublished posts"),
    field("posts", "[Post!]!", resolve=resolve_posts, description="Published posts"),
    field("post", "Post", resolve=resolve_post, args={"id": "Int!"}),
)
