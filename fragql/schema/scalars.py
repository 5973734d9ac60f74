"""
Built-in scalar types.

The five GraphQL scalars come from graphql-core, so output serialization and
argument parsing follow its coercion rules (including the 32-bit Int range).
``serialize`` and ``parse_value`` raise GraphQLError on mismatch; the
executor turns that into a field or argument error.
"""

from __future__ import annotations

from graphql import (
    GraphQLBoolean,
    GraphQLFloat,
    GraphQLID,
    GraphQLInt,
    GraphQLScalarType,
    GraphQLString,
)

BUILTIN_SCALARS: dict[str, GraphQLScalarType] = {
    scalar.name: scalar
    for scalar in (GraphQLInt, GraphQLFloat, GraphQLString, GraphQLBoolean, GraphQLID)
}


def is_scalar(name: str) -> bool:
    return name in BUILTIN_SCALARS
