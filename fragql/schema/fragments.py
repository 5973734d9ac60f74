"""
YAML/JSON fragment format for fragql.

Fragments can be declared as data instead of Python calls. Resolvers are
referenced by name and looked up in a mapping supplied by the caller, so the
document stays free of code.

Example fragment:
    types:
      - name: Post
        fields:
          - name: id
            type: Int
          - name: title
            type: String

    extend:
      - root: Query
        fields:
          - name: drafts
            type: "[Post!]!"
            resolver: drafts
      - root: Mutation
        fields:
          - name: createDraft
            type: Post!
            resolver: create_draft
            args:
              title: String!
              body: String!
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

import yaml

from ..errors import RegistrationError
from .types import (
    ArgumentDefinition,
    Definition,
    ExtensionDefinition,
    FieldDefinition,
    ObjectTypeDefinition,
    Resolver,
    TypeRef,
)


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a mapping, got {type(data).__name__}")
    return data


def _parse_argument(name: str, data: Any) -> ArgumentDefinition:
    if isinstance(data, str):
        return ArgumentDefinition(name=name, type=TypeRef.parse(data))
    data = _mapping(data, f"Argument '{name}'")
    return ArgumentDefinition(
        name=name,
        type=TypeRef.parse(data.get("type", "")),
        default=data.get("default"),
    )


def _parse_field(data: Any, resolvers: Mapping[str, Resolver]) -> FieldDefinition:
    data = _mapping(data, "Field entry")
    resolver_name = data.get("resolver")
    resolver = None
    if resolver_name is not None:
        if resolver_name not in resolvers:
            raise RegistrationError(
                f"Field '{data.get('name', '')}' names unknown resolver '{resolver_name}'"
            )
        resolver = resolvers[resolver_name]

    args = _mapping(data.get("args") or {}, f"Arguments of field '{data.get('name', '')}'")
    return FieldDefinition(
        name=data.get("name", ""),
        type=TypeRef.parse(data.get("type", "")),
        resolver=resolver,
        arguments=tuple(_parse_argument(n, a) for n, a in args.items()),
        description=data.get("description", ""),
    )


def parse_fragments(
    data: Mapping[str, Any],
    resolvers: Optional[Mapping[str, Resolver]] = None,
) -> list[Definition]:
    """Parse a fragment document into definitions, types before extensions.

    Args:
        data: Parsed document with optional 'types' and 'extend' lists
        resolvers: Resolver name -> resolver function

    Returns:
        List of ObjectTypeDefinition and ExtensionDefinition

    Raises:
        RegistrationError: If the document is malformed or names an unknown resolver
    """
    resolvers = resolvers or {}
    definitions: list[Definition] = []
    try:
        data = _mapping(data, "Fragment document")
        for type_data in data.get("types") or []:
            type_data = _mapping(type_data, "Type entry")
            definitions.append(
                ObjectTypeDefinition(
                    name=type_data.get("name", ""),
                    fields=tuple(_parse_field(f, resolvers) for f in type_data.get("fields", [])),
                    description=type_data.get("description", ""),
                )
            )
        for ext_data in data.get("extend") or []:
            ext_data = _mapping(ext_data, "Extension entry")
            definitions.append(
                ExtensionDefinition(
                    root=ext_data.get("root", ""),
                    fields=tuple(_parse_field(f, resolvers) for f in ext_data.get("fields", [])),
                )
            )
    except ValueError as e:
        raise RegistrationError(f"Invalid fragment: {e}") from e
    return definitions


def load_fragments_yaml(
    yaml_str: str,
    resolvers: Optional[Mapping[str, Resolver]] = None,
) -> list[Definition]:
    """Parse fragments from a YAML string."""
    data = yaml.safe_load(yaml_str)
    return parse_fragments(data or {}, resolvers)


def load_fragments_json(
    json_str: str,
    resolvers: Optional[Mapping[str, Resolver]] = None,
) -> list[Definition]:
    """Parse fragments from a JSON string."""
    data = json.loads(json_str)
    return parse_fragments(data or {}, resolvers)
