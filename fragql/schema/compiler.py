"""
Schema compiler for fragql.

Turns a snapshot of registry entries into a CompiledSchema:
- Partitions entries into concrete object types and root extensions
- Checks every type reference resolves to a scalar or registered type
- Merges extensions into synthetic Query and Mutation types
- Renders the SDL document and builds the resolver lookup

Invariants:
    - compile_schema() is a pure function of its input
    - Same entries produce byte-identical SDL and an equal lookup
    - A CompiledSchema is read-only once built

SDL layout:
    User types first, then root types; each group alphabetical. Fields keep
    declaration order. Root types without fields are left out of the
    document since an empty type block is not valid SDL.
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from ..errors import RegistrationError, SchemaValidationError
from .scalars import is_scalar
from .types import (
    MUTATION,
    QUERY,
    ROOT_TYPES,
    Definition,
    ExtensionDefinition,
    FieldDefinition,
    ObjectTypeDefinition,
    Resolver,
)

logger = logging.getLogger(__name__)


def default_resolver(parent: Any, args: Mapping[str, Any], context: Any, *, field_name: str) -> Any:
    """Read the property of the parent matching the field name."""
    if parent is None:
        return None
    if isinstance(parent, Mapping):
        return parent.get(field_name)
    return getattr(parent, field_name, None)


@dataclass(frozen=True)
class CompiledSchema:
    """The merged, validated schema.

    Attributes:
        types: Every object type by name, including Query and Mutation
        sdl: Deterministic SDL rendering of the schema
        resolvers: (type name, field name) -> explicit resolver
    """

    types: Mapping[str, ObjectTypeDefinition]
    sdl: str
    resolvers: Mapping[Tuple[str, str], Resolver]

    @property
    def fingerprint(self) -> str:
        """SHA-256 fingerprint of the SDL document."""
        return "sha256:" + hashlib.sha256(self.sdl.encode("utf-8")).hexdigest()

    @property
    def query_type(self) -> ObjectTypeDefinition:
        return self.types[QUERY]

    @property
    def mutation_type(self) -> ObjectTypeDefinition:
        return self.types[MUTATION]

    def get_type(self, name: str) -> Optional[ObjectTypeDefinition]:
        return self.types.get(name)

    def is_object_type(self, name: str) -> bool:
        return name in self.types

    def get_field(self, type_name: str, field_name: str) -> Optional[FieldDefinition]:
        object_type = self.types.get(type_name)
        if object_type is None:
            return None
        return object_type.get_field(field_name)

    def resolver_for(self, type_name: str, field_name: str) -> Optional[Resolver]:
        """Explicit resolver for a field, or None when default access applies."""
        return self.resolvers.get((type_name, field_name))

    def to_dict(self) -> dict[str, Any]:
        """Shape of the schema for external type-declaration generators.

        Types are sorted by name; fields keep declaration order.
        """
        return {
            "fingerprint": self.fingerprint,
            "types": [self.types[name].to_dict() for name in sorted(self.types)],
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)


def _check_reference(owner: str, f: FieldDefinition, type_names: set[str]) -> None:
    if not (is_scalar(f.type.name) or f.type.name in type_names):
        raise SchemaValidationError(
            f"Field '{owner}.{f.name}' references unknown type '{f.type.name}'",
            type_name=owner,
            field_name=f.name,
        )
    for arg in f.arguments:
        if not is_scalar(arg.type.name):
            raise SchemaValidationError(
                f"Argument '{arg.name}' of field '{owner}.{f.name}' must be a scalar "
                f"or a list of scalars, got '{arg.type.render()}'",
                type_name=owner,
                field_name=f.name,
            )


def _merge_extensions(root: str, extensions: list[ExtensionDefinition]) -> ObjectTypeDefinition:
    fields: list[FieldDefinition] = []
    seen: set[str] = set()
    for extension in extensions:
        for f in extension.fields:
            if f.name in seen:
                raise RegistrationError(
                    f"Field '{root}.{f.name}' is contributed by more than one extension",
                    type_name=root,
                )
            seen.add(f.name)
            fields.append(f)
    return ObjectTypeDefinition(name=root, fields=tuple(fields))


def render_sdl(types: Mapping[str, ObjectTypeDefinition]) -> str:
    """Render object types as an SDL document."""
    user_names = sorted(name for name in types if name not in ROOT_TYPES)
    root_names = sorted(name for name in ROOT_TYPES if types[name].fields)
    blocks = [types[name].render() for name in user_names + root_names]
    return "\n\n".join(blocks) + "\n" if blocks else ""


def compile_schema(entries: Iterable[Definition]) -> CompiledSchema:
    """Compile registry entries into a CompiledSchema.

    Args:
        entries: Object types and root extensions, in declaration order

    Returns:
        CompiledSchema

    Raises:
        RegistrationError: Duplicate type names or colliding root fields
        SchemaValidationError: A field references an unknown type
    """
    concrete: dict[str, ObjectTypeDefinition] = {}
    extensions: dict[str, list[ExtensionDefinition]] = {QUERY: [], MUTATION: []}

    for entry in entries:
        if isinstance(entry, ExtensionDefinition):
            extensions[entry.root].append(entry)
        elif isinstance(entry, ObjectTypeDefinition):
            if entry.name in ROOT_TYPES or entry.name in concrete:
                raise RegistrationError(
                    f"Type name '{entry.name}' is reserved or already defined",
                    type_name=entry.name,
                )
            concrete[entry.name] = entry
        else:
            raise TypeError(f"Cannot compile entry of type {type(entry).__name__}")

    type_names = set(concrete)
    for object_type in concrete.values():
        for f in object_type.fields:
            _check_reference(object_type.name, f, type_names)

    roots = {root: _merge_extensions(root, exts) for root, exts in extensions.items()}
    for root_type in roots.values():
        for f in root_type.fields:
            _check_reference(root_type.name, f, type_names)

    all_types: dict[str, ObjectTypeDefinition] = {**concrete, **roots}

    resolvers: dict[Tuple[str, str], Resolver] = {}
    for object_type in all_types.values():
        for f in object_type.fields:
            if f.resolver is not None:
                resolvers[(object_type.name, f.name)] = f.resolver

    schema = CompiledSchema(
        types=MappingProxyType(all_types),
        sdl=render_sdl(all_types),
        resolvers=MappingProxyType(resolvers),
    )
    logger.info(
        f"Compiled schema with {len(concrete)} object types, "
        f"{len(roots[QUERY].fields)} query fields, "
        f"{len(roots[MUTATION].fields)} mutation fields, fingerprint={schema.fingerprint}"
    )
    return schema


def write_sdl(schema: CompiledSchema, path: Union[str, Path]) -> Path:
    """Write the SDL document to a file, creating parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(schema.sdl, encoding="utf-8")
    logger.info("Wrote schema document", extra={"path": str(target)})
    return target
