"""
Core definition types for the fragql schema system.

This module defines the building blocks developers declare fragments with:
- TypeRef: A base type name plus its non-null/list wrappers
- ArgumentDefinition: A declared argument on a field
- FieldDefinition: A single field with its type and optional resolver
- ObjectTypeDefinition: A named object type
- ExtensionDefinition: Extra fields contributed to the Query or Mutation root

Invariants:
    - Definitions are immutable once created
    - Field names are unique within a type or extension
    - Type references are not resolved here; the compiler checks them
    - Query and Mutation are reserved for extensions

How to change safely:
    - Add new optional attributes with defaults
    - Keep TypeRef.render() the exact inverse of TypeRef.parse()

Example:
    >>> from fragql.schema.types import field, object_type, extend_query
    >>> Post = object_type(
    ...     "Post",
    ...     field("id", "Int"),
    ...     field("title", "String"),
    ... )
    >>> drafts = extend_query(field("drafts", "[Post!]!", resolve=list_drafts))
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

QUERY = "Query"
MUTATION = "Mutation"
ROOT_TYPES = (QUERY, MUTATION)

_NAME_RE = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")

# resolver(parent, args, context) -> value | awaitable value
Resolver = Callable[[Any, Mapping[str, Any], Any], Union[Any, Awaitable[Any]]]


def _check_name(kind: str, name: str) -> None:
    if not name:
        raise ValueError(f"{kind} name cannot be empty")
    if not _NAME_RE.match(name):
        raise ValueError(f"Invalid {kind.lower()} name '{name}'")


@dataclass(frozen=True)
class TypeRef:
    """Reference to a named type, with its wrappers spelled out.

    Attributes:
        name: Base type name (scalar or object type)
        non_null: Whether the outermost value may not be null
        list: Whether the value is a list of the base type
        list_element_non_null: Whether list elements may not be null

    Example:
        >>> TypeRef.parse("[Post!]!")
        TypeRef(name='Post', non_null=True, list=True, list_element_non_null=True)
    """

    name: str
    non_null: bool = False
    list: bool = False
    list_element_non_null: bool = False

    def __post_init__(self) -> None:
        """Validate type reference."""
        _check_name("Type", self.name)
        if self.list_element_non_null and not self.list:
            raise ValueError(
                f"list_element_non_null requires list for type reference '{self.name}'"
            )

    @classmethod
    def parse(cls, notation: str) -> TypeRef:
        """Decode SDL type notation such as ``Int``, ``Post!`` or ``[Post!]!``.

        Raises:
            ValueError: If the notation is malformed or nests lists
        """
        text = notation.strip()
        non_null = text.endswith("!")
        if non_null:
            text = text[:-1].rstrip()

        if text.startswith("[") or text.endswith("]"):
            if not (text.startswith("[") and text.endswith("]")):
                raise ValueError(f"Unbalanced list brackets in type '{notation}'")
            inner = text[1:-1].strip()
            element_non_null = inner.endswith("!")
            if element_non_null:
                inner = inner[:-1].rstrip()
            if "[" in inner or "]" in inner:
                raise ValueError(f"Nested list types are not supported: '{notation}'")
            return cls(inner, non_null=non_null, list=True, list_element_non_null=element_non_null)

        return cls(text, non_null=non_null)

    @property
    def element(self) -> TypeRef:
        """The type of one list element."""
        if not self.list:
            raise ValueError(f"Type '{self.render()}' is not a list")
        return TypeRef(self.name, non_null=self.list_element_non_null)

    def render(self) -> str:
        """Render back to SDL notation."""
        text = self.name
        if self.list:
            text = f"[{text}{'!' if self.list_element_non_null else ''}]"
        if self.non_null:
            text += "!"
        return text

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "non_null": self.non_null,
            "list": self.list,
            "list_element_non_null": self.list_element_non_null,
        }

    def __str__(self) -> str:
        return self.render()


def _as_type_ref(value: Union[str, TypeRef]) -> TypeRef:
    if isinstance(value, TypeRef):
        return value
    return TypeRef.parse(value)


@dataclass(frozen=True)
class ArgumentDefinition:
    """A declared argument on a field.

    Attributes:
        name: Argument name
        type: Argument type (a scalar or a list of scalars)
        default: Value used when the argument is omitted (None means no default)
    """

    name: str
    type: TypeRef
    default: Any = None

    def __post_init__(self) -> None:
        """Validate argument definition."""
        _check_name("Argument", self.name)

    def render(self) -> str:
        text = f"{self.name}: {self.type.render()}"
        if self.default is not None:
            text += f" = {_render_literal(self.default)}"
        return text

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        result: dict[str, Any] = {"name": self.name, "type": self.type.render()}
        if self.default is not None:
            result["default"] = self.default
        return result


def _render_literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_render_literal(v) for v in value) + "]"
    return str(value)


@dataclass(frozen=True)
class FieldDefinition:
    """Definition of a single field within an object type or extension.

    Attributes:
        name: Field name (unique within its owning type)
        type: Declared type of the field
        resolver: Function computing the value; None means read the
            same-named property of the parent value
        arguments: Declared arguments, in declaration order
        description: Human-readable description

    Invariants:
        - Argument names are unique within the field
    """

    name: str
    type: TypeRef
    resolver: Optional[Resolver] = None
    arguments: tuple[ArgumentDefinition, ...] = dataclass_field(default_factory=tuple)
    description: str = ""

    def __post_init__(self) -> None:
        """Validate field definition."""
        _check_name("Field", self.name)
        arg_names = [a.name for a in self.arguments]
        if len(arg_names) != len(set(arg_names)):
            raise ValueError(f"Duplicate argument name in field '{self.name}'")

    def get_argument(self, name: str) -> Optional[ArgumentDefinition]:
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None

    def render(self) -> str:
        """Render as one SDL field line (without indentation)."""
        args = ""
        if self.arguments:
            args = "(" + ", ".join(a.render() for a in self.arguments) + ")"
        return f"{self.name}{args}: {self.type.render()}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation (resolvers are not serialized)."""
        result: dict[str, Any] = {
            "name": self.name,
            "type": self.type.render(),
            "base_type": self.type.name,
            "non_null": self.type.non_null,
            "list": self.type.list,
            "list_element_non_null": self.type.list_element_non_null,
        }
        if self.arguments:
            result["arguments"] = [a.to_dict() for a in self.arguments]
        if self.description:
            result["description"] = self.description
        return result


def _check_unique_fields(owner: str, fields: tuple[FieldDefinition, ...]) -> None:
    names = [f.name for f in fields]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate field name in '{owner}'")


@dataclass(frozen=True)
class ObjectTypeDefinition:
    """Definition of a named object type.

    Attributes:
        name: Type name (unique across the registry)
        fields: Field definitions, in declaration order
        description: Human-readable description

    Example:
        >>> Post = ObjectTypeDefinition(
        ...     name="Post",
        ...     fields=(field("id", "Int"), field("title", "String")),
        ... )
    """

    name: str
    fields: tuple[FieldDefinition, ...] = dataclass_field(default_factory=tuple)
    description: str = ""

    def __post_init__(self) -> None:
        """Validate object type definition."""
        _check_name("Type", self.name)
        _check_unique_fields(self.name, self.fields)

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def get_field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def render(self) -> str:
        """Render as an SDL type block."""
        lines = [f"type {self.name} {{"]
        lines.extend(f"  {f.render()}" for f in self.fields)
        lines.append("}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        result: dict[str, Any] = {
            "name": self.name,
            "fields": [f.to_dict() for f in self.fields],
        }
        if self.description:
            result["description"] = self.description
        return result


@dataclass(frozen=True)
class ExtensionDefinition:
    """Additional fields contributed to the Query or Mutation root type.

    Attributes:
        root: Target root type name ("Query" or "Mutation")
        fields: Contributed field definitions
    """

    root: str
    fields: tuple[FieldDefinition, ...] = dataclass_field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate extension definition."""
        if self.root not in ROOT_TYPES:
            raise ValueError(f"Extensions must target one of {ROOT_TYPES}, got '{self.root}'")
        _check_unique_fields(f"extend {self.root}", self.fields)

    @property
    def name(self) -> str:
        return self.root


Definition = Union[ObjectTypeDefinition, ExtensionDefinition]


def argument(name: str, type: Union[str, TypeRef], default: Any = None) -> ArgumentDefinition:
    """Convenience function to create an ArgumentDefinition."""
    return ArgumentDefinition(name=name, type=_as_type_ref(type), default=default)


def field(
    name: str,
    type: Union[str, TypeRef],
    *,
    resolve: Optional[Resolver] = None,
    args: Optional[Mapping[str, Union[str, TypeRef, ArgumentDefinition]]] = None,
    description: str = "",
) -> FieldDefinition:
    """Convenience function to create a FieldDefinition.

    This is the preferred way to declare fields in fragments.

    Args:
        name: Field name
        type: SDL notation (``"[Post!]!"``) or a TypeRef
        resolve: Resolver called as ``resolve(parent, args, context)``
        args: Argument name to type notation, TypeRef or ArgumentDefinition
        description: Human-readable description

    Example:
        >>> field("createDraft", "Post!", args={"title": "String!", "body": "String!"})
    """
    arguments = []
    for arg_name, arg_type in (args or {}).items():
        if isinstance(arg_type, ArgumentDefinition):
            arguments.append(arg_type)
        else:
            arguments.append(argument(arg_name, arg_type))
    return FieldDefinition(
        name=name,
        type=_as_type_ref(type),
        resolver=resolve,
        arguments=tuple(arguments),
        description=description,
    )


def object_type(name: str, *fields: FieldDefinition, description: str = "") -> ObjectTypeDefinition:
    """Convenience function to create an ObjectTypeDefinition."""
    return ObjectTypeDefinition(name=name, fields=tuple(fields), description=description)


def extend_query(*fields: FieldDefinition) -> ExtensionDefinition:
    """Contribute fields to the Query root."""
    return ExtensionDefinition(root=QUERY, fields=tuple(fields))


def extend_mutation(*fields: FieldDefinition) -> ExtensionDefinition:
    """Contribute fields to the Mutation root."""
    return ExtensionDefinition(root=MUTATION, fields=tuple(fields))
