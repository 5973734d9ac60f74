"""
Operation and selection types submitted to the executor.

A selection may be given as plain field names, FieldSelection objects, or
JSON-like dicts (``{"name": ..., "alias": ..., "arguments": ..., "selection": [...]}``),
which is what the HTTP layer receives.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Union

from ..errors import InvalidOperationError


@dataclass(frozen=True)
class FieldSelection:
    """One requested field and its sub-selection.

    Attributes:
        name: Field name on the parent type
        arguments: Argument values
        selections: Requested sub-fields (empty = default selection)
        alias: Response key to use instead of the field name
    """

    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)
    selections: tuple[FieldSelection, ...] = ()
    alias: Optional[str] = None

    @property
    def response_key(self) -> str:
        return self.alias or self.name


SelectionItem = Union[str, FieldSelection, Mapping[str, Any]]


def to_field_selection(item: SelectionItem) -> FieldSelection:
    """Normalize one selection item."""
    if isinstance(item, FieldSelection):
        return item
    if isinstance(item, str):
        return FieldSelection(name=item)
    if isinstance(item, Mapping):
        name = item.get("name")
        if not name:
            raise InvalidOperationError(f"Selection entry without a name: {dict(item)!r}")
        return FieldSelection(
            name=name,
            arguments=dict(item.get("arguments") or {}),
            selections=normalize_selection(item.get("selection") or ()),
            alias=item.get("alias"),
        )
    raise InvalidOperationError(f"Invalid selection entry: {item!r}")


def normalize_selection(items: Optional[Iterable[SelectionItem]]) -> tuple[FieldSelection, ...]:
    if isinstance(items, (str, bytes)):
        raise InvalidOperationError(
            f"Selection must be a list of fields, got a string: {items!r}"
        )
    if not items:
        return ()
    return tuple(to_field_selection(item) for item in items)


@dataclass(frozen=True)
class Operation:
    """A query or mutation selecting one root field.

    Attributes:
        operation_type: "Query" or "Mutation"
        field_name: Root field to resolve
        arguments: Root field arguments
        selection: Sub-selection of the root field
        alias: Response key for the root field
    """

    operation_type: str
    field_name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)
    selection: tuple[FieldSelection, ...] = ()
    alias: Optional[str] = None
