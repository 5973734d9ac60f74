"""
Query executor for fragql.

Resolves one root field of a CompiledSchema against a RequestContext:

1. Plan: the root field and the whole selection tree are checked against the
   schema and arguments are coerced. Nothing runs if planning fails, so an
   invalid request never reaches the store.
2. Execute: resolvers run parent-before-child, siblings in selection order.
   Resolvers are called as ``resolver(parent, args, context)``; awaitable
   results are awaited, so slow resolvers suspend only their own operation.
3. Complete: values are checked against their declared types. Lists are
   completed element by element; scalars are serialized; object values are
   resolved against their sub-selection.

Null propagation:
    A NonNullViolationError or ResolverError at a field is absorbed by the
    nearest nullable field on the path (which becomes None and records the
    error). If the root field is non-null and fails, data is None.

Invariants:
    - The compiled schema is only read, never written
    - Each call has its own error list and context; operations are independent
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from difflib import get_close_matches
from typing import Any, Dict, List, Mapping, Optional, Sequence

from graphql import GraphQLError

from ..errors import (
    ArgumentError,
    InvalidOperationError,
    NonNullViolationError,
    OperationError,
    PathSegment,
    ResolverError,
    UnknownFieldError,
)
from ..schema.compiler import CompiledSchema, default_resolver
from ..schema.scalars import BUILTIN_SCALARS
from ..schema.types import ROOT_TYPES, FieldDefinition, TypeRef
from .context import ContextFactory, RequestContext
from .document import parse_operation
from .operation import FieldSelection, Operation, SelectionItem, normalize_selection

logger = logging.getLogger(__name__)

# Raised by scalar coercion. graphql-core reports most mismatches as
# GraphQLError, but float() on a huge int can still overflow.
_COERCION_ERRORS = (GraphQLError, ValueError, TypeError, OverflowError)


@dataclass
class ExecutionResult:
    """Outcome of one operation.

    Attributes:
        data: Mapping of the root response key to its value, or None when
            the operation failed as a whole
        errors: Errors in the order they were recorded
    """

    data: Optional[Dict[str, Any]]
    errors: List[OperationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the response representation."""
        result: Dict[str, Any] = {"data": self.data}
        if self.errors:
            result["errors"] = [e.to_dict() for e in self.errors]
        return result


@dataclass(frozen=True)
class _PlannedField:
    key: str
    definition: FieldDefinition
    arguments: Mapping[str, Any]
    children: tuple[_PlannedField, ...]


def _coercion_message(error: Exception) -> str:
    if isinstance(error, GraphQLError):
        return error.message
    return str(error) or type(error).__name__


def _coerce_input(type_ref: TypeRef, value: Any) -> Any:
    scalar = BUILTIN_SCALARS[type_ref.name]
    if not type_ref.list:
        return scalar.parse_value(value)
    if not isinstance(value, (list, tuple)):
        value = [value]
    coerced = []
    for item in value:
        if item is None:
            if type_ref.list_element_non_null:
                raise ValueError("list element cannot be null")
            coerced.append(None)
        else:
            coerced.append(scalar.parse_value(item))
    return coerced


class _Planner:
    """Validates a selection tree against the schema."""

    def __init__(self, schema: CompiledSchema) -> None:
        self.schema = schema

    def plan(
        self,
        type_name: str,
        selection: FieldSelection,
        path: Sequence[PathSegment],
    ) -> _PlannedField:
        object_type = self.schema.get_type(type_name)
        definition = object_type.get_field(selection.name) if object_type else None
        if definition is None:
            names = object_type.get_field_names() if object_type else []
            raise UnknownFieldError(
                selection.name,
                type_name,
                suggestions=get_close_matches(selection.name, names, n=3),
                path=path,
            )

        arguments = self._coerce_arguments(type_name, definition, selection.arguments, path)
        base = definition.type.name

        if not self.schema.is_object_type(base):
            if selection.selections:
                raise UnknownFieldError(selection.selections[0].name, base, path=path)
            return _PlannedField(selection.response_key, definition, arguments, ())

        sub_selections = selection.selections or self._default_selection(base)
        children = tuple(
            self.plan(base, sub, list(path) + [sub.response_key]) for sub in sub_selections
        )
        return _PlannedField(selection.response_key, definition, arguments, children)

    def _default_selection(self, type_name: str) -> tuple[FieldSelection, ...]:
        object_type = self.schema.types[type_name]
        return tuple(
            FieldSelection(name=f.name)
            for f in object_type.fields
            if not self.schema.is_object_type(f.type.name) and not f.arguments
        )

    def _coerce_arguments(
        self,
        type_name: str,
        definition: FieldDefinition,
        given: Mapping[str, Any],
        path: Sequence[PathSegment],
    ) -> Dict[str, Any]:
        qualified = f"{type_name}.{definition.name}"
        unknown = sorted(set(given) - {a.name for a in definition.arguments})
        if unknown:
            raise ArgumentError(
                f"Unknown argument '{unknown[0]}' on field '{qualified}'",
                field_name=qualified,
                argument_name=unknown[0],
                path=path,
            )

        coerced: Dict[str, Any] = {}
        for arg in definition.arguments:
            if arg.name in given:
                value = given[arg.name]
            elif arg.default is not None:
                value = arg.default
            elif arg.type.non_null:
                raise ArgumentError(
                    f"Missing required argument '{arg.name}' of type "
                    f"'{arg.type.render()}' on field '{qualified}'",
                    field_name=qualified,
                    argument_name=arg.name,
                    path=path,
                )
            else:
                continue

            if value is None:
                if arg.type.non_null:
                    raise ArgumentError(
                        f"Argument '{arg.name}' on field '{qualified}' cannot be null",
                        field_name=qualified,
                        argument_name=arg.name,
                        path=path,
                    )
                coerced[arg.name] = None
                continue

            try:
                coerced[arg.name] = _coerce_input(arg.type, value)
            except _COERCION_ERRORS as e:
                raise ArgumentError(
                    f"Invalid value for argument '{arg.name}' on field '{qualified}': {_coercion_message(e)}",
                    field_name=qualified,
                    argument_name=arg.name,
                    path=path,
                ) from e
        return coerced


class _OperationRun:
    """State of one executing operation."""

    def __init__(self, schema: CompiledSchema, context: RequestContext) -> None:
        self.schema = schema
        self.context = context
        self.errors: List[OperationError] = []

    async def execute_field(
        self,
        type_name: str,
        parent: Any,
        planned: _PlannedField,
        path: List[PathSegment],
    ) -> Any:
        definition = planned.definition
        try:
            value = await self._resolve(type_name, parent, planned, path)
            return await self._complete(type_name, definition.type, value, planned, path)
        except (NonNullViolationError, ResolverError) as exc:
            if definition.type.non_null:
                raise
            self.errors.append(exc)
            return None

    async def _resolve(
        self,
        type_name: str,
        parent: Any,
        planned: _PlannedField,
        path: List[PathSegment],
    ) -> Any:
        field_name = planned.definition.name
        resolver = self.schema.resolver_for(type_name, field_name)
        try:
            if resolver is None:
                value = default_resolver(parent, planned.arguments, self.context, field_name=field_name)
            else:
                value = resolver(parent, planned.arguments, self.context)
            if inspect.isawaitable(value):
                value = await value
        except Exception as e:
            logger.warning(
                f"Resolver for '{type_name}.{field_name}' failed: {e}",
                extra={"request_id": self.context.request_id, "path": list(path)},
                exc_info=True,
            )
            raise ResolverError(str(e) or type(e).__name__, path, original=e) from e
        return value

    async def _complete(
        self,
        type_name: str,
        type_ref: TypeRef,
        value: Any,
        planned: _PlannedField,
        path: List[PathSegment],
    ) -> Any:
        if value is None:
            if type_ref.non_null:
                raise NonNullViolationError(type_name, planned.definition.name, path)
            return None

        if type_ref.list:
            if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
                raise ResolverError(
                    f"Expected a list for field '{type_name}.{planned.definition.name}', "
                    f"got {type(value).__name__}",
                    path,
                )
            element = type_ref.element
            items = []
            for index, item in enumerate(value):
                item_path = path + [index]
                try:
                    items.append(await self._complete(type_name, element, item, planned, item_path))
                except (NonNullViolationError, ResolverError) as exc:
                    if element.non_null:
                        raise
                    self.errors.append(exc)
                    items.append(None)
            return items

        scalar = BUILTIN_SCALARS.get(type_ref.name)
        if scalar is not None:
            try:
                return scalar.serialize(value)
            except _COERCION_ERRORS as e:
                raise ResolverError(_coercion_message(e), path, original=e) from e

        if isinstance(value, (str, bytes, int, float, bool, list, tuple, set, frozenset)):
            raise ResolverError(
                f"Expected an object of type '{type_ref.name}' for field "
                f"'{type_name}.{planned.definition.name}', got {type(value).__name__}",
                path,
            )
        result: Dict[str, Any] = {}
        for child in planned.children:
            result[child.key] = await self.execute_field(
                type_ref.name, value, child, path + [child.key]
            )
        return result


async def execute(
    schema: CompiledSchema,
    context: RequestContext,
    operation_type: str,
    field_name: str,
    arguments: Optional[Mapping[str, Any]] = None,
    selection: Optional[Iterable[SelectionItem]] = None,
    *,
    alias: Optional[str] = None,
) -> ExecutionResult:
    """Execute one root field of a query or mutation.

    Args:
        schema: Compiled schema
        context: Request context for this operation only
        operation_type: "Query" or "Mutation"
        field_name: Root field to resolve
        arguments: Root field arguments
        selection: Sub-selection (field names, FieldSelection or dicts)
        alias: Response key for the root field

    Returns:
        ExecutionResult; request-level failures (invalid operation, unknown
        field, bad arguments) give data=None and a single error
    """
    logger.debug(
        f"Executing {operation_type}.{field_name}",
        extra={"request_id": context.request_id},
    )
    try:
        if operation_type not in ROOT_TYPES:
            raise InvalidOperationError(
                f"Unknown operation type '{operation_type}'; expected one of {ROOT_TYPES}"
            )
        root = FieldSelection(
            name=field_name,
            arguments=dict(arguments or {}),
            selections=normalize_selection(selection),
            alias=alias,
        )
        planned = _Planner(schema).plan(operation_type, root, [root.response_key])
    except OperationError as exc:
        logger.debug(
            f"Rejected {operation_type}.{field_name}: {exc.message}",
            extra={"request_id": context.request_id, "error_code": exc.code},
        )
        return ExecutionResult(data=None, errors=[exc])

    run = _OperationRun(schema, context)
    try:
        value = await run.execute_field(operation_type, None, planned, [planned.key])
    except (NonNullViolationError, ResolverError) as exc:
        run.errors.append(exc)
        return ExecutionResult(data=None, errors=run.errors)
    return ExecutionResult(data={planned.key: value}, errors=run.errors)


class Executor:
    """Operation entry point bundling a schema with a context factory.

    Each call builds a fresh RequestContext.

    Example:
        >>> executor = Executor(schema, ContextFactory(InMemoryPostStore()))
        >>> result = await executor.execute("Query", "drafts", selection=["id", "title"])
        >>> result.data
        {'drafts': []}
    """

    def __init__(self, schema: CompiledSchema, context_factory: ContextFactory) -> None:
        self.schema = schema
        self.context_factory = context_factory

    async def execute(
        self,
        operation_type: str,
        field_name: str,
        arguments: Optional[Mapping[str, Any]] = None,
        selection: Optional[Iterable[SelectionItem]] = None,
        *,
        alias: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> ExecutionResult:
        context = self.context_factory(request_id)
        return await execute(
            self.schema,
            context,
            operation_type,
            field_name,
            arguments,
            selection,
            alias=alias,
        )

    async def execute_operation(
        self,
        operation: Operation,
        request_id: Optional[str] = None,
    ) -> ExecutionResult:
        return await self.execute(
            operation.operation_type,
            operation.field_name,
            operation.arguments,
            operation.selection,
            alias=operation.alias,
            request_id=request_id,
        )

    async def execute_document(
        self,
        source: str,
        variables: Optional[Mapping[str, Any]] = None,
        request_id: Optional[str] = None,
    ) -> ExecutionResult:
        """Parse a GraphQL document and execute its single root field."""
        try:
            operation = parse_operation(source, variables)
        except InvalidOperationError as exc:
            return ExecutionResult(data=None, errors=[exc])
        return await self.execute_operation(operation, request_id=request_id)
