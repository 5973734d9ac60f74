"""
GraphQL document parsing.

Turns a query string such as::

    mutation { createDraft(title: "A", body: "B") { id published } }

into an Operation for the executor. Parsing uses graphql-core; only the
subset the executor supports is accepted: a single query or mutation
selecting exactly one root field, without fragments or directives.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from graphql import GraphQLSyntaxError, parse
from graphql.language import (
    FieldNode,
    OperationDefinitionNode,
    OperationType,
    SelectionSetNode,
)
from graphql.pyutils import Undefined
from graphql.utilities import value_from_ast_untyped

from ..errors import InvalidOperationError
from ..schema.types import MUTATION, QUERY
from .operation import FieldSelection, Operation

logger = logging.getLogger(__name__)

_OPERATION_TYPES = {
    OperationType.QUERY: QUERY,
    OperationType.MUTATION: MUTATION,
}


def _arguments(node: FieldNode, variables: Mapping[str, Any]) -> Dict[str, Any]:
    arguments: Dict[str, Any] = {}
    for arg in node.arguments or ():
        value = value_from_ast_untyped(arg.value, variables)
        if value is not Undefined:
            arguments[arg.name.value] = value
    return arguments


def _fields(selection_set: Optional[SelectionSetNode], variables: Mapping[str, Any]) -> tuple[FieldSelection, ...]:
    if selection_set is None:
        return ()
    fields = []
    for node in selection_set.selections:
        if not isinstance(node, FieldNode):
            raise InvalidOperationError("Fragments are not supported")
        fields.append(_field(node, variables))
    return tuple(fields)


def _field(node: FieldNode, variables: Mapping[str, Any]) -> FieldSelection:
    if node.directives:
        raise InvalidOperationError("Directives are not supported")
    return FieldSelection(
        name=node.name.value,
        arguments=_arguments(node, variables),
        selections=_fields(node.selection_set, variables),
        alias=node.alias.value if node.alias else None,
    )


def parse_operation(source: str, variables: Optional[Mapping[str, Any]] = None) -> Operation:
    """Parse a GraphQL document holding one operation with one root field.

    Args:
        source: GraphQL document text
        variables: Values for variables referenced in the document

    Returns:
        Operation

    Raises:
        InvalidOperationError: On syntax errors or unsupported constructs
    """
    variables = variables or {}
    try:
        document = parse(source)
    except GraphQLSyntaxError as e:
        raise InvalidOperationError(f"Syntax error: {e.message}") from e

    operations = []
    for definition in document.definitions:
        if not isinstance(definition, OperationDefinitionNode):
            raise InvalidOperationError("Only operation definitions are supported")
        operations.append(definition)
    if len(operations) != 1:
        raise InvalidOperationError(
            f"Document must contain exactly one operation, found {len(operations)}"
        )

    operation = operations[0]
    operation_type = _OPERATION_TYPES.get(operation.operation)
    if operation_type is None:
        raise InvalidOperationError(
            f"Unsupported operation type '{operation.operation.value}'"
        )

    variables = dict(variables)
    for var_def in operation.variable_definitions or ():
        name = var_def.variable.name.value
        if name not in variables and var_def.default_value is not None:
            variables[name] = value_from_ast_untyped(var_def.default_value)

    roots = _fields(operation.selection_set, variables)
    if len(roots) != 1:
        raise InvalidOperationError(
            f"Operation must select exactly one root field, found {len(roots)}"
        )
    root = roots[0]

    logger.debug(f"Parsed {operation_type}.{root.name}")
    return Operation(
        operation_type=operation_type,
        field_name=root.name,
        arguments=root.arguments,
        selection=root.selections,
        alias=root.alias,
    )
