"""
Error types for fragql.

This module defines every exception raised by the schema and execution layers:
- FragQLError: Base exception
- RegistrationError: Conflicting definitions handed to the registry
- SchemaValidationError: A compiled schema references an unknown type
- OperationError: Base for per-operation failures (carries a response path)
- UnknownFieldError: A requested field does not exist on its type
- NonNullViolationError: A non-null field resolved to None
- ResolverError: A resolver raised or returned an unusable value

Invariants:
    - All errors inherit from FragQLError
    - Startup errors (registration, validation) are fatal
    - Operation errors never outlive the operation that raised them
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

PathSegment = Union[str, int]


class FragQLError(Exception):
    """Base exception for all fragql errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "FRAGQL_ERROR"
        self.details = details or {}


class RegistrationError(FragQLError):
    """Conflicting definition handed to the registry or compiler.

    Raised when:
    - Two concrete types share a name
    - A concrete type uses a root type name
    - Two extensions contribute the same field to one root type
    """

    def __init__(self, message: str, type_name: Optional[str] = None) -> None:
        super().__init__(
            message,
            code="REGISTRATION_ERROR",
            details={"type_name": type_name},
        )
        self.type_name = type_name


class RegistryFrozenError(RegistrationError):
    """Raised when attempting to modify a frozen registry."""


class SchemaValidationError(FragQLError):
    """A field references a type that is neither a scalar nor registered."""

    def __init__(
        self,
        message: str,
        type_name: str,
        field_name: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="SCHEMA_VALIDATION_ERROR",
            details={"type_name": type_name, "field_name": field_name},
        )
        self.type_name = type_name
        self.field_name = field_name


class OperationError(FragQLError):
    """Base class for errors scoped to a single operation.

    Attributes:
        path: Response path of the field that failed (empty for request-level errors)
    """

    def __init__(
        self,
        message: str,
        code: str,
        path: Sequence[PathSegment] = (),
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, details=details)
        self.path: Tuple[PathSegment, ...] = tuple(path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the response representation."""
        result: Dict[str, Any] = {"message": self.message, "code": self.code}
        if self.path:
            result["path"] = list(self.path)
        return result


class InvalidOperationError(OperationError):
    """The operation itself is malformed.

    Raised when:
    - The operation type is neither Query nor Mutation
    - A document cannot be parsed or holds more than one field
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, code="INVALID_OPERATION")


class ArgumentError(OperationError):
    """Arguments do not match the field's declared arguments."""

    def __init__(
        self,
        message: str,
        field_name: str,
        argument_name: Optional[str] = None,
        path: Sequence[PathSegment] = (),
    ) -> None:
        super().__init__(
            message,
            code="INVALID_ARGUMENT",
            path=path,
            details={"field_name": field_name, "argument_name": argument_name},
        )
        self.field_name = field_name
        self.argument_name = argument_name


class UnknownFieldError(OperationError):
    """Requested field does not exist on its type.

    Includes suggestions for similar field names.

    Attributes:
        field_name: The unknown field
        type_name: The type that was queried
        suggestions: Similar field names
    """

    def __init__(
        self,
        field_name: str,
        type_name: str,
        suggestions: Optional[List[str]] = None,
        path: Sequence[PathSegment] = (),
    ) -> None:
        suggestions = suggestions or []
        msg = f"Unknown field '{field_name}' on type '{type_name}'"
        if suggestions:
            msg += f". Did you mean: {', '.join(suggestions)}?"

        super().__init__(
            msg,
            code="UNKNOWN_FIELD",
            path=path,
            details={
                "field_name": field_name,
                "type_name": type_name,
                "suggestions": suggestions,
            },
        )
        self.field_name = field_name
        self.type_name = type_name
        self.suggestions = suggestions


class NonNullViolationError(OperationError):
    """A field declared non-null resolved to None."""

    def __init__(self, type_name: str, field_name: str, path: Sequence[PathSegment]) -> None:
        super().__init__(
            f"Cannot return null for non-null field '{type_name}.{field_name}'",
            code="NON_NULL_VIOLATION",
            path=path,
            details={"type_name": type_name, "field_name": field_name},
        )
        self.type_name = type_name
        self.field_name = field_name


class ResolverError(OperationError):
    """A resolver failed, or its value could not be coerced to the field type.

    Attributes:
        original: The exception raised inside the resolver, if any
    """

    def __init__(
        self,
        message: str,
        path: Sequence[PathSegment],
        original: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            message,
            code="RESOLVER_ERROR",
            path=path,
            details={"original": type(original).__name__ if original else None},
        )
        self.original = original
