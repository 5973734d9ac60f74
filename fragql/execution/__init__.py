"""
Execution module for fragql.

- RequestContext / ContextFactory: per-operation resolver context
- execute / Executor: resolve a root field against a compiled schema
- parse_operation: turn a GraphQL document into an Operation

Invariants:
    - Every operation gets its own RequestContext
    - Operation errors stay inside the operation's ExecutionResult
"""

from .context import ContextFactory, RequestContext
from .document import parse_operation
from .executor import ExecutionResult, Executor, execute
from .operation import FieldSelection, Operation, normalize_selection

__all__ = [
    "RequestContext",
    "ContextFactory",
    "ExecutionResult",
    "Executor",
    "execute",
    "FieldSelection",
    "Operation",
    "normalize_selection",
    "parse_operation",
]
