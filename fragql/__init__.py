"""
fragql - Declarative GraphQL schema composition and execution.

The schema is assembled from independently declared fragments:
- Object types (for example Post)
- Extensions that add fields to the Query and Mutation root types

Architecture:
    fragments ──▶ TypeRegistry ──▶ compile_schema ──▶ CompiledSchema (+ SDL)
                                                          │
    request ──▶ ContextFactory ──▶ RequestContext ──▶ Executor ──▶ {data, errors}
                                          │
                                          ▼
                                      PostStore

Invariants:
    - The schema is compiled once at startup and never changes afterwards
    - Each operation gets its own request context
    - Errors in one operation never affect another
"""

__version__ = "0.1.0"
