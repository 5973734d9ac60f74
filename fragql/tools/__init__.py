"""
CLI tools for fragql.

- schema: print the SDL or JSON shape, check SDL drift against a baseline

Invariants:
    - Tools work offline (no running server required)
    - Output is deterministic, so it can be committed and diffed in CI
"""

from .schema_cli import SchemaCLI

__all__ = ["SchemaCLI"]
