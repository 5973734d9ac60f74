"""
Schema module for fragql.

This module provides the declarative type system, including:
- Definitions (TypeRef, FieldDefinition, ObjectTypeDefinition, ExtensionDefinition)
- Type registry collecting fragments in declaration order
- Schema compiler producing the CompiledSchema and its SDL document

Invariants:
    - Definitions are immutable once created
    - All fragments must be registered before compiling
    - The compiled schema is never modified after compile time

How to change safely:
    - Add new fields to Query/Mutation through new extensions
    - Check SDL drift with the schema CLI before deploying
"""

from .compiler import CompiledSchema, compile_schema, default_resolver, render_sdl, write_sdl
from .fragments import load_fragments_yaml, parse_fragments
from .registry import TypeRegistry
from .scalars import BUILTIN_SCALARS, is_scalar
from .types import (
    MUTATION,
    QUERY,
    ROOT_TYPES,
    ArgumentDefinition,
    ExtensionDefinition,
    FieldDefinition,
    ObjectTypeDefinition,
    TypeRef,
    argument,
    extend_mutation,
    extend_query,
    field,
    object_type,
)

__all__ = [
    # Types
    "TypeRef",
    "ArgumentDefinition",
    "FieldDefinition",
    "ObjectTypeDefinition",
    "ExtensionDefinition",
    "QUERY",
    "MUTATION",
    "ROOT_TYPES",
    "argument",
    "field",
    "object_type",
    "extend_query",
    "extend_mutation",
    # Scalars
    "BUILTIN_SCALARS",
    "is_scalar",
    # Registry
    "TypeRegistry",
    # Compiler
    "CompiledSchema",
    "compile_schema",
    "default_resolver",
    "render_sdl",
    "write_sdl",
    # Fragments
    "parse_fragments",
    "load_fragments_yaml",
]
