"""
Schema CLI tool for fragql.

Commands:
- sdl: Print the SDL document of the compiled schema
- shape: Print the JSON shape of the compiled schema
- check: Compare the SDL with a committed baseline

Usage:
    fragql-schema sdl > schema.graphql
    fragql-schema check --baseline schema.graphql
    fragql-schema sdl --fragments my_fragments.yaml --resolvers myapp.resolvers

Invariants:
    - Drift from the baseline causes a non-zero exit code
    - SDL output is deterministic for a given set of fragments

How to change safely:
    - Add new commands, don't modify existing ones
    - Keep output format stable for CI parsing
"""

from __future__ import annotations

import argparse
import difflib
import importlib
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from ..errors import FragQLError
from ..schema import CompiledSchema, TypeRegistry, compile_schema, load_fragments_yaml

logger = logging.getLogger(__name__)


class SchemaCLI:
    """CLI tool for schema inspection.

    Example:
        >>> cli = SchemaCLI()
        >>> print(cli.sdl(schema))
        >>> matches, diff = cli.check(schema, "schema.graphql")
    """

    def sdl(self, schema: CompiledSchema) -> str:
        return schema.sdl

    def shape(self, schema: CompiledSchema) -> str:
        return schema.to_json()

    def check(self, schema: CompiledSchema, baseline_path: str) -> tuple[bool, list[str]]:
        """Compare the schema's SDL with a baseline file.

        Args:
            schema: Compiled schema
            baseline_path: Path to the committed SDL document

        Returns:
            Tuple of (matches, unified diff lines)
        """
        baseline = Path(baseline_path).read_text(encoding="utf-8")
        if baseline == schema.sdl:
            return True, []

        diff = difflib.unified_diff(
            baseline.splitlines(keepends=True),
            schema.sdl.splitlines(keepends=True),
            fromfile=str(baseline_path),
            tofile="compiled",
        )
        return False, list(diff)


def _load_registry(
    module_path: Optional[str] = None,
    fragments_path: Optional[str] = None,
    resolvers_module: Optional[str] = None,
) -> TypeRegistry:
    """Load a fragment registry from a module or a YAML fragment file.

    Args:
        module_path: Python module with ALL_FRAGMENTS or build_registry()
        fragments_path: YAML fragment file
        resolvers_module: Module with a RESOLVERS mapping for the YAML file

    Returns:
        TypeRegistry instance
    """
    if fragments_path:
        resolvers = {}
        if resolvers_module:
            resolvers = getattr(importlib.import_module(resolvers_module), "RESOLVERS", {})
        registry = TypeRegistry()
        registry.register_all(
            load_fragments_yaml(Path(fragments_path).read_text(encoding="utf-8"), resolvers)
        )
        return registry

    module = importlib.import_module(module_path or "fragql.blog")
    if hasattr(module, "build_registry"):
        return module.build_registry()
    if hasattr(module, "ALL_FRAGMENTS"):
        registry = TypeRegistry()
        registry.register_all(module.ALL_FRAGMENTS)
        return registry
    raise ValueError(f"Module {module_path} has no 'build_registry()' or 'ALL_FRAGMENTS'")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="fragql schema tool")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_source_arguments(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--module", help="Python module holding the fragments (default: fragql.blog)")
        sub.add_argument("--fragments", help="YAML fragment file")
        sub.add_argument("--resolvers", help="Module with a RESOLVERS mapping for --fragments")

    sdl_parser = subparsers.add_parser("sdl", help="Print the SDL document")
    add_source_arguments(sdl_parser)
    sdl_parser.add_argument("--output", "-o", help="Output file (default: stdout)")

    shape_parser = subparsers.add_parser("shape", help="Print the JSON shape")
    add_source_arguments(shape_parser)

    check_parser = subparsers.add_parser("check", help="Compare SDL with a baseline")
    add_source_arguments(check_parser)
    check_parser.add_argument("--baseline", "-b", required=True, help="Path to baseline SDL")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for the schema tool.

    Returns:
        Process exit code
    """
    args = _build_parser().parse_args(argv)
    cli = SchemaCLI()

    try:
        registry = _load_registry(args.module, args.fragments, args.resolvers)
        schema = compile_schema(registry.entries())
    except FragQLError as e:
        print(f"Schema error: {e}", file=sys.stderr)
        return 1

    if args.command == "sdl":
        output = cli.sdl(schema)
        if args.output:
            Path(args.output).write_text(output, encoding="utf-8")
            print(f"Schema written to {args.output}", file=sys.stderr)
        else:
            sys.stdout.write(output)

    elif args.command == "shape":
        print(cli.shape(schema))

    elif args.command == "check":
        matches, diff = cli.check(schema, args.baseline)
        if matches:
            print("Schema matches baseline")
            return 0
        print("Schema differs from baseline:")
        sys.stdout.writelines(diff)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
