"""
fragql - Main entry point.

Startup order:
1. Load Settings from the environment
2. Configure logging
3. Register fragments and compile the schema (errors abort startup)
4. Serve the HTTP API with uvicorn

Usage:
    python -m fragql.main

Invariants:
    - The schema is compiled exactly once, before any request is served
    - The registry is frozen after compilation
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import json_log_formatter
import uvicorn

from .config import Settings
from .errors import RegistrationError, SchemaValidationError
from .schema import CompiledSchema, TypeRegistry, compile_schema, write_sdl

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
    """Configure root logging based on settings.

    Args:
        settings: Application settings
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.log_format == "json":
        formatter: logging.Formatter = json_log_formatter.JSONFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def build_schema(registry: TypeRegistry, sdl_path: Optional[str] = None) -> CompiledSchema:
    """Compile a registry's fragments and freeze the registry.

    Args:
        registry: Registry holding every fragment
        sdl_path: Optional file to write the SDL document to

    Returns:
        CompiledSchema

    Raises:
        RegistrationError: If fragments collide
        SchemaValidationError: If a field references an unknown type
    """
    try:
        schema = compile_schema(registry.entries())
    except (RegistrationError, SchemaValidationError) as e:
        logger.error(f"Schema compilation failed: {e.message}", extra={"error_code": e.code})
        raise

    if not registry.frozen:
        registry.freeze()

    if sdl_path:
        write_sdl(schema, sdl_path)

    return schema


def main() -> None:
    """Main entry point."""
    try:
        settings = Settings()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(settings)
    settings.log_config()

    from .api import create_app

    try:
        app = create_app(settings)
    except (RegistrationError, SchemaValidationError) as e:
        print(f"Schema error: {e}", file=sys.stderr)
        sys.exit(1)

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
