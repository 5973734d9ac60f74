"""
Configuration for fragql.

All settings come from environment variables with the FRAGQL_ prefix,
for example FRAGQL_STORE_BACKEND=sqlite or FRAGQL_PORT=9000.
"""

import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

STORE_BACKENDS = ("memory", "sqlite")
LOG_FORMATS = ("json", "text")


class Settings(BaseSettings):
    """Service configuration."""

    # Record store
    store_backend: str = Field(default="memory", description="memory or sqlite")
    sqlite_path: str = Field(default="fragql.db")

    # Write the compiled SDL here at startup (unset = don't write)
    sdl_path: Optional[str] = Field(default=None)

    # HTTP
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json", description="json or text")

    # CORS
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
    )

    model_config = {"env_prefix": "FRAGQL_"}

    @field_validator("store_backend")
    @classmethod
    def validate_backend(cls, value: str) -> str:
        value = value.lower()
        if value not in STORE_BACKENDS:
            raise ValueError(f"store_backend must be one of {STORE_BACKENDS}, got '{value}'")
        return value

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {LOG_FORMATS}, got '{value}'")
        return value

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {value}")
        return value

    def log_config(self) -> None:
        """Log the configuration (no secrets are held here)."""
        logger.info(
            "fragql configuration",
            extra={
                "store_backend": self.store_backend,
                "sqlite_path": self.sqlite_path if self.store_backend == "sqlite" else None,
                "sdl_path": self.sdl_path,
                "host": self.host,
                "port": self.port,
                "log_level": self.log_level,
                "log_format": self.log_format,
            },
        )
