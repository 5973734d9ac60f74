"""
Unit tests for configuration and startup helpers.

Tests cover:
- Environment variable loading
- Setting validation
- Store backend selection
- Logging setup
- Schema bootstrap
"""

import logging

import json_log_formatter
import pytest

from fragql.blog import build_registry
from fragql.config import Settings
from fragql.errors import SchemaValidationError
from fragql.main import build_schema, setup_logging
from fragql.schema import TypeRegistry, extend_query, field
from fragql.store import InMemoryPostStore, SqlitePostStore, create_store


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        for name in ("FRAGQL_STORE_BACKEND", "FRAGQL_PORT", "FRAGQL_SDL_PATH", "FRAGQL_LOG_FORMAT"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings()
        assert settings.store_backend == "memory"
        assert settings.port == 8080
        assert settings.sdl_path is None
        assert settings.log_format == "json"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FRAGQL_STORE_BACKEND", "SQLite")
        monkeypatch.setenv("FRAGQL_SQLITE_PATH", "/tmp/posts.db")
        monkeypatch.setenv("FRAGQL_PORT", "9000")
        settings = Settings()
        assert settings.store_backend == "sqlite"
        assert settings.sqlite_path == "/tmp/posts.db"
        assert settings.port == 9000

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError, match="store_backend"):
            Settings(store_backend="postgres")

    def test_unknown_log_format_rejected(self):
        with pytest.raises(ValueError, match="log_format"):
            Settings(log_format="xml")

    def test_port_range(self):
        with pytest.raises(ValueError, match="port"):
            Settings(port=0)


class TestCreateStore:
    """Tests for create_store."""

    def test_memory_backend(self):
        assert isinstance(create_store(Settings(store_backend="memory")), InMemoryPostStore)

    def test_sqlite_backend(self, tmp_path):
        settings = Settings(store_backend="sqlite", sqlite_path=str(tmp_path / "posts.db"))
        store = create_store(settings)
        assert isinstance(store, SqlitePostStore)
        assert store.path == tmp_path / "posts.db"


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers = handlers
        root.setLevel(level)

    def test_json_format(self):
        setup_logging(Settings(log_format="json", log_level="debug"))
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, json_log_formatter.JSONFormatter)

    def test_text_format(self):
        setup_logging(Settings(log_format="text", log_level="WARNING"))
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, json_log_formatter.JSONFormatter)


class TestBuildSchema:
    """Tests for build_schema."""

    def test_compiles_and_freezes(self):
        registry = build_registry()
        schema = build_schema(registry)
        assert registry.frozen
        assert "createDraft(title: String!, body: String!): Post!" in schema.sdl

    def test_writes_sdl(self, tmp_path):
        target = tmp_path / "schema.graphql"
        schema = build_schema(build_registry(), str(target))
        assert target.read_text(encoding="utf-8") == schema.sdl

    def test_invalid_schema_raises(self):
        """Validation errors abort startup and leave the registry open."""
        registry = TypeRegistry()
        registry.register(extend_query(field("drafts", "[Post!]!")))
        with pytest.raises(SchemaValidationError):
            build_schema(registry)
        assert not registry.frozen
