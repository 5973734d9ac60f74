"""
Unit tests for the type registry.

Tests cover:
- Registration order
- Duplicate and reserved type names
- Colliding root fields
- Registry freezing
"""

import pytest

from fragql.errors import RegistrationError, RegistryFrozenError
from fragql.schema.registry import TypeRegistry
from fragql.schema.types import extend_mutation, extend_query, field, object_type

Post = object_type("Post", field("id", "Int"), field("title", "String"))


class TestTypeRegistry:
    """Tests for TypeRegistry."""

    def test_register_keeps_declaration_order(self):
        """entries() returns fragments in registration order."""
        registry = TypeRegistry()
        drafts = extend_query(field("drafts", "[Post!]!"))
        registry.register(drafts)
        registry.register(Post)

        assert registry.entries() == (drafts, Post)
        assert len(registry) == 2
        assert list(registry) == [drafts, Post]

    def test_forward_reference_allowed(self):
        """Extensions may reference types registered later."""
        registry = TypeRegistry()
        registry.register(extend_query(field("drafts", "[Post!]!")))
        registry.register(Post)
        assert len(registry) == 2

    def test_duplicate_type_name_raises(self):
        """Two object types cannot share a name."""
        registry = TypeRegistry()
        registry.register(Post)

        with pytest.raises(RegistrationError, match="'Post' already registered") as exc_info:
            registry.register(object_type("Post", field("id", "Int")))
        assert exc_info.value.type_name == "Post"
        assert exc_info.value.code == "REGISTRATION_ERROR"

    def test_reserved_root_name_raises(self):
        """Query and Mutation cannot be declared as concrete types."""
        registry = TypeRegistry()
        with pytest.raises(RegistrationError, match="reserved"):
            registry.register(object_type("Query", field("drafts", "Int")))

    def test_colliding_extension_field_raises(self):
        """Two extensions cannot contribute the same root field."""
        registry = TypeRegistry()
        registry.register(extend_query(field("drafts", "[Post!]!")))

        with pytest.raises(RegistrationError, match="Query.drafts"):
            registry.register(extend_query(field("posts", "[Post!]!"), field("drafts", "Int")))

        # Rejected extension contributes nothing
        assert len(registry) == 1
        registry.register(extend_query(field("posts", "[Post!]!")))
        assert len(registry) == 2

    def test_same_field_name_on_different_roots(self):
        """Query and Mutation namespaces are separate."""
        registry = TypeRegistry()
        registry.register(extend_query(field("post", "Post")))
        registry.register(extend_mutation(field("post", "Post")))
        assert len(registry) == 2

    def test_register_rejects_other_objects(self):
        """Only definitions can be registered."""
        registry = TypeRegistry()
        with pytest.raises(TypeError, match="Expected ObjectTypeDefinition"):
            registry.register("Post")

    def test_register_all(self):
        """register_all registers in order."""
        registry = TypeRegistry()
        registry.register_all([Post, extend_query(field("drafts", "[Post!]!"))])
        assert [e.name for e in registry.entries()] == ["Post", "Query"]

    def test_freeze_registry(self):
        """Frozen registry rejects registration."""
        registry = TypeRegistry()
        registry.register(Post)
        registry.freeze()

        assert registry.frozen is True
        with pytest.raises(RegistryFrozenError, match="frozen"):
            registry.register(extend_query(field("drafts", "[Post!]!")))

    def test_freeze_twice_raises(self):
        """Freeze is irreversible and happens once."""
        registry = TypeRegistry()
        registry.freeze()
        with pytest.raises(RegistryFrozenError, match="already frozen"):
            registry.freeze()

    def test_entries_snapshot_is_immutable(self):
        """Later registrations do not change an earlier snapshot."""
        registry = TypeRegistry()
        registry.register(Post)
        snapshot = registry.entries()
        registry.register(extend_query(field("drafts", "[Post!]!")))
        assert snapshot == (Post,)
