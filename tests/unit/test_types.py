"""
Unit tests for schema definition types.

Tests cover:
- TypeRef notation parsing and rendering
- FieldDefinition / ObjectTypeDefinition validation
- ExtensionDefinition root checks
- SDL rendering of fields and arguments
"""

import pytest

from fragql.schema.types import (
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


class TestTypeRef:
    """Tests for TypeRef."""

    def test_parse_named(self):
        """Plain name is nullable and not a list."""
        ref = TypeRef.parse("Int")
        assert ref == TypeRef("Int")
        assert not ref.non_null
        assert not ref.list

    def test_parse_non_null(self):
        """Trailing bang marks the type non-null."""
        ref = TypeRef.parse("Post!")
        assert ref.name == "Post"
        assert ref.non_null is True

    def test_parse_list_of_non_null(self):
        """[Post!]! sets every wrapper."""
        ref = TypeRef.parse("[Post!]!")
        assert ref == TypeRef("Post", non_null=True, list=True, list_element_non_null=True)

    def test_parse_nullable_list(self):
        """[Post] is a nullable list of nullable elements."""
        ref = TypeRef.parse("[Post]")
        assert ref.list is True
        assert ref.non_null is False
        assert ref.list_element_non_null is False

    @pytest.mark.parametrize("notation", ["Int", "Post!", "[Post]", "[Post!]", "[Post]!", "[Post!]!"])
    def test_render_inverts_parse(self, notation):
        """render() gives back the parsed notation."""
        assert TypeRef.parse(notation).render() == notation

    def test_nested_list_raises(self):
        """Nested lists are rejected."""
        with pytest.raises(ValueError, match="Nested list"):
            TypeRef.parse("[[Post]]")

    def test_unbalanced_brackets_raise(self):
        """Unbalanced brackets are rejected."""
        with pytest.raises(ValueError, match="Unbalanced"):
            TypeRef.parse("[Post")

    def test_invalid_name_raises(self):
        """Names must be GraphQL identifiers."""
        with pytest.raises(ValueError, match="Invalid type name"):
            TypeRef.parse("Po-st")

    def test_element_requires_list(self):
        """element is only defined for list types."""
        assert TypeRef.parse("[Post!]").element == TypeRef("Post", non_null=True)
        with pytest.raises(ValueError, match="not a list"):
            TypeRef.parse("Post").element


class TestFieldDefinition:
    """Tests for FieldDefinition."""

    def test_field_helper(self):
        """field() parses notation and builds arguments in order."""
        f = field("createDraft", "Post!", args={"title": "String!", "body": "String!"})
        assert f.type == TypeRef("Post", non_null=True)
        assert [a.name for a in f.arguments] == ["title", "body"]
        assert f.resolver is None

    def test_render_without_arguments(self):
        """Field line is 'name: Type'."""
        assert field("drafts", "[Post!]!").render() == "drafts: [Post!]!"

    def test_render_with_arguments(self):
        """Arguments render in parentheses."""
        f = field("createDraft", "Post!", args={"title": "String!", "body": "String!"})
        assert f.render() == "createDraft(title: String!, body: String!): Post!"

    def test_render_argument_default(self):
        """Defaults render as GraphQL literals."""
        f = field(
            "posts",
            "[Post!]!",
            args={"published": argument("published", "Boolean", default=True)},
        )
        assert f.render() == "posts(published: Boolean = true): [Post!]!"

    def test_duplicate_argument_raises(self):
        """Argument names are unique within a field."""
        with pytest.raises(ValueError, match="Duplicate argument"):
            FieldDefinition(
                name="post",
                type=TypeRef("Post"),
                arguments=(argument("id", "Int"), argument("id", "ID")),
            )

    def test_empty_name_raises(self):
        """Field name cannot be empty."""
        with pytest.raises(ValueError, match="cannot be empty"):
            field("", "Int")

    def test_to_dict(self):
        """to_dict exposes wrappers and arguments, not resolvers."""
        f = field("post", "Post", resolve=lambda p, a, c: None, args={"id": "Int!"})
        data = f.to_dict()
        assert data["type"] == "Post"
        assert data["base_type"] == "Post"
        assert data["non_null"] is False
        assert data["arguments"] == [{"name": "id", "type": "Int!"}]
        assert "resolver" not in data


class TestObjectTypeDefinition:
    """Tests for ObjectTypeDefinition."""

    def test_object_type_helper(self):
        """object_type() keeps field order."""
        Post = object_type("Post", field("id", "Int"), field("title", "String"))
        assert Post.get_field_names() == ["id", "title"]
        assert Post.get_field("title").type == TypeRef("String")
        assert Post.get_field("missing") is None

    def test_duplicate_field_raises(self):
        """Field names are unique within a type."""
        with pytest.raises(ValueError, match="Duplicate field"):
            object_type("Post", field("id", "Int"), field("id", "String"))

    def test_render_block(self):
        """Type renders as an indented SDL block."""
        Post = object_type("Post", field("id", "Int"), field("title", "String"))
        assert Post.render() == "type Post {\n  id: Int\n  title: String\n}"

    def test_is_frozen(self):
        """Definitions are immutable."""
        Post = ObjectTypeDefinition(name="Post")
        with pytest.raises(AttributeError):
            Post.name = "Other"


class TestExtensionDefinition:
    """Tests for ExtensionDefinition."""

    def test_extend_query(self):
        """extend_query targets the Query root."""
        ext = extend_query(field("drafts", "[Post!]!"))
        assert ext.root == "Query"
        assert ext.name == "Query"

    def test_extend_mutation(self):
        """extend_mutation targets the Mutation root."""
        ext = extend_mutation(field("createDraft", "Post!"))
        assert ext.root == "Mutation"

    def test_non_root_target_raises(self):
        """Only Query and Mutation can be extended."""
        with pytest.raises(ValueError, match="Extensions must target"):
            ExtensionDefinition(root="Post", fields=(field("x", "Int"),))

    def test_duplicate_field_in_extension_raises(self):
        """One extension cannot repeat a field name."""
        with pytest.raises(ValueError, match="Duplicate field"):
            extend_query(field("drafts", "Int"), field("drafts", "Int"))
