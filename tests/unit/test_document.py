"""
Unit tests for GraphQL document parsing.

Tests cover:
- Query and mutation operations
- Arguments, variables and aliases
- Rejection of unsupported documents
"""

import pytest

from fragql.errors import InvalidOperationError
from fragql.execution.document import parse_operation
from fragql.execution.operation import FieldSelection


class TestParseOperation:
    """Tests for parse_operation."""

    def test_shorthand_query(self):
        """Anonymous selection set is a query."""
        operation = parse_operation("{ drafts { id title } }")

        assert operation.operation_type == "Query"
        assert operation.field_name == "drafts"
        assert operation.selection == (FieldSelection(name="id"), FieldSelection(name="title"))
        assert operation.arguments == {}

    def test_mutation_with_arguments(self):
        """Literal arguments are converted to Python values."""
        operation = parse_operation(
            'mutation { createDraft(title: "Hello", body: "World") { id published } }'
        )

        assert operation.operation_type == "Mutation"
        assert operation.field_name == "createDraft"
        assert operation.arguments == {"title": "Hello", "body": "World"}
        assert [s.name for s in operation.selection] == ["id", "published"]

    def test_variables(self):
        """Variables are substituted."""
        operation = parse_operation(
            "query Post($id: Int!) { post(id: $id) { title } }",
            {"id": 7},
        )
        assert operation.arguments == {"id": 7}

    def test_missing_variable_is_omitted(self):
        """Unset variables leave the argument out."""
        operation = parse_operation("query Post($id: Int) { post(id: $id) { title } }")
        assert operation.arguments == {}

    def test_variable_defaults(self):
        """Declared defaults fill variables the caller did not supply."""
        source = "query Post($id: Int! = 1) { post(id: $id) { id } }"
        assert parse_operation(source).arguments == {"id": 1}
        assert parse_operation(source, {"id": 9}).arguments == {"id": 9}

    def test_aliases(self):
        operation = parse_operation("{ first: post(id: 1) { headline: title } }")
        assert operation.alias == "first"
        assert operation.selection[0] == FieldSelection(name="title", alias="headline")

    def test_nested_selection(self):
        operation = parse_operation("{ post(id: 1) { author { name } } }")
        author = operation.selection[0]
        assert author.name == "author"
        assert author.selections == (FieldSelection(name="name"),)

    def test_no_selection_set(self):
        """A root field without braces uses the default selection."""
        operation = parse_operation("{ drafts }")
        assert operation.selection == ()

    def test_syntax_error(self):
        with pytest.raises(InvalidOperationError, match="Syntax error"):
            parse_operation("{ drafts { id ")

    def test_multiple_root_fields_rejected(self):
        with pytest.raises(InvalidOperationError, match="exactly one root field"):
            parse_operation("{ drafts { id } posts { id } }")

    def test_multiple_operations_rejected(self):
        with pytest.raises(InvalidOperationError, match="exactly one operation"):
            parse_operation("query A { drafts { id } } query B { posts { id } }")

    def test_subscription_rejected(self):
        with pytest.raises(InvalidOperationError, match="subscription"):
            parse_operation("subscription { drafts { id } }")

    def test_fragments_rejected(self):
        with pytest.raises(InvalidOperationError):
            parse_operation("{ drafts { ...PostFields } } fragment PostFields on Post { id }")

    def test_directives_rejected(self):
        with pytest.raises(InvalidOperationError, match="Directives"):
            parse_operation("{ drafts { id @skip(if: true) } }")

    def test_error_code(self):
        with pytest.raises(InvalidOperationError) as exc_info:
            parse_operation("")
        assert exc_info.value.code == "INVALID_OPERATION"
