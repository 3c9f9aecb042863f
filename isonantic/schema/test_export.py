"""Unit tests for JSON Schema export."""

import pytest

from isonantic.errors import SchemaDefinitionError

from .export import JSON_SCHEMA_DIALECT, to_json_schema
from .primitives import BooleanSchema, NullSchema, NumberSchema, ReferenceSchema, StringSchema
from .structural import ArraySchema, ObjectSchema, TableSchema


class TestToJsonSchema:
    """Tests for to_json_schema."""

    @pytest.mark.unit
    def test_dialect_marker(self):
        assert to_json_schema(BooleanSchema())["$schema"] == JSON_SCHEMA_DIALECT

    @pytest.mark.unit
    def test_string(self):
        out = to_json_schema(StringSchema().min(2).max(10).email().regex("^[a-z]"))
        assert out["type"] == "string"
        assert out["minLength"] == 2
        assert out["maxLength"] == 10
        assert out["format"] == "email"
        assert out["pattern"] == "^[a-z]"

    @pytest.mark.unit
    def test_email_and_url_formats_both_kept(self):
        out = to_json_schema(StringSchema().email().url())
        assert "format" not in out
        assert out["allOf"] == [{"format": "email"}, {"format": "uri"}]

    @pytest.mark.unit
    def test_exact_length(self):
        out = to_json_schema(StringSchema().length(4))
        assert out["minLength"] == out["maxLength"] == 4

    @pytest.mark.unit
    def test_number(self):
        out = to_json_schema(NumberSchema().int().min(1).max(9).positive())
        assert out["type"] == "integer"
        assert out["minimum"] == 1
        assert out["maximum"] == 9
        assert out["exclusiveMinimum"] == 0
        assert to_json_schema(NumberSchema().negative())["exclusiveMaximum"] == 0

    @pytest.mark.unit
    def test_null(self):
        assert to_json_schema(NullSchema())["type"] == "null"

    @pytest.mark.unit
    def test_reference(self):
        out = to_json_schema(ReferenceSchema().namespace("user"))
        text_form, object_form = out["anyOf"]
        assert text_form == {"type": "string", "pattern": "^:"}
        assert object_form["required"] == ["_ref", "_namespace"]
        assert object_form["properties"]["_namespace"] == {"const": "user"}

    @pytest.mark.unit
    def test_object_required_and_defaults(self):
        schema = ObjectSchema(
            {
                "name": StringSchema().describe("display name"),
                "role": StringSchema().default("member"),
                "age": NumberSchema().optional(),
            }
        )
        out = to_json_schema(schema)
        assert out["type"] == "object"
        assert list(out["properties"]) == ["name", "role", "age"]
        assert out["required"] == ["name"]
        assert out["properties"]["name"]["description"] == "display name"
        assert out["properties"]["role"]["default"] == "member"

    @pytest.mark.unit
    def test_empty_object_has_no_required(self):
        assert "required" not in to_json_schema(ObjectSchema())

    @pytest.mark.unit
    def test_array(self):
        out = to_json_schema(ArraySchema(StringSchema()).min(1).max(3))
        assert out["items"] == {"type": "string"}
        assert out["minItems"] == 1
        assert out["maxItems"] == 3

    @pytest.mark.unit
    def test_table_row_mode(self):
        table = TableSchema("users", {"id": NumberSchema().int()}).rows(min_rows=1)
        out = to_json_schema(table)
        assert out["title"] == "users"
        assert out["type"] == "array"
        assert out["minItems"] == 1
        assert out["items"]["properties"]["id"] == {"type": "integer"}

    @pytest.mark.unit
    def test_document(self, team_document_schema):
        out = to_json_schema(team_document_schema)
        assert out["required"] == ["meta", "users"]
        users = out["properties"]["users"]
        assert users["items"]["required"] == ["id", "name", "email"]
        assert out["properties"]["meta"]["properties"]["version"]["default"] == 1

    @pytest.mark.unit
    def test_rejects_non_schema(self):
        with pytest.raises(SchemaDefinitionError):
            to_json_schema({"type": "string"})
