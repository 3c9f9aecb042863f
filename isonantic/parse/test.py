"""Unit tests for safe_parse and parse."""

import copy
from dataclasses import dataclass

import pytest
from pydantic import BaseModel, ValidationError as PydanticValidationError

from isonantic import I
from isonantic.errors import DocumentValidationError, ErrorCollection, SchemaDefinitionError

from .lib import SafeParseResult, parse, safe_parse


class TestSafeParse:
    """Tests for safe_parse."""

    @pytest.mark.unit
    def test_success(self, team_document_schema, valid_team_document):
        result = safe_parse(team_document_schema, valid_team_document)
        assert result.success
        assert result.errors is None
        assert result.data["meta"] == {"title": "Platform", "version": 1}
        assert result.data["users"][0]["active"] is True
        assert result.data["users"][0]["team"] == ":team:7"

    @pytest.mark.unit
    def test_input_not_mutated(self, team_document_schema, valid_team_document):
        before = copy.deepcopy(valid_team_document)
        safe_parse(team_document_schema, valid_team_document)
        assert valid_team_document == before

    @pytest.mark.unit
    def test_failure(self, team_document_schema):
        result = safe_parse(team_document_schema, {"meta": {"title": ""}, "users": []})
        assert not result.success
        assert result.data is None
        assert result.errors.fields() == ["meta.title", "users"]
        assert result.errors[1].message == "array must have at least 1 items"

    @pytest.mark.unit
    def test_non_object_document(self, team_document_schema):
        result = team_document_schema.safe_parse("not a document")
        assert not result.success
        assert result.errors.to_string() == ": expected document object"

    @pytest.mark.unit
    def test_pydantic_model_input(self):
        class Meta(BaseModel):
            title: str
            version: int = 3

        result = safe_parse(I.Object({"title": I.String(), "version": I.Int()}), Meta(title="x"))
        assert result.success
        assert result.data == {"title": "x", "version": 3}

    @pytest.mark.unit
    def test_dataclass_input(self):
        @dataclass
        class Point:
            x: float
            y: tuple

        schema = I.Object({"x": I.Number(), "y": I.Array(I.Int())})
        result = safe_parse(schema, Point(x=1.5, y=(1, 2)))
        assert result.data == {"x": 1.5, "y": [1, 2]}

    @pytest.mark.unit
    def test_null_root_is_not_absent(self):
        result = safe_parse(I.String().default("x"), None)
        assert not result.success
        assert result.errors[0].message == "expected string, got null"

    @pytest.mark.unit
    @pytest.mark.parametrize("schema", [None, {"name": "string"}, "String"])
    def test_requires_schema(self, schema):
        with pytest.raises(SchemaDefinitionError):
            safe_parse(schema, {})


class TestParse:
    """Tests for the raising parse()."""

    @pytest.mark.unit
    def test_returns_data(self, team_document_schema, valid_team_document):
        data = team_document_schema.parse(valid_team_document)
        assert data["users"][1]["active"] is False

    @pytest.mark.unit
    def test_raises_with_errors(self, team_document_schema):
        with pytest.raises(DocumentValidationError) as exc_info:
            parse(team_document_schema, {"meta": {}})
        assert exc_info.value.errors.fields() == ["meta.title", "users"]
        assert "Validation failed with 2 error(s)" in str(exc_info.value)


class TestSafeParseResult:
    """Tests for the result model."""

    @pytest.mark.unit
    def test_success_with_errors_rejected(self):
        with pytest.raises(PydanticValidationError):
            SafeParseResult(success=True, data={}, errors=ErrorCollection())

    @pytest.mark.unit
    def test_failure_without_errors_rejected(self):
        with pytest.raises(PydanticValidationError):
            SafeParseResult(success=False)

    @pytest.mark.unit
    def test_frozen(self):
        result = SafeParseResult(success=True, data=1)
        with pytest.raises(PydanticValidationError):
            result.success = False

    @pytest.mark.unit
    def test_unwrap(self):
        assert SafeParseResult(success=True, data=[1]).unwrap() == [1]
        errors = ErrorCollection()
        errors.error("boom")
        with pytest.raises(DocumentValidationError):
            SafeParseResult(success=False, errors=errors).unwrap()
