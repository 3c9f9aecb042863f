"""Unit tests for the error model."""

import pytest

from .lib import (
    DocumentValidationError,
    ErrorCollection,
    ErrorKind,
    IsonanticError,
    SchemaDefinitionError,
    ValidationError,
    join_path,
)


class TestJoinPath:
    """Tests for path joining."""

    @pytest.mark.unit
    def test_join(self):
        assert join_path("people", "[0].email") == "people.[0].email"

    @pytest.mark.unit
    def test_empty_child(self):
        assert join_path("name", "") == "name"

    @pytest.mark.unit
    def test_empty_prefix(self):
        assert join_path("", "name") == "name"


class TestValidationError:
    """Tests for ValidationError dataclass."""

    @pytest.mark.unit
    def test_error_attributes(self):
        error = ValidationError("age", "number must be positive", -1)
        assert error.field == "age"
        assert error.value == -1
        assert error.error_type is ErrorKind.CONSTRAINT_VIOLATION

    @pytest.mark.unit
    def test_with_prefix(self):
        error = ValidationError("", "required field is missing")
        assert error.with_prefix("name").field == "name"
        assert error.with_prefix("name").with_prefix("[2]").field == "[2].name"
        # original unchanged
        assert error.field == ""

    @pytest.mark.unit
    def test_to_dict(self):
        error = ValidationError("a", "bad", 1, ErrorKind.TYPE_MISMATCH)
        assert error.to_dict() == {
            "field": "a",
            "message": "bad",
            "error_type": "type_mismatch",
        }


class TestErrorCollection:
    """Tests for ErrorCollection."""

    @pytest.mark.unit
    def test_empty(self):
        errors = ErrorCollection()
        assert not errors
        assert errors.count() == 0
        assert errors.has_errors() is False
        assert errors.to_string() == ""
        assert errors.first() is None

    @pytest.mark.unit
    def test_add_preserves_order(self):
        errors = ErrorCollection()
        errors.add(ValidationError("a", "first"))
        errors.error("second", field="b")
        assert errors.fields() == ["a", "b"]
        assert errors.to_string() == "a: first; b: second"

    @pytest.mark.unit
    def test_merge_with_prefix_consumes_source(self):
        child = ErrorCollection()
        child.error("required field is missing", error_type=ErrorKind.MISSING_REQUIRED_FIELD)
        child.error("bad", field="inner")

        parent = ErrorCollection()
        parent.error("own", field="x")
        parent.merge(child, prefix="user")

        assert parent.fields() == ["x", "user", "user.inner"]
        assert len(child) == 0

    @pytest.mark.unit
    def test_merge_none_and_self(self):
        errors = ErrorCollection([ValidationError("a", "m")])
        errors.merge(None)
        errors.merge(errors)
        assert errors.count() == 1

    @pytest.mark.unit
    def test_equality(self):
        left = ErrorCollection([ValidationError("a", "m", 1)])
        right = ErrorCollection([ValidationError("a", "m", 1)])
        assert left == right
        assert left != ErrorCollection()

    @pytest.mark.unit
    def test_to_list(self):
        errors = ErrorCollection([ValidationError("a", "m")])
        assert errors.to_list()[0]["field"] == "a"
        assert errors[0].message == "m"


class TestExceptions:
    """Tests for the exception hierarchy."""

    @pytest.mark.unit
    def test_hierarchy(self):
        assert issubclass(SchemaDefinitionError, IsonanticError)
        assert issubclass(DocumentValidationError, IsonanticError)

    @pytest.mark.unit
    def test_document_validation_error_message(self):
        errors = ErrorCollection([ValidationError("name", "required field is missing")])
        exc = DocumentValidationError(errors)
        assert exc.errors is errors
        assert "name: required field is missing" in str(exc)
        assert "1 error" in str(exc)
