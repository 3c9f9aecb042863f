"""Unit tests for the Schema base, refinements and primitive schemas."""

import logging
import re

import pytest

from isonantic.errors import (
    ErrorCollection,
    ErrorKind,
    SchemaDefinitionError,
    ValidationError,
)
from isonantic.value import MISSING, Reference

from .base import REFINEMENT_MESSAGE, REQUIRED_MESSAGE, Refinement, Schema
from .primitives import (
    BooleanSchema,
    NullSchema,
    NumberSchema,
    ReferenceSchema,
    StringSchema,
)
from .structural import ArraySchema

ALL_PRIMITIVES = [StringSchema, NumberSchema, BooleanSchema, NullSchema, ReferenceSchema]


class TestRequiredness:
    """Absent values across every primitive."""

    @pytest.mark.unit
    @pytest.mark.parametrize("schema_cls", ALL_PRIMITIVES)
    def test_absent_required(self, schema_cls):
        """Absent value on a required schema yields exactly one error."""
        errors = schema_cls().validate(MISSING)
        assert errors.count() == 1
        assert errors[0].message == REQUIRED_MESSAGE
        assert errors[0].field == ""
        assert errors[0].error_type is ErrorKind.MISSING_REQUIRED_FIELD

    @pytest.mark.unit
    @pytest.mark.parametrize("schema_cls", ALL_PRIMITIVES)
    def test_absent_optional(self, schema_cls):
        """Absent value on an optional schema yields nothing."""
        assert not schema_cls().optional().validate()

    @pytest.mark.unit
    def test_default_implies_optional(self):
        schema = StringSchema().default("x")
        assert schema.is_optional
        assert schema.has_default
        assert not schema.validate()

    @pytest.mark.unit
    def test_null_is_not_absent(self):
        """null is a value, so an optional string still rejects it."""
        errors = StringSchema().optional().validate(None)
        assert errors[0].message == "expected string, got null"


class TestTypeMismatch:
    """Wrong kinds short-circuit every other check."""

    @pytest.mark.unit
    def test_string_with_many_constraints(self):
        schema = StringSchema().min(3).max(5).email().regex("^a").refine(lambda s: False, "nope")
        errors = schema.validate(42)
        assert errors.count() == 1
        assert errors[0].message == "expected string, got number"
        assert errors[0].error_type is ErrorKind.TYPE_MISMATCH
        assert errors[0].value == 42

    @pytest.mark.unit
    def test_number_rejects_bool(self):
        errors = NumberSchema().validate(True)
        assert errors.to_string() == ": expected number, got boolean"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "schema_cls,value,message",
        [
            (BooleanSchema, "true", "expected boolean, got string"),
            (NullSchema, 0, "expected null, got number"),
            (ReferenceSchema, 5, "expected reference, got number"),
            (StringSchema, {1, 2}, "expected string, got set"),
        ],
    )
    def test_messages(self, schema_cls, value, message):
        errors = schema_cls().validate(value)
        assert [e.message for e in errors] == [message]


class TestStringSchema:
    """Tests for StringSchema constraints."""

    @pytest.mark.unit
    def test_min_length(self):
        schema = StringSchema().min(3)
        errors = schema.validate("ab")
        assert errors.count() == 1
        assert errors[0].message == "string must be at least 3 characters"
        assert errors[0].error_type is ErrorKind.CONSTRAINT_VIOLATION
        assert not schema.validate("abc")

    @pytest.mark.unit
    def test_max_and_exact_length(self):
        assert StringSchema().max(2).validate("abc")[0].message == (
            "string must be at most 2 characters"
        )
        assert StringSchema().length(4).validate("abc")[0].message == (
            "string must be exactly 4 characters"
        )

    @pytest.mark.unit
    def test_constraints_are_independent(self):
        """Conflicting bounds each contribute an error."""
        errors = StringSchema().min(5).max(1).validate("abc")
        assert [e.message for e in errors] == [
            "string must be at least 5 characters",
            "string must be at most 1 characters",
        ]

    @pytest.mark.unit
    def test_length_counts_characters(self):
        assert not StringSchema().length(2).validate("éé")

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["a@b.com", "first.last+tag@mail.example.org"])
    def test_email_valid(self, value):
        assert not StringSchema().email().validate(value)

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["bad", "a@b", "a@b.c", "a b@c.com", "a@b.com\n"])
    def test_email_invalid(self, value):
        assert StringSchema().email().validate(value)[0].message == "invalid email format"

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["http://example.com", "https://a.io/path?q=1"])
    def test_url_valid(self, value):
        assert not StringSchema().url().validate(value)

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["ftp://x.com", "http://", "https:// spaced.com", "example.com"])
    def test_url_invalid(self, value):
        assert StringSchema().url().validate(value)[0].message == "invalid URL format"

    @pytest.mark.unit
    def test_pattern_is_unanchored(self):
        schema = StringSchema().regex("[0-9]+")
        assert not schema.validate("abc123")
        assert schema.validate("abc")[0].message == "string does not match required pattern"

    @pytest.mark.unit
    def test_precompiled_pattern(self):
        schema = StringSchema().regex(re.compile("^x", re.IGNORECASE))
        assert not schema.validate("Xylophone")

    @pytest.mark.unit
    def test_malformed_pattern_dropped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="isonantic"):
            schema = StringSchema().regex("([a-z")
        assert schema.pattern is None
        assert not schema.validate("anything")
        assert "malformed pattern" in caplog.text

    @pytest.mark.unit
    def test_malformed_pattern_keeps_previous(self):
        schema = StringSchema().regex("^a").regex("(")
        assert schema.pattern.pattern == "^a"

    @pytest.mark.unit
    def test_malformed_pattern_strict(self, monkeypatch):
        monkeypatch.setenv("ISONANTIC_STRICT_PATTERNS", "true")
        with pytest.raises(SchemaDefinitionError, match="Invalid pattern"):
            StringSchema().regex("([a-z")

    @pytest.mark.unit
    @pytest.mark.parametrize("bound", [-1, 1.5, True, "3"])
    def test_bad_length_bound(self, bound):
        with pytest.raises(SchemaDefinitionError):
            StringSchema().min(bound)


class TestNumberSchema:
    """Tests for NumberSchema constraints."""

    @pytest.mark.unit
    def test_min_and_positive_both_reported(self):
        errors = NumberSchema().min(0).positive().validate(-1)
        assert [e.message for e in errors] == [
            "number must be at least 0",
            "number must be positive",
        ]

    @pytest.mark.unit
    def test_bounds_inclusive(self):
        schema = NumberSchema().min(1).max(10)
        assert not schema.validate(1)
        assert not schema.validate(10.0)
        assert schema.validate(10.5)[0].message == "number must be at most 10"

    @pytest.mark.unit
    def test_bound_formatting(self):
        assert NumberSchema().min(2.5).validate(1)[0].message == "number must be at least 2.5"

    @pytest.mark.unit
    def test_zero_is_neither_sign(self):
        assert NumberSchema().positive().validate(0)[0].message == "number must be positive"
        assert NumberSchema().negative().validate(0)[0].message == "number must be negative"
        assert not NumberSchema().negative().validate(-0.1)

    @pytest.mark.unit
    def test_integrality(self):
        schema = NumberSchema().int()
        assert not schema.validate(3)
        assert not schema.validate(3.0)
        assert schema.validate(3.5)[0].message == "expected integer, got float"

    @pytest.mark.unit
    def test_integrality_of_huge_ints(self):
        """Ints beyond float range are checked without converting them."""
        schema = NumberSchema().int().positive()
        assert not schema.validate(10**400)
        assert schema.validate(-(10**400))[0].message == "number must be positive"

    @pytest.mark.unit
    def test_bad_bound(self):
        with pytest.raises(SchemaDefinitionError):
            NumberSchema().max("10")


class TestBooleanAndNull:
    """Tests for kind-only schemas."""

    @pytest.mark.unit
    def test_boolean(self):
        assert not BooleanSchema().validate(False)

    @pytest.mark.unit
    def test_null(self):
        assert not NullSchema().validate(None)

    @pytest.mark.unit
    def test_boolean_refinement(self):
        schema = BooleanSchema().refine(lambda v: v is True, "must be accepted")
        assert schema.validate(False)[0].message == "must be accepted"


class TestReferenceSchema:
    """Tests for ReferenceSchema forms and restrictions."""

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [":1", ":user:42", Reference("9"), {"_ref": "3"}])
    def test_accepted_forms(self, value):
        assert not ReferenceSchema().validate(value)

    @pytest.mark.unit
    def test_string_without_colon(self):
        errors = ReferenceSchema().validate("user:1")
        assert errors[0].message == "expected reference string starting with ':'"
        assert errors[0].error_type is ErrorKind.REFERENCE_MISMATCH

    @pytest.mark.unit
    def test_object_without_ref(self):
        errors = ReferenceSchema().validate({"id": 1})
        assert errors[0].message == "expected reference object with _ref field"

    @pytest.mark.unit
    def test_namespace_object_form(self):
        schema = ReferenceSchema().namespace("user")
        assert not schema.validate({"_ref": "1", "_namespace": "user"})
        errors = schema.validate({"_ref": "1", "_namespace": "team"})
        assert errors[0].message == "expected namespace user"

    @pytest.mark.unit
    def test_namespace_text_form(self):
        schema = ReferenceSchema().namespace("user")
        assert not schema.validate(":user:1")
        assert schema.validate(":1")[0].message == "expected namespace user"
        assert not schema.validate(Reference("1", namespace="user"))

    @pytest.mark.unit
    def test_relationship(self):
        schema = ReferenceSchema().relationship("MEMBER_OF")
        assert not schema.validate(":MEMBER_OF:10")
        assert not schema.validate({"_ref": "10", "_relationship": "MEMBER_OF"})
        assert schema.validate(":OWNS:10")[0].message == "expected relationship MEMBER_OF"

    @pytest.mark.unit
    def test_namespace_and_relationship_checked_independently(self):
        schema = ReferenceSchema().namespace("user").relationship("MEMBER_OF")
        errors = schema.validate({"_ref": "1"})
        assert [e.message for e in errors] == [
            "expected namespace user",
            "expected relationship MEMBER_OF",
        ]


class TestRefinements:
    """Tests for the refinement mechanism."""

    @pytest.mark.unit
    def test_failing_predicate(self):
        schema = StringSchema().refine(lambda s: s.islower(), "must be lowercase")
        errors = schema.validate("ABC")
        assert errors.count() == 1
        error = errors[0]
        assert error.field == ""
        assert error.message == "must be lowercase"
        assert error.value == "ABC"
        assert error.error_type is ErrorKind.REFINEMENT_FAILURE

    @pytest.mark.unit
    def test_default_message(self):
        errors = NumberSchema().refine(lambda n: n % 2 == 0).validate(3)
        assert errors[0].message == REFINEMENT_MESSAGE

    @pytest.mark.unit
    def test_run_after_constraints_in_attachment_order(self):
        schema = (
            StringSchema()
            .min(5)
            .refine(lambda s: s.startswith("x"), "first")
            .refine(lambda s: s.endswith("y"), "second")
        )
        assert [e.message for e in schema.validate("abc")] == [
            "string must be at least 5 characters",
            "first",
            "second",
        ]

    @pytest.mark.unit
    def test_context_is_passed(self):
        schema = NumberSchema()
        schema.add_refinement(lambda n, limit: n < limit, context=10, message="too big")
        assert not schema.validate(3)
        assert schema.validate(11)[0].message == "too big"

    @pytest.mark.unit
    def test_rich_validator_summarized_to_first_error(self):
        def check(value):
            errors = ErrorCollection()
            errors.error("first problem")
            errors.error("second problem")
            return errors

        errors = StringSchema().refine(check, "bad slug").validate("x")
        assert errors.count() == 1
        assert errors[0].message == "bad slug: first problem"

    @pytest.mark.unit
    def test_rich_validator_without_message(self):
        schema = StringSchema().refine(lambda v: [ValidationError("", "inner")])
        assert schema.validate("x")[0].message == "inner"

    @pytest.mark.unit
    def test_rich_validator_passing(self):
        schema = StringSchema().refine(lambda v: ErrorCollection(), "never")
        schema.refine(lambda v: None, "never either")
        assert not schema.validate("x")

    @pytest.mark.unit
    def test_plain_list_result_uses_truthiness(self):
        """A list of plain values is a truthy result, not an error report."""
        schema = ArraySchema(NumberSchema()).refine(lambda items: items, "must be non-empty")
        assert not schema.validate([1, 2])
        assert not schema.validate([])

    @pytest.mark.unit
    def test_mixed_list_result_uses_truthiness(self):
        schema = StringSchema().refine(lambda v: [ValidationError("", "inner"), "note"], "mixed")
        assert not schema.validate("x")

    @pytest.mark.unit
    def test_lazy_list(self):
        schema = StringSchema()
        assert schema.refinements is None
        refinement = schema.add_refinement(lambda v: True)
        assert isinstance(refinement, Refinement)
        assert schema.refinements == [refinement]

    @pytest.mark.unit
    def test_non_callable_rejected(self):
        with pytest.raises(SchemaDefinitionError):
            StringSchema().refine("not callable")

    @pytest.mark.unit
    def test_context_survives_copy(self):
        schema = NumberSchema()
        schema.add_refinement(lambda n, limit: n < limit, context=10, message="too big")
        clone = schema.copy()
        assert clone.validate(11)[0].message == "too big"
        assert not NumberSchema().refine(lambda n: n > 0).copy().validate(1)


class TestSchemaBehavior:
    """Cross-cutting schema behavior."""

    @pytest.mark.unit
    def test_validation_is_idempotent(self):
        schema = StringSchema().min(3).email()
        assert schema.validate("ab") == schema.validate("ab")

    @pytest.mark.unit
    def test_describe(self):
        assert StringSchema().describe("user name").description == "user name"

    @pytest.mark.unit
    def test_apply_defaults_copies(self):
        schema = StringSchema().default("x")
        assert schema.apply_defaults() == "x"
        assert schema.apply_defaults("given") == "given"
        assert StringSchema().apply_defaults() is MISSING

        listed = Schema().default([1])
        first = listed.apply_defaults()
        first.append(2)
        assert listed.default_value == [1]

    @pytest.mark.unit
    def test_is_valid(self):
        assert StringSchema().is_valid("x")
        assert not StringSchema().is_valid()

    @pytest.mark.unit
    def test_repr(self):
        assert repr(StringSchema().optional()) == "<StringSchema optional>"
