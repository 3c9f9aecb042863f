"""Unit tests for the value model."""

from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from .lib import (
    MISSING,
    Reference,
    ValueKind,
    kind_name,
    kind_of,
    to_value,
    values_equal,
)


class TestKindOf:
    """Tests for kind classification."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,kind",
        [
            (None, ValueKind.NULL),
            ("text", ValueKind.STRING),
            (3, ValueKind.NUMBER),
            (2.5, ValueKind.NUMBER),
            (True, ValueKind.BOOLEAN),
            ({"a": 1}, ValueKind.OBJECT),
            ([1, 2], ValueKind.ARRAY),
            (Reference("1"), ValueKind.REFERENCE),
        ],
    )
    def test_known_kinds(self, value, kind):
        assert kind_of(value) is kind

    @pytest.mark.unit
    def test_bool_is_not_number(self):
        """Booleans never classify as numbers."""
        assert kind_of(False) is ValueKind.BOOLEAN

    @pytest.mark.unit
    def test_unknown_kind(self):
        assert kind_of({1, 2}) is None
        assert kind_name({1, 2}) == "set"

    @pytest.mark.unit
    def test_kind_name_missing(self):
        assert kind_name(MISSING) == "missing"
        assert kind_name(None) == "null"


class TestMissing:
    """Tests for the MISSING sentinel."""

    @pytest.mark.unit
    def test_singleton_and_falsy(self):
        from copy import deepcopy

        assert not MISSING
        assert deepcopy(MISSING) is MISSING
        assert repr(MISSING) == "MISSING"

    @pytest.mark.unit
    def test_distinct_from_null(self):
        assert MISSING is not None
        assert kind_of(MISSING) is None


class TestReference:
    """Tests for Reference parsing and rendering."""

    @pytest.mark.unit
    def test_parse_plain(self):
        ref = Reference.parse(":42")
        assert ref == Reference(id="42")
        assert str(ref) == ":42"

    @pytest.mark.unit
    def test_parse_namespace(self):
        ref = Reference.parse(":user:101")
        assert ref.namespace == "user"
        assert ref.relationship is None
        assert ref.id == "101"
        assert str(ref) == ":user:101"

    @pytest.mark.unit
    def test_parse_relationship(self):
        ref = Reference.parse(":MEMBER_OF:10")
        assert ref.relationship == "MEMBER_OF"
        assert ref.namespace is None

    @pytest.mark.unit
    def test_parse_rejects_missing_colon(self):
        with pytest.raises(ValueError):
            Reference.parse("user:1")

    @pytest.mark.unit
    def test_to_dict(self):
        assert Reference("7", namespace="team").to_dict() == {
            "_ref": "7",
            "_namespace": "team",
        }
        assert Reference("7").to_dict() == {"_ref": "7"}


class TestToValue:
    """Tests for caller data normalization."""

    @pytest.mark.unit
    def test_pydantic_model(self):
        class User(BaseModel):
            name: str
            tags: list[str] = []

        assert to_value(User(name="Ann")) == {"name": "Ann", "tags": []}

    @pytest.mark.unit
    def test_dataclass(self):
        @dataclass
        class Point:
            x: int
            y: int

        assert to_value(Point(1, 2)) == {"x": 1, "y": 2}

    @pytest.mark.unit
    def test_tuples_and_keys(self):
        assert to_value({1: (1, 2)}) == {"1": [1, 2]}

    @pytest.mark.unit
    def test_input_not_mutated(self):
        data = {"items": [{"a": 1}]}
        result = to_value(data)
        result["items"].append({"b": 2})
        assert data == {"items": [{"a": 1}]}

    @pytest.mark.unit
    def test_leaves_pass_through(self):
        ref = Reference("1")
        assert to_value(ref) is ref
        assert to_value(MISSING) is MISSING


class TestValuesEqual:
    """Tests for structural equality."""

    @pytest.mark.unit
    def test_nested_equal(self):
        assert values_equal({"a": [1, {"b": None}]}, {"a": [1, {"b": None}]})

    @pytest.mark.unit
    def test_bool_vs_number(self):
        assert not values_equal(True, 1)
        assert not values_equal([0], [False])

    @pytest.mark.unit
    def test_key_mismatch(self):
        assert not values_equal({"a": 1}, {"b": 1})
