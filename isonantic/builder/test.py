"""Unit tests for the builder facade."""

import pytest

from isonantic import I
from isonantic.errors import SchemaDefinitionError
from isonantic.schema import (
    ArraySchema,
    BooleanSchema,
    DocumentSchema,
    NullSchema,
    NumberSchema,
    ObjectSchema,
    ReferenceSchema,
    StringSchema,
    TableSchema,
)


class TestConstructors:
    """Each constructor returns a fresh schema of the right kind."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "factory,schema_cls",
        [
            (I.String, StringSchema),
            (I.Number, NumberSchema),
            (I.Int, NumberSchema),
            (I.Float, NumberSchema),
            (I.Boolean, BooleanSchema),
            (I.Bool, BooleanSchema),
            (I.Null, NullSchema),
            (I.Ref, ReferenceSchema),
            (I.Reference, ReferenceSchema),
            (I.Object, ObjectSchema),
            (I.Document, DocumentSchema),
        ],
    )
    def test_kind(self, factory, schema_cls):
        first, second = factory(), factory()
        assert isinstance(first, schema_cls)
        assert first is not second

    @pytest.mark.unit
    def test_int_rejects_fractions(self):
        assert I.Int().validate(1.5)[0].message == "expected integer, got float"
        assert not I.Float().validate(1.5)

    @pytest.mark.unit
    def test_array_and_table(self):
        assert isinstance(I.Array(I.String()), ArraySchema)
        table = I.Table("users", {"id": I.Int()})
        assert isinstance(table, TableSchema)
        assert table.get_name() == "users"

    @pytest.mark.unit
    def test_table_requires_name(self):
        with pytest.raises(SchemaDefinitionError):
            I.Table("")


class TestChaining:
    """Modifiers mutate and return the same instance."""

    @pytest.mark.unit
    def test_modifiers_return_self(self):
        schema = I.String()
        assert schema.min(1).max(5).optional().describe("tag") is schema
        assert schema.is_optional
        assert schema.min_len == 1

    @pytest.mark.unit
    def test_later_modifier_wins(self):
        schema = I.String().min(1).min(4)
        assert schema.validate("abc")[0].message == "string must be at least 4 characters"

    @pytest.mark.unit
    def test_end_to_end(self):
        schema = I.Object(
            {
                "people": I.Array(
                    I.Object({"email": I.String().email(), "team": I.Ref().optional()})
                ).min(1)
            }
        )
        errors = schema.validate({"people": [{"email": "a@b.io"}, {"email": "bad"}]})
        assert errors.to_string() == "people.[1].email: invalid email format"
