"""Unit tests for object, array, table and document schemas."""

import pytest

from isonantic.errors import ErrorKind, SchemaDefinitionError
from isonantic.value import MISSING

from .base import REQUIRED_MESSAGE
from .primitives import BooleanSchema, NumberSchema, ReferenceSchema, StringSchema
from .structural import (
    DOCUMENT_MESSAGE,
    ArraySchema,
    DocumentSchema,
    ObjectSchema,
    TableSchema,
)


def _person() -> ObjectSchema:
    return ObjectSchema(
        {
            "name": StringSchema().min(1),
            "email": StringSchema().email(),
            "age": NumberSchema().int().optional(),
        }
    )


class TestObjectSchema:
    """Tests for ObjectSchema."""

    @pytest.mark.unit
    def test_valid(self):
        assert not _person().validate({"name": "Ann", "email": "ann@example.com"})

    @pytest.mark.unit
    def test_errors_in_declaration_order(self):
        errors = _person().validate({"age": 1.5, "email": "nope", "name": ""})
        assert errors.fields() == ["name", "email", "age"]
        assert errors[2].message == "expected integer, got float"

    @pytest.mark.unit
    def test_missing_required_field(self):
        errors = _person().validate({"name": "Ann"})
        assert errors.count() == 1
        assert errors[0].field == "email"
        assert errors[0].message == REQUIRED_MESSAGE

    @pytest.mark.unit
    def test_undeclared_fields_ignored(self):
        value = {"name": "Ann", "email": "ann@example.com", "extra": [1, 2]}
        assert not _person().validate(value)

    @pytest.mark.unit
    def test_wrong_kind(self):
        errors = _person().validate([])
        assert errors.to_string() == ": expected object, got array"

    @pytest.mark.unit
    def test_nested_paths(self):
        schema = ObjectSchema({"owner": ObjectSchema({"contact": _person()})})
        errors = schema.validate({"owner": {"contact": {"name": "A", "email": "x"}}})
        assert errors.fields() == ["owner.contact.email"]

    @pytest.mark.unit
    def test_object_refinement_runs_after_fields(self):
        schema = ObjectSchema(
            {"start": NumberSchema(), "end": NumberSchema()}
        ).refine(lambda o: o["start"] <= o["end"], "start must not exceed end")
        errors = schema.validate({"start": 5, "end": 1})
        assert errors.count() == 1
        assert errors[0].field == ""
        assert errors[0].error_type is ErrorKind.REFINEMENT_FAILURE

    @pytest.mark.unit
    def test_shape_is_read_only(self):
        shape = _person().shape
        assert list(shape) == ["name", "email", "age"]
        with pytest.raises(TypeError):
            shape["other"] = StringSchema()

    @pytest.mark.unit
    def test_rejects_non_schema_field(self):
        with pytest.raises(SchemaDefinitionError):
            ObjectSchema({"name": str})


class TestObjectDerivations:
    """Tests for extend, pick and omit."""

    @pytest.mark.unit
    def test_extend(self):
        base = _person()
        extended = base.extend({"admin": BooleanSchema(), "name": StringSchema().min(3)})
        assert list(extended.fields) == ["name", "email", "age", "admin"]
        assert extended.validate({"name": "Al", "email": "a@b.io", "admin": True}).fields() == [
            "name"
        ]
        assert "admin" not in base.fields
        assert extended.fields["email"] is not base.fields["email"]

    @pytest.mark.unit
    def test_extend_keeps_refinements(self):
        base = ObjectSchema({"n": NumberSchema()}).refine(lambda o: o["n"] > 0, "n > 0")
        extended = base.extend({"m": NumberSchema().optional()})
        assert extended.validate({"n": -1})[0].message == "n > 0"

    @pytest.mark.unit
    def test_pick(self):
        picked = _person().pick(["email", "name"])
        assert list(picked.fields) == ["name", "email"]

    @pytest.mark.unit
    def test_omit(self):
        omitted = _person().omit("email")
        assert list(omitted.fields) == ["name", "age"]
        assert not omitted.validate({"name": "Ann"})

    @pytest.mark.unit
    def test_pick_drops_refinements(self):
        base = _person().refine(lambda o: False, "always fails")
        assert not base.pick(["name"]).validate({"name": "Ann"})

    @pytest.mark.unit
    def test_unknown_keys(self):
        with pytest.raises(SchemaDefinitionError, match="Unknown field"):
            _person().pick(["nickname"])
        with pytest.raises(SchemaDefinitionError):
            _person().omit(["nickname"])

    @pytest.mark.unit
    def test_derived_schema_is_attachable(self):
        base = _person()
        parent = ObjectSchema({"a": base.pick(["name"]), "b": base.omit(["name"])})
        assert set(parent.fields) == {"a", "b"}


class TestOwnership:
    """A schema instance belongs to at most one parent."""

    @pytest.mark.unit
    def test_reuse_rejected(self):
        shared = StringSchema()
        ObjectSchema({"a": shared})
        with pytest.raises(SchemaDefinitionError, match="already attached"):
            ObjectSchema({"b": shared})

    @pytest.mark.unit
    def test_reuse_within_one_parent_rejected(self):
        shared = StringSchema()
        with pytest.raises(SchemaDefinitionError):
            ObjectSchema({"a": shared, "b": shared})

    @pytest.mark.unit
    def test_copy_allows_reuse(self):
        shared = StringSchema().min(2)
        ObjectSchema({"a": shared})
        other = ObjectSchema({"b": shared.copy()})
        assert other.validate({"b": "x"}).fields() == ["b"]

    @pytest.mark.unit
    def test_array_item_reuse_rejected(self):
        item = NumberSchema()
        ArraySchema(item)
        with pytest.raises(SchemaDefinitionError):
            ArraySchema(item)

    @pytest.mark.unit
    def test_rejected_mapping_attaches_nothing(self):
        """A constructor that fails on one entry leaves the others reusable."""
        name = StringSchema()
        with pytest.raises(SchemaDefinitionError):
            ObjectSchema({"name": name, "age": 5})
        assert ObjectSchema({"name": name}).fields["name"] is name

    @pytest.mark.unit
    def test_rejected_block_attaches_nothing(self):
        meta = ObjectSchema()
        with pytest.raises(SchemaDefinitionError):
            DocumentSchema({"meta": meta, "users": "table"})
        assert not DocumentSchema({"meta": meta}).validate({"meta": {}})


class TestArraySchema:
    """Tests for ArraySchema."""

    @pytest.mark.unit
    def test_item_paths(self):
        schema = ObjectSchema({"people": ArraySchema(_person())})
        value = {
            "people": [
                {"name": "Ann", "email": "ann@example.com"},
                {"name": "Bob", "email": "not-an-email"},
            ]
        }
        errors = schema.validate(value)
        assert errors.count() == 1
        assert errors[0].field == "people.[1].email"
        assert errors[0].message == "invalid email format"

    @pytest.mark.unit
    def test_length_bounds(self):
        schema = ArraySchema(NumberSchema()).min(2).max(3)
        assert not schema.validate([1, 2])
        too_few = schema.validate([1])
        assert too_few[0].message == "array must have at least 2 items"
        assert too_few[0].error_type is ErrorKind.STRUCTURAL_MISMATCH
        assert schema.validate([1, 2, 3, 4])[0].message == "array must have at most 3 items"

    @pytest.mark.unit
    def test_bound_and_item_errors_together(self):
        errors = ArraySchema(NumberSchema()).min(3).validate([1, "two"])
        assert errors.fields() == ["", "[1]"]

    @pytest.mark.unit
    def test_wrong_kind(self):
        errors = ArraySchema(NumberSchema()).validate({"0": 1})
        assert [e.message for e in errors] == ["expected array, got object"]

    @pytest.mark.unit
    def test_empty_array(self):
        assert not ArraySchema(NumberSchema()).validate([])

    @pytest.mark.unit
    def test_bad_bound(self):
        with pytest.raises(SchemaDefinitionError):
            ArraySchema(NumberSchema()).min(-1)


class TestTableSchema:
    """Tests for TableSchema record and row modes."""

    @pytest.mark.unit
    def test_record_mode(self):
        table = TableSchema("users", {"id": NumberSchema(), "name": StringSchema()})
        assert table.get_name() == "users"
        assert not table.validate({"id": 1, "name": "Ann"})
        assert table.validate({"id": 1}).fields() == ["name"]

    @pytest.mark.unit
    def test_record_mode_mismatch_is_structural(self):
        errors = TableSchema("users").validate("x")
        assert errors[0].message == "expected object, got string"
        assert errors[0].error_type is ErrorKind.STRUCTURAL_MISMATCH

    @pytest.mark.unit
    def test_row_mode(self):
        table = TableSchema("users", {"id": NumberSchema().positive()}).rows()
        assert not table.validate([{"id": 1}, {"id": 2}])
        errors = table.validate([{"id": 1}, {"id": -2}, {}])
        assert errors.fields() == ["[1].id", "[2].id"]

    @pytest.mark.unit
    def test_row_mode_rejects_object(self):
        table = TableSchema("users", {"id": NumberSchema()}).rows()
        assert table.validate({"id": 1})[0].message == "expected array, got object"

    @pytest.mark.unit
    def test_row_bounds(self):
        table = TableSchema("users", {"id": NumberSchema()}).rows(min_rows=1, max_rows=2)
        assert table.validate([])[0].message == "array must have at least 1 items"
        assert table.validate([{"id": 1}] * 3)[0].message == "array must have at most 2 items"

    @pytest.mark.unit
    def test_derivations_apply_to_rows(self):
        table = TableSchema("users", {"id": NumberSchema(), "name": StringSchema()}).rows()
        picked = table.pick(["id"])
        assert isinstance(picked, TableSchema)
        assert not picked.validate([{"id": 1}])
        extended = table.extend({"admin": BooleanSchema()})
        assert extended.validate([{"id": 1, "name": "Ann"}]).fields() == ["[0].admin"]

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["", None, 3])
    def test_bad_name(self, name):
        with pytest.raises(SchemaDefinitionError):
            TableSchema(name)


class TestDocumentSchema:
    """Tests for DocumentSchema."""

    @pytest.mark.unit
    def test_valid_document(self, team_document_schema, valid_team_document):
        assert not team_document_schema.validate(valid_team_document)

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [MISSING, None, [], "doc"])
    def test_root_must_be_object(self, value):
        errors = DocumentSchema({"meta": ObjectSchema()}).validate(value)
        assert errors.count() == 1
        assert errors[0].field == ""
        assert errors[0].message == DOCUMENT_MESSAGE
        assert errors[0].error_type is ErrorKind.STRUCTURAL_MISMATCH

    @pytest.mark.unit
    def test_block_paths(self, team_document_schema, valid_team_document):
        document = dict(valid_team_document)
        document["users"] = [
            {"id": 1, "name": "A", "email": "ann@example.com"},
            {"id": 0, "name": "Bob", "email": "bob", "team": ":org:1"},
        ]
        errors = team_document_schema.validate(document)
        assert errors.fields() == [
            "users.[0].name",
            "users.[1].id",
            "users.[1].email",
            "users.[1].team",
        ]
        assert errors[3].error_type is ErrorKind.REFERENCE_MISMATCH

    @pytest.mark.unit
    def test_missing_block(self, team_document_schema):
        errors = team_document_schema.validate({"meta": {"title": "x"}})
        assert errors.fields() == ["users"]
        assert errors[0].message == REQUIRED_MESSAGE

    @pytest.mark.unit
    def test_optional_block(self):
        document = DocumentSchema().block("notes", ObjectSchema().optional())
        assert not document.validate({})

    @pytest.mark.unit
    def test_block_reuse_rejected(self):
        block = ObjectSchema()
        document = DocumentSchema({"a": block})
        with pytest.raises(SchemaDefinitionError):
            document.block("b", block)

    @pytest.mark.unit
    def test_optional_nested_document(self):
        """An absent optional document passes; a non-object still fails."""
        inner = DocumentSchema({"title": StringSchema()}).optional()
        outer = DocumentSchema({"meta": inner})
        assert not outer.validate({})
        errors = outer.validate({"meta": None})
        assert errors.fields() == ["meta"]
        assert errors[0].message == DOCUMENT_MESSAGE

    @pytest.mark.unit
    def test_required_nested_document(self):
        outer = DocumentSchema({"meta": DocumentSchema({"title": StringSchema()})})
        assert outer.validate({})[0].message == DOCUMENT_MESSAGE

    @pytest.mark.unit
    def test_nested_document_default(self):
        outer = DocumentSchema({"meta": DocumentSchema().default({"title": "x"})})
        assert not outer.validate({})
        assert outer.apply_defaults({}) == {"meta": {"title": "x"}}


class TestApplyDefaults:
    """Defaults fill absent fields without mutating the input."""

    @pytest.mark.unit
    def test_object_defaults(self):
        schema = ObjectSchema(
            {
                "name": StringSchema(),
                "role": StringSchema().default("member"),
                "nick": StringSchema().optional(),
            }
        )
        value = {"name": "Ann", "extra": 1}
        output = schema.apply_defaults(value)
        assert output == {"name": "Ann", "extra": 1, "role": "member"}
        assert value == {"name": "Ann", "extra": 1}

    @pytest.mark.unit
    def test_nested_default_object(self):
        schema = ObjectSchema({"settings": ObjectSchema().default({"theme": "dark"})})
        first = schema.apply_defaults({})
        first["settings"]["theme"] = "light"
        assert schema.apply_defaults({}) == {"settings": {"theme": "dark"}}

    @pytest.mark.unit
    def test_document_defaults(self, team_document_schema, valid_team_document):
        output = team_document_schema.apply_defaults(valid_team_document)
        assert output["meta"] == {"title": "Platform", "version": 1}
        assert [row["active"] for row in output["users"]] == [True, False]
        assert "version" not in valid_team_document["meta"]
        assert "active" not in valid_team_document["users"][0]

    @pytest.mark.unit
    def test_reference_values_untouched(self):
        schema = ObjectSchema({"owner": ReferenceSchema()})
        value = {"owner": ":user:1"}
        assert schema.apply_defaults(value) == value
