"""Schema builder facade.

Stateless constructor functions, one per schema kind. Each call returns a
fresh schema instance; modifiers are then chained on the instance:

    >>> from isonantic import I
    >>> schema = I.Document({
    ...     "users": I.Table("users", {
    ...         "id": I.Int().positive(),
    ...         "email": I.String().email(),
    ...         "team": I.Ref().namespace("team").optional(),
    ...     }).rows(),
    ... })
"""

from __future__ import annotations

from collections.abc import Mapping

from isonantic.schema import (
    ArraySchema,
    BooleanSchema,
    DocumentSchema,
    NullSchema,
    NumberSchema,
    ObjectSchema,
    ReferenceSchema,
    Schema,
    StringSchema,
    TableSchema,
)


def String() -> StringSchema:
    return StringSchema()


def Number() -> NumberSchema:
    return NumberSchema()


def Int() -> NumberSchema:
    """Number schema that rejects fractional values."""
    return NumberSchema().int()


def Float() -> NumberSchema:
    return NumberSchema()


def Boolean() -> BooleanSchema:
    return BooleanSchema()


def Bool() -> BooleanSchema:
    return BooleanSchema()


def Null() -> NullSchema:
    return NullSchema()


def Ref() -> ReferenceSchema:
    return ReferenceSchema()


def Reference() -> ReferenceSchema:
    return ReferenceSchema()


def Object(fields: Mapping[str, Schema] | None = None) -> ObjectSchema:
    return ObjectSchema(fields)


def Array(item_schema: Schema) -> ArraySchema:
    return ArraySchema(item_schema)


def Table(name: str, fields: Mapping[str, Schema] | None = None) -> TableSchema:
    """Named table; call `.rows()` on the result to validate a list of records."""
    return TableSchema(name, fields)


def Document(blocks: Mapping[str, Schema] | None = None) -> DocumentSchema:
    return DocumentSchema(blocks)


__all__ = [
    "Array",
    "Bool",
    "Boolean",
    "Document",
    "Float",
    "Int",
    "Null",
    "Number",
    "Object",
    "Ref",
    "Reference",
    "String",
    "Table",
]
