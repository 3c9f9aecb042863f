"""Schema builder facade, exposed at package level as `I`."""

from .lib import (
    Array,
    Bool,
    Boolean,
    Document,
    Float,
    Int,
    Null,
    Number,
    Object,
    Ref,
    Reference,
    String,
    Table,
)

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
