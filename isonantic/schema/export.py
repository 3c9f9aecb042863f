"""JSON Schema export for schema trees.

Renders a schema tree as a JSON Schema (draft 2020-12) dictionary so the
same definition can be handed to tools that speak JSON Schema, e.g. for
documentation or LLM structured output.
"""

from __future__ import annotations

import copy
from typing import Any

from isonantic.errors import SchemaDefinitionError

from .base import Schema
from .primitives import (
    BooleanSchema,
    NullSchema,
    NumberSchema,
    ReferenceSchema,
    StringSchema,
)
from .structural import ArraySchema, DocumentSchema, ObjectSchema, TableSchema

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


def _string(schema: StringSchema) -> dict[str, Any]:
    out: dict[str, Any] = {"type": "string"}
    if schema.exact_len is not None:
        out["minLength"] = schema.exact_len
        out["maxLength"] = schema.exact_len
    if schema.min_len is not None:
        out["minLength"] = max(schema.min_len, out.get("minLength", 0))
    if schema.max_len is not None:
        out["maxLength"] = min(schema.max_len, out.get("maxLength", schema.max_len))
    formats = []
    if schema.is_email:
        formats.append("email")
    if schema.is_url:
        formats.append("uri")
    # Both checks run on validation, so both formats must hold.
    if len(formats) == 1:
        out["format"] = formats[0]
    elif formats:
        out["allOf"] = [{"format": name} for name in formats]
    if schema.pattern is not None:
        out["pattern"] = schema.pattern.pattern
    return out


def _number(schema: NumberSchema) -> dict[str, Any]:
    out: dict[str, Any] = {"type": "integer" if schema.is_int else "number"}
    if schema.min_val is not None:
        out["minimum"] = schema.min_val
    if schema.max_val is not None:
        out["maximum"] = schema.max_val
    if schema.is_positive:
        out["exclusiveMinimum"] = 0
    if schema.is_negative:
        out["exclusiveMaximum"] = 0
    return out


def _reference(schema: ReferenceSchema) -> dict[str, Any]:
    ref_object: dict[str, Any] = {
        "type": "object",
        "properties": {"_ref": {"type": "string"}},
        "required": ["_ref"],
    }
    if schema.ref_namespace is not None:
        ref_object["properties"]["_namespace"] = {"const": schema.ref_namespace}
        ref_object["required"].append("_namespace")
    if schema.ref_relationship is not None:
        ref_object["properties"]["_relationship"] = {"const": schema.ref_relationship}
        ref_object["required"].append("_relationship")
    return {"anyOf": [{"type": "string", "pattern": "^:"}, ref_object]}


def _properties(fields: dict[str, Schema]) -> dict[str, Any]:
    out: dict[str, Any] = {
        "type": "object",
        "properties": {name: _render(child) for name, child in fields.items()},
    }
    required = [name for name, child in fields.items() if not child.is_optional]
    if required:
        out["required"] = required
    return out


def _array(schema: ArraySchema) -> dict[str, Any]:
    out: dict[str, Any] = {"type": "array", "items": _render(schema.item_schema)}
    if schema.min_len is not None:
        out["minItems"] = schema.min_len
    if schema.max_len is not None:
        out["maxItems"] = schema.max_len
    return out


def _render(schema: Schema) -> dict[str, Any]:
    if isinstance(schema, StringSchema):
        out = _string(schema)
    elif isinstance(schema, NumberSchema):
        out = _number(schema)
    elif isinstance(schema, BooleanSchema):
        out = {"type": "boolean"}
    elif isinstance(schema, NullSchema):
        out = {"type": "null"}
    elif isinstance(schema, ReferenceSchema):
        out = _reference(schema)
    elif isinstance(schema, TableSchema):
        if schema.row_schema is not None:
            out = _array(schema.row_schema)
        else:
            out = _properties(schema.fields)
        out["title"] = schema.name
    elif isinstance(schema, ObjectSchema):
        out = _properties(schema.fields)
    elif isinstance(schema, ArraySchema):
        out = _array(schema)
    elif isinstance(schema, DocumentSchema):
        out = _properties(schema.blocks)
    else:
        raise SchemaDefinitionError(f"Cannot export {type(schema).__name__} to JSON Schema")

    if schema.description:
        out["description"] = schema.description
    if schema.has_default:
        out["default"] = copy.deepcopy(schema.default_value)
    return out


def to_json_schema(schema: Schema) -> dict[str, Any]:
    """Render a schema tree as a JSON Schema dictionary.

    Refinements have no JSON Schema equivalent and are omitted.

    Args:
        schema: Root of the schema tree.

    Returns:
        dict: JSON Schema with a `$schema` dialect marker.

    Raises:
        SchemaDefinitionError: If schema is not a Schema.

    Example:
        >>> to_json_schema(I.Object({"name": I.String().min(1)}))["required"]
        ['name']
    """
    if not isinstance(schema, Schema):
        raise SchemaDefinitionError(f"Expected a Schema, got {type(schema).__name__}")
    return {"$schema": JSON_SCHEMA_DIALECT, **_render(schema)}


__all__ = ["JSON_SCHEMA_DIALECT", "to_json_schema"]
