"""Schema module - composable validators for document value trees.

This module provides:
- The Schema base class and refinement mechanism
- Primitive schemas (string, number, boolean, null, reference)
- Structural schemas (object, array, table, document)
- JSON Schema export

Schemas are normally assembled through the builder facade:
    >>> from isonantic import I
    >>> users = I.Object({"name": I.String().min(1), "age": I.Int().optional()})
    >>> users.validate({"age": 3}).to_string()
    'name: required field is missing'
"""

from .base import REFINEMENT_MESSAGE, REQUIRED_MESSAGE, Refinement, Schema
from .export import JSON_SCHEMA_DIALECT, to_json_schema
from .primitives import (
    EMAIL_PATTERN,
    URL_PATTERN,
    BooleanSchema,
    NullSchema,
    NumberSchema,
    ReferenceSchema,
    StringSchema,
)
from .structural import (
    DOCUMENT_MESSAGE,
    ArraySchema,
    DocumentSchema,
    ObjectSchema,
    TableSchema,
)

__all__ = [
    # Base
    "Schema",
    "Refinement",
    "REQUIRED_MESSAGE",
    "REFINEMENT_MESSAGE",
    # Primitives
    "StringSchema",
    "NumberSchema",
    "BooleanSchema",
    "NullSchema",
    "ReferenceSchema",
    "EMAIL_PATTERN",
    "URL_PATTERN",
    # Structural
    "ObjectSchema",
    "ArraySchema",
    "TableSchema",
    "DocumentSchema",
    "DOCUMENT_MESSAGE",
    # Export
    "to_json_schema",
    "JSON_SCHEMA_DIALECT",
]
