"""isonantic: schema description and validation for ISON document values."""

from isonantic import builder as I
from isonantic.errors import (
    DocumentValidationError,
    ErrorCollection,
    ErrorKind,
    IsonanticError,
    SchemaDefinitionError,
    ValidationError,
)
from isonantic.parse import SafeParseResult, parse, safe_parse
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
    to_json_schema,
)
from isonantic.value import MISSING, Reference, ValueKind

__version__ = "1.0.0"

__all__ = [
    # Builder facade
    "I",
    # Entry points
    "safe_parse",
    "parse",
    "SafeParseResult",
    "to_json_schema",
    # Schemas
    "Schema",
    "StringSchema",
    "NumberSchema",
    "BooleanSchema",
    "NullSchema",
    "ReferenceSchema",
    "ObjectSchema",
    "ArraySchema",
    "TableSchema",
    "DocumentSchema",
    # Values
    "MISSING",
    "Reference",
    "ValueKind",
    # Errors
    "ValidationError",
    "ErrorCollection",
    "ErrorKind",
    "IsonanticError",
    "SchemaDefinitionError",
    "DocumentValidationError",
]
