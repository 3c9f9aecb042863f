"""Validation error model and exception hierarchy."""

from .lib import (
    DocumentValidationError,
    ErrorCollection,
    ErrorKind,
    IsonanticError,
    SchemaDefinitionError,
    ValidationError,
    join_path,
)

__all__ = [
    "DocumentValidationError",
    "ErrorCollection",
    "ErrorKind",
    "IsonanticError",
    "SchemaDefinitionError",
    "ValidationError",
    "join_path",
]
