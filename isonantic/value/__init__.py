"""Value model: kinds, the MISSING sentinel and typed references."""

from .lib import (
    MISSING,
    Reference,
    Value,
    ValueKind,
    kind_name,
    kind_of,
    to_value,
    values_equal,
)

__all__ = [
    "MISSING",
    "Reference",
    "Value",
    "ValueKind",
    "kind_name",
    "kind_of",
    "to_value",
    "values_equal",
]
