"""Value model for isonantic.

Validated documents are plain Python data trees. This module names the
closed set of value kinds, the sentinel for absent fields and the typed
reference value that ISON documents use to point at other records.

Kinds map onto Python types as follows:
- NULL: None
- STRING: str
- NUMBER: int or float (bool is excluded)
- BOOLEAN: bool
- OBJECT: dict with str keys, insertion ordered
- ARRAY: list
- REFERENCE: Reference
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel


class ValueKind(str, Enum):
    """Closed set of value kinds a document tree may contain."""

    NULL = "null"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    REFERENCE = "reference"


class _Missing:
    """Marker for a field that was not supplied at all."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict) -> _Missing:
        return self


MISSING = _Missing()


@dataclass(frozen=True)
class Reference:
    """A typed pointer to another record.

    The text forms are `:id`, `:namespace:id` and `:RELATIONSHIP:id`;
    an all-uppercase prefix names a relationship rather than a namespace.

    Attributes:
        id: Identifier of the referenced record.
        namespace: Record type the identifier lives in, if any.
        relationship: Edge label for relationship references, if any.
    """

    id: str
    namespace: str | None = None
    relationship: str | None = None

    @classmethod
    def parse(cls, text: str) -> Reference:
        """Parse a reference from its text form.

        Raises:
            ValueError: If text does not start with ':'.
        """
        if not isinstance(text, str) or not text.startswith(":"):
            raise ValueError(f"Reference must start with ':', got: {text!r}")

        body = text[1:]
        if ":" not in body:
            return cls(id=body)

        prefix, ref_id = body.split(":", 1)
        if prefix.isupper():
            return cls(id=ref_id, relationship=prefix)
        return cls(id=ref_id, namespace=prefix)

    def to_dict(self) -> dict[str, str]:
        """Render the object form (`_ref`, `_namespace`, `_relationship`)."""
        data = {"_ref": self.id}
        if self.namespace is not None:
            data["_namespace"] = self.namespace
        if self.relationship is not None:
            data["_relationship"] = self.relationship
        return data

    def __str__(self) -> str:
        prefix = self.relationship or self.namespace
        if prefix:
            return f":{prefix}:{self.id}"
        return f":{self.id}"


Value = Union[None, str, int, float, bool, dict, list, Reference]


def kind_of(value: Any) -> ValueKind | None:
    """Classify a Python value into its ValueKind.

    Returns:
        The kind, or None when the value lies outside the value model.
    """
    if value is None:
        return ValueKind.NULL
    # bool is an int subclass, so it must be checked first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, Reference):
        return ValueKind.REFERENCE
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, list):
        return ValueKind.ARRAY
    return None


def kind_name(value: Any) -> str:
    """Human-readable kind of a value for error messages."""
    if value is MISSING:
        return "missing"
    kind = kind_of(value)
    if kind is None:
        return type(value).__name__
    return kind.value


def to_value(obj: Any) -> Any:
    """Normalize caller data into a value tree.

    Pydantic models and dataclass instances become dicts, other mappings
    become dicts with string keys and tuples become lists. Leaves are
    returned unchanged and the input is never mutated.
    """
    if obj is MISSING or obj is None:
        return obj
    if isinstance(obj, (str, bool, int, float, Reference)):
        return obj
    if isinstance(obj, BaseModel):
        return to_value(obj.model_dump())
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return to_value(dataclasses.asdict(obj))
    if isinstance(obj, Mapping):
        return {str(key): to_value(item) for key, item in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_value(item) for item in obj]
    return obj


def values_equal(left: Any, right: Any) -> bool:
    """Structural equality over value trees.

    Unlike `==`, booleans never compare equal to numbers.
    """
    left_kind = kind_of(left)
    if left_kind != kind_of(right):
        return False
    if left_kind is ValueKind.OBJECT:
        if left.keys() != right.keys():
            return False
        return all(values_equal(left[key], right[key]) for key in left)
    if left_kind is ValueKind.ARRAY:
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))
    return left == right


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
