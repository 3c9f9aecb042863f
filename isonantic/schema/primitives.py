"""Primitive schemas: string, number, boolean, null and reference.

Each primitive is a leaf validator. Constraint checks are independent of
one another, so a single value may collect several constraint errors.
"""

from __future__ import annotations

import re
from typing import Any

from isonantic.config import strict_patterns_enabled
from isonantic.core.log import get_logger
from isonantic.errors import ErrorCollection, ErrorKind, SchemaDefinitionError
from isonantic.value import Reference, ValueKind, kind_of

from .base import Schema

logger = get_logger(__name__)

# Deliberately simple formats, not full RFC compliance.
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$")


def _length_bound(value: Any, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SchemaDefinitionError(f"{label} must be a non-negative integer, got {value!r}")
    return value


def _number_bound(value: Any, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaDefinitionError(f"{label} must be a number, got {value!r}")
    return value


class StringSchema(Schema):
    """Validates strings by length, format and pattern.

    Lengths count characters (code points), not bytes.
    """

    kind = ValueKind.STRING

    def __init__(self) -> None:
        super().__init__()
        self.min_len: int | None = None
        self.max_len: int | None = None
        self.exact_len: int | None = None
        self.pattern: re.Pattern[str] | None = None
        self.is_email = False
        self.is_url = False

    def min(self, n: int) -> StringSchema:
        self.min_len = _length_bound(n, "Minimum length")
        return self

    def max(self, n: int) -> StringSchema:
        self.max_len = _length_bound(n, "Maximum length")
        return self

    def length(self, n: int) -> StringSchema:
        self.exact_len = _length_bound(n, "Exact length")
        return self

    def email(self) -> StringSchema:
        self.is_email = True
        return self

    def url(self) -> StringSchema:
        self.is_url = True
        return self

    def regex(self, pattern: str | re.Pattern[str]) -> StringSchema:
        """Require the string to contain a match for `pattern`.

        A malformed pattern is dropped with a warning, leaving any previous
        pattern in place. Set ISONANTIC_STRICT_PATTERNS to raise instead.

        Raises:
            SchemaDefinitionError: On a malformed pattern in strict mode.
        """
        if isinstance(pattern, re.Pattern):
            self.pattern = pattern
            return self

        try:
            self.pattern = re.compile(pattern)
        except (re.error, TypeError) as exc:
            if strict_patterns_enabled():
                raise SchemaDefinitionError(f"Invalid pattern {pattern!r}: {exc}") from exc
            logger.warning("Dropping malformed pattern %r: %s", pattern, exc)
        return self

    def _check(self, value: str, errors: ErrorCollection) -> None:
        length = len(value)

        if self.min_len is not None and length < self.min_len:
            errors.error(f"string must be at least {self.min_len} characters", value)

        if self.max_len is not None and length > self.max_len:
            errors.error(f"string must be at most {self.max_len} characters", value)

        if self.exact_len is not None and length != self.exact_len:
            errors.error(f"string must be exactly {self.exact_len} characters", value)

        if self.is_email and not EMAIL_PATTERN.fullmatch(value):
            errors.error("invalid email format", value)

        if self.is_url and not URL_PATTERN.fullmatch(value):
            errors.error("invalid URL format", value)

        if self.pattern is not None and not self.pattern.search(value):
            errors.error("string does not match required pattern", value)


class NumberSchema(Schema):
    """Validates numbers by range, sign and integrality.

    Bounds are inclusive; positive and negative are strict, so zero
    satisfies neither.
    """

    kind = ValueKind.NUMBER

    def __init__(self) -> None:
        super().__init__()
        self.min_val: float | None = None
        self.max_val: float | None = None
        self.is_int = False
        self.is_positive = False
        self.is_negative = False

    def min(self, n: float) -> NumberSchema:
        self.min_val = _number_bound(n, "Minimum")
        return self

    def max(self, n: float) -> NumberSchema:
        self.max_val = _number_bound(n, "Maximum")
        return self

    def int(self) -> NumberSchema:
        self.is_int = True
        return self

    def positive(self) -> NumberSchema:
        self.is_positive = True
        return self

    def negative(self) -> NumberSchema:
        self.is_negative = True
        return self

    def _check(self, value: float, errors: ErrorCollection) -> None:
        if self.is_int and not (isinstance(value, int) or value.is_integer()):
            errors.error("expected integer, got float", value)

        if self.min_val is not None and value < self.min_val:
            errors.error(f"number must be at least {self.min_val:g}", value)

        if self.max_val is not None and value > self.max_val:
            errors.error(f"number must be at most {self.max_val:g}", value)

        if self.is_positive and value <= 0:
            errors.error("number must be positive", value)

        if self.is_negative and value >= 0:
            errors.error("number must be negative", value)


class BooleanSchema(Schema):
    """Accepts true and false."""

    kind = ValueKind.BOOLEAN


class NullSchema(Schema):
    """Accepts only null."""

    kind = ValueKind.NULL


class ReferenceSchema(Schema):
    """Validates references to other records.

    Accepted forms are a Reference value, a string starting with ':' and an
    object carrying a `_ref` key (with optional `_namespace` and
    `_relationship` keys).
    """

    kind = ValueKind.REFERENCE

    _ACCEPTED = (ValueKind.REFERENCE, ValueKind.STRING, ValueKind.OBJECT)

    def __init__(self) -> None:
        super().__init__()
        self.ref_namespace: str | None = None
        self.ref_relationship: str | None = None

    def namespace(self, ns: str) -> ReferenceSchema:
        """Require the reference to point into namespace `ns`."""
        self.ref_namespace = ns
        return self

    def relationship(self, rel: str) -> ReferenceSchema:
        """Require the reference to carry relationship `rel`."""
        self.ref_relationship = rel
        return self

    def _accepts(self, value: Any) -> bool:
        return kind_of(value) in self._ACCEPTED

    def _check(self, value: Any, errors: ErrorCollection) -> None:
        if isinstance(value, Reference):
            namespace, relationship = value.namespace, value.relationship
        elif isinstance(value, str):
            if not value.startswith(":"):
                errors.error(
                    "expected reference string starting with ':'",
                    value,
                    ErrorKind.REFERENCE_MISMATCH,
                )
                return
            parsed = Reference.parse(value)
            namespace, relationship = parsed.namespace, parsed.relationship
        else:
            if "_ref" not in value:
                errors.error(
                    "expected reference object with _ref field",
                    value,
                    ErrorKind.REFERENCE_MISMATCH,
                )
                return
            namespace = value.get("_namespace")
            relationship = value.get("_relationship")

        if self.ref_namespace is not None and namespace != self.ref_namespace:
            errors.error(
                f"expected namespace {self.ref_namespace}",
                value,
                ErrorKind.REFERENCE_MISMATCH,
            )

        if self.ref_relationship is not None and relationship != self.ref_relationship:
            errors.error(
                f"expected relationship {self.ref_relationship}",
                value,
                ErrorKind.REFERENCE_MISMATCH,
            )


__all__ = [
    "EMAIL_PATTERN",
    "URL_PATTERN",
    "BooleanSchema",
    "NullSchema",
    "NumberSchema",
    "ReferenceSchema",
    "StringSchema",
]
