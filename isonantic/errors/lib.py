"""Validation error model.

Data-level failures are collected as `ValidationError` entries inside an
`ErrorCollection`; they are never raised. Exceptions in this module are
reserved for misuse of the API itself and for the raising `parse()`
convenience.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from isonantic.value import MISSING


class ErrorKind(str, Enum):
    """Category of a validation failure."""

    MISSING_REQUIRED_FIELD = "missing_required_field"
    TYPE_MISMATCH = "type_mismatch"
    CONSTRAINT_VIOLATION = "constraint_violation"
    REFINEMENT_FAILURE = "refinement_failure"
    REFERENCE_MISMATCH = "reference_mismatch"
    STRUCTURAL_MISMATCH = "structural_mismatch"


def join_path(prefix: str, field: str) -> str:
    """Join a path prefix and a child field path with a dot."""
    if not field:
        return prefix
    if not prefix:
        return field
    return f"{prefix}.{field}"


@dataclass(frozen=True)
class ValidationError:
    """Represents a validation error in a value tree.

    Attributes:
        field: Dot/bracket path from the validated root to the offending value.
        message: Human-readable error description.
        value: The offending value (borrowed from the input), if any.
        error_type: Category of the error.
    """

    field: str
    message: str
    value: Any = None
    error_type: ErrorKind = ErrorKind.CONSTRAINT_VIOLATION

    def with_prefix(self, prefix: str) -> ValidationError:
        """Return a copy re-rooted under `prefix`."""
        return replace(self, field=join_path(prefix, self.field))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            "field": self.field,
            "message": self.message,
            "error_type": self.error_type.value,
        }

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ErrorCollection:
    """Ordered, append-only collection of validation errors.

    Order is traversal order: sibling fields in declaration order, array
    items by index, refinements after the structural checks of a node.
    """

    __slots__ = ("_errors",)

    def __init__(self, errors: Iterable[ValidationError] | None = None) -> None:
        self._errors: list[ValidationError] = list(errors or ())

    def add(self, error: ValidationError) -> None:
        """Append a single error."""
        self._errors.append(error)

    def error(
        self,
        message: str,
        value: Any = None,
        error_type: ErrorKind = ErrorKind.CONSTRAINT_VIOLATION,
        field: str = "",
    ) -> None:
        """Append a new error built from its parts."""
        if value is MISSING:
            value = None
        self._errors.append(ValidationError(field, message, value, error_type))

    def merge(self, other: ErrorCollection | None, prefix: str | None = None) -> None:
        """Append every error of `other`, optionally re-rooted, then empty it.

        Args:
            other: Collection to consume. None is ignored.
            prefix: Path segment prepended to each merged error's field.
        """
        if other is None or other is self:
            return
        if prefix:
            self._errors.extend(err.with_prefix(prefix) for err in other._errors)
        else:
            self._errors.extend(other._errors)
        other._errors = []

    def has_errors(self) -> bool:
        return bool(self._errors)

    def count(self) -> int:
        return len(self._errors)

    def first(self) -> ValidationError | None:
        """First recorded error, or None when empty."""
        return self._errors[0] if self._errors else None

    def fields(self) -> list[str]:
        """Paths of all errors, in order."""
        return [err.field for err in self._errors]

    def to_string(self) -> str:
        """Render as `"field: message; field: message"` (empty when no errors)."""
        return "; ".join(str(err) for err in self._errors)

    def to_list(self) -> list[dict[str, Any]]:
        """Convert to a list of plain dictionaries."""
        return [err.to_dict() for err in self._errors]

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self._errors)

    def __getitem__(self, index: int) -> ValidationError:
        return self._errors[index]

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorCollection):
            return NotImplemented
        return self._errors == other._errors

    def __repr__(self) -> str:
        return f"ErrorCollection({self.to_string()!r})"

    def __str__(self) -> str:
        return self.to_string()


# =============================================================================
# Exceptions
# =============================================================================


class IsonanticError(Exception):
    """Base exception for isonantic."""

    pass


class SchemaDefinitionError(IsonanticError):
    """Raised when the schema API is misused while building or running a schema."""

    pass


class DocumentValidationError(IsonanticError):
    """Raised by `parse()` when a document fails validation.

    Attributes:
        errors: The full error collection.
    """

    def __init__(self, errors: ErrorCollection) -> None:
        self.errors = errors
        super().__init__(
            f"Validation failed with {errors.count()} error(s): {errors.to_string()}"
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
