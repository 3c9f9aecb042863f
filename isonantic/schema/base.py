"""Schema base class and refinement mechanism.

Every schema shares the same validation policy:

1. An absent value passes when the schema is optional, otherwise it yields
   a single "required field is missing" error.
2. A value of the wrong kind yields a single type error and nothing else
   runs for that node.
3. Otherwise every kind-specific check runs independently, then the
   attached refinements run in attachment order.

Schemas are built once and then treated as read-only; `validate` never
mutates schema state, so a finished schema tree can be shared between
threads as long as nobody modifies it while validations are running.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from isonantic.errors import (
    ErrorCollection,
    ErrorKind,
    SchemaDefinitionError,
    ValidationError,
)
from isonantic.value import MISSING, ValueKind, kind_name, kind_of, to_value

REQUIRED_MESSAGE = "required field is missing"
REFINEMENT_MESSAGE = "refinement failed"


def _is_error_report(result: Any) -> bool:
    """True for an ErrorCollection or a list/tuple holding only ValidationErrors."""
    if isinstance(result, ErrorCollection):
        return True
    if isinstance(result, (list, tuple)):
        return all(isinstance(item, ValidationError) for item in result)
    return False


@dataclass(frozen=True)
class Refinement:
    """A user-supplied check attached to a schema.

    The predicate receives the value (and the context, when one was given).
    It may return a bool, or act as a richer validator returning an
    ErrorCollection or a list of ValidationError; returning None passes.
    An empty list passes. Any other result, lists of plain values
    included, is judged by its truthiness.

    Attributes:
        predicate: Callable evaluated against the value.
        message: Error message reported when the check fails.
        context: Extra argument handed to the predicate.
    """

    predicate: Callable[..., Any]
    message: str | None = None
    context: Any = MISSING

    def evaluate(self, value: Any) -> ValidationError | None:
        """Run the predicate and summarize its outcome as at most one error.

        A richer validator that reports several errors is summarized by its
        first error only.
        """
        if self.context is MISSING:
            result = self.predicate(value)
        else:
            result = self.predicate(value, self.context)

        if result is None:
            return None

        if _is_error_report(result):
            if not result:
                return None
            inner_message = result[0].message
            if self.message and inner_message:
                message = f"{self.message}: {inner_message}"
            else:
                message = self.message or inner_message or REFINEMENT_MESSAGE
            return ValidationError("", message, value, ErrorKind.REFINEMENT_FAILURE)

        if result:
            return None
        return ValidationError(
            "", self.message or REFINEMENT_MESSAGE, value, ErrorKind.REFINEMENT_FAILURE
        )


class Schema:
    """Base class for every schema kind.

    Subclasses set `kind` and implement `_check`, which only runs once the
    value is known to have the right kind.

    Attributes:
        is_optional: Absent values pass without error.
        has_default: A default fills absent values in parsed output.
        default_value: The default, as a value tree.
        description: Free-form documentation for the schema.
        refinements: Attached refinements, created on first use.
    """

    kind: ClassVar[ValueKind | None] = None
    mismatch_type: ClassVar[ErrorKind] = ErrorKind.TYPE_MISMATCH

    def __init__(self) -> None:
        self.is_optional = False
        self.has_default = False
        self.default_value: Any = None
        self.description: str | None = None
        self.refinements: list[Refinement] | None = None
        self._attached = False

    # -------------------------------------------------------------------------
    # Shared modifiers
    # -------------------------------------------------------------------------

    def optional(self) -> Schema:
        """Allow the value to be absent."""
        self.is_optional = True
        return self

    def default(self, value: Any) -> Schema:
        """Fill absent values with `value` in parsed output.

        A schema with a default is also optional.
        """
        self.has_default = True
        self.is_optional = True
        self.default_value = to_value(value)
        return self

    def describe(self, text: str) -> Schema:
        """Attach a human-readable description."""
        self.description = text
        return self

    def add_refinement(
        self,
        predicate: Callable[..., Any],
        context: Any = MISSING,
        message: str | None = None,
    ) -> Refinement:
        """Append a refinement and return it.

        Raises:
            SchemaDefinitionError: If predicate is not callable.
        """
        if not callable(predicate):
            raise SchemaDefinitionError(
                f"Refinement predicate must be callable, got {type(predicate).__name__}"
            )
        refinement = Refinement(predicate=predicate, message=message, context=context)
        if self.refinements is None:
            self.refinements = []
        self.refinements.append(refinement)
        return refinement

    def refine(self, predicate: Callable[..., Any], message: str | None = None) -> Schema:
        """Attach a custom check that runs after the built-in ones."""
        self.add_refinement(predicate, message=message)
        return self

    def copy(self) -> Schema:
        """Deep copy of this schema, free to be attached to a new parent."""
        clone = copy.deepcopy(self)
        clone._attached = False
        return clone

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @property
    def expected_kind(self) -> ValueKind | None:
        return self.kind

    def validate(self, value: Any = MISSING) -> ErrorCollection:
        """Validate a value against this schema.

        Args:
            value: The value to check. MISSING means no value was supplied.

        Returns:
            ErrorCollection: Errors found, with fields relative to this node
            (empty if valid).
        """
        errors = ErrorCollection()

        if value is MISSING:
            if not self.is_optional:
                errors.error(REQUIRED_MESSAGE, error_type=ErrorKind.MISSING_REQUIRED_FIELD)
            return errors

        if not self._accepts(value):
            errors.error(self._mismatch_message(value), value, self.mismatch_type)
            return errors

        self._check(value, errors)
        errors.merge(self.run_refinements(value))
        return errors

    def is_valid(self, value: Any = MISSING) -> bool:
        """Check if a value passes validation."""
        return not self.validate(value)

    def run_refinements(self, value: Any) -> ErrorCollection:
        """Evaluate every refinement against `value` in attachment order."""
        errors = ErrorCollection()
        for refinement in self.refinements or ():
            error = refinement.evaluate(value)
            if error is not None:
                errors.add(error)
        return errors

    def apply_defaults(self, value: Any = MISSING) -> Any:
        """Return `value` with schema defaults filled in.

        The input is never mutated; defaults are deep-copied so callers
        cannot alter the schema through the output.
        """
        if value is MISSING:
            if self.has_default:
                return copy.deepcopy(self.default_value)
            return MISSING
        return value

    def _accepts(self, value: Any) -> bool:
        return kind_of(value) is self.expected_kind

    def _mismatch_message(self, value: Any) -> str:
        return f"expected {self.expected_kind.value}, got {kind_name(value)}"

    def _check(self, value: Any, errors: ErrorCollection) -> None:
        """Kind-specific checks; the value already has the expected kind."""

    # -------------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------------

    def _adopt(self, child: Any, label: str) -> Schema:
        """Take ownership of a child schema.

        Raises:
            SchemaDefinitionError: If child is not a schema, or already
                belongs to another parent.
        """
        self._check_adoptable(child, label)
        child._attached = True
        return child

    def _check_adoptable(self, child: Any, label: str) -> None:
        if not isinstance(child, Schema):
            raise SchemaDefinitionError(
                f"'{label}' must be a Schema, got {type(child).__name__}"
            )
        if child is self or child._attached:
            raise SchemaDefinitionError(
                f"Schema for '{label}' is already attached to another parent; "
                "use .copy() to reuse it"
            )

    def __repr__(self) -> str:
        flags = []
        if self.is_optional:
            flags.append("optional")
        if self.has_default:
            flags.append(f"default={self.default_value!r}")
        suffix = f" {' '.join(flags)}" if flags else ""
        return f"<{type(self).__name__}{suffix}>"


__all__ = [
    "REFINEMENT_MESSAGE",
    "REQUIRED_MESSAGE",
    "Refinement",
    "Schema",
]
