"""Safe-parse entry point.

`safe_parse` runs a schema against a document and reports either the
validated data (with defaults filled in) or the full error collection. It
never raises for invalid data; only misuse of the API raises.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from isonantic.core.log import get_logger
from isonantic.errors import DocumentValidationError, ErrorCollection, SchemaDefinitionError
from isonantic.schema import Schema
from isonantic.value import MISSING, to_value

logger = get_logger(__name__)


class SafeParseResult(BaseModel):
    """Outcome of `safe_parse`.

    Exactly one of `data` and `errors` is populated: `data` on success,
    `errors` on failure.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    success: bool
    data: Any = None
    errors: ErrorCollection | None = None

    @model_validator(mode="after")
    def check_exclusive(self) -> SafeParseResult:
        if self.success and self.errors is not None:
            raise ValueError("successful result must not carry errors")
        if not self.success and (self.errors is None or self.data is not None):
            raise ValueError("failed result must carry errors and no data")
        return self

    def unwrap(self) -> Any:
        """Return the data, or raise DocumentValidationError on failure."""
        if not self.success:
            raise DocumentValidationError(self.errors)
        return self.data


def _require_schema(schema: Any) -> Schema:
    if not isinstance(schema, Schema):
        raise SchemaDefinitionError(
            f"safe_parse requires a Schema, got {type(schema).__name__}"
        )
    return schema


def safe_parse(schema: Schema, value: Any) -> SafeParseResult:
    """Validate a document and return data or errors.

    Args:
        schema: Root schema, usually a DocumentSchema.
        value: Decoded document (dict tree, pydantic model or dataclass).

    Returns:
        SafeParseResult: `success=True` with the input echoed back plus
        defaults, or `success=False` with every validation error.

    Raises:
        SchemaDefinitionError: If schema is not a Schema.

    Example:
        >>> result = safe_parse(schema, {"users": []})
        >>> if not result.success:
        ...     print(result.errors.to_string())
    """
    schema = _require_schema(schema)
    data = to_value(value)

    errors = schema.validate(data)
    if errors:
        logger.debug("Validation failed with %d error(s)", errors.count())
        return SafeParseResult(success=False, errors=errors)

    output = schema.apply_defaults(data)
    logger.debug("Validation succeeded")
    return SafeParseResult(success=True, data=None if output is MISSING else output)


def parse(schema: Schema, value: Any) -> Any:
    """Validate a document and return its data.

    Raises:
        DocumentValidationError: If validation fails.
        SchemaDefinitionError: If schema is not a Schema.
    """
    return safe_parse(schema, value).unwrap()


__all__ = ["SafeParseResult", "parse", "safe_parse"]
