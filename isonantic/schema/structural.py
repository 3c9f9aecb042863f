"""Structural schemas: object, array, table and document.

Structural schemas recurse into their children and re-root every child
error under the child's field name or `[index]`, so the final error field
is the full path from the validated root to the offending leaf, e.g.
`people.[0].email`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from isonantic.errors import ErrorCollection, ErrorKind, SchemaDefinitionError
from isonantic.value import MISSING, ValueKind

from .base import Schema

if TYPE_CHECKING:
    from isonantic.parse import SafeParseResult

DOCUMENT_MESSAGE = "expected document object"


def _adopt_all(owner: Schema, children: Mapping[str, Any] | None, label: str) -> dict[str, Schema]:
    if children is None:
        return {}
    if not isinstance(children, Mapping):
        raise SchemaDefinitionError(
            f"{label} must be a mapping of name to schema, got {type(children).__name__}"
        )
    # Check everything first so a rejected mapping leaves no child attached.
    seen: set[int] = set()
    for name, child in children.items():
        if not isinstance(name, str):
            raise SchemaDefinitionError(f"{label} names must be strings, got {name!r}")
        owner._check_adoptable(child, name)
        if id(child) in seen:
            raise SchemaDefinitionError(
                f"Schema for '{name}' is already attached to another parent; "
                "use .copy() to reuse it"
            )
        seen.add(id(child))
    return {name: owner._adopt(child, name) for name, child in children.items()}


class ObjectSchema(Schema):
    """Validates an object field by field, in declaration order.

    Undeclared fields are ignored and echoed unchanged into parsed output.
    """

    kind = ValueKind.OBJECT

    def __init__(self, fields: Mapping[str, Schema] | None = None) -> None:
        super().__init__()
        self.fields: dict[str, Schema] = _adopt_all(self, fields, "Object fields")

    @property
    def shape(self) -> Mapping[str, Schema]:
        """Read-only view of the declared fields."""
        return MappingProxyType(self.fields)

    def extend(self, fields: Mapping[str, Schema]) -> ObjectSchema:
        """New schema with copies of these fields plus `fields`.

        Same-named fields in `fields` replace the existing ones.
        """
        clone = self.copy()
        clone.fields.update(_adopt_all(clone, fields, "Object fields"))
        return clone

    def pick(self, keys: Iterable[str]) -> ObjectSchema:
        """New schema keeping only `keys` (declaration order is preserved).

        Refinements are not carried over since they may depend on dropped fields.

        Raises:
            SchemaDefinitionError: If a key is not a declared field.
        """
        keep = self._known_keys(keys)
        return self._derive(lambda name: name in keep)

    def omit(self, keys: Iterable[str]) -> ObjectSchema:
        """New schema without `keys`.

        Raises:
            SchemaDefinitionError: If a key is not a declared field.
        """
        drop = self._known_keys(keys)
        return self._derive(lambda name: name not in drop)

    def _known_keys(self, keys: Iterable[str]) -> set[str]:
        if isinstance(keys, str):
            keys = [keys]
        requested = set(keys)
        unknown = sorted(requested - self.fields.keys())
        if unknown:
            raise SchemaDefinitionError(f"Unknown field(s): {', '.join(unknown)}")
        return requested

    def _derive(self, keep: Callable[[str], bool]) -> ObjectSchema:
        clone = self.copy()
        # Mutate in place: a row-mode table shares this dict with its record.
        for name in list(clone.fields):
            if not keep(name):
                del clone.fields[name]
        clone.refinements = None
        return clone

    def _check(self, value: dict, errors: ErrorCollection) -> None:
        self._check_fields(value, errors)

    def _check_fields(self, value: dict, errors: ErrorCollection) -> None:
        for name, child in self.fields.items():
            errors.merge(child.validate(value.get(name, MISSING)), prefix=name)

    def apply_defaults(self, value: Any = MISSING) -> Any:
        if value is MISSING or not isinstance(value, dict):
            return super().apply_defaults(value)

        output = dict(value)
        for name, child in self.fields.items():
            filled = child.apply_defaults(value.get(name, MISSING))
            if filled is not MISSING:
                output[name] = filled
        return output


class ArraySchema(Schema):
    """Validates an array whose items all share one schema."""

    kind = ValueKind.ARRAY

    def __init__(self, item_schema: Schema) -> None:
        super().__init__()
        self.item_schema = self._adopt(item_schema, "items")
        self.min_len: int | None = None
        self.max_len: int | None = None

    def min(self, n: int) -> ArraySchema:
        self.min_len = self._bound(n, "Minimum length")
        return self

    def max(self, n: int) -> ArraySchema:
        self.max_len = self._bound(n, "Maximum length")
        return self

    @staticmethod
    def _bound(n: Any, label: str) -> int:
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise SchemaDefinitionError(f"{label} must be a non-negative integer, got {n!r}")
        return n

    def _check(self, value: list, errors: ErrorCollection) -> None:
        count = len(value)

        if self.min_len is not None and count < self.min_len:
            errors.error(
                f"array must have at least {self.min_len} items",
                value,
                ErrorKind.STRUCTURAL_MISMATCH,
            )

        if self.max_len is not None and count > self.max_len:
            errors.error(
                f"array must have at most {self.max_len} items",
                value,
                ErrorKind.STRUCTURAL_MISMATCH,
            )

        for index, item in enumerate(value):
            errors.merge(self.item_schema.validate(item), prefix=f"[{index}]")

    def apply_defaults(self, value: Any = MISSING) -> Any:
        if value is MISSING or not isinstance(value, list):
            return super().apply_defaults(value)
        return [self.item_schema.apply_defaults(item) for item in value]


class TableSchema(ObjectSchema):
    """A named object schema for tabular blocks.

    In record mode the table validates a single object. After `rows()` it
    validates an array of records, each checked against the table's fields
    and reported under `[index]`.
    """

    mismatch_type = ErrorKind.STRUCTURAL_MISMATCH

    def __init__(self, name: str, fields: Mapping[str, Schema] | None = None) -> None:
        if not isinstance(name, str) or not name:
            raise SchemaDefinitionError(f"Table name must be a non-empty string, got {name!r}")
        super().__init__(fields)
        self.name = name
        self.row_schema: ArraySchema | None = None

    def get_name(self) -> str:
        return self.name

    def rows(self, min_rows: int | None = None, max_rows: int | None = None) -> TableSchema:
        """Switch to row mode, optionally bounding the number of rows."""
        if self.row_schema is None:
            record = ObjectSchema()
            # The record shares the field dict, so later extend/pick/omit
            # on the table apply to rows too.
            record.fields = self.fields
            self.row_schema = ArraySchema(record)
        if min_rows is not None:
            self.row_schema.min(min_rows)
        if max_rows is not None:
            self.row_schema.max(max_rows)
        return self

    @property
    def expected_kind(self) -> ValueKind:
        if self.row_schema is not None:
            return ValueKind.ARRAY
        return ValueKind.OBJECT

    def _check(self, value: Any, errors: ErrorCollection) -> None:
        if self.row_schema is not None:
            self.row_schema._check(value, errors)
        else:
            self._check_fields(value, errors)

    def apply_defaults(self, value: Any = MISSING) -> Any:
        if self.row_schema is not None and isinstance(value, list):
            return self.row_schema.apply_defaults(value)
        return super().apply_defaults(value)

    def __repr__(self) -> str:
        mode = "rows" if self.row_schema is not None else "record"
        return f"<TableSchema {self.name!r} {mode}>"


class DocumentSchema(Schema):
    """Top-level schema mapping block names to block schemas.

    The root must be an object. Each declared block is validated against its
    own schema; absent blocks follow that schema's optional/default policy.
    """

    kind = ValueKind.OBJECT
    mismatch_type = ErrorKind.STRUCTURAL_MISMATCH

    def __init__(self, blocks: Mapping[str, Schema] | None = None) -> None:
        super().__init__()
        self.blocks: dict[str, Schema] = _adopt_all(self, blocks, "Document blocks")

    def block(self, name: str, schema: Schema) -> DocumentSchema:
        """Declare one more block."""
        self.blocks.update(_adopt_all(self, {name: schema}, "Document blocks"))
        return self

    def validate(self, value: Any = MISSING) -> ErrorCollection:
        if value is MISSING and self.is_optional:
            return ErrorCollection()
        if value is MISSING or not isinstance(value, dict):
            errors = ErrorCollection()
            errors.error(DOCUMENT_MESSAGE, value, ErrorKind.STRUCTURAL_MISMATCH)
            return errors
        return super().validate(value)

    def _check(self, value: dict, errors: ErrorCollection) -> None:
        for name, schema in self.blocks.items():
            errors.merge(schema.validate(value.get(name, MISSING)), prefix=name)

    def apply_defaults(self, value: Any = MISSING) -> Any:
        if not isinstance(value, dict):
            return super().apply_defaults(value)

        output = dict(value)
        for name, schema in self.blocks.items():
            filled = schema.apply_defaults(value.get(name, MISSING))
            if filled is not MISSING:
                output[name] = filled
        return output

    def safe_parse(self, value: Any) -> SafeParseResult:
        """Validate `value`; see `isonantic.parse.safe_parse`."""
        from isonantic.parse import safe_parse

        return safe_parse(self, value)

    def parse(self, value: Any) -> Any:
        """Validate `value`, raising on failure; see `isonantic.parse.parse`."""
        from isonantic.parse import parse

        return parse(self, value)


__all__ = [
    "DOCUMENT_MESSAGE",
    "ArraySchema",
    "DocumentSchema",
    "ObjectSchema",
    "TableSchema",
]
