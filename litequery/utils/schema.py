"""Row presentation helpers.

Rows are always materialized as ``dict`` records first; these helpers only
change how they are handed back to the caller.
"""

import dataclasses
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any

import msgspec

from litequery.exceptions import LiteQueryError

if TYPE_CHECKING:
    from litequery.typing import DictRow

__all__ = ("is_dataclass_type", "to_namespace", "to_schema")


def is_dataclass_type(obj: Any) -> bool:
    """Check if an object is a dataclass type.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return isinstance(obj, type) and dataclasses.is_dataclass(obj)


def to_namespace(rows: "list[DictRow]") -> "list[SimpleNamespace]":
    """Present rows as attribute-access objects."""
    return [SimpleNamespace(**row) for row in rows]


def to_schema(rows: "list[DictRow]", schema_type: "type[Any]") -> "list[Any]":
    """Convert rows to a specified schema type.

    Supports dataclasses, msgspec structs and anything else ``msgspec.convert``
    understands (TypedDicts, NamedTuples).

    Args:
        rows: Materialized result rows.
        schema_type: Target type for each row.

    Raises:
        LiteQueryError: If a row cannot be converted to ``schema_type``.

    Returns:
        Converted rows, in order.
    """
    try:
        if is_dataclass_type(schema_type):
            return [schema_type(**row) for row in rows]
        return msgspec.convert(rows, type=list[schema_type], strict=False)  # type: ignore[valid-type]
    except (msgspec.ValidationError, TypeError) as exc:
        msg = f"Could not convert rows to {schema_type!r}: {exc}"
        raise LiteQueryError(msg) from exc
