from typing import Any

from typing_extensions import Self

from litequery.exceptions import SQLBuilderError

__all__ = ("LimitOffsetClauseMixin",)


def _validate_count(value: Any, clause: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{clause} must be an integer, got {type(value).__name__}."
        raise SQLBuilderError(msg)
    if value < 0:
        msg = f"{clause} must be non-negative, got {value}."
        raise SQLBuilderError(msg)
    return value


class LimitOffsetClauseMixin:
    """Mixin providing LIMIT and OFFSET clauses."""

    __slots__ = ()

    _limit: "int | None"
    _offset: "int | None"

    def limit(self, value: int) -> Self:
        """Set the row limit, replacing any previous value.

        Raises:
            SQLBuilderError: If ``value`` is not a non-negative integer.
        """
        self._limit = _validate_count(value, "LIMIT")
        return self

    def offset(self, value: int) -> Self:
        """Set the row offset, replacing any previous value.

        Raises:
            SQLBuilderError: If ``value`` is not a non-negative integer.
        """
        self._offset = _validate_count(value, "OFFSET")
        return self

    def _build_limit_offset_clause(self) -> str:
        parts: list[str] = []
        if self._limit is not None:
            parts.append(f"LIMIT {self._limit}")
        if self._offset is not None:
            if self._limit is None:
                # SQLite only accepts OFFSET after a LIMIT; -1 means unbounded.
                parts.append("LIMIT -1")
            parts.append(f"OFFSET {self._offset}")
        return " ".join(parts)
