"""Type guard functions for runtime type checking in litequery.

This module provides type-safe runtime checks that help the type checker
understand type narrowing, replacing defensive hasattr() and duck typing patterns.
"""

import sqlite3
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typing_extensions import TypeGuard

__all__ = ("has_sqlite_error", "is_parameter_mapping", "is_value_iterable")


def has_sqlite_error(obj: Any) -> "TypeGuard[sqlite3.Error]":
    """Check if an exception carries SQLite extended error information.

    ``sqlite_errorcode`` and ``sqlite_errorname`` exist on Python 3.11+.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return isinstance(obj, sqlite3.Error) and isinstance(getattr(obj, "sqlite_errorcode", None), int)


def is_parameter_mapping(obj: Any) -> "TypeGuard[Mapping[str, Any]]":
    """Check if statement parameters should be bound by name.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return isinstance(obj, Mapping)


def is_value_iterable(obj: Any) -> "TypeGuard[Iterable[Any]]":
    """Check if a value is an iterable of values rather than a scalar.

    Strings and bytes are iterable but are treated as scalars.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return isinstance(obj, Iterable) and not isinstance(obj, (str, bytes, bytearray, Mapping))

