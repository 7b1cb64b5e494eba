import sqlite3
from typing import TypedDict

from typing_extensions import NotRequired, TypeAlias

__all__ = ("SqliteConnection", "SqliteConnectionParams")

SqliteConnection: TypeAlias = sqlite3.Connection


class SqliteConnectionParams(TypedDict, total=False):
    """SQLite connection parameters."""

    database: NotRequired[str]
    read_only: NotRequired[bool]
    create: NotRequired[bool]
    timeout: NotRequired[float]
    detect_types: NotRequired[int]
    check_same_thread: NotRequired[bool]
    cached_statements: NotRequired[int]
