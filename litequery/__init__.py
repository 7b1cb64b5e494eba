"""litequery: a thin SQLite access layer with a fluent query builder."""

from litequery import adapters, builder, core, exceptions, migrations, typing, utils
from litequery.__metadata__ import __version__
from litequery.adapters.sqlite import SqliteConfig, SqliteConnectionParams, SqliteDriver
from litequery.builder import QueryBuilder, SafeQuery
from litequery.exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    ErrorKind,
    ExecutionError,
    LiteQueryError,
    MigrationError,
    PrepareError,
    ResultError,
    SQLBuilderError,
)
from litequery.migrations import MigrationHelper
from litequery.typing import DictRow, ModelT, StatementParameters

__all__ = (
    "DatabaseConnectionError",
    "DatabaseError",
    "DictRow",
    "ErrorKind",
    "ExecutionError",
    "LiteQueryError",
    "MigrationError",
    "MigrationHelper",
    "ModelT",
    "PrepareError",
    "QueryBuilder",
    "ResultError",
    "SQLBuilderError",
    "SafeQuery",
    "SqliteConfig",
    "SqliteConnectionParams",
    "SqliteDriver",
    "StatementParameters",
    "__version__",
    "adapters",
    "builder",
    "core",
    "exceptions",
    "migrations",
    "typing",
    "utils",
)
