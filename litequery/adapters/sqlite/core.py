"""SQLite adapter helpers.

Parameter binding types, value coercion and engine error mapping shared by
the driver and configuration.
"""

import sqlite3
from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from litequery.exceptions import (
    CheckViolationError,
    DatabaseConnectionError,
    DatabaseError,
    DatabaseLockedError,
    ExecutionError,
    ForeignKeyViolationError,
    IntegrityError,
    NotNullViolationError,
    PrepareError,
    ResultError,
    UniqueViolationError,
)
from litequery.utils.serializers import to_json
from litequery.utils.type_guards import has_sqlite_error, is_parameter_mapping

if TYPE_CHECKING:
    from collections.abc import Callable

    from litequery.adapters.sqlite._types import SqliteConnection
    from litequery.typing import BindingValue, StatementParameters

__all__ = (
    "BindingType",
    "build_connection_uri",
    "coerce_value",
    "create_mapped_exception",
    "infer_binding_type",
    "open_connection",
    "prepare_parameters",
    "resolve_rowcount",
)

MEMORY_DATABASE = ":memory:"

SQLITE_ERROR_CODE = 1
SQLITE_BUSY_CODE = 5
SQLITE_LOCKED_CODE = 6
SQLITE_CANTOPEN_CODE = 14
SQLITE_CONSTRAINT_CODE = 19
SQLITE_MISMATCH_CODE = 20
SQLITE_RANGE_CODE = 25
SQLITE_NOTADB_CODE = 26
SQLITE_CONSTRAINT_CHECK_CODE = 275
SQLITE_CONSTRAINT_FOREIGNKEY_CODE = 787
SQLITE_CONSTRAINT_NOTNULL_CODE = 1299
SQLITE_CONSTRAINT_PRIMARYKEY_CODE = 1555
SQLITE_CONSTRAINT_UNIQUE_CODE = 2067

_PREPARE_MESSAGE_PATTERNS = ("syntax error", "no such table", "no such column", "incomplete input", "unrecognized token")


class BindingType(Enum):
    """Storage class a parameter is bound as."""

    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    NULL = "null"
    BOOLEAN = "boolean"
    BLOB = "blob"

    def __str__(self) -> str:
        return self.value


def _time_to_iso(value: "datetime | date | time") -> str:
    return value.isoformat()


def _container_to_json(value: Any) -> str:
    if isinstance(value, tuple):
        return to_json(list(value))
    return to_json(value)


_TYPE_COERCION_MAP: "dict[type[Any], Callable[[Any], BindingValue]]" = {
    datetime: _time_to_iso,
    date: _time_to_iso,
    time: _time_to_iso,
    Decimal: str,
    dict: _container_to_json,
    list: _container_to_json,
    tuple: _container_to_json,
}


def infer_binding_type(value: Any) -> BindingType:
    """Infer the storage class a value binds as.

    ``bool`` is checked before ``int`` since it is an ``int`` subclass.

    Args:
        value: Parameter value as supplied by the caller.

    Returns:
        The binding type. Anything that is not a native scalar binds as TEXT.
    """
    if value is None:
        return BindingType.NULL
    if isinstance(value, bool):
        return BindingType.BOOLEAN
    if isinstance(value, int):
        return BindingType.INTEGER
    if isinstance(value, float):
        return BindingType.FLOAT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BindingType.BLOB
    return BindingType.TEXT


def coerce_value(value: Any) -> "BindingValue":
    """Convert a parameter into a value sqlite3 binds natively.

    Args:
        value: Parameter value as supplied by the caller.

    Returns:
        The value to hand to the engine.
    """
    binding_type = infer_binding_type(value)
    if binding_type is BindingType.BOOLEAN:
        return int(value)
    if binding_type is BindingType.BLOB:
        return bytes(value)
    if binding_type is not BindingType.TEXT or isinstance(value, str):
        return value
    for value_type, converter in _TYPE_COERCION_MAP.items():
        if isinstance(value, value_type):
            return converter(value)
    return str(value)


def prepare_parameters(parameters: "StatementParameters") -> "tuple[BindingValue, ...] | dict[str, BindingValue]":
    """Coerce statement parameters for binding.

    Sequences bind by position (1-based in the engine), mappings bind by name.

    Args:
        parameters: Positional or named parameters, or None.

    Returns:
        A tuple for positional binding or a dict for named binding.
    """
    if parameters is None:
        return ()
    if is_parameter_mapping(parameters):
        return {str(key).lstrip(":@$"): coerce_value(value) for key, value in parameters.items()}
    return tuple(coerce_value(value) for value in parameters)


def resolve_rowcount(cursor: Any) -> int:
    """Resolve rowcount from a SQLite cursor.

    Args:
        cursor: SQLite cursor with optional rowcount metadata.

    Returns:
        Positive rowcount value or 0 when unknown.
    """
    try:
        rowcount = cursor.rowcount
    except AttributeError:
        return 0

    if isinstance(rowcount, int) and rowcount > 0:
        return rowcount
    return 0


def build_connection_uri(database: str, *, read_only: bool = False, create: bool = True) -> str:
    """Build a ``file:`` URI carrying the open flags for a database location.

    Args:
        database: Filesystem path, ``:memory:`` or an existing ``file:`` URI.
        read_only: Open without write access.
        create: Create the database file when it does not exist.

    Returns:
        URI suitable for ``sqlite3.connect(..., uri=True)``.
    """
    if database.startswith("file:"):
        return database
    if database == MEMORY_DATABASE:
        return "file::memory:"
    if read_only:
        mode = "ro"
    elif create:
        mode = "rwc"
    else:
        mode = "rw"
    return f"file:{quote(database)}?mode={mode}"


def open_connection(connection_config: "Mapping[str, Any]") -> "SqliteConnection":
    """Open a SQLite connection ready for use by the driver.

    The handle runs in autocommit mode so transaction control statements are
    issued explicitly, and foreign key enforcement is switched on.

    Args:
        connection_config: Connection parameters, see ``SqliteConnectionParams``.

    Raises:
        DatabaseConnectionError: If the database cannot be opened or configured.

    Returns:
        The open connection.
    """
    params = {key: value for key, value in connection_config.items() if value is not None}
    database = str(params.pop("database", MEMORY_DATABASE))
    uri = build_connection_uri(database, read_only=params.pop("read_only", False), create=params.pop("create", True))

    try:
        connection = sqlite3.connect(uri, uri=True, isolation_level=None, **params)
    except sqlite3.Error as exc:
        raise create_mapped_exception(exc, error_class=DatabaseConnectionError) from exc

    try:
        connection.execute("PRAGMA foreign_keys = ON")
    except sqlite3.Error as exc:
        connection.close()
        raise create_mapped_exception(exc, error_class=DatabaseConnectionError) from exc
    return connection


def _error_code(error: BaseException) -> "tuple[int, str | None]":
    if has_sqlite_error(error):
        return error.sqlite_errorcode, error.sqlite_errorname  # type: ignore[attr-defined]
    return 0, None


def _classify_integrity_error(code: int, message: str) -> "type[DatabaseError]":
    if code in {SQLITE_CONSTRAINT_UNIQUE_CODE, SQLITE_CONSTRAINT_PRIMARYKEY_CODE} or "unique constraint" in message:
        return UniqueViolationError
    if code == SQLITE_CONSTRAINT_FOREIGNKEY_CODE or "foreign key constraint" in message:
        return ForeignKeyViolationError
    if code == SQLITE_CONSTRAINT_NOTNULL_CODE or "not null constraint" in message:
        return NotNullViolationError
    if code == SQLITE_CONSTRAINT_CHECK_CODE or "check constraint" in message:
        return CheckViolationError
    return IntegrityError


def _classify_error(error: BaseException, code: int) -> "type[DatabaseError]":
    message = str(error).lower()
    primary_code = code & 0xFF

    if isinstance(error, sqlite3.IntegrityError) or primary_code == SQLITE_CONSTRAINT_CODE:
        return _classify_integrity_error(code, message)
    if primary_code in {SQLITE_BUSY_CODE, SQLITE_LOCKED_CODE} or "database is locked" in message:
        return DatabaseLockedError
    if primary_code in {SQLITE_CANTOPEN_CODE, SQLITE_NOTADB_CODE}:
        return DatabaseConnectionError
    if isinstance(error, sqlite3.ProgrammingError) or primary_code in {SQLITE_RANGE_CODE, SQLITE_MISMATCH_CODE}:
        return ExecutionError
    if any(pattern in message for pattern in _PREPARE_MESSAGE_PATTERNS):
        return PrepareError
    if isinstance(error, sqlite3.OperationalError) and primary_code == SQLITE_ERROR_CODE:
        return PrepareError
    return ExecutionError


def create_mapped_exception(
    error: BaseException,
    *,
    sql: "str | None" = None,
    parameters: "Sequence[Any] | Mapping[str, Any] | None" = None,
    error_class: "type[DatabaseError] | None" = None,
    description: "str | None" = None,
) -> DatabaseError:
    """Map an engine exception to a structured litequery exception.

    This is a factory function that returns an exception instance rather than
    raising, so it can be used from ``except`` blocks and ``__exit__`` handlers
    alike.

    Mapping priority:
    1. SQLite extended error codes (most reliable)
    2. SQLite exception classes
    3. Error message patterns
    4. ``ExecutionError`` fallback

    Args:
        error: The exception raised by sqlite3.
        sql: Statement text that was being run.
        parameters: Parameters bound to the statement.
        error_class: Force a specific exception class instead of classifying.
        description: Message prefix, defaults to a description of the class.

    Returns:
        An exception whose ``__cause__`` is the original error.
    """
    code, name = _error_code(error)
    if error_class is None:
        error_class = _classify_error(error, code)
    if description is None:
        description = _DESCRIPTIONS.get(error_class, "Database error")
    code_str = f" [{name or 'code'} {code}]" if code else ""
    exc = error_class(f"{description}{code_str}: {error}", code=code, sql=sql, parameters=parameters)
    exc.__cause__ = error
    return exc


_DESCRIPTIONS: "dict[type[DatabaseError], str]" = {
    DatabaseConnectionError: "Failed to connect to database",
    PrepareError: "Failed to prepare statement",
    ExecutionError: "Failed to execute statement",
    ResultError: "Failed to read result row",
    IntegrityError: "Integrity constraint violation",
    UniqueViolationError: "Unique constraint violation",
    ForeignKeyViolationError: "Foreign key constraint violation",
    NotNullViolationError: "Not-null constraint violation",
    CheckViolationError: "Check constraint violation",
    DatabaseLockedError: "Database is locked",
}
