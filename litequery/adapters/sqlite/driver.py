import contextlib
import logging
import sqlite3
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from litequery.adapters.sqlite.core import create_mapped_exception, open_connection, prepare_parameters, resolve_rowcount
from litequery.builder import QueryBuilder
from litequery.core.statement import get_operation_type
from litequery.exceptions import DatabaseError, ExecutionError, ResultError
from litequery.utils.logging import get_logger, log_with_context
from litequery.utils.schema import to_namespace, to_schema

if TYPE_CHECKING:
    from collections.abc import Generator

    from litequery.adapters.sqlite._types import SqliteConnection
    from litequery.typing import DictRow, StatementParameters

__all__ = ("SqliteCursor", "SqliteDriver")

logger = get_logger("adapters.sqlite.driver")


class SqliteCursor:
    """Context manager for SQLite cursor management."""

    def __init__(self, connection: "SqliteConnection") -> None:
        self.connection = connection
        self.cursor: "sqlite3.Cursor | None" = None

    def __enter__(self) -> "sqlite3.Cursor":
        self.cursor = self.connection.cursor()
        return self.cursor

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.cursor is not None:
            with contextlib.suppress(Exception):
                self.cursor.close()


class SqliteDriver:
    """Connection facade over a single SQLite handle.

    Executes parameterized statements, manages transaction boundaries and
    remembers the last statement for diagnostics. Every engine failure is
    raised as a :class:`~litequery.exceptions.DatabaseError` carrying the
    statement text and its parameters.

    Example:
        >>> with SqliteDriver(":memory:") as db:
        ...     db.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT)")
        ...     db.table("users").insert({"name": "A"})
        ...     db.table("users").where("id", 1).first()
        True
        True
        {'id': 1, 'name': 'A'}
    """

    dialect = "sqlite"

    def __init__(
        self, database: str = ":memory:", *, connection: "SqliteConnection | None" = None, **connection_params: Any
    ) -> None:
        """Open or adopt a SQLite connection.

        Args:
            database: Filesystem path or ``:memory:``. Ignored when ``connection`` is given.
            connection: An already configured connection to wrap instead of opening one.
            **connection_params: Extra ``SqliteConnectionParams`` such as ``timeout`` or ``read_only``.

        Raises:
            DatabaseConnectionError: If the database cannot be opened.
        """
        if connection is None:
            connection = open_connection({"database": database, **connection_params})
            logger.debug("Opened SQLite connection to %s", database)
        self._connection = connection
        self._closed = False
        self._last_query: "str | None" = None
        self._last_parameters: "StatementParameters" = None
        self._rows_affected = 0

    def __enter__(self) -> "SqliteDriver":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    @property
    def connection(self) -> "SqliteConnection":
        """The underlying sqlite3 connection."""
        return self._connection

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def last_query(self) -> "str | None":
        """Text of the most recent statement passed to ``execute`` or ``query``."""
        return self._last_query

    @property
    def last_parameters(self) -> "StatementParameters":
        """Parameters of the most recent statement, as supplied by the caller."""
        return self._last_parameters

    @property
    def rows_affected(self) -> int:
        """Rows changed by the most recent ``execute``, 0 when unknown."""
        return self._rows_affected

    def table(self, table: str) -> QueryBuilder:
        """Start a query builder bound to ``table``.

        Args:
            table: Table name. Interpolated into SQL as is, so it must come from trusted code.

        Returns:
            A new builder.
        """
        return QueryBuilder(self, table)

    def with_cursor(self, connection: "SqliteConnection") -> SqliteCursor:
        return SqliteCursor(connection)

    @contextmanager
    def handle_database_exceptions(
        self,
        sql: "str | None" = None,
        parameters: "StatementParameters" = None,
        error_class: "type[DatabaseError] | None" = None,
    ) -> "Generator[None, None, None]":
        """Map SQLite exceptions raised inside the block to litequery exceptions.

        Args:
            sql: Statement being run, attached to the raised error.
            parameters: Parameters being bound, attached to the raised error.
            error_class: Force a specific exception class.

        Raises:
            DatabaseError: Mapped from any ``sqlite3.Error`` or ``sqlite3.Warning``.
        """
        try:
            yield
        except DatabaseError:
            raise
        except (sqlite3.Error, sqlite3.Warning) as exc:
            mapped = create_mapped_exception(exc, sql=sql, parameters=parameters, error_class=error_class)
            log_with_context(
                logger,
                logging.DEBUG,
                f"Statement failed: {exc}",
                sql=sql,
                error=type(mapped).__name__,
                error_kind=str(mapped.kind),
                error_code=mapped.code,
            )
            raise mapped from exc

    def _record(self, sql: str, parameters: "StatementParameters") -> None:
        self._last_query = sql
        self._last_parameters = parameters
        if logger.isEnabledFor(logging.DEBUG):
            log_with_context(
                logger,
                logging.DEBUG,
                "Executing statement",
                sql=sql,
                operation=get_operation_type(sql),
                parameter_count=len(parameters) if parameters else 0,
            )

    def execute(self, sql: str, parameters: "StatementParameters" = None) -> bool:
        """Execute a statement that does not return rows.

        Args:
            sql: Statement text with ``?`` or ``:name`` placeholders.
            parameters: Sequence bound by position or mapping bound by name.

        Raises:
            DatabaseError: If preparing, binding or executing fails.

        Returns:
            True.
        """
        self._record(sql, parameters)
        with self.handle_database_exceptions(sql, parameters):
            prepared = prepare_parameters(parameters)
            with self.with_cursor(self._connection) as cursor:
                cursor.execute(sql, prepared)
                self._rows_affected = resolve_rowcount(cursor)
        return True

    def query(
        self,
        sql: str,
        parameters: "StatementParameters" = None,
        as_object: bool = False,
        schema_type: "type[Any] | None" = None,
    ) -> "list[Any]":
        """Execute a statement and return every result row.

        The cursor is drained before returning.

        Args:
            sql: Statement text with ``?`` or ``:name`` placeholders.
            parameters: Sequence bound by position or mapping bound by name.
            as_object: Return rows as attribute-access objects instead of dicts.
            schema_type: Convert each row to this dataclass or msgspec struct.

        Raises:
            DatabaseError: If preparing, binding or executing fails.
            ResultError: If reading rows from the cursor fails.

        Returns:
            Rows in engine order.
        """
        self._record(sql, parameters)
        with self.handle_database_exceptions(sql, parameters):
            prepared = prepare_parameters(parameters)
            with self.with_cursor(self._connection) as cursor:
                cursor.execute(sql, prepared)
                column_names = [column[0] for column in cursor.description or ()]
                with self.handle_database_exceptions(sql, parameters, error_class=ResultError):
                    fetched = cursor.fetchall()

        rows: list[DictRow] = [dict(zip(column_names, row)) for row in fetched]
        if schema_type is not None:
            return to_schema(rows, schema_type)
        if as_object:
            return to_namespace(rows)
        return rows

    def last_insert_id(self) -> int:
        """Row id generated by the most recent successful INSERT on this connection."""
        sql = "SELECT last_insert_rowid()"
        with self.handle_database_exceptions(sql), self.with_cursor(self._connection) as cursor:
            row = cursor.execute(sql).fetchone()
        return int(row[0]) if row else 0

    def begin_transaction(self) -> bool:
        """Begin a database transaction."""
        return self.execute("BEGIN TRANSACTION")

    def commit(self) -> bool:
        """Commit the current transaction."""
        return self.execute("COMMIT")

    def rollback(self) -> bool:
        """Rollback the current transaction."""
        return self.execute("ROLLBACK")

    @contextmanager
    def transaction(self) -> "Generator[SqliteDriver, None, None]":
        """Run the block inside a transaction.

        Commits when the block completes. If the block or the commit fails, an
        open transaction is rolled back and the error re-raised. Transactions do
        not nest.

        Yields:
            This driver.
        """
        self.begin_transaction()
        try:
            yield self
            self.commit()
        except BaseException:
            if self._connection.in_transaction:
                self.rollback()
            raise

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        try:
            self._connection.close()
        except sqlite3.Error as exc:
            raise create_mapped_exception(exc, error_class=ExecutionError) from exc
        logger.debug("Closed SQLite connection")
