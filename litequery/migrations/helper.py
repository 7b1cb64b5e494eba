"""Schema management helpers for SQLite tables."""

from typing import TYPE_CHECKING

from litequery.adapters.sqlite.data_dictionary import SqliteDataDictionary
from litequery.exceptions import DatabaseError, MigrationError
from litequery.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from litequery.adapters.sqlite.data_dictionary import ColumnMetadata
    from litequery.adapters.sqlite.driver import SqliteDriver

__all__ = ("MigrationHelper",)

logger = get_logger("migrations.helper")

SHADOW_TABLE_SUFFIX = "_temp"


class MigrationHelper:
    """Create, alter and drop tables through a driver.

    Table names, column names and definitions are interpolated into DDL
    without escaping and must come from trusted code.
    """

    __slots__ = ("_data_dictionary", "_driver")

    def __init__(self, driver: "SqliteDriver") -> None:
        self._driver = driver
        self._data_dictionary = SqliteDataDictionary()

    @property
    def driver(self) -> "SqliteDriver":
        return self._driver

    def create_table(self, table: str, columns: "Mapping[str, str]", constraints: "Iterable[str]" = ()) -> bool:
        """Create a table unless it already exists.

        Args:
            table: Table name.
            columns: Column name to definition, in declaration order.
            constraints: Table constraints appended after the columns,
                e.g. ``PRIMARY KEY (a, b)``.

        Returns:
            True once the statement ran.
        """
        definitions = [f"{name} {definition}".rstrip() for name, definition in columns.items()]
        definitions.extend(constraints)
        sql = f"CREATE TABLE IF NOT EXISTS {table} ({', '.join(definitions)})"
        logger.debug("Creating table %s", table)
        return self._driver.execute(sql)

    def drop_table(self, table: str) -> bool:
        """Drop a table if it exists."""
        logger.debug("Dropping table %s", table)
        return self._driver.execute(f"DROP TABLE IF EXISTS {table}")

    def add_column(self, table: str, column: str, definition: str) -> bool:
        """Append a column with ``ALTER TABLE ... ADD COLUMN``."""
        logger.debug("Adding column %s to table %s", column, table)
        return self._driver.execute(f"ALTER TABLE {table} ADD COLUMN {column} {definition}")

    def drop_column(self, table: str, column: str) -> bool:
        """Remove a column by rebuilding the table.

        Inside one transaction the table is copied, minus ``column``, into a
        shadow table named ``<table>_temp`` which then replaces the original.
        Type, ``NOT NULL``, ``DEFAULT`` and primary key declarations are carried
        over from the catalog. Indexes, triggers, foreign keys and CHECK
        constraints are not.

        Args:
            table: Table to alter.
            column: Column to remove.

        Raises:
            MigrationError: If any step fails, including a missing table or
                column. The transaction is rolled back first and the original
                error is chained as ``__cause__``.

        Returns:
            True once the rebuild is committed.
        """
        self._driver.begin_transaction()
        try:
            self._rebuild_without(table, column)
            return self._driver.commit()
        except Exception as exc:
            logger.warning("Rolling back drop of column %s from table %s: %s", column, table, exc)
            if self._driver.connection.in_transaction:
                self._driver.rollback()
            if isinstance(exc, DatabaseError):
                msg = f"Failed to drop column: {exc.detail}"
                raise MigrationError(msg, code=exc.code, sql=exc.sql, parameters=exc.parameters) from exc
            msg = f"Failed to drop column: {exc}"
            raise MigrationError(msg) from exc

    def _rebuild_without(self, table: str, column: str) -> None:
        existing = self.get_columns(table)
        if not existing:
            msg = f"Table {table} does not exist"
            raise MigrationError(msg)
        kept = [info for info in existing if info.name != column]
        if len(kept) == len(existing):
            msg = f"Column {column} does not exist in table {table}"
            raise MigrationError(msg)

        primary_keys = [info.name for info in sorted(kept, key=lambda info: info.pk) if info.is_primary_key]
        composite = len(primary_keys) > 1
        definitions = {info.name: info.column_definition(inline_primary_key=not composite) for info in kept}
        constraints = [f"PRIMARY KEY ({', '.join(primary_keys)})"] if composite else []

        shadow = f"{table}{SHADOW_TABLE_SUFFIX}"
        self.create_table(shadow, definitions, constraints)

        column_list = ", ".join(definitions)
        logger.debug("Copying rows from %s into %s", table, shadow)
        self._driver.execute(f"INSERT INTO {shadow} ({column_list}) SELECT {column_list} FROM {table}")
        self.drop_table(table)
        self._driver.execute(f"ALTER TABLE {shadow} RENAME TO {table}")

    def table_exists(self, table: str) -> bool:
        """Check whether a table exists."""
        return self._data_dictionary.table_exists(self._driver, table)

    def column_exists(self, table: str, column: str) -> bool:
        """Check whether a table has a column. False when the table is missing."""
        return any(info.name == column for info in self.get_columns(table))

    def get_columns(self, table: str) -> "list[ColumnMetadata]":
        """Column metadata in declaration order."""
        return self._data_dictionary.get_columns(self._driver, table)
