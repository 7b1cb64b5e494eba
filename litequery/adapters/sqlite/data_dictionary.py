"""SQLite-specific data dictionary for metadata queries."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from litequery.utils.logging import get_logger

if TYPE_CHECKING:
    from litequery.adapters.sqlite.driver import SqliteDriver

__all__ = ("ColumnMetadata", "SqliteDataDictionary")

logger = get_logger("adapters.sqlite.data_dictionary")


@dataclass(frozen=True)
class ColumnMetadata:
    """One row of ``PRAGMA table_info``."""

    cid: int
    name: str
    type: str
    notnull: int
    dflt_value: "str | None"
    pk: int

    @property
    def is_primary_key(self) -> bool:
        return self.pk > 0

    def column_definition(self, *, inline_primary_key: bool = True) -> str:
        """Rebuild the column definition from catalog metadata.

        ``dflt_value`` is the default expression as SQL text with any enclosing
        parentheses removed, so it is wrapped again to stay valid for function
        calls and other expressions.

        Args:
            inline_primary_key: Append ``PRIMARY KEY`` for a primary key column.
                Composite keys are declared as a table constraint instead.

        Returns:
            Definition text such as ``TEXT NOT NULL DEFAULT ('x')``.
        """
        parts = [self.type] if self.type else []
        if self.notnull:
            parts.append("NOT NULL")
        if self.dflt_value is not None:
            parts.append(f"DEFAULT ({self.dflt_value})")
        if inline_primary_key and self.is_primary_key:
            parts.append("PRIMARY KEY")
        return " ".join(parts)


class SqliteDataDictionary:
    """Catalog queries against ``sqlite_master`` and table pragmas."""

    __slots__ = ()

    dialect = "sqlite"

    def get_tables(self, driver: "SqliteDriver") -> "list[str]":
        """Names of user tables, in creation order."""
        rows = driver.query(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY rowid"
        )
        return [row["name"] for row in rows]

    def table_exists(self, driver: "SqliteDriver", table: str) -> bool:
        """Check ``sqlite_master`` for a table, binding the name as a parameter."""
        rows = driver.query("SELECT name FROM sqlite_master WHERE type = 'table' AND name = :table", {"table": table})
        return bool(rows)

    def get_columns(self, driver: "SqliteDriver", table: str) -> "list[ColumnMetadata]":
        """Get column information for a table.

        Args:
            driver: Driver to run the pragma on.
            table: Table name, interpolated into the pragma.

        Returns:
            Columns in declaration order; empty when the table does not exist.
        """
        columns: list[ColumnMetadata] = driver.query(f"PRAGMA table_info({table})", schema_type=ColumnMetadata)
        logger.debug("Read %d column(s) for table %s", len(columns), table)
        return columns
