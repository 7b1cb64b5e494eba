"""Fluent statement builder bound to a single table."""

from typing import TYPE_CHECKING, Any, overload

from litequery.builder._statement import SafeQuery
from litequery.builder.mixins import (
    DeleteFromClauseMixin,
    InsertValuesMixin,
    LimitOffsetClauseMixin,
    OrderByClauseMixin,
    SelectColumnsMixin,
    UpdateSetClauseMixin,
    WhereClauseMixin,
)
from litequery.core.statement import format_sql
from litequery.exceptions import SQLBuilderError

if TYPE_CHECKING:
    from litequery.builder.mixins import OrderSpec, WherePredicate
    from litequery.protocols import DriverProtocol
    from litequery.typing import ModelT

__all__ = ("COUNT_PROJECTION", "QueryBuilder")

COUNT_PROJECTION = "COUNT(*) AS count"


class QueryBuilder(
    SelectColumnsMixin,
    WhereClauseMixin,
    OrderByClauseMixin,
    LimitOffsetClauseMixin,
    InsertValuesMixin,
    UpdateSetClauseMixin,
    DeleteFromClauseMixin,
):
    """Accumulates query state for one table and executes through a driver.

    Filter, ordering and paging calls mutate the builder and return it.
    Terminal operations render the statement and hand it to the driver.
    Table and column names are interpolated without escaping; values are
    always bound through ``?`` placeholders.

    Example:
        >>> builder = QueryBuilder(driver, "users").where("age", ">", 18).order_by("name")
        >>> builder.to_sql()
        'SELECT * FROM users WHERE age > ? ORDER BY name ASC'
        >>> builder.bindings
        (18,)
    """

    __slots__ = ("_columns", "_driver", "_limit", "_offset", "_order_by", "_table", "_wheres")

    def __init__(self, driver: "DriverProtocol", table: str) -> None:
        if not isinstance(table, str) or not table.strip():
            msg = "Table name must be a non-empty string."
            raise SQLBuilderError(msg)
        self._driver = driver
        self._table = table
        self._columns: "tuple[str, ...]" = ("*",)
        self._wheres: "list[WherePredicate]" = []
        self._order_by: "list[OrderSpec]" = []
        self._limit: "int | None" = None
        self._offset: "int | None" = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table={self._table!r}, sql={self.to_sql()!r}, bindings={self.bindings!r})"

    @property
    def table(self) -> str:
        return self._table

    @property
    def columns(self) -> "tuple[str, ...]":
        return self._columns

    def _render_select(self, projection: str) -> str:
        parts = [f"SELECT {projection} FROM {self._table}"]
        parts.extend(
            clause
            for clause in (
                self._build_where_clause(),
                self._build_order_by_clause(),
                self._build_limit_offset_clause(),
            )
            if clause
        )
        return " ".join(parts)

    def build_select(self) -> SafeQuery:
        """Render the SELECT statement for the current state."""
        return SafeQuery(sql=self._render_select(self._build_projection()), parameters=self.bindings)

    def build_count(self) -> SafeQuery:
        """Render the SELECT statement with ``COUNT(*) AS count`` as projection."""
        return SafeQuery(sql=self._render_select(COUNT_PROJECTION), parameters=self.bindings)

    def to_sql(self, *, pretty: bool = False) -> str:
        """Return the SELECT text, optionally pretty-printed for diagnostics."""
        sql = self.build_select().sql
        return format_sql(sql) if pretty else sql

    @overload
    def get(self, as_object: bool = False, schema_type: None = None) -> "list[Any]": ...
    @overload
    def get(self, as_object: bool = False, *, schema_type: "type[ModelT]") -> "list[ModelT]": ...
    def get(self, as_object: bool = False, schema_type: "type[Any] | None" = None) -> "list[Any]":
        """Execute the SELECT and return every row.

        Args:
            as_object: Return rows as attribute-access objects instead of dicts.
            schema_type: Convert each row to this dataclass or msgspec struct.

        Returns:
            The result rows, possibly empty.
        """
        statement = self.build_select()
        return self._driver.query(statement.sql, statement.parameters, as_object=as_object, schema_type=schema_type)

    def first(self, as_object: bool = False, schema_type: "type[Any] | None" = None) -> Any:
        """Force ``LIMIT 1``, execute, and return the first row or ``None``."""
        rows = self.limit(1).get(as_object=as_object, schema_type=schema_type)
        return rows[0] if rows else None

    def count(self) -> int:
        """Return the number of rows matching the accumulated filters.

        The projection is swapped for ``COUNT(*) AS count`` while the
        statement runs and restored afterwards, even when execution fails.
        """
        columns = self._columns
        self._columns = (COUNT_PROJECTION,)
        try:
            statement = self.build_select()
            rows = self._driver.query(statement.sql, statement.parameters)
        finally:
            self._columns = columns
        if not rows:
            return 0
        return int(rows[0].get("count", 0) or 0)
