from typing import TYPE_CHECKING

from typing_extensions import Self

from litequery.builder._statement import SafeQuery

if TYPE_CHECKING:
    from litequery.protocols import DriverProtocol

__all__ = ("DeleteFromClauseMixin",)


class DeleteFromClauseMixin:
    """Mixin providing DELETE statements filtered by the accumulated predicates."""

    __slots__ = ()

    _driver: "DriverProtocol"
    _table: str

    def build_delete(self) -> SafeQuery:
        """Render ``DELETE FROM <table> [WHERE ...]``.

        Without predicates every row is deleted.
        """
        sql = f"DELETE FROM {self._table}"
        where_clause = self._build_where_clause()  # type: ignore[attr-defined]
        if where_clause:
            sql = f"{sql} {where_clause}"
        return SafeQuery(sql=sql, parameters=self.bindings)  # type: ignore[attr-defined]

    def delete(self) -> Self:
        """Execute a DELETE and return the builder for further use."""
        statement = self.build_delete()
        self._driver.execute(statement.sql, statement.parameters)
        return self
