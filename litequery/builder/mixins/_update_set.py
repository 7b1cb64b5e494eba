from typing import TYPE_CHECKING, Any

from typing_extensions import Self

from litequery.builder._statement import SafeQuery
from litequery.exceptions import SQLBuilderError
from litequery.utils.type_guards import is_parameter_mapping

if TYPE_CHECKING:
    from collections.abc import Mapping

    from litequery.builder.mixins._where import WherePredicate
    from litequery.protocols import DriverProtocol

__all__ = ("UpdateSetClauseMixin",)


class UpdateSetClauseMixin:
    """Mixin providing UPDATE statements filtered by the accumulated predicates."""

    __slots__ = ()

    _driver: "DriverProtocol"
    _table: str
    _wheres: "list[WherePredicate]"

    def build_update(self, data: "Mapping[str, Any]") -> SafeQuery:
        """Render ``UPDATE <table> SET col = ?, ... [WHERE ...]``.

        Parameters are the SET values in mapping order followed by the filter
        bindings. Without predicates every row is updated.

        Raises:
            SQLBuilderError: If ``data`` is not a mapping.
        """
        if not is_parameter_mapping(data):
            msg = f"Update data must be a mapping of column to value, got {type(data).__name__}."
            raise SQLBuilderError(msg)
        assignments = ", ".join(f"{column} = ?" for column in data)
        sql = f"UPDATE {self._table} SET {assignments}"
        where_clause = self._build_where_clause()  # type: ignore[attr-defined]
        if where_clause:
            sql = f"{sql} {where_clause}"
        return SafeQuery(sql=sql, parameters=(*data.values(), *self.bindings))  # type: ignore[attr-defined]

    def update(self, data: "Mapping[str, Any]") -> Self:
        """Execute an UPDATE and return the builder for further use."""
        statement = self.build_update(data)
        self._driver.execute(statement.sql, statement.parameters)
        return self
