from typing import TYPE_CHECKING, Any

from litequery.builder._statement import SafeQuery
from litequery.exceptions import SQLBuilderError
from litequery.utils.type_guards import is_parameter_mapping

if TYPE_CHECKING:
    from collections.abc import Mapping

    from litequery.protocols import DriverProtocol

__all__ = ("InsertValuesMixin",)


class InsertValuesMixin:
    """Mixin providing INSERT statements for the builder's table.

    Filters, ordering and paging do not apply to inserts and are ignored.
    """

    __slots__ = ()

    _driver: "DriverProtocol"
    _table: str

    def build_insert(self, data: "Mapping[str, Any]") -> SafeQuery:
        """Render ``INSERT INTO <table> (<cols>) VALUES (?, ...)``.

        Columns and values follow the mapping's iteration order. An empty
        mapping renders ``INSERT INTO <table> DEFAULT VALUES``.

        Raises:
            SQLBuilderError: If ``data`` is not a mapping.
        """
        if not is_parameter_mapping(data):
            msg = f"Insert data must be a mapping of column to value, got {type(data).__name__}."
            raise SQLBuilderError(msg)
        if not data:
            return SafeQuery(sql=f"INSERT INTO {self._table} DEFAULT VALUES")
        columns = ", ".join(data.keys())
        placeholders = ", ".join("?" for _ in data)
        return SafeQuery(sql=f"INSERT INTO {self._table} ({columns}) VALUES ({placeholders})", parameters=tuple(data.values()))

    def insert(self, data: "Mapping[str, Any]") -> bool:
        """Insert one row and return whether the statement succeeded."""
        statement = self.build_insert(data)
        return self._driver.execute(statement.sql, statement.parameters)
