"""Runtime-checkable protocols for litequery to replace duck typing."""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from litequery.typing import StatementParameters

__all__ = ("DriverProtocol",)


@runtime_checkable
class DriverProtocol(Protocol):
    """What the query builder needs from a connection."""

    def execute(self, sql: str, parameters: "StatementParameters" = None) -> bool:
        """Execute a statement that returns no rows."""
        ...

    def query(
        self,
        sql: str,
        parameters: "StatementParameters" = None,
        as_object: bool = False,
        schema_type: "type[Any] | None" = None,
    ) -> "list[Any]":
        """Execute a statement and return every result row."""
        ...
