from dataclasses import dataclass
from typing import Literal

from typing_extensions import Self

__all__ = ("OrderByClauseMixin", "OrderSpec")

Direction = Literal["ASC", "DESC"]


@dataclass(frozen=True)
class OrderSpec:
    column: str
    direction: Direction

    def render(self) -> str:
        return f"{self.column} {self.direction}"


class OrderByClauseMixin:
    """Mixin providing ORDER BY clause."""

    __slots__ = ()

    _order_by: "list[OrderSpec]"

    def order_by(self, column: str, direction: str = "ASC") -> Self:
        """Append an ordering term.

        Any direction other than ``DESC`` (case-insensitive) is treated as ``ASC``.

        Args:
            column: Column expression, interpolated as is.
            direction: ``ASC`` or ``DESC``.

        Returns:
            The current builder instance for method chaining.
        """
        normalized: Direction = "DESC" if str(direction).strip().upper() == "DESC" else "ASC"
        self._order_by.append(OrderSpec(column=column, direction=normalized))
        return self

    def _build_order_by_clause(self) -> str:
        if not self._order_by:
            return ""
        return "ORDER BY " + ", ".join(spec.render() for spec in self._order_by)
