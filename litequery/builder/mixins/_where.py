from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Union

from typing_extensions import Self

from litequery.exceptions import SQLBuilderError
from litequery.utils.logging import get_logger
from litequery.utils.type_guards import is_value_iterable

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = ("ComparisonPredicate", "MembershipPredicate", "WhereClauseMixin", "WherePredicate")

logger = get_logger("builder.where")

Conjunction = Literal["WHERE", "AND", "OR"]

_MISSING: Any = object()
_CONJUNCTIONS = frozenset({"AND", "OR"})


@dataclass(frozen=True)
class ComparisonPredicate:
    """``column <operator> ?``"""

    column: str
    operator: str
    value: Any
    conjunction: Conjunction

    @property
    def bindings(self) -> "tuple[Any, ...]":
        return (self.value,)

    def render(self) -> str:
        return f"{self.conjunction} {self.column} {self.operator} ?"


@dataclass(frozen=True)
class MembershipPredicate:
    """``column IN (?, ?, ...)``, one placeholder per value."""

    column: str
    values: "tuple[Any, ...]"
    conjunction: Conjunction

    @property
    def bindings(self) -> "tuple[Any, ...]":
        return self.values

    def render(self) -> str:
        placeholders = ", ".join("?" for _ in self.values)
        return f"{self.conjunction} {self.column} IN ({placeholders})"


WherePredicate = Union[ComparisonPredicate, MembershipPredicate]


def _normalize_conjunction(conjunction: str) -> str:
    normalized = conjunction.strip().upper()
    if normalized not in _CONJUNCTIONS:
        msg = f"Unsupported conjunction {conjunction!r}, expected 'AND' or 'OR'."
        raise SQLBuilderError(msg)
    return normalized


class WhereClauseMixin:
    """Mixin providing WHERE clause methods for SELECT, UPDATE and DELETE statements.

    Predicates render left to right in insertion order, each joined by its own
    conjunction. Mixed AND/OR chains are not parenthesized, so
    ``a AND b OR c`` evaluates as ``(a AND b) OR c``.
    """

    __slots__ = ()

    _wheres: "list[WherePredicate]"

    def _next_conjunction(self, conjunction: str) -> Conjunction:
        normalized = _normalize_conjunction(conjunction)
        if not self._wheres:
            return "WHERE"
        return "OR" if normalized == "OR" else "AND"

    def where(self, column: str, operator: Any, value: Any = _MISSING, conjunction: str = "AND") -> Self:
        """Add a comparison predicate.

        ``where(column, value)`` is shorthand for ``where(column, "=", value)``.

        Args:
            column: Column expression, interpolated as is.
            operator: Comparison operator such as ``=``, ``!=``, ``>=`` or ``LIKE``,
                or the value when called with two arguments.
            value: Value bound to the placeholder.
            conjunction: ``AND`` or ``OR``. Ignored for the first predicate.

        Raises:
            SQLBuilderError: If the conjunction is not AND or OR.

        Returns:
            The current builder instance for method chaining.
        """
        if value is _MISSING:
            value, operator = operator, "="
        self._wheres.append(
            ComparisonPredicate(
                column=column,
                operator=str(operator),
                value=value,
                conjunction=self._next_conjunction(conjunction),
            )
        )
        return self

    def or_where(self, column: str, operator: Any, value: Any = _MISSING) -> Self:
        """Add a comparison predicate joined with OR."""
        return self.where(column, operator, value, conjunction="OR")

    def where_in(self, column: str, values: "Iterable[Any]", conjunction: str = "AND") -> Self:
        """Add a ``column IN (...)`` predicate.

        An empty ``values`` renders ``column IN ()``, which SQLite accepts and
        which matches no rows.

        Args:
            column: Column expression, interpolated as is.
            values: Values bound one placeholder each, in order.
            conjunction: ``AND`` or ``OR``. Ignored for the first predicate.

        Raises:
            SQLBuilderError: If ``values`` is a scalar or the conjunction is invalid.

        Returns:
            The current builder instance for method chaining.
        """
        if not is_value_iterable(values):
            msg = f"Values for where_in must be a non-string iterable, got {type(values).__name__}."
            raise SQLBuilderError(msg)
        members = tuple(values)
        if not members:
            logger.debug("Empty IN list for column %s renders IN () and matches no rows", column)
        self._wheres.append(
            MembershipPredicate(column=column, values=members, conjunction=self._next_conjunction(conjunction))
        )
        return self

    def or_where_in(self, column: str, values: "Iterable[Any]") -> Self:
        """Add a ``column IN (...)`` predicate joined with OR."""
        return self.where_in(column, values, conjunction="OR")

    @property
    def bindings(self) -> "tuple[Any, ...]":
        """Filter bindings in placeholder order."""
        return tuple(binding for predicate in self._wheres for binding in predicate.bindings)

    def _build_where_clause(self) -> str:
        return " ".join(predicate.render() for predicate in self._wheres)
