from typing import TYPE_CHECKING, Any

from typing_extensions import Self

from litequery.exceptions import SQLBuilderError
from litequery.utils.type_guards import is_value_iterable

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = ("SelectColumnsMixin",)


class SelectColumnsMixin:
    """Mixin providing the SELECT projection."""

    __slots__ = ()

    _columns: "tuple[str, ...]"

    def select(self, *columns: "str | Iterable[str]") -> Self:
        """Replace the projection.

        Accepts ``select("id", "name")`` or ``select(["id", "name"])``. Column
        expressions are interpolated as is. Calling ``select()`` with no
        columns resets the projection to ``*``.

        Raises:
            SQLBuilderError: If a column is not a string.

        Returns:
            The current builder instance for method chaining.
        """
        flattened: list[Any] = []
        for column in columns:
            if is_value_iterable(column):
                flattened.extend(column)
            else:
                flattened.append(column)
        for column in flattened:
            if not isinstance(column, str):
                msg = f"Column expressions must be strings, got {type(column).__name__}."
                raise SQLBuilderError(msg)
        self._columns = tuple(flattened) or ("*",)
        return self

    def _build_projection(self) -> str:
        return ", ".join(self._columns) or "*"
