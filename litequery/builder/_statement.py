from dataclasses import dataclass, field
from typing import Any

__all__ = ("SafeQuery",)


@dataclass(frozen=True)
class SafeQuery:
    """A rendered SQL statement with its positional bindings.

    ``parameters[i]`` binds to the ``i``-th ``?`` placeholder in ``sql``.
    """

    sql: str
    parameters: "tuple[Any, ...]" = field(default_factory=tuple)

    @property
    def placeholder_count(self) -> int:
        return self.sql.count("?")
