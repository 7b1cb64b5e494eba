from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, ClassVar

from litequery.utils.serializers import to_json

__all__ = (
    "CheckViolationError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseLockedError",
    "ErrorKind",
    "ExecutionError",
    "ForeignKeyViolationError",
    "ImproperConfigurationError",
    "IntegrityError",
    "LiteQueryError",
    "MigrationError",
    "NotNullViolationError",
    "PrepareError",
    "ResultError",
    "SQLBuilderError",
    "UniqueViolationError",
)


class LiteQueryError(Exception):
    """Base exception class from which all litequery exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``LiteQueryError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ImproperConfigurationError(LiteQueryError):
    """Improper Configuration error.

    Raised when connection settings are invalid before any engine call is made.
    """


class SQLBuilderError(LiteQueryError):
    """Issues with arguments passed to the query builder."""

    def __init__(self, message: "str | None" = None) -> None:
        if message is None:
            message = "Issues building SQL statement."
        super().__init__(message)


class ErrorKind(Enum):
    """Where in the statement lifecycle a database failure happened."""

    CONNECTION = "connection"
    PREPARE = "prepare"
    EXECUTION = "execution"
    RESULT = "result"

    def __str__(self) -> str:
        return self.value


class DatabaseError(LiteQueryError):
    """Structured database failure.

    Carries the failing statement text and a snapshot of the bound parameters
    next to the engine's error code. The originating engine exception is
    available as ``__cause__``.
    """

    default_kind: "ClassVar[ErrorKind]" = ErrorKind.EXECUTION

    def __init__(
        self,
        message: str,
        *,
        code: int = 0,
        sql: "str | None" = None,
        parameters: "Sequence[Any] | Mapping[str, Any] | None" = None,
        kind: "ErrorKind | None" = None,
    ) -> None:
        super().__init__(detail=message)
        self._kind = kind or self.default_kind
        self._code = code
        self._sql = sql
        self._parameters = _snapshot(parameters)

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def message(self) -> str:
        return self.detail

    @property
    def code(self) -> int:
        return self._code

    @property
    def sql(self) -> "str | None":
        return self._sql

    @property
    def parameters(self) -> "tuple[Any, ...] | dict[str, Any] | None":
        return self._parameters

    def __str__(self) -> str:
        message = super().__str__()
        if self._sql:
            message += f"\nSQL: {self._sql}"
        if self._parameters:
            message += f"\nParams: {to_json(self._parameters)}"
        return message


class DatabaseConnectionError(DatabaseError):
    """The database could not be opened or configured."""

    default_kind = ErrorKind.CONNECTION


class PrepareError(DatabaseError):
    """The engine rejected the statement text (syntax, unknown table or column)."""

    default_kind = ErrorKind.PREPARE


class ExecutionError(DatabaseError):
    """Binding or executing a prepared statement failed."""

    default_kind = ErrorKind.EXECUTION


class ResultError(DatabaseError):
    """Reading rows from a result cursor failed."""

    default_kind = ErrorKind.RESULT


class IntegrityError(ExecutionError):
    """Data integrity error."""


class UniqueViolationError(IntegrityError):
    """A unique or primary key constraint was violated."""


class ForeignKeyViolationError(IntegrityError):
    """A foreign key constraint was violated."""


class NotNullViolationError(IntegrityError):
    """A NOT NULL constraint was violated."""


class CheckViolationError(IntegrityError):
    """A CHECK constraint was violated."""


class DatabaseLockedError(ExecutionError):
    """The database or a table is locked by another connection."""


class MigrationError(ExecutionError):
    """A multi-step schema change failed and was rolled back."""


def _snapshot(
    parameters: "Sequence[Any] | Mapping[str, Any] | None",
) -> "tuple[Any, ...] | dict[str, Any] | None":
    if parameters is None:
        return None
    if isinstance(parameters, Mapping):
        return dict(parameters)
    return tuple(parameters)
