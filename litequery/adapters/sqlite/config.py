"""SQLite database configuration."""

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, ClassVar

from litequery.adapters.sqlite._types import SqliteConnection, SqliteConnectionParams
from litequery.adapters.sqlite.core import MEMORY_DATABASE, open_connection
from litequery.adapters.sqlite.driver import SqliteDriver
from litequery.exceptions import ImproperConfigurationError
from litequery.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = ("SqliteConfig",)

logger = get_logger("adapters.sqlite.config")


class SqliteConfig:
    """SQLite configuration producing one connection per session."""

    __slots__ = ("connection_config",)

    driver_type: "ClassVar[type[SqliteDriver]]" = SqliteDriver
    connection_type: "ClassVar[type[SqliteConnection]]" = SqliteConnection

    def __init__(self, *, connection_config: "SqliteConnectionParams | dict[str, Any] | None" = None) -> None:
        """Initialize SQLite configuration.

        Args:
            connection_config: Connection parameters, see ``SqliteConnectionParams``.

        Raises:
            ImproperConfigurationError: If a parameter is out of range.
        """
        config: dict[str, Any] = dict(connection_config or {})
        database = str(config.get("database") or MEMORY_DATABASE)
        config["database"] = database
        if database.startswith("file:") and (config.get("read_only") or config.get("create") is False):
            logger.debug(
                "Database URI detected (%s); read_only/create flags are ignored, set mode= in the URI instead.",
                database,
            )

        timeout = config.get("timeout")
        if timeout is not None and timeout < 0:
            msg = f"timeout must be non-negative, got {timeout!r}"
            raise ImproperConfigurationError(msg)
        cached_statements = config.get("cached_statements")
        if cached_statements is not None and cached_statements < 0:
            msg = f"cached_statements must be non-negative, got {cached_statements!r}"
            raise ImproperConfigurationError(msg)

        self.connection_config = config

    def __repr__(self) -> str:
        return f"{type(self).__name__}(connection_config={self.connection_config!r})"

    @property
    def database(self) -> str:
        return str(self.connection_config["database"])

    def create_connection(self) -> SqliteConnection:
        """Create a new SQLite connection.

        Returns:
            SqliteConnection: A connection in autocommit mode with foreign keys enabled.
        """
        return open_connection(self.connection_config)

    @contextmanager
    def provide_connection(self, *args: Any, **kwargs: Any) -> "Generator[SqliteConnection, None, None]":
        """Provide a SQLite connection context manager.

        Yields:
            SqliteConnection: A connection closed when the block exits.
        """
        connection = self.create_connection()
        try:
            yield connection
        finally:
            connection.close()

    @contextmanager
    def provide_session(self, *args: Any, **kwargs: Any) -> "Generator[SqliteDriver, None, None]":
        """Provide a SQLite driver session.

        Yields:
            SqliteDriver: A driver that owns its connection and closes it when the block exits.
        """
        with self.driver_type(connection=self.create_connection()) as driver:
            yield driver

