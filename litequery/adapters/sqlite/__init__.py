"""SQLite adapter for litequery."""

from litequery.adapters.sqlite._types import SqliteConnection, SqliteConnectionParams
from litequery.adapters.sqlite.config import SqliteConfig
from litequery.adapters.sqlite.core import BindingType
from litequery.adapters.sqlite.data_dictionary import ColumnMetadata, SqliteDataDictionary
from litequery.adapters.sqlite.driver import SqliteCursor, SqliteDriver

__all__ = (
    "BindingType",
    "ColumnMetadata",
    "SqliteConfig",
    "SqliteConnection",
    "SqliteConnectionParams",
    "SqliteCursor",
    "SqliteDataDictionary",
    "SqliteDriver",
)
