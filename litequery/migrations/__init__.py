"""Schema migration helpers."""

from litequery.migrations.helper import MigrationHelper

__all__ = ("MigrationHelper",)
