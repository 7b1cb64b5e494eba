"""Integration tests for SqliteConfig connections and sessions."""

from pathlib import Path

import pytest

from litequery.adapters.sqlite import SqliteConfig, SqliteDriver

pytestmark = pytest.mark.sqlite


def test_provide_connection_enables_foreign_keys() -> None:
    config = SqliteConfig()
    with config.provide_connection() as connection:
        assert connection.execute("PRAGMA foreign_keys").fetchone() == (1,)
        assert connection.isolation_level is None


def test_provide_session_closes_driver() -> None:
    with SqliteConfig().provide_session() as session:
        assert isinstance(session, SqliteDriver)
        assert session.query("SELECT 1 AS one") == [{"one": 1}]
    assert session.is_closed


def test_file_uri_database(database_path: Path) -> None:
    config = SqliteConfig(connection_config={"database": f"file:{database_path}?mode=rwc", "timeout": 1.0})
    with config.provide_session() as session:
        session.execute("CREATE TABLE t (id INTEGER)")

    assert database_path.exists()
