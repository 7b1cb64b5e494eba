from collections.abc import Generator

import pytest

from litequery.adapters.sqlite import SqliteConfig, SqliteDriver


@pytest.fixture
def sqlite_session() -> Generator[SqliteDriver, None, None]:
    """Create a SQLite session with a users table."""
    config = SqliteConfig(connection_config={"database": ":memory:"})

    with config.provide_session() as session:
        session.execute(
            """
            CREATE TABLE users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                email TEXT UNIQUE,
                age INTEGER DEFAULT 0,
                status TEXT NOT NULL DEFAULT 'active'
            )
            """
        )
        yield session


@pytest.fixture
def seeded_session(sqlite_session: SqliteDriver) -> SqliteDriver:
    """Session with three users: Alice (30), Bob (25) and Cara (41)."""
    for name, email, age in (("Alice", "alice@example.com", 30), ("Bob", "bob@example.com", 25), ("Cara", None, 41)):
        sqlite_session.table("users").insert({"name": name, "email": email, "age": age})
    return sqlite_session
