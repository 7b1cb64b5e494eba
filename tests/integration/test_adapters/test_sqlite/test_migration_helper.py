"""Integration tests for the migration helper."""

import pytest

from litequery.adapters.sqlite import ColumnMetadata, SqliteDriver
from litequery.exceptions import ErrorKind, MigrationError
from litequery.migrations import MigrationHelper

pytestmark = pytest.mark.sqlite


@pytest.fixture
def helper(seeded_session: SqliteDriver) -> MigrationHelper:
    return MigrationHelper(seeded_session)


def test_create_and_drop_table(helper: MigrationHelper) -> None:
    assert helper.create_table("tags", {"id": "INTEGER PRIMARY KEY", "label": "TEXT NOT NULL"}) is True
    assert helper.table_exists("tags")
    assert helper.create_table("tags", {"id": "INTEGER"}) is True

    assert helper.drop_table("tags") is True
    assert not helper.table_exists("tags")
    assert helper.drop_table("tags") is True


def test_create_table_with_constraints(helper: MigrationHelper) -> None:
    helper.create_table("memberships", {"user_id": "INTEGER", "group_id": "INTEGER"}, ["PRIMARY KEY (user_id, group_id)"])
    assert [column.pk for column in helper.get_columns("memberships")] == [1, 2]


def test_table_exists_binds_name(helper: MigrationHelper) -> None:
    assert helper.table_exists("users")
    assert not helper.table_exists("users' OR '1'='1")
    assert helper.driver.last_parameters == {"table": "users' OR '1'='1"}


def test_add_column(helper: MigrationHelper) -> None:
    helper.add_column("users", "nickname", "TEXT DEFAULT 'none'")

    assert helper.column_exists("users", "nickname")
    assert helper.driver.table("users").select("nickname").where("id", 1).first() == {"nickname": "none"}


def test_column_exists(helper: MigrationHelper) -> None:
    assert helper.column_exists("users", "email")
    assert not helper.column_exists("users", "missing")
    assert not helper.column_exists("missing", "id")


def test_get_columns(helper: MigrationHelper) -> None:
    columns = helper.get_columns("users")

    assert [column.name for column in columns] == ["id", "name", "email", "age", "status"]
    assert columns[0] == ColumnMetadata(cid=0, name="id", type="INTEGER", notnull=0, dflt_value=None, pk=1)
    assert columns[4].dflt_value == "'active'"


def test_drop_column(helper: MigrationHelper) -> None:
    assert helper.drop_column("users", "email") is True

    assert not helper.column_exists("users", "email")
    assert not helper.table_exists("users_temp")
    assert helper.driver.table("users").select("id", "name", "age").order_by("id").get() == [
        {"id": 1, "name": "Alice", "age": 30},
        {"id": 2, "name": "Bob", "age": 25},
        {"id": 3, "name": "Cara", "age": 41},
    ]

    columns = {column.name: column for column in helper.get_columns("users")}
    assert columns["id"].is_primary_key
    assert columns["name"].notnull == 1
    assert columns["status"].dflt_value == "'active'"
    assert not helper.driver.connection.in_transaction


def test_drop_column_keeps_expression_defaults(helper: MigrationHelper) -> None:
    helper.create_table(
        "events",
        {
            "id": "INTEGER PRIMARY KEY",
            "created": "TEXT DEFAULT (datetime('now'))",
            "stamp": "TEXT DEFAULT CURRENT_TIMESTAMP",
            "score": "INTEGER DEFAULT -1",
            "note": "TEXT",
        },
    )
    helper.driver.table("events").insert({"note": "first"})

    assert helper.drop_column("events", "note") is True

    defaults = {column.name: column.dflt_value for column in helper.get_columns("events")}
    assert defaults == {"id": None, "created": "datetime('now')", "stamp": "CURRENT_TIMESTAMP", "score": "-1"}

    helper.driver.table("events").insert({})
    rows = helper.driver.table("events").order_by("id").get()
    assert len(rows) == 2
    assert rows[1]["created"] is not None
    assert rows[1]["stamp"] is not None
    assert rows[1]["score"] == -1


def test_drop_column_composite_primary_key(helper: MigrationHelper) -> None:
    helper.create_table(
        "memberships",
        {"user_id": "INTEGER", "group_id": "INTEGER", "role": "TEXT"},
        ["PRIMARY KEY (user_id, group_id)"],
    )
    helper.driver.table("memberships").insert({"user_id": 1, "group_id": 2, "role": "owner"})

    helper.drop_column("memberships", "role")

    assert [(column.name, column.pk) for column in helper.get_columns("memberships")] == [
        ("user_id", 1),
        ("group_id", 2),
    ]
    assert helper.driver.table("memberships").get() == [{"user_id": 1, "group_id": 2}]


def test_drop_column_failure_rolls_back(helper: MigrationHelper) -> None:
    helper.create_table("users_temp", {"unrelated": "TEXT"})

    with pytest.raises(MigrationError) as exc_info:
        helper.drop_column("users", "email")

    error = exc_info.value
    assert str(error).startswith("Failed to drop column: ")
    assert str(error).count("\nSQL: ") == 1
    assert error.sql is not None
    assert error.sql.startswith("INSERT INTO users_temp")
    assert error.kind is ErrorKind.EXECUTION
    assert error.__cause__ is not None
    assert helper.column_exists("users", "email")
    assert helper.driver.table("users").count() == 3
    assert not helper.driver.connection.in_transaction


@pytest.mark.parametrize(
    ("table", "column", "message"),
    [
        pytest.param("missing", "id", "Table missing does not exist", id="missing-table"),
        pytest.param("users", "missing", "Column missing does not exist in table users", id="missing-column"),
    ],
)
def test_drop_column_missing(helper: MigrationHelper, table: str, column: str, message: str) -> None:
    with pytest.raises(MigrationError, match=f"Failed to drop column: {message}"):
        helper.drop_column(table, column)
    assert not helper.driver.connection.in_transaction
