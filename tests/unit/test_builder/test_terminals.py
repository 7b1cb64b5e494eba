"""Unit tests for builder terminal operations against a recording driver."""

import pytest

from litequery.builder import QueryBuilder
from litequery.exceptions import PrepareError


def test_get_passes_statement_to_driver(users: QueryBuilder, driver) -> None:
    driver.rows = [{"id": 1}]
    rows = users.where("id", 1).get()

    assert rows == [{"id": 1}]
    assert driver.calls == [("query", "SELECT * FROM users WHERE id = ?", (1,))]


def test_first_forces_limit_one(users: QueryBuilder, driver) -> None:
    driver.rows = [{"id": 1}]

    assert users.limit(50).first() == {"id": 1}
    assert driver.calls[-1][1] == "SELECT * FROM users LIMIT 1"


def test_first_returns_none_for_no_rows(users: QueryBuilder) -> None:
    assert users.where("id", 999).first() is None


def test_count(users: QueryBuilder, driver) -> None:
    driver.rows = [{"count": 4}]
    users.select("id", "name").where("active", 1)

    assert users.count() == 4
    assert driver.calls == [("query", "SELECT COUNT(*) AS count FROM users WHERE active = ?", (1,))]
    assert users.columns == ("id", "name")


@pytest.mark.parametrize(
    "rows",
    [
        pytest.param([], id="no-rows"),
        pytest.param([{"total": 3}], id="missing-column"),
        pytest.param([{"count": None}], id="null"),
    ],
)
def test_count_defaults_to_zero(users: QueryBuilder, driver, rows: list) -> None:
    driver.rows = rows
    assert users.count() == 0


def test_count_restores_projection_on_error(users: QueryBuilder, driver) -> None:
    driver.error = PrepareError("Failed to prepare statement", sql="SELECT COUNT(*) AS count FROM users")
    users.select("id")

    with pytest.raises(PrepareError):
        users.count()
    assert users.columns == ("id",)
    assert users.to_sql() == "SELECT id FROM users"


def test_build_count_does_not_mutate(users: QueryBuilder) -> None:
    users.select("name").where("id", ">", 1)
    statement = users.build_count()

    assert statement.sql == "SELECT COUNT(*) AS count FROM users WHERE id > ?"
    assert statement.parameters == (1,)
    assert users.columns == ("name",)
