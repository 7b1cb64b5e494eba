from typing import Any

import pytest

from litequery.builder import QueryBuilder


class RecordingDriver:
    """Collects statements instead of running them."""

    def __init__(self, rows: "list[dict[str, Any]] | None" = None, error: "Exception | None" = None) -> None:
        self.rows = rows or []
        self.error = error
        self.calls: list[tuple[str, str, Any]] = []

    def execute(self, sql: str, parameters: Any = None) -> bool:
        self.calls.append(("execute", sql, parameters))
        if self.error is not None:
            raise self.error
        return True

    def query(self, sql: str, parameters: Any = None, as_object: bool = False, schema_type: Any = None) -> "list[Any]":
        self.calls.append(("query", sql, parameters))
        if self.error is not None:
            raise self.error
        return list(self.rows)


@pytest.fixture
def driver() -> RecordingDriver:
    return RecordingDriver()


@pytest.fixture
def users(driver: RecordingDriver) -> QueryBuilder:
    return QueryBuilder(driver, "users")
