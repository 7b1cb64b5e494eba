"""Unit tests for column definitions rebuilt from catalog metadata."""

import pytest

from litequery.adapters.sqlite import ColumnMetadata


@pytest.mark.parametrize(
    ("column", "inline_primary_key", "expected"),
    [
        pytest.param(ColumnMetadata(0, "id", "INTEGER", 0, None, 1), True, "INTEGER PRIMARY KEY", id="pk"),
        pytest.param(ColumnMetadata(0, "id", "INTEGER", 0, None, 1), False, "INTEGER", id="composite-pk"),
        pytest.param(ColumnMetadata(1, "name", "TEXT", 1, None, 0), True, "TEXT NOT NULL", id="not-null"),
        pytest.param(
            ColumnMetadata(2, "status", "TEXT", 1, "'active'", 0), True, "TEXT NOT NULL DEFAULT ('active')", id="default"
        ),
        pytest.param(
            ColumnMetadata(3, "created", "TEXT", 0, "datetime('now')", 0),
            True,
            "TEXT DEFAULT (datetime('now'))",
            id="expression-default",
        ),
        pytest.param(
            ColumnMetadata(4, "stamp", "TEXT", 0, "CURRENT_TIMESTAMP", 0),
            True,
            "TEXT DEFAULT (CURRENT_TIMESTAMP)",
            id="keyword-default",
        ),
        pytest.param(ColumnMetadata(5, "misc", "", 0, None, 0), True, "", id="untyped"),
    ],
)
def test_column_definition(column: ColumnMetadata, inline_primary_key: bool, expected: str) -> None:
    assert column.column_definition(inline_primary_key=inline_primary_key) == expected


def test_is_primary_key() -> None:
    assert ColumnMetadata(0, "id", "INTEGER", 0, None, 2).is_primary_key
    assert not ColumnMetadata(0, "id", "INTEGER", 0, None, 0).is_primary_key
