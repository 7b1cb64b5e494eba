from __future__ import annotations

from pathlib import Path

import pytest

here = Path(__file__).parent
root_path = here.parent


@pytest.fixture
def database_path(tmp_path: Path) -> Path:
    """Location for a file-backed SQLite database."""
    return tmp_path / "litequery.db"
