"""Statement classification and formatting helpers.

Statements are never rewritten before execution. sqlglot is only used to
describe a statement (its operation type) for diagnostics and to pretty print
rendered SQL on request.
"""

from typing import Literal

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError, TokenError

from litequery.utils.logging import get_logger

__all__ = ("OperationType", "format_sql", "get_operation_type")

OperationType = Literal[
    "SELECT", "INSERT", "UPDATE", "DELETE", "CREATE", "DROP", "ALTER", "PRAGMA", "BEGIN", "COMMIT", "ROLLBACK"
]

logger = get_logger("core.statement")

_OPERATION_TYPE_MAP: "tuple[tuple[type[exp.Expression], str], ...]" = (
    (exp.Select, "SELECT"),
    (exp.Union, "SELECT"),
    (exp.Insert, "INSERT"),
    (exp.Update, "UPDATE"),
    (exp.Delete, "DELETE"),
    (exp.Create, "CREATE"),
    (exp.Drop, "DROP"),
    (exp.Alter, "ALTER"),
    (exp.Pragma, "PRAGMA"),
    (exp.Transaction, "BEGIN"),
    (exp.Commit, "COMMIT"),
    (exp.Rollback, "ROLLBACK"),
)


def _first_keyword(sql: str) -> str:
    stripped = sql.strip()
    if not stripped:
        return "UNKNOWN"
    return stripped.split(None, 1)[0].rstrip(";(").upper() or "UNKNOWN"


def get_operation_type(sql: str) -> str:
    """Detect the operation type of a SQL statement.

    The statement is parsed with the SQLite dialect. Statements sqlglot cannot
    parse, or parses into an unmapped expression, fall back to their leading
    keyword.

    Args:
        sql: Statement text.

    Returns:
        Upper-case operation name such as ``SELECT`` or ``PRAGMA``.
    """
    try:
        expression = sqlglot.parse_one(sql, read="sqlite")
    except (ParseError, TokenError):
        return _first_keyword(sql)

    for expression_type, operation in _OPERATION_TYPE_MAP:
        if isinstance(expression, expression_type):
            return operation
    return _first_keyword(sql)


def format_sql(sql: str, *, pretty: bool = True) -> str:
    """Format SQL text for display.

    Args:
        sql: Statement text.
        pretty: Whether to break the statement across lines.

    Returns:
        Formatted SQL, or the input unchanged when sqlglot cannot parse it.
    """
    try:
        formatted = sqlglot.transpile(sql, read="sqlite", write="sqlite", pretty=pretty)
    except (ParseError, TokenError):
        logger.debug("Could not format SQL, returning it unchanged: %s", sql)
        return sql
    return formatted[0] if formatted else sql
