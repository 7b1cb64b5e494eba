from litequery.core.statement import OperationType, format_sql, get_operation_type

__all__ = ("OperationType", "format_sql", "get_operation_type")
