"""Shared type aliases."""

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any, TypeVar, Union

from typing_extensions import TypeAlias

__all__ = (
    "BindingValue",
    "DictRow",
    "ModelT",
    "ParameterValue",
    "StatementParameters",
)

BindingValue: TypeAlias = Union[int, float, str, bytes, bool, None]
"""Scalar values the engine binds natively."""

ParameterValue: TypeAlias = Union[BindingValue, datetime, date, Decimal, dict, list, tuple]
"""Values accepted from callers; non-native values are coerced before binding."""

StatementParameters: TypeAlias = Union[Sequence[Any], Mapping[str, Any], None]
"""Positional (sequence) or named (mapping) statement parameters."""

DictRow: TypeAlias = dict[str, Any]
"""A result row keyed by column name, in column order."""

ModelT = TypeVar("ModelT")
