"""Fluent SQL statement builder."""

from litequery.builder._base import QueryBuilder
from litequery.builder._statement import SafeQuery
from litequery.builder.mixins import ComparisonPredicate, MembershipPredicate, OrderSpec

__all__ = ("ComparisonPredicate", "MembershipPredicate", "OrderSpec", "QueryBuilder", "SafeQuery")
