"""Clause mixins composed into the query builder."""

from litequery.builder.mixins._delete_from import DeleteFromClauseMixin
from litequery.builder.mixins._insert_values import InsertValuesMixin
from litequery.builder.mixins._limit_offset import LimitOffsetClauseMixin
from litequery.builder.mixins._order_by import OrderByClauseMixin, OrderSpec
from litequery.builder.mixins._select_columns import SelectColumnsMixin
from litequery.builder.mixins._update_set import UpdateSetClauseMixin
from litequery.builder.mixins._where import (
    ComparisonPredicate,
    MembershipPredicate,
    WhereClauseMixin,
    WherePredicate,
)

__all__ = (
    "ComparisonPredicate",
    "DeleteFromClauseMixin",
    "InsertValuesMixin",
    "LimitOffsetClauseMixin",
    "MembershipPredicate",
    "OrderByClauseMixin",
    "OrderSpec",
    "SelectColumnsMixin",
    "UpdateSetClauseMixin",
    "WhereClauseMixin",
    "WherePredicate",
)
