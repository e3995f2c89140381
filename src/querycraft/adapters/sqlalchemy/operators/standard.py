"""Equality and ordering comparisons for SQLAlchemy."""

from __future__ import annotations

import operator as op_module
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

from ....filters.operators import FilterOperator
from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class _BinaryOperator(SQLAlchemyOperator):
    operator: FilterOperator
    function: Callable[[Any, Any], Any]

    @property
    def name(self) -> FilterOperator:
        return self.operator

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", type(self).function(column, value))


class EqualOperator(_BinaryOperator):
    operator = FilterOperator.EQUALS
    function = op_module.eq


class NotEqualOperator(SQLAlchemyOperator):
    """``!=`` that also matches NULL, like the in-memory evaluator."""

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT_EQUALS

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        if value is None:
            return cast("ColumnElement[bool]", column.is_not(None))
        return cast("ColumnElement[bool]", (column != value) | column.is_(None))


class GreaterThanOperator(_BinaryOperator):
    operator = FilterOperator.GREATER_THAN
    function = op_module.gt


class GreaterEqualOperator(_BinaryOperator):
    operator = FilterOperator.GREATER_THAN_OR_EQUAL
    function = op_module.ge


class LessThanOperator(_BinaryOperator):
    operator = FilterOperator.LESS_THAN
    function = op_module.lt


class LessEqualOperator(_BinaryOperator):
    operator = FilterOperator.LESS_THAN_OR_EQUAL
    function = op_module.le
