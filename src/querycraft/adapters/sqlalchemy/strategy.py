"""
SQLAlchemy operator compilation strategy.

Mirrors the in-memory evaluator: one ``SQLAlchemyOperator`` per
``FilterOperator``, collected in a registry that refuses to be used
while incomplete.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ...filters.operators import require_exhaustive

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from ...filters.operators import FilterOperator


class SQLAlchemyOperator(ABC):
    """
    Strategy interface for compiling a filter operator into a SQLAlchemy
    ``ColumnElement[bool]``.
    """

    @property
    @abstractmethod
    def name(self) -> FilterOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        """
        Build a SQLAlchemy filter clause.

        Args:
            column: A column, instrumented attribute or SQL expression
                (``lower(column)`` for case-insensitive text).
            value: A single value, a list for IN/NOT_IN and BETWEEN,
                ``None`` for the null checks.
        """
        ...


class SQLAlchemyOperatorRegistry:
    """Registry of ``SQLAlchemyOperator`` instances keyed by ``FilterOperator``."""

    def __init__(self) -> None:
        self._operators: dict[FilterOperator, SQLAlchemyOperator] = {}

    def register(self, operator: SQLAlchemyOperator) -> None:
        self._operators[operator.name] = operator

    def register_all(self, *operators: SQLAlchemyOperator) -> None:
        for op in operators:
            self.register(op)

    def ensure_complete(self) -> SQLAlchemyOperatorRegistry:
        require_exhaustive(self._operators, backend="SQLAlchemy registry")
        return self

    def get(self, name: FilterOperator) -> SQLAlchemyOperator | None:
        return self._operators.get(name)

    @property
    def supported_operators(self) -> set[FilterOperator]:
        return set(self._operators.keys())

    def apply(self, name: FilterOperator, column: Any, value: Any) -> ColumnElement[bool]:
        """
        Look up the operator and apply.

        Raises:
            NotImplementedError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise NotImplementedError(f"Unsupported operator for SQLAlchemy: {name}")
        return op.apply(column, value)
