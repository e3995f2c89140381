"""
SQLAlchemy operator implementations and default registry.

Usage::

    from querycraft.adapters.sqlalchemy.operators import DEFAULT_SQLA_REGISTRY

    expr = DEFAULT_SQLA_REGISTRY.apply(FilterOperator.EQUALS, column, value)
"""

from __future__ import annotations

from ..strategy import SQLAlchemyOperatorRegistry
from .null import IsNotNullOperator, IsNullOperator
from .set import BetweenOperator, InOperator, NotInOperator
from .standard import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    LessEqualOperator,
    LessThanOperator,
    NotEqualOperator,
)
from .string import ContainsOperator, EndsWithOperator, StartsWithOperator


def build_default_sqla_registry() -> SQLAlchemyOperatorRegistry:
    """Create a registry with every built-in SQLAlchemy operator."""
    registry = SQLAlchemyOperatorRegistry()
    registry.register_all(
        EqualOperator(),
        NotEqualOperator(),
        GreaterThanOperator(),
        GreaterEqualOperator(),
        LessThanOperator(),
        LessEqualOperator(),
        InOperator(),
        NotInOperator(),
        BetweenOperator(),
        ContainsOperator(),
        StartsWithOperator(),
        EndsWithOperator(),
        IsNullOperator(),
        IsNotNullOperator(),
    )
    return registry.ensure_complete()


DEFAULT_SQLA_REGISTRY: SQLAlchemyOperatorRegistry = build_default_sqla_registry()

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "build_default_sqla_registry",
    "SQLAlchemyOperatorRegistry",
]
