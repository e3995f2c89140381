"""
In-memory operator implementations.

Usage::

    from querycraft.compiler.operators_memory import build_default_registry

    registry = build_default_registry()
    result = registry.evaluate(FilterOperator.EQUALS, actual, expected)
"""

from __future__ import annotations

from ..evaluator import MemoryOperatorRegistry
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


def build_default_registry() -> MemoryOperatorRegistry:
    """
    Create a registry with all built-in operators.

    Raises ``NotImplementedError`` if a ``FilterOperator`` member has no
    strategy, so a new operator cannot silently fall through.
    """
    registry = MemoryOperatorRegistry()
    registry.register_all(
        # Standard comparison
        EqualOperator(),
        NotEqualOperator(),
        GreaterThanOperator(),
        GreaterEqualOperator(),
        LessThanOperator(),
        LessEqualOperator(),
        # Set / range
        InOperator(),
        NotInOperator(),
        BetweenOperator(),
        # String
        ContainsOperator(),
        StartsWithOperator(),
        EndsWithOperator(),
        # Null
        IsNullOperator(),
        IsNotNullOperator(),
    )
    return registry.ensure_complete()


__all__ = [
    "build_default_registry",
    "MemoryOperatorRegistry",
]
