"""
In-memory operator evaluation strategy.

Provides the MemoryOperator interface and a registry that maps
FilterOperator → evaluation strategy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ..filters.operators import require_exhaustive

if TYPE_CHECKING:
    from ..filters.operators import FilterOperator


class MemoryOperator(ABC):
    """
    Strategy interface for in-memory operator evaluation.

    Each operator is an isolated class with a single ``evaluate`` method.
    """

    @property
    @abstractmethod
    def name(self) -> FilterOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        """
        Evaluate the operator against concrete values.

        Args:
            field_value: The value read from the candidate.
            condition_value: A single value for unary operators, a tuple for
                IN/NOT_IN and BETWEEN, ``None`` for the null checks.

        Returns:
            True if the condition is satisfied.
        """
        ...


class MemoryOperatorRegistry:
    """
    Registry of MemoryOperator instances keyed by FilterOperator.

    Usage::

        registry = MemoryOperatorRegistry()
        registry.register(EqualOperator())

        result = registry.evaluate(FilterOperator.EQUALS, actual, expected)
    """

    def __init__(self) -> None:
        self._operators: dict[FilterOperator, MemoryOperator] = {}

    # -- registration --------------------------------------------------------

    def register(self, operator: MemoryOperator) -> None:
        """Register an operator strategy instance."""
        self._operators[operator.name] = operator

    def register_all(self, *operators: MemoryOperator) -> None:
        for op in operators:
            self.register(op)

    def ensure_complete(self) -> MemoryOperatorRegistry:
        """Raise ``NotImplementedError`` unless every operator is registered."""
        require_exhaustive(self._operators, backend="in-memory registry")
        return self

    # -- look-up -------------------------------------------------------------

    def get(self, name: FilterOperator) -> MemoryOperator | None:
        return self._operators.get(name)

    @property
    def supported_operators(self) -> set[FilterOperator]:
        return set(self._operators.keys())

    # -- evaluation shortcut -------------------------------------------------

    def evaluate(
        self,
        name: FilterOperator,
        field_value: Any,
        condition_value: Any,
    ) -> bool:
        """
        Look up the operator and evaluate.

        Raises:
            NotImplementedError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise NotImplementedError(
                f"Unsupported operator for in-memory evaluation: {name}"
            )
        return op.evaluate(field_value, condition_value)
