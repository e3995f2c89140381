"""
Compiled specification tree.

Every node can evaluate a candidate in memory (``is_satisfied_by``),
export a backend-neutral AST (``to_dict``) for the native query compilers,
and render itself for the query trace (``describe``).
"""

from __future__ import annotations

import datetime
import enum
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ..exceptions import TypeMismatchError
from ..filters.operators import NULL_OPERATORS, SET_OPERATORS, FilterOperator

if TYPE_CHECKING:
    from ..filters.accessors import Reader
    from .evaluator import MemoryOperatorRegistry


class CompiledSpecification(ABC):
    """Base class for compiled nodes with logical operator support."""

    @abstractmethod
    def is_satisfied_by(self, candidate: Any) -> bool: ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]: ...

    @abstractmethod
    def describe(self) -> str: ...

    def __and__(self, other: CompiledSpecification) -> CompiledSpecification:
        if isinstance(self, MatchAllSpecification):
            return other
        if isinstance(other, MatchAllSpecification):
            return self
        if isinstance(self, AndSpecification):
            return AndSpecification(*self.specifications, other)
        return AndSpecification(self, other)

    def __or__(self, other: CompiledSpecification) -> CompiledSpecification:
        if isinstance(self, MatchAllSpecification) or isinstance(
            other, MatchAllSpecification
        ):
            return MatchAllSpecification()
        if isinstance(self, OrSpecification):
            return OrSpecification(*self.specifications, other)
        return OrSpecification(self, other)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.describe()}>"


class MatchAllSpecification(CompiledSpecification):
    """Matches every candidate (compiled form of an empty group)."""

    def is_satisfied_by(self, candidate: Any) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {}

    def describe(self) -> str:
        return "TRUE"


class AndSpecification(CompiledSpecification):
    """Logical AND composite."""

    def __init__(self, *specifications: CompiledSpecification) -> None:
        self.specifications = specifications

    def is_satisfied_by(self, candidate: Any) -> bool:
        return all(spec.is_satisfied_by(candidate) for spec in self.specifications)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "and",
            "conditions": [spec.to_dict() for spec in self.specifications],
        }

    def describe(self) -> str:
        return " AND ".join(_nested(spec) for spec in self.specifications)


class OrSpecification(CompiledSpecification):
    """Logical OR composite."""

    def __init__(self, *specifications: CompiledSpecification) -> None:
        self.specifications = specifications

    def is_satisfied_by(self, candidate: Any) -> bool:
        return any(spec.is_satisfied_by(candidate) for spec in self.specifications)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "or",
            "conditions": [spec.to_dict() for spec in self.specifications],
        }

    def describe(self) -> str:
        return " OR ".join(_nested(spec) for spec in self.specifications)


def _nested(spec: CompiledSpecification) -> str:
    if isinstance(spec, AndSpecification | OrSpecification):
        return f"({spec.describe()})"
    return spec.describe()


def _fold(value: Any) -> Any:
    if isinstance(value, str):
        return value.casefold()
    if isinstance(value, tuple):
        return tuple(_fold(v) for v in value)
    return value


def render_value(value: Any) -> str:
    """Deterministic literal rendering used by query traces."""
    if value is None:
        return "NULL"
    if isinstance(value, enum.Enum):
        return render_value(value.value)
    if isinstance(value, str):
        return repr(value)
    if isinstance(value, datetime.date | datetime.time):
        return f"'{value.isoformat()}'"
    return str(value)


class CriterionSpecification(CompiledSpecification):
    """
    A single compiled comparison.

    ``values`` are already validated and coerced; ``reader`` reads the
    field from a candidate. When ``case_sensitive`` is false, textual
    values on both sides are compared in casefolded form.
    """

    def __init__(
        self,
        field: str,
        operator: FilterOperator,
        values: tuple[Any, ...],
        *,
        reader: Reader,
        registry: MemoryOperatorRegistry,
        case_sensitive: bool = False,
        path: str | None = None,
    ) -> None:
        self.field = field
        self.operator = operator
        self.values = values
        self.case_sensitive = case_sensitive
        self.path = path
        self._reader = reader
        self._registry = registry
        self.condition_value = self._condition_value()
        self._folded_condition = (
            self.condition_value
            if case_sensitive
            else _fold(self.condition_value)
        )

    def _condition_value(self) -> Any:
        if self.operator in NULL_OPERATORS:
            return None
        if self.operator in SET_OPERATORS or self.operator is FilterOperator.BETWEEN:
            return tuple(self.values)
        return self.values[0]

    @property
    def folds_case(self) -> bool:
        """Whether case-insensitive comparison actually applies."""
        if self.case_sensitive:
            return False
        return any(isinstance(v, str) for v in self.values)

    # -- evaluation ----------------------------------------------------------

    def is_satisfied_by(self, candidate: Any) -> bool:
        actual = self._reader(candidate)
        if (
            self.operator.is_textual
            and actual is not None
            and not isinstance(actual, str)
        ):
            raise TypeMismatchError(
                self.field,
                self.operator,
                expected="a text field",
                actual=type(actual).__name__,
                path=self.path,
            )
        condition = self.condition_value
        if not self.case_sensitive:
            actual = _fold(actual)
            condition = self._folded_condition
        try:
            return self._registry.evaluate(self.operator, actual, condition)
        except TypeError as exc:
            raise TypeMismatchError(
                self.field,
                self.operator,
                expected=f"values comparable with {render_value(condition)}",
                actual=type(actual).__name__,
                path=self.path,
            ) from exc

    # -- export --------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        value = self.condition_value
        return {
            "op": self.operator.value,
            "attr": self.field,
            "val": list(value) if isinstance(value, tuple) else value,
            "case_sensitive": not self.folds_case,
        }

    def describe(self) -> str:
        op = self.operator
        if op in NULL_OPERATORS:
            text = f"{self.field} {'IS NULL' if op is FilterOperator.IS_NULL else 'IS NOT NULL'}"
        elif op is FilterOperator.BETWEEN:
            low, high = self.values
            text = f"{self.field} BETWEEN {render_value(low)} AND {render_value(high)}"
        elif op in SET_OPERATORS:
            items = ", ".join(render_value(v) for v in self.values)
            keyword = "IN" if op is FilterOperator.IN else "NOT IN"
            text = f"{self.field} {keyword} ({items})"
        elif op.is_textual:
            text = f"{self.field} {op.name.replace('_', ' ')} {render_value(self.values[0])}"
        else:
            text = f"{self.field} {op.value} {render_value(self.values[0])}"
        return f"{text} [ci]" if self.folds_case else text
