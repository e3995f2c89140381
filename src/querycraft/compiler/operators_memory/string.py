"""String operators: contains, startswith, endswith.

Case folding is applied by the caller before evaluation.
"""

from __future__ import annotations

from typing import Any

from ...filters.operators import FilterOperator
from ..evaluator import MemoryOperator


class ContainsOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.CONTAINS

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return str(condition_value) in field_value


class StartsWithOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.STARTS_WITH

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(field_value.startswith(str(condition_value)))


class EndsWithOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.ENDS_WITH

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(field_value.endswith(str(condition_value)))
