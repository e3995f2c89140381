"""Operator and condition vocabulary."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class FilterCondition(str, Enum):
    """Logical join between consecutive queries or groups."""

    AND = "and"
    OR = "or"


class FilterOperator(str, Enum):
    """Supported comparison operators."""

    # Standard comparison
    EQUALS = "="
    NOT_EQUALS = "!="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="

    # Set / range
    IN = "in"
    NOT_IN = "not_in"
    BETWEEN = "between"

    # String operations
    CONTAINS = "contains"
    STARTS_WITH = "startswith"
    ENDS_WITH = "endswith"

    # Null checks
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"

    @property
    def arity(self) -> tuple[int, int | None]:
        """``(min, max)`` number of values; ``max`` is ``None`` when unbounded."""
        return _ARITY[self]

    @property
    def is_textual(self) -> bool:
        return self in TEXTUAL_OPERATORS

    @property
    def is_ordering(self) -> bool:
        return self in ORDERING_OPERATORS

    def accepts(self, count: int) -> bool:
        low, high = self.arity
        return count >= low and (high is None or count <= high)

    def describe_arity(self) -> str:
        low, high = self.arity
        if high is None:
            return f"at least {low} value(s)"
        if low == high:
            return f"exactly {low} value(s)"
        return f"{low}..{high} values"

    @classmethod
    def parse(cls, value: FilterOperator | str) -> FilterOperator:
        """
        Resolve an operator from a member, its value, its name or an alias.

        Raises:
            OperatorNotFoundError: with fuzzy suggestions for unknown names.
        """
        if isinstance(value, FilterOperator):
            return value
        key = str(value).strip()
        try:
            return cls(key)
        except ValueError:
            pass
        lowered = key.lower()
        if lowered in _OP_ALIASES:
            return _OP_ALIASES[lowered]
        upper = key.upper()
        if upper in cls.__members__:
            return cls.__members__[upper]

        from ..exceptions import OperatorNotFoundError

        raise OperatorNotFoundError(
            key, sorted({*(m.value for m in cls), *_OP_ALIASES})
        )


TEXTUAL_OPERATORS: frozenset[FilterOperator] = frozenset(
    {
        FilterOperator.CONTAINS,
        FilterOperator.STARTS_WITH,
        FilterOperator.ENDS_WITH,
    }
)

ORDERING_OPERATORS: frozenset[FilterOperator] = frozenset(
    {
        FilterOperator.GREATER_THAN,
        FilterOperator.GREATER_THAN_OR_EQUAL,
        FilterOperator.LESS_THAN,
        FilterOperator.LESS_THAN_OR_EQUAL,
        FilterOperator.BETWEEN,
    }
)

NULL_OPERATORS: frozenset[FilterOperator] = frozenset(
    {FilterOperator.IS_NULL, FilterOperator.IS_NOT_NULL}
)

SET_OPERATORS: frozenset[FilterOperator] = frozenset(
    {FilterOperator.IN, FilterOperator.NOT_IN}
)

_ARITY: dict[FilterOperator, tuple[int, int | None]] = {
    FilterOperator.EQUALS: (1, 1),
    FilterOperator.NOT_EQUALS: (1, 1),
    FilterOperator.GREATER_THAN: (1, 1),
    FilterOperator.GREATER_THAN_OR_EQUAL: (1, 1),
    FilterOperator.LESS_THAN: (1, 1),
    FilterOperator.LESS_THAN_OR_EQUAL: (1, 1),
    FilterOperator.IN: (1, None),
    FilterOperator.NOT_IN: (1, None),
    FilterOperator.BETWEEN: (2, 2),
    FilterOperator.CONTAINS: (1, 1),
    FilterOperator.STARTS_WITH: (1, 1),
    FilterOperator.ENDS_WITH: (1, 1),
    FilterOperator.IS_NULL: (0, 0),
    FilterOperator.IS_NOT_NULL: (0, 0),
}

# Common names accepted by FilterOperator.parse()
_OP_ALIASES: dict[str, FilterOperator] = {
    "eq": FilterOperator.EQUALS,
    "==": FilterOperator.EQUALS,
    "equals": FilterOperator.EQUALS,
    "ne": FilterOperator.NOT_EQUALS,
    "neq": FilterOperator.NOT_EQUALS,
    "<>": FilterOperator.NOT_EQUALS,
    "not_equals": FilterOperator.NOT_EQUALS,
    "gt": FilterOperator.GREATER_THAN,
    "gte": FilterOperator.GREATER_THAN_OR_EQUAL,
    "ge": FilterOperator.GREATER_THAN_OR_EQUAL,
    "lt": FilterOperator.LESS_THAN,
    "lte": FilterOperator.LESS_THAN_OR_EQUAL,
    "le": FilterOperator.LESS_THAN_OR_EQUAL,
    "nin": FilterOperator.NOT_IN,
    "starts_with": FilterOperator.STARTS_WITH,
    "ends_with": FilterOperator.ENDS_WITH,
    "null": FilterOperator.IS_NULL,
    "not_null": FilterOperator.IS_NOT_NULL,
}


def require_exhaustive(handled: Iterable[FilterOperator], *, backend: str) -> None:
    """
    Fail when a backend does not handle every operator.

    Called once when a backend's operator table is built, so that adding
    a ``FilterOperator`` member breaks loudly instead of falling through.
    """
    missing = set(FilterOperator) - set(handled)
    if missing:
        names = ", ".join(sorted(op.name for op in missing))
        raise NotImplementedError(f"{backend} does not handle operators: {names}")
