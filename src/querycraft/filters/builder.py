"""
Fluent builder for filter groups.

Example::

    group = (
        FilterGroupBuilder()
        .where("Age", ">", 18)
        .and_where("IsActive", "=", True)
        .order_by("Age", descending=False)
        .paginate(page_number=2, page_size=10)
        .build()
    )

    # (Group1) OR (Group2)
    groups = any_of(group, FilterGroupBuilder().where("IsVip", "=", True).build())
"""

from __future__ import annotations

from typing import Any

from .models import (
    FilterColumn,
    FilterCriterion,
    FilterGroup,
    FilterQuery,
    PaginationSpec,
)
from .operators import FilterCondition, FilterOperator


class FilterGroupBuilder:
    """
    Accumulates queries left to right.

    ``where`` / ``and_where`` join with AND, ``or_where`` joins with OR.
    The join condition of the first query is ignored by the compiler.
    """

    def __init__(self) -> None:
        self._queries: list[FilterQuery] = []
        self._condition = FilterCondition.AND
        self._page_number: int | None = None
        self._page_size: int | None = None
        self._sort_fields: tuple[str, ...] = ()
        self._descending = True
        self._has_pagination = False

    # -- leaf conditions -----------------------------------------------------

    def where(
        self,
        field_name: str,
        operator: FilterOperator | str,
        *values: Any,
        case_sensitive: bool = False,
        condition: FilterCondition = FilterCondition.AND,
        data_type: Any = None,
    ) -> FilterGroupBuilder:
        """Add a criterion; a single list/tuple/set argument is expanded."""
        if len(values) == 1 and isinstance(values[0], list | tuple | set | frozenset):
            values = tuple(values[0])
        criterion = FilterCriterion(
            field_name=field_name,
            values=values,
            operator=FilterOperator.parse(operator),
            case_sensitive=case_sensitive,
        )
        columns = (
            (FilterColumn(name=field_name, data_type=data_type),)
            if data_type is not None
            else ()
        )
        self._queries.append(
            FilterQuery(criterion=criterion, condition=condition, columns=columns)
        )
        return self

    def and_where(
        self, field_name: str, operator: FilterOperator | str, *values: Any, **kw: Any
    ) -> FilterGroupBuilder:
        return self.where(
            field_name, operator, *values, condition=FilterCondition.AND, **kw
        )

    def or_where(
        self, field_name: str, operator: FilterOperator | str, *values: Any, **kw: Any
    ) -> FilterGroupBuilder:
        return self.where(
            field_name, operator, *values, condition=FilterCondition.OR, **kw
        )

    def add(self, query: FilterQuery | FilterCriterion) -> FilterGroupBuilder:
        """Add an already-constructed query or criterion."""
        if isinstance(query, FilterCriterion):
            query = FilterQuery(criterion=query)
        self._queries.append(query)
        return self

    # -- group options -------------------------------------------------------

    def joined_by(self, condition: FilterCondition | str) -> FilterGroupBuilder:
        """How this group combines with a preceding group."""
        self._condition = FilterCondition(condition)
        return self

    def order_by(self, *fields: str, descending: bool = True) -> FilterGroupBuilder:
        self._sort_fields = tuple(fields)
        self._descending = descending
        self._has_pagination = True
        return self

    def paginate(self, page_number: int, page_size: int) -> FilterGroupBuilder:
        self._page_number = page_number
        self._page_size = page_size
        self._has_pagination = True
        return self

    # -- build ---------------------------------------------------------------

    def build(self) -> FilterGroup:
        pagination = (
            PaginationSpec(
                page_number=self._page_number,
                page_size=self._page_size,
                sort_fields=self._sort_fields,
                descending=self._descending,
            )
            if self._has_pagination
            else None
        )
        return FilterGroup(
            queries=tuple(self._queries),
            condition=self._condition,
            pagination=pagination,
        )

    def reset(self) -> FilterGroupBuilder:
        """Clear all state and return ``self`` for reuse."""
        self.__init__()  # type: ignore[misc]
        return self


def _joined(groups: tuple[FilterGroup, ...], condition: FilterCondition) -> list[FilterGroup]:
    return [
        g if i == 0 else g.model_copy(update={"condition": condition})
        for i, g in enumerate(groups)
    ]


def any_of(*groups: FilterGroup) -> list[FilterGroup]:
    """Join groups with OR."""
    return _joined(groups, FilterCondition.OR)


def all_of(*groups: FilterGroup) -> list[FilterGroup]:
    """Join groups with AND."""
    return _joined(groups, FilterCondition.AND)
