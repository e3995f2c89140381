"""
Filter model: criteria, queries, groups and pagination.

All types are immutable value objects. Construction validates every
structural invariant, so a malformed criterion can never reach a compiler
or an adapter::

    adults = FilterCriterion(field_name="Age", values=[18], operator=">=")
    active = FilterCriterion(field_name="IsActive", values=[True], operator="=")

    group = FilterGroup(
        queries=[
            FilterQuery(criterion=adults),
            FilterQuery(criterion=active, condition=FilterCondition.AND),
        ],
        pagination=PaginationSpec(page_number=1, page_size=20, sort_fields="Age"),
    )
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import field_validator, model_validator

from ..domain import ValueObject
from ..exceptions import ValidationError
from .operators import FilterCondition, FilterOperator


def _as_values(value: Any) -> tuple[Any, ...]:
    if value is None:
        return ()
    if isinstance(value, str | bytes | dict) or not isinstance(value, Iterable):
        return (value,)
    return tuple(value)


class FilterCriterion(ValueObject):
    """
    A single field/operator/value(s) comparison.

    Arity errors raised here carry ``criterion[<field_name>]`` as their path
    since a criterion does not know its position in a group yet. Errors found
    later by the compiler (unknown fields, type mismatches) are positional and
    read ``groups[i].queries[j]``.
    """

    field_name: str
    values: tuple[Any, ...]
    operator: FilterOperator
    case_sensitive: bool = False

    @field_validator("operator", mode="before")
    @classmethod
    def _parse_operator(cls, value: Any) -> FilterOperator:
        return FilterOperator.parse(value)

    @field_validator("values", mode="before")
    @classmethod
    def _normalise_values(cls, value: Any) -> tuple[Any, ...]:
        return _as_values(value)

    @model_validator(mode="after")
    def _check_structure(self) -> FilterCriterion:
        if not self.field_name or not self.field_name.strip():
            raise ValidationError("field name must not be empty", path="criterion")
        if not self.operator.accepts(len(self.values)):
            raise ValidationError(
                f"operator {self.operator.name} requires "
                f"{self.operator.describe_arity()}, got {len(self.values)}",
                path=f"criterion[{self.field_name}]",
            )
        return self

    @property
    def value(self) -> Any:
        """The single comparison value of a unary operator."""
        return self.values[0] if self.values else None


class FilterColumn(ValueObject):
    """Column descriptor attached to a query; declares a field's data type."""

    name: str
    data_type: Any = None


class FilterQuery(ValueObject):
    """A criterion plus its join relation to the previous query in the group."""

    criterion: FilterCriterion
    condition: FilterCondition = FilterCondition.AND
    columns: tuple[FilterColumn, ...] = ()

    def declared_type(self, field_name: str) -> Any:
        """Return the data type a column descriptor declares for *field_name*."""
        for column in self.columns:
            if column.name == field_name and column.data_type is not None:
                return column.data_type
        return None


def _split_sort_fields(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.replace(",", "|").split("|")
    return tuple(str(v).strip() for v in value if str(v).strip())


class PaginationSpec(ValueObject):
    """
    Pagination and sort order.

    ``page_number`` and ``page_size`` are both set (paged) or both unset
    (sort only). ``sort_fields`` lists the primary field followed by the
    "then-by" fields; a pipe-separated string such as ``"Age|Name"`` is
    accepted as well.
    """

    page_number: int | None = None
    page_size: int | None = None
    sort_fields: tuple[str, ...] = ()
    descending: bool = True

    @field_validator("sort_fields", mode="before")
    @classmethod
    def _parse_sort_fields(cls, value: Any) -> tuple[str, ...]:
        return _split_sort_fields(value)

    @model_validator(mode="after")
    def _check_pages(self) -> PaginationSpec:
        if (self.page_number is None) != (self.page_size is None):
            raise ValidationError(
                "page_number and page_size must both be set or both be omitted",
                path="pagination",
            )
        if self.page_number is not None and self.page_number < 1:
            raise ValidationError("page_number must be >= 1", path="pagination")
        if self.page_size is not None and self.page_size < 1:
            raise ValidationError("page_size must be >= 1", path="pagination")
        return self

    @classmethod
    def from_sort_expression(
        cls,
        sort_by: str | None,
        then_by: str | None = None,
        *,
        page_number: int | None = None,
        page_size: int | None = None,
        descending: bool = True,
    ) -> PaginationSpec:
        """Build from pipe-separated ``sort_by`` / ``then_by`` strings."""
        fields = _split_sort_fields(sort_by) + _split_sort_fields(then_by)
        return cls(
            page_number=page_number,
            page_size=page_size,
            sort_fields=fields,
            descending=descending,
        )

    @property
    def is_paged(self) -> bool:
        return self.page_number is not None

    @property
    def offset(self) -> int:
        if self.page_number is None or self.page_size is None:
            return 0
        return (self.page_number - 1) * self.page_size


class FilterGroup(ValueObject):
    """
    Ordered queries folded left to right, plus optional pagination.

    ``condition`` describes how this group joins a *preceding* group and is
    ignored for the first group in a list. An empty group matches everything.
    """

    queries: tuple[FilterQuery, ...] = ()
    condition: FilterCondition = FilterCondition.AND
    pagination: PaginationSpec | None = None

    @field_validator("queries", mode="before")
    @classmethod
    def _wrap_criteria(cls, value: Any) -> Any:
        if value is None:
            raise ValidationError("queries must not be None", path="group")
        if isinstance(value, Iterable) and not isinstance(value, str | bytes):
            return tuple(
                FilterQuery(criterion=q) if isinstance(q, FilterCriterion) else q
                for q in value
            )
        return value

    @property
    def criteria(self) -> tuple[FilterCriterion, ...]:
        return tuple(q.criterion for q in self.queries)
