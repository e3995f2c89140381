"""
Predicate compiler: filter groups → compiled specification tree.

Usage::

    compiled = compile_filter([group1, group2], schema=FieldSchema.from_type(User))
    matches = [u for u in users if compiled.is_satisfied_by(u)]

Queries inside a group are folded left to right using each query's
condition; groups are then folded left to right using each group's
condition. The first condition at each level is ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import FieldNotFoundError, TypeMismatchError, ValidationError
from ..filters.accessors import AttributeFieldAccessor, FieldAccessor, FieldSchema, Reader
from ..filters.coercion import coerce_value, is_known_scalar_type, is_textual_type, type_name
from ..filters.models import FilterGroup, FilterQuery, PaginationSpec
from ..filters.operators import NULL_OPERATORS, FilterCondition
from .evaluator import MemoryOperatorRegistry
from .operators_memory import build_default_registry
from .specification import (
    CompiledSpecification,
    CriterionSpecification,
    MatchAllSpecification,
)

logger = logging.getLogger("querycraft.compiler")

# Built once at import so a missing operator strategy fails immediately.
DEFAULT_REGISTRY: MemoryOperatorRegistry = build_default_registry()


def combine(
    left: CompiledSpecification,
    right: CompiledSpecification,
    condition: FilterCondition,
) -> CompiledSpecification:
    """``left AND right`` or ``left OR right``."""
    if condition is FilterCondition.OR:
        return left | right
    return left & right


@dataclass(frozen=True)
class CompiledFilter:
    """Result of compilation: the predicate tree plus resolved sort order."""

    specification: CompiledSpecification
    pagination: PaginationSpec | None = None
    sort_fields: tuple[str, ...] = ()
    accessor: FieldAccessor = field(default_factory=AttributeFieldAccessor)

    def is_satisfied_by(self, candidate: Any) -> bool:
        return self.specification.is_satisfied_by(candidate)

    def to_dict(self) -> dict[str, Any]:
        return self.specification.to_dict()

    def describe(self) -> str:
        return self.specification.describe()

    @property
    def matches_all(self) -> bool:
        return isinstance(self.specification, MatchAllSpecification)

    @property
    def descending(self) -> bool:
        return self.pagination.descending if self.pagination else True

    def sort_readers(self) -> list[Reader]:
        return [self.accessor.reader(name) for name in self.sort_fields]

    @property
    def trace(self) -> str:
        from .trace import render_trace

        return render_trace(self)


class FilterCompiler:
    """
    Compiles filter groups against an element type's field schema.

    Args:
        schema: Known fields and their types. When ``None`` field names are
            used verbatim and no coercion takes place.
        accessor: Field name → reader lookup. Defaults to attribute / key
            access resolved through ``schema``.
        registry: In-memory operator strategies used by ``is_satisfied_by``.
    """

    def __init__(
        self,
        *,
        schema: FieldSchema | None = None,
        accessor: FieldAccessor | None = None,
        registry: MemoryOperatorRegistry | None = None,
    ) -> None:
        self.schema = schema
        self.accessor = accessor or AttributeFieldAccessor(schema)
        self.registry = registry or DEFAULT_REGISTRY

    def compile(self, groups: FilterGroup | Sequence[FilterGroup]) -> CompiledFilter:
        """
        Fold *groups* into a single compiled filter.

        Raises:
            ValidationError: empty group list, unknown field or
                conflicting pagination.
            TypeMismatchError: operator or value incompatible with a field.
        """
        group_list = _as_group_list(groups)
        pagination = resolve_pagination(group_list)

        acc: CompiledSpecification | None = None
        for index, group in enumerate(group_list):
            compiled = self.compile_group(group, path=f"groups[{index}]")
            acc = compiled if acc is None else combine(acc, compiled, group.condition)
        assert acc is not None

        sort_fields = tuple(
            self._resolve_field(name, path="pagination.sort_fields")
            for name in (pagination.sort_fields if pagination else ())
        )
        result = CompiledFilter(
            specification=acc,
            pagination=pagination,
            sort_fields=sort_fields,
            accessor=self.accessor,
        )
        logger.debug(
            "Compiled %d filter group(s): %s", len(group_list), result.describe()
        )
        return result

    def compile_group(
        self, group: FilterGroup, *, path: str = "groups[0]"
    ) -> CompiledSpecification:
        acc: CompiledSpecification = MatchAllSpecification()
        for index, query in enumerate(group.queries):
            spec = self.compile_query(query, path=f"{path}.queries[{index}]")
            acc = spec if index == 0 else combine(acc, spec, query.condition)
        return acc

    def compile_query(
        self, query: FilterQuery, *, path: str | None = None
    ) -> CriterionSpecification:
        criterion = query.criterion
        op = criterion.operator
        name = self._resolve_field(criterion.field_name, path=path)
        declared = query.declared_type(criterion.field_name)
        if declared is None and self.schema is not None:
            declared = self.schema.type_of(name)

        values = criterion.values
        if op not in NULL_OPERATORS:
            if op.is_textual and is_known_scalar_type(declared) and not is_textual_type(declared):
                raise TypeMismatchError(
                    name,
                    op,
                    expected="a text field",
                    actual=f"{type_name(declared)} field",
                    path=path,
                )
            values = tuple(
                coerce_value(v, declared, field=name, operator=op, path=path)
                for v in values
            )
            if op.is_textual and not all(isinstance(v, str) for v in values):
                raise TypeMismatchError(
                    name,
                    op,
                    expected="a text value",
                    actual=", ".join(type(v).__name__ for v in values),
                    path=path,
                )

        return CriterionSpecification(
            name,
            op,
            values,
            reader=self._reader(name, path=path),
            registry=self.registry,
            case_sensitive=criterion.case_sensitive,
            path=path,
        )

    # -- helpers -------------------------------------------------------------

    def _resolve_field(self, name: str, *, path: str | None) -> str:
        if self.schema is None:
            return name
        return self.schema.resolve(name, path=path)

    def _reader(self, name: str, *, path: str | None) -> Reader:
        try:
            return self.accessor.reader(name)
        except FieldNotFoundError as exc:
            if exc.path is not None or path is None:
                raise
            raise FieldNotFoundError(
                exc.field, exc.model_name, exc.available_fields, path=path
            ) from None


def _as_group_list(groups: FilterGroup | Sequence[FilterGroup]) -> list[FilterGroup]:
    if isinstance(groups, FilterGroup):
        return [groups]
    if groups is None:
        raise ValidationError("filter groups must not be None", path="groups")
    group_list = list(groups)
    if not group_list:
        raise ValidationError("at least one filter group is required", path="groups")
    for index, group in enumerate(group_list):
        if not isinstance(group, FilterGroup):
            raise ValidationError(
                f"expected FilterGroup, got {type(group).__name__}",
                path=f"groups[{index}]",
            )
    return group_list


def resolve_pagination(groups: Sequence[FilterGroup]) -> PaginationSpec | None:
    """
    Pick the pagination that applies to a list of groups.

    The first non-null ``PaginationSpec`` wins; a group carrying a
    different one is rejected.
    """
    chosen: PaginationSpec | None = None
    for index, group in enumerate(groups):
        if group.pagination is None:
            continue
        if chosen is None:
            chosen = group.pagination
        elif group.pagination != chosen:
            raise ValidationError(
                "groups declare conflicting pagination",
                path=f"groups[{index}].pagination",
            )
    return chosen


def compile_filter(
    groups: FilterGroup | Sequence[FilterGroup],
    *,
    schema: FieldSchema | None = None,
    accessor: FieldAccessor | None = None,
    registry: MemoryOperatorRegistry | None = None,
) -> CompiledFilter:
    """Compile *groups* with a throwaway :class:`FilterCompiler`."""
    return FilterCompiler(schema=schema, accessor=accessor, registry=registry).compile(
        groups
    )
