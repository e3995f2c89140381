"""
Compile a filter AST (``CompiledFilter.to_dict()``) into a SQLAlchemy
filter expression, and apply sort order and paging to a ``Select``.

Leaf nodes with ``case_sensitive = False`` compare ``lower(column)``
against lower-cased values. Dotted attribute paths traverse relationships
through ``any()`` / ``has()``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, cast

from sqlalchemy import ColumnElement, Select, and_, asc, desc, func, inspect, or_, true
from sqlalchemy.exc import NoInspectionAvailable

from ...exceptions import ValidationError
from ...filters.accessors import FieldSchema
from ...filters.operators import FilterOperator
from .operators import DEFAULT_SQLA_REGISTRY
from .strategy import SQLAlchemyOperatorRegistry


def build_sqla_filter(
    model: type[Any],
    data: dict[str, Any],
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> ColumnElement[bool]:
    """
    Build a SQLAlchemy filter expression from a compiled filter AST.

    An empty AST (match-all) compiles to ``true()``.
    """
    reg = registry or DEFAULT_SQLA_REGISTRY
    if not data:
        return true()
    return _compile_node(model, data, reg)


def _compile_node(
    model: type[Any],
    data: dict[str, Any],
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    op_str = str(data.get("op", "")).lower()
    if op_str in ("and", "or"):
        conditions = [_compile_node(model, c, registry) for c in data["conditions"]]
        return and_(*conditions) if op_str == "and" else or_(*conditions)
    return _compile_leaf(model, data, registry)


def _lowered(value: Any) -> Any:
    if isinstance(value, str):
        return value.lower()
    if isinstance(value, list | tuple):
        return [_lowered(v) for v in value]
    return value


def _compile_leaf(
    model: type[Any],
    data: dict[str, Any],
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    attr: str | None = data.get("attr")
    if not attr:
        raise ValueError(f"Filter node missing 'attr': {data}")
    op = FilterOperator(data["op"])
    val = data.get("val")

    # Relationship traversal (e.g. "address.city")
    if "." in attr:
        rel_name, nested_attr = attr.split(".", 1)
        rel_attr = getattr(model, rel_name, None)
        if rel_attr is None or not hasattr(rel_attr, "property"):
            raise AttributeError(f"Model {model.__name__} has no relationship {rel_name}")
        target_model = rel_attr.property.mapper.class_
        inner = _compile_leaf(target_model, {**data, "attr": nested_attr}, registry)
        if rel_attr.property.uselist:
            return cast("ColumnElement[bool]", rel_attr.any(inner))
        return cast("ColumnElement[bool]", rel_attr.has(inner))

    column: Any = getattr(model, attr, None)
    if column is None:
        raise AttributeError(f"Model {model.__name__} has no attribute {attr}")

    if not data.get("case_sensitive", True):
        column = func.lower(column)
        val = _lowered(val)
    return registry.apply(op, column, val)


def apply_sort_and_page(
    stmt: Select[Any],
    model: type[Any],
    *,
    sort_fields: Sequence[str],
    descending: bool,
    offset: int = 0,
    limit: int | None = None,
) -> Select[Any]:
    """
    Order by ``sort_fields`` then by primary key (ascending) so that ties
    keep a deterministic order, then apply offset / limit.
    """
    direction = desc if descending else asc
    clauses: list[Any] = []
    for name in sort_fields:
        column = getattr(model, name, None) if "." not in name else None
        if column is None:
            raise ValidationError(
                f"cannot sort {model.__name__} by '{name}'",
                path="pagination.sort_fields",
            )
        clauses.append(direction(column))
    clauses.extend(asc(col) for col in _primary_key(model))
    if clauses:
        stmt = stmt.order_by(*clauses)
    if offset:
        stmt = stmt.offset(offset)
    if limit is not None:
        stmt = stmt.limit(limit)
    return stmt


def _primary_key(model: type[Any]) -> list[Any]:
    try:
        mapper = inspect(model)
    except NoInspectionAvailable:
        return []
    return [getattr(model, mapper.get_property_by_column(c).key) for c in mapper.primary_key]


def schema_from_model(model: type[Any]) -> FieldSchema | None:
    """Field schema from mapped column types; relationships are untyped."""
    try:
        mapper = inspect(model)
    except NoInspectionAvailable:
        return FieldSchema.from_type(model)
    fields: dict[str, Any] = {}
    for prop in mapper.column_attrs:
        try:
            fields[prop.key] = prop.columns[0].type.python_type
        except NotImplementedError:
            fields[prop.key] = Any
    for rel in mapper.relationships:
        fields[rel.key] = Any
    return FieldSchema(fields, model_name=model.__name__)
