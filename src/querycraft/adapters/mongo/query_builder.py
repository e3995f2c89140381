"""
Mongo query builder from a compiled filter AST.

Every ``FilterOperator`` has an entry in ``_LEAF_COMPILERS``; the table is
checked for completeness at import time.

Case-insensitive text comparisons are anchored ``$regex`` matches with the
``i`` option; ordering comparisons on folded text use ``$expr`` with
``$toLower``, restricted to documents where the field holds a string.
"""

from __future__ import annotations

import datetime
import decimal
import enum
import re
from collections.abc import Callable, Sequence
from typing import Any

from bson.decimal128 import Decimal128

from ...filters.operators import FilterOperator, require_exhaustive

LeafCompiler = Callable[[str, Any, bool], dict[str, Any]]


def to_bson(value: Any) -> Any:
    """Convert Python values BSON cannot encode natively."""
    if isinstance(value, enum.Enum):
        return to_bson(value.value)
    if isinstance(value, decimal.Decimal):
        return Decimal128(str(value))
    if isinstance(value, datetime.date) and not isinstance(value, datetime.datetime):
        return datetime.datetime(value.year, value.month, value.day)
    if isinstance(value, list | tuple):
        return [to_bson(v) for v in value]
    return value


def _exact(value: str) -> dict[str, Any]:
    return {"$regex": f"^{re.escape(value)}$", "$options": "i"}


def _folds(value: Any, case_sensitive: bool) -> bool:
    return not case_sensitive and isinstance(value, str)


# -- equality ---------------------------------------------------------------


def _equals(field: str, val: Any, case_sensitive: bool) -> dict[str, Any]:
    if _folds(val, case_sensitive):
        return {field: _exact(val)}
    return {field: {"$eq": val}}


def _not_equals(field: str, val: Any, case_sensitive: bool) -> dict[str, Any]:
    if _folds(val, case_sensitive):
        return {field: {"$not": _exact(val)}}
    return {field: {"$ne": val}}


# -- ordering ---------------------------------------------------------------


def _folded_expr(field: str, expr: dict[str, Any]) -> dict[str, Any]:
    # $toLower turns null or missing into "", so non-text values are excluded first.
    return {"$and": [{field: {"$type": "string"}}, {"$expr": expr}]}


def _ordering(mongo_op: str) -> LeafCompiler:
    def compile_ordering(field: str, val: Any, case_sensitive: bool) -> dict[str, Any]:
        if _folds(val, case_sensitive):
            return _folded_expr(
                field, {mongo_op: [{"$toLower": f"${field}"}, val.lower()]}
            )
        return {field: {mongo_op: val}}

    return compile_ordering


def _between(field: str, val: Any, case_sensitive: bool) -> dict[str, Any]:
    low, high = val
    if not case_sensitive and isinstance(low, str) and isinstance(high, str):
        lowered = {"$toLower": f"${field}"}
        return _folded_expr(
            field,
            {
                "$and": [
                    {"$gte": [lowered, low.lower()]},
                    {"$lte": [lowered, high.lower()]},
                ]
            },
        )
    return {field: {"$gte": low, "$lte": high}}


# -- set --------------------------------------------------------------------


def _in(field: str, val: Any, case_sensitive: bool) -> dict[str, Any]:
    values = list(val)
    if not case_sensitive and any(isinstance(v, str) for v in values):
        return {"$or": [_equals(field, v, case_sensitive) for v in values]}
    return {field: {"$in": values}}


def _not_in(field: str, val: Any, case_sensitive: bool) -> dict[str, Any]:
    values = list(val)
    if not case_sensitive and any(isinstance(v, str) for v in values):
        return {"$nor": [_equals(field, v, case_sensitive) for v in values]}
    return {field: {"$nin": values}}


# -- string -----------------------------------------------------------------


def _regex(template: str) -> LeafCompiler:
    def compile_regex(field: str, val: Any, case_sensitive: bool) -> dict[str, Any]:
        pattern = template.format(re.escape(str(val)))
        return {field: {"$regex": pattern, "$options": "" if case_sensitive else "i"}}

    return compile_regex


# -- null -------------------------------------------------------------------


def _is_null(field: str, _val: Any, _case_sensitive: bool) -> dict[str, Any]:
    return {"$or": [{field: {"$exists": False}}, {field: {"$eq": None}}]}


def _is_not_null(field: str, _val: Any, _case_sensitive: bool) -> dict[str, Any]:
    return {field: {"$exists": True, "$ne": None}}


_LEAF_COMPILERS: dict[FilterOperator, LeafCompiler] = {
    FilterOperator.EQUALS: _equals,
    FilterOperator.NOT_EQUALS: _not_equals,
    FilterOperator.GREATER_THAN: _ordering("$gt"),
    FilterOperator.GREATER_THAN_OR_EQUAL: _ordering("$gte"),
    FilterOperator.LESS_THAN: _ordering("$lt"),
    FilterOperator.LESS_THAN_OR_EQUAL: _ordering("$lte"),
    FilterOperator.IN: _in,
    FilterOperator.NOT_IN: _not_in,
    FilterOperator.BETWEEN: _between,
    FilterOperator.CONTAINS: _regex("{}"),
    FilterOperator.STARTS_WITH: _regex("^{}"),
    FilterOperator.ENDS_WITH: _regex("{}$"),
    FilterOperator.IS_NULL: _is_null,
    FilterOperator.IS_NOT_NULL: _is_not_null,
}

require_exhaustive(_LEAF_COMPILERS, backend="MongoDB query builder")


class MongoQueryBuilder:
    """
    Compiles a ``CompiledFilter`` (via ``to_dict()``) to MongoDB documents.

    Args:
        field_map: Renames applied to attribute paths, e.g. ``{"id": "_id"}``.
    """

    def __init__(self, field_map: dict[str, str] | None = None) -> None:
        self._field_map = field_map or {}

    def field_name(self, attr: str) -> str:
        head, sep, rest = attr.partition(".")
        return self._field_map.get(head, head) + sep + rest

    def build_match(self, spec: Any) -> dict[str, Any]:
        """Build a ``find()`` filter from a compiled filter or its AST."""
        data = spec.to_dict() if hasattr(spec, "to_dict") else spec
        if not isinstance(data, dict):
            raise TypeError("spec must be a compiled filter or a dict AST")
        if not data:
            return {}
        return self._compile_node(data)

    def _compile_node(self, data: dict[str, Any]) -> dict[str, Any]:
        op_str = str(data.get("op", "")).lower()
        if op_str in ("and", "or"):
            compiled = [self._compile_node(c) for c in data["conditions"]]
            return {f"${op_str}": compiled}
        return self._compile_leaf(data)

    def _compile_leaf(self, data: dict[str, Any]) -> dict[str, Any]:
        attr = data.get("attr")
        if not attr:
            raise ValueError(f"Filter node missing 'attr': {data}")
        op = FilterOperator(data["op"])
        compiler = _LEAF_COMPILERS[op]
        return compiler(
            self.field_name(attr),
            to_bson(data.get("val")),
            bool(data.get("case_sensitive", True)),
        )

    def build_sort(
        self, sort_fields: Sequence[str], *, descending: bool
    ) -> list[tuple[str, int]]:
        """Sort on ``sort_fields`` in one direction, then ``_id`` ascending."""
        direction = -1 if descending else 1
        result = [(self.field_name(name), direction) for name in sort_fields]
        if all(name != "_id" for name, _ in result):
            result.append(("_id", 1))
        return result
