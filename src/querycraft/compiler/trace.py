"""Query trace rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..filters.models import PaginationSpec
    from .compiler import CompiledFilter


def render_order(sort_fields: tuple[str, ...], descending: bool) -> str:
    if not sort_fields:
        return ""
    direction = "DESC" if descending else "ASC"
    return "ORDER BY " + ", ".join(f"{name} {direction}" for name in sort_fields)


def render_page(pagination: PaginationSpec | None) -> str:
    if pagination is None or not pagination.is_paged:
        return ""
    return f"SKIP {pagination.offset} TAKE {pagination.page_size}"


def render_trace(compiled: CompiledFilter) -> str:
    """
    Deterministic, human-readable rendering of filter, sort and page.

    Example::

        WHERE age > 18 AND is_active = True ORDER BY age ASC SKIP 1 TAKE 1
    """
    parts = [f"WHERE {compiled.describe()}"]
    order = render_order(compiled.sort_fields, compiled.descending)
    if order:
        parts.append(order)
    page = render_page(compiled.pagination)
    if page:
        parts.append(page)
    return " ".join(parts)
