"""
Query results, metadata and the pagination / sort arithmetic shared by
every adapter.

``QueryResult`` never stores ``total_pages``; it is derived from
``total_items`` and ``page_size`` on access.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .exceptions import TypeMismatchError

if TYPE_CHECKING:
    from .filters.accessors import Reader
    from .filters.models import PaginationSpec

T = TypeVar("T")


@dataclass(frozen=True)
class QueryMetadata:
    """
    Diagnostics describing the query that was actually executed.

    Attributes:
        query_trace: Backend-neutral rendering of filter, sort and page.
        native_query: Backend-native rendering (SQL text, Mongo filter
            document, or the trace itself for in-memory evaluation).
        adapter_name: Name of the adapter that executed the query.
        pagination: The pagination that was applied, if any.
        elapsed_ms: Wall-clock execution time in milliseconds.
    """

    query_trace: str
    native_query: str = ""
    adapter_name: str = ""
    pagination: PaginationSpec | None = None
    elapsed_ms: float = 0.0


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """One page of matching items plus counts and diagnostics."""

    items: tuple[T, ...]
    page_number: int
    page_size: int
    total_items: int
    metadata: QueryMetadata = field(default_factory=lambda: QueryMetadata(""))

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_items, self.page_size)

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    @property
    def query_trace(self) -> str:
        return self.metadata.query_trace

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)


def total_pages(total_items: int, page_size: int) -> int:
    """``ceil(total_items / page_size)``; ``0`` for an empty page size."""
    if page_size <= 0:
        return 0
    return math.ceil(total_items / page_size)


@dataclass(frozen=True)
class PageWindow:
    """Resolved page coordinates for a result of ``total_items`` items."""

    page_number: int
    page_size: int
    offset: int
    limit: int | None

    @classmethod
    def for_total(
        cls, pagination: PaginationSpec | None, total_items: int
    ) -> PageWindow:
        """
        Without pagination the whole set is a single page:
        ``page_number = 1`` and ``page_size = total_items``.
        """
        if pagination is None or not pagination.is_paged:
            return cls(page_number=1, page_size=total_items, offset=0, limit=None)
        assert pagination.page_number is not None
        assert pagination.page_size is not None
        return cls(
            page_number=pagination.page_number,
            page_size=pagination.page_size,
            offset=pagination.offset,
            limit=pagination.page_size,
        )

    def slice(self, items: Sequence[T]) -> tuple[T, ...]:
        end = None if self.limit is None else self.offset + self.limit
        return tuple(items[self.offset : end])


def _sort_key(value: Any) -> tuple[Any, ...]:
    # None sorts before any value, as SQL engines and MongoDB do ascending.
    return (0,) if value is None else (1, value)


def stable_sort(
    items: Iterable[T],
    readers: Sequence[Reader],
    *,
    descending: bool,
    field_names: Sequence[str] = (),
) -> list[T]:
    """
    Sort by several fields in one direction, preserving encounter order
    for ties.

    Raises:
        TypeMismatchError: when a sort field holds mutually incomparable values.
    """
    materialized = list(items)
    if not readers:
        return materialized

    def key(item: T) -> tuple[Any, ...]:
        return tuple(_sort_key(read(item)) for read in readers)

    try:
        return sorted(materialized, key=key, reverse=descending)
    except TypeError as exc:
        raise TypeMismatchError(
            ", ".join(field_names) or "<sort>",
            "ORDER BY",
            expected="mutually comparable values",
            actual=str(exc),
            path="pagination.sort_fields",
        ) from exc


def build_result(
    items: Sequence[T],
    *,
    total_items: int,
    window: PageWindow,
    metadata: QueryMetadata,
) -> QueryResult[T]:
    return QueryResult(
        items=tuple(items),
        page_number=window.page_number,
        page_size=window.page_size,
        total_items=total_items,
        metadata=metadata,
    )
