"""
Local-evaluation adapter for in-memory sequences and JSON text.

Filtering runs the compiled specification over every element, yielding to
the event loop and checking cancellation once per batch.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import TypeAdapter

from ..compiler import CompiledFilter
from ..results import PageWindow, stable_sort
from .base import DataSourceAdapter, Execution
from .options import DURING_SCAN, raise_if_cancelled
from .sources import DataSourceKind

T = TypeVar("T")


class MemoryAdapter(DataSourceAdapter[T]):
    """Serves ``ENUMERABLE`` and ``JSON`` data sources."""

    adapter_name = "memory"

    def _load(self) -> Sequence[T]:
        if self.source.kind is DataSourceKind.JSON:
            element_type = self.source.element_type
            adapter: TypeAdapter[list[Any]] = TypeAdapter(
                list[element_type]  # type: ignore[valid-type]
            )
            return adapter.validate_json(self.source.handle)
        return tuple(self.source.handle)

    async def _execute(
        self, compiled: CompiledFilter, cancel: asyncio.Event | None
    ) -> Execution[T]:
        items = self._load()
        batch_size = self.options.batch_size
        matched: list[T] = []
        for index, item in enumerate(items):
            if index and index % batch_size == 0:
                await asyncio.sleep(0)
                raise_if_cancelled(cancel, DURING_SCAN)
            if compiled.is_satisfied_by(item):
                matched.append(item)

        ordered = stable_sort(
            matched,
            compiled.sort_readers(),
            descending=compiled.descending,
            field_names=compiled.sort_fields,
        )
        window = PageWindow.for_total(compiled.pagination, len(ordered))
        return Execution(
            items=window.slice(ordered),
            total_items=len(ordered),
            native_query=compiled.trace,
        )
