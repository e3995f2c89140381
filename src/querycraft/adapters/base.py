"""
Adapter contract shared by every backend.

``apply_filter`` / ``apply_filters`` run the same pipeline everywhere:

1. compile the groups (validation, field resolution, coercion);
2. check the page size against :class:`AdapterOptions`;
3. observe cancellation before touching the backend;
4. execute (backend specific);
5. wrap backend failures in :class:`BackendExecutionError`;
6. build the :class:`QueryResult` with trace and metadata.
"""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from ..compiler import CompiledFilter, FilterCompiler
from ..exceptions import BackendExecutionError, QueryCraftError
from ..filters.accessors import FieldAccessor, FieldSchema
from ..filters.models import FilterGroup
from ..results import PageWindow, QueryMetadata, QueryResult, build_result
from .capabilities import supports_any
from .options import BEFORE_EXECUTION, AdapterOptions, raise_if_cancelled
from .sources import DataSource

logger = logging.getLogger("querycraft.adapters")

T = TypeVar("T")


@dataclass(frozen=True)
class Execution(Generic[T]):
    """What a backend returns: the page slice, the full count and its query."""

    items: Sequence[T]
    total_items: int
    native_query: str = ""


class DataSourceAdapter(ABC, Generic[T]):
    """
    Executes compiled filters against one :class:`DataSource`.

    Subclasses implement :meth:`_execute`; adapters keep no mutable state
    between calls.
    """

    adapter_name: ClassVar[str] = "adapter"

    def __init__(
        self,
        source: DataSource,
        *,
        options: AdapterOptions | None = None,
        schema: FieldSchema | None = None,
        accessor: FieldAccessor | None = None,
    ) -> None:
        self.source = source
        self.options = options or AdapterOptions()
        self.schema = schema if schema is not None else self._discover_schema()
        self.accessor = accessor

    def _discover_schema(self) -> FieldSchema | None:
        return FieldSchema.from_type(self.source.element_type)

    # -- capabilities --------------------------------------------------------

    @property
    def supported_types(self) -> tuple[Any, ...]:
        return self.source.declared_types

    def can_handle(self, element_type: Any) -> bool:
        """Whether this adapter can serve elements of *element_type*."""
        return supports_any(self.supported_types, element_type)

    # -- compilation ---------------------------------------------------------

    def compile(self, groups: FilterGroup | Sequence[FilterGroup]) -> CompiledFilter:
        return FilterCompiler(schema=self.schema, accessor=self.accessor).compile(
            groups
        )

    # -- execution -----------------------------------------------------------

    async def apply_filter(
        self,
        group: FilterGroup,
        *,
        cancel: asyncio.Event | None = None,
    ) -> QueryResult[T]:
        """Apply a single filter group."""
        return await self.apply_filters([group], cancel=cancel)

    async def apply_filters(
        self,
        groups: Sequence[FilterGroup],
        *,
        cancel: asyncio.Event | None = None,
    ) -> QueryResult[T]:
        """
        Apply several filter groups folded by their conditions.

        Raises:
            ValidationError: malformed groups or an oversized page.
            TypeMismatchError: operator or value incompatible with a field.
            QueryCancelledError: *cancel* was set before or during execution.
            BackendExecutionError: the backend raised.
        """
        compiled = self.compile(groups)
        if compiled.pagination is not None:
            self.options.check_page_size(compiled.pagination.page_size)
        raise_if_cancelled(cancel, BEFORE_EXECUTION)

        started = time.perf_counter()
        try:
            execution = await self._execute(compiled, cancel)
        except QueryCraftError:
            raise
        except Exception as exc:
            logger.warning(
                "Adapter %s failed on %s: %s",
                self.adapter_name,
                self.source.display_name,
                exc,
            )
            raise BackendExecutionError(self.adapter_name, exc) from exc
        elapsed_ms = (time.perf_counter() - started) * 1000

        trace = compiled.trace
        metadata = QueryMetadata(
            query_trace=trace,
            native_query=execution.native_query or trace,
            adapter_name=self.adapter_name,
            pagination=compiled.pagination,
            elapsed_ms=elapsed_ms,
        )
        logger.debug(
            "Adapter %s on %s: %d item(s) in %.2f ms: %s",
            self.adapter_name,
            self.source.display_name,
            execution.total_items,
            elapsed_ms,
            trace,
        )
        window = PageWindow.for_total(compiled.pagination, execution.total_items)
        return build_result(
            execution.items,
            total_items=execution.total_items,
            window=window,
            metadata=metadata,
        )

    @abstractmethod
    async def _execute(
        self, compiled: CompiledFilter, cancel: asyncio.Event | None
    ) -> Execution[T]:
        """Run *compiled* against the backend and return one page."""
        ...
