"""Pushdown adapter over an SQLAlchemy ``async_sessionmaker``."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import func, select

from ...results import PageWindow
from ..base import DataSourceAdapter, Execution
from ..options import DURING_SCAN, raise_if_cancelled
from .compiler import apply_sort_and_page, build_sqla_filter, schema_from_model

if TYPE_CHECKING:
    from ...compiler import CompiledFilter
    from ...filters.accessors import FieldSchema
    from ..sources import DataSource
    from .strategy import SQLAlchemyOperatorRegistry

T = TypeVar("T")


class SQLAlchemyAdapter(DataSourceAdapter[T]):
    """
    Serves ``QUERYABLE`` data sources.

    Filtering, counting, ordering and paging are pushed down to the
    database; the handle is an ``async_sessionmaker`` and a session is
    opened per call.
    """

    adapter_name = "sqlalchemy"

    def __init__(
        self,
        source: DataSource,
        *,
        registry: SQLAlchemyOperatorRegistry | None = None,
        **kwargs: Any,
    ) -> None:
        self.model = source.element_type
        self.session_factory = source.handle
        self.registry = registry
        super().__init__(source, **kwargs)

    def _discover_schema(self) -> FieldSchema | None:
        return schema_from_model(self.model)

    async def _execute(
        self, compiled: CompiledFilter, cancel: asyncio.Event | None
    ) -> Execution[T]:
        criteria = build_sqla_filter(
            self.model, compiled.to_dict(), registry=self.registry
        )
        count_stmt = select(func.count()).select_from(self.model).where(criteria)
        window = PageWindow.for_total(compiled.pagination, 0)
        stmt = apply_sort_and_page(
            select(self.model).where(criteria),
            self.model,
            sort_fields=compiled.sort_fields,
            descending=compiled.descending,
            offset=window.offset,
            limit=window.limit,
        )

        async with self.session_factory() as session:
            total = (await session.execute(count_stmt)).scalar_one()
            raise_if_cancelled(cancel, DURING_SCAN)
            rows = (await session.execute(stmt)).scalars().all()

        return Execution(items=tuple(rows), total_items=total, native_query=str(stmt))
