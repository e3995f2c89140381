"""Pushdown adapter over a Motor collection."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, TypeVar

from bson import json_util

from ...results import PageWindow
from ..base import DataSourceAdapter, Execution
from ..options import DURING_SCAN, raise_if_cancelled
from .mapper import MongoDocumentMapper
from .query_builder import MongoQueryBuilder

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection

    from ...compiler import CompiledFilter
    from ..sources import DataSource

T = TypeVar("T")


class MongoAdapter(DataSourceAdapter[T]):
    """
    Serves ``DOCUMENT`` data sources.

    The filter, count, sort and page run on the server; documents are
    mapped back to the element type while iterating the cursor, checking
    cancellation once per batch.
    """

    adapter_name = "mongo"

    def __init__(
        self,
        source: DataSource,
        *,
        id_field: str = "id",
        **kwargs: Any,
    ) -> None:
        self.collection: AsyncIOMotorCollection = source.handle
        self.mapper: MongoDocumentMapper[T] = MongoDocumentMapper(
            source.element_type, id_field=id_field
        )
        self.builder = MongoQueryBuilder(field_map={id_field: "_id"})
        super().__init__(source, **kwargs)

    async def _execute(
        self, compiled: CompiledFilter, cancel: asyncio.Event | None
    ) -> Execution[T]:
        query = self.builder.build_match(compiled)
        total = await self.collection.count_documents(query)
        raise_if_cancelled(cancel, DURING_SCAN)

        window = PageWindow.for_total(compiled.pagination, total)
        cursor = self.collection.find(query).sort(
            self.builder.build_sort(
                compiled.sort_fields, descending=compiled.descending
            )
        )
        if window.offset:
            cursor = cursor.skip(window.offset)
        if window.limit is not None:
            cursor = cursor.limit(window.limit)

        items: list[T] = []
        batch_size = self.options.batch_size
        async for doc in cursor:
            items.append(self.mapper.from_doc(doc))
            if len(items) % batch_size == 0:
                raise_if_cancelled(cancel, DURING_SCAN)

        return Execution(
            items=tuple(items),
            total_items=total,
            native_query=json_util.dumps(query),
        )
