"""Behaviour every adapter shares, run against memory, SQLite and mongomock."""

from __future__ import annotations

import pytest

from querycraft.adapters import DataSource
from querycraft.adapters.mongo import MongoAdapter
from querycraft.adapters.sqlalchemy import SQLAlchemyAdapter
from querycraft.filters import FilterGroupBuilder, any_of

from .factories import User, UserRecord

PAGE_SIZE = 4


@pytest.fixture(params=["memory", "sqlalchemy", "mongo"])
def any_adapter(request, vip_memory_adapter, session_factory, collection):
    if request.param == "memory":
        return vip_memory_adapter
    if request.param == "sqlalchemy":
        return SQLAlchemyAdapter(DataSource.from_sqlalchemy(session_factory, UserRecord))
    return MongoAdapter(DataSource.from_mongo(collection, User))


def young() -> FilterGroupBuilder:
    return FilterGroupBuilder().where("Age", "<", 18)


def vip() -> FilterGroupBuilder:
    return FilterGroupBuilder().where("IsVip", "=", True)


def named_c() -> FilterGroupBuilder:
    return FilterGroupBuilder().where("Name", "startswith", "c")


async def ids_of(adapter, groups) -> set[int]:
    result = await adapter.apply_filters(groups)
    return {item.id for item in result.items}


class TestPagination:
    async def test_pages_partition_the_result(self, any_adapter) -> None:
        def page(number: int):
            return (
                FilterGroupBuilder()
                .order_by("Id", descending=False)
                .paginate(number, PAGE_SIZE)
                .build()
            )

        first = await any_adapter.apply_filter(page(1))
        assert first.total_items == 6
        assert first.total_pages == 2

        seen: list[int] = []
        for number in range(1, first.total_pages + 1):
            result = await any_adapter.apply_filter(page(number))
            assert len(result.items) <= PAGE_SIZE
            if number < result.total_pages:
                assert len(result.items) == PAGE_SIZE
                assert result.has_next_page
            else:
                expected = result.total_items - (result.total_pages - 1) * PAGE_SIZE
                assert len(result.items) == expected
                assert not result.has_next_page
            seen.extend(item.id for item in result.items)

        assert seen == [1, 2, 3, 4, 5, 6]

    async def test_page_past_the_end_is_empty(self, any_adapter) -> None:
        group = FilterGroupBuilder().order_by("Id").paginate(3, PAGE_SIZE).build()

        result = await any_adapter.apply_filter(group)

        assert result.items == ()
        assert result.total_items == 6
        assert result.has_previous_page
        assert not result.has_next_page


class TestFolding:
    async def test_or_is_order_independent(self, any_adapter) -> None:
        forward = await ids_of(any_adapter, any_of(young().build(), vip().build()))
        backward = await ids_of(any_adapter, any_of(vip().build(), young().build()))

        assert forward == backward == {1, 5, 6}

    async def test_or_is_associative(self, any_adapter) -> None:
        vip_or_c = vip().or_where("Name", "startswith", "c").build()
        young_or_vip = young().or_where("IsVip", "=", True).build()

        left = await ids_of(any_adapter, any_of(young().build(), vip_or_c))
        right = await ids_of(any_adapter, any_of(young_or_vip, named_c().build()))

        assert left == right == {1, 3, 5, 6}

    async def test_and_is_order_independent(self, any_adapter) -> None:
        forward = young().and_where("IsVip", "=", True).build()
        backward = vip().and_where("Age", "<", 18).build()

        assert await ids_of(any_adapter, [forward]) == {6}
        assert await ids_of(any_adapter, [backward]) == {6}


class TestIdempotence:
    async def test_repeated_filter_returns_the_same_page(self, any_adapter) -> None:
        group = (
            FilterGroupBuilder()
            .where("IsActive", "=", True)
            .order_by("Age", descending=False)
            .paginate(1, 3)
            .build()
        )

        first = await any_adapter.apply_filter(group)
        second = await any_adapter.apply_filter(group)

        assert [u.id for u in first.items] == [u.id for u in second.items] == [6, 2, 3]
        assert first.total_items == second.total_items == 4
