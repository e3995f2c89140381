"""Tests for the SQLAlchemy pushdown adapter (async SQLite via aiosqlite)."""

from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from querycraft.adapters import DataSource, build_default_adapter_registry
from querycraft.adapters.sqlalchemy import (
    SQLAlchemyAdapter,
    apply_sort_and_page,
    build_sqla_filter,
    schema_from_model,
)
from querycraft.exceptions import (
    BackendExecutionError,
    FieldNotFoundError,
    QueryCancelledError,
    ValidationError,
)
from querycraft.filters import FilterGroupBuilder, any_of

from .factories import PostRecord, UserRecord


class OtherBase(DeclarativeBase):
    pass


class MissingTableRecord(OtherBase):
    __tablename__ = "never_created"

    id: Mapped[int] = mapped_column(primary_key=True)


@pytest.fixture
def adapter(session_factory) -> SQLAlchemyAdapter[UserRecord]:
    return SQLAlchemyAdapter(DataSource.from_sqlalchemy(session_factory, UserRecord))


def adults_that_are_active() -> FilterGroupBuilder:
    return FilterGroupBuilder().where("Age", ">", 18).and_where("IsActive", "=", True)


class TestActiveAdults:
    async def test_filter_without_pagination(self, adapter) -> None:
        result = await adapter.apply_filter(adults_that_are_active().build())

        assert [u.age for u in result.items] == [20, 25, 30]
        assert result.total_items == 3
        assert result.page_size == 3

    async def test_second_page_sorted_ascending(self, adapter) -> None:
        group = adults_that_are_active().order_by("Age", descending=False).paginate(2, 1)

        result = await adapter.apply_filter(group.build())

        assert [u.age for u in result.items] == [25]
        assert result.total_items == 3
        assert result.total_pages == 3
        assert result.query_trace == (
            "WHERE age > 18 AND is_active = True ORDER BY age ASC SKIP 1 TAKE 1"
        )
        assert "ORDER BY users.age ASC" in result.metadata.native_query
        assert result.metadata.adapter_name == "sqlalchemy"

    async def test_groups_joined_by_or(self, adapter) -> None:
        group1 = FilterGroupBuilder().where("Age", ">=", 18).and_where("IsActive", "=", True)
        group2 = FilterGroupBuilder().where("IsVip", "=", True).and_where("IsActive", "=", True)

        result = await adapter.apply_filters(any_of(group1.build(), group2.build()))

        assert [u.id for u in result.items] == [2, 3, 4, 6]


class TestOperators:
    @pytest.mark.parametrize(
        ("builder", "expected_ids"),
        [
            (FilterGroupBuilder().where("Name", "=", "DAVE"), [4]),
            (FilterGroupBuilder().where("Name", "in", ["alice", "EVE"]), [1, 5]),
            (FilterGroupBuilder().where("Age", "not_in", [10, 15, 40]), [2, 3, 4]),
            (FilterGroupBuilder().where("Age", "between", 20, 30), [2, 3, 4]),
            (FilterGroupBuilder().where("Age", "between", 30, 20), []),
            (FilterGroupBuilder().where("Email", "is_null"), [2, 6]),
            (FilterGroupBuilder().where("Email", "!=", "eve@example.com"), [1, 2, 3, 4, 6]),
            (FilterGroupBuilder().where("Email", "contains", "EXAMPLE"), [1, 3, 4, 5]),
            (FilterGroupBuilder().where("Name", "startswith", "ca"), [3]),
            (FilterGroupBuilder().where("Age", "<=", "15"), [1, 6]),
            (FilterGroupBuilder().where("Email", "<", "z"), [1, 3, 4, 5]),
            (FilterGroupBuilder().where("Email", "between", "a", "d"), [1, 3]),
        ],
    )
    async def test_pushdown_matches_memory_semantics(
        self, adapter, builder, expected_ids
    ) -> None:
        result = await adapter.apply_filter(builder.build())
        assert [u.id for u in result.items] == expected_ids

    async def test_like_wildcards_are_literal(self, adapter) -> None:
        group = FilterGroupBuilder().where("Email", "contains", "%").build()
        result = await adapter.apply_filter(group)
        assert result.total_items == 0


class TestErrors:
    async def test_unknown_field_is_rejected_before_execution(self, adapter) -> None:
        group = FilterGroupBuilder().where("Agee", ">", 1).build()
        with pytest.raises(FieldNotFoundError) as exc_info:
            await adapter.apply_filter(group)
        assert exc_info.value.model_name == "UserRecord"

    async def test_backend_failure_is_wrapped(self, session_factory) -> None:
        adapter = SQLAlchemyAdapter(
            DataSource.from_sqlalchemy(session_factory, MissingTableRecord)
        )
        with pytest.raises(BackendExecutionError) as exc_info:
            await adapter.apply_filter(FilterGroupBuilder().build())
        assert isinstance(exc_info.value.__cause__, OperationalError)

    async def test_cancelled_before_execution(self, adapter) -> None:
        cancel = asyncio.Event()
        cancel.set()
        with pytest.raises(QueryCancelledError):
            await adapter.apply_filter(FilterGroupBuilder().build(), cancel=cancel)

    def test_relationship_sort_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            apply_sort_and_page(
                select(UserRecord),
                UserRecord,
                sort_fields=["posts.title"],
                descending=True,
            )


class TestFilterCompilation:
    def test_case_sensitive_leaf(self) -> None:
        data = {"op": "=", "attr": "name", "val": "Bob", "case_sensitive": True}
        expr = build_sqla_filter(UserRecord, data)
        assert str(expr.compile()) == "users.name = :name_1"

    def test_case_insensitive_leaf_lowers_column(self) -> None:
        data = {"op": "=", "attr": "name", "val": "Bob", "case_sensitive": False}
        compiled = build_sqla_filter(UserRecord, data).compile()
        assert "lower(users.name)" in str(compiled)
        assert "bob" in compiled.params.values()

    def test_composite(self) -> None:
        data = {
            "op": "or",
            "conditions": [
                {"op": ">", "attr": "age", "val": 18},
                {"op": "is_null", "attr": "email", "val": None},
            ],
        }
        compiled = str(build_sqla_filter(UserRecord, data).compile())
        assert "users.age > :age_1 OR users.email IS NULL" == compiled

    def test_relationship_any(self) -> None:
        data = {"op": "startswith", "attr": "posts.title", "val": "py"}
        compiled = str(build_sqla_filter(UserRecord, data).compile())
        assert "EXISTS" in compiled
        assert "posts.title" in compiled

    def test_relationship_has(self) -> None:
        data = {"op": "=", "attr": "author.name", "val": "Bob"}
        compiled = str(build_sqla_filter(PostRecord, data).compile())
        assert "EXISTS" in compiled
        assert "users.name" in compiled

    def test_schema_from_model(self) -> None:
        schema = schema_from_model(UserRecord)
        assert schema is not None
        assert schema.type_of("IsActive") is bool
        assert schema.type_of("email") is str
        assert schema.resolve("posts.title") == "posts.title"


class TestResolution:
    def test_registry_resolves_queryable_source(self, session_factory) -> None:
        adapter = build_default_adapter_registry().resolve(
            DataSource.from_sqlalchemy(session_factory, UserRecord)
        )
        assert isinstance(adapter, SQLAlchemyAdapter)
