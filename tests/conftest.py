"""Shared fixtures for the querycraft test suite."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
from mongomock_motor import AsyncMongoMockClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from querycraft.adapters import DataSource, MemoryAdapter
from querycraft.compiler import build_default_registry

from .factories import Base, User, UserRecord, make_users, make_young_vip


@pytest.fixture
def registry():
    """Default in-memory operator registry."""
    return build_default_registry()


@pytest.fixture
def users() -> list[User]:
    return make_users()


@pytest.fixture
def users_with_vip() -> list[User]:
    return [*make_users(), make_young_vip()]


@pytest.fixture
def memory_adapter(users: list[User]) -> MemoryAdapter[User]:
    return MemoryAdapter(DataSource.from_sequence(users, User))


@pytest.fixture
def vip_memory_adapter(users_with_vip: list[User]) -> MemoryAdapter[User]:
    return MemoryAdapter(DataSource.from_sequence(users_with_vip, User))


@pytest.fixture
async def session_factory(
    users_with_vip: list[User],
) -> AsyncGenerator[async_sessionmaker, None]:
    """In-memory SQLite holding the same six users as ``vip_memory_adapter``."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        session.add_all(UserRecord(**user.model_dump()) for user in users_with_vip)
        await session.commit()
    yield factory
    await engine.dispose()


@pytest.fixture
async def collection(users_with_vip: list[User]):
    client = AsyncMongoMockClient(default_database_name="test_db")
    coll = client.get_database("test_db")["users"]
    docs = []
    for user in users_with_vip:
        # Finn has no email key at all, Bob stores an explicit null.
        doc = user.model_dump(exclude_none=user.id == 6)
        doc["_id"] = doc.pop("id")
        docs.append(doc)
    await coll.insert_many(docs)
    return coll
