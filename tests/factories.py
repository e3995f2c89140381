"""Sample element types and datasets shared by the test suite."""

from __future__ import annotations

from pydantic import BaseModel
from sqlalchemy import ForeignKey
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class User(BaseModel):
    id: int
    name: str
    age: int
    is_active: bool
    is_vip: bool = False
    email: str | None = None


class Admin(User):
    """Subtype used for capability checks."""

    level: int = 1


def make_users() -> list[User]:
    """Ages [15, 20, 25, 30, 40], active [F, T, T, T, F]."""
    return [
        User(id=1, name="Alice", age=15, is_active=False, email="alice@example.com"),
        User(id=2, name="Bob", age=20, is_active=True),
        User(id=3, name="Carol", age=25, is_active=True, email="carol@example.com"),
        User(id=4, name="dave", age=30, is_active=True, email="DAVE@Example.com"),
        User(
            id=5, name="Eve", age=40, is_active=False, is_vip=True, email="eve@example.com"
        ),
    ]


def make_young_vip() -> User:
    return User(id=6, name="Finn", age=10, is_active=True, is_vip=True)


class Base(DeclarativeBase):
    pass


class UserRecord(Base):
    """Relational mirror of :class:`User`."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str]
    age: Mapped[int]
    is_active: Mapped[bool]
    is_vip: Mapped[bool] = mapped_column(default=False)
    email: Mapped[str | None] = mapped_column(default=None)
    posts: Mapped[list[PostRecord]] = relationship(back_populates="author")


class PostRecord(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str]
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    author: Mapped[UserRecord] = relationship(back_populates="posts")
