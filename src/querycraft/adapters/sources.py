"""
Data source descriptors.

A :class:`DataSource` names a backend kind, the element type it yields and
the handle the adapter executes against. The handle is owned by the
caller: this package never opens or closes connections.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection
    from sqlalchemy.ext.asyncio import async_sessionmaker


class DataSourceKind(str, Enum):
    """Backend kinds understood by the default adapter registry."""

    ENUMERABLE = "enumerable"
    JSON = "json"
    QUERYABLE = "queryable"
    DOCUMENT = "document"


@dataclass(frozen=True)
class DataSource:
    """
    Attributes:
        kind: Which backend family serves this source.
        element_type: Type of the elements the source yields.
        handle: Backend handle (a tuple of items, JSON text, an async
            session factory or a Motor collection).
        friendly_name: Display name used in logs and metadata.
        supported_types: Element types the source declares it can serve;
            defaults to ``(element_type,)``.
    """

    kind: DataSourceKind
    element_type: Any
    handle: Any
    friendly_name: str = ""
    supported_types: tuple[Any, ...] = ()

    @property
    def declared_types(self) -> tuple[Any, ...]:
        return self.supported_types or (self.element_type,)

    @property
    def display_name(self) -> str:
        return self.friendly_name or getattr(
            self.element_type, "__name__", str(self.element_type)
        )

    @classmethod
    def from_sequence(
        cls,
        items: Iterable[Any],
        element_type: Any = None,
        *,
        friendly_name: str = "",
        supported_types: Iterable[Any] = (),
    ) -> DataSource:
        """In-memory sequence; ``element_type`` defaults to the first item's type."""
        materialized = tuple(items)
        if element_type is None:
            element_type = type(materialized[0]) if materialized else object
        return cls(
            kind=DataSourceKind.ENUMERABLE,
            element_type=element_type,
            handle=materialized,
            friendly_name=friendly_name,
            supported_types=tuple(supported_types),
        )

    @classmethod
    def from_json(
        cls,
        text: str | bytes,
        element_type: Any,
        *,
        friendly_name: str = "",
    ) -> DataSource:
        """JSON array text, parsed into ``element_type`` at execution time."""
        return cls(
            kind=DataSourceKind.JSON,
            element_type=element_type,
            handle=text,
            friendly_name=friendly_name,
        )

    @classmethod
    def from_sqlalchemy(
        cls,
        session_factory: async_sessionmaker[Any],
        model: type[Any],
        *,
        friendly_name: str = "",
    ) -> DataSource:
        """Mapped model queried through an ``async_sessionmaker``."""
        return cls(
            kind=DataSourceKind.QUERYABLE,
            element_type=model,
            handle=session_factory,
            friendly_name=friendly_name,
        )

    @classmethod
    def from_mongo(
        cls,
        collection: AsyncIOMotorCollection,
        element_type: Any,
        *,
        friendly_name: str = "",
    ) -> DataSource:
        """Motor collection whose documents map onto ``element_type``."""
        return cls(
            kind=DataSourceKind.DOCUMENT,
            element_type=element_type,
            handle=collection,
            friendly_name=friendly_name,
        )
