"""
Adapter registry: data source descriptor → adapter.

Usage::

    registry = build_default_adapter_registry()
    adapter = registry.resolve(DataSource.from_sequence(users, User))
    result = await adapter.apply_filter(group)

Resolution checks the element type before anything is compiled or
executed and raises :class:`UnsupportedTypeError` when no adapter fits.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from ..exceptions import UnsupportedTypeError
from .base import DataSourceAdapter
from .capabilities import supports_any
from .options import AdapterOptions
from .sources import DataSource, DataSourceKind

logger = logging.getLogger("querycraft.adapters.registry")

AdapterFactory = Callable[[DataSource, AdapterOptions], DataSourceAdapter[Any]]


@dataclass(frozen=True)
class _Registration:
    factory: AdapterFactory
    element_types: tuple[Any, ...] = ()


class AdapterRegistry:
    """
    Closed mapping of data source kinds to adapter factories.

    A registration may restrict the element types it accepts; without a
    restriction every element type the source itself declares is accepted.
    """

    def __init__(self, options: AdapterOptions | None = None) -> None:
        self.options = options or AdapterOptions()
        self._registrations: dict[DataSourceKind, _Registration] = {}

    def register(
        self,
        kind: DataSourceKind,
        factory: AdapterFactory,
        *,
        element_types: Iterable[Any] = (),
    ) -> None:
        self._registrations[kind] = _Registration(factory, tuple(element_types))

    def unregister(self, kind: DataSourceKind) -> None:
        self._registrations.pop(kind, None)

    @property
    def kinds(self) -> set[DataSourceKind]:
        return set(self._registrations)

    def can_resolve(self, source: DataSource) -> bool:
        registration = self._registrations.get(source.kind)
        if registration is None:
            return False
        return not registration.element_types or supports_any(
            registration.element_types, source.element_type
        )

    def resolve(self, source: DataSource) -> DataSourceAdapter[Any]:
        """
        Return an adapter bound to *source*.

        Raises:
            UnsupportedTypeError: no adapter serves the source's element type.
        """
        if not self.can_resolve(source):
            raise UnsupportedTypeError(source.element_type, source.kind)
        adapter = self._registrations[source.kind].factory(source, self.options)
        if not adapter.can_handle(source.element_type):
            raise UnsupportedTypeError(source.element_type, source.kind)
        logger.debug(
            "Resolved %s (%s) to adapter %s",
            source.display_name,
            source.kind.value,
            adapter.adapter_name,
        )
        return adapter


def _memory_factory(source: DataSource, options: AdapterOptions) -> DataSourceAdapter[Any]:
    from .memory import MemoryAdapter

    return MemoryAdapter(source, options=options)


def _sqlalchemy_factory(
    source: DataSource, options: AdapterOptions
) -> DataSourceAdapter[Any]:
    from .sqlalchemy import SQLAlchemyAdapter

    return SQLAlchemyAdapter(source, options=options)


def _mongo_factory(source: DataSource, options: AdapterOptions) -> DataSourceAdapter[Any]:
    from .mongo import MongoAdapter

    return MongoAdapter(source, options=options)


def build_default_adapter_registry(
    options: AdapterOptions | None = None,
) -> AdapterRegistry:
    """Registry covering every built-in data source kind."""
    registry = AdapterRegistry(options)
    registry.register(DataSourceKind.ENUMERABLE, _memory_factory)
    registry.register(DataSourceKind.JSON, _memory_factory)
    registry.register(DataSourceKind.QUERYABLE, _sqlalchemy_factory)
    registry.register(DataSourceKind.DOCUMENT, _mongo_factory)
    return registry
