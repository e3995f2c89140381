"""
Adapters: execute compiled filters against concrete backends.

Backend subpackages (``querycraft.adapters.sqlalchemy``,
``querycraft.adapters.mongo``) are imported on demand by the registry.
"""

from .base import DataSourceAdapter, Execution
from .capabilities import supports_any, supports_type
from .memory import MemoryAdapter
from .options import AdapterOptions, raise_if_cancelled
from .registry import AdapterRegistry, build_default_adapter_registry
from .sources import DataSource, DataSourceKind

__all__ = [
    "AdapterOptions",
    "AdapterRegistry",
    "DataSource",
    "DataSourceAdapter",
    "DataSourceKind",
    "Execution",
    "MemoryAdapter",
    "build_default_adapter_registry",
    "raise_if_cancelled",
    "supports_any",
    "supports_type",
]
