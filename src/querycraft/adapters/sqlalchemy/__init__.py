"""
SQLAlchemy backend.

Public API:
    - ``SQLAlchemyAdapter``: pushdown adapter for ``QUERYABLE`` sources
    - ``build_sqla_filter(model, data)``: compile a filter AST to a
      ``ColumnElement[bool]``
    - ``DEFAULT_SQLA_REGISTRY`` / ``SQLAlchemyOperator`` /
      ``SQLAlchemyOperatorRegistry``: operator strategies
"""

from .adapter import SQLAlchemyAdapter
from .compiler import apply_sort_and_page, build_sqla_filter, schema_from_model
from .operators import DEFAULT_SQLA_REGISTRY, build_default_sqla_registry
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "SQLAlchemyAdapter",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "apply_sort_and_page",
    "build_default_sqla_registry",
    "build_sqla_filter",
    "schema_from_model",
]
