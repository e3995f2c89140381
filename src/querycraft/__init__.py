"""
QueryCraft: backend-agnostic filter specification and compilation.

Describe *what* to select with :class:`FilterGroup` values, resolve an
adapter for a :class:`DataSource`, and apply the filter::

    group = (
        FilterGroupBuilder()
        .where("Age", ">", 18)
        .and_where("IsActive", "=", True)
        .order_by("Age", descending=False)
        .paginate(1, 20)
        .build()
    )
    adapter = build_default_adapter_registry().resolve(
        DataSource.from_sequence(users, User)
    )
    result = await adapter.apply_filter(group)
"""

from .adapters import (
    AdapterOptions,
    AdapterRegistry,
    DataSource,
    DataSourceAdapter,
    DataSourceKind,
    MemoryAdapter,
    build_default_adapter_registry,
)
from .compiler import CompiledFilter, FilterCompiler, compile_filter
from .exceptions import (
    BackendExecutionError,
    FieldNotFoundError,
    OperatorNotFoundError,
    QueryCancelledError,
    QueryCraftError,
    TypeMismatchError,
    UnsupportedTypeError,
    ValidationError,
)
from .filters import (
    AttributeFieldAccessor,
    FieldAccessor,
    FieldSchema,
    FilterColumn,
    FilterCondition,
    FilterCriterion,
    FilterGroup,
    FilterGroupBuilder,
    FilterOperator,
    FilterQuery,
    MappingFieldAccessor,
    PaginationSpec,
    all_of,
    any_of,
)
from .results import QueryMetadata, QueryResult

__all__ = [
    # Filter model
    "FilterColumn",
    "FilterCondition",
    "FilterCriterion",
    "FilterGroup",
    "FilterGroupBuilder",
    "FilterOperator",
    "FilterQuery",
    "PaginationSpec",
    "all_of",
    "any_of",
    # Field access
    "AttributeFieldAccessor",
    "FieldAccessor",
    "FieldSchema",
    "MappingFieldAccessor",
    # Compiler
    "CompiledFilter",
    "FilterCompiler",
    "compile_filter",
    # Adapters
    "AdapterOptions",
    "AdapterRegistry",
    "DataSource",
    "DataSourceAdapter",
    "DataSourceKind",
    "MemoryAdapter",
    "build_default_adapter_registry",
    # Results
    "QueryMetadata",
    "QueryResult",
    # Errors
    "BackendExecutionError",
    "FieldNotFoundError",
    "OperatorNotFoundError",
    "QueryCancelledError",
    "QueryCraftError",
    "TypeMismatchError",
    "UnsupportedTypeError",
    "ValidationError",
]
