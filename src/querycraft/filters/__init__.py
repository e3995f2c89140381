"""Filter model: operators, criteria, queries, groups, pagination and accessors."""

from .accessors import (
    AttributeFieldAccessor,
    FieldAccessor,
    FieldSchema,
    MappingFieldAccessor,
    read_path,
    resolve_field_name,
    to_snake_case,
)
from .builder import FilterGroupBuilder, all_of, any_of
from .coercion import coerce_value, is_textual_type
from .models import (
    FilterColumn,
    FilterCriterion,
    FilterGroup,
    FilterQuery,
    PaginationSpec,
)
from .operators import (
    NULL_OPERATORS,
    ORDERING_OPERATORS,
    SET_OPERATORS,
    TEXTUAL_OPERATORS,
    FilterCondition,
    FilterOperator,
    require_exhaustive,
)

__all__ = [
    # Vocabulary
    "FilterCondition",
    "FilterOperator",
    "NULL_OPERATORS",
    "ORDERING_OPERATORS",
    "SET_OPERATORS",
    "TEXTUAL_OPERATORS",
    "require_exhaustive",
    # Model
    "FilterColumn",
    "FilterCriterion",
    "FilterGroup",
    "FilterQuery",
    "PaginationSpec",
    # Builder
    "FilterGroupBuilder",
    "all_of",
    "any_of",
    # Accessors
    "AttributeFieldAccessor",
    "FieldAccessor",
    "FieldSchema",
    "MappingFieldAccessor",
    "read_path",
    "resolve_field_name",
    "to_snake_case",
    # Coercion
    "coerce_value",
    "is_textual_type",
]
