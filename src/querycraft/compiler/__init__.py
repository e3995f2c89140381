"""Predicate compiler: compiled specification tree, operator strategies, traces."""

from .compiler import (
    DEFAULT_REGISTRY,
    CompiledFilter,
    FilterCompiler,
    combine,
    compile_filter,
    resolve_pagination,
)
from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .operators_memory import build_default_registry
from .specification import (
    AndSpecification,
    CompiledSpecification,
    CriterionSpecification,
    MatchAllSpecification,
    OrSpecification,
    render_value,
)
from .trace import render_trace

__all__ = [
    "AndSpecification",
    "CompiledFilter",
    "CompiledSpecification",
    "CriterionSpecification",
    "DEFAULT_REGISTRY",
    "FilterCompiler",
    "MatchAllSpecification",
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "OrSpecification",
    "build_default_registry",
    "combine",
    "compile_filter",
    "render_trace",
    "render_value",
    "resolve_pagination",
]
