"""
Field accessors: field name → reader of that field on a candidate.

The compiler and the sorter only need a name → reader lookup. Two
implementations are provided:

- :class:`AttributeFieldAccessor` reads attributes (or dict keys) and
  follows dot-separated paths such as ``address.city``.
- :class:`MappingFieldAccessor` wraps an explicit table of readers.

:class:`FieldSchema` describes the fields an element type exposes and their
Python types. It is discovered from pydantic models, dataclasses and
annotated classes, and is used to resolve field names and to type-check
operators at compile time.
"""

from __future__ import annotations

import dataclasses
import re
import types
import typing
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol, Union, runtime_checkable

from ..exceptions import FieldNotFoundError

Reader = Callable[[Any], Any]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_snake_case(name: str) -> str:
    """``IsActive`` → ``is_active``; ``userID`` → ``user_id``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def resolve_field_name(name: str, available: Iterable[str]) -> str | None:
    """
    Match *name* against *available* field names.

    Tries an exact match, then the snake_case form, then a
    case-insensitive comparison. Returns ``None`` when nothing matches.
    """
    candidates = list(available)
    if name in candidates:
        return name
    snake = to_snake_case(name)
    if snake in candidates:
        return snake
    folded = name.replace("_", "").lower()
    for candidate in candidates:
        if candidate.replace("_", "").lower() == folded:
            return candidate
    return None


def unwrap_optional(tp: Any) -> Any:
    """Strip ``Optional``/``Annotated`` wrappers; leave other types unchanged."""
    origin = typing.get_origin(tp)
    if origin is typing.Annotated:
        return unwrap_optional(typing.get_args(tp)[0])
    if origin is Union or origin is types.UnionType:
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return unwrap_optional(args[0])
    return tp


class FieldSchema:
    """Known fields of an element type and their (unwrapped) Python types."""

    def __init__(self, fields: Mapping[str, Any], *, model_name: str = "element") -> None:
        self._fields = {name: unwrap_optional(tp) for name, tp in fields.items()}
        self.model_name = model_name

    @classmethod
    def from_type(cls, element_type: Any) -> FieldSchema | None:
        """
        Discover the schema of *element_type*.

        Returns ``None`` for schemaless types (``dict``, ``Any``, unannotated
        classes); callers then resolve field names verbatim at runtime.
        """
        target = typing.get_origin(element_type) or element_type
        if not isinstance(target, type) or issubclass(target, Mapping):
            return None
        name = target.__name__
        model_fields = getattr(target, "model_fields", None)
        if isinstance(model_fields, dict):
            return cls(
                {k: f.annotation for k, f in model_fields.items()}, model_name=name
            )
        hints = _type_hints(target)
        if dataclasses.is_dataclass(target):
            return cls(
                {f.name: hints.get(f.name) for f in dataclasses.fields(target)},
                model_name=name,
            )
        public = {k: v for k, v in hints.items() if not k.startswith("_")}
        if public:
            return cls(public, model_name=name)
        return None

    @property
    def fields(self) -> Mapping[str, Any]:
        return dict(self._fields)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def find(self, name: str) -> str | None:
        head, _, _ = name.partition(".")
        resolved = resolve_field_name(head, self._fields)
        if resolved is None:
            return None
        return resolved + name[len(head) :]

    def resolve(self, name: str, *, path: str | None = None) -> str:
        """Return the canonical field path or raise :class:`FieldNotFoundError`."""
        resolved = self.find(name)
        if resolved is None:
            raise FieldNotFoundError(
                name, self.model_name, list(self._fields), path=path
            )
        return resolved

    def type_of(self, name: str) -> Any:
        """Declared type of a top-level field, or ``None`` when unknown."""
        resolved = self.find(name)
        if resolved is None or "." in resolved:
            return None
        tp = self._fields.get(resolved)
        return None if tp is Any else tp


def _type_hints(target: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(target)
    except Exception:  # noqa: BLE001
        # Unresolvable forward references: keep only real types.
        raw = getattr(target, "__annotations__", {})
        return {k: v for k, v in raw.items() if not isinstance(v, str)}


@runtime_checkable
class FieldAccessor(Protocol):
    """Name → reader lookup used by the compiler and the sorter."""

    def reader(self, field_name: str) -> Reader:
        """Return a callable reading *field_name* from a candidate."""
        ...


def read_path(obj: Any, path: str) -> Any:
    """
    Resolve a dot-separated attribute path on *obj*.

    Dicts are read by key, other objects by attribute; a missing step
    yields ``None``.
    """
    for part in path.split("."):
        if obj is None:
            return None
        obj = obj.get(part) if isinstance(obj, Mapping) else getattr(obj, part, None)
    return obj


class AttributeFieldAccessor:
    """Reads attributes or dict keys, resolving names through a schema."""

    def __init__(self, schema: FieldSchema | None = None) -> None:
        self.schema = schema

    def reader(self, field_name: str) -> Reader:
        path = self.schema.resolve(field_name) if self.schema else field_name

        def read(candidate: Any) -> Any:
            return read_path(candidate, path)

        return read


class MappingFieldAccessor:
    """Explicit table of readers, e.g. a generated accessor table."""

    def __init__(
        self, readers: Mapping[str, Reader], *, model_name: str = "element"
    ) -> None:
        self._readers = dict(readers)
        self.model_name = model_name

    def reader(self, field_name: str) -> Reader:
        resolved = resolve_field_name(field_name, self._readers)
        if resolved is None:
            raise FieldNotFoundError(field_name, self.model_name, list(self._readers))
        return self._readers[resolved]
