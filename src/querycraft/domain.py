"""Frozen pydantic base shared by the filter model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return tuple(sorted((k, _freeze(v)) for k, v in value.items()))
    if isinstance(value, list | tuple | set | frozenset):
        return tuple(_freeze(v) for v in value)
    try:
        hash(value)
    except TypeError:
        return repr(value)
    return value


def _loc_path(loc: tuple[int | str, ...]) -> str:
    """``("queries", 0, "criterion")`` → ``queries[0].criterion``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _translate(model: type[BaseModel], exc: PydanticValidationError) -> ValidationError:
    errors = exc.errors()
    details = "; ".join(
        f"{_loc_path(err['loc']) or model.__name__}: {err['msg']}" for err in errors
    )
    path = _loc_path(errors[0]["loc"]) if errors else ""
    return ValidationError(
        f"invalid {model.__name__}: {details}", path=path or model.__name__
    )


class ValueObject(BaseModel):
    """
    Immutable, attribute-defined filter value.

    Two instances are equal when their dumped fields are equal, so a
    criterion built from a list equals one built from a tuple. Hashing
    freezes nested containers and falls back to ``repr`` for unhashable
    values such as user-supplied lists inside ``values``.

    Construction failures surface as :class:`querycraft.exceptions.ValidationError`
    whose ``path`` points at the offending field (``queries[0].criterion``).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as exc:
            raise _translate(type(self), exc) from exc

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash((type(self).__name__, _freeze(self.model_dump())))
