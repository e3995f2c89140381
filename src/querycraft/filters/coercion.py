"""
Value coercion towards a field's declared type.

These are pure-Python helpers with no backend dependencies.
"""

from __future__ import annotations

import datetime
import decimal
import enum
import uuid
from typing import Any, get_origin

from ..exceptions import TypeMismatchError

_TRUE = frozenset({"true", "1", "yes", "y", "on"})
_FALSE = frozenset({"false", "0", "no", "n", "off"})


def type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or str(tp)


def is_known_scalar_type(tp: Any) -> bool:
    """``True`` for plain classes coercion can reason about."""
    return isinstance(tp, type) and get_origin(tp) is None and tp is not object


def is_textual_type(tp: Any) -> bool:
    return is_known_scalar_type(tp) and issubclass(tp, str)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise ValueError(f"not a boolean: {value!r}")


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("bool is not an integer value")
    if isinstance(value, int):
        return value
    if isinstance(value, float | decimal.Decimal):
        if value != int(value):
            raise ValueError(f"not an integral value: {value!r}")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"cannot convert {type(value).__name__} to int")


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric value")
    if isinstance(value, int | float | decimal.Decimal):
        return float(value)
    if isinstance(value, str):
        return float(value.strip())
    raise TypeError(f"cannot convert {type(value).__name__} to float")


def _to_decimal(value: Any) -> decimal.Decimal:
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric value")
    if isinstance(value, decimal.Decimal):
        return value
    if isinstance(value, int | float | str):
        return decimal.Decimal(str(value).strip())
    raise TypeError(f"cannot convert {type(value).__name__} to Decimal")


def _to_datetime(value: Any) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return datetime.datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    raise TypeError(f"cannot convert {type(value).__name__} to datetime")


def _to_date(value: Any) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        return datetime.date.fromisoformat(value.strip())
    raise TypeError(f"cannot convert {type(value).__name__} to date")


def _to_time(value: Any) -> datetime.time:
    if isinstance(value, datetime.time):
        return value
    if isinstance(value, str):
        return datetime.time.fromisoformat(value.strip())
    raise TypeError(f"cannot convert {type(value).__name__} to time")


def _to_enum(value: Any, target: type[enum.Enum]) -> enum.Enum:
    if isinstance(value, target):
        return value
    try:
        return target(value)
    except ValueError:
        if isinstance(value, str) and value in target.__members__:
            return target.__members__[value]
        raise


def _cast(value: Any, target: type) -> Any:
    # Order matters: bool before int, datetime before date, enums before str.
    if issubclass(target, enum.Enum):
        return _to_enum(value, target)
    if target is bool:
        return _to_bool(value)
    if target is int:
        return _to_int(value)
    if target is float:
        return _to_float(value)
    if target is decimal.Decimal:
        return _to_decimal(value)
    if target is datetime.datetime:
        return _to_datetime(value)
    if target is datetime.date:
        return _to_date(value)
    if target is datetime.time:
        return _to_time(value)
    if target is uuid.UUID:
        return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
    if target is str:
        if isinstance(value, str):
            return value
        if isinstance(value, bool | int | float | decimal.Decimal | uuid.UUID):
            return str(value)
        raise TypeError(f"cannot convert {type(value).__name__} to str")
    return value


def coerce_value(
    value: Any,
    target: Any,
    *,
    field: str,
    operator: Any,
    path: str | None = None,
) -> Any:
    """
    Cast *value* to *target* (the field's declared type).

    ``None`` values and unknown/generic targets pass through unchanged.

    Raises:
        TypeMismatchError: when the value cannot represent the target type.
    """
    if value is None or not is_known_scalar_type(target):
        return value
    try:
        return _cast(value, target)
    except (ValueError, TypeError, ArithmeticError, KeyError) as exc:
        raise TypeMismatchError(
            field,
            operator,
            expected=type_name(target),
            actual=f"{type(value).__name__} {value!r}",
            path=path,
        ) from exc
