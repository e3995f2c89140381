"""
Element-type capability checks.

A declared supported type accepts an element type when:

- both are the same type;
- the declared type is a supertype of the element type, including
  abstract base classes and ``runtime_checkable`` protocols;
- the declared type is a generic family (``Box``, ``Sequence``) and the
  element type instantiates it (``Box[int]``, ``list[str]``);
- the declared type is a parameterised generic and the element type is an
  instantiation of the same family with the same arguments.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, get_args, get_origin


def _is_subclass(candidate: Any, parent: Any) -> bool:
    if not isinstance(candidate, type) or not isinstance(parent, type):
        return False
    try:
        return issubclass(candidate, parent)
    except TypeError:
        # Protocols with data members refuse issubclass().
        return False


def supports_type(declared: Any, element_type: Any) -> bool:
    if declared is element_type or declared == element_type:
        return True

    declared_origin = get_origin(declared)
    element_origin = get_origin(element_type) or element_type

    if declared_origin is None:
        return _is_subclass(element_origin, declared)

    if get_origin(element_type) is None:
        return False
    return _is_subclass(element_origin, declared_origin) and get_args(
        element_type
    ) == get_args(declared)


def supports_any(declared_types: Iterable[Any], element_type: Any) -> bool:
    return any(supports_type(declared, element_type) for declared in declared_types)
