"""MongoDB document → element mapper with BSON type restoration."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Generic, TypeVar

from bson.decimal128 import Decimal128

T = TypeVar("T")


class MongoDocumentMapper(Generic[T]):
    """
    Maps raw documents onto the element type of a data source.

    Pydantic models go through ``model_validate``; dataclasses and plain
    classes receive their known fields as keyword arguments; mapping types
    receive the document itself. ``_id`` is renamed to ``id_field`` and
    ``Decimal128`` values become ``Decimal``.
    """

    def __init__(self, element_type: Any, *, id_field: str = "id") -> None:
        self.element_type = element_type
        self.id_field = id_field

    def from_doc(self, doc: Mapping[str, Any]) -> T:
        data = self._deserialize_custom_types(dict(doc))
        if "_id" in data:
            data[self.id_field] = data.pop("_id")

        target = self.element_type
        if target is None or target is Any or (
            isinstance(target, type) and issubclass(target, Mapping)
        ):
            return data  # type: ignore[return-value]
        if hasattr(target, "model_validate"):
            return target.model_validate(data)  # type: ignore[no-any-return]
        if dataclasses.is_dataclass(target):
            names = {f.name for f in dataclasses.fields(target) if f.init}
            return target(**{k: v for k, v in data.items() if k in names})  # type: ignore[no-any-return]
        return target(**data)  # type: ignore[no-any-return]

    def _deserialize_custom_types(self, data: dict[str, Any]) -> dict[str, Any]:
        return {key: self._restore(value) for key, value in data.items()}

    def _restore(self, value: Any) -> Any:
        if isinstance(value, Decimal128):
            return Decimal(str(value))
        if isinstance(value, dict):
            return self._deserialize_custom_types(value)
        if isinstance(value, list):
            return [self._restore(v) for v in value]
        return value
