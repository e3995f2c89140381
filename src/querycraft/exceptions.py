"""
QueryCraft exception hierarchy.

All exceptions inherit from ``QueryCraftError`` and provide
``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class QueryCraftError(Exception):
    """Root exception for the whole package."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ValidationError(QueryCraftError):
    """A filter structure is malformed (arity, empty field name, empty group list)."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class OperatorNotFoundError(ValidationError):
    """
    Unknown operator name.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_FOUND",
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }


class FieldNotFoundError(ValidationError):
    """
    A field name does not resolve on the element type.

    Example error message::

        Invalid field 'agee' on 'User'.
        Did you mean one of these?
          • age

        Available fields: age, is_active, name
    """

    def __init__(
        self,
        field: str,
        model_name: str,
        available_fields: list[str],
        path: str | None = None,
    ) -> None:
        self.field = field
        self.model_name = model_name
        self.available_fields = available_fields
        self.suggestions = get_close_matches(
            field.lower(), [f.lower() for f in available_fields], n=5, cutoff=0.6
        )
        super().__init__(self._build_message(), path=path)

    def _build_message(self) -> str:
        lines = [f"Invalid field '{self.field}' on '{self.model_name}'."]
        if self.suggestions:
            lines.append("Did you mean one of these?")
            for s in self.suggestions:
                lines.append(f"  • {s}")
        sorted_fields = sorted(self.available_fields)
        preview = ", ".join(sorted_fields[:15])
        if len(sorted_fields) > 15:
            preview += ", ..."
        lines.append(f"Available fields: {preview}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_FOUND",
            "field": self.field,
            "model": self.model_name,
            "path": self.path,
            "suggestions": self.suggestions,
            "available_fields": sorted(self.available_fields),
        }


class TypeMismatchError(QueryCraftError):
    """An operator was applied to a value type it cannot handle."""

    def __init__(
        self,
        field: str,
        operator: Any,
        *,
        expected: str,
        actual: str,
        path: str | None = None,
    ) -> None:
        self.field = field
        self.operator = getattr(operator, "name", str(operator))
        self.expected = expected
        self.actual = actual
        self.path = path
        message = (
            f"Operator {self.operator} on field '{field}' expects {expected}, "
            f"got {actual}"
        )
        super().__init__(f"{path}: {message}" if path else message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "TYPE_MISMATCH",
            "field": self.field,
            "operator": self.operator,
            "expected": self.expected,
            "actual": self.actual,
            "path": self.path,
        }


class UnsupportedTypeError(QueryCraftError):
    """No registered adapter can serve the requested element type."""

    def __init__(self, element_type: Any, kind: Any = None) -> None:
        self.element_type = element_type
        self.kind = kind
        type_name = getattr(element_type, "__name__", repr(element_type))
        message = f"No adapter can handle element type '{type_name}'"
        if kind is not None:
            message += f" for data source kind '{getattr(kind, 'value', kind)}'"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_TYPE",
            "element_type": getattr(
                self.element_type, "__name__", repr(self.element_type)
            ),
            "kind": getattr(self.kind, "value", self.kind),
        }


class QueryCancelledError(QueryCraftError):
    """Cancellation was observed; partial results are discarded."""

    def __init__(self, stage: str) -> None:
        self.stage = stage
        super().__init__(f"Query cancelled ({stage})")


class BackendExecutionError(QueryCraftError):
    """
    Wraps a failure raised by the backend collaborator.

    The original exception is always chained as ``__cause__``.
    """

    def __init__(self, adapter_name: str, cause: BaseException) -> None:
        self.adapter_name = adapter_name
        super().__init__(
            f"{adapter_name} failed: {cause.__class__.__name__}: {cause}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "BACKEND_EXECUTION_ERROR",
            "adapter": self.adapter_name,
            "message": str(self),
        }
