"""Tests for the exception hierarchy and its API payloads."""

from __future__ import annotations

import pytest

from querycraft.exceptions import (
    BackendExecutionError,
    FieldNotFoundError,
    OperatorNotFoundError,
    QueryCancelledError,
    QueryCraftError,
    TypeMismatchError,
    UnsupportedTypeError,
    ValidationError,
)
from querycraft.filters import FilterOperator


@pytest.mark.parametrize(
    "error",
    [
        ValidationError("bad", path="groups"),
        OperatorNotFoundError("x", ["in"]),
        FieldNotFoundError("a", "User", ["age"]),
        TypeMismatchError("age", FilterOperator.CONTAINS, expected="str", actual="int"),
        UnsupportedTypeError(int),
        QueryCancelledError("during-scan"),
        BackendExecutionError("memory", RuntimeError("boom")),
    ],
)
def test_everything_is_a_querycraft_error(error) -> None:
    assert isinstance(error, QueryCraftError)
    assert "error" in error.to_dict()


def test_validation_error_payload() -> None:
    err = ValidationError("at least one filter group is required", path="groups")
    assert str(err) == "groups: at least one filter group is required"
    assert err.to_dict() == {
        "error": "VALIDATION_ERROR",
        "message": "at least one filter group is required",
        "path": "groups",
    }


def test_field_not_found_payload() -> None:
    err = FieldNotFoundError(
        "agee", "User", ["name", "age", "is_active"], path="groups[0].queries[0]"
    )
    payload = err.to_dict()
    assert payload["error"] == "FIELD_NOT_FOUND"
    assert payload["suggestions"] == ["age"]
    assert payload["available_fields"] == ["age", "is_active", "name"]
    assert payload["path"] == "groups[0].queries[0]"
    assert "Did you mean one of these?" in err.message


def test_operator_not_found_payload() -> None:
    err = OperatorNotFoundError("betwen", ["between", "in"])
    assert err.suggestions == ["between"]
    assert err.to_dict()["valid_operators"] == ["between", "in"]


def test_type_mismatch_uses_operator_name() -> None:
    err = TypeMismatchError(
        "age",
        FilterOperator.STARTS_WITH,
        expected="a text field",
        actual="int field",
        path="groups[0].queries[0]",
    )
    assert err.operator == "STARTS_WITH"
    assert str(err) == (
        "groups[0].queries[0]: Operator STARTS_WITH on field 'age' "
        "expects a text field, got int field"
    )


def test_backend_error_message() -> None:
    err = BackendExecutionError("mongo", TimeoutError("slow"))
    assert str(err) == "mongo failed: TimeoutError: slow"
    assert err.to_dict()["adapter"] == "mongo"
