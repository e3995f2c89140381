"""Tests for field accessors, schema discovery and value coercion."""

from __future__ import annotations

import dataclasses
import datetime
import decimal
import enum
import uuid

import pytest

from querycraft.exceptions import FieldNotFoundError, TypeMismatchError
from querycraft.filters import (
    AttributeFieldAccessor,
    FieldAccessor,
    FieldSchema,
    FilterOperator,
    MappingFieldAccessor,
    coerce_value,
    read_path,
    resolve_field_name,
    to_snake_case,
)

from .factories import User


class Status(enum.Enum):
    ACTIVE = "active"
    BLOCKED = "blocked"


@dataclasses.dataclass
class Address:
    city: str
    zip_code: str | None = None


@dataclasses.dataclass
class Customer:
    name: str
    address: Address
    status: Status = Status.ACTIVE


class TestNameResolution:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("IsActive", "is_active"),
            ("isActive", "is_active"),
            ("userID", "user_id"),
            ("HTTPServer", "http_server"),
            ("age", "age"),
        ],
    )
    def test_to_snake_case(self, raw, expected) -> None:
        assert to_snake_case(raw) == expected

    def test_exact_then_snake_then_case_insensitive(self) -> None:
        available = ["is_active", "Name", "age"]
        assert resolve_field_name("age", available) == "age"
        assert resolve_field_name("IsActive", available) == "is_active"
        assert resolve_field_name("NAME", available) == "Name"
        assert resolve_field_name("missing", available) is None


class TestFieldSchema:
    def test_from_pydantic_model(self) -> None:
        schema = FieldSchema.from_type(User)
        assert schema is not None
        assert schema.type_of("Age") is int
        assert schema.type_of("Email") is str  # Optional unwrapped
        assert schema.model_name == "User"

    def test_from_dataclass(self) -> None:
        schema = FieldSchema.from_type(Customer)
        assert schema is not None
        assert schema.resolve("Status") == "status"
        assert schema.type_of("status") is Status

    def test_dotted_paths_resolve_on_first_segment(self) -> None:
        schema = FieldSchema.from_type(Customer)
        assert schema is not None
        assert schema.resolve("Address.city") == "address.city"
        assert schema.type_of("address.city") is None

    def test_mappings_are_schemaless(self) -> None:
        assert FieldSchema.from_type(dict) is None
        assert FieldSchema.from_type(dict[str, int]) is None

    def test_unknown_field_suggests(self) -> None:
        schema = FieldSchema.from_type(User)
        assert schema is not None
        with pytest.raises(FieldNotFoundError) as exc_info:
            schema.resolve("agee", path="groups[0].queries[0]")
        err = exc_info.value
        assert "age" in err.suggestions
        assert err.path == "groups[0].queries[0]"
        assert "Available fields" in str(err)


class TestAccessors:
    def test_read_path_on_objects_and_dicts(self) -> None:
        customer = Customer(name="Ann", address=Address(city="Oslo"))
        assert read_path(customer, "address.city") == "Oslo"
        assert read_path({"address": {"city": "Rome"}}, "address.city") == "Rome"
        assert read_path({"address": None}, "address.city") is None

    def test_attribute_accessor_resolves_through_schema(self) -> None:
        accessor = AttributeFieldAccessor(FieldSchema.from_type(User))
        user = User(id=1, name="A", age=3, is_active=True)
        assert accessor.reader("IsActive")(user) is True
        assert isinstance(accessor, FieldAccessor)

    def test_mapping_accessor(self) -> None:
        accessor = MappingFieldAccessor({"age": lambda u: u["years"]}, model_name="Row")
        assert accessor.reader("Age")({"years": 7}) == 7
        with pytest.raises(FieldNotFoundError):
            accessor.reader("height")


class TestCoercion:
    @pytest.mark.parametrize(
        ("value", "target", "expected"),
        [
            ("18", int, 18),
            (18.0, int, 18),
            ("true", bool, True),
            ("No", bool, False),
            ("2.5", float, 2.5),
            ("1.10", decimal.Decimal, decimal.Decimal("1.10")),
            ("2024-01-02", datetime.date, datetime.date(2024, 1, 2)),
            (
                "2024-01-02T03:04:05Z",
                datetime.datetime,
                datetime.datetime(2024, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc),
            ),
            ("active", Status, Status.ACTIVE),
            ("BLOCKED", Status, Status.BLOCKED),
            (5, str, "5"),
        ],
    )
    def test_casts_to_declared_type(self, value, target, expected) -> None:
        result = coerce_value(value, target, field="f", operator=FilterOperator.EQUALS)
        assert result == expected

    def test_uuid(self) -> None:
        raw = "12345678-1234-5678-1234-567812345678"
        assert coerce_value(
            raw, uuid.UUID, field="id", operator=FilterOperator.EQUALS
        ) == uuid.UUID(raw)

    def test_none_and_unknown_targets_pass_through(self) -> None:
        assert coerce_value(None, int, field="f", operator="=") is None
        assert coerce_value("x", list[str], field="f", operator="=") == "x"
        assert coerce_value("x", None, field="f", operator="=") == "x"

    @pytest.mark.parametrize(
        ("value", "target"),
        [("abc", int), (1.5, int), (True, int), ("maybe", bool), ("nope", Status)],
    )
    def test_incompatible_values_raise(self, value, target) -> None:
        with pytest.raises(TypeMismatchError) as exc_info:
            coerce_value(
                value, target, field="Age", operator=FilterOperator.GREATER_THAN, path="p"
            )
        err = exc_info.value
        assert err.field == "Age"
        assert err.operator == "GREATER_THAN"
        assert err.path == "p"
