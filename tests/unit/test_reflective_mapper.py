"""Unit tests for ReflectiveMapper."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Annotated

import pytest
from pydantic import BaseModel, Field

from row_reflect.core.config import MapperConfig
from row_reflect.core.exceptions import InstantiationError, TypeMismatchError
from row_reflect.cursor.buffered import BufferedRowCursor
from row_reflect.mapping.column import Column, Int32
from row_reflect.mapping.fields import FieldMapper
from row_reflect.mapping.reflective import _MAX_REPORTED, ReflectiveMapper

TEN = Decimal(10)


class SampleBean:
    __long_field: int | None
    _string_field: str | None
    int_field: Int32 = 0
    big_decimal_field: Decimal | None
    __column: Annotated[str | None, Column("columnName")]

    @property
    def long_field(self) -> int | None:
        return self.__long_field

    @property
    def string_field(self) -> str | None:
        return self._string_field

    @property
    def column(self) -> str | None:
        return self.__column


class TenDecimalMapper(FieldMapper):
    value_type = Decimal

    def extract(self, cursor, index, field, context):  # type: ignore[no-untyped-def]
        return TEN


@dataclass
class UserDC:
    id: int
    name: str


@dataclass(frozen=True)
class FrozenAccount:
    id: int = 0
    owner_name: str | None = None


class Point:
    __slots__ = ("x", "y")
    x: int
    y: int


class Status(Enum):
    ACTIVE = "active"
    CLOSED = "closed"


class Product(BaseModel):
    product_id: int = 0
    name: Annotated[str | None, Column("title")] = None
    sku: str | None = Field(default=None, alias="stock_code")
    status: Status | None = None


class ExplicitColumns:
    amount: Annotated[int | None, Column("a_b")] = None
    _owner: Annotated[str | None, Column("owner_name")] = None


class TestReflectiveMapper:
    @pytest.fixture
    def mapper(self) -> ReflectiveMapper[SampleBean]:
        return ReflectiveMapper(SampleBean, [])

    def test_sets_value_on_private_field(self, mapper, mock_cursor, ctx) -> None:
        cursor = mock_cursor("longField")
        cursor.get_int64.return_value = 100

        bean = mapper.map(0, cursor, ctx)

        assert bean.long_field == 100
        cursor.get_int64.assert_called_once_with(1)

    def test_handles_empty_result(self, mapper, mock_cursor, ctx) -> None:
        bean = mapper.map(0, mock_cursor(), ctx)

        assert bean is not None
        assert bean.long_field is None
        assert bean.string_field is None
        assert bean.int_field == 0
        assert bean.big_decimal_field is None
        assert bean.column is None

    def test_case_insensitive_column_and_field_names(self, mapper, mock_cursor, ctx) -> None:
        cursor = mock_cursor("LoNgfielD", "string_field")
        cursor.get_int64.return_value = 100
        cursor.get_text.return_value = "String value"

        bean = mapper.map(0, cursor, ctx)

        assert bean.long_field == 100
        assert bean.string_field == "String value"
        cursor.get_text.assert_called_once_with(2)

    def test_null_value_becomes_none(self, mapper, mock_cursor, ctx) -> None:
        cursor = mock_cursor("LoNgfielD", was_null=True)
        cursor.get_int64.return_value = 0

        bean = mapper.map(0, cursor, ctx)

        assert bean.long_field is None

    def test_sets_values_on_all_field_access_levels(self, mapper, mock_cursor, ctx) -> None:
        cursor = mock_cursor("longField", "stringField", "intField", "bigDecimalField")
        cursor.get_int64.return_value = 100
        cursor.get_text.return_value = "something"
        cursor.get_int32.return_value = 1
        cursor.get_decimal.return_value = TEN

        bean = mapper.map(0, cursor, ctx)

        assert bean.long_field == 100
        assert bean.string_field == "something"
        assert bean.int_field == 1
        assert bean.big_decimal_field is TEN
        cursor.get_int32.assert_called_once_with(3)
        cursor.get_decimal.assert_called_once_with(4)

    def test_override_takes_precedence(self, mock_cursor, ctx) -> None:
        cursor = mock_cursor("bigDecimalField")
        mapper = ReflectiveMapper(SampleBean, [TenDecimalMapper()])

        bean = mapper.map(0, cursor, ctx)

        assert bean.big_decimal_field is TEN
        cursor.get_decimal.assert_not_called()

    def test_override_appended_after_construction_is_honored(self, mock_cursor, ctx) -> None:
        overrides: list[FieldMapper] = []
        mapper = ReflectiveMapper(SampleBean, overrides)
        overrides.append(TenDecimalMapper())

        bean = mapper.map(0, mock_cursor("bigDecimalField"), ctx)

        assert bean.big_decimal_field is TEN

    def test_column_annotation_overrides_field_name(self, mapper, mock_cursor, ctx) -> None:
        cursor = mock_cursor("columnName")
        cursor.get_text.return_value = "String value"

        bean = mapper.map(0, cursor, ctx)

        assert bean.column == "String value"

    def test_extra_columns_are_ignored(self, mapper, mock_cursor, ctx) -> None:
        cursor = mock_cursor("unknown", "longField")
        cursor.get_int64.return_value = 7

        bean = mapper.map(0, cursor, ctx)

        assert bean.long_field == 7
        cursor.get_object.assert_not_called()

    def test_later_duplicate_column_wins(self, mapper, mock_cursor, ctx) -> None:
        cursor = mock_cursor("longField", "LONGFIELD")
        cursor.get_int64.side_effect = lambda index: {1: 1, 2: 2}[index]

        bean = mapper.map(0, cursor, ctx)

        assert bean.long_field == 2
        cursor.get_int64.assert_called_once_with(2)

    def test_type_mismatch_propagates_unmodified(self, mapper, mock_cursor, ctx) -> None:
        error = TypeMismatchError(1, "int64", "abc")
        cursor = mock_cursor("longField")
        cursor.get_int64.side_effect = error

        with pytest.raises(TypeMismatchError) as exc_info:
            mapper.map(0, cursor, ctx)

        assert exc_info.value is error

    def test_instantiation_error_for_required_arguments(self, mock_cursor) -> None:
        mapper = ReflectiveMapper(UserDC)

        with pytest.raises(InstantiationError) as exc_info:
            mapper.map(0, mock_cursor("id", "name"))

        assert exc_info.value.target_class == "UserDC"
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_each_call_returns_new_instance(self, mapper, mock_cursor) -> None:
        cursor = mock_cursor("longField")
        cursor.get_int64.return_value = 5

        first = mapper.map(0, cursor)
        second = mapper.map(1, cursor)

        assert first is not second

    def test_descriptor_is_built_once(self, mapper) -> None:
        assert mapper.descriptor is mapper.descriptor


class TestUnderscoreMatching:
    def test_underscores_ignored_by_default(self, mock_cursor) -> None:
        cursor = mock_cursor("owner_name")
        cursor.get_text.return_value = "Alice"

        account = ReflectiveMapper(FrozenAccount).map(0, cursor)

        assert account.owner_name == "Alice"

    def test_underscores_significant_when_disabled(self, mock_cursor) -> None:
        config = MapperConfig(ignore_underscores=False)
        cursor = mock_cursor("ownerName")
        cursor.get_text.return_value = "Alice"

        account = ReflectiveMapper(FrozenAccount, config=config).map(0, cursor)

        assert account.owner_name is None
        cursor.get_text.assert_not_called()


class TestTargetKinds:
    def test_frozen_dataclass(self) -> None:
        cursor = BufferedRowCursor(["ID", "OWNER_NAME"], [3, "Bob"])

        account = ReflectiveMapper(FrozenAccount).map(0, cursor)

        assert account == FrozenAccount(id=3, owner_name="Bob")

    def test_slotted_class(self) -> None:
        cursor = BufferedRowCursor(["x"], [4])

        point = ReflectiveMapper(Point).map(0, cursor)

        assert point.x == 4
        assert point.y is None

    def test_fill_missing_disabled_leaves_slots_unset(self) -> None:
        cursor = BufferedRowCursor(["x"], [4])
        mapper = ReflectiveMapper(Point, config=MapperConfig(fill_missing=False))

        point = mapper.map(0, cursor)

        assert point.x == 4
        assert not hasattr(point, "y")

    def test_pydantic_model(self) -> None:
        cursor = BufferedRowCursor(
            ["product_id", "title", "stock_code", "status"],
            [9, "Widget", "W-9", "closed"],
        )

        product = ReflectiveMapper(Product).map(0, cursor)

        assert isinstance(product, Product)
        assert product.product_id == 9
        assert product.name == "Widget"
        assert product.sku == "W-9"
        assert product.status is Status.CLOSED


class TestExplicitColumnMatching:
    def test_explicit_column_ignores_underscore_folding(self) -> None:
        cursor = BufferedRowCursor(["a_b", "ab"], [2, 1])

        row = ReflectiveMapper(ExplicitColumns).map(0, cursor)

        assert row.amount == 2

    def test_explicit_column_does_not_match_folded_label(self) -> None:
        cursor = BufferedRowCursor(["ab", "ownerName"], [1, "Alice"])

        row = ReflectiveMapper(ExplicitColumns).map(0, cursor)

        assert row.amount is None
        assert row._owner is None

    def test_explicit_column_is_case_insensitive(self) -> None:
        cursor = BufferedRowCursor(["A_B", "OWNER_NAME"], [3, "Bob"])

        row = ReflectiveMapper(ExplicitColumns).map(0, cursor)

        assert row.amount == 3
        assert row._owner == "Bob"


class TestDictRows:
    def test_map_one(self) -> None:
        account = ReflectiveMapper(FrozenAccount).map_one({"id": 1, "owner_name": "Alice"})
        assert account == FrozenAccount(id=1, owner_name="Alice")

    def test_map_many(self) -> None:
        mapper = ReflectiveMapper(FrozenAccount)
        rows = [{"id": 1, "owner_name": "Alice"}, {"id": 2, "owner_name": None}]

        results = mapper.map_many(rows)

        assert results == [FrozenAccount(1, "Alice"), FrozenAccount(2, None)]

    def test_map_many_empty(self) -> None:
        assert ReflectiveMapper(FrozenAccount).map_many([]) == []


class TestLogging:
    def test_unmatched_columns_logged_once(self, caplog) -> None:
        mapper = ReflectiveMapper(FrozenAccount)
        rows = [{"id": 1, "extra": "x"}, {"id": 2, "extra": "y"}]

        with caplog.at_level(logging.DEBUG, logger="row_reflect.mapping.reflective"):
            mapper.map_many(rows)

        messages = [r.getMessage() for r in caplog.records if "match no field" in r.getMessage()]
        assert len(messages) == 1
        assert "'extra'" in messages[0]

    def test_same_unmatched_columns_logged_once_across_layouts(self, caplog) -> None:
        mapper = ReflectiveMapper(FrozenAccount)
        rows = [{"id": 1, "extra": "x"}, {"owner_name": "Bob", "extra": "y"}]

        with caplog.at_level(logging.DEBUG, logger="row_reflect.mapping.reflective"):
            mapper.map_many(rows)

        messages = [r.getMessage() for r in caplog.records if "match no field" in r.getMessage()]
        assert len(messages) == 1

    def test_reported_column_sets_are_capped(self, caplog) -> None:
        mapper = ReflectiveMapper(FrozenAccount)
        rows = [{"id": i, f"extra_{i}": i} for i in range(_MAX_REPORTED + 10)]

        with caplog.at_level(logging.DEBUG, logger="row_reflect.mapping.reflective"):
            mapper.map_many(rows)

        messages = [r.getMessage() for r in caplog.records if "match no field" in r.getMessage()]
        assert len(messages) == _MAX_REPORTED
