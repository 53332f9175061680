"""Buffered row cursor over one already-fetched row.

Hosts that fetch rows through a DB-API 2.0 cursor (or receive row dicts
from an engine) wrap each row in a BufferedRowCursor before handing it
to the mapper.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

from row_reflect.core.exceptions import ColumnIndexError, TypeMismatchError

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_TRUE_STRINGS = frozenset({"1", "t", "true", "y", "yes"})
_FALSE_STRINGS = frozenset({"0", "f", "false", "n", "no"})

_BINARY_TYPES = (bytes, bytearray, memoryview)


def _to_int(index: int, value: Any, expected: str, low: int, high: int) -> int:
    """Convert a driver value to an int within [low, high]."""
    if isinstance(value, int):
        result = int(value)
    elif isinstance(value, (float, Decimal)):
        try:
            result = int(value)
        except (OverflowError, ValueError):
            raise TypeMismatchError(index, expected, value) from None
        if result != value:
            raise TypeMismatchError(index, expected, value)
    elif isinstance(value, str):
        try:
            result = int(value.strip())
        except ValueError:
            raise TypeMismatchError(index, expected, value) from None
    else:
        raise TypeMismatchError(index, expected, value)

    if not low <= result <= high:
        raise TypeMismatchError(index, expected, value)
    return result


class BufferedColumnMetadata:
    """Column metadata backed by a tuple of labels."""

    def __init__(self, labels: Sequence[str]) -> None:
        self._labels = tuple(labels)

    @property
    def column_count(self) -> int:
        return len(self._labels)

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    def column_label(self, index: int) -> str:
        if not 1 <= index <= len(self._labels):
            raise ColumnIndexError(index, len(self._labels))
        return self._labels[index - 1]


class BufferedRowCursor:
    """RowCursor implementation over a single buffered row.

    Args:
        labels: Column labels in select order.
        values: Column values, aligned with ``labels``.

    Raises:
        ValueError: If labels and values differ in length.
    """

    def __init__(self, labels: Sequence[str], values: Sequence[Any]) -> None:
        if len(labels) != len(values):
            raise ValueError(
                f"Row has {len(values)} values for {len(labels)} column labels"
            )
        self._metadata = BufferedColumnMetadata(labels)
        self._values = tuple(values)
        self._last_null = False

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> BufferedRowCursor:
        """Create a cursor from a row dict, keeping its key order."""
        return cls(list(row.keys()), list(row.values()))

    @classmethod
    def from_description(cls, description: Sequence[Sequence[Any]], row: Any) -> BufferedRowCursor:
        """Create a cursor from a DB-API ``cursor.description`` and one fetched row.

        Handles tuple-like rows and dict-like rows from different drivers.
        """
        labels = [desc[0] for desc in description]
        if isinstance(row, Mapping):
            values = [row[label] for label in labels]
        else:
            values = list(row)
        return cls(labels, values)

    @property
    def metadata(self) -> BufferedColumnMetadata:
        return self._metadata

    def _read(self, index: int) -> Any:
        if not 1 <= index <= len(self._values):
            raise ColumnIndexError(index, len(self._values))
        value = self._values[index - 1]
        self._last_null = value is None
        return value

    def get_int64(self, index: int) -> int:
        value = self._read(index)
        if value is None:
            return 0
        return _to_int(index, value, "int64", _INT64_MIN, _INT64_MAX)

    def get_int32(self, index: int) -> int:
        value = self._read(index)
        if value is None:
            return 0
        return _to_int(index, value, "int32", _INT32_MIN, _INT32_MAX)

    def get_text(self, index: int) -> str | None:
        value = self._read(index)
        if value is None:
            return None
        if isinstance(value, str):
            return value
        if isinstance(value, _BINARY_TYPES):
            raise TypeMismatchError(index, "text", value)
        return str(value)

    def get_decimal(self, index: int) -> Decimal | None:
        value = self._read(index)
        if value is None:
            return None
        if isinstance(value, Decimal):
            return value
        if isinstance(value, bool):
            raise TypeMismatchError(index, "decimal", value)
        if isinstance(value, int):
            return Decimal(value)
        if isinstance(value, (float, str)):
            try:
                return Decimal(str(value).strip())
            except InvalidOperation:
                raise TypeMismatchError(index, "decimal", value) from None
        raise TypeMismatchError(index, "decimal", value)

    def get_float(self, index: int) -> float:
        value = self._read(index)
        if value is None:
            return 0.0
        if isinstance(value, bool):
            raise TypeMismatchError(index, "float", value)
        if isinstance(value, (int, float, Decimal)):
            try:
                return float(value)
            except OverflowError:
                raise TypeMismatchError(index, "float", value) from None
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                raise TypeMismatchError(index, "float", value) from None
        raise TypeMismatchError(index, "float", value)

    def get_bool(self, index: int) -> bool:
        value = self._read(index)
        if value is None:
            return False
        if isinstance(value, (bool, int, float, Decimal)):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        raise TypeMismatchError(index, "bool", value)

    def get_object(self, index: int) -> Any:
        return self._read(index)

    def was_null(self) -> bool:
        return self._last_null
