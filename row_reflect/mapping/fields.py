"""Field mappers - per-type value extraction.

A FieldMapper reads one column value for fields of the value type it
accepts. Caller-registered overrides and the built-in table share this
interface: resolution scans the overrides in registration order, then
the built-ins, and the first mapper that accepts the field type wins.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from decimal import Decimal
from enum import Enum
from itertools import chain
from typing import Any

from row_reflect.core.exceptions import TypeMismatchError
from row_reflect.cursor.protocol import RowCursor
from row_reflect.mapping.column import Int32, Int64
from row_reflect.mapping.descriptor import FieldDescriptor


class FieldMapper:
    """Extraction strategy for fields of one value type.

    Subclasses set ``value_type`` and implement ``extract``. Set
    ``check_null`` when the cursor read returns a zero for NULL, so that
    the mapped field becomes None instead.
    """

    value_type: Any = object
    check_null: bool = False

    def accepts(self, field_type: Any) -> bool:
        """Whether this mapper handles fields declared as ``field_type``."""
        return bool(field_type == self.value_type)

    def extract(
        self,
        cursor: RowCursor,
        index: int,
        field: FieldDescriptor,
        context: Any,
    ) -> Any:
        """Read the value for ``field`` from column ``index``."""
        raise NotImplementedError

    def read(
        self,
        cursor: RowCursor,
        index: int,
        field: FieldDescriptor,
        context: Any = None,
    ) -> Any:
        """Extract a value, replacing NULL reads with None when ``check_null`` is set."""
        value = self.extract(cursor, index, field, context)
        if self.check_null and cursor.was_null():
            return None
        return value

    def __repr__(self) -> str:
        value_type = getattr(self.value_type, "__name__", self.value_type)
        return f"{type(self).__name__}({value_type})"


class FunctionFieldMapper(FieldMapper):
    """Field mapper wrapping a plain function.

    Args:
        value_type: Field type the function handles.
        func: Called as ``func(cursor, index, context)``.
        check_null: Consult ``cursor.was_null()`` after calling ``func``.
    """

    def __init__(
        self,
        value_type: Any,
        func: Callable[[RowCursor, int, Any], Any],
        *,
        check_null: bool = False,
    ) -> None:
        self.value_type = value_type
        self.check_null = check_null
        self._func = func

    def extract(
        self,
        cursor: RowCursor,
        index: int,
        field: FieldDescriptor,
        context: Any,
    ) -> Any:
        return self._func(cursor, index, context)


# --- Built-in mappers ---


class Int64FieldMapper(FieldMapper):
    value_type = int
    check_null = True

    def accepts(self, field_type: Any) -> bool:
        return field_type is int or field_type is Int64

    def extract(self, cursor: RowCursor, index: int, field: FieldDescriptor, context: Any) -> Any:
        return cursor.get_int64(index)


class Int32FieldMapper(FieldMapper):
    value_type = Int32
    check_null = True

    def extract(self, cursor: RowCursor, index: int, field: FieldDescriptor, context: Any) -> Any:
        return cursor.get_int32(index)


class TextFieldMapper(FieldMapper):
    value_type = str

    def extract(self, cursor: RowCursor, index: int, field: FieldDescriptor, context: Any) -> Any:
        return cursor.get_text(index)


class DecimalFieldMapper(FieldMapper):
    value_type = Decimal
    check_null = True

    def extract(self, cursor: RowCursor, index: int, field: FieldDescriptor, context: Any) -> Any:
        return cursor.get_decimal(index)


class FloatFieldMapper(FieldMapper):
    value_type = float
    check_null = True

    def extract(self, cursor: RowCursor, index: int, field: FieldDescriptor, context: Any) -> Any:
        return cursor.get_float(index)


class BoolFieldMapper(FieldMapper):
    value_type = bool
    check_null = True

    def extract(self, cursor: RowCursor, index: int, field: FieldDescriptor, context: Any) -> Any:
        return cursor.get_bool(index)


class EnumFieldMapper(FieldMapper):
    """Reads the raw value and converts it by enum value, then by member name."""

    value_type = Enum

    def accepts(self, field_type: Any) -> bool:
        return isinstance(field_type, type) and issubclass(field_type, Enum)

    def extract(self, cursor: RowCursor, index: int, field: FieldDescriptor, context: Any) -> Any:
        value = cursor.get_object(index)
        enum_type = field.field_type
        if value is None or isinstance(value, enum_type):
            return value
        try:
            return enum_type(value)
        except ValueError:
            pass
        if isinstance(value, str) and value in enum_type.__members__:
            return enum_type.__members__[value]
        raise TypeMismatchError(index, enum_type.__name__, value)


class ObjectFieldMapper(FieldMapper):
    """Fallback: the raw driver value, unconverted."""

    def accepts(self, field_type: Any) -> bool:
        return True

    def extract(self, cursor: RowCursor, index: int, field: FieldDescriptor, context: Any) -> Any:
        return cursor.get_object(index)


BUILTIN_FIELD_MAPPERS: tuple[FieldMapper, ...] = (
    Int64FieldMapper(),
    Int32FieldMapper(),
    TextFieldMapper(),
    DecimalFieldMapper(),
    FloatFieldMapper(),
    BoolFieldMapper(),
    EnumFieldMapper(),
)

_FALLBACK = ObjectFieldMapper()


def resolve_field_mapper(
    field_type: Any,
    overrides: Iterable[FieldMapper] = (),
) -> FieldMapper:
    """Pick the mapper for ``field_type``: overrides first, then built-ins."""
    for field_mapper in chain(overrides, BUILTIN_FIELD_MAPPERS):
        if field_mapper.accepts(field_type):
            return field_mapper
    return _FALLBACK
