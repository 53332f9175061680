"""row-reflect - reflection-driven mapping of result rows onto plain classes."""

from __future__ import annotations

from row_reflect.core.config import MapperConfig
from row_reflect.core.context import StatementContext
from row_reflect.core.exceptions import (
    AnnotationResolutionError,
    ColumnIndexError,
    CursorError,
    InstantiationError,
    MappingError,
    RowReflectError,
    TypeMismatchError,
)
from row_reflect.cursor.buffered import BufferedRowCursor
from row_reflect.cursor.protocol import ColumnMetadata, RowCursor
from row_reflect.mapping.column import Column, Int32, Int64
from row_reflect.mapping.factory import MapperRegistry
from row_reflect.mapping.fields import FieldMapper, FunctionFieldMapper
from row_reflect.mapping.reflective import ReflectiveMapper

__all__ = [
    # Registry
    "MapperRegistry",
    # Mapping
    "ReflectiveMapper",
    "FieldMapper",
    "FunctionFieldMapper",
    "Column",
    "Int32",
    "Int64",
    # Cursor
    "RowCursor",
    "ColumnMetadata",
    "BufferedRowCursor",
    # Config
    "MapperConfig",
    "StatementContext",
    # Exceptions
    "RowReflectError",
    "MappingError",
    "InstantiationError",
    "TypeMismatchError",
    "AnnotationResolutionError",
    "CursorError",
    "ColumnIndexError",
]
