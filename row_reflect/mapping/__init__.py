"""Mapping layer - populate arbitrary classes from row cursors."""

from __future__ import annotations

from row_reflect.mapping.column import Column, Int32, Int64
from row_reflect.mapping.descriptor import FieldDescriptor, TargetDescriptor, describe
from row_reflect.mapping.factory import MapperRegistry
from row_reflect.mapping.fields import (
    BUILTIN_FIELD_MAPPERS,
    FieldMapper,
    FunctionFieldMapper,
    resolve_field_mapper,
)
from row_reflect.mapping.protocol import Mapper, RowMapper
from row_reflect.mapping.reflective import ReflectiveMapper

__all__ = [
    "ReflectiveMapper",
    "MapperRegistry",
    "Mapper",
    "RowMapper",
    "FieldMapper",
    "FunctionFieldMapper",
    "BUILTIN_FIELD_MAPPERS",
    "resolve_field_mapper",
    "FieldDescriptor",
    "TargetDescriptor",
    "describe",
    "Column",
    "Int32",
    "Int64",
]
