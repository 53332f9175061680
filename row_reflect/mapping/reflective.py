"""Reflective row mapper.

Populates an instance of an arbitrary class from one row cursor by
matching column labels to the class's annotated fields. The class does
not need to implement anything beyond a no-argument constructor.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, Generic, TypeVar

from row_reflect.core.config import MapperConfig
from row_reflect.core.exceptions import InstantiationError
from row_reflect.cursor.buffered import BufferedRowCursor
from row_reflect.cursor.protocol import ColumnMetadata, RowCursor
from row_reflect.mapping.descriptor import TargetDescriptor, describe
from row_reflect.mapping.fields import FieldMapper, resolve_field_mapper

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Distinct unmatched-label sets reported per mapper before reporting stops.
_MAX_REPORTED = 64


def _type_name(target: Any) -> str:
    return getattr(target, "__qualname__", None) or repr(target)


class ReflectiveMapper(Generic[T]):
    """Row mapper driven by the target class's field layout.

    For each row:

    1. Instantiate ``target_class()``.
    2. Look up every column label case-insensitively.
    3. For each field with a matching column, read the value with the
       first override that accepts the field type, else the built-in
       field mapper, and write it regardless of the field's visibility.

    Fields without a matching column keep their default; columns without
    a matching field are ignored.

    Args:
        target_class: The class to instantiate per row.
        overrides: Field mapper overrides, consulted in order. The list is
            shared, not copied, so later appends are honored.
        config: Matching options.
    """

    def __init__(
        self,
        target_class: type[T],
        overrides: list[FieldMapper] | None = None,
        config: MapperConfig | None = None,
    ) -> None:
        self._target_class = target_class
        self._overrides = overrides if overrides is not None else []
        self._config = config or MapperConfig()
        self._descriptor: TargetDescriptor | None = None
        self._reported_labels: set[frozenset[str]] = set()

    @property
    def target_class(self) -> type[T]:
        return self._target_class

    @property
    def config(self) -> MapperConfig:
        return self._config

    @property
    def descriptor(self) -> TargetDescriptor:
        """Field layout of the target class, built on first use."""
        if self._descriptor is None:
            self._descriptor = describe(self._target_class)
        return self._descriptor

    def _instantiate(self, descriptor: TargetDescriptor) -> T:
        try:
            instance = self._target_class()
        except Exception as e:
            raise InstantiationError(_type_name(self._target_class), str(e)) from e

        if self._config.fill_missing:
            for field in descriptor.fields:
                if not hasattr(instance, field.attribute):
                    object.__setattr__(instance, field.attribute, None)
        return instance

    def _column_lookup(self, metadata: ColumnMetadata) -> tuple[dict[str, int], dict[str, int]]:
        """Label -> 1-based index, keyed two ways.

        The first map uses the configured normalization and serves declared
        field names; the second folds case only and serves explicit Column
        labels. In both, a later duplicate label wins.
        """
        folded: dict[str, int] = {}
        exact: dict[str, int] = {}
        for index in range(1, metadata.column_count + 1):
            label = metadata.column_label(index)
            folded[self._config.normalize(label)] = index
            exact[label.lower()] = index
        return folded, exact

    def map(self, row_index: int, cursor: RowCursor, context: Any = None) -> T:
        """Map the current row of ``cursor`` to a new target instance.

        Raises:
            InstantiationError: If the target class cannot be constructed.
            TypeMismatchError: If the cursor cannot read a column as the
                field's type.
        """
        descriptor = self.descriptor
        instance = self._instantiate(descriptor)
        metadata = cursor.metadata
        by_name, by_label = self._column_lookup(metadata)
        overrides = tuple(self._overrides)

        matched: set[int] = set()
        for field in descriptor.fields:
            if field.column is not None:
                index = by_label.get(field.column.lower())
            else:
                index = by_name.get(self._config.normalize(field.name))
            if index is None:
                continue
            field_mapper = resolve_field_mapper(field.field_type, overrides)
            value = field_mapper.read(cursor, index, field, context)
            object.__setattr__(instance, field.attribute, value)
            matched.add(index)

        if logger.isEnabledFor(logging.DEBUG) and len(matched) < metadata.column_count:
            self._report_unmatched(row_index, metadata, matched)
        return instance

    def _report_unmatched(self, row_index: int, metadata: ColumnMetadata, matched: set[int]) -> None:
        unmatched = [
            metadata.column_label(i)
            for i in range(1, metadata.column_count + 1)
            if i not in matched
        ]
        key = frozenset(unmatched)
        if key in self._reported_labels or len(self._reported_labels) >= _MAX_REPORTED:
            return
        self._reported_labels.add(key)
        logger.debug(
            "Row %d: columns %s match no field of %s",
            row_index,
            unmatched,
            _type_name(self._target_class),
        )

    def map_one(self, row: dict[str, Any]) -> T:
        """Map a single row dict to a target instance."""
        return self.map(0, BufferedRowCursor.from_mapping(row))

    def map_many(self, rows: list[dict[str, Any]]) -> list[T]:
        """Map all row dicts, in order."""
        return [
            self.map(row_index, BufferedRowCursor.from_mapping(row))
            for row_index, row in enumerate(rows)
        ]

    def map_cursor(self, cursor: Any, context: Any = None) -> Iterator[T]:
        """Lazily map every remaining row of a DB-API 2.0 cursor."""
        description = cursor.description
        if description is None:
            return
        for row_index, row in enumerate(iter(cursor.fetchone, None)):
            yield self.map(row_index, BufferedRowCursor.from_description(description, row), context)

    def __repr__(self) -> str:
        return f"ReflectiveMapper({_type_name(self._target_class)})"
