"""row-reflect exception hierarchy.

Every failure raised while mapping a row derives from RowReflectError.
The mapper never catches these; they propagate to the host's row loop.
"""

from __future__ import annotations

from typing import Any


class RowReflectError(Exception):
    """Base exception for all row-reflect errors."""


# --- Mapping ---


class MappingError(RowReflectError):
    """Base for mapping errors."""


class InstantiationError(MappingError):
    """Raised when the target class cannot be constructed without arguments."""

    def __init__(self, target_class: str, detail: str) -> None:
        self.target_class = target_class
        self.detail = detail
        super().__init__(f"Cannot instantiate {target_class}: {detail}")


class TypeMismatchError(MappingError):
    """Raised when a column value cannot be read as the expected type."""

    def __init__(self, column_index: int, expected: str, value: Any) -> None:
        self.column_index = column_index
        self.expected = expected
        self.value = value
        super().__init__(
            f"Column {column_index}: cannot read {value!r} "
            f"({type(value).__name__}) as {expected}"
        )


class AnnotationResolutionError(MappingError):
    """Raised when a field annotation carrying a Column marker cannot be evaluated."""

    def __init__(self, owner: str, attribute: str, annotation: str, detail: str) -> None:
        self.owner = owner
        self.attribute = attribute
        self.annotation = annotation
        super().__init__(
            f"Cannot resolve annotation {annotation!r} of {owner}.{attribute}: {detail}"
        )


# --- Cursor ---


class CursorError(RowReflectError):
    """Base for row cursor errors."""


class ColumnIndexError(CursorError):
    """Raised when a column index falls outside 1..column_count."""

    def __init__(self, column_index: int, column_count: int) -> None:
        self.column_index = column_index
        self.column_count = column_count
        super().__init__(
            f"Column index {column_index} out of range (row has {column_count} columns)"
        )
