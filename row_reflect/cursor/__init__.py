"""Row cursor layer - the host-facing view of one result row."""

from __future__ import annotations

from row_reflect.cursor.buffered import BufferedColumnMetadata, BufferedRowCursor
from row_reflect.cursor.protocol import ColumnMetadata, RowCursor

__all__ = [
    "ColumnMetadata",
    "RowCursor",
    "BufferedColumnMetadata",
    "BufferedRowCursor",
]
