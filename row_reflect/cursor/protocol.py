"""Row cursor protocols.

The mapper reads rows exclusively through these protocols. Column indexes
are 1-based. Typed reads follow the usual result-set contract: a NULL
reads as the type's zero (or None for object-like types) and sets the
was_null() signal until the next read.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ColumnMetadata(Protocol):
    """Column labels of the current row."""

    @property
    def column_count(self) -> int:
        """Number of columns in the row."""
        ...

    def column_label(self, index: int) -> str:
        """Label of the column at 1-based ``index``."""
        ...


@runtime_checkable
class RowCursor(Protocol):
    """Typed, index-based access to one result row."""

    @property
    def metadata(self) -> ColumnMetadata:
        """Column metadata for this row."""
        ...

    def get_int64(self, index: int) -> int:
        """Read a 64-bit integer; NULL reads as 0."""
        ...

    def get_int32(self, index: int) -> int:
        """Read a 32-bit integer; NULL reads as 0."""
        ...

    def get_text(self, index: int) -> str | None:
        """Read a string; NULL reads as None."""
        ...

    def get_decimal(self, index: int) -> Decimal | None:
        """Read an arbitrary-precision decimal; NULL reads as None."""
        ...

    def get_float(self, index: int) -> float:
        """Read a float; NULL reads as 0.0."""
        ...

    def get_bool(self, index: int) -> bool:
        """Read a boolean; NULL reads as False."""
        ...

    def get_object(self, index: int) -> Any:
        """Read the raw driver value; NULL reads as None."""
        ...

    def was_null(self) -> bool:
        """Whether the most recent read returned SQL NULL."""
        ...
