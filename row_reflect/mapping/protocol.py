"""Mapper protocols.

RowMapper is the per-row contract the host calls with a row cursor.
Mapper is the row-dict contract used by engines that fetch rows as
dicts; ReflectiveMapper implements both.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

from row_reflect.cursor.protocol import RowCursor

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class RowMapper(Protocol[T_co]):
    """Cursor-based mapper protocol."""

    def map(self, row_index: int, cursor: RowCursor, context: Any = None) -> T_co:
        """Map the current row of ``cursor`` to a target object."""
        ...


@runtime_checkable
class Mapper(Protocol[T]):
    """Row-dict mapper protocol."""

    def map_one(self, row: dict[str, Any]) -> T:
        """Map a single row dict to a target object."""
        ...

    def map_many(self, rows: list[dict[str, Any]]) -> list[T]:
        """Map multiple row dicts to a list of target objects."""
        ...
