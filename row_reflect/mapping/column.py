"""Field annotation markers.

``Column`` overrides the column label a field is read from::

    class Account:
        owner: Annotated[str | None, Column("owner_name")] = None

``Int32`` and ``Int64`` narrow ``int`` fields to a specific integer read.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NewType

Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)


@dataclass(frozen=True)
class Column:
    """Explicit column label for a field."""

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Column name must be a non-empty string")
