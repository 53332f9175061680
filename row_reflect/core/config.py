"""Mapper configuration.

MapperConfig is a Pydantic model shared by a MapperRegistry and every
mapper it produces.
"""

from __future__ import annotations

from pydantic import BaseModel


class MapperConfig(BaseModel):
    """Configuration for column-to-field matching."""

    ignore_underscores: bool = True
    fill_missing: bool = True

    def normalize(self, name: str) -> str:
        """Normalize a column label or field name into a lookup key."""
        key = name.lower()
        if self.ignore_underscores:
            key = key.replace("_", "")
        return key
