"""Mapper registry - decides which target types are mapped reflectively.

The host asks ``accepts`` first, routing excluded types to a different
mapping strategy, then calls ``mapper_for`` to obtain a mapper.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, TypeVar

from row_reflect.core.config import MapperConfig
from row_reflect.mapping.fields import FieldMapper
from row_reflect.mapping.reflective import ReflectiveMapper

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MapperRegistry:
    """Factory for ReflectiveMapper instances sharing one override list.

    Every mapper produced holds a reference to the registry's override
    list, so an override registered after ``mapper_for`` still applies to
    that mapper from its next row on.

    Args:
        *excluded_types: Types this registry refuses to handle.
        config: Matching options passed to every mapper.
    """

    def __init__(self, *excluded_types: Any, config: MapperConfig | None = None) -> None:
        self._excluded_types = frozenset(excluded_types)
        self._overrides: list[FieldMapper] = []
        self._lock = threading.Lock()
        self._config = config or MapperConfig()

    @property
    def excluded_types(self) -> frozenset[Any]:
        return self._excluded_types

    @property
    def overrides(self) -> tuple[FieldMapper, ...]:
        """Registered overrides in registration order."""
        return tuple(self._overrides)

    def accepts(self, target_type: Any) -> bool:
        """Check whether ``target_type`` should be mapped by this registry."""
        return target_type not in self._excluded_types

    def register(self, field_mapper: FieldMapper) -> None:
        """Append a field mapper override. Earlier registrations take precedence."""
        with self._lock:
            self._overrides.append(field_mapper)
        logger.debug("Registered field mapper override %r", field_mapper)

    def mapper_for(self, target_type: type[T]) -> ReflectiveMapper[T]:
        """Create a mapper for ``target_type``.

        Does not check ``accepts``; callers route excluded types first.
        """
        logger.debug(
            "Creating mapper for %s with %d override(s)",
            getattr(target_type, "__qualname__", target_type),
            len(self._overrides),
        )
        return ReflectiveMapper(target_type, self._overrides, self._config)
