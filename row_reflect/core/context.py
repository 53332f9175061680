"""Statement context passed through the mapper to field mappers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class StatementContext:
    """Opaque per-statement data supplied by the host.

    The mapper never inspects it; it is handed to field mappers so that
    overrides can use it for diagnostics.
    """

    sql: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
