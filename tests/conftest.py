"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from row_reflect.core.context import StatementContext
from row_reflect.mapping.factory import MapperRegistry


@pytest.fixture
def mock_cursor() -> Callable[..., MagicMock]:
    """Factory for a stand-in RowCursor with the given column labels.

    Typed reads are stubbed per test, e.g.
        cursor = mock_cursor("longField")
        cursor.get_int64.return_value = 100
    """

    def _make(*labels: str, was_null: bool = False) -> MagicMock:
        cursor = MagicMock()
        cursor.metadata.column_count = len(labels)
        cursor.metadata.column_label.side_effect = lambda index: labels[index - 1]
        cursor.was_null.return_value = was_null
        return cursor

    return _make


@pytest.fixture
def ctx() -> StatementContext:
    return StatementContext(sql="SELECT * FROM sample")


@pytest.fixture
def registry() -> MapperRegistry:
    return MapperRegistry()
