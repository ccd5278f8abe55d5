"""Shared fixtures for FishBox tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from fishbox.backends.memory import InMemoryBackend
from fishbox.schemas import Catch

CatchFactory = Callable[..., Catch]


@pytest.fixture
def make_catch() -> CatchFactory:
    """Factory for Catch records with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(**overrides: Any) -> Catch:
        n = next(counter)
        data: dict[str, Any] = {
            "id": f"c{n}",
            "owner_id": "u1",
            "species": "Hecht",
            "length": 50,
            "date": datetime(2024, 6, 1, 8, 0, tzinfo=UTC),
        }
        data.update(overrides)
        return Catch.model_validate(data)

    return _make


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def catch_row() -> Callable[..., dict[str, Any]]:
    """Factory for ``catches`` table rows as the collaborator returns them."""

    def _row(**overrides: Any) -> dict[str, Any]:
        row: dict[str, Any] = {
            "user_id": "u1",
            "species": "Hecht",
            "length": 50,
            "date": "2024-06-01T08:00:00+00:00",
            "is_public": False,
        }
        row.update(overrides)
        return row

    return _row
