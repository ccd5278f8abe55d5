"""Tests for the snapshot store."""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from fishbox.snapshots import SnapshotStore

if TYPE_CHECKING:
    from pathlib import Path


class TestSnapshotWrite:
    """Test writing data with metadata envelopes."""

    def test_path_for(self, tmp_path: Path) -> None:
        store = SnapshotStore(tmp_path)
        assert store.path_for("leaderboard/week/size") == (
            tmp_path / "leaderboard" / "week" / "size.json"
        )

    def test_envelope_format(self, tmp_path: Path) -> None:
        store = SnapshotStore(tmp_path)
        valid = datetime(2026, 3, 1, tzinfo=UTC)
        path = store.write("leaderboard/all/catches", [{"owner_id": "u1"}], "test", valid)

        data = json.loads(path.read_text())
        assert data["meta"]["source"] == "test"
        assert "generated_at" in data["meta"]
        assert data["meta"]["valid_until"] == valid.isoformat()
        assert data["data"] == [{"owner_id": "u1"}]

    def test_extra_params(self, tmp_path: Path) -> None:
        store = SnapshotStore(tmp_path)
        store.write("x", {}, source="test", window="week", metric="weight")
        meta = store.read_raw("x")["meta"]  # type: ignore[index]
        assert meta["window"] == "week"
        assert meta["metric"] == "weight"

    def test_no_valid_until(self, tmp_path: Path) -> None:
        store = SnapshotStore(tmp_path)
        store.write("x", {}, source="test")
        assert "valid_until" not in store.read_raw("x")["meta"]  # type: ignore[index]

    def test_unicode_kept(self, tmp_path: Path) -> None:
        store = SnapshotStore(tmp_path)
        path = store.write("x", {"species": "Döbel"}, source="test")
        assert "Döbel" in path.read_text()

    def test_name_cannot_escape(self, tmp_path: Path) -> None:
        store = SnapshotStore(tmp_path / "snapshots")
        with pytest.raises(ValueError, match="escapes"):
            store.write("../outside", {}, source="test")


class TestSnapshotRead:
    def test_read_payload(self, tmp_path: Path) -> None:
        store = SnapshotStore(tmp_path)
        store.write("a/b", {"key": "value"}, source="test")
        assert store.read("a/b") == {"key": "value"}

    def test_read_missing(self, tmp_path: Path) -> None:
        store = SnapshotStore(tmp_path)
        assert store.read("missing") is None
        assert store.read_raw("missing") is None


class TestSnapshotFreshness:
    """Test TTL-based freshness checks."""

    def test_fresh(self, tmp_path: Path) -> None:
        store = SnapshotStore(tmp_path)
        store.write("x", {}, source="test", valid_until=datetime.now(UTC) + timedelta(hours=1))
        assert store.is_fresh("x") is True

    def test_expired(self, tmp_path: Path) -> None:
        store = SnapshotStore(tmp_path)
        store.write("x", {}, source="test", valid_until=datetime.now(UTC) - timedelta(hours=1))
        assert store.is_fresh("x") is False

    def test_without_expiry_is_stale(self, tmp_path: Path) -> None:
        store = SnapshotStore(tmp_path)
        store.write("x", {}, source="test")
        assert store.is_fresh("x") is False

    def test_missing_is_stale(self, tmp_path: Path) -> None:
        assert SnapshotStore(tmp_path).is_fresh("nothing") is False
