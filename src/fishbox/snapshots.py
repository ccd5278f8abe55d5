"""Derived-view snapshots with freshness metadata.

Batch flows write computed views (leaderboards per window and metric) as
JSON files so the CLI can show them without hitting the backend again.
Every file is wrapped in a metadata envelope::

    {"meta": {"source": ..., "generated_at": ..., "valid_until": ...},
     "data": ...}

Snapshot names are slash-separated and map to ``<base>/<name>.json``,
e.g. ``leaderboard/month/catches``.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003 (runtime import)
from typing import Any


class SnapshotStore:
    """Reads and writes enveloped JSON snapshots under one directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir

    def path_for(self, name: str) -> Path:
        """Absolute file path for a snapshot name."""
        full = self.base / f"{name}.json"
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Snapshot name escapes store directory: {name}"
            raise ValueError(msg) from None
        return full

    def write(
        self,
        name: str,
        data: Any,
        source: str,
        valid_until: datetime | None = None,
        **params: Any,
    ) -> Path:
        """Write data wrapped in a metadata envelope.

        Args:
            name: Snapshot name (e.g. ``leaderboard/week/weight``).
            data: JSON-serializable payload stored under ``data``.
            source: Where the data came from (e.g. ``"backend:memory"``).
            valid_until: Expiry timestamp. None means always stale.
            **params: Extra metadata fields (window, metric, ...).

        Returns:
            Path of the written file.
        """
        full = self.path_for(name)
        full.parent.mkdir(parents=True, exist_ok=True)

        meta: dict[str, Any] = {
            "source": source,
            "generated_at": datetime.now(UTC).isoformat(),
        }
        if valid_until is not None:
            meta["valid_until"] = valid_until.isoformat()
        meta.update(params)

        with full.open("w") as f:
            json.dump({"meta": meta, "data": data}, f, indent=2, ensure_ascii=False)
        return full

    def read_raw(self, name: str) -> dict[str, Any] | None:
        """Full envelope, or None if the snapshot doesn't exist."""
        full = self.path_for(name)
        if not full.exists():
            return None
        with full.open() as f:
            envelope: dict[str, Any] = json.load(f)
        return envelope

    def read(self, name: str) -> Any:
        """The ``data`` payload, or None if the snapshot doesn't exist."""
        envelope = self.read_raw(name)
        if envelope is None:
            return None
        return envelope.get("data")

    def is_fresh(self, name: str) -> bool:
        """True if the snapshot exists and its ``valid_until`` is in the future."""
        envelope = self.read_raw(name)
        if envelope is None:
            return False
        valid_until = envelope.get("meta", {}).get("valid_until")
        if valid_until is None:
            return False
        expiry = datetime.fromisoformat(valid_until)
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        return datetime.now(UTC) < expiry
