"""Row mapping between collaborator tables and the canonical schema.

This is the validation boundary: rows that do not fit the Catch schema are
rejected here so the aggregation layer only ever sees well-formed records.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fishbox.backends.base import Row
from fishbox.schemas import Catch, CatchFields, CatchPatch

# Columns whose collaborator name differs from the schema field name
_COLUMN_FOR_FIELD = {"owner_id": "user_id", "photos": "photo_urls"}


def to_iso(value: datetime) -> str:
    """Serialize a timestamp as ISO-8601 in UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


def _photos_from_row(row: Row) -> list[str]:
    photos = row.get("photo_urls")
    if photos:
        return [str(p) for p in photos]
    legacy = row.get("photo_url")
    return [legacy] if legacy else []


def catch_from_row(row: Row) -> Catch:
    """Parse a ``catches`` row into a Catch.

    Raises:
        pydantic.ValidationError: If the row does not fit the schema.
    """
    return Catch.model_validate(
        {
            "id": str(row["id"]) if row.get("id") is not None else None,
            "owner_id": row.get("user_id"),
            "species": row.get("species"),
            "length": row.get("length"),
            "weight": row.get("weight"),
            "date": row.get("date"),
            "location": row.get("location"),
            "coordinates": row.get("coordinates"),
            "bait": row.get("bait"),
            "notes": row.get("notes"),
            "photos": _photos_from_row(row),
            "weather": row.get("weather"),
            "is_public": bool(row.get("is_public", False)),
            "created_at": row.get("created_at"),
        }
    )


def _encode(name: str, value: Any) -> Any:
    if isinstance(value, datetime):
        return to_iso(value)
    if name == "photos":
        return list(value)
    return value


def catch_to_row(catch: CatchFields, owner_id: str) -> Row:
    """Build an insert row for a new catch."""
    data = catch.model_dump(mode="python", by_alias=True)
    row: Row = {"user_id": owner_id}
    for name, value in data.items():
        row[_COLUMN_FOR_FIELD.get(name, name)] = _encode(name, value)
    return row


def patch_to_row(patch: CatchPatch) -> Row:
    """Build an update row holding only the explicitly set fields."""
    return {
        _COLUMN_FOR_FIELD.get(name, name): _encode(name, value)
        for name, value in patch.changes().items()
    }
