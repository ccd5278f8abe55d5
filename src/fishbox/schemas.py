"""
Domain models for FishBox.

Pydantic models for catch records and the social tables. These define the
canonical schema - backends normalize collaborator rows to these before
anything else sees them.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _aware(value: datetime) -> datetime:
    """Interpret naive timestamps as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# =============================================================================
# Catch
# =============================================================================


class Coordinates(BaseModel):
    """GPS fix in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False)


class WeatherSnapshot(BaseModel):
    """Weather captured when the catch was logged. Never re-fetched.

    Stored in the ``catches.weather`` JSON column with camelCase keys
    (``windSpeed``, ``windDirection``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: int = Field(..., description="Celsius")
    wind_speed: int = Field(..., alias="windSpeed", description="km/h")
    wind_direction: int = Field(..., alias="windDirection", description="degrees")
    pressure: int = Field(..., description="hPa")
    humidity: int = Field(..., description="percent")
    description: str
    icon: str


class CatchFields(BaseModel):
    """User-editable fields shared by new catches and stored records."""

    model_config = ConfigDict(str_strip_whitespace=True)

    species: str = Field(..., min_length=1)
    length: int = Field(..., gt=0, description="Centimetres")
    weight: int | None = Field(default=None, gt=0, description="Grams")
    date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    location: str | None = None
    coordinates: Coordinates | None = None
    bait: str | None = None
    notes: str | None = None
    photos: list[str] = Field(default_factory=list)
    weather: WeatherSnapshot | None = None
    is_public: bool = False

    @field_validator("date")
    @classmethod
    def _date_is_aware(cls, value: datetime) -> datetime:
        return _aware(value)

    @field_validator("location", "bait", "notes")
    @classmethod
    def _blank_is_none(cls, value: str | None) -> str | None:
        return value or None


class CatchInput(CatchFields):
    """Payload for logging a new catch."""


class Catch(CatchFields):
    """A logged catch as stored by the persistence collaborator."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(..., min_length=1)
    owner_id: str = Field(..., min_length=1)
    created_at: datetime | None = None

    @field_validator("created_at")
    @classmethod
    def _created_is_aware(cls, value: datetime | None) -> datetime | None:
        return _aware(value) if value is not None else None

    @property
    def primary_photo(self) -> str | None:
        """First photo, used in compact list views."""
        return self.photos[0] if self.photos else None

    def merged(self, patch: CatchPatch) -> Catch:
        """Return a copy with the explicitly set patch fields applied."""
        changes = {name: getattr(patch, name) for name in patch.model_fields_set}
        return self.model_copy(update=changes)


_NON_NULLABLE = ("species", "length", "date", "photos", "is_public")


class CatchPatch(BaseModel):
    """Partial update for a catch. Only explicitly set fields are applied."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    species: str | None = Field(default=None, min_length=1)
    length: int | None = Field(default=None, gt=0)
    weight: int | None = Field(default=None, gt=0)
    date: datetime | None = None
    location: str | None = None
    coordinates: Coordinates | None = None
    bait: str | None = None
    notes: str | None = None
    photos: list[str] | None = None
    weather: WeatherSnapshot | None = None
    is_public: bool | None = None

    @field_validator("date")
    @classmethod
    def _date_is_aware(cls, value: datetime | None) -> datetime | None:
        return _aware(value) if value is not None else None

    @model_validator(mode="after")
    def _required_fields_not_cleared(self) -> CatchPatch:
        for name in _NON_NULLABLE:
            if name in self.model_fields_set and getattr(self, name) is None:
                msg = f"{name} cannot be cleared"
                raise ValueError(msg)
        return self

    def changes(self) -> dict[str, Any]:
        """Explicitly set fields as plain data, nested keys in stored form."""
        return self.model_dump(include=self.model_fields_set, by_alias=True)


# =============================================================================
# Social
# =============================================================================


class FriendshipStatus(StrEnum):
    """State of a friend request."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Friendship(BaseModel):
    """Directed friend request from ``user_id`` to ``friend_id``."""

    id: str
    user_id: str
    friend_id: str
    status: FriendshipStatus = FriendshipStatus.PENDING
    created_at: datetime | None = None


class Comment(BaseModel):
    """A comment on a catch."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str
    catch_id: str
    user_id: str
    content: str = Field(..., min_length=1)
    created_at: datetime | None = None
