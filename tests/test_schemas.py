"""Tests for the catch and social schemas."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from fishbox.schemas import (
    Catch,
    CatchInput,
    CatchPatch,
    Comment,
    Coordinates,
    Friendship,
    FriendshipStatus,
)

if TYPE_CHECKING:
    from conftest import CatchFactory


class TestCoordinates:
    """Test GPS coordinate bounds."""

    def test_valid(self) -> None:
        c = Coordinates(lat=52.52, lng=13.405)
        assert c.lat == 52.52
        assert c.lng == 13.405

    def test_latitude_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            Coordinates(lat=91, lng=0)

    def test_longitude_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            Coordinates(lat=0, lng=-181)

    def test_nan_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Coordinates(lat=float("nan"), lng=0)


class TestCatchInput:
    """Test validation of new catches."""

    def test_minimal(self) -> None:
        c = CatchInput(species="Hecht", length=62)
        assert c.weight is None
        assert c.photos == []
        assert c.is_public is False
        assert c.date.tzinfo is not None

    def test_species_required(self) -> None:
        with pytest.raises(ValidationError):
            CatchInput(species="   ", length=40)

    def test_species_stripped(self) -> None:
        assert CatchInput(species="  Zander ", length=40).species == "Zander"

    def test_length_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            CatchInput(species="Barsch", length=0)

    def test_weight_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            CatchInput(species="Barsch", length=20, weight=-5)

    def test_naive_date_is_utc(self) -> None:
        c = CatchInput(species="Aal", length=50, date=datetime(2024, 5, 1, 22, 0))
        assert c.date == datetime(2024, 5, 1, 22, 0, tzinfo=UTC)

    def test_blank_optional_text_is_none(self) -> None:
        c = CatchInput(species="Aal", length=50, location="", bait="  ", notes="Abends")
        assert c.location is None
        assert c.bait is None
        assert c.notes == "Abends"


class TestCatch:
    """Test stored catch records."""

    def test_frozen(self, make_catch: CatchFactory) -> None:
        c = make_catch()
        with pytest.raises(ValidationError):
            c.length = 10  # type: ignore[misc]

    def test_primary_photo(self, make_catch: CatchFactory) -> None:
        assert make_catch().primary_photo is None
        assert make_catch(photos=["a.jpg", "b.jpg"]).primary_photo == "a.jpg"

    def test_merged_applies_only_set_fields(self, make_catch: CatchFactory) -> None:
        c = make_catch(weight=900, bait="Wobbler")
        updated = c.merged(CatchPatch(length=55))
        assert updated.length == 55
        assert updated.weight == 900
        assert updated.bait == "Wobbler"
        assert updated.id == c.id

    def test_merged_can_clear_optional(self, make_catch: CatchFactory) -> None:
        c = make_catch(weight=900)
        assert c.merged(CatchPatch(weight=None)).weight is None


class TestCatchPatch:
    """Test partial updates."""

    def test_empty(self) -> None:
        assert CatchPatch().changes() == {}

    def test_changes_only_explicit(self) -> None:
        assert CatchPatch(is_public=True).changes() == {"is_public": True}

    def test_explicit_none_kept_for_optional(self) -> None:
        assert CatchPatch(bait=None).changes() == {"bait": None}

    def test_required_fields_cannot_be_cleared(self) -> None:
        with pytest.raises(ValidationError):
            CatchPatch(species=None)
        with pytest.raises(ValidationError):
            CatchPatch(length=None)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CatchPatch.model_validate({"owner_id": "someone-else"})

    def test_invalid_length(self) -> None:
        with pytest.raises(ValidationError):
            CatchPatch(length=-1)


class TestSocialModels:
    """Test friendship and comment models."""

    def test_friendship_default_pending(self) -> None:
        f = Friendship(id="f1", user_id="u1", friend_id="u2")
        assert f.status == FriendshipStatus.PENDING

    def test_friendship_status_from_string(self) -> None:
        f = Friendship.model_validate(
            {"id": "f1", "user_id": "u1", "friend_id": "u2", "status": "accepted"}
        )
        assert f.status is FriendshipStatus.ACCEPTED

    def test_comment_requires_content(self) -> None:
        with pytest.raises(ValidationError):
            Comment(id="k1", catch_id="c1", user_id="u1", content=" ")


def test_catch_requires_owner() -> None:
    with pytest.raises(ValidationError):
        Catch.model_validate({"id": "c1", "species": "Hecht", "length": 40})
