"""Social layer: public feed, likes, comments and friendships.

Like and comment counts are never stored on a catch. They are re-queried
from the ``catch_likes`` / ``catch_comments`` tables whenever a feed is
built, so they are exactly as fresh as the last query.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from fishbox.aggregation.leaderboard import LeaderboardWindow, window_start
from fishbox.backends.base import (
    CATCH_COMMENTS,
    CATCH_LIKES,
    CATCHES,
    FRIENDSHIPS,
    UNIQUE_VIOLATION,
    BackendError,
    Query,
    Row,
)
from fishbox.backends.rows import to_iso
from fishbox.errors import FetchError, PersistenceError, ValidationError
from fishbox.schemas import Catch, Comment, Friendship, FriendshipStatus
from fishbox.store import parse_catch_rows

if TYPE_CHECKING:
    from fishbox.backends.base import Backend
    from fishbox.notifications import NotificationService

logger = logging.getLogger(__name__)

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)

FEED_LIMIT = 50


async def _read(awaitable: Awaitable[T], what: str) -> T:
    try:
        return await awaitable
    except BackendError as exc:
        msg = f"{what}: {exc}"
        raise FetchError(msg) from exc


async def _write(awaitable: Awaitable[T], what: str) -> T:
    try:
        return await awaitable
    except BackendError as exc:
        msg = f"{what}: {exc}"
        raise PersistenceError(msg, code=exc.code) from exc


def _parse_rows(model: type[ModelT], rows: Iterable[Row]) -> list[ModelT]:
    """Validate collaborator rows, skipping any that do not fit the schema."""
    parsed: list[ModelT] = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except PydanticValidationError:
            logger.warning("Skipping malformed %s row %s", model.__name__, row.get("id"))
    return parsed


def _parse_written(model: type[ModelT], row: Row, what: str) -> ModelT:
    try:
        return model.model_validate(row)
    except PydanticValidationError as exc:
        msg = f"{what}: ungültige Antwort des Servers"
        raise PersistenceError(msg) from exc


async def load_public_catches(
    backend: Backend,
    window: LeaderboardWindow = LeaderboardWindow.ALL,
    now: datetime | None = None,
) -> list[Catch]:
    """Public catches of every user dated inside a leaderboard window.

    Raises:
        FetchError: The backend read failed.
    """
    boundary = window_start(window, now)
    query = Query(
        CATCHES,
        eq={"is_public": True},
        gte={"date": to_iso(boundary)} if boundary else {},
        order="date",
    )
    rows = await _read(backend.select(query), "Fehler beim Laden der Rangliste")
    return parse_catch_rows(rows)


@dataclass(frozen=True)
class FeedItem:
    """A public catch joined with its social counters."""

    catch: Catch
    likes_count: int
    comments_count: int
    liked_by_me: bool


@dataclass
class FriendList:
    friends: list[Friendship] = field(default_factory=list)
    requests: list[Friendship] = field(default_factory=list)


class SocialService:
    """Social operations on behalf of the signed-in user."""

    def __init__(
        self,
        backend: Backend,
        user_id: str,
        notifications: NotificationService | None = None,
    ) -> None:
        self.backend = backend
        self.user_id = user_id
        self.notifications = notifications
        self._seen_requests: set[str] | None = None

    # -------------------------------------------------------------------------
    # Public catches
    # -------------------------------------------------------------------------

    async def public_catches(
        self,
        window: LeaderboardWindow = LeaderboardWindow.ALL,
        now: datetime | None = None,
    ) -> list[Catch]:
        """All public catches inside a leaderboard window."""
        return await load_public_catches(self.backend, window, now)

    async def public_feed(self, limit: int = FEED_LIMIT) -> list[FeedItem]:
        """Latest public catches with like/comment counts."""
        query = Query(CATCHES, eq={"is_public": True}, order="created_at", limit=limit)
        rows = await _read(self.backend.select(query), "Fehler beim Laden des Feeds")

        items: list[FeedItem] = []
        for catch in parse_catch_rows(rows):
            likes = await _read(
                self.backend.count(Query(CATCH_LIKES, eq={"catch_id": catch.id})),
                "Fehler beim Laden der Likes",
            )
            comments = await _read(
                self.backend.count(Query(CATCH_COMMENTS, eq={"catch_id": catch.id})),
                "Fehler beim Laden der Kommentare",
            )
            mine = await _read(
                self.backend.count(
                    Query(CATCH_LIKES, eq={"catch_id": catch.id, "user_id": self.user_id})
                ),
                "Fehler beim Laden der Likes",
            )
            items.append(FeedItem(catch, likes, comments, liked_by_me=mine > 0))
        return items

    # -------------------------------------------------------------------------
    # Likes
    # -------------------------------------------------------------------------

    async def toggle_like(self, catch_id: str) -> bool:
        """Like or unlike a catch. Returns True if the catch is now liked."""
        match = {"catch_id": catch_id, "user_id": self.user_id}
        existing = await _read(
            self.backend.count(Query(CATCH_LIKES, eq=match)), "Fehler beim Laden der Likes"
        )
        if existing:
            await _write(self.backend.delete(CATCH_LIKES, match), "Fehler beim Entfernen")
            return False
        await _write(self.backend.insert(CATCH_LIKES, match), "Fehler beim Liken")
        if self.notifications is not None:
            catch = await self._foreign_catch(catch_id)
            if catch is not None:
                self.notifications.notify_new_like(self.user_id, catch.species)
        return True

    async def _foreign_catch(self, catch_id: str) -> Catch | None:
        """The catch behind a like or comment if someone else owns it.

        Only used to address notifications, so a failed lookup is logged and
        yields None.
        """
        try:
            rows = await self.backend.select(Query(CATCHES, eq={"id": catch_id}, limit=1))
        except BackendError:
            logger.warning("Could not look up catch %s for notification", catch_id)
            return None
        for catch in parse_catch_rows(rows):
            if catch.owner_id != self.user_id:
                return catch
        return None

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    async def comments(self, catch_id: str) -> list[Comment]:
        """Comments on a catch, newest first."""
        query = Query(CATCH_COMMENTS, eq={"catch_id": catch_id}, order="created_at")
        rows = await _read(self.backend.select(query), "Fehler beim Laden der Kommentare")
        return _parse_rows(Comment, rows)

    async def add_comment(self, catch_id: str, content: str) -> Comment:
        text = content.strip()
        if not text:
            msg = "Kommentar darf nicht leer sein"
            raise ValidationError(msg)
        row = await _write(
            self.backend.insert(
                CATCH_COMMENTS,
                {"catch_id": catch_id, "user_id": self.user_id, "content": text},
            ),
            "Fehler beim Kommentieren",
        )
        comment = _parse_written(Comment, row, "Fehler beim Kommentieren")
        if self.notifications is not None:
            catch = await self._foreign_catch(catch_id)
            if catch is not None:
                self.notifications.notify_new_comment(self.user_id, catch.species)
        return comment

    async def delete_comment(self, comment_id: str) -> None:
        await _write(
            self.backend.delete(CATCH_COMMENTS, {"id": comment_id, "user_id": self.user_id}),
            "Fehler beim Löschen",
        )

    # -------------------------------------------------------------------------
    # Friendships
    # -------------------------------------------------------------------------

    async def friendships(self) -> FriendList:
        """Accepted outgoing friendships and pending incoming requests.

        Incoming requests that were not present on the previous call trigger
        a friend-request notification.
        """
        outgoing = await _read(
            self.backend.select(Query(FRIENDSHIPS, eq={"user_id": self.user_id})),
            "Fehler beim Laden der Freunde",
        )
        incoming = await _read(
            self.backend.select(Query(FRIENDSHIPS, eq={"friend_id": self.user_id})),
            "Fehler beim Laden der Freunde",
        )
        result = FriendList(
            friends=[
                f
                for f in _parse_rows(Friendship, outgoing)
                if f.status == FriendshipStatus.ACCEPTED
            ],
            requests=[
                f
                for f in _parse_rows(Friendship, incoming)
                if f.status == FriendshipStatus.PENDING
            ],
        )
        self._announce_new_requests(result.requests)
        return result

    def _announce_new_requests(self, requests: list[Friendship]) -> None:
        ids = {r.id for r in requests}
        if self._seen_requests is not None and self.notifications is not None:
            for request in requests:
                if request.id not in self._seen_requests:
                    self.notifications.notify_friend_request(request.user_id)
        self._seen_requests = ids

    async def send_friend_request(self, friend_id: str) -> Friendship:
        """Ask another user to become friends.

        Raises:
            ValidationError: ``friend_id`` is the current user.
            PersistenceError: The request already exists or the insert failed.
        """
        if friend_id == self.user_id:
            msg = "Du kannst dich nicht selbst hinzufügen"
            raise ValidationError(msg)
        try:
            row = await self.backend.insert(
                FRIENDSHIPS,
                {
                    "user_id": self.user_id,
                    "friend_id": friend_id,
                    "status": FriendshipStatus.PENDING.value,
                },
            )
        except BackendError as exc:
            if exc.code == UNIQUE_VIOLATION:
                msg = "Freundschaftsanfrage existiert bereits"
            else:
                msg = f"Fehler beim Senden: {exc}"
            raise PersistenceError(msg, code=exc.code) from exc
        return _parse_written(Friendship, row, "Fehler beim Senden")

    async def respond_to_request(self, friendship_id: str, *, accept: bool) -> Friendship:
        """Accept or reject an incoming request. Accepting notifies the requester."""
        status = FriendshipStatus.ACCEPTED if accept else FriendshipStatus.REJECTED
        row = await _write(
            self.backend.update(FRIENDSHIPS, friendship_id, {"status": status.value}),
            "Fehler beim Beantworten",
        )
        friendship = _parse_written(Friendship, row, "Fehler beim Beantworten")
        if accept and self.notifications is not None:
            self.notifications.notify_friend_accepted(self.user_id)
        return friendship

    async def remove_friend(self, friendship_id: str) -> None:
        await _write(
            self.backend.delete(FRIENDSHIPS, {"id": friendship_id}), "Fehler beim Entfernen"
        )
