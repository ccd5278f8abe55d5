"""Per-session Catch Store.

Single authoritative in-memory list of the signed-in user's catches, kept in
sync with the persistence collaborator. Every consumer reads and writes
through it rather than querying the backend itself.

Rules:
  - Confirm-then-mutate: the local list only changes after the backend call
    succeeded. A failed call leaves the list exactly as it was.
  - The list is replaced with a single assignment once a call resolves; no
    lock is ever held across an ``await``.
  - Every ``load`` takes a request token. A response arriving after a newer
    ``load`` (or ``clear``) was issued is discarded.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from fishbox.backends.base import CATCHES, BackendError, Query, Row
from fishbox.backends.rows import catch_from_row, catch_to_row, patch_to_row
from fishbox.errors import FetchError, NotFoundError, PersistenceError, ValidationError
from fishbox.schemas import Catch, CatchInput, CatchPatch

if TYPE_CHECKING:
    from fishbox.backends.base import Backend
    from fishbox.notifications import NotificationService

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_model(model: type[ModelT], data: ModelT | Mapping[str, Any]) -> ModelT:
    """Validate input against a schema, raising FishBox's ValidationError."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ValidationError(problems) from exc


def parse_catch_rows(rows: Iterable[Row]) -> list[Catch]:
    """Parse collaborator rows, skipping any that do not fit the schema."""
    catches: list[Catch] = []
    for row in rows:
        try:
            catches.append(catch_from_row(row))
        except (PydanticValidationError, KeyError):
            logger.warning("Skipping malformed catch row %s", row.get("id"), exc_info=True)
    return catches


class CatchStore:
    """The signed-in user's catches, synchronised with a backend."""

    def __init__(
        self,
        backend: Backend,
        notifications: NotificationService | None = None,
    ) -> None:
        self.backend = backend
        self.notifications = notifications
        self._catches: tuple[Catch, ...] = ()
        self._owner_id: str | None = None
        self._latest_token = 0
        self._inflight: set[int] = set()

    @property
    def catches(self) -> tuple[Catch, ...]:
        """Current list, most recent first."""
        return self._catches

    @property
    def owner_id(self) -> str | None:
        return self._owner_id

    @property
    def loading(self) -> bool:
        """True while the most recently issued load is outstanding."""
        return self._latest_token in self._inflight

    def get(self, catch_id: str) -> Catch | None:
        for catch in self._catches:
            if catch.id == catch_id:
                return catch
        return None

    def _require(self, catch_id: str) -> Catch:
        catch = self.get(catch_id)
        if catch is None:
            raise NotFoundError(catch_id)
        return catch

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def load(self, owner_id: str) -> tuple[Catch, ...]:
        """Fetch all catches of ``owner_id``, newest first, replacing the list.

        Raises:
            FetchError: The backend read failed. The previous list is kept.
                A failure of a load that was already superseded is ignored.
        """
        self._latest_token += 1
        token = self._latest_token
        self._inflight.add(token)
        query = Query(CATCHES, eq={"user_id": owner_id}, order="date", descending=True)
        try:
            rows = await self.backend.select(query)
        except BackendError as exc:
            if token != self._latest_token:
                logger.debug("Ignoring failure of stale load %d: %s", token, exc)
                return self._catches
            msg = f"Fehler beim Laden der Fänge: {exc}"
            raise FetchError(msg) from exc
        finally:
            self._inflight.discard(token)

        if token != self._latest_token:
            logger.debug("Discarding stale load %d (latest is %d)", token, self._latest_token)
            return self._catches

        self._catches = tuple(parse_catch_rows(rows))
        self._owner_id = owner_id
        logger.debug("Loaded %d catches for %s", len(self._catches), owner_id)
        return self._catches

    async def add(self, data: CatchInput | Mapping[str, Any]) -> Catch:
        """Log a new catch and put it at the front of the list.

        The new record is not re-sorted by date: it goes first even when it
        is back-dated.

        Raises:
            ValidationError: Invalid input or nobody signed in. No network call.
            PersistenceError: The backend rejected the insert.
        """
        catch_input = validate_model(CatchInput, data)
        owner_id = self._owner_id
        if owner_id is None:
            msg = "Nicht angemeldet"
            raise ValidationError(msg)

        try:
            row = await self.backend.insert(CATCHES, catch_to_row(catch_input, owner_id))
        except BackendError as exc:
            msg = f"Fehler beim Speichern: {exc}"
            raise PersistenceError(msg, code=exc.code) from exc
        try:
            created = catch_from_row(row)
        except (PydanticValidationError, KeyError) as exc:
            msg = "Fehler beim Speichern: ungültige Antwort des Servers"
            raise PersistenceError(msg) from exc

        self._catches = (created, *self._catches)
        if created.is_public:
            self._notify_published(created)
        return created

    async def update(self, catch_id: str, patch: CatchPatch | Mapping[str, Any]) -> Catch:
        """Apply a partial update to a catch.

        Raises:
            NotFoundError: ``catch_id`` is not in the local list. No network call.
            ValidationError: Invalid patch. No network call.
            PersistenceError: The backend rejected the update.
        """
        before = self._require(catch_id)
        catch_patch = validate_model(CatchPatch, patch)
        changes = patch_to_row(catch_patch)
        if not changes:
            return before

        try:
            await self.backend.update(CATCHES, catch_id, changes)
        except BackendError as exc:
            msg = f"Fehler beim Aktualisieren: {exc}"
            raise PersistenceError(msg, code=exc.code) from exc

        current = self.get(catch_id) or before
        updated = current.merged(catch_patch)
        self._catches = tuple(updated if c.id == catch_id else c for c in self._catches)
        if updated.is_public and not current.is_public:
            self._notify_published(updated)
        return updated

    async def remove(self, catch_id: str) -> None:
        """Delete a catch. It stays in the list until the backend confirms.

        Raises:
            NotFoundError: ``catch_id`` is not in the local list. No network call.
            PersistenceError: The backend rejected the delete.
        """
        self._require(catch_id)
        try:
            await self.backend.delete(CATCHES, {"id": catch_id})
        except BackendError as exc:
            msg = f"Fehler beim Löschen: {exc}"
            raise PersistenceError(msg, code=exc.code) from exc
        self._catches = tuple(c for c in self._catches if c.id != catch_id)

    def clear(self) -> None:
        """Forget everything (sign-out). Outstanding loads are discarded."""
        self._latest_token += 1
        self._catches = ()
        self._owner_id = None

    def _notify_published(self, catch: Catch) -> None:
        if self.notifications is not None:
            self.notifications.notify_catch_published(catch.species, catch.length)
