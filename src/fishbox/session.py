"""Session composition root.

One ``FishBoxSession`` per authenticated session owns the backend, the
Catch Store and the social service. Identity changes from the auth
provider are forwarded to ``on_auth_change``::

    session = FishBoxSession.from_settings()
    await session.on_auth_change("user-123")   # sign-in: loads catches
    await session.on_auth_change(None)         # sign-out: clears the store

New catches go through ``log_catch``, which fills in location and weather
from the GPS fix before handing the record to the store.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from fishbox.backends import build_backend
from fishbox.config import Settings, get_settings
from fishbox.enrichment import enrich_catch_input
from fishbox.errors import ValidationError
from fishbox.notifications import NotificationService
from fishbox.schemas import CatchInput
from fishbox.social import SocialService
from fishbox.store import CatchStore, validate_model

if TYPE_CHECKING:
    from fishbox.backends.base import Backend
    from fishbox.schemas import Catch


class FishBoxSession:
    """Wires store and social layer to one backend for one signed-in user."""

    def __init__(
        self,
        backend: Backend,
        notifications: NotificationService | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.backend = backend
        self.notifications = notifications or NotificationService(
            enabled=self.settings.notifications_enabled
        )
        self.store = CatchStore(backend, self.notifications)
        self._social: SocialService | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        access_token: str | None = None,
    ) -> FishBoxSession:
        settings = settings or get_settings()
        return cls(build_backend(settings, access_token), settings=settings)

    @property
    def user_id(self) -> str | None:
        return self._social.user_id if self._social else None

    @property
    def social(self) -> SocialService:
        if self._social is None:
            msg = "Nicht angemeldet"
            raise ValidationError(msg)
        return self._social

    async def sign_in(self, user_id: str) -> tuple[Catch, ...]:
        """Switch to ``user_id`` and load their catches."""
        if self.user_id != user_id:
            self.store.clear()
        self._social = SocialService(self.backend, user_id, self.notifications)
        return await self.store.load(user_id)

    def sign_out(self) -> None:
        self.store.clear()
        self._social = None

    async def on_auth_change(self, user_id: str | None) -> None:
        """Auth provider callback: load on sign-in, clear on sign-out."""
        if user_id is None:
            self.sign_out()
        else:
            await self.sign_in(user_id)

    async def log_catch(
        self, data: CatchInput | Mapping[str, Any], *, enrich: bool = True
    ) -> Catch:
        """Log a new catch for the signed-in user.

        With ``enrich`` the missing location and weather are looked up first,
        in a worker thread since the lookups block. Lookup failures only leave
        those fields empty.

        Raises:
            ValidationError: Invalid input or nobody signed in. No lookups.
            PersistenceError: The backend rejected the insert.
        """
        catch_input = validate_model(CatchInput, data)
        if self.store.owner_id is None:
            msg = "Nicht angemeldet"
            raise ValidationError(msg)
        if enrich:
            catch_input = await asyncio.to_thread(enrich_catch_input, catch_input)
        return await self.store.add(catch_input)
