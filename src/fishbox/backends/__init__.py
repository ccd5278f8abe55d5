"""Persistence collaborators.

    backends/
    ├── base.py        # Backend protocol, Query, BackendError, table names
    ├── rows.py        # Row <-> Catch mapping (the validation boundary)
    ├── memory.py      # In-process tables (tests, demos)
    └── postgrest.py   # Supabase-style REST API over requests

Adding a backend
----------------
1. Implement the five async methods of ``Backend`` (select, insert, update,
   delete, count), raising ``BackendError`` on any collaborator failure.
2. Return plain dict rows using the collaborator column names
   (``user_id``, ``photo_urls``, ISO timestamps); ``rows.py`` does the rest.
3. Wire it into ``build_backend`` below and add tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fishbox.backends.base import Backend, BackendError, Query
from fishbox.backends.memory import InMemoryBackend
from fishbox.backends.postgrest import PostgrestBackend
from fishbox.errors import ConfigurationError

if TYPE_CHECKING:
    from fishbox.config import Settings


def build_backend(settings: Settings, access_token: str | None = None) -> Backend:
    """Create the backend selected in settings."""
    if settings.backend == "postgrest":
        if not settings.backend_url:
            msg = "FISHBOX_BACKEND_URL is required for the postgrest backend"
            raise ConfigurationError(msg)
        return PostgrestBackend(settings.backend_url, settings.backend_key, access_token)
    return InMemoryBackend()


def require_persistent_backend(settings: Settings) -> None:
    """Refuse the in-memory backend where data must outlive the process.

    Each process gets a fresh, empty ``InMemoryBackend``, so one-shot callers
    such as the CLI and the snapshot flow would only ever see nothing.
    """
    if settings.backend == "memory":
        msg = "this command needs a persistent backend, set FISHBOX_BACKEND=postgrest"
        raise ConfigurationError(msg)


__all__ = [
    "Backend",
    "BackendError",
    "InMemoryBackend",
    "PostgrestBackend",
    "Query",
    "build_backend",
    "require_persistent_backend",
]
