"""Exceptions raised by the Catch Store and the social layer."""

from __future__ import annotations


class FishBoxError(Exception):
    """Base class for all FishBox errors."""


class ValidationError(FishBoxError):
    """Input rejected client-side before any collaborator call."""


class PersistenceError(FishBoxError):
    """The persistence collaborator rejected a write."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class FetchError(FishBoxError):
    """A read from the persistence collaborator failed."""


class NotFoundError(FishBoxError):
    """Operation on an id that is not present in the local list."""

    def __init__(self, catch_id: str) -> None:
        super().__init__(f"Catch not found: {catch_id}")
        self.catch_id = catch_id


class ConfigurationError(FishBoxError):
    """Settings do not allow the requested operation."""
