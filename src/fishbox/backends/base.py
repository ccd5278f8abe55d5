"""Persistence collaborator contract.

The Catch Store and the social layer only rely on insert-returns-row-with-id,
update-by-id, delete-by-match, select-with-filter-and-order and
count-with-filter semantics. Anything that provides these can back FishBox.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

# Table names
CATCHES = "catches"
CATCH_LIKES = "catch_likes"
CATCH_COMMENTS = "catch_comments"
FRIENDSHIPS = "friendships"

#: Collaborator error code for a unique-constraint violation.
UNIQUE_VIOLATION = "23505"

Row = dict[str, Any]


class BackendError(Exception):
    """Raised by a backend when the collaborator rejects or fails a request."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class Query:
    """Structured filter/sort query against one table."""

    table: str
    eq: dict[str, Any] = field(default_factory=dict)
    gte: dict[str, Any] = field(default_factory=dict)
    order: str | None = None
    descending: bool = True
    limit: int | None = None
    columns: str = "*"


class Backend(Protocol):
    """Async persistence collaborator."""

    async def select(self, query: Query) -> list[Row]: ...

    async def insert(self, table: str, row: Row) -> Row: ...

    async def update(self, table: str, row_id: str, patch: Row) -> Row: ...

    async def delete(self, table: str, match: dict[str, Any]) -> None: ...

    async def count(self, query: Query) -> int: ...
