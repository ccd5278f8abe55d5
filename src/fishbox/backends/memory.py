"""In-process backend holding tables as lists of dict rows.

Behaves like the hosted collaborator for everything FishBox relies on:
generated ids and timestamps, unique constraints, cascading deletes of
likes and comments when a catch goes away.
"""

from __future__ import annotations

import copy
import uuid
from datetime import UTC, datetime
from typing import Any

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

DEFAULT_UNIQUE: dict[str, tuple[str, ...]] = {
    FRIENDSHIPS: ("user_id", "friend_id"),
    CATCH_LIKES: ("catch_id", "user_id"),
}

# child table -> foreign key column pointing at a catch id
_CASCADE_FROM_CATCHES = {CATCH_LIKES: "catch_id", CATCH_COMMENTS: "catch_id"}


def _comparable(value: Any) -> Any:
    """Make ISO timestamps comparable with datetimes and with each other."""
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return value
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _matches(row: Row, query: Query) -> bool:
    for column, expected in query.eq.items():
        if row.get(column) != expected:
            return False
    for column, bound in query.gte.items():
        value = row.get(column)
        if value is None or _comparable(value) < _comparable(bound):
            return False
    return True


class InMemoryBackend:
    """Dict-of-lists backend for tests, demos and offline use."""

    def __init__(self, unique: dict[str, tuple[str, ...]] | None = None) -> None:
        self.tables: dict[str, list[Row]] = {}
        self.unique = DEFAULT_UNIQUE if unique is None else unique

    def _table(self, name: str) -> list[Row]:
        return self.tables.setdefault(name, [])

    def seed(self, table: str, rows: list[Row]) -> list[Row]:
        """Insert rows directly, filling ids and timestamps. Test helper."""
        return [self._insert(table, row) for row in rows]

    def _insert(self, table: str, row: Row) -> Row:
        stored = copy.deepcopy(row)
        stored.setdefault("id", str(uuid.uuid4()))
        stored.setdefault("created_at", datetime.now(UTC).isoformat())
        columns = self.unique.get(table)
        if columns:
            key = tuple(stored.get(c) for c in columns)
            for existing in self._table(table):
                if tuple(existing.get(c) for c in columns) == key:
                    msg = f"duplicate key value violates unique constraint on {table}{columns}"
                    raise BackendError(msg, code=UNIQUE_VIOLATION)
        self._table(table).append(stored)
        return copy.deepcopy(stored)

    async def select(self, query: Query) -> list[Row]:
        rows = [r for r in self._table(query.table) if _matches(r, query)]
        if query.order:
            present = [r for r in rows if r.get(query.order) is not None]
            missing = [r for r in rows if r.get(query.order) is None]
            present.sort(key=lambda r: _comparable(r[query.order]), reverse=query.descending)
            rows = present + missing
        if query.limit is not None:
            rows = rows[: query.limit]
        return copy.deepcopy(rows)

    async def insert(self, table: str, row: Row) -> Row:
        return self._insert(table, row)

    async def update(self, table: str, row_id: str, patch: Row) -> Row:
        for row in self._table(table):
            if row.get("id") == row_id:
                row.update(copy.deepcopy(patch))
                return copy.deepcopy(row)
        msg = f"No row with id {row_id} in {table}"
        raise BackendError(msg, code="PGRST116")

    async def delete(self, table: str, match: dict[str, Any]) -> None:
        rows = self._table(table)
        doomed = [r for r in rows if all(r.get(k) == v for k, v in match.items())]
        doomed_refs = {id(r) for r in doomed}
        self.tables[table] = [r for r in rows if id(r) not in doomed_refs]
        if table == CATCHES:
            ids = {r.get("id") for r in doomed}
            for child, column in _CASCADE_FROM_CATCHES.items():
                self.tables[child] = [r for r in self._table(child) if r.get(column) not in ids]

    async def count(self, query: Query) -> int:
        return sum(1 for r in self._table(query.table) if _matches(r, query))
