"""PostgREST backend (Supabase-style ``/rest/v1`` API).

Query translation::

    Query(table="catches", eq={"user_id": "u1"}, order="date", descending=True)
    -> GET /catches?select=*&user_id=eq.u1&order=date.desc

Requests run in a worker thread via ``asyncio.to_thread`` so the event loop
is never blocked. No retries: a failed call surfaces immediately.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any

import requests

from fishbox.backends.base import BackendError, Query, Row
from fishbox.backends.rows import to_iso
from fishbox.services.http import NO_RETRY, create_session


def _literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return to_iso(value)
    if value is None:
        return "null"
    return str(value)


def query_params(query: Query) -> dict[str, str]:
    """Encode a Query as PostgREST URL parameters."""
    params: dict[str, str] = {"select": query.columns}
    for column, value in query.eq.items():
        op = "is" if value is None else "eq"
        params[column] = f"{op}.{_literal(value)}"
    for column, value in query.gte.items():
        params[column] = f"gte.{_literal(value)}"
    if query.order:
        params["order"] = f"{query.order}.{'desc' if query.descending else 'asc'}"
    if query.limit is not None:
        params["limit"] = str(query.limit)
    return params


def parse_content_range(header: str | None) -> int:
    """Total row count from a ``Content-Range`` header such as ``0-9/42``."""
    if not header or "/" not in header:
        return 0
    total = header.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else 0


class PostgrestBackend:
    """Talks to a PostgREST endpoint with an API key and optional user token."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        access_token: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or create_session(retry=NO_RETRY)
        self.session.headers["apikey"] = api_key
        self.session.headers["Authorization"] = f"Bearer {access_token or api_key}"

    def _request(
        self,
        method: str,
        table: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> requests.Response:
        headers = {"Prefer": prefer} if prefer else {}
        try:
            resp = self.session.request(
                method, f"{self.base_url}/{table}", params=params, json=json, headers=headers
            )
        except requests.RequestException as exc:
            raise BackendError(str(exc)) from exc
        if not resp.ok:
            code: str | None = None
            message = resp.text or resp.reason
            try:
                body = resp.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                code = body.get("code")
                message = body.get("message", message)
            raise BackendError(message, code=code)
        return resp

    def _select(self, query: Query) -> list[Row]:
        resp = self._request("GET", query.table, params=query_params(query))
        rows: list[Row] = resp.json()
        return rows

    def _insert(self, table: str, row: Row) -> Row:
        resp = self._request("POST", table, json=row, prefer="return=representation")
        rows: list[Row] = resp.json()
        if not rows:
            msg = f"Insert into {table} returned no row"
            raise BackendError(msg)
        return rows[0]

    def _update(self, table: str, row_id: str, patch: Row) -> Row:
        resp = self._request(
            "PATCH",
            table,
            params={"id": f"eq.{row_id}"},
            json=patch,
            prefer="return=representation",
        )
        rows: list[Row] = resp.json()
        if not rows:
            msg = f"No row with id {row_id} in {table}"
            raise BackendError(msg, code="PGRST116")
        return rows[0]

    def _delete(self, table: str, match: dict[str, Any]) -> None:
        params = {column: f"eq.{_literal(value)}" for column, value in match.items()}
        self._request("DELETE", table, params=params)

    def _count(self, query: Query) -> int:
        params = query_params(Query(query.table, eq=query.eq, gte=query.gte, columns="id"))
        params["limit"] = "1"
        resp = self._request("GET", query.table, params=params, prefer="count=exact")
        return parse_content_range(resp.headers.get("Content-Range"))

    async def select(self, query: Query) -> list[Row]:
        return await asyncio.to_thread(self._select, query)

    async def insert(self, table: str, row: Row) -> Row:
        return await asyncio.to_thread(self._insert, table, row)

    async def update(self, table: str, row_id: str, patch: Row) -> Row:
        return await asyncio.to_thread(self._update, table, row_id, patch)

    async def delete(self, table: str, match: dict[str, Any]) -> None:
        await asyncio.to_thread(self._delete, table, match)

    async def count(self, query: Query) -> int:
        return await asyncio.to_thread(self._count, query)
