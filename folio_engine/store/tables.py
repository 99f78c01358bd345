"""Table-store client for portfolio content (PostgREST dialect)."""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote, urlencode

from .rest import request_json, supabase_headers


PROJECTS = "projectsv2"
CAREER_TIMELINE = "career_timeline_v2"
REVIEWS = "reviews"
CONTACT_MESSAGES = "contact_messages"
CASE_STUDIES = "case_studies"
LANDING_PAGE = "landing_page_v2"
ABOUT = "about_v2"
SIDEBAR = "sidebar_v2"

# Default listing order per collection: (column, descending).
COLLECTIONS: dict[str, tuple[str, bool]] = {
    PROJECTS: ("id", False),
    CAREER_TIMELINE: ("date", True),
    REVIEWS: ("created_at", True),
    CONTACT_MESSAGES: ("created_at", True),
    CASE_STUDIES: ("display_order", False),
}
SINGLETONS: tuple[str, ...] = (LANDING_PAGE, ABOUT, SIDEBAR)
SINGLETON_ID = 1


class TableClient:
    def __init__(self, base_url: str, api_key: str, timeout_s: float = 30.0) -> None:
        if not base_url or not api_key:
            raise RuntimeError("Table store not configured. Set SUPABASE_URL and SUPABASE_KEY.")
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_s = timeout_s

    def list(self, table: str, order: str | None = None, descending: bool = False) -> list[dict[str, Any]]:
        params = {"select": "*"}
        if order:
            params["order"] = f"{order}.{'desc' if descending else 'asc'}"
        rows = self._request("GET", table, params)
        return list(rows or [])

    def get(self, table: str, row_id: int | str) -> dict[str, Any] | None:
        rows = self._request("GET", table, {"select": "*", "id": f"eq.{row_id}"})
        if not rows:
            return None
        return rows[0]

    def create(self, table: str, row: Mapping[str, Any]) -> dict[str, Any]:
        rows = self._request("POST", table, None, payload=dict(row), prefer="return=representation")
        return _first_row(rows, table, "insert")

    def update(self, table: str, row_id: int | str, changes: Mapping[str, Any]) -> dict[str, Any]:
        rows = self._request(
            "PATCH", table, {"id": f"eq.{row_id}"}, payload=dict(changes), prefer="return=representation"
        )
        return _first_row(rows, table, "update")

    def delete(self, table: str, row_id: int | str) -> None:
        self._request("DELETE", table, {"id": f"eq.{row_id}"})

    def get_singleton(self, table: str) -> dict[str, Any] | None:
        return self.get(table, SINGLETON_ID)

    def update_singleton(self, table: str, changes: Mapping[str, Any]) -> dict[str, Any]:
        return self.update(table, SINGLETON_ID, changes)

    def table_url(self, table: str, params: Mapping[str, str] | None = None) -> str:
        url = f"{self.base_url}/rest/v1/{quote(table)}"
        if params:
            url = f"{url}?{urlencode(params, safe='.,*')}"
        return url

    def _request(
        self,
        method: str,
        table: str,
        params: Mapping[str, str] | None,
        *,
        payload: Any | None = None,
        prefer: str | None = None,
    ) -> Any:
        headers = supabase_headers(self.api_key)
        if prefer:
            headers["Prefer"] = prefer
        return request_json(
            method,
            self.table_url(table, params),
            headers,
            payload,
            timeout_s=self.timeout_s,
            label=f"Table store {method} {table}",
        )


def _first_row(rows: Any, table: str, verb: str) -> dict[str, Any]:
    if isinstance(rows, list) and rows:
        return rows[0]
    raise RuntimeError(f"Table store {verb} on {table} returned no rows.")


def read_content(tables: TableClient, table: str) -> list[dict[str, Any]]:
    """Rows of a portfolio table in its default order; singletons yield at most one row."""
    if table in SINGLETONS:
        row = tables.get_singleton(table)
        return [row] if row else []
    if table not in COLLECTIONS:
        raise ValueError(f"Unknown table: {table}")
    order, descending = COLLECTIONS[table]
    return tables.list(table, order=order, descending=descending)
