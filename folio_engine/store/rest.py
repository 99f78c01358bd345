"""Minimal JSON-over-HTTP helper shared by the store clients and the chat provider."""

from __future__ import annotations

import json
from typing import Any, Mapping
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen


def supabase_headers(api_key: str) -> dict[str, str]:
    return {
        "apikey": api_key,
        "Authorization": f"Bearer {api_key}",
    }


def request_json(
    method: str,
    url: str,
    headers: Mapping[str, str],
    payload: Any | None = None,
    *,
    body: bytes | None = None,
    timeout_s: float = 30.0,
    label: str = "Request",
) -> Any:
    """Send a request and decode a JSON response (``None`` for empty bodies)."""
    all_headers = dict(headers)
    if payload is not None:
        body = json.dumps(payload).encode("utf-8")
        all_headers.setdefault("Content-Type", "application/json")
    req = Request(url, data=body, headers=all_headers, method=method)
    try:
        with urlopen(req, timeout=timeout_s) as response:
            raw = response.read().decode("utf-8")
    except HTTPError as exc:
        raw = exc.read().decode("utf-8", errors="replace") if exc.fp else str(exc)
        raise RuntimeError(f"{label} failed ({exc.code}): {raw}") from exc
    except URLError as exc:
        raise RuntimeError(f"{label} failed: {exc}") from exc
    except TimeoutError as exc:
        raise RuntimeError(f"{label} timed out after {timeout_s:.1f}s.") from exc
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return {"raw": raw}
