"""
supabase_rest.py — HTTP client for Supabase's PostgREST API.
Requests carry the caller's access token so row-level security scopes every
read and write to that user. Falls back to the anon key when no token is given.
"""
import httpx
from urllib.parse import quote

from config import SUPABASE_URL, SUPABASE_ANON_KEY, SUPABASE_TIMEOUT


def _headers(token: str | None = None) -> dict:
    return {
        "apikey": SUPABASE_ANON_KEY,
        "Authorization": f"Bearer {token or SUPABASE_ANON_KEY}",
        "Content-Type": "application/json",
        "Prefer": "return=representation",
    }


def _client() -> httpx.Client:
    return httpx.Client(timeout=SUPABASE_TIMEOUT)


def _row_filter(filters: dict | None) -> str:
    if not filters:
        raise ValueError("refusing to modify rows without a filter")
    return _eq_filters(filters).lstrip("&")


def _eq_filters(filters: dict | None) -> str:
    if not filters:
        return ""
    return "".join(f"&{key}=eq.{quote(str(value))}" for key, value in filters.items())


def sb_select(
    table: str,
    filters: dict = None,
    columns: str = "*",
    order: str = None,
    token: str = None,
) -> list:
    """Select rows with optional equality filters. `order` is PostgREST syntax, e.g. "created_at.desc"."""
    url = f"{SUPABASE_URL}/rest/v1/{table}?select={columns}{_eq_filters(filters)}"
    if order:
        url += f"&order={order}"

    with _client() as client:
        resp = client.get(url, headers=_headers(token))
        resp.raise_for_status()
        return resp.json()


def sb_insert(table: str, data: dict, token: str = None) -> dict:
    """Insert a row and return the created record."""
    url = f"{SUPABASE_URL}/rest/v1/{table}"
    with _client() as client:
        resp = client.post(url, json=data, headers=_headers(token))
        resp.raise_for_status()
        result = resp.json()
        return result[0] if isinstance(result, list) and result else {}


def sb_update(table: str, filters: dict, data: dict, token: str = None) -> list:
    """Update rows matching all `filters`; returns the updated rows (empty if none matched)."""
    url = f"{SUPABASE_URL}/rest/v1/{table}?{_row_filter(filters)}"
    with _client() as client:
        resp = client.patch(url, json=data, headers=_headers(token))
        resp.raise_for_status()
        result = resp.json()
        return result if isinstance(result, list) else []


def sb_delete(table: str, filters: dict, token: str = None) -> list:
    """Delete rows matching all `filters`; returns the deleted rows."""
    url = f"{SUPABASE_URL}/rest/v1/{table}?{_row_filter(filters)}"
    with _client() as client:
        resp = client.delete(url, headers=_headers(token))
        resp.raise_for_status()
        if not resp.content:
            return []
        result = resp.json()
        return result if isinstance(result, list) else []
