"""
Thin HTTP wrapper around the Supabase REST surfaces (PostgREST + GoTrue).

Every call sends the project's anon key as `apikey` and, when available,
the signed-in user's access token as the bearer token so row-level
security applies. Non-2xx responses become `SupabaseError` carrying the
backend's own message, which views display verbatim.
"""

import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

REST_PREFIX = "/rest/v1"
AUTH_PREFIX = "/auth/v1"


class SupabaseError(Exception):
    """A failure reported by (or while talking to) the backend."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        return self.message


class AuthError(SupabaseError):
    """Failure on the auth surface (bad credentials, expired token, ...)."""


def _error_message(resp) -> str:
    """
    Pull a human message out of an error response.
    PostgREST uses `message`; GoTrue uses `msg`, `error_description` or `error`.
    """
    try:
        data = resp.json() or {}
    except ValueError:
        data = {}
    if isinstance(data, dict):
        for key in ("message", "msg", "error_description", "error"):
            val = data.get(key)
            if val:
                return str(val)
    text = (getattr(resp, "text", "") or "").strip()
    return text or f"Request failed with status {resp.status_code}"


def _headers(access_token: str | None, extra: dict | None = None) -> dict:
    key = settings.SUPABASE_ANON_KEY
    headers = {
        "apikey": key,
        "Authorization": f"Bearer {access_token or key}",
    }
    if extra:
        headers.update(extra)
    return headers


def supabase_request(
    method: str,
    path: str,
    *,
    access_token: str | None = None,
    params: dict | None = None,
    json: dict | list | None = None,
    headers: dict | None = None,
    error_cls: type[SupabaseError] = SupabaseError,
):
    """
    Send one request to the backend and return the decoded JSON body
    (None for empty responses). Raises `error_cls` on transport errors and
    on any 4xx/5xx status.
    """
    url = f"{settings.SUPABASE_URL}{path}"
    try:
        resp = requests.request(
            method,
            url,
            params=params,
            json=json,
            headers=_headers(access_token, headers),
            timeout=settings.SUPABASE_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("Supabase %s %s failed: %s", method, path, e)
        raise error_cls(str(e)) from e

    if resp.status_code >= 400:
        message = _error_message(resp)
        logger.warning(
            "Supabase %s %s returned %s: %s", method, path, resp.status_code, message
        )
        raise error_cls(message, status=resp.status_code)

    if resp.status_code == 204 or not (resp.text or "").strip():
        return None
    try:
        return resp.json()
    except ValueError as e:
        raise error_cls(f"Invalid JSON from backend: {e}", status=resp.status_code) from e


def rest(method: str, table: str, **kwargs):
    """PostgREST call against `table`."""
    return supabase_request(method, f"{REST_PREFIX}/{table}", **kwargs)


def auth(method: str, endpoint: str, **kwargs):
    """GoTrue call; errors are raised as `AuthError`."""
    kwargs.setdefault("error_cls", AuthError)
    return supabase_request(method, f"{AUTH_PREFIX}/{endpoint}", **kwargs)
