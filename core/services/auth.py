"""
Supabase (GoTrue) auth wrapper.

Sessions are plain dicts so they can live in Django's session store:
{
    "access_token": "...",
    "refresh_token": "...",
    "expires_at": 1735689600,          # unix seconds
    "user": {"id": "...", "email": "...", "created_at": "..."},
}
"""

import logging
import time

from core.models import BackendUser
from core.supabase import AuthError, auth

logger = logging.getLogger(__name__)


def _session_from_payload(payload: dict | None) -> dict | None:
    """Normalize a GoTrue token response. None if it carries no session."""
    if not payload or not payload.get("access_token"):
        return None
    user = payload.get("user")
    if not user or not user.get("id"):
        raise AuthError("Auth response did not include a user")

    expires_at = payload.get("expires_at")
    if not expires_at:
        expires_at = int(time.time()) + int(payload.get("expires_in") or 3600)

    return {
        "access_token": payload["access_token"],
        "refresh_token": payload.get("refresh_token") or "",
        "expires_at": int(expires_at),
        "user": BackendUser.from_payload(user).to_session(),
    }


def sign_in(email: str, password: str) -> dict:
    payload = auth(
        "POST",
        "token",
        params={"grant_type": "password"},
        json={"email": email, "password": password},
    )
    session = _session_from_payload(payload)
    if session is None:
        raise AuthError("Sign in did not return a session")
    logger.info("User %s signed in", session["user"]["id"])
    return session


def sign_up(email: str, password: str) -> dict | None:
    """
    Register a new account. Returns a session when the project signs users
    in immediately, or None when email confirmation is required first.
    """
    payload = auth("POST", "signup", json={"email": email, "password": password})
    session = _session_from_payload(payload)
    if session is None:
        logger.info("Sign up for %s pending email confirmation", email)
    return session


def refresh(refresh_token: str) -> dict:
    payload = auth(
        "POST",
        "token",
        params={"grant_type": "refresh_token"},
        json={"refresh_token": refresh_token},
    )
    session = _session_from_payload(payload)
    if session is None:
        raise AuthError("Refresh did not return a session")
    return session


def get_user(access_token: str | None) -> BackendUser | None:
    """
    Ask the backend who owns `access_token`.
    None when there is no token or the backend rejects it.
    """
    if not access_token:
        return None
    try:
        payload = auth("GET", "user", access_token=access_token)
    except AuthError as e:
        logger.info("Access token rejected: %s", e)
        return None
    if not payload or not payload.get("id"):
        return None
    return BackendUser.from_payload(payload)


def sign_out(access_token: str) -> None:
    auth("POST", "logout", access_token=access_token)
