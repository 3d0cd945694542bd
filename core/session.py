"""Helpers for keeping the Supabase session inside Django's session."""

from core.models import BackendUser

SESSION_KEY = "supabase_session"


def store_session(request, backend_session: dict) -> None:
    # New identity, new session id.
    request.session.cycle_key()
    request.session[SESSION_KEY] = backend_session
    request.backend_session = backend_session
    request.backend_user = BackendUser.from_payload(backend_session["user"])


def clear_session(request) -> None:
    request.session.flush()
    request.backend_session = None
    request.backend_user = None
