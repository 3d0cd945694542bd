import logging
import time

from django.conf import settings

from core.models import BackendUser
from core.services import auth as auth_service
from core.session import SESSION_KEY
from core.supabase import AuthError

logger = logging.getLogger(__name__)


class BackendSessionMiddleware:
    """
    Expose the Supabase session stored in `request.session` as
    `request.backend_session` and `request.backend_user` (None when signed out).

    An access token close to expiry is refreshed once; if that fails the
    stored session is dropped and the user has to sign in again.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.backend_session = None
        request.backend_user = None

        data = request.session.get(SESSION_KEY)
        if data and data.get("user"):
            data = self._maybe_refresh(request, data)
        if data and data.get("user"):
            request.backend_session = data
            request.backend_user = BackendUser.from_payload(data["user"])

        return self.get_response(request)

    def _maybe_refresh(self, request, data: dict) -> dict | None:
        margin = getattr(settings, "SUPABASE_REFRESH_MARGIN", 60)
        expires_at = int(data.get("expires_at") or 0)
        if expires_at - margin > time.time():
            return data

        refresh_token = data.get("refresh_token")
        if not refresh_token:
            request.session.pop(SESSION_KEY, None)
            return None
        try:
            fresh = auth_service.refresh(refresh_token)
        except AuthError as e:
            if e.status is None or e.status >= 500:
                # Backend unreachable; keep the session and let the page report errors.
                logger.warning("Session refresh unavailable, keeping session: %s", e)
                return data
            logger.info("Session refresh rejected, signing out: %s", e)
            request.session.pop(SESSION_KEY, None)
            return None
        request.session[SESSION_KEY] = fresh
        return fresh
