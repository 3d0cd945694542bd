from functools import wraps

from django.conf import settings
from django.http import QueryDict
from django.shortcuts import redirect, resolve_url


def backend_login_required(view_func):
    """
    Like django's `login_required`, but checks for a Supabase session
    instead of a Django user. Redirects to LOGIN_URL with `?next=`.

    Only safe requests are replayed after login; a POST falls back to
    LOGIN_REDIRECT_URL since the follow-up request is a GET.
    """

    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if getattr(request, "backend_user", None) is None:
            if request.method in ("GET", "HEAD"):
                next_url = request.get_full_path()
            else:
                next_url = resolve_url(settings.LOGIN_REDIRECT_URL)
            query = QueryDict(mutable=True)
            query["next"] = next_url
            return redirect(f"{resolve_url(settings.LOGIN_URL)}?{query.urlencode(safe='/')}")
        return view_func(request, *args, **kwargs)

    return _wrapped
