import logging

from django.conf import settings
from django.contrib import messages
from django.shortcuts import render, redirect
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from core.services import auth as auth_service
from core.session import clear_session, store_session
from core.supabase import SupabaseError

from .forms import LoginForm, SignupForm

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred"


def _safe_next(request) -> str | None:
    nxt = request.POST.get("next") or request.GET.get("next")
    if nxt and url_has_allowed_host_and_scheme(
        nxt, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return nxt
    return None


def login_view(request):
    if request.backend_user is not None:
        return redirect(settings.LOGIN_REDIRECT_URL)

    error = ""
    if request.method == "POST":
        form = LoginForm(request.POST)
        if form.is_valid():
            try:
                session = auth_service.sign_in(
                    form.cleaned_data["email"], form.cleaned_data["password"]
                )
            except SupabaseError as e:
                error = str(e)
            except Exception:
                logger.exception("Unexpected error during sign in")
                error = UNEXPECTED_ERROR
            else:
                store_session(request, session)
                return redirect(_safe_next(request) or settings.LOGIN_REDIRECT_URL)
    else:
        form = LoginForm()
    return render(
        request,
        "accounts/login.html",
        {"form": form, "error": error, "next": _safe_next(request) or ""},
    )


def signup_view(request):
    if request.backend_user is not None:
        return redirect(settings.LOGIN_REDIRECT_URL)

    error = ""
    if request.method == "POST":
        form = SignupForm(request.POST)
        if form.is_valid():
            try:
                session = auth_service.sign_up(
                    form.cleaned_data["email"], form.cleaned_data["password"]
                )
            except SupabaseError as e:
                error = str(e)
            except Exception:
                logger.exception("Unexpected error during sign up")
                error = UNEXPECTED_ERROR
            else:
                if session is None:
                    messages.info(
                        request, "Check your email to confirm your account, then sign in."
                    )
                    return redirect("accounts:login")
                store_session(request, session)
                messages.success(request, "Welcome to UniTracker!")
                return redirect(settings.LOGIN_REDIRECT_URL)
    else:
        form = SignupForm()
    return render(request, "accounts/signup.html", {"form": form, "error": error})


@require_POST
def logout_view(request):
    token = (request.backend_session or {}).get("access_token")
    if token:
        try:
            auth_service.sign_out(token)
        except SupabaseError as e:
            # The local session is cleared regardless.
            logger.warning("Backend sign out failed: %s", e)
    clear_session(request)
    return redirect(settings.LOGOUT_REDIRECT_URL)
