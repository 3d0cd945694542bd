# ---- stdlib -----------------------------------------------------------------
import logging
import uuid

# ---- Django ------------------------------------------------------------------
from django.contrib import messages
from django.shortcuts import render, redirect
from django.views.decorators.http import require_POST

# ---- App ---------------------------------------------------------------------
from .decorators import backend_login_required
from .forms import UniversityForm
from .services import analytics
from .services import auth as auth_service
from .services.universities import store_for
from .supabase import SupabaseError

# ---- Logging -----------------------------------------------------------------
logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred"


def _fetch_user_universities(request) -> tuple[list, str]:
    """
    Load the signed-in user's records for a list-style page.
    Returns (records, error_message); failures are logged and shown inline.
    """
    try:
        return store_for(request).list_for_user(request.backend_user.id), ""
    except SupabaseError as e:
        logger.error("Error fetching universities: %s", e)
        return [], str(e)
    except Exception:
        logger.exception("Unexpected error fetching universities")
        return [], UNEXPECTED_ERROR


def _is_record_id(pk: str) -> bool:
    """Record ids are UUIDs; anything else cannot exist in the table."""
    try:
        uuid.UUID(pk)
    except ValueError:
        return False
    return True


def _resolve_user(request):
    """The user behind the session's access token, confirmed by the backend."""
    token = (request.backend_session or {}).get("access_token")
    return auth_service.get_user(token)


# =============================================================================
# Landing & dashboard
# =============================================================================

def home(request):
    if request.backend_user is not None:
        return redirect("core:dashboard")
    return render(request, "core/home.html")


@backend_login_required
def dashboard(request):
    universities, error = _fetch_user_universities(request)
    return render(
        request,
        "core/dashboard.html",
        {
            "universities": universities,
            "stats": analytics.status_counts(universities),
            "error": error,
        },
    )


# =============================================================================
# Add / Edit / Delete
# =============================================================================

@backend_login_required
def university_create(request):
    error = ""
    if request.method == "POST":
        form = UniversityForm(request.POST)
        if form.is_valid():
            try:
                user = _resolve_user(request)
                if user is None:
                    error = "You must be logged in to add a university"
                else:
                    obj = store_for(request).insert(form.to_payload(), user.id)
                    messages.success(request, f"Added {obj.name}.")
                    return redirect("core:dashboard")
            except SupabaseError as e:
                error = str(e)
            except Exception:
                logger.exception("Could not add university.")
                error = UNEXPECTED_ERROR
    else:
        form = UniversityForm()
    return render(request, "core/university_form.html", {"form": form, "error": error})


@backend_login_required
def university_update(request, pk: str):
    if not _is_record_id(pk):
        return render(
            request, "core/university_missing.html", {"error": "University not found"}, status=404
        )
    try:
        university = store_for(request).get_by_id(pk, request.backend_user.id)
    except SupabaseError as e:
        return render(request, "core/university_missing.html", {"error": str(e)}, status=502)
    except Exception:
        logger.exception("Could not load university %s", pk)
        return render(request, "core/university_missing.html", {"error": UNEXPECTED_ERROR}, status=500)
    if university is None:
        return render(
            request, "core/university_missing.html", {"error": "University not found"}, status=404
        )

    error = ""
    if request.method == "POST":
        form = UniversityForm(request.POST)
        if form.is_valid():
            try:
                user = _resolve_user(request)
                if user is None:
                    error = "You must be logged in to update a university"
                elif store_for(request).update(pk, user.id, form.to_payload()):
                    messages.success(request, f"Updated {form.cleaned_data['name']}.")
                    return redirect("core:dashboard")
                else:
                    error = "University not found"
            except SupabaseError as e:
                error = str(e)
            except Exception:
                logger.exception("Could not update university %s", pk)
                error = UNEXPECTED_ERROR
    else:
        form = UniversityForm(initial=university.initial_form_data())
    return render(
        request,
        "core/university_form.html",
        {"form": form, "university": university, "error": error},
    )


@require_POST
@backend_login_required
def university_delete(request, pk: str):
    """
    Delete, then redirect; the list is re-read from the backend so a row
    only disappears once the delete is confirmed.
    """
    if not _is_record_id(pk):
        messages.error(request, "University not found.")
        return redirect("core:dashboard")
    try:
        deleted = store_for(request).delete(pk, request.backend_user.id)
    except SupabaseError as e:
        logger.error("Error deleting university %s: %s", pk, e)
        messages.error(request, f"Could not delete: {e}")
    except Exception:
        logger.exception("Unexpected error deleting university %s", pk)
        messages.error(request, UNEXPECTED_ERROR)
    else:
        if deleted:
            messages.info(request, "University deleted.")
        else:
            messages.error(request, "University not found.")
    return redirect("core:dashboard")


# =============================================================================
# Analytics & settings
# =============================================================================

@backend_login_required
def analytics_view(request):
    universities, error = _fetch_user_universities(request)
    stats = analytics.status_counts(universities)
    return render(
        request,
        "core/analytics.html",
        {
            "error": error,
            "stats": stats,
            "financial": analytics.financial_summary(universities),
            "country_count": analytics.country_count(universities),
            "top_countries": [
                (country, count, analytics.percent(count, stats.total))
                for country, count in analytics.top_countries(universities)
            ],
            "upcoming": analytics.upcoming_deadlines(universities),
        },
    )


@backend_login_required
def settings_view(request):
    return render(request, "core/settings.html", {"profile": request.backend_user})
