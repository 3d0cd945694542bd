from django.urls import reverse

NAV_ITEMS = (
    ("Dashboard", "core:dashboard"),
    ("Add University", "core:university_create"),
    ("Analytics", "core:analytics"),
    ("Settings", "core:settings"),
)


def navigation(request):
    """Sidebar destinations for signed-in pages, with the active one flagged."""
    user = getattr(request, "backend_user", None)
    if user is None:
        return {"nav_items": [], "nav_user_email": ""}

    items = []
    for label, name in NAV_ITEMS:
        url = reverse(name)
        items.append({"label": label, "url": url, "active": request.path == url})
    return {"nav_items": items, "nav_user_email": user.email}
