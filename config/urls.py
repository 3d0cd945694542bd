from django.urls import path, include

urlpatterns = [
    # Core app (namespaced)
    path("", include(("core.urls", "core"), namespace="core")),

    # Supabase-backed login / signup / logout
    path("accounts/", include(("accounts.urls", "accounts"), namespace="accounts")),
]
