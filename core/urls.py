from django.urls import path
from . import views

app_name = "core"

urlpatterns = [
    # Landing
    path("", views.home, name="home"),

    # Dashboard list
    path("dashboard/", views.dashboard, name="dashboard"),

    # University CRUD (records live in Supabase; ids are opaque strings)
    path("dashboard/add/", views.university_create, name="university_create"),
    path("dashboard/edit/<str:pk>/", views.university_update, name="university_update"),
    path("dashboard/delete/<str:pk>/", views.university_delete, name="university_delete"),

    # Derived statistics
    path("dashboard/analytics/", views.analytics_view, name="analytics"),

    # Profile / account
    path("dashboard/settings/", views.settings_view, name="settings"),
]
