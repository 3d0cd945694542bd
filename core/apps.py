from django.apps import AppConfig


class CoreConfig(AppConfig):
    """App configuration for the core application (university tracking views)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
