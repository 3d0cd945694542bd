from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """Django app configuration for the Accounts app.

    Login, signup and logout pages; identity itself is managed by Supabase.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
