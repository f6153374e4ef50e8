"""Django app configuration for accounts module."""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """Accounts app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.accounts"
    label = "accounts"
    verbose_name = "Accounts"
