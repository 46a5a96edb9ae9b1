"""Core app configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the core application."""

    name = "megashop.core"
    verbose_name = "MegaShop Core"
    default_auto_field = "django.db.models.BigAutoField"
