"""Core app configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the core application."""

    name = "shoestop.core"
    verbose_name = "ShoeStop Core"
    default_auto_field = "django.db.models.BigAutoField"
