"""Django app configuration for inkwell."""
from django.apps import AppConfig


class InkwellConfig(AppConfig):
    """Configuration for the inkwell app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "inkwell"
    verbose_name = "Inkwell"
