from django.apps import AppConfig


class CommonConfig(AppConfig):
    """Shared models, mail tasks, auth and throttles."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "common"
    verbose_name = "Common"
