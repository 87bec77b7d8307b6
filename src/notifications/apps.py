from django.apps import AppConfig
from django.core.exceptions import ImproperlyConfigured


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"

    def ready(self) -> None:
        """Import the template modules so they register, and fail fast on gaps."""
        from notifications.service import templates  # noqa: F401
        from notifications.service.templates.registry import missing_templates

        if missing := missing_templates():
            raise ImproperlyConfigured(f"Notification types without a template: {', '.join(missing)}")
