"""Base template interface for notifications."""

import typing as t
from abc import ABC, abstractmethod

from django.template.loader import render_to_string

from notifications.enums import NotificationType


class NotificationTemplate(ABC):
    """Base class for e-mail notification templates.

    Subclasses provide the subject; the bodies are rendered from
    notifications/email/{notification_type}.{txt,html}.
    """

    notification_type: NotificationType

    @abstractmethod
    def get_email_subject(self, context: dict[str, t.Any]) -> str:
        """Get email subject line."""

    def get_email_text_body(self, context: dict[str, t.Any]) -> str:
        """Render the plain text body."""
        return render_to_string(f"notifications/email/{self.notification_type}.txt", context)

    def get_email_html_body(self, context: dict[str, t.Any]) -> str | None:
        """Render the HTML body."""
        return render_to_string(f"notifications/email/{self.notification_type}.html", context)
