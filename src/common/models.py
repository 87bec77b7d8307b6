import gzip
import typing as t
import uuid

from django.conf import settings
from django.db import models
from solo.models import SingletonModel


def _compress(text: str | None) -> bytes | None:
    return gzip.compress(text.encode()) if text else None


def _decompress(blob: bytes | memoryview | None) -> str | None:
    return gzip.decompress(bytes(blob)).decode() if blob else None


class TimeStampedModel(models.Model):
    """UUID-keyed base model with creation and update timestamps.

    Rows are validated with full_clean before every save.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        abstract = True

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        self.full_clean()
        super().save(*args, **kwargs)


class SiteSettings(SingletonModel):
    """Club-wide switches editable at runtime."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    live_emails = models.BooleanField(
        default=False,
        help_text="Deliver notifications to riders. When off, everything goes to the internal catch-all.",
    )
    frontend_base_url = models.URLField(
        default=settings.FRONTEND_BASE_URL,
        help_text="Base of the cancel and event links in notification e-mails.",
    )
    internal_catchall_email = models.EmailField(
        verbose_name="Internal catch-all email",
        default=settings.INTERNAL_CATCHALL_EMAIL,
    )

    class Meta:
        verbose_name = "Club settings"
        verbose_name_plural = "Club settings"

    def __str__(self) -> str:  # pragma: no cover
        return "Club settings"


class EmailLog(TimeStampedModel):
    """One row per delivered recipient, bodies stored gzipped."""

    to = models.EmailField(db_index=True)
    subject = models.TextField()
    kind = models.CharField(max_length=64, blank=True, default="", db_index=True, help_text="Notification type.")
    sent_at = models.DateTimeField(auto_now_add=True, db_index=True)
    compressed_body = models.BinaryField(null=True, blank=True)
    compressed_html = models.BinaryField(null=True, blank=True)

    class Meta:
        ordering = ["-sent_at"]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.kind or 'email'} to {self.to}"

    @classmethod
    def for_recipient(
        cls, recipient: str, *, subject: str, body: str, html_body: str | None = None, kind: str = ""
    ) -> "EmailLog":
        """Build an unsaved log row for a single recipient."""
        return cls(
            to=recipient,
            subject=subject,
            kind=kind,
            compressed_body=_compress(body),
            compressed_html=_compress(html_body),
        )

    @property
    def body(self) -> str | None:
        return _decompress(self.compressed_body)

    @property
    def html(self) -> str | None:
        return _decompress(self.compressed_html)
