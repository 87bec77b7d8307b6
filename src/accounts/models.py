import re
import uuid

from django.conf import settings
from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class ClubUserQueryset(models.QuerySet["ClubUser"]):
    """Queryset for ClubUser."""

    def guides(self) -> "ClubUserQueryset":
        """Users that lead rides and are linked to the external guide roster."""
        return self.filter(is_guide=True, external_guide_id__isnull=False)

    def with_email(self, email: str) -> "ClubUserQueryset":
        """Case-insensitive email lookup."""
        return self.filter(email__iexact=email.strip())


class ClubUserManager(UserManager["ClubUser"]):
    def get_queryset(self) -> ClubUserQueryset:
        """Get queryset for ClubUser."""
        return ClubUserQueryset(self.model, using=self._db)


class ClubUser(AbstractUser):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    is_member = models.BooleanField(default=False, help_text="Paying club member with early access.")
    is_guide = models.BooleanField(default=False, help_text="Volunteer who leads ride levels.")
    external_guide_id = models.PositiveIntegerField(
        null=True,
        blank=True,
        unique=True,
        help_text="The guide's id in the event CMS roster.",
    )
    language = models.CharField(
        max_length=7,
        choices=settings.LANGUAGES,
        default=settings.LANGUAGE_CODE,
        help_text="User's preferred language",
    )

    objects = ClubUserManager()  # type: ignore[misc]

    class Meta:
        ordering = ["username"]

    @property
    def display_name(self) -> str:
        """Full name, or a prettified username as a fallback."""
        return self.get_full_name() or re.sub(r"(\W|_)+", " ", self.username.split("@")[0]).title()

    @property
    def guide_id(self) -> int | None:
        """The roster id, only when the user is flagged as a guide."""
        if not self.is_guide:
            return None
        return self.external_guide_id
