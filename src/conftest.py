"""
Project-wide fixtures: users, the event metadata stand-in and test-mode switches.
"""

import secrets
import string
import typing as t
from datetime import datetime

import faker
import pytest
from django.core.cache import cache
from django.test.client import Client
from ninja_jwt.tokens import RefreshToken
from pytest import MonkeyPatch

from accounts.models import ClubUser
from events.service.event_metadata import EventMetadata
from ridelist import celery_app


class ClubUserFactory:
    """Factory for creating ClubUser instances for testing."""

    fake = faker.Faker()

    def create_user(self, **kwargs: t.Any) -> ClubUser:
        username = kwargs.pop("username", "".join(secrets.choice(string.ascii_lowercase) for _ in range(10)))
        email = kwargs.pop("email", f"{username}@ridersclub.org")
        password = kwargs.pop("password", "password")
        first_name = kwargs.pop("first_name", self.fake.first_name())
        last_name = kwargs.pop("last_name", self.fake.last_name())
        return ClubUser.objects.create_user(
            username=username,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            **kwargs,
        )

    def __call__(self, **kwargs: t.Any) -> ClubUser:
        return self.create_user(**kwargs)


@pytest.fixture
def club_user_factory() -> ClubUserFactory:
    return ClubUserFactory()


def auth_client(user: ClubUser) -> Client:
    """API client authenticated as the given user."""
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")  # type: ignore[attr-defined]


class EventCatalog:
    """In-memory stand-in for the CMS, keyed by event id."""

    def __init__(self) -> None:
        self.events: dict[int, EventMetadata] = {}

    def add(
        self,
        event_id: int = 42,
        *,
        title: str = "Sunday Social Ride",
        slug: str | None = "sunday-social-ride",
        public_release_date: datetime | None = None,
        is_flinta_only: bool = False,
        workshop_capacity: int | None = None,
        guide_ids_by_level: dict[str, list[int]] | None = None,
    ) -> EventMetadata:
        event = EventMetadata(
            event_id=event_id,
            title=title,
            slug=slug,
            public_release_date=public_release_date,
            is_flinta_only=is_flinta_only,
            workshop_capacity=workshop_capacity,
            guide_ids_by_level=guide_ids_by_level if guide_ids_by_level is not None else {},
        )
        self.events[event_id] = event
        return event

    def fetch(self, event_id: int) -> EventMetadata | None:
        return self.events.get(event_id)


@pytest.fixture(autouse=True)
def event_catalog(monkeypatch: MonkeyPatch) -> EventCatalog:
    """Replace the CMS lookup so no test talks to WordPress.

    This fixture is autouse=True; tests add the events they need.
    """
    catalog = EventCatalog()
    monkeypatch.setattr("events.service.event_metadata.fetch_event_metadata", catalog.fetch)
    return catalog


@pytest.fixture(autouse=True)
def enable_celery_eager_mode(settings: t.Any) -> None:
    """Enable Celery eager mode for tests so tasks execute synchronously.

    Notification e-mails are then sent within the request and land in mail.outbox.
    """
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True
    celery_app.conf.task_always_eager = True
    celery_app.conf.task_eager_propagates = True


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    """Reset the cache before each test so throttle counters start from zero."""
    cache.clear()
