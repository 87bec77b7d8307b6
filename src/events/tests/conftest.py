import typing as t
from datetime import timedelta

import pytest
from django.test.client import Client
from django.utils import timezone

from accounts.models import ClubUser
from common.models import SiteSettings
from conftest import ClubUserFactory, EventCatalog, auth_client
from events.models import Registration, RideLevel
from events.service.event_metadata import EventMetadata
from events.service.registration_manager import Guest, Member, RegistrationLedger, SignupOutcome


@pytest.fixture
def member_user(club_user_factory: ClubUserFactory) -> ClubUser:
    return club_user_factory(username="member", email="member@ridersclub.org", is_member=True)


@pytest.fixture
def rider_user(club_user_factory: ClubUserFactory) -> ClubUser:
    """A logged-in user without a membership."""
    return club_user_factory(username="rider", email="rider@ridersclub.org")


@pytest.fixture
def guide_user(club_user_factory: ClubUserFactory) -> ClubUser:
    """Guide 102 on the roster, assigned to level2 of the default event."""
    return club_user_factory(username="guide", email="guide@ridersclub.org", is_guide=True, external_guide_id=102)


@pytest.fixture
def member_client(member_user: ClubUser) -> Client:
    return auth_client(member_user)


@pytest.fixture
def rider_client(rider_user: ClubUser) -> Client:
    return auth_client(rider_user)


@pytest.fixture
def guide_client(guide_user: ClubUser) -> Client:
    return auth_client(guide_user)


@pytest.fixture
def open_event(event_catalog: EventCatalog) -> EventMetadata:
    """Event 42, already public: one guide on level1, two on level2, none on level2plus."""
    return event_catalog.add(
        42,
        public_release_date=timezone.now() - timedelta(days=1),
        workshop_capacity=None,
        guide_ids_by_level={
            RideLevel.LEVEL_1: [101],
            RideLevel.LEVEL_2: [102, 103],
            RideLevel.LEVEL_2_PLUS: [],
            RideLevel.LEVEL_3: [104],
        },
    )


@pytest.fixture
def fill_level() -> t.Callable[..., list[SignupOutcome]]:
    """Create guest registrations straight through the ledger."""

    def _fill(
        event: EventMetadata,
        ride_level: str,
        count: int,
        *,
        capacity: int | None = None,
        prefix: str = "guest",
    ) -> list[SignupOutcome]:
        ledger = RegistrationLedger(event.event_id, ride_level)
        return [
            ledger.create(
                registrant=Guest(email=f"{prefix}{i}@ridersclub.org"),
                first_name=f"Guest{i}",
                last_name="Rider",
                capacity=capacity,
            )
            for i in range(count)
        ]

    return _fill


@pytest.fixture
def member_registration(open_event: EventMetadata, member_user: ClubUser) -> Registration:
    """A confirmed level1 registration for the member."""
    outcome = RegistrationLedger(open_event.event_id, RideLevel.LEVEL_1).create(
        registrant=Member(user_id=member_user.pk),
        first_name="Mia",
        last_name="Member",
        capacity=7,
    )
    return outcome.registration


@pytest.fixture
def live_emails() -> SiteSettings:
    """Deliver to the real recipient instead of the internal catch-all."""
    site_settings = SiteSettings.get_solo()
    site_settings.live_emails = True
    site_settings.frontend_base_url = "https://rides.example.com"
    site_settings.save()
    return site_settings
