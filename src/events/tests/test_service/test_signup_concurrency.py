"""Concurrent signups against one ride level.

Row locks are only taken on PostgreSQL (SQLite ignores ``select_for_update``),
so these run with ``DB_ENGINE=postgresql``.
"""

import threading
import typing as t
from concurrent.futures import ThreadPoolExecutor

import pytest
from django.db import connection

from accounts.models import ClubUser
from conftest import ClubUserFactory, EventCatalog
from events.models import Registration, RideLevel
from events.service.registration_manager import RegistrationLedger, SignupOutcome, manager

pytestmark = [
    pytest.mark.django_db(transaction=True),
    pytest.mark.postgres,
    pytest.mark.skipif(connection.vendor != "postgresql", reason="row locks need PostgreSQL"),
]

SIGNUPS = 12


@pytest.fixture
def riders(club_user_factory: ClubUserFactory) -> list[ClubUser]:
    return [club_user_factory(username=f"rider{i}", email=f"rider{i}@ridersclub.org") for i in range(SIGNUPS)]


def _sign_up_all(riders: list[ClubUser], event_id: int, ride_level: str) -> list[SignupOutcome | Exception]:
    barrier = threading.Barrier(len(riders))

    def _sign_up(user: ClubUser) -> SignupOutcome | Exception:
        try:
            barrier.wait()
            return manager.sign_up_member(
                user,
                event_id=event_id,
                ride_level=ride_level,
                flinta_attested=False,
                first_name=user.first_name,
                last_name=user.last_name,
            )
        except Exception as e:
            return e
        finally:
            connection.close()

    with ThreadPoolExecutor(max_workers=len(riders)) as executor:
        return list(executor.map(_sign_up, riders))


class TestConcurrentSignup:
    def test_capacity_is_never_exceeded(self, event_catalog: EventCatalog, riders: list[ClubUser]) -> None:
        # One guide on level1: 7 seats for 12 simultaneous signups.
        event = event_catalog.add(42, guide_ids_by_level={RideLevel.LEVEL_1: [101]})

        results = _sign_up_all(riders, event.event_id, RideLevel.LEVEL_1)

        errors = [result for result in results if isinstance(result, Exception)]
        assert errors == []
        outcomes = t.cast(list[SignupOutcome], results)
        assert sum(not outcome.waitlisted for outcome in outcomes) == 7
        assert sum(outcome.waitlisted for outcome in outcomes) == SIGNUPS - 7
        ledger = RegistrationLedger(event.event_id, RideLevel.LEVEL_1)
        assert ledger.confirmed_count() == 7
        assert ledger.registrations().active().waitlisted().count() == SIGNUPS - 7

    def test_duplicate_signups_keep_one_registration(
        self, event_catalog: EventCatalog, club_user_factory: ClubUserFactory
    ) -> None:
        event = event_catalog.add(42, guide_ids_by_level={RideLevel.LEVEL_2: [102]})
        user = club_user_factory(username="eager", email="eager@ridersclub.org")

        results = _sign_up_all([user] * 4, event.event_id, RideLevel.LEVEL_2)

        assert sum(isinstance(result, SignupOutcome) for result in results) == 1
        assert Registration.objects.filter(user=user, cancelled_at__isnull=True).count() == 1
