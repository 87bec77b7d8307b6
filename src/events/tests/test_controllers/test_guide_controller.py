"""Tests for the guide endpoints."""

import typing as t

import orjson
import pytest
from django.core import mail
from django.test.client import Client
from django.urls import reverse

from accounts.models import ClubUser
from conftest import ClubUserFactory, auth_client
from events.exceptions import EventMetadataUnavailableError
from events.models import Registration, RideLevel, RideLevelCancellation
from events.service.event_metadata import EventMetadata

pytestmark = pytest.mark.django_db

CANCEL_RIDE_URL = reverse("api:guide_cancel_ride")


def _cancel_ride(client: Client, **overrides: t.Any) -> t.Any:
    payload = {"eventId": 42, "rideLevel": "level2", "reason": "weather", **overrides}
    return client.post(CANCEL_RIDE_URL, data=orjson.dumps(payload), content_type="application/json")


class TestCancelRide:
    def test_guide_cancels_assigned_level(
        self, guide_client: Client, open_event: EventMetadata, fill_level: t.Callable[..., t.Any]
    ) -> None:
        # Arrange
        fill_level(open_event, RideLevel.LEVEL_2, 16, capacity=14)
        mail.outbox.clear()

        # Act
        response = _cancel_ride(guide_client)

        # Assert
        assert response.status_code == 200, response.content
        assert response.json() == {"success": True, "cancelledCount": 16, "emailsSent": 16}
        assert not Registration.objects.active().filter(ride_level=RideLevel.LEVEL_2).exists()
        assert len(mail.outbox) == 16

    def test_second_cancel_conflicts(self, guide_client: Client, open_event: EventMetadata) -> None:
        _cancel_ride(guide_client)

        response = _cancel_ride(guide_client)

        assert response.status_code == 409
        assert response.json()["code"] == "ride_level_already_cancelled"
        assert RideLevelCancellation.objects.count() == 1

    def test_guide_of_other_level_forbidden(
        self, guide_client: Client, open_event: EventMetadata, fill_level: t.Callable[..., t.Any]
    ) -> None:
        fill_level(open_event, RideLevel.LEVEL_1, 3, capacity=7)

        response = _cancel_ride(guide_client, rideLevel="level1")

        assert response.status_code == 403
        assert response.json()["code"] == "guide_not_assigned"
        assert Registration.objects.active().count() == 3

    def test_non_guide_forbidden(self, member_client: Client, open_event: EventMetadata) -> None:
        response = _cancel_ride(member_client)

        assert response.status_code == 403
        assert response.json()["code"] == "guide_access_required"

    def test_requires_authentication(self, client: Client, open_event: EventMetadata) -> None:
        response = _cancel_ride(client)

        assert response.status_code == 401

    @pytest.mark.parametrize("reason", ["", "  ", "ab", "x" * 1001])
    def test_reason_is_validated(self, guide_client: Client, open_event: EventMetadata, reason: str) -> None:
        response = _cancel_ride(guide_client, reason=reason)

        assert response.status_code == 400
        assert not RideLevelCancellation.objects.exists()

    def test_unknown_event(self, guide_client: Client) -> None:
        response = _cancel_ride(guide_client, eventId=404)

        assert response.status_code == 404

    def test_metadata_unavailable(self, guide_client: Client, monkeypatch: pytest.MonkeyPatch) -> None:
        def _unavailable(event_id: int) -> EventMetadata:
            raise EventMetadataUnavailableError()

        monkeypatch.setattr("events.service.event_metadata.fetch_event_metadata", _unavailable)

        response = _cancel_ride(guide_client)

        assert response.status_code == 502


class TestEventLevels:
    def test_lists_levels_and_assignment(self, guide_client: Client, open_event: EventMetadata) -> None:
        _cancel_ride(guide_client)
        url = reverse("api:guide_event_levels", kwargs={"event_id": 42})

        response = guide_client.get(url)

        assert response.status_code == 200
        data = response.json()
        assert data["eventId"] == 42
        assert data["title"] == "Sunday Social Ride"
        levels = {level["rideLevel"]: level for level in data["levels"]}
        assert list(levels) == ["level1", "level2", "level2plus", "level3"]
        assert levels["level2"] == {
            "rideLevel": "level2",
            "label": "Level 2",
            "guideIds": [102, 103],
            "isAssigned": True,
            "isCancelled": True,
        }
        assert levels["level1"]["isAssigned"] is False
        assert levels["level2plus"]["guideIds"] == []

    def test_non_guide_forbidden(self, club_user_factory: ClubUserFactory, open_event: EventMetadata) -> None:
        client = auth_client(club_user_factory())
        url = reverse("api:guide_event_levels", kwargs={"event_id": 42})

        response = client.get(url)

        assert response.status_code == 403

    def test_unknown_event(self, guide_client: Client, guide_user: ClubUser) -> None:
        url = reverse("api:guide_event_levels", kwargs={"event_id": 404})

        response = guide_client.get(url)

        assert response.status_code == 404
