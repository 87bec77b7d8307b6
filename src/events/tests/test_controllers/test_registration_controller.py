"""Tests for the signup and cancellation endpoints."""

import re
import typing as t
from datetime import timedelta

import orjson
import pytest
from django.core import mail
from django.test.client import Client
from django.urls import reverse
from django.utils import timezone

from accounts.models import ClubUser
from conftest import EventCatalog
from events.exceptions import EventMetadataUnavailableError
from events.models import Registration, RideLevel
from events.service.event_metadata import EventMetadata

pytestmark = pytest.mark.django_db

SIGNUP_URL = reverse("api:event_signup")
CANCEL_URL = reverse("api:cancel_registration")
GUEST_SIGNUP_URL = reverse("api:guest_event_signup")
GUEST_CANCEL_URL = reverse("api:guest_cancel_registration")


def _post(client: Client, url: str, payload: dict[str, t.Any]) -> t.Any:
    return client.post(url, data=orjson.dumps(payload), content_type="application/json")


def _signup_payload(**overrides: t.Any) -> dict[str, t.Any]:
    return {
        "eventId": 42,
        "rideLevel": "level1",
        "eventType": "ride",
        "flintaAttested": False,
        "firstName": "Mia",
        "lastName": "Member",
        **overrides,
    }


class TestSignup:
    def test_signup_confirmed(self, member_client: Client, member_user: ClubUser, open_event: EventMetadata) -> None:
        # Act
        response = _post(member_client, SIGNUP_URL, _signup_payload())

        # Assert
        assert response.status_code == 200, response.content
        assert response.json() == {"success": True, "waitlisted": False}
        registration = Registration.objects.get(user=member_user)
        assert registration.ride_level == RideLevel.LEVEL_1
        assert registration.first_name == "Mia"

    def test_signup_waitlisted_when_full(
        self, rider_client: Client, open_event: EventMetadata, fill_level: t.Callable[..., t.Any]
    ) -> None:
        # Arrange
        fill_level(open_event, RideLevel.LEVEL_1, 7, capacity=7)

        # Act
        response = _post(rider_client, SIGNUP_URL, _signup_payload())

        # Assert
        assert response.status_code == 200
        assert response.json() == {"success": True, "waitlisted": True}

    def test_requires_authentication(self, client: Client, open_event: EventMetadata) -> None:
        response = _post(client, SIGNUP_URL, _signup_payload())

        assert response.status_code == 401
        assert not Registration.objects.exists()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"rideLevel": "level9"},
            {"eventId": 0},
            {"firstName": ""},
            {"lastName": "x" * 151},
        ],
    )
    def test_invalid_payload(
        self, member_client: Client, open_event: EventMetadata, overrides: dict[str, t.Any]
    ) -> None:
        response = _post(member_client, SIGNUP_URL, _signup_payload(**overrides))

        assert response.status_code == 400
        assert "errors" in response.json()
        assert not Registration.objects.exists()

    def test_missing_field(self, member_client: Client, open_event: EventMetadata) -> None:
        payload = _signup_payload()
        del payload["firstName"]

        response = _post(member_client, SIGNUP_URL, payload)

        assert response.status_code == 400

    def test_policy_denial(self, rider_client: Client, event_catalog: EventCatalog) -> None:
        event_catalog.add(42, public_release_date=timezone.now() + timedelta(days=1))

        response = _post(rider_client, SIGNUP_URL, _signup_payload())

        assert response.status_code == 403
        assert response.json() == {
            "detail": "Member early access only.",
            "code": "access_denied",
            "reason": "member-early-access-only",
        }

    def test_flinta_only_event(self, member_client: Client, event_catalog: EventCatalog) -> None:
        event_catalog.add(42, is_flinta_only=True, guide_ids_by_level={"level1": [1]})

        denied = _post(member_client, SIGNUP_URL, _signup_payload())
        allowed = _post(member_client, SIGNUP_URL, _signup_payload(flintaAttested=True))

        assert denied.status_code == 403
        assert denied.json()["reason"] == "flinta-only"
        assert allowed.status_code == 200

    def test_unknown_event(self, member_client: Client) -> None:
        response = _post(member_client, SIGNUP_URL, _signup_payload(eventId=404))

        assert response.status_code == 404
        assert response.json()["code"] == "event_not_found"

    def test_duplicate_signup(self, member_client: Client, member_registration: Registration) -> None:
        response = _post(member_client, SIGNUP_URL, _signup_payload())

        assert response.status_code == 409
        assert response.json()["code"] == "already_registered"

    def test_duplicate_waitlist_signup(self, member_client: Client, open_event: EventMetadata) -> None:
        _post(member_client, SIGNUP_URL, _signup_payload(rideLevel="level2plus"))

        response = _post(member_client, SIGNUP_URL, _signup_payload(rideLevel="level2plus"))

        assert response.status_code == 409
        assert response.json()["code"] == "already_waitlisted"

    def test_metadata_unavailable(self, member_client: Client, monkeypatch: pytest.MonkeyPatch) -> None:
        def _unavailable(event_id: int) -> EventMetadata:
            raise EventMetadataUnavailableError()

        monkeypatch.setattr("events.service.event_metadata.fetch_event_metadata", _unavailable)

        response = _post(member_client, SIGNUP_URL, _signup_payload())

        assert response.status_code == 502
        assert not Registration.objects.exists()


class TestCancel:
    def test_cancel_own_registration(
        self, member_client: Client, member_registration: Registration
    ) -> None:
        response = _post(member_client, CANCEL_URL, {"eventId": 42, "rideLevel": "level1"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        member_registration.refresh_from_db()
        assert member_registration.cancelled_at is not None

    def test_cancel_twice(self, member_client: Client, member_registration: Registration) -> None:
        _post(member_client, CANCEL_URL, {"eventId": 42, "rideLevel": "level1"})

        response = _post(member_client, CANCEL_URL, {"eventId": 42, "rideLevel": "level1"})

        assert response.status_code == 404
        assert response.json()["code"] == "registration_not_found"

    def test_cannot_cancel_someone_else(self, rider_client: Client, member_registration: Registration) -> None:
        response = _post(rider_client, CANCEL_URL, {"eventId": 42, "rideLevel": "level1"})

        assert response.status_code == 404
        member_registration.refresh_from_db()
        assert member_registration.cancelled_at is None

    def test_requires_authentication(self, client: Client, member_registration: Registration) -> None:
        response = _post(client, CANCEL_URL, {"eventId": 42, "rideLevel": "level1"})

        assert response.status_code == 401

    def test_cancel_promotes_waitlisted(
        self, member_client: Client, open_event: EventMetadata, fill_level: t.Callable[..., t.Any]
    ) -> None:
        _post(member_client, SIGNUP_URL, _signup_payload())
        fill_level(open_event, RideLevel.LEVEL_1, 7, capacity=7)
        head = Registration.objects.active().waitlisted().get()

        response = _post(member_client, CANCEL_URL, {"eventId": 42, "rideLevel": "level1"})

        assert response.status_code == 200
        head.refresh_from_db()
        assert head.is_waitlist is False
        assert head.waitlist_promoted_at is not None


class TestGuestEndpoints:
    def test_guest_signup_and_token_cancel(self, client: Client, open_event: EventMetadata) -> None:
        signup = _post(client, GUEST_SIGNUP_URL, _signup_payload(email="Gina@Ridersclub.Org"))

        assert signup.status_code == 200, signup.content
        assert signup.json() == {"success": True, "waitlisted": False}
        registration = Registration.objects.get(email="gina@ridersclub.org")
        assert registration.user is None

        match = re.search(r"token=([\w-]+)", mail.outbox[0].body)
        assert match is not None
        token = match.group(1)

        cancel = _post(client, GUEST_CANCEL_URL, {"token": token})
        again = _post(client, GUEST_CANCEL_URL, {"token": token})

        assert cancel.status_code == 200
        assert cancel.json() == {"success": True}
        assert again.status_code == 404
        assert again.json()["code"] == "invalid_cancel_token"

    def test_guest_signup_with_account_email(
        self, client: Client, open_event: EventMetadata, member_user: ClubUser
    ) -> None:
        response = _post(client, GUEST_SIGNUP_URL, _signup_payload(email="member@ridersclub.org"))

        assert response.status_code == 400
        assert response.json()["code"] == "account_exists"

    def test_guest_signup_requires_valid_email(self, client: Client, open_event: EventMetadata) -> None:
        response = _post(client, GUEST_SIGNUP_URL, _signup_payload(email="not-an-email"))

        assert response.status_code == 400

    def test_bogus_token(self, client: Client) -> None:
        response = _post(client, GUEST_CANCEL_URL, {"token": "definitely-not-issued"})

        assert response.status_code == 404

    def test_empty_token(self, client: Client) -> None:
        response = _post(client, GUEST_CANCEL_URL, {"token": ""})

        assert response.status_code == 400
