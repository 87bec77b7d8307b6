"""Read-only client for event metadata held in the WordPress CMS.

Capacity and release-policy inputs come from the ``rideEvent`` GraphQL type:
the release date, the FLINTA-only flag, the workshop capacity and the guides
assigned to every ride level.
"""

import datetime
import typing as t

import httpx
import structlog
from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from pydantic import BaseModel, Field, ValidationError

from events.exceptions import EventMetadataUnavailableError
from events.models import RideLevel

logger = structlog.get_logger(__name__)

GUIDED_LEVELS: tuple[RideLevel, ...] = (
    RideLevel.LEVEL_1,
    RideLevel.LEVEL_2,
    RideLevel.LEVEL_2_PLUS,
    RideLevel.LEVEL_3,
)

_GUIDES_FRAGMENT = "guides { nodes { databaseId } }"

RIDE_EVENT_QUERY = (
    "query GetRideEvent($id: ID!) { rideEvent(id: $id, idType: DATABASE_ID) { "
    "databaseId title slug publicReleaseDate "
    "eventDetails { isFlintaOnly workshopCapacity "
    + " ".join(f"{level} {{ {_GUIDES_FRAGMENT} }}" for level in GUIDED_LEVELS)
    + " } } }"
)


class EventMetadata(BaseModel):
    """What the registration subsystem needs to know about an event."""

    event_id: int
    title: str
    slug: str | None = None
    public_release_date: datetime.datetime | None = None
    is_flinta_only: bool = False
    workshop_capacity: int | None = None
    guide_ids_by_level: dict[str, list[int]] = Field(default_factory=dict)

    @property
    def guide_counts_by_level(self) -> dict[str, int]:
        return {level: len(self.guide_ids_by_level.get(level, [])) for level in GUIDED_LEVELS}

    def guide_ids_for(self, ride_level: str) -> list[int]:
        """Guide roster ids assigned to a ride level (workshops have none)."""
        return self.guide_ids_by_level.get(ride_level, [])


def parse_release_date(value: t.Any) -> datetime.datetime | None:
    """Parse the CMS release date; anything unparseable counts as no release date.

    Date-only values mean midnight. Naive values are read in the project time zone.
    """
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = parse_datetime(value)
        if parsed is None:
            day = parse_date(value)
            if day is None:
                return None
            parsed = datetime.datetime.combine(day, datetime.time.min)
    except ValueError:
        return None
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, timezone.get_default_timezone())
    return parsed


def _guide_ids(level_details: t.Any) -> list[int]:
    if not isinstance(level_details, dict):
        return []
    nodes = (level_details.get("guides") or {}).get("nodes")
    if not isinstance(nodes, list):
        return []
    return [int(node["databaseId"]) for node in nodes if isinstance(node, dict) and node.get("databaseId") is not None]


def parse_ride_event(event_id: int, ride_event: dict[str, t.Any] | None) -> EventMetadata | None:
    """Turn the ``rideEvent`` GraphQL payload into EventMetadata, None when absent."""
    if not ride_event:
        return None
    details = ride_event.get("eventDetails") or {}
    workshop_capacity = details.get("workshopCapacity")
    return EventMetadata(
        event_id=event_id,
        title=ride_event.get("title") or settings.DEFAULT_EVENT_TITLE,
        slug=ride_event.get("slug") or None,
        public_release_date=parse_release_date(ride_event.get("publicReleaseDate")),
        is_flinta_only=bool(details.get("isFlintaOnly")),
        workshop_capacity=max(workshop_capacity, 0) if isinstance(workshop_capacity, int) else None,
        guide_ids_by_level={level: _guide_ids(details.get(level)) for level in GUIDED_LEVELS},
    )


class WordPressEventClient:
    """Fetches ride events from the WordPress GraphQL endpoint."""

    def __init__(self, url: str | None = None, timeout: float | None = None) -> None:
        self.url = url or settings.WP_GRAPHQL_URL
        self.timeout = timeout if timeout is not None else settings.WP_GRAPHQL_TIMEOUT

    def fetch(self, event_id: int) -> EventMetadata | None:
        """Fetch an event.

        Returns:
            The event metadata, or None if the CMS does not know the event.

        Raises:
            EventMetadataUnavailableError: On transport errors, non-2xx responses,
                GraphQL errors or a payload that does not have the expected shape.
        """
        try:
            response = httpx.post(
                self.url,
                json={"query": RIDE_EVENT_QUERY, "variables": {"id": event_id}},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("event_metadata_fetch_failed", event_id=event_id, error=str(e))
            raise EventMetadataUnavailableError() from e

        if not isinstance(payload, dict):
            logger.warning("event_metadata_unexpected_payload", event_id=event_id)
            raise EventMetadataUnavailableError()

        if payload.get("errors"):
            logger.warning("event_metadata_graphql_errors", event_id=event_id, errors=payload["errors"])
            raise EventMetadataUnavailableError()

        try:
            return parse_ride_event(event_id, (payload.get("data") or {}).get("rideEvent"))
        except (AttributeError, TypeError, ValueError, ValidationError) as e:
            logger.warning("event_metadata_malformed", event_id=event_id, error=str(e))
            raise EventMetadataUnavailableError() from e


def fetch_event_metadata(event_id: int) -> EventMetadata | None:
    """Fetch an event from the configured CMS."""
    return WordPressEventClient().fetch(event_id)
