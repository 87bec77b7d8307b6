"""Seat counts per ride level."""

from django.conf import settings

from events.models import RideLevel
from events.service.event_metadata import EventMetadata


def capacity_for(ride_level: str, event: EventMetadata) -> int | None:
    """Seats available for a ride level, None meaning unlimited.

    Workshops use the CMS capacity. Ride levels get a fixed number of places
    per assigned guide, so a level without guides has no seats at all.
    """
    if ride_level == RideLevel.WORKSHOP:
        return event.workshop_capacity
    return event.guide_counts_by_level.get(ride_level, 0) * settings.PLACES_PER_GUIDE
