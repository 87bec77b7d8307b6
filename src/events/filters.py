from ninja import Field, FilterSchema

from events.models import RideLevel


class WaitlistReportFilterSchema(FilterSchema):
    event_id: int | None = Field(None, alias="eventId")  # type: ignore[call-overload]
    ride_level: RideLevel | None = Field(None, alias="rideLevel")  # type: ignore[call-overload]
