from ninja import Query
from ninja_extra import api_controller, route

from common.authentication import SharedSecretHeaderAuth
from events import filters, schema
from events.service.registration_manager import reports

from .user_aware_controller import UserAwareController


@api_controller("/events", auth=None, tags=["Registrations"])
class CapacityController(UserAwareController):
    @route.get(
        "/{int:event_id}/capacity",
        url_name="event_capacity",
        response={200: schema.CapacitySchema},
        by_alias=True,
    )
    def capacity(self, event_id: int) -> schema.CapacitySchema:
        """Confirmed and waitlisted headcounts per ride level, and which levels were called off."""
        return schema.CapacitySchema(**reports.capacity_overview(event_id))


@api_controller(
    "/events",
    auth=SharedSecretHeaderAuth("X-Waitlist-Secret", "WAITLIST_REPORT_SECRET"),
    tags=["Reports"],
)
class WaitlistReportController(UserAwareController):
    @route.get(
        "/waitlist-report",
        url_name="waitlist_report",
        response={200: schema.WaitlistReportSchema},
        by_alias=True,
    )
    def waitlist_report(
        self,
        params: filters.WaitlistReportFilterSchema = Query(...),  # type: ignore[type-arg]
    ) -> schema.WaitlistReportSchema:
        """Everyone currently on a waitlist, in promotion order.

        Requires the `X-Waitlist-Secret` header. Optionally filter by `eventId` and `rideLevel`.
        """
        rows = list(params.filter(reports.waitlist_report()))
        return schema.WaitlistReportSchema(
            total=len(rows),
            rows=[schema.WaitlistRowSchema.from_orm(row) for row in rows],
        )
