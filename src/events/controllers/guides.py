from ninja_extra import api_controller, route

from common.authentication import I18nJWTAuth
from common.throttling import WriteThrottle
from events import schema
from events.service.registration_manager import manager, reports
from events.service.registration_manager.guide_cancellation import ensure_guide

from .user_aware_controller import UserAwareController


@api_controller("/guides", auth=I18nJWTAuth(), tags=["Guides"])
class GuideController(UserAwareController):
    """Tools for the volunteers leading ride levels."""

    @route.get(
        "/events/{int:event_id}/levels",
        url_name="guide_event_levels",
        response={200: schema.GuideEventLevelsSchema},
        by_alias=True,
    )
    def event_levels(self, event_id: int) -> schema.GuideEventLevelsSchema:
        """List the guided ride levels of an event and which of them you lead.

        Returns 403 for non-guides.
        """
        guide = self.user()
        ensure_guide(guide)
        event = manager.get_event(event_id)
        return schema.GuideEventLevelsSchema(
            event_id=event.event_id,
            title=event.title,
            levels=[schema.GuideLevelSchema(**level) for level in reports.guide_levels(event, guide)],
        )

    @route.post(
        "/cancel-ride",
        url_name="guide_cancel_ride",
        response={200: schema.GuideCancelResponseSchema},
        throttle=WriteThrottle(),
        by_alias=True,
    )
    def cancel_ride(self, payload: schema.GuideCancelSchema) -> schema.GuideCancelResponseSchema:
        """Call off a ride level you are guiding.

        Every registration on the level, confirmed or waitlisted, is cancelled and
        everyone is e-mailed the reason. Nobody is promoted. Returns 403 unless you are
        assigned to this exact level, 409 if the level was already cancelled.
        """
        outcome = manager.cancel_ride_level(
            self.user(),
            event_id=payload.event_id,
            ride_level=payload.ride_level,
            reason=payload.reason,
        )
        return schema.GuideCancelResponseSchema(
            cancelled_count=outcome.cancelled_count,
            emails_sent=outcome.emails_sent,
        )
