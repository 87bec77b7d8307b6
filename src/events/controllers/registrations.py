from ninja_extra import api_controller, route

from common.authentication import I18nJWTAuth
from common.throttling import GuestWriteThrottle, WriteThrottle
from events import schema
from events.service.registration_manager import manager

from .user_aware_controller import UserAwareController


@api_controller("/events", auth=I18nJWTAuth(), tags=["Registrations"])
class RegistrationController(UserAwareController):
    """Signup and self-cancellation for logged-in riders."""

    @route.post(
        "/signup",
        url_name="event_signup",
        response={200: schema.SignupResponseSchema},
        throttle=WriteThrottle(),
        by_alias=True,
    )
    def sign_up(self, payload: schema.SignupSchema) -> schema.SignupResponseSchema:
        """Sign up for a ride level (or workshop) of an event.

        Checks the event's phased release first: FLINTA-only events require `flintaAttested`,
        and before the public release date only the early-access groups get in (403).
        When the level is full the signup lands on the waitlist and `waitlisted` is true.
        Returns 404 if the event does not exist, 409 if already registered or waitlisted
        for this level, 502 if the event details could not be loaded.
        """
        outcome = manager.sign_up_member(
            self.user(),
            event_id=payload.event_id,
            ride_level=payload.ride_level,
            flinta_attested=payload.flinta_attested,
            first_name=payload.first_name,
            last_name=payload.last_name,
            event_type=payload.event_type,
        )
        return schema.SignupResponseSchema(waitlisted=outcome.waitlisted)

    @route.post(
        "/cancel",
        url_name="cancel_registration",
        response={200: schema.SuccessResponseSchema},
        throttle=WriteThrottle(),
        by_alias=True,
    )
    def cancel(self, payload: schema.CancelSchema) -> schema.SuccessResponseSchema:
        """Cancel your own registration for a ride level.

        Cancelling a confirmed spot hands it to the first person on the waitlist.
        Returns 404 if there is no active registration to cancel.
        """
        manager.cancel_registration(self.user(), event_id=payload.event_id, ride_level=payload.ride_level)
        return schema.SuccessResponseSchema()


@api_controller("/events", auth=None, tags=["Registrations"])
class GuestRegistrationController(UserAwareController):
    """Signup and token-based cancellation without an account."""

    @route.post(
        "/signup/public",
        url_name="guest_event_signup",
        response={200: schema.SignupResponseSchema},
        throttle=GuestWriteThrottle(),
        by_alias=True,
    )
    def guest_sign_up(self, payload: schema.GuestSignupSchema) -> schema.SignupResponseSchema:
        """Sign up as a guest with just a name and an e-mail address.

        Guests never get member early access. The confirmation e-mail carries the
        cancellation link. Returns 400 if an account already uses the e-mail address.
        """
        outcome = manager.sign_up_guest(
            email=payload.email,
            event_id=payload.event_id,
            ride_level=payload.ride_level,
            flinta_attested=payload.flinta_attested,
            first_name=payload.first_name,
            last_name=payload.last_name,
            event_type=payload.event_type,
        )
        return schema.SignupResponseSchema(waitlisted=outcome.waitlisted)

    @route.post(
        "/cancel/public",
        url_name="guest_cancel_registration",
        response={200: schema.SuccessResponseSchema},
        throttle=GuestWriteThrottle(),
        by_alias=True,
    )
    def guest_cancel(self, payload: schema.GuestCancelSchema) -> schema.SuccessResponseSchema:
        """Cancel a registration with the token from the cancellation link.

        Returns 404 if the link is invalid or was already used.
        """
        manager.cancel_with_token(payload.token)
        return schema.SuccessResponseSchema()
