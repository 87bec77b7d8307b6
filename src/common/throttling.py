"""Request throttles. Rates live in NINJA_EXTRA["THROTTLE_RATES"], keyed by scope."""

from ninja_extra.throttling import AnonRateThrottle, UserRateThrottle


class AnonDefaultThrottle(AnonRateThrottle):
    scope = "anon_default"


class UserDefaultThrottle(UserRateThrottle):
    scope = "user_default"


class WriteThrottle(UserRateThrottle):
    """Signups, cancellations and guide actions by logged-in users."""

    scope = "write"


class GuestWriteThrottle(AnonRateThrottle):
    """Guest signups and token cancellations, counted per client IP."""

    scope = "guest_write"
