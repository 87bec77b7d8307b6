from decouple import config

WP_GRAPHQL_URL = config("WP_GRAPHQL_URL", default="https://wp.example.com/graphql")
WP_GRAPHQL_TIMEOUT = config("WP_GRAPHQL_TIMEOUT", default=10.0, cast=float)

PLACES_PER_GUIDE = config("PLACES_PER_GUIDE", default=7, cast=int)
MEMBER_EARLY_DAYS = config("MEMBER_EARLY_DAYS", default=2, cast=int)
FLINTA_EARLY_DAYS = config("FLINTA_EARLY_DAYS", default=4, cast=int)

DEFAULT_EVENT_TITLE = config("DEFAULT_EVENT_TITLE", default="Community Ride")

# Empty disables the waitlist report endpoint.
WAITLIST_REPORT_SECRET = config("WAITLIST_REPORT_SECRET", default="")
