import typing as t

from pydantic import AwareDatetime, EmailStr, Field, PositiveInt, StringConstraints

from common.schema import CamelSchema, OneToOneFiftyString
from events.models import Registration, RideLevel

EventType = t.Annotated[str, StringConstraints(min_length=1, max_length=32, strip_whitespace=True)]
CancelToken = t.Annotated[str, StringConstraints(min_length=1, max_length=128, strip_whitespace=True)]
CancelReason = t.Annotated[str, StringConstraints(min_length=3, max_length=1000, strip_whitespace=True)]


class RideLevelKeySchema(CamelSchema):
    event_id: PositiveInt
    ride_level: RideLevel


class SignupSchema(RideLevelKeySchema):
    event_type: EventType = "ride"
    flinta_attested: bool = False
    first_name: OneToOneFiftyString
    last_name: OneToOneFiftyString


class GuestSignupSchema(SignupSchema):
    email: EmailStr


class SignupResponseSchema(CamelSchema):
    success: bool = True
    waitlisted: bool


class CancelSchema(RideLevelKeySchema):
    pass


class GuestCancelSchema(CamelSchema):
    token: CancelToken


class SuccessResponseSchema(CamelSchema):
    success: bool = True


class GuideCancelSchema(RideLevelKeySchema):
    reason: CancelReason


class GuideCancelResponseSchema(CamelSchema):
    success: bool = True
    cancelled_count: int
    emails_sent: int


class CapacitySchema(CamelSchema):
    event_id: int
    total: int
    counts: dict[str, int]
    waitlisted: dict[str, int]
    cancelled_levels: list[str]


class GuideLevelSchema(CamelSchema):
    ride_level: str
    label: str
    guide_ids: list[int]
    is_assigned: bool
    is_cancelled: bool


class GuideEventLevelsSchema(CamelSchema):
    event_id: int
    title: str
    levels: list[GuideLevelSchema]


class WaitlistRowSchema(CamelSchema):
    id: int
    event_id: int
    ride_level: str
    first_name: str
    last_name: str
    email: str | None = None
    waitlist_joined_at: AwareDatetime | None = None

    @staticmethod
    def resolve_email(obj: Registration) -> str | None:
        return obj.recipient_email


class WaitlistReportSchema(CamelSchema):
    total: int
    rows: list[WaitlistRowSchema] = Field(default_factory=list)
