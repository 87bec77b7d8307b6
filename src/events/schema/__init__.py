"""Events schema package.

Request and response schemas for the registration API. Everything on the
wire is camelCase.
"""

from .registration import (
    CancelSchema,
    CapacitySchema,
    GuestCancelSchema,
    GuestSignupSchema,
    GuideCancelResponseSchema,
    GuideCancelSchema,
    GuideEventLevelsSchema,
    GuideLevelSchema,
    SignupResponseSchema,
    SignupSchema,
    SuccessResponseSchema,
    WaitlistReportSchema,
    WaitlistRowSchema,
)

__all__ = [
    "CancelSchema",
    "CapacitySchema",
    "GuestCancelSchema",
    "GuestSignupSchema",
    "GuideCancelResponseSchema",
    "GuideCancelSchema",
    "GuideEventLevelsSchema",
    "GuideLevelSchema",
    "SignupResponseSchema",
    "SignupSchema",
    "SuccessResponseSchema",
    "WaitlistReportSchema",
    "WaitlistRowSchema",
]
