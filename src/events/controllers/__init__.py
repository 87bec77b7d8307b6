from .guides import GuideController
from .registrations import GuestRegistrationController, RegistrationController
from .reports import CapacityController, WaitlistReportController

REGISTRATION_CONTROLLERS = [
    RegistrationController,
    GuestRegistrationController,
    CapacityController,
    WaitlistReportController,
    GuideController,
]

__all__ = ["REGISTRATION_CONTROLLERS"]
