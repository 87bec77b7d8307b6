from .cancellation import RideLevelCancellation, RideLevelLock
from .registration import Registration, RideLevel

__all__ = [
    "Registration",
    "RideLevel",
    "RideLevelCancellation",
    "RideLevelLock",
]
