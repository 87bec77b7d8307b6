import typing as t

from ninja_extra import ControllerBase

from accounts.models import ClubUser


class UserAwareController(ControllerBase):
    def user(self) -> ClubUser:
        """Get the user for this request."""
        return t.cast(ClubUser, self.context.request.user)  # type: ignore[union-attr]
