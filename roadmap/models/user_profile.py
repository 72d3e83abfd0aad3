"""Data model for the local user profile shown in the welcome screen."""

from pydantic import BaseModel


class UserProfile(BaseModel):
    """who is using the tracker; lives in memory for the session."""

    user_name: str = ""
    is_first_time: bool = True

    def set_user_name(self, name: str) -> None:
        self.user_name = name
        self.is_first_time = False
