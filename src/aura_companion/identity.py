"""
Identity boundary.

Sign-in and profile management live outside this package. The companion only
needs to ask "who is the current user, if anyone?", which an
'IdentityProvider' answers. 'StaticIdentityProvider' serves a fixed profile
and is what the demo and tests use.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from aura_companion.errors import NoActiveUserError


class UserProfile(BaseModel):
    id: str
    first_name: str
    email: str = ""


class IdentityProvider(ABC):
    """Abstract source of the currently signed-in user."""

    @abstractmethod
    def get_current_user(self) -> UserProfile | None:
        """Return the signed-in user's profile, or None when nobody is signed in."""
        pass

    def require_user(self, action: str) -> UserProfile:
        user = self.get_current_user()
        if user is None:
            raise NoActiveUserError(action)
        return user


class StaticIdentityProvider(IdentityProvider):
    def __init__(self, user: UserProfile | None = None) -> None:
        self.user = user

    def get_current_user(self) -> UserProfile | None:
        return self.user

    def sign_in(self, user: UserProfile) -> None:
        self.user = user

    def sign_out(self) -> None:
        self.user = None
