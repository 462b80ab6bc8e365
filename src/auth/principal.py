"""
Request-scoped identity passed explicitly into the quiz flows.

Views build a Principal from the Flask-Login user once per request; the
services never read the login session themselves.
"""
from dataclasses import dataclass
from typing import Optional

from src.auth.roles import Role


@dataclass(frozen=True)
class Principal:
    username: Optional[str] = None
    role: Optional[Role] = None
    is_authenticated: bool = False

    @classmethod
    def anonymous(cls) -> "Principal":
        return cls()

    @classmethod
    def from_user(cls, user) -> "Principal":
        """Build a principal from a Flask-Login user (or AnonymousUserMixin)."""
        if user is None or not getattr(user, "is_authenticated", False):
            return cls.anonymous()
        return cls(username=user.username, role=user.role, is_authenticated=True)

    @property
    def name(self) -> Optional[str]:
        return self.username

    @property
    def authorities(self) -> list[Role]:
        return [self.role] if self.role is not None else []
