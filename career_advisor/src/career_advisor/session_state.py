"""
Session State Data Model

Identity of the signed-in user and the client-side session record.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Identity:
    """Authenticated user reference used to key persisted records."""
    id: str
    email: Optional[str] = None


@dataclass(frozen=True)
class SessionState:
    """Snapshot of the current session. Replaced, never mutated."""
    user: Optional[Identity] = None
    loading: bool = True

    @property
    def authenticated(self) -> bool:
        return self.user is not None

    def to_dict(self) -> dict:
        return {
            "user": {"id": self.user.id, "email": self.user.email} if self.user else None,
            "authenticated": self.authenticated,
            "loading": self.loading,
        }
