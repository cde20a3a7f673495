"""
Supabase Auth Adapter

Exposes the five auth operations the app consumes (sign in, sign up, sign out,
current session, change subscription) in terms of Identity.
Provider errors (supabase.AuthError) are not caught here.
"""

import logging
from typing import Callable, Optional

from career_advisor.session_state import Identity

logger = logging.getLogger(__name__)

IdentityListener = Callable[[Optional[Identity]], None]


def identity_from_user(user) -> Optional[Identity]:
    """Convert a Supabase ``User`` into an Identity."""
    if user is None:
        return None
    return Identity(id=str(user.id), email=getattr(user, "email", None))


class SupabaseAuthProvider:
    """Wraps ``client.auth`` of one Supabase client."""

    def __init__(self, supabase_client):
        self.supabase = supabase_client

    def sign_in(self, email: str, password: str) -> Optional[Identity]:
        response = self.supabase.auth.sign_in_with_password({"email": email, "password": password})
        return identity_from_user(response.user)

    def sign_up(self, email: str, password: str) -> Optional[Identity]:
        response = self.supabase.auth.sign_up({"email": email, "password": password})
        return identity_from_user(response.user)

    def sign_out(self):
        self.supabase.auth.sign_out()

    def current_identity(self) -> Optional[Identity]:
        session = self.supabase.auth.get_session()
        return identity_from_user(session.user) if session else None

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Call ``listener`` on every session change. Returns the unsubscribe function."""
        def on_change(event, session):
            logger.debug(f"🔑 [SupabaseAuthProvider] Auth event: {event}")
            listener(identity_from_user(session.user) if session else None)

        subscription = self.supabase.auth.on_auth_state_change(on_change)
        return subscription.unsubscribe
