"""
Session State Holder

Single writer of the client session. Components that need the identity get
the holder injected and either read ``state`` or subscribe to changes.

Local state only changes in two places:
- set_user(), driven by the provider's session-change notifications
- sign_out(), which clears the session before the provider is called

Both run on the event loop the holder was bound on. The Supabase client
reports token refreshes from its own timer thread; those notifications are
handed over to the loop before they touch state.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from career_advisor.background import TaskTracker
from career_advisor.repository import CareerRepository
from career_advisor.session_state import Identity, SessionState

logger = logging.getLogger(__name__)

SessionListener = Callable[[SessionState], None]


class SessionStateHolder:
    """Holds the current SessionState and notifies subscribers on change."""

    def __init__(self, provider, repository: CareerRepository, tasks: TaskTracker):
        """
        Args:
            provider: Auth provider (see auth_provider.SupabaseAuthProvider)
            repository: Store used for profile records
            tasks: Tracker for the profile bootstrap task
        """
        self.provider = provider
        self.repository = repository
        self.tasks = tasks
        self._state = SessionState()
        self._listeners: List[SessionListener] = []
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def user(self) -> Optional[Identity]:
        return self._state.user

    @property
    def loading(self) -> bool:
        return self._state.loading

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: SessionState):
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def bind_to_provider(self) -> Callable[[], None]:
        """
        Restore the existing provider session, then follow its changes.

        Must be called from the running event loop that owns this holder.
        """
        self._loop = asyncio.get_running_loop()
        self.set_user(self.provider.current_identity())
        return self.provider.subscribe(self._on_provider_change)

    def _on_provider_change(self, identity: Optional[Identity]):
        try:
            on_loop = asyncio.get_running_loop() is self._loop
        except RuntimeError:
            on_loop = False

        if on_loop:
            self.set_user(identity)
        elif self._loop.is_closed():
            logger.warning("⚠️ [SessionStateHolder] Session change after the loop closed, ignored")
        else:
            self._loop.call_soon_threadsafe(self.set_user, identity)

    async def sign_in(self, email: str, password: str):
        """
        Start a session with the provider.

        Provider errors propagate unchanged. Local state is updated by the
        provider's change notification, not here.
        """
        self.provider.sign_in(email, password)
        logger.info(f"🔑 [SessionStateHolder] Sign-in accepted for {email}")

    async def sign_up(self, email: str, password: str):
        """Register with the provider and create the matching profile row."""
        identity = self.provider.sign_up(email, password)

        if identity:
            try:
                await self.repository.create_profile(identity)
            except Exception as e:
                # The user continues without a profile row
                logger.error(f"❌ [SessionStateHolder] Error creating profile: {e}")

    async def sign_out(self):
        """Clear the local session, then end it with the provider."""
        self._set_state(SessionState(user=None, loading=False))

        try:
            self.provider.sign_out()
        except Exception as e:
            logger.error(f"❌ [SessionStateHolder] Provider sign-out failed: {e}")
        logger.info("👋 [SessionStateHolder] Signed out")

    def set_user(self, identity: Optional[Identity]):
        """Apply a session change reported by the provider."""
        self._set_state(SessionState(user=identity, loading=False))

        if identity:
            bootstrap = self.ensure_profile(identity)
            try:
                self.tasks.spawn(bootstrap, f"ensure-profile:{identity.id}")
            except RuntimeError as e:
                bootstrap.close()
                logger.error(f"❌ [SessionStateHolder] Profile bootstrap not scheduled: {e}")

    async def ensure_profile(self, identity: Identity):
        """Create the profile row for ``identity`` if it does not exist yet."""
        try:
            profile = await self.repository.get_profile(identity.id)
            if not profile:
                await self.repository.create_profile(identity)
        except Exception as e:
            logger.error(f"❌ [SessionStateHolder] Error checking/creating profile: {e}")
