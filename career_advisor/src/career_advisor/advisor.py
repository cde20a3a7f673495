"""
Career Advisor Service

Keeps one workspace per browser session. A workspace bundles what the
single-page client used to hold in memory: the session state holder, the
current quiz attempt, the chat conversation and the background tasks
spawned on their behalf.

Workspace ids are issued here, never chosen by the client. Idle workspaces
expire and the registry is capped; the least recently used workspace is
closed first.
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Tuple

from career_advisor.auth_store import SessionStateHolder
from career_advisor.background import TaskTracker
from career_advisor.career_ai import CareerAI
from career_advisor.chat_flow import ChatFlow
from career_advisor.progress import ProgressSummary, load_progress
from career_advisor.quiz_flow import QuizFlow
from career_advisor.repository import CareerRepository

logger = logging.getLogger(__name__)

# Returns the auth provider and repository for a new workspace
BackendFactory = Callable[[], Tuple[object, CareerRepository]]


class Workspace:
    """Client-side state of one browser session."""

    def __init__(self, workspace_id: str, ai: CareerAI, provider, repository: CareerRepository):
        self.workspace_id = workspace_id
        self.ai = ai
        self.repository = repository
        self.tasks = TaskTracker()
        self.session = SessionStateHolder(provider, repository, self.tasks)
        self.chat = ChatFlow(ai, repository, self.session, self.tasks)
        self.quiz = self.start_quiz()
        self.last_used = datetime.now()
        self._unsubscribe: Optional[Callable[[], None]] = None

    def bind(self):
        self._unsubscribe = self.session.bind_to_provider()

    def touch(self):
        self.last_used = datetime.now()

    def start_quiz(self) -> QuizFlow:
        """Begin a fresh quiz attempt, discarding the current one."""
        self.quiz = QuizFlow(self.ai, self.repository, self.session, self.tasks)
        return self.quiz

    async def progress(self) -> ProgressSummary:
        user = self.session.user
        if user is None:
            return ProgressSummary()
        return await load_progress(self.repository, user.id)

    async def close(self):
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None
        await self.tasks.drain()


class CareerAdvisor:
    """Registry of workspaces plus the public career search."""

    def __init__(
        self,
        ai: CareerAI,
        backend_factory: BackendFactory,
        max_workspaces: int = 1000,
        idle_minutes: int = 60,
    ):
        """
        Args:
            ai: Completion client shared by all workspaces
            backend_factory: Builds the auth provider and repository of a new workspace
            max_workspaces: Maximum number of open workspaces
            idle_minutes: Workspaces unused for longer are closed
        """
        self.ai = ai
        self.backend_factory = backend_factory
        self.max_workspaces = max_workspaces
        self.idle_ttl = timedelta(minutes=idle_minutes)
        self.workspaces: Dict[str, Workspace] = {}

    async def _cleanup_expired(self):
        """Close workspaces that have been idle for longer than the TTL."""
        now = datetime.now()
        expired_ids = [
            workspace_id for workspace_id, workspace in self.workspaces.items()
            if now - workspace.last_used > self.idle_ttl
        ]
        for workspace_id in expired_ids:
            logger.info(f"⌛ [CareerAdvisor] Workspace expired: {workspace_id[:8]}")
            await self.close_workspace(workspace_id)

    async def _evict_oldest(self):
        """Close least recently used workspaces until there is room for one more."""
        while self.workspaces and len(self.workspaces) >= self.max_workspaces:
            oldest_id = min(self.workspaces, key=lambda k: self.workspaces[k].last_used)
            logger.info(f"🧹 [CareerAdvisor] Workspace evicted: {oldest_id[:8]}")
            await self.close_workspace(oldest_id)

    async def create_workspace(self) -> Workspace:
        """
        Open a workspace for a new browser session under a fresh random id.

        The workspace restores any provider session and subscribes to its
        changes, so it must be created from a running event loop.

        Raises:
            ValueError: if the backend factory cannot build a data store
        """
        await self._cleanup_expired()
        await self._evict_oldest()

        provider, repository = self.backend_factory()
        workspace_id = secrets.token_urlsafe(24)
        workspace = Workspace(workspace_id, self.ai, provider, repository)
        workspace.bind()
        self.workspaces[workspace_id] = workspace
        logger.info(f"🆕 [CareerAdvisor] Workspace created: {workspace_id[:8]} ({len(self.workspaces)} open)")
        return workspace

    async def get_workspace(self, workspace_id: str) -> Optional[Workspace]:
        """Open workspace with ``workspace_id``, or None if unknown or expired."""
        await self._cleanup_expired()
        workspace = self.workspaces.get(workspace_id)
        if workspace is not None:
            workspace.touch()
        return workspace

    async def close_workspace(self, workspace_id: str):
        workspace = self.workspaces.pop(workspace_id, None)
        if workspace:
            await workspace.close()

    async def search_career(self, query: str) -> Optional[str]:
        """Career information for ``query``. Blank queries issue no call."""
        if not query or not query.strip():
            return None
        return await self.ai.get_career_info(query)

    async def shutdown(self):
        for workspace_id in list(self.workspaces):
            await self.close_workspace(workspace_id)
