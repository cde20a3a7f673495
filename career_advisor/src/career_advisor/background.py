"""
Fire-and-Forget Task Tracking

Persistence calls never block the user flow. They run as background tasks
owned by a TaskTracker, which keeps a reference to each task until it settles
and records failures so they stay observable.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, List, Set

logger = logging.getLogger(__name__)


@dataclass
class TaskFailure:
    """A background task that raised."""
    label: str
    error: BaseException
    failed_at: datetime = field(default_factory=datetime.now)


class TaskTracker:
    """Runs coroutines in the background and captures their failures."""

    def __init__(self, max_failures: int = 100):
        self.max_failures = max_failures
        self.failures: List[TaskFailure] = []
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Awaitable, label: str) -> asyncio.Task:
        """Schedule ``coro`` on the running loop. Requires a running loop."""
        task = asyncio.get_running_loop().create_task(coro)
        task.set_name(label)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning(f"⚠️ [TaskTracker] Task cancelled: {task.get_name()}")
            return

        error = task.exception()
        if error is None:
            return

        logger.error(f"❌ [TaskTracker] {task.get_name()} failed: {error}")
        self.failures.append(TaskFailure(label=task.get_name(), error=error))
        # Oldest failures are dropped first
        if len(self.failures) > self.max_failures:
            del self.failures[:-self.max_failures]

    async def drain(self):
        """Wait until every task scheduled so far has settled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
