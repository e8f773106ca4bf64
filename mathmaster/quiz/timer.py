"""
SessionClock - One-second countdown driver for assessment sessions.

Runs as an asyncio task on the caller's event loop, so ticks and learner
commands are processed one at a time. The task ends on its own once the
session is submitted or closed, and stop() cancels it immediately.
"""

import asyncio
import logging
from typing import Optional

from .session import QuizSession

logger = logging.getLogger(__name__)


class SessionClock:
    """Periodic tick() callback for one QuizSession."""

    def __init__(self, session: QuizSession, interval: float = 1.0):
        self.session = session
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Schedule the countdown on the running event loop."""
        if self.running:
            return self._task
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    async def _run(self):
        while self.session.is_running:
            await asyncio.sleep(self.interval)
            # The session may have been submitted or torn down while sleeping
            if not self.session.is_running:
                break
            self.session.tick()
        logger.debug(f"Clock stopped with {self.session.remaining_seconds}s remaining")

    def stop(self):
        """Cancel the countdown without touching the session."""
        if self.running:
            self._task.cancel()

    async def wait(self):
        """Wait until the countdown ends (submitted, closed or stopped)."""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise
