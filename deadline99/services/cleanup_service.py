"""Periodic cleanup of finished games.

Finished games stay in the registry until the next sweep so clients polling
for the final state still find them.
"""

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from deadline99.config import settings

if TYPE_CHECKING:
    from deadline99.repositories.game_registry import GameRegistry

logger = logging.getLogger(__name__)


class CleanupService:
    """Background task that removes finished games from the registry."""

    def __init__(self, registry: "GameRegistry", interval: float | None = None) -> None:
        """Initialize cleanup service.

        Args:
            registry: Registry holding the games
            interval: Seconds between sweeps (defaults to settings)
        """
        self.registry = registry
        self.interval = interval or settings.cleanup_interval_seconds
        self._running = False
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Start the background cleanup task."""
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info("Cleanup service started (interval: %.1fs)", self.interval)

    async def stop(self) -> None:
        """Stop the background cleanup task."""
        self._running = False
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        logger.info("Cleanup service stopped")

    async def _run_loop(self) -> None:
        """Background loop that periodically sweeps finished games."""
        while self._running:
            try:
                await asyncio.sleep(self.interval)
                self.sweep()
            except asyncio.CancelledError:
                break
            except Exception:
                logger.exception("Error in cleanup loop")

    def sweep(self) -> int:
        """Remove finished games now.

        Returns:
            Number of games removed
        """
        removed = self.registry.sweep_finished()
        logger.debug("Cleanup sweep removed %d games", removed)
        return removed
