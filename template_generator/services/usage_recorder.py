"""Fire-and-forget usage counter updates."""

from __future__ import annotations

import asyncio
import logging

from template_generator.adapters.base import TemplateStore

logger = logging.getLogger(__name__)


class UsageRecorder:
    """Schedules ``increment_usage`` calls without awaiting them.

    Each update is attempted once. Failures are logged and dropped, never
    reported back to the request that triggered them.
    """

    def __init__(self) -> None:
        # Strong references so pending tasks are not garbage-collected
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def record(self, store: TemplateStore, template_id: str) -> None:
        task = asyncio.create_task(self._increment(store, template_id))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _increment(self, store: TemplateStore, template_id: str) -> None:
        try:
            await store.increment_usage(template_id)
        except Exception as exc:
            logger.warning("Usage update for template %s failed (non-fatal): %s", template_id, exc)

    async def drain(self) -> None:
        """Wait for in-flight updates, e.g. on shutdown."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
