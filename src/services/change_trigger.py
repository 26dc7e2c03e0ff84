"""
Change-trigger policy for automatic regeneration.

Watches a session's text content and regenerates the mind map once editing
pauses. An update only qualifies when the trimmed text is longer than the
substantiality threshold and differs (by hash) from the text last
synthesized. Each update cancels a pending regeneration; a qualifying one
then schedules a new one after the quiet period.
"""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from typing import Any

from src.utils.hashing import content_hash
from src.utils.logger import get_logger

logger = get_logger(__name__)


class ChangeTriggerPolicy:
    """Debounced, change-detecting trigger for one session."""

    def __init__(
        self,
        on_trigger: Callable[[str], Awaitable[Any]],
        debounce_seconds: float = 3.0,
        min_content_length: int = 50,
        session_id: str | None = None,
    ):
        """
        Initialize the policy.

        Args:
            on_trigger: Async callable run with the trimmed text (synthesis and replace)
            debounce_seconds: Quiet period measured from the latest update
            min_content_length: Trimmed text must be longer than this to qualify
            session_id: Session id, for logging only
        """
        self.on_trigger = on_trigger
        self.debounce_seconds = debounce_seconds
        self.min_content_length = min_content_length
        self.session_id = session_id
        self.last_hash: str | None = None
        self._pending: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        """Whether a regeneration is scheduled but has not started."""
        return self._pending is not None and not self._pending.done()

    def observe(self, content: str) -> bool:
        """
        Feed a content update. Must be called from a running event loop.

        Args:
            content: Current text content

        Returns:
            True if a regeneration was scheduled
        """
        self.cancel()

        trimmed = (content or "").strip()
        digest = content_hash(trimmed)
        if len(trimmed) <= self.min_content_length or digest == self.last_hash:
            return False

        self._pending = asyncio.get_running_loop().create_task(self._fire_later(trimmed, digest))
        logger.debug(
            f"Regeneration scheduled in {self.debounce_seconds}s",
            extra={"session_id": self.session_id, "content_hash": digest},
        )
        return True

    def mark_synced(self, content: str) -> None:
        """Record text that was synthesized outside the policy (manual sync)."""
        self.last_hash = content_hash((content or "").strip())

    async def close(self) -> None:
        """Cancel a pending regeneration."""
        task = self._pending
        self.cancel()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    def cancel(self) -> None:
        """Cancel a scheduled regeneration that has not started yet."""
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def _fire_later(self, content: str, digest: str) -> None:
        await asyncio.sleep(self.debounce_seconds)

        # From here on the regeneration runs to completion
        if self._pending is asyncio.current_task():
            self._pending = None

        try:
            await self.on_trigger(content)
        except Exception as e:
            logger.error(
                f"Automatic regeneration failed: {e}",
                extra={"session_id": self.session_id, "error_type": type(e).__name__},
            )
            return

        self.last_hash = digest
