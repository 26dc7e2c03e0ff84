"""
Base interface for the shared tree store.

The store owns every session's document and is the only place where
consistency is decided: each mutation runs inside one `transaction()`, and
committed changes are pushed to subscribers as snapshots. Presence data for
connected participants lives here too, but is never persisted.
"""

from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager

from src.models.document import DocumentSnapshot, MindMapDocument
from src.models.presence import Cursor, Participant
from src.utils.logger import get_logger

logger = get_logger(__name__)

SnapshotCallback = Callable[[DocumentSnapshot], Awaitable[None]]


class TreeStore(ABC):
    """Abstract base class for shared tree store implementations."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[SnapshotCallback]] = defaultdict(list)
        self._presence: dict[str, dict[str, Participant]] = defaultdict(dict)

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the store (create tables/schema)."""
        pass

    # ═══════════════════════════════════════════════════════════
    # DOCUMENT OPERATIONS
    # ═══════════════════════════════════════════════════════════

    @abstractmethod
    def transaction(self, session_id: str) -> AbstractAsyncContextManager[MindMapDocument]:
        """
        Open an atomic read-modify-write transaction on one document.

        The document is created empty on first access. Changes made to the
        yielded document are committed together when the block exits
        normally and discarded if it raises. A commit bumps the version and
        notifies subscribers; a block that changes nothing writes nothing.

        Args:
            session_id: Session identifier

        Yields:
            Mutable document
        """
        pass

    @abstractmethod
    async def snapshot(self, session_id: str) -> DocumentSnapshot:
        """
        Read the latest committed state of a document.

        Args:
            session_id: Session identifier

        Returns:
            Snapshot (version 0 and no root if the session has no document)
        """
        pass

    @abstractmethod
    async def delete_session(self, session_id: str) -> None:
        """
        Destroy a session's document, presence and subscriptions.

        Args:
            session_id: Session identifier
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the connection to the store."""
        pass

    # ═══════════════════════════════════════════════════════════
    # SUBSCRIPTIONS
    # ═══════════════════════════════════════════════════════════

    def subscribe(self, session_id: str, callback: SnapshotCallback) -> Callable[[], None]:
        """
        Receive every committed snapshot of a session.

        Args:
            session_id: Session identifier
            callback: Async callable invoked with each new snapshot

        Returns:
            Function that removes the subscription
        """
        self._subscribers[session_id].append(callback)

        def unsubscribe() -> None:
            callbacks = self._subscribers.get(session_id, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    async def _notify(self, snapshot: DocumentSnapshot) -> None:
        """Deliver a committed snapshot; a failing subscriber does not stop the others."""
        for callback in list(self._subscribers.get(snapshot.session_id, [])):
            try:
                await callback(snapshot)
            except Exception as e:
                logger.error(
                    f"Subscriber failed for session {snapshot.session_id}: {e}",
                    extra={
                        "session_id": snapshot.session_id,
                        "version": snapshot.version,
                        "error_type": type(e).__name__,
                    },
                )

    def _forget_session(self, session_id: str) -> None:
        self._subscribers.pop(session_id, None)
        self._presence.pop(session_id, None)

    # ═══════════════════════════════════════════════════════════
    # PRESENCE
    # ═══════════════════════════════════════════════════════════

    async def join(self, session_id: str, participant: Participant) -> None:
        """Register (or refresh) a participant of a session."""
        self._presence[session_id][participant.id] = participant

    async def leave(self, session_id: str, participant_id: str) -> None:
        """Remove a participant; unknown ids are ignored."""
        self._presence.get(session_id, {}).pop(participant_id, None)

    async def update_cursor(
        self, session_id: str, participant_id: str, cursor: Cursor | None
    ) -> None:
        """Move (or clear) a participant's cursor."""
        participant = self._presence.get(session_id, {}).get(participant_id)
        if participant is not None:
            participant.cursor = cursor

    async def participants(self, session_id: str) -> list[Participant]:
        """Participants currently in a session, in join order."""
        return list(self._presence.get(session_id, {}).values())
