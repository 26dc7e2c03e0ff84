"""
In-process tree store.

Keeps documents in a dict guarded by one asyncio.Lock per session. A
transaction edits a deep copy and swaps it in on success, so an exception
inside the block leaves the committed document untouched.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from src.core.tree_store.base import TreeStore
from src.models.document import DocumentSnapshot, MindMapDocument


class InMemoryTreeStore(TreeStore):
    """Tree store for a single process (tests, demos, one-server deployments)."""

    def __init__(self) -> None:
        super().__init__()
        self._documents: dict[str, MindMapDocument] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    async def initialize(self) -> None:
        """Nothing to set up."""

    def _lock(self, session_id: str) -> asyncio.Lock:
        if session_id not in self._locks:
            self._locks[session_id] = asyncio.Lock()
        return self._locks[session_id]

    @asynccontextmanager
    async def transaction(self, session_id: str) -> AsyncIterator[MindMapDocument]:
        """Atomic transaction on one document (see TreeStore.transaction)."""
        snapshot = None

        async with self._lock(session_id):
            current = self._documents.get(session_id)
            if current is None:
                current = MindMapDocument(session_id=session_id)
                self._documents[session_id] = current

            working = current.model_copy(deep=True)
            working.mark_clean()

            yield working

            if working.changed:
                working.version += 1
                working.mark_clean()
                self._documents[session_id] = working
                snapshot = DocumentSnapshot.of(working)

        if snapshot is not None:
            await self._notify(snapshot)

    async def snapshot(self, session_id: str) -> DocumentSnapshot:
        """Latest committed state of a document."""
        document = self._documents.get(session_id)
        if document is None:
            return DocumentSnapshot(session_id=session_id, version=0, content="")
        return DocumentSnapshot.of(document)

    async def delete_session(self, session_id: str) -> None:
        """Destroy a session's document, presence and subscriptions."""
        self._documents.pop(session_id, None)
        self._locks.pop(session_id, None)
        self._forget_session(session_id)

    async def close(self) -> None:
        """Drop all documents."""
        self._documents.clear()
        self._locks.clear()
