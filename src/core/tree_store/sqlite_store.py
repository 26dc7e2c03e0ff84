"""
SQLite tree store implementation.

Persists documents with aiosqlite: one `documents` row per session and one
`tree_nodes` row per mind map node. Each transaction is a single
BEGIN IMMEDIATE ... COMMIT that writes back only the node rows the
transaction touched.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

import aiosqlite

from src.core.tree_store.base import TreeStore
from src.models.document import DocumentSnapshot, MindMapDocument, NodeRecord
from src.models.mindmap import NodeType
from src.utils.exceptions import TreeStoreError
from src.utils.logger import get_logger

logger = get_logger(__name__)


class SQLiteTreeStore(TreeStore):
    """
    SQLite-based tree store.

    Features:
    - Durable documents that survive restarts
    - Row-level write-back of mutated nodes
    - Transaction support (rollback on any error)

    One connection is shared by all sessions, so transactions are serialized
    store-wide.
    """

    def __init__(self, db_path: str = "data/mindloom.db"):
        """
        Initialize SQLite tree store.

        Args:
            db_path: Path to SQLite database file
        """
        super().__init__()
        self.db_path = db_path
        self.connection: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

        # Ensure directory exists
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async def connect(self) -> None:
        """Establish connection to SQLite."""
        if self.connection is None:
            # Autocommit mode; transactions are opened explicitly
            self.connection = await aiosqlite.connect(self.db_path, isolation_level=None)
            self.connection.row_factory = aiosqlite.Row
            await self.connection.execute("PRAGMA foreign_keys = ON")
            await self.connection.execute("PRAGMA journal_mode = WAL")

    async def initialize(self) -> None:
        """Initialize database schema."""
        await self.connect()

        # Create documents table
        await self.connection.execute(
            """
            CREATE TABLE IF NOT EXISTS documents (
                session_id TEXT PRIMARY KEY,
                version INTEGER NOT NULL DEFAULT 0,
                content TEXT NOT NULL DEFAULT '',
                updated_at TEXT NOT NULL
            )
        """
        )

        # Create tree nodes table
        await self.connection.execute(
            """
            CREATE TABLE IF NOT EXISTS tree_nodes (
                session_id TEXT NOT NULL,
                id TEXT NOT NULL,
                parent_id TEXT,
                position INTEGER NOT NULL DEFAULT 0,
                text TEXT NOT NULL,
                level INTEGER NOT NULL,
                type TEXT NOT NULL,
                PRIMARY KEY (session_id, id),
                FOREIGN KEY (session_id) REFERENCES documents(session_id) ON DELETE CASCADE
            )
        """
        )

        await self.connection.execute(
            "CREATE INDEX IF NOT EXISTS idx_tree_nodes_parent ON tree_nodes(session_id, parent_id)"
        )

    # ═══════════════════════════════════════════════════════════
    # DOCUMENT OPERATIONS
    # ═══════════════════════════════════════════════════════════

    @asynccontextmanager
    async def transaction(self, session_id: str) -> AsyncIterator[MindMapDocument]:
        """Atomic transaction on one document (see TreeStore.transaction)."""
        await self.connect()
        snapshot = None

        async with self._lock:
            try:
                await self.connection.execute("BEGIN IMMEDIATE")
                document = await self._load(session_id)
                created = document is None
                if document is None:
                    document = MindMapDocument(session_id=session_id)
            except aiosqlite.Error as e:
                await self._rollback()
                raise TreeStoreError(
                    f"Failed to open transaction: {e}", context={"session_id": session_id}
                ) from e

            try:
                yield document

                if document.changed:
                    document.version += 1
                if document.changed or created:
                    await self._save(document)
                await self.connection.execute("COMMIT")
            except aiosqlite.Error as e:
                await self._rollback()
                raise TreeStoreError(
                    f"Failed to commit transaction: {e}", context={"session_id": session_id}
                ) from e
            except BaseException:
                await self._rollback()
                raise

            if document.changed:
                document.mark_clean()
                snapshot = DocumentSnapshot.of(document)

        if snapshot is not None:
            await self._notify(snapshot)

    async def snapshot(self, session_id: str) -> DocumentSnapshot:
        """Latest committed state of a document."""
        await self.connect()

        async with self._lock:
            try:
                document = await self._load(session_id)
            except aiosqlite.Error as e:
                raise TreeStoreError(
                    f"Failed to read document: {e}", context={"session_id": session_id}
                ) from e

        if document is None:
            return DocumentSnapshot(session_id=session_id, version=0, content="")
        return DocumentSnapshot.of(document)

    async def delete_session(self, session_id: str) -> None:
        """Destroy a session's document, presence and subscriptions."""
        await self.connect()

        async with self._lock:
            try:
                await self.connection.execute("BEGIN IMMEDIATE")
                await self.connection.execute(
                    "DELETE FROM tree_nodes WHERE session_id = ?", (session_id,)
                )
                await self.connection.execute(
                    "DELETE FROM documents WHERE session_id = ?", (session_id,)
                )
                await self.connection.execute("COMMIT")
            except aiosqlite.Error as e:
                await self._rollback()
                raise TreeStoreError(
                    f"Failed to delete session: {e}", context={"session_id": session_id}
                ) from e

        self._forget_session(session_id)

    async def close(self) -> None:
        """Close the connection."""
        if self.connection is not None:
            await self.connection.close()
            self.connection = None

    # ═══════════════════════════════════════════════════════════
    # HELPER METHODS
    # ═══════════════════════════════════════════════════════════

    async def _rollback(self) -> None:
        if self.connection is not None and self.connection.in_transaction:
            await self.connection.execute("ROLLBACK")

    async def _load(self, session_id: str) -> MindMapDocument | None:
        """Read a document and rebuild its node arena."""
        cursor = await self.connection.execute(
            "SELECT version, content FROM documents WHERE session_id = ?", (session_id,)
        )
        row = await cursor.fetchone()
        if not row:
            return None

        document = MindMapDocument(
            session_id=session_id, version=row["version"], content=row["content"]
        )

        cursor = await self.connection.execute(
            "SELECT * FROM tree_nodes WHERE session_id = ? ORDER BY position", (session_id,)
        )
        rows = await cursor.fetchall()

        document.nodes = {
            row["id"]: NodeRecord(
                id=row["id"],
                text=row["text"],
                level=row["level"],
                type=NodeType(row["type"]),
                parent_id=row["parent_id"],
            )
            for row in rows
        }
        for row in rows:
            parent = document.nodes.get(row["parent_id"]) if row["parent_id"] else None
            if parent is not None:
                parent.children.append(row["id"])

        document.mark_clean()
        return document

    async def _save(self, document: MindMapDocument) -> None:
        """Write the document row plus the touched and removed node rows."""
        await self.connection.execute(
            """
            INSERT INTO documents (session_id, version, content, updated_at)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(session_id) DO UPDATE SET
                version = excluded.version,
                content = excluded.content,
                updated_at = excluded.updated_at
            """,
            (document.session_id, document.version, document.content, datetime.now().isoformat()),
        )

        removed = document.removed_ids
        if removed:
            await self.connection.executemany(
                "DELETE FROM tree_nodes WHERE session_id = ? AND id = ?",
                [(document.session_id, node_id) for node_id in removed],
            )

        rows = []
        for node_id in document.touched_ids:
            record = document.nodes[node_id]
            parent = document.nodes.get(record.parent_id) if record.parent_id else None
            position = parent.children.index(node_id) if parent else 0
            rows.append(
                (
                    document.session_id,
                    record.id,
                    record.parent_id,
                    position,
                    record.text,
                    record.level,
                    record.type.value,
                )
            )

        if rows:
            await self.connection.executemany(
                """
                INSERT OR REPLACE INTO tree_nodes (
                    session_id, id, parent_id, position, text, level, type
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
