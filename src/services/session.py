"""
Mind map session - wires store, mutation engine, layout and change trigger.

A session follows one shared document: it lays out every committed snapshot
it is notified about, feeds text changes to the change trigger, and maps the
two editing gestures (rename a node, add a child) onto the mutation engine.
"""

import asyncio

from src.config import Config
from src.core.layout import RadialLayoutEngine
from src.core.tree_store.base import TreeStore
from src.models.document import DocumentSnapshot
from src.models.graph import PositionedGraph
from src.models.mindmap import MindMapNode
from src.models.presence import Cursor, Participant
from src.services.change_trigger import ChangeTriggerPolicy
from src.services.mutation_engine import TreeMutationEngine
from src.services.synthesizer import MindMapSynthesizer
from src.utils.logger import get_logger


class MindMapSession:
    """One client's view of a collaborative mind map session."""

    def __init__(
        self,
        session_id: str,
        store: TreeStore,
        config: Config | None = None,
        synthesizer: MindMapSynthesizer | None = None,
    ):
        """
        Initialize session.

        Args:
            session_id: Session identifier
            store: Shared tree store
            config: Configuration (layout geometry, trigger timing)
            synthesizer: Optional synthesizer override
        """
        config = config or Config()
        self.session_id = session_id
        self.store = store
        self.engine = TreeMutationEngine(store, session_id, synthesizer)
        self.layout_engine = RadialLayoutEngine(config.layout)
        self.trigger = ChangeTriggerPolicy(
            self.engine.regenerate_from_content,
            debounce_seconds=config.trigger.debounce_seconds,
            min_content_length=config.trigger.min_content_length,
            session_id=session_id,
        )

        self.snapshot: DocumentSnapshot | None = None
        self.graph = PositionedGraph()
        self.logger = get_logger(__name__, session_id=session_id)
        self._unsubscribe = None

    @property
    def root(self) -> MindMapNode | None:
        return self.snapshot.root if self.snapshot else None

    async def open(self, seed: MindMapNode | None = None, content: str | None = None) -> None:
        """
        Start following the shared document.

        If the document has no tree yet it gets `seed`, else a tree
        synthesized from the text (the stored text, or `content`), else the
        default tree. An existing tree is kept and treated as in sync with the
        current text.

        Args:
            seed: Optional ready-made tree (e.g. produced by a text generator)
            content: Optional initial text used when the document has none
        """
        self._unsubscribe = self.store.subscribe(self.session_id, self._on_change)

        current = await self.store.snapshot(self.session_id)
        if content and not current.content.strip():
            await self.engine.set_content(content)
            current = await self.store.snapshot(self.session_id)

        text = current.content
        if current.root is None:
            if seed is None and text.strip():
                seed = self.engine.build_tree(text)
            await self.engine.initialize_if_absent(seed)

        self.trigger.mark_synced(text)
        self._apply(await self.store.snapshot(self.session_id))

        self.logger.info(
            f"Opened session {self.session_id} at version {self.snapshot.version}"
        )

    async def close(self) -> None:
        """Stop following the document and cancel pending regeneration."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        await self.trigger.close()
        self.logger.debug(f"Closed session {self.session_id}")

    # ═══════════════════════════════════════════════════════════
    # EDITING
    # ═══════════════════════════════════════════════════════════

    async def update_content(self, content: str) -> bool:
        """Write new text; regeneration follows through the change trigger."""
        return await self.engine.set_content(content)

    async def rename_node(self, node_id: str, text: str) -> bool:
        return await self.engine.rename_node(node_id, text)

    async def add_child(self, parent_id: str, text: str) -> str | None:
        return await self.engine.add_child(parent_id, text)

    async def regenerate(self) -> bool:
        """Manually rebuild the tree from the current text ("sync from text")."""
        content = (await self.store.snapshot(self.session_id)).content
        self.trigger.cancel()
        regenerated = await self.engine.regenerate_from_content(content)
        if regenerated:
            self.trigger.mark_synced(content)
        return regenerated

    # ═══════════════════════════════════════════════════════════
    # PRESENCE
    # ═══════════════════════════════════════════════════════════

    async def join(self, participant: Participant) -> None:
        await self.store.join(self.session_id, participant)

    async def leave(self, participant_id: str) -> None:
        await self.store.leave(self.session_id, participant_id)

    async def move_cursor(self, participant_id: str, cursor: Cursor | None) -> None:
        await self.store.update_cursor(self.session_id, participant_id, cursor)

    async def participants(self) -> list[Participant]:
        return await self.store.participants(self.session_id)

    # ═══════════════════════════════════════════════════════════
    # CHANGE HANDLING
    # ═══════════════════════════════════════════════════════════

    async def _on_change(self, snapshot: DocumentSnapshot) -> None:
        self._apply(snapshot)

    def _apply(self, snapshot: DocumentSnapshot) -> None:
        """Adopt a snapshot unless a newer one was already seen."""
        previous = self.snapshot
        if previous is not None and snapshot.version <= previous.version:
            self.logger.debug(
                f"Ignoring snapshot v{snapshot.version}, already at v{previous.version}"
            )
            return

        self.snapshot = snapshot
        self.graph = self.layout_engine.layout(snapshot.root)

        if previous is not None and snapshot.content != previous.content:
            self.trigger.observe(snapshot.content)


class SessionManager:
    """Keeps one open MindMapSession per session id."""

    def __init__(self, store: TreeStore, config: Config | None = None):
        self.store = store
        self.config = config or Config()
        self._sessions: dict[str, MindMapSession] = {}
        self._lock = asyncio.Lock()

    async def get(self, session_id: str) -> MindMapSession:
        """Return the open session, opening it on first use."""
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = MindMapSession(session_id, self.store, self.config)
                await session.open()
                self._sessions[session_id] = session
            return session

    async def close_session(self, session_id: str, destroy: bool = False) -> None:
        """
        Close a session.

        Args:
            session_id: Session identifier
            destroy: Also delete the shared document
        """
        async with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is not None:
            await session.close()
        if destroy:
            await self.store.delete_session(session_id)

    async def close(self) -> None:
        """Close every open session."""
        async with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            await session.close()
