"""
Tree Mutation Engine - the only writer of a session's mind map.

Every operation is exactly one store transaction, so concurrent editors never
observe (or overwrite) half of another editor's change. Conflict resolution
between transactions belongs to the store: whole-tree replacements are
last-writer-wins.

Operations that target a node id which does not exist are silent no-ops.
"""

from src.core.tree_store.base import TreeStore
from src.models.document import DocumentSnapshot
from src.models.mindmap import MindMapNode, check_tree
from src.services.synthesizer import MindMapSynthesizer, default_tree, fallback_tree
from src.utils.id_generator import generate_node_id
from src.utils.logger import get_logger

logger = get_logger(__name__)

NEW_NODE_TEXT = "New Node"


class TreeMutationEngine:
    """Applies add, rename and replace operations to one session's shared tree."""

    def __init__(
        self,
        store: TreeStore,
        session_id: str,
        synthesizer: MindMapSynthesizer | None = None,
    ):
        """
        Initialize the mutation engine.

        Args:
            store: Shared tree store
            session_id: Session whose document is mutated
            synthesizer: Synthesizer used by regenerate_from_content
        """
        self.store = store
        self.session_id = session_id
        self.synthesizer = synthesizer or MindMapSynthesizer()

    async def initialize_if_absent(self, seed: MindMapNode | None = None) -> bool:
        """
        Install a starter tree if the document has no root yet.

        Args:
            seed: Tree to install instead of the default two-branch tree

        Returns:
            True if a tree was installed, False if a root already existed
        """
        async with self.store.transaction(self.session_id) as document:
            if document.has_root:
                return False
            document.replace_root(seed or default_tree())

        logger.info(
            f"Initialized mind map for session {self.session_id}",
            extra={"session_id": self.session_id, "seeded": seed is not None},
        )
        return True

    async def replace_root(self, new_root: MindMapNode) -> None:
        """
        Overwrite the whole tree. Concurrent replacements do not merge.

        Raises:
            ValidationError: If `new_root` breaks the tree invariant
        """
        async with self.store.transaction(self.session_id) as document:
            document.replace_root(new_root)

    async def regenerate_from_content(self, content: str) -> bool:
        """
        Synthesize a tree from text and install it.

        If synthesis fails for any reason the fallback tree is installed and
        the failure is only logged.

        Args:
            content: Source text

        Returns:
            False if the text is blank (nothing happens), True otherwise
        """
        if not content or not content.strip():
            return False

        root = self.build_tree(content)
        async with self.store.transaction(self.session_id) as document:
            document.replace_root(root)

        return True

    def build_tree(self, content: str) -> MindMapNode:
        """
        Synthesize a valid tree for `content`, never raising.

        Any synthesis failure (including a tree that breaks the invariant) is
        logged and replaced by the fallback tree.
        """
        try:
            root = self.synthesizer.synthesize(content)
            check_tree(root)
            return root
        except Exception as e:
            logger.error(
                f"Mind map synthesis failed, using fallback tree: {e}",
                extra={
                    "session_id": self.session_id,
                    "content_length": len(content),
                    "error_type": type(e).__name__,
                },
            )
            return fallback_tree()

    async def add_child(self, parent_id: str, text: str) -> str | None:
        """
        Append a new leaf under `parent_id`.

        Args:
            parent_id: Id of the parent node
            text: Label of the new node ("New Node" if empty)

        Returns:
            Id of the new node, or None if the parent does not exist
        """
        node_id = generate_node_id()

        async with self.store.transaction(self.session_id) as document:
            record = document.add_child(parent_id, node_id, text or NEW_NODE_TEXT)

        if record is None:
            logger.debug(
                f"add_child ignored, parent {parent_id} not found",
                extra={"session_id": self.session_id, "parent_id": parent_id},
            )
            return None
        return node_id

    async def rename_node(self, node_id: str, new_text: str) -> bool:
        """
        Change the text of one node, leaving everything else as is.

        Returns:
            True if a node's text changed
        """
        async with self.store.transaction(self.session_id) as document:
            renamed = document.rename(node_id, new_text)

        if not renamed:
            logger.debug(
                f"rename_node ignored for {node_id}",
                extra={"session_id": self.session_id, "node_id": node_id},
            )
        return renamed

    async def set_content(self, content: str) -> bool:
        """
        Replace the session's shared text.

        Returns:
            True if the text changed
        """
        async with self.store.transaction(self.session_id) as document:
            return document.set_content(content)

    async def snapshot(self) -> DocumentSnapshot:
        """Latest committed state of the session."""
        return await self.store.snapshot(self.session_id)
