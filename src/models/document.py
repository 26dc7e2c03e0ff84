"""
Shared document model.

A document holds one session's text content and its mind map. The mind map
is kept as an arena of node records indexed by id, each record pointing at
its parent and listing its children in order. Mutations are dictionary
lookups; the nested `MindMapNode` view is only built when a snapshot is read.

The document remembers which records a transaction touched or removed, so a
store can write back just those rows.
"""

from pydantic import BaseModel, Field, PrivateAttr

from src.utils.id_generator import ROOT_ID

from .mindmap import MindMapNode, NodeType, check_tree


class NodeRecord(BaseModel):
    """One node of the arena."""

    id: str
    text: str = ""
    level: int = Field(..., ge=0)
    type: NodeType
    parent_id: str | None = None
    children: list[str] = Field(default_factory=list)


class MindMapDocument(BaseModel):
    """Mutable state of one collaborative session."""

    session_id: str
    version: int = 0
    content: str = ""
    nodes: dict[str, NodeRecord] = Field(default_factory=dict)

    _touched: set[str] = PrivateAttr(default_factory=set)
    _removed: set[str] = PrivateAttr(default_factory=set)
    _content_changed: bool = PrivateAttr(default=False)

    # ═══════════════════════════════════════════════════════════
    # CHANGE TRACKING
    # ═══════════════════════════════════════════════════════════

    @property
    def changed(self) -> bool:
        """Whether anything was modified since the last `mark_clean()`."""
        return bool(self._touched or self._removed or self._content_changed)

    @property
    def content_changed(self) -> bool:
        return self._content_changed

    @property
    def touched_ids(self) -> set[str]:
        """Ids of records created or modified (and still present)."""
        return set(self._touched)

    @property
    def removed_ids(self) -> set[str]:
        """Ids of records that no longer exist."""
        return set(self._removed)

    def mark_clean(self) -> None:
        """Forget pending changes (after a commit or when a transaction starts)."""
        self._touched = set()
        self._removed = set()
        self._content_changed = False

    # ═══════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════

    @property
    def has_root(self) -> bool:
        return ROOT_ID in self.nodes

    def get(self, node_id: str) -> NodeRecord | None:
        return self.nodes.get(node_id)

    def to_tree(self) -> MindMapNode | None:
        """Materialize the nested tree view, or None if there is no root."""
        if not self.has_root:
            return None
        return self._build(self.nodes[ROOT_ID])

    def _build(self, record: NodeRecord) -> MindMapNode:
        return MindMapNode(
            id=record.id,
            text=record.text,
            level=record.level,
            type=record.type,
            children=[
                self._build(self.nodes[child_id])
                for child_id in record.children
                if child_id in self.nodes
            ],
        )

    # ═══════════════════════════════════════════════════════════
    # WRITES
    # ═══════════════════════════════════════════════════════════

    def set_content(self, content: str) -> bool:
        """Replace the text content. Returns False if it is unchanged."""
        if content == self.content:
            return False
        self.content = content
        self._content_changed = True
        return True

    def replace_root(self, root: MindMapNode) -> None:
        """
        Replace the whole tree.

        Raises:
            ValidationError: If `root` breaks the tree invariant
        """
        check_tree(root)

        previous = set(self.nodes)
        self.nodes = {}
        stack: list[tuple[MindMapNode, str | None]] = [(root, None)]
        while stack:
            node, parent_id = stack.pop()
            self.nodes[node.id] = NodeRecord(
                id=node.id,
                text=node.text,
                level=node.level,
                type=node.type,
                parent_id=parent_id,
                children=[child.id for child in node.children],
            )
            self._touched.add(node.id)
            stack.extend((child, node.id) for child in node.children)

        self._removed |= previous - set(self.nodes)
        self._removed -= set(self.nodes)

    def add_child(self, parent_id: str, node_id: str, text: str) -> NodeRecord | None:
        """
        Append a new leaf under `parent_id`.

        The leaf is one level below its parent and typed for that level.
        Returns the new record, or None if the parent does not exist.
        """
        parent = self.nodes.get(parent_id)
        if parent is None:
            return None

        level = parent.level + 1
        record = NodeRecord(
            id=node_id,
            text=text,
            level=level,
            type=NodeType.for_level(level),
            parent_id=parent_id,
        )
        self.nodes[node_id] = record
        parent.children.append(node_id)
        self._touched.update((node_id, parent_id))
        self._removed.discard(node_id)
        return record

    def rename(self, node_id: str, text: str) -> bool:
        """Set the text of one node. Returns False if absent or unchanged."""
        record = self.nodes.get(node_id)
        if record is None or record.text == text:
            return False
        record.text = text
        self._touched.add(node_id)
        return True


class DocumentSnapshot(BaseModel):
    """Committed, read-only view of a document."""

    session_id: str
    version: int
    content: str
    root: MindMapNode | None = None

    @classmethod
    def of(cls, document: MindMapDocument) -> "DocumentSnapshot":
        return cls(
            session_id=document.session_id,
            version=document.version,
            content=document.content,
            root=document.to_tree(),
        )
