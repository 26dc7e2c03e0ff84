"""
Mind map tree model.

The tree is the observable shape of a shared document: one `main` root,
`subtopic` nodes below it and `detail` nodes at any deeper level.
"""

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from src.utils.exceptions import ValidationError
from src.utils.id_generator import ROOT_ID


class NodeType(str, Enum):
    """Role of a node in the mind map, fixed by its depth."""

    MAIN = "main"  # level 0
    SUBTOPIC = "subtopic"  # level 1
    DETAIL = "detail"  # level 2 and deeper

    @classmethod
    def for_level(cls, level: int) -> "NodeType":
        """Return the node type a node at `level` must have."""
        if level == 0:
            return cls.MAIN
        if level == 1:
            return cls.SUBTOPIC
        return cls.DETAIL


class MindMapNode(BaseModel):
    """
    A node of the mind map together with its ordered children.

    Children are owned by their parent; their order decides where the layout
    engine places them and carries no other meaning.
    """

    id: str = Field(..., description="Unique id within one tree")
    text: str = Field(default="", description="Display label")
    level: int = Field(..., ge=0, description="Depth below the root")
    type: NodeType = Field(..., description="Role matching the level")
    children: list["MindMapNode"] = Field(default_factory=list)

    @model_validator(mode="after")
    def _type_matches_level(self) -> "MindMapNode":
        expected = NodeType.for_level(self.level)
        if self.type != expected:
            raise ValueError(
                f"node {self.id!r} at level {self.level} must be {expected.value!r}, "
                f"got {self.type.value!r}"
            )
        return self

    def iter_nodes(self) -> Iterator["MindMapNode"]:
        """Yield this node and all descendants depth-first (pre-order)."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def find(self, node_id: str) -> "MindMapNode | None":
        """Depth-first search for a node by id."""
        for node in self.iter_nodes():
            if node.id == node_id:
                return node
        return None

    def count(self) -> int:
        """Number of nodes in this subtree."""
        return sum(1 for _ in self.iter_nodes())


MindMapNode.model_rebuild()


def check_tree(root: MindMapNode) -> None:
    """
    Verify the structural invariant of a complete tree.

    Args:
        root: Candidate root node

    Raises:
        ValidationError: If the root is not `root`/level 0, a child's level is
            not its parent's level + 1, or an id repeats
    """
    if root.id != ROOT_ID or root.level != 0:
        raise ValidationError(
            "Tree root must have id 'root' and level 0",
            context={"root_id": root.id, "root_level": root.level},
        )

    seen: set[str] = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if node.id in seen:
            raise ValidationError(f"Duplicate node id: {node.id}", context={"node_id": node.id})
        seen.add(node.id)
        for child in node.children:
            if child.level != node.level + 1:
                raise ValidationError(
                    f"Node {child.id} has level {child.level} under level {node.level}",
                    context={"node_id": child.id, "parent_id": node.id},
                )
            stack.append(child)
