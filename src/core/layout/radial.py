"""
Radial layout engine.

Places the root at a fixed anchor, subtopics evenly on a circle around it,
and every deeper node on a smaller circle around its own parent. The layout
is a pure function of the tree.
"""

import math
from collections import defaultdict

from src.config import LayoutConfig
from src.models.graph import EdgeStyle, GraphEdge, GraphNode, Position, PositionedGraph
from src.models.mindmap import MindMapNode
from src.utils.id_generator import ROOT_ID
from src.utils.logger import get_logger

logger = get_logger(__name__)


class RadialLayoutEngine:
    """Converts a mind map tree into a positioned node/edge graph."""

    def __init__(self, config: LayoutConfig | None = None):
        self.config = config or LayoutConfig()

    def layout(self, tree: MindMapNode | None) -> PositionedGraph:
        """
        Lay out a tree.

        Nodes are placed by their declared level. A node of level 2 or more
        whose parent has no position yet is left out; with a valid tree this
        cannot happen.

        Args:
            tree: Root of the tree, or None

        Returns:
            PositionedGraph (empty if there is no root)
        """
        graph = PositionedGraph()
        if tree is None or tree.id != ROOT_ID:
            return graph

        entries = list(self._walk(tree, None))
        anchor = Position(x=self.config.anchor_x, y=self.config.anchor_y)
        self._place(graph, tree, anchor)

        # Subtopics: evenly spaced around the root
        subtopics = [node for node, _ in entries if node.level == 1]
        for index, node in enumerate(subtopics):
            position = self._on_circle(anchor, self.config.primary_radius, index, len(subtopics))
            self._place(graph, node, position)
            self._connect(graph, tree.id, node.id, EdgeStyle.PRIMARY)

        # Deeper nodes: evenly spaced around their own parent
        deeper = [(node, parent_id) for node, parent_id in entries if node.level >= 2]
        sibling_counts: dict[str, int] = defaultdict(int)
        for _, parent_id in deeper:
            sibling_counts[parent_id] += 1

        sibling_index: dict[str, int] = defaultdict(int)
        for node, parent_id in deeper:
            index = sibling_index[parent_id]
            sibling_index[parent_id] += 1

            parent = graph.nodes.get(parent_id)
            if parent is None:
                logger.warning(
                    f"Skipping node {node.id}: parent {parent_id} has no position",
                    extra={"node_id": node.id, "parent_id": parent_id, "level": node.level},
                )
                continue

            position = self._on_circle(
                parent.position,
                self.config.secondary_radius,
                index,
                sibling_counts[parent_id],
            )
            self._place(graph, node, position)
            self._connect(graph, parent_id, node.id, EdgeStyle.SECONDARY)

        return graph

    def _walk(self, node: MindMapNode, parent_id: str | None):
        """Yield (node, parent id) pairs in pre-order."""
        yield node, parent_id
        for child in node.children:
            yield from self._walk(child, node.id)

    @staticmethod
    def _on_circle(center: Position, radius: float, index: int, count: int) -> Position:
        angle = (index / count) * 2 * math.pi
        return Position(
            x=center.x + radius * math.cos(angle),
            y=center.y + radius * math.sin(angle),
        )

    @staticmethod
    def _place(graph: PositionedGraph, node: MindMapNode, position: Position) -> None:
        graph.nodes[node.id] = GraphNode(
            id=node.id,
            position=position,
            label=node.text,
            level=node.level,
            type=node.type,
        )

    @staticmethod
    def _connect(graph: PositionedGraph, source: str, target: str, style: EdgeStyle) -> None:
        graph.edges.append(
            GraphEdge(id=f"edge-{source}-{target}", source=source, target=target, style=style)
        )


def layout_tree(tree: MindMapNode | None, config: LayoutConfig | None = None) -> PositionedGraph:
    """Lay out a tree with the given (or default) geometry."""
    return RadialLayoutEngine(config).layout(tree)
