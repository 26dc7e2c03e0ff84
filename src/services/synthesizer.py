"""
Mind map synthesis.

Builds the canonical tree for a piece of text from its ContentAnalysis.
Node ids depend only on position, so synthesizing the same text twice yields
the same tree.
"""

from src.core.analyzer import ContentAnalyzer
from src.models.mindmap import MindMapNode, NodeType
from src.utils.id_generator import ROOT_ID, detail_id, subtopic_id

PLACEHOLDER_SUBTOPIC = "Content Overview"
PREVIEW_LENGTH = 100


def _branch(node_id: str, text: str, level: int = 1) -> MindMapNode:
    return MindMapNode(id=node_id, text=text, level=level, type=NodeType.for_level(level))


def default_tree() -> MindMapNode:
    """Starter tree installed in a brand new session."""
    return MindMapNode(
        id=ROOT_ID,
        text="Central Topic",
        level=0,
        type=NodeType.MAIN,
        children=[_branch("child1", "Branch 1"), _branch("child2", "Branch 2")],
    )


def fallback_tree() -> MindMapNode:
    """Tree installed when synthesis fails unexpectedly."""
    return MindMapNode(
        id=ROOT_ID,
        text="Content Analysis",
        level=0,
        type=NodeType.MAIN,
        children=[_branch("child1", "Key Points"), _branch("child2", "Details")],
    )


class MindMapSynthesizer:
    """Turns text into a three-level mind map (main, subtopics, details)."""

    def __init__(self, analyzer: ContentAnalyzer | None = None):
        self.analyzer = analyzer or ContentAnalyzer()

    def synthesize(self, content: str) -> MindMapNode:
        """
        Build a mind map for `content`.

        The root always has at least one child: when no subtopic can be
        found, a "Content Overview" subtopic holds a preview of the text.

        Args:
            content: Arbitrary text

        Returns:
            Root node of the new tree
        """
        analysis = self.analyzer.analyze(content)

        root = MindMapNode(id=ROOT_ID, text=analysis.main_topic, level=0, type=NodeType.MAIN)
        for index, subtopic in enumerate(analysis.subtopics):
            node = _branch(subtopic_id(index), subtopic)
            node.children = [
                _branch(detail_id(index, detail_index), detail, level=2)
                for detail_index, detail in enumerate(analysis.details.get(subtopic, []))
            ]
            root.children.append(node)

        if not root.children:
            preview = (
                content[:PREVIEW_LENGTH] + "..." if len(content) > PREVIEW_LENGTH else content
            )
            overview = _branch("content-preview", PLACEHOLDER_SUBTOPIC)
            overview.children = [_branch("preview-detail", preview, level=2)]
            root.children.append(overview)

        return root
