"""
Tests for mind map synthesis.

Tests cover:
1. Tree shape and positional ids
2. Placeholder subtopic for unstructured text
3. Idempotence and the tree invariant
"""

import pytest

from src.models import NodeType, check_tree
from src.services.synthesizer import MindMapSynthesizer, default_tree, fallback_tree


@pytest.fixture
def synthesizer():
    return MindMapSynthesizer()


@pytest.mark.unit
class TestSynthesize:
    """Test tree synthesis from text."""

    def test_project_plan(self, synthesizer):
        """Test headings become the level-1 children of the titled root."""
        root = synthesizer.synthesize("Project Plan\n\n## Goals\nShip v1\n\n## Risks\nDelay")

        assert root.id == "root"
        assert root.text == "Project Plan"
        assert root.type == NodeType.MAIN
        assert [child.text for child in root.children] == ["Goals", "Risks"]
        assert [child.id for child in root.children] == ["subtopic-0", "subtopic-1"]

    def test_detail_ids(self, synthesizer):
        """Test details get ids from their subtopic and own position."""
        text = "Plan\n## Goals\nShip the first version soon\nHire two more engineers"
        root = synthesizer.synthesize(text)

        goals = root.children[0]
        assert [child.id for child in goals.children] == ["detail-0-0", "detail-0-1"]
        assert all(child.type == NodeType.DETAIL for child in goals.children)
        assert all(child.level == 2 for child in goals.children)

    def test_repeated_subtopics(self, synthesizer):
        """Test a repeated bullet becomes its own subtopic node with a positional id."""
        root = synthesizer.synthesize("List\n- Alpha\n- Beta\n- Alpha")

        assert len(root.children) == 3
        assert [child.text for child in root.children] == ["Alpha", "Beta", "Alpha"]
        assert [child.id for child in root.children] == ["subtopic-0", "subtopic-1", "subtopic-2"]
        assert [child.id for child in root.children[2].children] == ["detail-2-0"]
        check_tree(root)

    def test_empty_content(self, synthesizer):
        """Test empty text gives one placeholder subtopic with an empty preview."""
        root = synthesizer.synthesize("")

        assert root.text == "Untitled Content"
        assert len(root.children) == 1
        placeholder = root.children[0]
        assert placeholder.text == "Content Overview"
        assert placeholder.type == NodeType.SUBTOPIC
        assert [child.text for child in placeholder.children] == [""]

    def test_short_preview(self, synthesizer):
        """Test a short unstructured text is previewed unchanged."""
        root = synthesizer.synthesize("short")

        assert root.children[0].children[0].text == "short"

    def test_long_preview_truncated(self, synthesizer):
        """Test the preview keeps the first 100 characters."""
        content = "a" * 150
        root = synthesizer.synthesize(content)

        assert root.children[0].children[0].text == "a" * 100 + "..."

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "short",
            "Project Plan\n\n## Goals\nShip v1\n\n## Risks\nDelay",
            "List\n- Alpha item here\n- Alpha item here\n- Beta item here",
            "Intro\n\nA paragraph of reasonable length. Another one.\n\nAnd a second paragraph.",
        ],
    )
    def test_invariant_and_idempotence(self, synthesizer, content):
        """Test every synthesized tree is valid and stable."""
        first = synthesizer.synthesize(content)

        check_tree(first)
        assert first.children
        assert synthesizer.synthesize(content) == first


@pytest.mark.unit
class TestBuiltInTrees:
    """Test the starter and fallback trees."""

    def test_default_tree(self):
        """Test the starter tree."""
        root = default_tree()

        check_tree(root)
        assert root.text == "Central Topic"
        assert [(c.id, c.text) for c in root.children] == [
            ("child1", "Branch 1"),
            ("child2", "Branch 2"),
        ]

    def test_fallback_tree(self):
        """Test the fallback tree."""
        root = fallback_tree()

        check_tree(root)
        assert root.text == "Content Analysis"
        assert [c.text for c in root.children] == ["Key Points", "Details"]

    def test_fresh_instances(self):
        """Test callers get independent copies."""
        root = default_tree()
        root.children.clear()

        assert len(default_tree().children) == 2
