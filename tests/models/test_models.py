"""
Tests for data models.

Tests cover:
1. NodeType / level consistency
2. Tree invariant checks
3. Arena document reads, writes and change tracking
4. Snapshots, layout and presence models
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.models import (
    Cursor,
    DocumentSnapshot,
    MindMapDocument,
    MindMapNode,
    NodeType,
    Participant,
    PositionedGraph,
    check_tree,
)
from src.utils.exceptions import ValidationError


def make_node(node_id: str, text: str, level: int, children=None) -> MindMapNode:
    return MindMapNode(
        id=node_id,
        text=text,
        level=level,
        type=NodeType.for_level(level),
        children=children or [],
    )


@pytest.fixture
def tree():
    """Three-level tree: root -> two subtopics -> one detail."""
    return make_node(
        "root",
        "Project",
        0,
        [
            make_node("subtopic-0", "Goals", 1, [make_node("detail-0-0", "Ship it", 2)]),
            make_node("subtopic-1", "Risks", 1),
        ],
    )


@pytest.mark.unit
class TestMindMapNode:
    """Test the tree model."""

    def test_type_for_level(self):
        """Test the role assigned to each depth."""
        assert NodeType.for_level(0) == NodeType.MAIN
        assert NodeType.for_level(1) == NodeType.SUBTOPIC
        assert NodeType.for_level(2) == NodeType.DETAIL
        assert NodeType.for_level(5) == NodeType.DETAIL

    def test_type_mismatch_rejected(self):
        """Test a node typed for the wrong level is rejected."""
        with pytest.raises(PydanticValidationError):
            MindMapNode(id="x", text="x", level=1, type=NodeType.DETAIL)

    def test_negative_level_rejected(self):
        """Test levels start at zero."""
        with pytest.raises(PydanticValidationError):
            MindMapNode(id="x", text="x", level=-1, type=NodeType.MAIN)

    def test_navigation(self, tree):
        """Test iteration, lookup and counting."""
        assert [node.id for node in tree.iter_nodes()] == [
            "root",
            "subtopic-0",
            "detail-0-0",
            "subtopic-1",
        ]
        assert tree.find("detail-0-0").text == "Ship it"
        assert tree.find("missing") is None
        assert tree.count() == 4

    def test_serialization(self, tree):
        """Test the type serializes as its string value."""
        data = tree.model_dump(mode="json")

        assert data["type"] == "main"
        assert data["children"][0]["children"][0]["type"] == "detail"
        assert MindMapNode.model_validate(data) == tree


@pytest.mark.unit
class TestCheckTree:
    """Test the structural invariant."""

    def test_valid_tree(self, tree):
        """Test a valid tree passes."""
        check_tree(tree)

    def test_root_id_required(self):
        """Test the root must be called root."""
        with pytest.raises(ValidationError):
            check_tree(make_node("top", "Top", 0))

    def test_level_gap_rejected(self):
        """Test a child must sit exactly one level below its parent."""
        root = make_node("root", "Root", 0, [make_node("deep", "Deep", 2)])

        with pytest.raises(ValidationError) as exc_info:
            check_tree(root)
        assert exc_info.value.context["node_id"] == "deep"

    def test_duplicate_ids_rejected(self):
        """Test ids are unique within a tree."""
        root = make_node("root", "Root", 0, [make_node("a", "A", 1), make_node("a", "B", 1)])

        with pytest.raises(ValidationError):
            check_tree(root)


@pytest.mark.unit
class TestMindMapDocument:
    """Test the arena document."""

    def test_empty_document(self):
        """Test a new document has no root."""
        document = MindMapDocument(session_id="s1")

        assert not document.has_root
        assert document.to_tree() is None
        assert not document.changed

    def test_replace_root_round_trip(self, tree):
        """Test the materialized tree equals the installed one."""
        document = MindMapDocument(session_id="s1")
        document.replace_root(tree)

        assert document.to_tree() == tree
        assert document.get("detail-0-0").parent_id == "subtopic-0"
        assert document.get("root").children == ["subtopic-0", "subtopic-1"]
        assert document.touched_ids == {"root", "subtopic-0", "detail-0-0", "subtopic-1"}

    def test_replace_root_tracks_removed(self, tree):
        """Test nodes missing from the new tree are reported removed."""
        document = MindMapDocument(session_id="s1")
        document.replace_root(tree)
        document.mark_clean()

        document.replace_root(make_node("root", "New", 0, [make_node("subtopic-0", "Only", 1)]))

        assert document.removed_ids == {"detail-0-0", "subtopic-1"}
        assert document.touched_ids == {"root", "subtopic-0"}

    def test_replace_root_invalid(self):
        """Test an invalid tree is rejected without touching the document."""
        document = MindMapDocument(session_id="s1")

        with pytest.raises(ValidationError):
            document.replace_root(make_node("top", "Top", 0))
        assert not document.changed

    def test_add_child(self, tree):
        """Test a child is appended one level below its parent."""
        document = MindMapDocument(session_id="s1")
        document.replace_root(tree)
        document.mark_clean()

        record = document.add_child("subtopic-1", "node-1", "Late")

        assert record.level == 2
        assert record.type == NodeType.DETAIL
        assert document.get("subtopic-1").children == ["node-1"]
        assert document.touched_ids == {"node-1", "subtopic-1"}

    def test_add_child_missing_parent(self, tree):
        """Test a missing parent leaves the document unchanged."""
        document = MindMapDocument(session_id="s1")
        document.replace_root(tree)
        document.mark_clean()

        assert document.add_child("nope", "node-1", "Lost") is None
        assert not document.changed
        assert document.to_tree() == tree

    def test_rename(self, tree):
        """Test renaming touches only the renamed node."""
        document = MindMapDocument(session_id="s1")
        document.replace_root(tree)
        document.mark_clean()

        assert document.rename("subtopic-0", "Objectives")
        assert document.get("subtopic-0").text == "Objectives"
        assert document.touched_ids == {"subtopic-0"}

    def test_rename_unchanged_or_missing(self, tree):
        """Test renaming to the same text or a missing id changes nothing."""
        document = MindMapDocument(session_id="s1")
        document.replace_root(tree)
        document.mark_clean()

        assert not document.rename("subtopic-0", "Goals")
        assert not document.rename("missing", "Anything")
        assert not document.changed

    def test_set_content(self):
        """Test content changes are tracked."""
        document = MindMapDocument(session_id="s1")

        assert document.set_content("hello")
        assert document.content_changed
        document.mark_clean()
        assert not document.set_content("hello")
        assert not document.changed

    def test_snapshot_of(self, tree):
        """Test a snapshot carries version, content and tree."""
        document = MindMapDocument(session_id="s1", version=3, content="text")
        document.replace_root(tree)

        snapshot = DocumentSnapshot.of(document)

        assert snapshot.session_id == "s1"
        assert snapshot.version == 3
        assert snapshot.content == "text"
        assert snapshot.root == tree


@pytest.mark.unit
class TestOtherModels:
    """Test layout and presence models."""

    def test_empty_graph(self):
        """Test a new graph is empty."""
        graph = PositionedGraph()

        assert graph.is_empty
        assert graph.edges == []

    def test_participant_defaults(self):
        """Test participant display defaults."""
        participant = Participant(id="p1")

        assert participant.name == "Anonymous"
        assert participant.color == "#f783ac"
        assert participant.cursor is None

    def test_participant_cursor(self):
        """Test a participant with a cursor."""
        participant = Participant(id="p1", name="Ada", cursor=Cursor(x=1.5, y=2))

        assert participant.cursor.x == 1.5
        assert participant.cursor.y == 2.0
