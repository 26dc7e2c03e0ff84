"""Fixtures for tree store tests.

Every store test runs against both backends; the SQLite store writes to a
fresh database file under pytest's tmp_path.
"""

from collections.abc import AsyncGenerator

import pytest

from src.core.tree_store import InMemoryTreeStore, SQLiteTreeStore, TreeStore
from src.models import MindMapNode, NodeType


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "trees" / "test.db")


@pytest.fixture(params=["memory", "sqlite"])
async def store(request, db_path) -> AsyncGenerator[TreeStore, None]:
    """Initialized tree store of each backend."""
    if request.param == "memory":
        tree_store = InMemoryTreeStore()
    else:
        tree_store = SQLiteTreeStore(db_path=db_path)
    await tree_store.initialize()
    yield tree_store
    await tree_store.close()


@pytest.fixture
def sample_tree() -> MindMapNode:
    """Root with two subtopics, the first holding two details."""
    return MindMapNode(
        id="root",
        text="Project",
        level=0,
        type=NodeType.MAIN,
        children=[
            MindMapNode(
                id="subtopic-0",
                text="Goals",
                level=1,
                type=NodeType.SUBTOPIC,
                children=[
                    MindMapNode(id="detail-0-0", text="Ship", level=2, type=NodeType.DETAIL),
                    MindMapNode(id="detail-0-1", text="Hire", level=2, type=NodeType.DETAIL),
                ],
            ),
            MindMapNode(id="subtopic-1", text="Risks", level=1, type=NodeType.SUBTOPIC),
        ],
    )
