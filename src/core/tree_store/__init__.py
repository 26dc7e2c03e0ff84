"""
Shared tree store implementations for MindLoom.

Provides abstract base and concrete implementations for document storage.

Available backends:
- InMemoryTreeStore: Single-process, in-memory documents
- SQLiteTreeStore: Durable local storage with aiosqlite
"""

from src.core.tree_store.base import SnapshotCallback, TreeStore
from src.core.tree_store.factory import create_tree_store
from src.core.tree_store.memory_store import InMemoryTreeStore
from src.core.tree_store.sqlite_store import SQLiteTreeStore

__all__ = [
    "TreeStore",
    "SnapshotCallback",
    "InMemoryTreeStore",
    "SQLiteTreeStore",
    "create_tree_store",
]
