"""Factory for creating tree stores."""

from src.config import StoreConfig
from src.core.tree_store.base import TreeStore
from src.core.tree_store.memory_store import InMemoryTreeStore
from src.core.tree_store.sqlite_store import SQLiteTreeStore


def create_tree_store(config: StoreConfig) -> TreeStore:
    """
    Factory function to create tree stores.

    Args:
        config: Store configuration ("memory" or "sqlite" backend)

    Returns:
        TreeStore instance

    Raises:
        ValueError: If backend is not supported
    """
    if config.backend == "memory":
        return InMemoryTreeStore()
    elif config.backend == "sqlite":
        return SQLiteTreeStore(db_path=config.db_path)
    else:
        raise ValueError(f"Unknown tree store backend: {config.backend}")
