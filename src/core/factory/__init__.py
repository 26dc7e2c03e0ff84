"""
Factory modules for creating MindLoom components.

Provides the LLM provider factory; tree stores are created with
`src.core.tree_store.create_tree_store`.
"""

from src.core.factory.llm_factory import LLMFactory

__all__ = [
    "LLMFactory",
]
