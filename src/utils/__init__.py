"""Utility modules for MindLoom."""

from src.utils.exceptions import (
    ConfigurationError,
    LLMAuthError,
    LLMError,
    MindLoomError,
    StoreError,
    TreeStoreError,
    ValidationError,
)
from src.utils.hashing import content_hash
from src.utils.id_generator import ROOT_ID, detail_id, generate_node_id, subtopic_id
from src.utils.logger import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # ID Generators
    "ROOT_ID",
    "subtopic_id",
    "detail_id",
    "generate_node_id",
    # Hashing
    "content_hash",
    # Exceptions
    "MindLoomError",
    "StoreError",
    "TreeStoreError",
    "ValidationError",
    "ConfigurationError",
    "LLMError",
    "LLMAuthError",
]
