"""
ID generation utilities for MindLoom.

Synthesized trees use positional ids so that identical text always yields
identical trees:
- Root: root
- Subtopics: subtopic-N
- Details: detail-N-M

Nodes added by hand get time-based ids:
- node-<epoch ms>-<6 hex>
"""

import time
from uuid import uuid4

ROOT_ID = "root"


def subtopic_id(index: int) -> str:
    """
    Build the id of the subtopic at a position under the root.

    Args:
        index: Zero-based subtopic index

    Returns:
        ID in format "subtopic-N"
    """
    return f"subtopic-{index}"


def detail_id(subtopic_index: int, detail_index: int) -> str:
    """
    Build the id of a detail under a subtopic.

    Args:
        subtopic_index: Zero-based index of the parent subtopic
        detail_index: Zero-based index of the detail

    Returns:
        ID in format "detail-N-M"
    """
    return f"detail-{subtopic_index}-{detail_index}"


def generate_node_id() -> str:
    """
    Generate a fresh id for a node added by a user.

    The millisecond timestamp keeps ids roughly ordered by creation; the hex
    suffix disambiguates nodes created in the same millisecond.

    Returns:
        ID in format "node-<ms>-<xxxxxx>"
    """
    return f"node-{int(time.time() * 1000)}-{uuid4().hex[:6]}"
