"""
Data models for MindLoom.

Core models:
- MindMapNode, NodeType: The nested mind map tree and node roles
- ContentAnalysis: Structure extracted from free text
- NodeRecord, MindMapDocument: Arena form of a shared document
- DocumentSnapshot: Committed read-only view of a document
- PositionedGraph, GraphNode, GraphEdge, Position, EdgeStyle: Layout output
- Participant, Cursor: Presence metadata
"""

from src.models.analysis import ContentAnalysis
from src.models.document import DocumentSnapshot, MindMapDocument, NodeRecord
from src.models.graph import EdgeStyle, GraphEdge, GraphNode, Position, PositionedGraph
from src.models.mindmap import MindMapNode, NodeType, check_tree
from src.models.presence import Cursor, Participant

__all__ = [
    # Tree models
    "MindMapNode",
    "NodeType",
    "check_tree",
    # Analysis
    "ContentAnalysis",
    # Document models
    "NodeRecord",
    "MindMapDocument",
    "DocumentSnapshot",
    # Layout models
    "PositionedGraph",
    "GraphNode",
    "GraphEdge",
    "Position",
    "EdgeStyle",
    # Presence
    "Participant",
    "Cursor",
]
