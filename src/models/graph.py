"""Positioned graph models produced by the layout engine."""

from enum import Enum

from pydantic import BaseModel, Field

from .mindmap import NodeType


class EdgeStyle(str, Enum):
    """Visual style of an edge, derived from the child's level."""

    PRIMARY = "primary"  # root -> subtopic
    SECONDARY = "secondary"  # any deeper parent -> child


class Position(BaseModel):
    """2-D coordinate."""

    x: float
    y: float


class GraphNode(BaseModel):
    """A laid-out node with its display payload."""

    id: str
    position: Position
    label: str
    level: int
    type: NodeType


class GraphEdge(BaseModel):
    """Directed parent -> child edge."""

    id: str
    source: str
    target: str
    style: EdgeStyle


class PositionedGraph(BaseModel):
    """Complete layout of one tree; recomputed as a whole on every change."""

    nodes: dict[str, GraphNode] = Field(default_factory=dict)
    edges: list[GraphEdge] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.nodes
