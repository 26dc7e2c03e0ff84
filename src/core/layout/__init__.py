"""Layout engines turning mind map trees into positioned graphs."""

from src.core.layout.radial import RadialLayoutEngine, layout_tree

__all__ = [
    "RadialLayoutEngine",
    "layout_tree",
]
