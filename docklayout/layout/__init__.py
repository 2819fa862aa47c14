"""
Docking layout: split tree model, layout engine and dock pane.
"""
from .geometry import BoundsProvider, DockPosition, Rect, SplitOrientation
from .split_tree import Node, Panel, SplitContainer, SplitTree, SplitTreeError
from .tree_geometry import TreeGeometry
from .engine import DockLayoutEngine
from .dock_pane import DockPane


__all__ = [
    "BoundsProvider",
    "DockPosition",
    "Rect",
    "SplitOrientation",
    "Node",
    "Panel",
    "SplitContainer",
    "SplitTree",
    "SplitTreeError",
    "TreeGeometry",
    "DockLayoutEngine",
    "DockPane",
]
