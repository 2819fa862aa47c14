"""
Reference bounds provider computed from the split tree itself.

Hosts with a real widget toolkit supply their own BoundsProvider; this one
lays the tree out over a surface rectangle using the container weights.
"""
from typing import Dict, List, Optional, Tuple

from .geometry import Rect, SplitOrientation
from .split_tree import Node, Panel, SplitContainer, SplitTree


class TreeGeometry:
    """
    BoundsProvider over a SplitTree.

    Preferred extents follow split pane rules: along a container's own axis
    the children's extents add up, across it the largest child wins.
    """
    def __init__(self, tree: SplitTree, surface: Rect):
        self.tree = tree
        self.surface = surface

    def preferred_extent(self, node: Node, orientation: SplitOrientation) -> float:
        if isinstance(node, Panel):
            return node.pref_width if orientation is SplitOrientation.HORIZONTAL else node.pref_height

        extents = [self.preferred_extent(child, orientation) for child in node.children]
        if not extents:
            return 0.0
        if node.orientation is orientation:
            return sum(extents)
        return max(extents)

    def screen_bounds(self, node: Node) -> Optional[Rect]:
        return self.layout().get(node)

    def layout(self) -> Dict[Node, Rect]:
        """Rectangle of every node in the tree, keyed by node."""
        bounds: Dict[Node, Rect] = {}
        if self.tree.root is None:
            return bounds

        stack: List[Tuple[Node, Rect]] = [(self.tree.root, self.surface)]
        while stack:
            node, rect = stack.pop()
            bounds[node] = rect
            if not isinstance(node, SplitContainer):
                continue

            offset = 0.0
            for child, weight in zip(node.children, node.weights):
                if node.orientation is SplitOrientation.HORIZONTAL:
                    child_rect = Rect(rect.x + offset, rect.y, rect.width * weight, rect.height)
                    offset += child_rect.width
                else:
                    child_rect = Rect(rect.x, rect.y + offset, rect.width, rect.height * weight)
                    offset += child_rect.height
                stack.append((child, child_rect))
        return bounds
