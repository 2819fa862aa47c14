"""
Split tree model for dock layouts.

Panels are leaves, SplitContainers are branches holding an ordered list of
children plus one relative weight per child. The tree stores owned child
lists only; parents are found by searching down from the root.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union
from loguru import logger
import uuid

from .geometry import SplitOrientation


class SplitTreeError(ValueError):
    """Raised when a tree primitive is called with invalid arguments."""


@dataclass(eq=False)
class Panel:
    """
    Leaf content placed into the layout.

    Compared by identity. The engine only reads the preferred size;
    `payload` belongs to whoever created the panel.
    """
    title: str = ""
    pref_width: float = 100.0
    pref_height: float = 100.0
    payload: Any = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __repr__(self) -> str:
        return f"Panel({self.title or self.id[:8]!r})"


class SplitContainer:
    """
    Branch node laying its children out along one axis.

    Weights are parallel to children and sum to 1. Only SplitTree mutates
    them, so every container reachable from a tree keeps that invariant.
    """
    def __init__(self, orientation: SplitOrientation = SplitOrientation.HORIZONTAL, node_id: str = None):
        self.id = node_id or str(uuid.uuid4())
        self.orientation = orientation
        self._children: List["Node"] = []
        self._weights: List[float] = []

    @property
    def children(self) -> Tuple["Node", ...]:
        return tuple(self._children)

    @property
    def weights(self) -> Tuple[float, ...]:
        return tuple(self._weights)

    @property
    def dividers(self) -> Tuple[float, ...]:
        """Divider positions in (0, 1), one fewer than children, ascending."""
        positions = []
        total = 0.0
        for weight in self._weights[:-1]:
            total += weight
            positions.append(total)
        return tuple(positions)

    def index_of(self, node: "Node") -> int:
        """Index of `node` by identity, -1 when it is not a direct child."""
        for i, child in enumerate(self._children):
            if child is node:
                return i
        return -1

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        return f"SplitContainer({self.orientation.name}, {self._children!r})"


Node = Union[Panel, SplitContainer]


class SplitTree:
    """
    Owns the root of a dock layout and exposes the structural primitives
    the layout engine is built from.
    """
    def __init__(self, root: Optional[Node] = None):
        self._root: Optional[Node] = root

    @property
    def root(self) -> Optional[Node]:
        return self._root

    @property
    def is_empty(self) -> bool:
        return self._root is None

    # === Queries ===

    def children_of(self, node: Node) -> Tuple[Node, ...]:
        """Live children in layout order; panels have none."""
        if isinstance(node, SplitContainer):
            return node.children
        return ()

    def walk(self) -> Iterator[Node]:
        """Pre-order iteration over every node, in layout order."""
        if self._root is None:
            return
        stack: List[Node] = [self._root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(self.children_of(node)))

    def panels(self) -> List[Panel]:
        """All leaf panels in layout order."""
        return [node for node in self.walk() if isinstance(node, Panel)]

    def containers(self) -> List[SplitContainer]:
        return [node for node in self.walk() if isinstance(node, SplitContainer)]

    def contains(self, node: Node) -> bool:
        return any(candidate is node for candidate in self.walk())

    def find_parent(self, node: Node) -> Optional[Tuple[SplitContainer, int]]:
        """
        Locate the container directly holding `node`.

        Depth-first search from the root with an explicit stack.

        Returns:
            (container, index) or None when `node` is the root or absent.
        """
        if self._root is None:
            return None
        stack: List[Node] = [self._root]
        while stack:
            current = stack.pop()
            if not isinstance(current, SplitContainer):
                continue
            for i, child in enumerate(current._children):
                if child is node:
                    return current, i
                if isinstance(child, SplitContainer):
                    stack.append(child)
        return None

    def snapshot(self) -> Optional[Tuple]:
        """Nested, comparable description of the current structure and weights."""
        def describe(node: Node) -> Tuple:
            if isinstance(node, SplitContainer):
                return (
                    "container",
                    node.id,
                    node.orientation.value,
                    node.weights,
                    tuple(describe(child) for child in node._children),
                )
            return ("panel", node.id)

        if self._root is None:
            return None
        return describe(self._root)

    # === Mutations ===

    def replace_root(self, node: Optional[Node]):
        """Make `node` the whole layout (None empties the tree)."""
        self._root = node
        logger.debug(f"Root replaced with {node!r}")

    def replace_child(self, parent: SplitContainer, old: Node, new: Node) -> bool:
        """Swap `old` for `new` in place; the slot keeps its weight."""
        self._require_container(parent)
        idx = parent.index_of(old)
        if idx < 0:
            logger.warning(f"Cannot replace {old!r}: not a child of {parent.id}")
            return False
        parent._children[idx] = new
        return True

    def insert_child(self, container: SplitContainer, index: int, node: Node, weight: Optional[float] = None):
        """
        Insert `node` at `index` with relative size `weight`.

        Existing weights are scaled by (1 - weight) so the total stays 1.
        Without a weight the new child gets an equal share. The first child
        of an empty container always gets weight 1.
        """
        self._require_container(container)
        if node is container:
            raise SplitTreeError("A container cannot contain itself")
        count = len(container._children)
        if not 0 <= index <= count:
            raise SplitTreeError(f"Index {index} out of range for {count} children")

        if count == 0:
            container._children.append(node)
            container._weights.append(1.0)
            return

        if weight is None:
            weight = 1.0 / (count + 1)
        if not 0.0 < weight < 1.0:
            raise SplitTreeError(f"Weight must be between 0 and 1, got {weight}")

        scale = 1.0 - weight
        container._weights = [w * scale for w in container._weights]
        container._children.insert(index, node)
        container._weights.insert(index, weight)
        self._normalize(container)

    def remove_child(self, container: SplitContainer, node: Node) -> bool:
        """
        Remove `node` by identity; remaining weights are renormalized.

        Never collapses the container, even when it is left with one child.
        """
        self._require_container(container)
        idx = container.index_of(node)
        if idx < 0:
            return False
        del container._children[idx]
        del container._weights[idx]
        self._normalize(container)
        return True

    def set_orientation(self, container: SplitContainer, orientation: SplitOrientation):
        self._require_container(container)
        container.orientation = orientation

    def set_weights(self, container: SplitContainer, weights: Sequence[float]):
        """Set relative sizes; any positive values, normalized to sum to 1."""
        self._require_container(container)
        if len(weights) != len(container._children):
            raise SplitTreeError(
                f"Expected {len(container._children)} weights, got {len(weights)}"
            )
        if any(w <= 0 for w in weights):
            raise SplitTreeError(f"Weights must be positive: {list(weights)}")
        container._weights = [float(w) for w in weights]
        self._normalize(container)

    def set_dividers(self, container: SplitContainer, positions: Sequence[float]):
        """Set relative sizes from divider positions (ascending, inside (0, 1))."""
        self._require_container(container)
        if len(positions) != max(len(container._children) - 1, 0):
            raise SplitTreeError(
                f"Expected {len(container._children) - 1} dividers, got {len(positions)}"
            )
        bounds = [0.0, *positions, 1.0]
        weights = [b - a for a, b in zip(bounds, bounds[1:])]
        if any(w <= 0 for w in weights):
            raise SplitTreeError(f"Dividers must be ascending inside (0, 1): {list(positions)}")
        if container._children:
            self.set_weights(container, weights)

    # === Internals ===

    @staticmethod
    def _require_container(node: Node):
        if not isinstance(node, SplitContainer):
            raise SplitTreeError(f"{node!r} is not a SplitContainer")

    @staticmethod
    def _normalize(container: SplitContainer):
        total = sum(container._weights)
        if total > 0:
            container._weights = [w / total for w in container._weights]


def describe_weights(tree: SplitTree) -> Dict[str, Tuple[float, ...]]:
    """Weights of every container keyed by container id, for logging."""
    return {container.id[:8]: container.weights for container in tree.containers()}
