"""
Geometry primitives for the docking layout.

Orientation and dock position enums, the Rect value type, and the
BoundsProvider protocol through which the engine asks its host for sizes.
"""
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Protocol, Tuple

if TYPE_CHECKING:
    from .split_tree import Node


class SplitOrientation(Enum):
    HORIZONTAL = "horizontal"  # children laid out left to right
    VERTICAL = "vertical"      # children laid out top to bottom


class DockPosition(Enum):
    """Where a panel is docked relative to its anchor."""
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"
    CENTER = "center"  # reserved for tab stacking, never inserted

    @property
    def orientation(self) -> Optional[SplitOrientation]:
        """Orientation a container needs to hold the panel at this position."""
        if self in (DockPosition.LEFT, DockPosition.RIGHT):
            return SplitOrientation.HORIZONTAL
        if self in (DockPosition.TOP, DockPosition.BOTTOM):
            return SplitOrientation.VERTICAL
        return None

    @property
    def inserts_first(self) -> bool:
        """LEFT and TOP insert at index 0, RIGHT and BOTTOM at the end."""
        return self in (DockPosition.LEFT, DockPosition.TOP)


# Hit-test precedence for indicator zones
EDGE_ORDER = (DockPosition.TOP, DockPosition.RIGHT, DockPosition.BOTTOM, DockPosition.LEFT)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in screen coordinates."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, px: float, py: float) -> bool:
        """Inclusive on all four edges."""
        return self.x <= px <= self.right and self.y <= py <= self.bottom

    def extent(self, orientation: SplitOrientation) -> float:
        return self.width if orientation is SplitOrientation.HORIZONTAL else self.height

    def half(self, position: DockPosition) -> "Rect":
        """
        Portion of this rect a panel docked at `position` would claim.

        Half the rect on the docking side, the whole rect for CENTER.
        """
        w, h = self.width, self.height
        if position is DockPosition.LEFT:
            return Rect(self.x, self.y, w / 2, h)
        if position is DockPosition.RIGHT:
            return Rect(self.x + w / 2, self.y, w / 2, h)
        if position is DockPosition.TOP:
            return Rect(self.x, self.y, w, h / 2)
        if position is DockPosition.BOTTOM:
            return Rect(self.x, self.y + h / 2, w, h / 2)
        return self


class BoundsProvider(Protocol):
    """
    Host-side geometry queries consumed by the engine.

    preferred_extent: preferred width (HORIZONTAL) or height (VERTICAL).
    screen_bounds: on-screen rectangle, or None when the node is not laid out.
    """
    def preferred_extent(self, node: "Node", orientation: SplitOrientation) -> float:
        ...

    def screen_bounds(self, node: "Node") -> Optional[Rect]:
        ...
