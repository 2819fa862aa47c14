"""
Drop Zones

Indicator hit-zones shown during a dock drag and the hit test over them.

Two groups of zones exist:
- panel zones: a compass of four buttons centered on the hovered panel
- root zones: four buttons inset from the edges of the whole layout

Hit testing walks the zones in a fixed order (panel TOP, RIGHT, BOTTOM,
LEFT, then the root zones in the same order) and the first zone containing
the pointer wins.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..geometry import EDGE_ORDER, DockPosition, Rect


@dataclass(frozen=True)
class DropZone:
    """One indicator button."""
    position: DockPosition
    is_root: bool  # True = docks relative to the whole layout
    rect: Rect


def panel_zones(bounds: Rect, size: float) -> List[DropZone]:
    """
    Compass buttons around the center of a hovered panel.

    Args:
        bounds: Screen bounds of the hovered panel
        size: Edge length of one button

    Returns:
        Zones in hit-test order
    """
    cx, cy = bounds.center
    half = size / 2
    rects = {
        DockPosition.TOP: Rect(cx - half, cy - half - size, size, size),
        DockPosition.RIGHT: Rect(cx + half, cy - half, size, size),
        DockPosition.BOTTOM: Rect(cx - half, cy + half, size, size),
        DockPosition.LEFT: Rect(cx - half - size, cy - half, size, size),
    }
    return [DropZone(pos, False, rects[pos]) for pos in EDGE_ORDER]


def root_zones(bounds: Rect, size: float, margin: float) -> List[DropZone]:
    """
    Buttons at the top-center, center-right, bottom-center and center-left
    of the whole layout, each inset by `margin`.
    """
    cx, cy = bounds.center
    half = size / 2
    rects = {
        DockPosition.TOP: Rect(cx - half, bounds.y + margin, size, size),
        DockPosition.RIGHT: Rect(bounds.right - margin - size, cy - half, size, size),
        DockPosition.BOTTOM: Rect(cx - half, bounds.bottom - margin - size, size, size),
        DockPosition.LEFT: Rect(bounds.x + margin, cy - half, size, size),
    }
    return [DropZone(pos, True, rects[pos]) for pos in EDGE_ORDER]


def build_drop_zones(
    root_bounds: Optional[Rect],
    panel_bounds: Optional[Rect],
    size: float,
    margin: float,
) -> List[DropZone]:
    """All active zones in hit-test order; missing bounds skip their group."""
    zones: List[DropZone] = []
    if panel_bounds is not None:
        zones.extend(panel_zones(panel_bounds, size))
    if root_bounds is not None:
        zones.extend(root_zones(root_bounds, size, margin))
    return zones


def hit_test(zones: Sequence[DropZone], px: float, py: float) -> Optional[DropZone]:
    """First zone containing the point, or None."""
    for zone in zones:
        if zone.rect.contains(px, py):
            return zone
    return None
