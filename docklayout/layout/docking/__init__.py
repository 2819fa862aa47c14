"""
Drag-time docking: indicator zones, hover session and panel registry.
"""
from .drop_zones import DropZone, build_drop_zones, hit_test, panel_zones, root_zones
from .hover import HoverSession, HoverState, HoverTarget
from .registry import HoverHandle, PanelRegistry


__all__ = [
    "DropZone",
    "build_drop_zones",
    "hit_test",
    "panel_zones",
    "root_zones",
    "HoverSession",
    "HoverState",
    "HoverTarget",
    "HoverHandle",
    "PanelRegistry",
]
