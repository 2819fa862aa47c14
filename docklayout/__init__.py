"""
docklayout - split-tree docking layout engine.

Usage:
    from docklayout import DockPane, DockPosition, Panel, Rect

    pane = DockPane(surface=Rect(0, 0, 1200, 800))
    pane.dock(Panel("Explorer", pref_width=250), DockPosition.LEFT)
"""
from .core import ConfigManager, DockSettings, Signal, setup_logging
from .layout import (
    DockLayoutEngine,
    DockPane,
    DockPosition,
    Panel,
    Rect,
    SplitContainer,
    SplitOrientation,
    SplitTree,
    SplitTreeError,
    TreeGeometry,
)
from .layout.docking import HoverState, HoverTarget


__all__ = [
    "ConfigManager",
    "DockSettings",
    "Signal",
    "setup_logging",
    "DockLayoutEngine",
    "DockPane",
    "DockPosition",
    "Panel",
    "Rect",
    "SplitContainer",
    "SplitOrientation",
    "SplitTree",
    "SplitTreeError",
    "TreeGeometry",
    "HoverState",
    "HoverTarget",
]
