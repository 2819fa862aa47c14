"""
Dock Pane

Host-side facade owning one layout: the split tree, the engine that
restructures it, the hover session for drags, and the panel registry the
host's event dispatcher reports hovered panels through.

Usage:
    pane = DockPane(surface=Rect(0, 0, 1200, 800))
    pane.dock(editor, DockPosition.LEFT)
    pane.dock(console, DockPosition.BOTTOM, editor)

    # During a drag, the host forwards its events
    pane.drag_entered()
    pane.hover_handle(editor)()          # pointer is over the editor
    pane.drag_over(screen_x, screen_y)
    pane.drop(dragged_panel)
"""
from typing import Callable, Optional
from loguru import logger

from docklayout.core.config import ConfigManager
from .docking.hover import HoverSession, HoverState, HoverTarget
from .docking.registry import HoverHandle, PanelRegistry
from .engine import DockLayoutEngine
from .geometry import BoundsProvider, DockPosition, Rect
from .split_tree import Node, Panel, SplitTree
from .tree_geometry import TreeGeometry


class DockPane:
    """
    One dockable surface.

    Signals (re-exported from the engine and session):
        layout_changed(): tree structure or weights changed
        highlight_changed(HoverTarget | None): drop target under the pointer changed
        overlay_visibility_changed(bool): indicator overlay shown/hidden
    """
    def __init__(
        self,
        config: Optional[ConfigManager] = None,
        surface: Optional[Rect] = None,
        bounds: Optional[BoundsProvider] = None,
        defer: Optional[Callable[[Callable[[], None]], None]] = None,
    ):
        """
        Args:
            config: Settings source; in-memory defaults when omitted
            surface: Screen rectangle of the pane
            bounds: Host geometry; defaults to laying the tree out over `surface`
            defer: Schedules overlay show/hide on the host's event loop
        """
        self.config = config or ConfigManager()
        self.tree = SplitTree()
        self._surface = surface
        self.bounds = bounds or TreeGeometry(self.tree, surface or Rect(0, 0, 0, 0))
        self.engine = DockLayoutEngine(self.tree, self.bounds, self.config.dock)
        self.session = HoverSession(self._resolve, self.dock, defer)
        self.registry = PanelRegistry(self.session.report_hovered)

        self.layout_changed = self.engine.layout_changed
        self.highlight_changed = self.session.highlight_changed
        self.overlay_visibility_changed = self.session.overlay_visibility_changed

    @property
    def root(self) -> Optional[Node]:
        return self.tree.root

    @property
    def surface(self) -> Optional[Rect]:
        return self._surface

    def resize(self, surface: Rect):
        """Track a new pane rectangle."""
        self._surface = surface
        if isinstance(self.bounds, TreeGeometry):
            self.bounds.surface = surface
        logger.debug(f"Dock pane resized to {surface}")

    # === Layout ===

    def dock(self, panel: Panel, position: DockPosition, anchor: Optional[Node] = None) -> bool:
        """Dock `panel` and give it a hover handle."""
        docked = self.engine.dock(panel, position, anchor)
        if docked:
            self.registry.register(panel)
        return docked

    def undock(self, panel: Panel) -> bool:
        """Remove `panel` and drop its hover handle."""
        undocked = self.engine.undock(panel)
        if undocked:
            self.registry.unregister(panel)
        return undocked

    def hover_handle(self, panel: Panel) -> Optional[HoverHandle]:
        return self.registry.handle_for(panel)

    # === Drag session ===

    @property
    def hover_state(self) -> HoverState:
        return self.session.state

    @property
    def drop_target(self) -> Optional[HoverTarget]:
        return self.session.target

    def resolve_hover(self, px: float, py: float, hovered_panel: Optional[Panel] = None) -> Optional[HoverTarget]:
        return self.engine.resolve_hover(px, py, hovered_panel, self._surface)

    def drag_entered(self):
        self.session.enter()

    def drag_over(self, px: float, py: float, hovered_panel: Optional[Panel] = None) -> Optional[HoverTarget]:
        return self.session.over(px, py, hovered_panel)

    def drag_exited(self):
        self.session.exit()

    def drop(self, panel: Panel) -> bool:
        return self.session.drop(panel)

    def cancel_drag(self):
        self.session.cancel()

    def _resolve(self, px: float, py: float, hovered_panel: Optional[Panel]) -> Optional[HoverTarget]:
        return self.engine.resolve_hover(px, py, hovered_panel, self._surface)
