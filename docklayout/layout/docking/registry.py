"""
Panel registry: per-panel hover handles for the host's event dispatcher.

The engine never listens to events itself. Each docked panel gets a
HoverHandle; the host calls it when a drag-over is delivered to that panel,
and the handle reports the panel as hovered.
"""
from typing import Callable, Dict, Optional
from loguru import logger

from ..split_tree import Panel


class HoverHandle:
    """Callable reporting its panel as hovered until detached."""
    def __init__(self, panel: Panel, report: Callable[[Panel], None]):
        self.panel = panel
        self._report = report
        self.active = True

    def __call__(self):
        if self.active:
            self._report(self.panel)

    def detach(self):
        self.active = False

    def __repr__(self) -> str:
        state = "active" if self.active else "detached"
        return f"HoverHandle({self.panel!r}, {state})"


class PanelRegistry:
    """Maps panel identity to its hover handle."""
    def __init__(self, report: Callable[[Panel], None]):
        self._report = report
        self._handles: Dict[Panel, HoverHandle] = {}

    def register(self, panel: Panel) -> HoverHandle:
        """Create (or return the existing) handle for `panel`."""
        handle = self._handles.get(panel)
        if handle is None:
            handle = HoverHandle(panel, self._report)
            self._handles[panel] = handle
            logger.debug(f"Registered hover handle for {panel!r}")
        return handle

    def unregister(self, panel: Panel) -> bool:
        """Detach and forget the handle; False when none was registered."""
        handle = self._handles.pop(panel, None)
        if handle is None:
            return False
        handle.detach()
        logger.debug(f"Unregistered hover handle for {panel!r}")
        return True

    def handle_for(self, panel: Panel) -> Optional[HoverHandle]:
        return self._handles.get(panel)

    def __contains__(self, panel: Panel) -> bool:
        return panel in self._handles

    def __len__(self) -> int:
        return len(self._handles)
