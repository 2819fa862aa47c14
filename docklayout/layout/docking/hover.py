"""
Hover Session

Drag-session state machine for dock drags. Tracks enter/over/exit/drop
notifications delivered by the host, re-resolves the drop target on every
over, and publishes highlight and overlay changes. It touches the tree only
through the dock callback on drop.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
from loguru import logger

from docklayout.core.events import Signal
from ..geometry import DockPosition, Rect
from ..split_tree import Node, Panel, SplitContainer
from .drop_zones import DropZone


class HoverState(Enum):
    IDLE = "idle"
    ARMED = "armed"  # enter received, no matching exit yet


@dataclass(frozen=True)
class HoverTarget:
    """Resolved drop target under the pointer."""
    area: Optional[Node]                  # hovered panel, or the root for root zones
    container: Optional[SplitContainer]   # anchor container dock() would use
    position: DockPosition
    anchor: Optional[Panel]               # None docks relative to the whole layout
    zone: DropZone
    preview: Optional[Rect]               # area the docked panel would take

    @property
    def is_root(self) -> bool:
        return self.zone.is_root


Resolver = Callable[[float, float, Optional[Panel]], Optional[HoverTarget]]
Docker = Callable[[Panel, DockPosition, Optional[Node]], bool]


def _run_now(callback: Callable[[], None]):
    callback()


class HoverSession:
    """
    State machine for one pane's dock drags.

    IDLE --enter--> ARMED
    ARMED --over--> ARMED (target re-resolved)
    ARMED --enter--> ARMED (nested enter, suppresses the next exit)
    ARMED --exit--> IDLE, unless a nested enter arrived since the last over
    ARMED --drop--> IDLE, docking the panel when a target is resolved

    Signals:
        highlight_changed(HoverTarget | None): emitted when the target changes
        overlay_visibility_changed(bool): indicator overlay shown/hidden,
            delivered through `defer`
    """
    def __init__(self, resolve: Resolver, dock: Docker, defer: Optional[Callable[[Callable[[], None]], None]] = None):
        self._resolve = resolve
        self._dock = dock
        self._defer = defer or _run_now

        self.state = HoverState.IDLE
        self.target: Optional[HoverTarget] = None
        self.hovered_panel: Optional[Panel] = None
        self._received_enter = False
        self._reported_panel: Optional[Panel] = None
        self._overlay_visible = False

        self.highlight_changed = Signal("HighlightChanged")
        self.overlay_visibility_changed = Signal("OverlayVisibilityChanged")

    @property
    def overlay_visible(self) -> bool:
        return self._overlay_visible

    def report_hovered(self, panel: Panel):
        """Called by a panel's hover handle while an over is being delivered."""
        self._reported_panel = panel

    def enter(self):
        if self.state is HoverState.ARMED:
            # Nested enter; the next exit belongs to the surface it left
            self._received_enter = True
            return
        self.state = HoverState.ARMED
        logger.debug("Dock drag entered, session armed")
        self._set_overlay(True)

    def over(self, px: float, py: float, hovered_panel: Optional[Panel] = None) -> Optional[HoverTarget]:
        """
        Re-resolve the drop target for the pointer position.

        Args:
            px, py: Pointer position in screen coordinates
            hovered_panel: Panel under the pointer; defaults to the panel
                reported through a hover handle since the last over

        Returns:
            The current target, or None when no indicator is hit
        """
        hovered = hovered_panel if hovered_panel is not None else self._reported_panel
        self._reported_panel = None
        if self.state is HoverState.IDLE:
            logger.debug("Ignoring drag over without enter")
            return None

        self._received_enter = False
        self.hovered_panel = hovered
        self._set_target(self._resolve(px, py, hovered))
        return self.target

    def exit(self):
        if self.state is HoverState.IDLE:
            return
        if self._received_enter:
            # A nested surface was entered before this exit arrived
            self._received_enter = False
            logger.debug("Suppressed drag exit after nested enter")
            return
        logger.debug("Dock drag exited")
        self._reset()

    def drop(self, panel: Panel) -> bool:
        """
        Finish the drag. Docks `panel` at the resolved target, if any.

        Returns:
            True when the panel was docked
        """
        if self.state is HoverState.IDLE:
            logger.debug(f"Ignoring drop of {panel!r}: no drag in progress")
            return False

        target = self.target
        docked = False
        if target is None:
            logger.debug(f"Drop of {panel!r} outside any indicator")
        else:
            logger.info(f"Dropping {panel!r} at {target.position.name} of {target.anchor if target.anchor is not None else 'root'}")
            docked = self._dock(panel, target.position, target.anchor)
        self._reset()
        return docked

    def cancel(self):
        """Abandon the drag without docking anything."""
        if self.state is HoverState.ARMED:
            logger.debug("Dock drag cancelled")
            self._reset()

    def _reset(self):
        self.state = HoverState.IDLE
        self.hovered_panel = None
        self._received_enter = False
        self._reported_panel = None
        self._set_target(None)
        self._set_overlay(False)

    def _set_target(self, target: Optional[HoverTarget]):
        if target == self.target:
            return
        self.target = target
        self.highlight_changed.emit(target)

    def _set_overlay(self, visible: bool):
        if visible == self._overlay_visible:
            return
        self._overlay_visible = visible
        self._defer(lambda: self.overlay_visibility_changed.emit(visible))
