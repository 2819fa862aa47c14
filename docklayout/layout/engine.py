"""
Dock layout engine.

Restructures a SplitTree when panels are docked or undocked, and resolves
pointer positions during a drag into a dock target. Geometry comes from a
BoundsProvider; nothing here knows about widgets or events.
"""
from typing import List, Optional, Tuple
from loguru import logger

from docklayout.core.config import DockSettings
from docklayout.core.events import Signal
from .docking.drop_zones import build_drop_zones, hit_test
from .docking.hover import HoverTarget
from .geometry import BoundsProvider, DockPosition, Rect, SplitOrientation
from .split_tree import Node, Panel, SplitContainer, SplitTree, describe_weights


class DockLayoutEngine:
    """
    Docking algorithm over a host-owned SplitTree.

    Results are fail-soft: an unknown anchor docks relative to the root, an
    unknown panel is not undocked, and neither raises.

    Signals:
        layout_changed(): emitted after every successful dock/undock
    """
    def __init__(self, tree: SplitTree, bounds: BoundsProvider, settings: Optional[DockSettings] = None):
        self.tree = tree
        self.bounds = bounds
        self.settings = settings or DockSettings()
        self.layout_changed = Signal("LayoutChanged")
        self._mutating = False

    # === Insertion ===

    def dock(self, panel: Panel, position: DockPosition, anchor: Optional[Node] = None) -> bool:
        """
        Dock `panel` at `position` relative to `anchor`.

        Args:
            panel: Panel to insert; must not already be in the tree
            position: Edge of the anchor to dock at
            anchor: Existing node, or None for the whole layout

        Returns:
            True if the panel was inserted
        """
        if self._mutating:
            logger.warning(f"Refusing reentrant dock of {panel!r}")
            return False
        self._mutating = True
        try:
            docked = self._dock(panel, position, anchor)
        finally:
            self._mutating = False

        if docked:
            logger.opt(lazy=True).debug("Weights after dock: {}", lambda: describe_weights(self.tree))
            self.layout_changed.emit()
        return docked

    def _dock(self, panel: Panel, position: DockPosition, anchor: Optional[Node]) -> bool:
        tree = self.tree

        if tree.is_empty:
            orientation = position.orientation or SplitOrientation(self.settings.default_orientation)
            root = SplitContainer(orientation)
            tree.insert_child(root, 0, panel)
            tree.replace_root(root)
            logger.info(f"Docked {panel!r} as first panel ({orientation.name} root)")
            return True

        if tree.contains(panel):
            logger.warning(f"{panel!r} is already docked; undock it first")
            return False

        requested = position.orientation
        if requested is None:
            logger.warning(f"Cannot dock {panel!r} at {position.name}: tab stacking is not supported")
            return False

        container, slot = self._locate_anchor(anchor)
        wrap = container is None or (container.orientation is not requested and len(container) > 1)

        # Measure before mutating so a failing provider leaves the tree untouched
        existing = [slot] if wrap else list(container.children)
        weight = self._claimed_weight(panel, existing, requested)

        if wrap:
            target = SplitContainer(requested)
            if slot is tree.root:
                tree.insert_child(target, 0, slot)
                tree.replace_root(target)
                logger.debug(f"Wrapped root in new {requested.name} container")
            else:
                tree.replace_child(container, slot, target)
                tree.insert_child(target, 0, slot)
                logger.debug(f"Wrapped {slot!r} in new {requested.name} container")
        else:
            target = container
            if target.orientation is not requested:
                tree.set_orientation(target, requested)
                logger.debug(f"Reoriented container {target.id[:8]} to {requested.name}")

        index = 0 if position.inserts_first else len(target)
        tree.insert_child(target, index, panel, weight if len(target) else None)
        logger.info(f"Docked {panel!r} at {position.name} of {anchor if anchor is not None else 'root'} (index {index})")
        return True

    def _locate_anchor(self, anchor: Optional[Node]) -> Tuple[Optional[SplitContainer], Node]:
        """
        Find the anchor container and the slot that would be wrapped.

        Returns:
            (container, slot). The container is None when the root is a bare
            panel. For root-relative docking the slot is the root itself.
        """
        root = self.tree.root
        if anchor is not None and anchor is not root:
            found = self.tree.find_parent(anchor)
            if found is not None:
                return found[0], anchor
            logger.warning(f"Anchor {anchor!r} not found, docking relative to root")

        if isinstance(root, SplitContainer):
            return root, root
        return None, root

    def _claimed_weight(self, panel: Panel, existing: List[Node], orientation: SplitOrientation) -> Optional[float]:
        """
        Share of the target container the new panel claims, from preferred sizes.

        Falls back to an equal share when the sizes are unusable.
        """
        if not existing:
            return None
        equal_share = 1.0 / (len(existing) + 1)
        try:
            magnitude = sum(self.bounds.preferred_extent(node, orientation) for node in existing)
            own = self.bounds.preferred_extent(panel, orientation)
        except Exception as e:
            logger.error(f"Preferred size query failed for {panel!r}: {e}")
            return equal_share

        total = magnitude + own
        weight = own / total if total > 0 else 0.0
        if not 0.0 < weight < 1.0:
            logger.debug(f"Unusable preferred sizes ({own} of {total}), using equal share")
            return equal_share
        return weight

    # === Removal ===

    def undock(self, panel: Node) -> bool:
        """
        Remove `panel` from the layout.

        Returns:
            True if it was removed, False if it was not in the tree
        """
        if self._mutating:
            logger.warning(f"Refusing reentrant undock of {panel!r}")
            return False
        self._mutating = True
        try:
            removed = self._undock(panel)
        finally:
            self._mutating = False

        if removed:
            self.layout_changed.emit()
        return removed

    def _undock(self, panel: Node) -> bool:
        tree = self.tree
        if panel is not None and panel is tree.root:
            tree.replace_root(None)
            logger.info(f"Undocked {panel!r}, layout is now empty")
            return True

        found = tree.find_parent(panel)
        if found is None:
            logger.warning(f"Cannot undock {panel!r}: not in layout")
            return False

        container, _ = found
        tree.remove_child(container, panel)
        logger.info(f"Undocked {panel!r} from container {container.id[:8]}")
        self._normalize(container)
        return True

    def _normalize(self, container: SplitContainer):
        """
        Repair the tree above a container that just lost a child.

        Empty containers are removed (an empty root empties the tree). With
        collapse_single_child, a container left with one child is replaced by
        that child; a root keeps a single panel but hands over to a single
        container child.
        """
        tree = self.tree
        collapse = self.settings.collapse_single_child
        while True:
            remaining = container.children
            if container is tree.root:
                if not remaining:
                    tree.replace_root(None)
                    logger.debug("Root container emptied, layout is now empty")
                elif len(remaining) == 1 and collapse and isinstance(remaining[0], SplitContainer):
                    tree.replace_root(remaining[0])
                    logger.debug("Collapsed root into its only child container")
                return

            found = tree.find_parent(container)
            if found is None:
                return
            parent, _ = found
            if not remaining:
                tree.remove_child(parent, container)
                logger.debug(f"Removed empty container {container.id[:8]}")
                container = parent
                continue
            if len(remaining) == 1 and collapse:
                tree.replace_child(parent, container, remaining[0])
                logger.debug(f"Collapsed container {container.id[:8]} into its only child")
            return

    # === Hover resolution ===

    def anchor_container(self, anchor: Optional[Node]) -> Optional[SplitContainer]:
        """Container dock() would start from for `anchor` (None for a bare root)."""
        if self.tree.is_empty:
            return None
        container, _ = self._locate_anchor(anchor)
        return container

    def resolve_hover(
        self,
        px: float,
        py: float,
        hovered_panel: Optional[Panel] = None,
        surface: Optional[Rect] = None,
    ) -> Optional[HoverTarget]:
        """
        Resolve which indicator the pointer is over. Pure query.

        Args:
            px, py: Pointer position in screen coordinates
            hovered_panel: Panel under the pointer, if any
            surface: Pane bounds used for the root zones of an empty layout

        Returns:
            HoverTarget, or None when no indicator contains the pointer
        """
        root = self.tree.root
        if hovered_panel is not None and not self.tree.contains(hovered_panel):
            hovered_panel = None

        try:
            panel_bounds = self.bounds.screen_bounds(hovered_panel) if hovered_panel is not None else None
            root_bounds = self.bounds.screen_bounds(root) if root is not None else surface
        except Exception as e:
            logger.error(f"Screen bounds query failed during hover: {e}")
            return None

        zones = build_drop_zones(
            root_bounds,
            panel_bounds,
            self.settings.indicator_size,
            self.settings.root_indicator_margin,
        )
        zone = hit_test(zones, px, py)
        if zone is None:
            return None

        if zone.is_root:
            area, anchor, area_bounds = root, None, root_bounds
        else:
            area, anchor, area_bounds = hovered_panel, hovered_panel, panel_bounds

        return HoverTarget(
            area=area,
            container=self.anchor_container(anchor),
            position=zone.position,
            anchor=anchor,
            zone=zone,
            preview=area_bounds.half(zone.position) if area_bounds is not None else None,
        )
