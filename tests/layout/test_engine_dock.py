"""
Tests for DockLayoutEngine.dock

Covers root creation, in-place reorientation, perpendicular wrapping,
preferred-size weights and the fail-soft paths.
"""
import random
import sys
import pytest
from unittest.mock import MagicMock
from loguru import logger
from docklayout.core.config import DockSettings
from docklayout.layout.engine import DockLayoutEngine
from docklayout.layout.geometry import DockPosition, Rect, SplitOrientation
from docklayout.layout.split_tree import Panel, SplitContainer, SplitTree
from docklayout.layout.tree_geometry import TreeGeometry


EDGES = [DockPosition.TOP, DockPosition.RIGHT, DockPosition.BOTTOM, DockPosition.LEFT]


def make_engine(settings=None):
    tree = SplitTree()
    engine = DockLayoutEngine(tree, TreeGeometry(tree, Rect(0, 0, 800, 600)), settings)
    return tree, engine


def assert_weights_valid(tree):
    for container in tree.containers():
        assert len(container.weights) == len(container.children)
        assert sum(container.weights) == pytest.approx(1.0)
        assert all(w > 0 for w in container.weights)


class TestDockScenarios:

    def setup_method(self):
        self.tree, self.engine = make_engine()
        self.a = Panel("A", pref_width=300, pref_height=200)
        self.b = Panel("B", pref_width=100, pref_height=300)
        self.c = Panel("C", pref_width=150, pref_height=100)

    def test_first_dock_creates_vertical_root(self):
        assert self.engine.dock(self.a, DockPosition.TOP)

        root = self.tree.root
        assert isinstance(root, SplitContainer)
        assert root.orientation is SplitOrientation.VERTICAL
        assert root.children == (self.a,)
        assert root.weights == (1.0,)

    def test_first_dock_left_creates_horizontal_root(self):
        self.engine.dock(self.a, DockPosition.LEFT)
        assert self.tree.root.orientation is SplitOrientation.HORIZONTAL

    def test_first_dock_center_uses_default_orientation(self):
        tree, engine = make_engine(DockSettings(default_orientation="vertical"))
        assert engine.dock(self.a, DockPosition.CENTER)
        assert tree.root.orientation is SplitOrientation.VERTICAL
        assert tree.root.children == (self.a,)

    def test_dock_right_of_single_panel(self):
        self.engine.dock(self.a, DockPosition.LEFT)
        root = self.tree.root

        assert self.engine.dock(self.b, DockPosition.RIGHT, self.a)

        assert self.tree.root is root
        assert root.orientation is SplitOrientation.HORIZONTAL
        assert root.children == (self.a, self.b)
        assert root.weights[1] == pytest.approx(100 / (300 + 100))
        assert root.dividers == pytest.approx((0.75,))

    def test_dock_top_wraps_anchor_slot(self):
        self.engine.dock(self.a, DockPosition.LEFT)
        self.engine.dock(self.b, DockPosition.RIGHT, self.a)
        root = self.tree.root
        weights_before = root.weights

        assert self.engine.dock(self.c, DockPosition.TOP, self.b)

        assert self.tree.root is root
        assert root.children[0] is self.a
        wrapper = root.children[1]
        assert isinstance(wrapper, SplitContainer)
        assert wrapper.orientation is SplitOrientation.VERTICAL
        assert wrapper.children == (self.c, self.b)
        assert wrapper.weights[0] == pytest.approx(100 / (300 + 100))
        assert root.weights == weights_before

    def test_root_relative_dock_wraps_whole_root(self):
        self.engine.dock(self.a, DockPosition.LEFT)
        self.engine.dock(self.b, DockPosition.RIGHT, self.a)
        old_root = self.tree.root
        old_weights = old_root.weights

        assert self.engine.dock(self.c, DockPosition.BOTTOM)

        new_root = self.tree.root
        assert new_root is not old_root
        assert new_root.orientation is SplitOrientation.VERTICAL
        assert new_root.children == (old_root, self.c)
        # old root prefers max(200, 300) across its horizontal axis
        assert new_root.weights[1] == pytest.approx(100 / (300 + 100))
        assert old_root.weights == old_weights

    def test_anchor_equal_to_root_is_root_relative(self):
        self.engine.dock(self.a, DockPosition.LEFT)
        self.engine.dock(self.b, DockPosition.RIGHT, self.a)
        old_root = self.tree.root

        self.engine.dock(self.c, DockPosition.TOP, old_root)

        assert self.tree.root.children == (self.c, old_root)

    def test_single_child_container_is_reoriented_in_place(self):
        self.engine.dock(self.a, DockPosition.LEFT)
        root = self.tree.root

        self.engine.dock(self.b, DockPosition.TOP, self.a)

        assert self.tree.root is root
        assert root.orientation is SplitOrientation.VERTICAL
        assert root.children == (self.b, self.a)
        assert root.weights[0] == pytest.approx(300 / (200 + 300))

    def test_same_orientation_appends_to_container(self):
        self.engine.dock(self.a, DockPosition.LEFT)
        self.engine.dock(self.b, DockPosition.RIGHT, self.a)

        self.engine.dock(self.c, DockPosition.LEFT, self.b)

        root = self.tree.root
        assert root.children == (self.c, self.a, self.b)
        assert root.weights[0] == pytest.approx(150 / (300 + 100 + 150))
        # existing panels keep their proportions
        assert root.weights[1] / root.weights[2] == pytest.approx(3.0)

    def test_dock_relative_to_nested_container(self):
        self.engine.dock(self.a, DockPosition.LEFT)
        self.engine.dock(self.b, DockPosition.RIGHT, self.a)
        self.engine.dock(self.c, DockPosition.TOP, self.b)
        wrapper = self.tree.root.children[1]
        d = Panel("D")

        assert self.engine.dock(d, DockPosition.LEFT, wrapper)

        assert self.tree.root.children == (d, self.a, wrapper)

    def test_bare_panel_root_is_wrapped(self):
        self.tree.replace_root(self.a)

        assert self.engine.dock(self.b, DockPosition.RIGHT)

        root = self.tree.root
        assert isinstance(root, SplitContainer)
        assert root.orientation is SplitOrientation.HORIZONTAL
        assert root.children == (self.a, self.b)

    def test_empty_root_container_gets_sole_child(self):
        root = SplitContainer(SplitOrientation.HORIZONTAL)
        self.tree.replace_root(root)

        assert self.engine.dock(self.a, DockPosition.TOP)

        assert self.tree.root is root
        assert root.orientation is SplitOrientation.VERTICAL
        assert root.weights == (1.0,)


class TestDockFailSoft:

    def setup_method(self):
        self.tree, self.engine = make_engine()
        self.a, self.b, self.c = Panel("A"), Panel("B"), Panel("C")
        self.engine.dock(self.a, DockPosition.LEFT)

    def test_unknown_anchor_degrades_to_root(self, caplog):
        stranger = Panel("stranger")

        assert self.engine.dock(self.b, DockPosition.RIGHT, stranger)

        assert self.tree.root.children == (self.a, self.b)
        assert "not found" in caplog.text

    def test_center_is_not_actionable(self):
        before = self.tree.snapshot()

        assert not self.engine.dock(self.b, DockPosition.CENTER, self.a)

        assert self.tree.snapshot() == before

    def test_already_docked_panel_is_refused(self):
        self.engine.dock(self.b, DockPosition.RIGHT, self.a)
        before = self.tree.snapshot()

        assert not self.engine.dock(self.b, DockPosition.LEFT, self.a)

        assert self.tree.snapshot() == before

    def test_panel_cannot_anchor_itself(self):
        assert not self.engine.dock(self.a, DockPosition.TOP, self.a)

    def test_provider_failure_falls_back_to_equal_share(self, caplog):
        bounds = MagicMock()
        bounds.preferred_extent.side_effect = RuntimeError("toolkit gone")
        self.engine.bounds = bounds

        assert self.engine.dock(self.b, DockPosition.RIGHT, self.a)

        assert self.tree.root.weights == pytest.approx((0.5, 0.5))
        assert "toolkit gone" in caplog.text

    def test_zero_preferred_size_falls_back_to_equal_share(self):
        ghost = Panel("ghost", pref_width=0)

        self.engine.dock(ghost, DockPosition.RIGHT, self.a)

        assert self.tree.root.weights == pytest.approx((0.5, 0.5))

    def test_reentrant_dock_is_refused(self):
        nested = []
        real = self.engine.bounds

        def measuring(node, orientation):
            nested.append(self.engine.dock(self.c, DockPosition.LEFT))
            return real.preferred_extent(node, orientation)

        bounds = MagicMock()
        bounds.preferred_extent.side_effect = measuring
        self.engine.bounds = bounds

        assert self.engine.dock(self.b, DockPosition.RIGHT, self.a)

        assert nested and not any(nested)
        assert not self.tree.contains(self.c)

    def test_layout_changed_only_on_success(self):
        handler = MagicMock()
        self.engine.layout_changed.connect(handler)

        self.engine.dock(self.b, DockPosition.CENTER, self.a)
        handler.assert_not_called()

        self.engine.dock(self.b, DockPosition.RIGHT, self.a)
        handler.assert_called_once_with()


def test_random_dock_sequences_keep_invariants():
    rng = random.Random(1234)
    for _ in range(20):
        tree, engine = make_engine()
        docked = []
        for i in range(12):
            panel = Panel(f"P{i}", pref_width=rng.randint(50, 400), pref_height=rng.randint(50, 400))
            edge = rng.choice(EDGES)
            anchor = rng.choice(docked + [None])

            assert engine.dock(panel, edge, anchor)
            docked.append(panel)

            leaves = tree.panels()
            assert len(leaves) == len(docked)
            assert all(sum(1 for leaf in leaves if leaf is p) == 1 for p in docked)
            assert_weights_valid(tree)

            parent, index = tree.find_parent(panel)
            if edge in (DockPosition.LEFT, DockPosition.TOP):
                assert index == 0
            else:
                assert index == len(parent.children) - 1
            assert parent.orientation is edge.orientation

            for container in tree.containers():
                if container is not tree.root:
                    assert len(container.children) >= 2


@pytest.mark.parametrize("collapse", [True, False])
def test_random_dock_undock_sequences_keep_invariants(collapse):
    rng = random.Random(4321)
    for _ in range(20):
        tree, engine = make_engine(DockSettings(collapse_single_child=collapse))
        docked = []
        for i in range(30):
            if docked and rng.random() < 0.4:
                panel = rng.choice(docked)
                assert engine.undock(panel)
                docked.remove(panel)
                assert not tree.contains(panel)
            else:
                panel = Panel(f"P{i}", pref_width=rng.randint(50, 400), pref_height=rng.randint(50, 400))
                anchor = rng.choice(docked + [None])
                assert engine.dock(panel, rng.choice(EDGES), anchor)
                docked.append(panel)

            leaves = tree.panels()
            assert len(leaves) == len(docked)
            assert all(sum(1 for leaf in leaves if leaf is p) == 1 for p in docked)
            assert tree.is_empty == (not docked)
            assert_weights_valid(tree)
            for container in tree.containers():
                assert len(container.children) >= 1
                if collapse and container is not tree.root:
                    assert len(container.children) >= 2


def test_weights_logged_after_dock(caplog):
    tree, engine = make_engine()
    a, b = Panel("A"), Panel("B")
    engine.dock(a, DockPosition.LEFT)
    engine.dock(b, DockPosition.RIGHT, a)

    assert f"Weights after dock: {{'{tree.root.id[:8]}': (0.5, 0.5)}}" in caplog.text


def test_weights_not_described_without_debug_sink(monkeypatch):
    describe = MagicMock(return_value={})
    monkeypatch.setattr("docklayout.layout.engine.describe_weights", describe)
    logger.remove()
    logger.add(sys.stderr, level="INFO")
    try:
        tree, engine = make_engine()
        engine.dock(Panel("A"), DockPosition.LEFT)
    finally:
        logger.remove()
        logger.add(sys.stderr)

    describe.assert_not_called()
