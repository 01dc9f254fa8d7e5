"""Tests for splitter.py — per-component layout, write-back and repacking."""

from __future__ import annotations

import itertools
import math

import pytest

from orthopack.components import ComponentPartition
from orthopack.graph import Attr, DrawingGraph, Point
from orthopack.splitter import ComponentSplitterLayout

# ─── Helpers ──────────────────────────────────────────────────────────────────


class RecordingLayout:
    """Secondary layout that records the copies it sees and leaves them alone."""

    def __init__(self) -> None:
        self.seen: list[list] = []

    def layout(self, drawing: DrawingGraph) -> None:
        self.seen.append([drawing.position(v) for v in drawing.graph.nodes])


class RowLayout:
    """Secondary layout that puts the nodes of a copy on a horizontal line."""

    def __init__(self, spacing: float = 50.0) -> None:
        self.spacing = spacing

    def layout(self, drawing: DrawingGraph) -> None:
        for i, v in enumerate(drawing.graph.nodes):
            drawing.set_position(v, Point(i * self.spacing, 0.0))
        for edge in drawing.edge_keys():
            drawing.set_bends(edge, [])


class FailingLayout:
    def layout(self, drawing: DrawingGraph) -> None:
        raise RuntimeError("layout failed")


def make_forest() -> DrawingGraph:
    """Two paths and an isolated node, all piled up near the origin."""
    drawing = DrawingGraph()
    for i, node in enumerate(["a", "b", "c", "x", "y", "solo"]):
        drawing.add_node(node, x=float(i), y=float(i))
    drawing.add_edge("a", "b")
    drawing.add_edge("b", "c")
    drawing.add_edge("x", "y", bends=[Point(2.0, 9.0)])
    return drawing


def positions(drawing: DrawingGraph) -> dict:
    return {v: drawing.position(v) for v in drawing.graph.nodes}


def assert_components_separated(drawing: DrawingGraph, min_gap: float) -> None:
    """Nodes of different components are at least min_gap apart along x or y.

    Packed boxes are disjoint and each component keeps about half the border
    clear on every side, so the gap is the border minus integer rounding.
    """
    partition = ComponentPartition.of(drawing.graph)
    for ca, cb in itertools.combinations(partition.components, 2):
        for u in ca.nodes:
            for v in cb.nodes:
                p, q = drawing.position(u), drawing.position(v)
                gap = max(abs(p.x - q.x), abs(p.y - q.y))
                assert gap >= min_gap - 1e-6, f"{u} and {v} are only {gap} apart"


# ─── ComponentSplitterLayout ──────────────────────────────────────────────────


class TestComponentSplitterLayout:
    def test_without_secondary_layout_is_noop(self):
        drawing = make_forest()
        before = positions(drawing)
        ComponentSplitterLayout().call(drawing)
        assert positions(drawing) == before

    def test_empty_graph_skips_secondary_layout(self):
        layout = RecordingLayout()
        ComponentSplitterLayout(secondary_layout=layout).call(DrawingGraph())
        assert layout.seen == []

    def test_secondary_layout_runs_per_component_in_order(self):
        layout = RecordingLayout()
        ComponentSplitterLayout(secondary_layout=layout).call(make_forest())
        assert [len(seen) for seen in layout.seen] == [3, 2, 1]
        assert layout.seen[0][0] == Point(0.0, 0.0)
        assert layout.seen[1][0] == Point(3.0, 3.0)

    def test_components_are_packed_apart(self):
        drawing = make_forest()
        ComponentSplitterLayout(secondary_layout=RowLayout()).call(drawing)

        # Nodes of one component keep the secondary layout's spacing.
        a, b = drawing.position("a"), drawing.position("b")
        assert math.hypot(a.x - b.x, a.y - b.y) == pytest.approx(50.0)

        assert_components_separated(drawing, min_gap=29.0)

    def test_bends_written_back(self):
        drawing = make_forest()
        ComponentSplitterLayout(secondary_layout=RowLayout()).call(drawing)
        assert drawing.bends(("x", "y", 0)) == []

    def test_z_written_back_in_3d(self):
        class LiftLayout:
            def layout(self, drawing: DrawingGraph) -> None:
                for v in drawing.graph.nodes:
                    drawing.set_node_attr(v, "z", 7.0)

        drawing = DrawingGraph(attributes=Attr.NODE_GRAPHICS | Attr.EDGE_GRAPHICS | Attr.THREE_D)
        drawing.add_node("p")
        drawing.add_node("q", x=10.0)
        drawing.add_edge("p", "q")
        ComponentSplitterLayout(secondary_layout=LiftLayout()).call(drawing)
        assert drawing.node_attr("p", "z") == 7.0
        assert drawing.node_attr("q", "z") == 7.0

    def test_secondary_layout_errors_propagate(self):
        with pytest.raises(RuntimeError):
            ComponentSplitterLayout(secondary_layout=FailingLayout()).call(make_forest())

    def test_splitter_nests_as_secondary_layout(self):
        inner = ComponentSplitterLayout(secondary_layout=RowLayout())
        outer = ComponentSplitterLayout(secondary_layout=inner)
        drawing = make_forest()
        outer.call(drawing)
        assert_components_separated(drawing, min_gap=29.0)

    def test_single_node_component_box(self):
        layout = RecordingLayout()
        splitter = ComponentSplitterLayout(secondary_layout=layout)
        drawing = DrawingGraph()
        drawing.add_node("only", x=3.0, y=4.0)
        splitter.call(drawing)
        p = drawing.position("only")
        assert 0.0 <= p.x <= 31.0
        assert 0.0 <= p.y <= 31.0
