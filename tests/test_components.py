"""Tests for components.py — partition order, isolated copies, write-back."""

from __future__ import annotations

from orthopack.components import ComponentCopy, ComponentPartition
from orthopack.graph import Attr, DrawingGraph, Point

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_drawing(*edges: tuple[str, str], attributes: Attr = Attr.NODE_GRAPHICS | Attr.EDGE_GRAPHICS) -> DrawingGraph:
    """Build a DrawingGraph from (src, tgt) pairs; nodes get distinct positions."""
    drawing = DrawingGraph(attributes=attributes)
    for src, tgt in edges:
        for node in (src, tgt):
            if node not in drawing.graph:
                i = drawing.graph.number_of_nodes()
                drawing.add_node(node, x=10.0 * i, y=5.0 * i, width=8.0 + i, height=6.0 + i)
        drawing.add_edge(src, tgt)
    return drawing


# ─── ComponentPartition ───────────────────────────────────────────────────────


class TestComponentPartition:
    def test_empty_graph(self):
        assert len(ComponentPartition.of(DrawingGraph().graph)) == 0

    def test_components_follow_first_node_order(self):
        drawing = make_drawing(("a", "c"), ("b", "d"))
        partition = ComponentPartition.of(drawing.graph)
        assert [c.nodes for c in partition] == [["a", "c"], ["b", "d"]]
        assert [c.index for c in partition] == [0, 1]

    def test_nodes_keep_graph_order(self):
        drawing = DrawingGraph()
        for node in ("z", "m", "a"):
            drawing.add_node(node)
        drawing.add_edge("a", "m")
        drawing.add_edge("m", "z")
        partition = ComponentPartition.of(drawing.graph)
        assert partition.components[0].nodes == ["z", "m", "a"]

    def test_direction_ignored(self):
        drawing = make_drawing(("a", "b"), ("c", "b"))
        assert len(ComponentPartition.of(drawing.graph)) == 1

    def test_isolated_nodes_are_components(self):
        drawing = make_drawing(("a", "b"))
        drawing.add_node("lonely")
        partition = ComponentPartition.of(drawing.graph)
        assert [c.nodes for c in partition] == [["a", "b"], ["lonely"]]
        assert partition.components[1].edges == []

    def test_parallel_edges_kept_in_order(self):
        drawing = make_drawing(("a", "b"), ("a", "b"), ("b", "a"))
        (component,) = ComponentPartition.of(drawing.graph).components
        assert component.edges == [("a", "b", 0), ("a", "b", 1), ("b", "a", 0)]


# ─── ComponentCopy ────────────────────────────────────────────────────────────


class TestComponentCopy:
    def test_copy_numbers_nodes_and_copies_geometry(self):
        drawing = make_drawing(("a", "b"), ("c", "d"))
        component = ComponentPartition.of(drawing.graph).components[1]
        copy = ComponentCopy.build(drawing, component)

        assert list(copy.drawing.graph.nodes) == [0, 1]
        assert copy.node_original == {0: "c", 1: "d"}
        assert copy.drawing.position(0) == drawing.position("c")
        assert copy.drawing.node_attr(1, "width") == drawing.node_attr("d", "width")
        assert copy.drawing.node_attr(1, "height") == drawing.node_attr("d", "height")
        assert copy.edge_original == {(0, 1, 0): ("c", "d", 0)}

    def test_bends_are_copied_independently(self):
        drawing = make_drawing(("a", "b"))
        drawing.set_bends(("a", "b", 0), [Point(1.0, 2.0)])
        component = ComponentPartition.of(drawing.graph).components[0]
        copy = ComponentCopy.build(drawing, component)

        copy.drawing.bends((0, 1, 0)).append(Point(9.0, 9.0))
        assert drawing.bends(("a", "b", 0)) == [Point(1.0, 2.0)]

    def test_weight_copied_only_when_present(self):
        plain = make_drawing(("a", "b"))
        plain.set_weight(("a", "b", 0), 4.0)
        copy = ComponentCopy.build(plain, ComponentPartition.of(plain.graph).components[0])
        assert copy.drawing.weight((0, 1, 0)) == 1.0

        weighted = make_drawing(("a", "b"), attributes=Attr.NODE_GRAPHICS | Attr.EDGE_DOUBLE_WEIGHT)
        weighted.set_weight(("a", "b", 0), 4.0)
        copy = ComponentCopy.build(weighted, ComponentPartition.of(weighted.graph).components[0])
        assert copy.drawing.weight((0, 1, 0)) == 4.0

    def test_write_back_positions_and_bends(self):
        drawing = make_drawing(("a", "b"))
        copy = ComponentCopy.build(drawing, ComponentPartition.of(drawing.graph).components[0])
        copy.drawing.set_position(0, Point(-3.0, 7.0))
        copy.drawing.set_bends((0, 1, 0), [Point(0.5, 0.5)])

        copy.write_back(drawing)
        assert drawing.position("a") == Point(-3.0, 7.0)
        assert drawing.bends(("a", "b", 0)) == [Point(0.5, 0.5)]

    def test_write_back_z_only_in_3d(self):
        flat = make_drawing(("a", "b"))
        copy = ComponentCopy.build(flat, ComponentPartition.of(flat.graph).components[0])
        copy.drawing.set_node_attr(0, "z", 12.0)
        copy.write_back(flat)
        assert flat.node_attr("a", "z") == 0.0

        solid = make_drawing(("a", "b"), attributes=Attr.NODE_GRAPHICS | Attr.THREE_D)
        copy = ComponentCopy.build(solid, ComponentPartition.of(solid.graph).components[0])
        copy.drawing.set_node_attr(0, "z", 12.0)
        copy.write_back(solid)
        assert solid.node_attr("a", "z") == 12.0

    def test_write_back_skips_elements_without_original(self):
        drawing = make_drawing(("a", "b"))
        copy = ComponentCopy.build(drawing, ComponentPartition.of(drawing.graph).components[0])
        copy.drawing.add_node("helper", x=99.0, y=99.0)
        copy.drawing.add_edge(0, "helper")

        copy.write_back(drawing)
        assert "helper" not in drawing.graph
        assert drawing.graph.number_of_edges() == 1

    def test_write_back_skips_removed_originals(self):
        drawing = make_drawing(("a", "b"))
        copy = ComponentCopy.build(drawing, ComponentPartition.of(drawing.graph).components[0])
        copy.drawing.set_position(0, Point(1.0, 1.0))
        drawing.graph.remove_node("a")

        copy.write_back(drawing)
        assert "a" not in drawing.graph
        assert drawing.graph.number_of_edges() == 0
