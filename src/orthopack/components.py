"""Connected-component partition and isolated component copies.

The node and edge order of each ``Component`` is the order in which points
are collected and later written back by the reassembler, so it is fixed
once here: nodes in graph node order, edges in graph edge order.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from dataclasses import dataclass, field

import networkx as nx

from orthopack.graph import Attr, DrawingGraph, EdgeKey


@dataclass
class Component:
    """One weakly connected component of a drawing graph."""

    index: int
    nodes: list[Hashable]
    edges: list[EdgeKey] = field(default_factory=list)


@dataclass
class ComponentPartition:
    """All connected components of a graph, in a deterministic order.

    Components are ordered by the position of their first node in the
    graph's node order.
    """

    components: list[Component]

    @classmethod
    def of(cls, graph: nx.MultiDiGraph) -> ComponentPartition:
        position: dict[Hashable, int] = {node: i for i, node in enumerate(graph.nodes)}

        groups = [sorted(cc, key=position.__getitem__) for cc in nx.weakly_connected_components(graph)]
        groups.sort(key=lambda nodes: position[nodes[0]])

        components = [Component(index=i, nodes=nodes) for i, nodes in enumerate(groups)]
        component_of: dict[Hashable, int] = {}
        for component in components:
            for node in component.nodes:
                component_of[node] = component.index

        for u, v, key in graph.edges(keys=True):
            components[component_of[u]].edges.append((u, v, key))

        return cls(components=components)

    def __len__(self) -> int:
        return len(self.components)

    def __iter__(self) -> Iterator[Component]:
        return iter(self.components)


# ─── Component Copy ───────────────────────────────────────────────────────────


@dataclass
class ComponentCopy:
    """An isolated copy of one component, with maps back to the original.

    Copy nodes are numbered ``0..k-1`` in component node order. Anything a
    layout adds to the copy has no original and is ignored on write-back.
    """

    drawing: DrawingGraph
    node_original: dict[int, Hashable]
    edge_original: dict[EdgeKey, EdgeKey]

    @classmethod
    def build(cls, source: DrawingGraph, component: Component) -> ComponentCopy:
        copy = DrawingGraph(attributes=source.attributes)
        node_copy: dict[Hashable, int] = {}
        node_original: dict[int, Hashable] = {}

        for i, node in enumerate(component.nodes):
            copy.add_node(
                i,
                x=source.node_attr(node, "x"),
                y=source.node_attr(node, "y"),
                width=source.node_attr(node, "width"),
                height=source.node_attr(node, "height"),
                z=source.node_attr(node, "z") if source.has(Attr.THREE_D) else 0.0,
            )
            node_copy[node] = i
            node_original[i] = node

        edge_original: dict[EdgeKey, EdgeKey] = {}
        for edge in component.edges:
            u, v, _key = edge
            copied = copy.add_edge(node_copy[u], node_copy[v])
            if source.has(Attr.EDGE_DOUBLE_WEIGHT):
                copy.set_weight(copied, source.weight(edge))
            if source.has(Attr.EDGE_GRAPHICS):
                copy.set_bends(copied, source.bends(edge))
            edge_original[copied] = edge

        return cls(drawing=copy, node_original=node_original, edge_original=edge_original)

    def write_back(self, target: DrawingGraph) -> None:
        """Copy positions (and z, bends where present) onto the original elements."""
        for node in self.drawing.graph.nodes:
            original = self.node_original.get(node)
            if original is None or original not in target.graph:
                continue
            target.set_position(original, self.drawing.position(node))
            if target.has(Attr.THREE_D):
                target.set_node_attr(original, "z", self.drawing.node_attr(node, "z"))

        if not target.has(Attr.EDGE_GRAPHICS):
            return

        for edge in self.drawing.edge_keys():
            original = self.edge_original.get(edge)
            if original is None or not target.has_edge(original):
                continue
            target.set_bends(original, self.drawing.bends(edge))
