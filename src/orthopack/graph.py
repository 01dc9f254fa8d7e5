"""Attributed drawing graph — node geometry and edge bends on top of networkx.

A ``DrawingGraph`` wraps an ``nx.MultiDiGraph``. Node geometry lives in the
node attribute dict (``x``, ``y``, ``z``, ``width``, ``height``); edge
geometry lives in the edge attribute dict (``bends``, ``weight``). Edges are
addressed by ``(u, v, key)`` triples so parallel edges stay distinct.
"""

from __future__ import annotations

import enum
from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field

import networkx as nx

DEFAULT_NODE_WIDTH: float = 20.0
DEFAULT_NODE_HEIGHT: float = 20.0

EdgeKey = tuple[Hashable, Hashable, int]


@dataclass(frozen=True)
class Point:
    """A 2D point in drawing coordinates."""

    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)


ORIGIN = Point(0.0, 0.0)


class Attr(enum.Flag):
    """Optional attribute groups carried by a ``DrawingGraph``."""

    NODE_GRAPHICS = enum.auto()
    EDGE_GRAPHICS = enum.auto()
    EDGE_DOUBLE_WEIGHT = enum.auto()
    THREE_D = enum.auto()


DEFAULT_ATTRIBUTES = Attr.NODE_GRAPHICS | Attr.EDGE_GRAPHICS


@dataclass
class DrawingGraph:
    """A multigraph plus the drawing attributes of its nodes and edges."""

    graph: nx.MultiDiGraph = field(default_factory=nx.MultiDiGraph)
    attributes: Attr = DEFAULT_ATTRIBUTES

    def has(self, attr: Attr) -> bool:
        return attr in self.attributes

    # ─── Construction ────────────────────────────────────────────────────────

    def add_node(
        self,
        node: Hashable,
        x: float = 0.0,
        y: float = 0.0,
        width: float = DEFAULT_NODE_WIDTH,
        height: float = DEFAULT_NODE_HEIGHT,
        z: float = 0.0,
    ) -> None:
        self.graph.add_node(node, x=x, y=y, z=z, width=width, height=height)

    def add_edge(
        self,
        u: Hashable,
        v: Hashable,
        bends: Iterable[Point] = (),
        weight: float = 1.0,
    ) -> EdgeKey:
        """Add an edge and return its ``(u, v, key)`` identifier.

        Endpoints that are not yet in the graph are added with default
        geometry.
        """
        for node in (u, v):
            if node not in self.graph:
                self.add_node(node)
        key = self.graph.add_edge(u, v, bends=list(bends), weight=weight)
        return (u, v, key)

    # ─── Node geometry ───────────────────────────────────────────────────────

    def position(self, node: Hashable) -> Point:
        attrs = self.graph.nodes[node]
        return Point(attrs["x"], attrs["y"])

    def set_position(self, node: Hashable, point: Point) -> None:
        attrs = self.graph.nodes[node]
        attrs["x"] = point.x
        attrs["y"] = point.y

    def node_attr(self, node: Hashable, name: str) -> float:
        return self.graph.nodes[node][name]

    def set_node_attr(self, node: Hashable, name: str, value: float) -> None:
        self.graph.nodes[node][name] = value

    # ─── Edge geometry ───────────────────────────────────────────────────────

    def has_edge(self, edge: EdgeKey) -> bool:
        u, v, key = edge
        return self.graph.has_edge(u, v, key)

    def bends(self, edge: EdgeKey) -> list[Point]:
        u, v, key = edge
        return self.graph.edges[u, v, key]["bends"]

    def set_bends(self, edge: EdgeKey, bends: Iterable[Point]) -> None:
        u, v, key = edge
        self.graph.edges[u, v, key]["bends"] = list(bends)

    def weight(self, edge: EdgeKey) -> float:
        u, v, key = edge
        return self.graph.edges[u, v, key]["weight"]

    def set_weight(self, edge: EdgeKey, weight: float) -> None:
        u, v, key = edge
        self.graph.edges[u, v, key]["weight"] = weight

    def edge_keys(self) -> list[EdgeKey]:
        return list(self.graph.edges(keys=True))
