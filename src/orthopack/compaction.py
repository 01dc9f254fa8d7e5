"""Longest-path compaction of one axis of an orthogonal drawing.

Phases:
  1. Constructive: longest paths in the constraint DAG give every node the
     smallest coordinate that satisfies all separation constraints.
  2. Improvement (optional): pseudo-components (nodes held together by
     tight arcs) are shifted rigidly as long as that shortens the total
     arc length.

The constraint graph is built elsewhere; this module only consumes it.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Generic, TypeVar

import networkx as nx

from orthopack.config import CompactionConfig
from orthopack.errors import CompactionError

logger = logging.getLogger(__name__)

L = TypeVar("L", int, float, Fraction)

# Slack at or below this counts as tight; absorbs float round-off.
_TIGHT_TOLERANCE: float = 1e-9


class Axis(enum.Enum):
    X = "x"
    Y = "y"


class ArcKind(enum.Enum):
    """Origin of a constraint arc."""

    BASIC = "basic"
    VERTEX_SIZE = "vertex_size"
    VISIBILITY = "visibility"


@dataclass
class RoutingChannel:
    """Routing space around vertices.

    Attributes:
        separation: Minimum distance enforced by visibility arcs.
    """

    separation: int = 0

    def arc_length(self, length: L, kind: ArcKind) -> L:
        if kind is ArcKind.VISIBILITY:
            return max(length, self.separation)
        return length


@dataclass
class GridDrawing:
    """Integer drawing coordinates, one dict per axis, keyed by drawing element."""

    x: dict[Hashable, int] = field(default_factory=dict)
    y: dict[Hashable, int] = field(default_factory=dict)

    def coords(self, axis: Axis) -> dict[Hashable, int]:
        return self.x if axis is Axis.X else self.y


# ─── Constraint Graph ─────────────────────────────────────────────────────────


class ConstraintGraph(Generic[L]):
    """Minimum-separation constraints along one axis.

    An arc ``u → v`` with length ``len`` demands ``pos(v) - pos(u) >= len``.
    Each node may list the drawing elements that share its coordinate
    (e.g. the vertices of one segment); a node without elements stands for
    itself in the drawing.
    """

    def __init__(self, axis: Axis = Axis.X, zero: L = 0) -> None:
        self.axis = axis
        self.zero = zero
        self.digraph: nx.DiGraph = nx.DiGraph()

    def __len__(self) -> int:
        return self.digraph.number_of_nodes()

    def add_node(self, node: Hashable, elements: Iterable[Hashable] = ()) -> None:
        if node in self.digraph:
            self.digraph.nodes[node]["elements"].extend(elements)
        else:
            self.digraph.add_node(node, elements=list(elements))

    def add_constraint(
        self,
        u: Hashable,
        v: Hashable,
        length: L,
        kind: ArcKind = ArcKind.BASIC,
        cost: int = 1,
    ) -> None:
        """Add ``pos(v) - pos(u) >= length``.

        Repeated pairs keep the larger length per arc kind; ``lengths``
        resolves them against the routing channel.
        """
        if length < 0:
            raise ValueError(f"constraint length must be non-negative: {u!r} -> {v!r} = {length}")
        if cost <= 0:
            raise ValueError(f"constraint cost must be positive: {u!r} -> {v!r} = {cost}")

        for node in (u, v):
            if node not in self.digraph:
                self.add_node(node)

        if self.digraph.has_edge(u, v):
            data = self.digraph.edges[u, v]
            by_kind = data["lengths"]
            by_kind[kind] = max(by_kind[kind], length) if kind in by_kind else length
            data["cost"] = max(data["cost"], cost)
            return

        self.digraph.add_edge(u, v, lengths={kind: length}, cost=cost)

    def elements_of(self, node: Hashable) -> list[Hashable]:
        return self.digraph.nodes[node]["elements"] or [node]

    def lengths(self, routing: RoutingChannel | None = None) -> dict[tuple[Hashable, Hashable], L]:
        """Effective arc lengths once the routing channel is taken into account."""
        lengths: dict[tuple[Hashable, Hashable], L] = {}
        for u, v, data in self.digraph.edges(data=True):
            by_kind = data["lengths"]
            if routing is not None:
                lengths[(u, v)] = max(routing.arc_length(length, kind) for kind, length in by_kind.items())
            else:
                lengths[(u, v)] = max(by_kind.values())
        return lengths


# ─── Coordinate Helpers ───────────────────────────────────────────────────────


def longest_paths(cg: ConstraintGraph[L], lengths: dict[tuple[Hashable, Hashable], L]) -> dict[Hashable, L]:
    """Smallest feasible coordinates: pos(v) = max(pos(u) + len) over arcs into v.

    Arcs are relaxed round by round (in topological order when the graph
    is acyclic, so one round suffices). A coordinate that still changes in
    round |V| can only come from a cycle of positive length.

    Raises:
        CompactionError: if the constraints contain a positive-length cycle.
    """
    g = cg.digraph
    pos: dict[Hashable, L] = {v: cg.zero for v in g.nodes}
    if not pos:
        return pos

    order = list(nx.topological_sort(g)) if nx.is_directed_acyclic_graph(g) else list(g.nodes)
    arcs = [(u, v, lengths[(u, v)]) for u in order for v in g.successors(u)]

    for _round in range(len(pos)):
        changed = False
        for u, v, length in arcs:
            candidate = pos[u] + length
            if candidate > pos[v]:
                pos[v] = candidate
                changed = True
        if not changed:
            return pos

    raise CompactionError(f"constraint graph on axis {cg.axis.value} contains a cycle of positive length")


def total_length(cg: ConstraintGraph[L], positions: dict[Hashable, L]) -> L:
    """Cost-weighted sum of ``pos(v) - pos(u)`` over all arcs."""
    total = cg.zero
    for u, v, data in cg.digraph.edges(data=True):
        total += data["cost"] * (positions[v] - positions[u])
    return total


def is_feasible(
    cg: ConstraintGraph[L],
    positions: dict[Hashable, L],
    routing: RoutingChannel | None = None,
) -> bool:
    """True if every node has a position and every arc is satisfied."""
    if any(v not in positions for v in cg.digraph.nodes):
        return False
    for (u, v), length in cg.lengths(routing).items():
        if positions[v] - positions[u] - length < -_TIGHT_TOLERANCE:
            return False
    return True


def pseudo_components(
    cg: ConstraintGraph[L],
    lengths: dict[tuple[Hashable, Hashable], L],
    positions: dict[Hashable, L],
) -> dict[Hashable, int]:
    """Map every node to the id of its pseudo-component.

    Pseudo-components are the connected components of the tight arcs
    (slack zero), ignoring direction. Ids follow node order.
    """
    tight: nx.Graph = nx.Graph()
    tight.add_nodes_from(cg.digraph.nodes)
    for (u, v), length in lengths.items():
        if positions[v] - positions[u] - length <= _TIGHT_TOLERANCE:
            tight.add_edge(u, v)

    component: dict[Hashable, int] = {}
    for cid, members in enumerate(nx.connected_components(tight)):
        for v in members:
            component[v] = cid
    return component


# ─── Compaction ───────────────────────────────────────────────────────────────


class LongestPathCompaction:
    """Compaction by longest paths in the constraint graph.

    ``tighten`` enables the improvement pass; ``max_improvement_steps``
    bounds the number of pseudo-component moves it makes (0 = no limit).
    """

    def __init__(self, config: CompactionConfig | None = None) -> None:
        self._config = config if config is not None else CompactionConfig()

    @property
    def tighten(self) -> bool:
        return self._config.tighten

    @tighten.setter
    def tighten(self, select: bool) -> None:
        self._config = dataclasses.replace(self._config, tighten=select)

    @property
    def max_improvement_steps(self) -> int:
        return self._config.max_improvement_steps

    @max_improvement_steps.setter
    def max_improvement_steps(self, max_steps: int) -> None:
        self._config = dataclasses.replace(self._config, max_improvement_steps=max_steps)

    def constructive_heuristics(
        self,
        cg: ConstraintGraph[L],
        routing: RoutingChannel,
        drawing: GridDrawing,
    ) -> None:
        """Assign the longest-path coordinates of ``cg`` to the drawing."""
        pos = longest_paths(cg, cg.lengths(routing))
        self._write(cg, pos, drawing)
        logger.debug("constructive compaction on axis %s: %d nodes", cg.axis.value, len(pos))

    def improvement_heuristics(
        self,
        cg: ConstraintGraph[L],
        routing: RoutingChannel,
        drawing: GridDrawing,
    ) -> None:
        """Shorten the total arc length of the drawing's current coordinates."""
        if not self.tighten:
            return

        lengths = cg.lengths(routing)
        pos = self._read(cg, drawing)
        if pos is None or not is_feasible(cg, pos, routing):
            logger.warning(
                "drawing coordinates on axis %s are missing or infeasible; starting from longest paths",
                cg.axis.value,
            )
            pos = longest_paths(cg, lengths)

        steps = self._move_components(cg, lengths, pos)

        # Backward moves may leave the range; shift so nothing is below zero.
        low = min(pos.values(), default=cg.zero)
        if low < cg.zero:
            for v in pos:
                pos[v] -= low

        self._write(cg, pos, drawing)
        logger.debug("tightening on axis %s: %d moves", cg.axis.value, steps)

    def _move_components(
        self,
        cg: ConstraintGraph[L],
        lengths: dict[tuple[Hashable, Hashable], L],
        pos: dict[Hashable, L],
    ) -> int:
        # Every move makes a boundary arc tight and so merges two
        # pseudo-components: |V| bounds the number of moves.
        limit = self.max_improvement_steps or len(cg)
        steps = 0
        while steps < limit:
            shift, members = self._best_move(cg, lengths, pos)
            if not shift:
                break
            for v in members:
                pos[v] += shift
            steps += 1
        return steps

    def _best_move(
        self,
        cg: ConstraintGraph[L],
        lengths: dict[tuple[Hashable, Hashable], L],
        pos: dict[Hashable, L],
    ) -> tuple[L | None, list[Hashable]]:
        """First pseudo-component whose rigid shift shortens the drawing, and the shift."""
        g = cg.digraph
        component = pseudo_components(cg, lengths, pos)

        groups: dict[int, list[Hashable]] = {}
        for v in g.nodes:
            groups.setdefault(component[v], []).append(v)

        for cid, members in groups.items():
            in_cost = out_cost = 0
            in_slack: L | None = None
            out_slack: L | None = None

            for v in members:
                for u in g.predecessors(v):
                    if component[u] == cid:
                        continue
                    in_cost += g.edges[u, v]["cost"]
                    slack = pos[v] - pos[u] - lengths[(u, v)]
                    if in_slack is None or slack < in_slack:
                        in_slack = slack
                for w in g.successors(v):
                    if component[w] == cid:
                        continue
                    out_cost += g.edges[v, w]["cost"]
                    slack = pos[w] - pos[v] - lengths[(v, w)]
                    if out_slack is None or slack < out_slack:
                        out_slack = slack

            if out_cost > in_cost and out_slack is not None:
                return out_slack, members
            if in_cost > out_cost and in_slack is not None:
                return -in_slack, members

        return None, []

    @staticmethod
    def _read(cg: ConstraintGraph[L], drawing: GridDrawing) -> dict[Hashable, L] | None:
        coords = drawing.coords(cg.axis)
        pos: dict[Hashable, L] = {}
        for node in cg.digraph.nodes:
            for element in cg.elements_of(node):
                if element in coords:
                    pos[node] = coords[element]
                    break
            else:
                return None
        return pos

    @staticmethod
    def _write(cg: ConstraintGraph[L], pos: dict[Hashable, L], drawing: GridDrawing) -> None:
        coords = drawing.coords(cg.axis)
        for node, value in pos.items():
            for element in cg.elements_of(node):
                coords[element] = value
