"""Drawing reassembly — rotate each component into a minimum-area box and pack.

Phases, per component:
  1. Collect node positions, then bend points, in component order.
  2. Center the point set on its centroid (the drawing is not touched yet).
  3. Convex hull of the centered points.
  4. Rotating calipers: try every hull edge as one side of the bounding box
     and keep the smallest area (later candidates win ties).
  5. Rotation that puts the box's long side horizontal.
  6. Integer box (padded by the border) and the offset that aligns the
     rotated drawing with the box corner.

Then all boxes go through the packer. Only once every box has a placement
is a single rigid transform per component (center, rotate, then translate
to the packed position) mapped over every node and every bend point.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from orthopack.components import Component, ComponentPartition
from orthopack.config import PackingConfig
from orthopack.errors import PackingError
from orthopack.geometry import ConvexHull, atan2ex, centroid, rotate_point, transform_point
from orthopack.graph import ORIGIN, Attr, DrawingGraph, Point
from orthopack.packing import Box, Packer, Placement, TileToRowsPacker

logger = logging.getLogger(__name__)

# Box used when the hull has at most one point.
_DEGENERATE_NORMAL = Point(1.0, 1.0)
_MIN_EXTENT: float = 1.0


@dataclass
class ComponentFrame:
    """Where a component sits relative to its packed box.

    ``offset`` is expressed in the rotated, centroid-relative frame; a point
    ``p`` of the centered component ends up at
    ``rotate(p, rotation) + placement - offset``.
    """

    centroid: Point
    rotation: float
    width: float
    height: float
    box: Box
    offset: Point
    placement: Placement | None = None

    @property
    def shift(self) -> Point:
        if self.placement is None:
            raise ValueError("component has not been packed yet")
        return Point(self.placement[0] - self.offset.x, self.placement[1] - self.offset.y)

    def transform(self, original: Point) -> Point:
        """Map a point of the component's pre-reassembly drawing to its final position."""
        return transform_point(original - self.centroid, self.rotation, self.shift)


# ─── Point Collection ─────────────────────────────────────────────────────────


def collect_points(drawing: DrawingGraph, component: Component) -> list[Point]:
    """Node positions in component node order, followed by each edge's bends."""
    points = [drawing.position(v) for v in component.nodes]
    if drawing.has(Attr.EDGE_GRAPHICS):
        for edge in component.edges:
            points.extend(drawing.bends(edge))
    return points


def map_component(drawing: DrawingGraph, component: Component, fn: Callable[[Point], Point]) -> None:
    """Replace every node position and bend point of ``component`` by ``fn(point)``."""
    for v in component.nodes:
        drawing.set_position(v, fn(drawing.position(v)))
    if drawing.has(Attr.EDGE_GRAPHICS):
        for edge in component.edges:
            drawing.set_bends(edge, [fn(p) for p in drawing.bends(edge)])


# ─── Rotating Calipers ────────────────────────────────────────────────────────


def min_area_box(hull: list[Point], ch: ConvexHull) -> tuple[float, float, Point]:
    """Smallest-area oriented box around a counter-clockwise hull.

    Returns ``(width, height, normal)`` where ``normal`` is the unit inward
    normal of the hull edge that the box rests on and ``height`` is measured
    along it. Both extents are at least 1.
    """
    if len(hull) <= 1:
        return _MIN_EXTENT, _MIN_EXTENT, _DEGENERATE_NORMAL

    best_area = math.inf
    best_width = 0.0
    best_height = 0.0
    best_normal = _DEGENERATE_NORMAL

    for i, p in enumerate(hull):
        q = hull[(i + 1) % len(hull)]

        normal = ch.normal(q, p)
        height = 0.0
        for z in hull:
            d = ch.signed_distance(normal, z, q)
            if d > height:
                height = d

        along = ch.normal(ORIGIN, normal)
        left = 0.0
        right = 0.0
        for z in hull:
            d = ch.signed_distance(along, z, q)
            if d > left:
                left = d
            elif d < right:
                right = d
        width = left - right

        height = max(height, _MIN_EXTENT)
        width = max(width, _MIN_EXTENT)
        area = height * width

        if area <= best_area:
            best_area = area
            best_width = width
            best_height = height
            best_normal = normal

    return best_width, best_height, best_normal


# ─── Reassembler ──────────────────────────────────────────────────────────────


class DrawingReassembler:
    """Rotates, boxes and packs the components of a drawing in place."""

    def __init__(
        self,
        packer: Packer | None = None,
        config: PackingConfig | None = None,
        hull: ConvexHull | None = None,
    ) -> None:
        self.packer: Packer = packer if packer is not None else TileToRowsPacker()
        self.config = config if config is not None else PackingConfig()
        self.hull = hull if hull is not None else ConvexHull()

    def reassemble_drawings(self, drawing: DrawingGraph, partition: ComponentPartition) -> list[ComponentFrame]:
        """Pack all components of ``drawing`` and return one frame per component."""
        frames = [self._frame_component(drawing, component) for component in partition.components]
        if not frames:
            return frames

        boxes = [frame.box for frame in frames]
        placements = self.packer.pack(boxes, self.config.target_ratio)
        if len(placements) != len(boxes):
            raise PackingError(f"packer returned {len(placements)} placements for {len(boxes)} boxes")

        for frame, placement in zip(frames, placements):
            frame.placement = (int(placement[0]), int(placement[1]))
        for component, frame in zip(partition.components, frames):
            map_component(drawing, component, frame.transform)

        logger.debug("packed %d components, boxes=%s placements=%s", len(frames), boxes, placements)
        return frames

    def _frame_component(self, drawing: DrawingGraph, component: Component) -> ComponentFrame:
        border = self.config.border
        points = collect_points(drawing, component)

        center = centroid(points)
        points = [p - center for p in points]

        hull = self.hull.hull(points)
        width, height, normal = min_area_box(hull, self.hull)

        angle = -atan2ex(normal.y, normal.x) + 1.5 * math.pi
        if width < height:
            angle += 0.5 * math.pi
            width, height = height, width

        rotated = [rotate_point(p, angle) for p in hull] or [ORIGIN]
        left = min(p.x for p in rotated)
        bottom = max(p.y for p in rotated)
        offset = Point(left - 0.5 * border, bottom - height - 0.5 * border)
        box = (int(width) + border, int(height) + border)

        logger.debug(
            "component %d: %d points, hull %d, rotation %.4f, box %s",
            component.index,
            len(points),
            len(hull),
            angle,
            box,
        )
        return ComponentFrame(
            centroid=center,
            rotation=angle,
            width=width,
            height=height,
            box=box,
            offset=offset,
        )
