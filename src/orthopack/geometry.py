"""Plane geometry helpers: angles, rigid transforms and convex hulls."""

from __future__ import annotations

import math
from collections.abc import Sequence

from shapely.geometry import LineString, MultiPoint, Point as ShapelyPoint, Polygon
from shapely.geometry.polygon import orient

from orthopack.graph import Point

# ─── Angles and Transforms ────────────────────────────────────────────────────


def atan2ex(y: float, x: float) -> float:
    """Like ``math.atan2`` but with fixed results for axis-aligned vectors.

    x == 0 gives π/2 (y >= 0) or 3π/2 (y < 0); y == 0 gives 0 (x >= 0) or π.
    The y == 0 rule wins for the zero vector, which therefore maps to 0.
    """
    angle = math.atan2(y, x)

    if x == 0:
        angle = 0.5 * math.pi if y >= 0 else 1.5 * math.pi

    if y == 0:
        angle = 0.0 if x >= 0 else math.pi

    return angle


def rotate_point(p: Point, angle: float) -> Point:
    """Rotate ``p`` counter-clockwise by ``angle`` radians about the origin."""
    c = math.cos(angle)
    s = math.sin(angle)
    return Point(p.x * c - p.y * s, p.x * s + p.y * c)


def transform_point(p: Point, angle: float, shift: Point) -> Point:
    """Rotate ``p`` about the origin, then translate it by ``shift``."""
    return rotate_point(p, angle) + shift


def centroid(points: Sequence[Point]) -> Point:
    """Arithmetic mean of ``points`` (every point weighted equally)."""
    if not points:
        raise ValueError("centroid of an empty point set")
    n = len(points)
    return Point(sum(p.x for p in points) / n, sum(p.y for p in points) / n)


# ─── Convex Hull ──────────────────────────────────────────────────────────────


class ConvexHull:
    """Convex hull and the line predicates used by the rotating calipers."""

    def hull(self, points: Sequence[Point]) -> list[Point]:
        """Return the hull vertices in counter-clockwise order.

        Degenerate inputs give the extreme points only: nothing for an empty
        set, one point if all points coincide, the two endpoints if they are
        collinear.
        """
        if not points:
            return []

        geom = MultiPoint([(p.x, p.y) for p in points]).convex_hull

        if isinstance(geom, ShapelyPoint):
            return [Point(geom.x, geom.y)]
        if isinstance(geom, LineString):
            coords = list(geom.coords)
            return [Point(*coords[0]), Point(*coords[-1])]
        if isinstance(geom, Polygon):
            ring = list(orient(geom, sign=1.0).exterior.coords)[:-1]
            return [Point(x, y) for x, y in ring]
        return []

    @staticmethod
    def normal(start: Point, end: Point) -> Point:
        """Unit normal of the segment start→end, rotated clockwise from it.

        Coincident endpoints give the zero vector.
        """
        nx_ = end.y - start.y
        ny_ = start.x - end.x
        length = math.hypot(nx_, ny_)
        if length == 0:
            return Point(0.0, 0.0)
        return Point(nx_ / length, ny_ / length)

    @staticmethod
    def signed_distance(normal: Point, point: Point, reference: Point) -> float:
        """Distance of ``point`` from the line through ``reference`` along ``normal``."""
        return (point.x - reference.x) * normal.x + (point.y - reference.y) * normal.y
