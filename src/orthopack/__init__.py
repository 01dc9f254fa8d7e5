"""orthopack — coordinate compaction and component repacking for graph drawings."""

from __future__ import annotations

from orthopack.compaction import (
    ArcKind,
    Axis,
    ConstraintGraph,
    GridDrawing,
    LongestPathCompaction,
    RoutingChannel,
    is_feasible,
    longest_paths,
    pseudo_components,
    total_length,
)
from orthopack.components import Component, ComponentCopy, ComponentPartition
from orthopack.config import CompactionConfig, PackingConfig
from orthopack.errors import CompactionError, OrthopackError, PackingError
from orthopack.geometry import ConvexHull, atan2ex, centroid, rotate_point, transform_point
from orthopack.graph import ORIGIN, Attr, DrawingGraph, Point
from orthopack.packing import Packer, RectpackPacker, TileToRowsPacker, boxes_overlap
from orthopack.reassembly import ComponentFrame, DrawingReassembler, min_area_box
from orthopack.splitter import ComponentSplitterLayout, SecondaryLayout

__all__ = [
    "ORIGIN",
    "ArcKind",
    "Attr",
    "Axis",
    "CompactionConfig",
    "CompactionError",
    "Component",
    "ComponentCopy",
    "ComponentFrame",
    "ComponentPartition",
    "ComponentSplitterLayout",
    "ConstraintGraph",
    "ConvexHull",
    "DrawingGraph",
    "DrawingReassembler",
    "GridDrawing",
    "LongestPathCompaction",
    "OrthopackError",
    "Packer",
    "PackingConfig",
    "PackingError",
    "Point",
    "RectpackPacker",
    "RoutingChannel",
    "SecondaryLayout",
    "TileToRowsPacker",
    "atan2ex",
    "boxes_overlap",
    "centroid",
    "is_feasible",
    "longest_paths",
    "min_area_box",
    "pseudo_components",
    "rotate_point",
    "total_length",
    "transform_point",
]
