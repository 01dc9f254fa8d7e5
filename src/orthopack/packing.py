"""Box packers used to place component drawings next to each other.

Every packer implements the ``Packer`` protocol: it receives the integer box
sizes in component order and returns one ``(x, y)`` offset per box, in the
same order, such that no two placed boxes overlap.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from rectpack import newPacker

from orthopack.errors import PackingError

Box = tuple[int, int]
Placement = tuple[int, int]


class Packer(Protocol):
    """Protocol that all packers must implement."""

    def pack(self, boxes: Sequence[Box], target_ratio: float) -> list[Placement]:
        """Place ``boxes`` without overlap, aiming at ``target_ratio`` (width / height)."""
        ...


def boxes_overlap(a_pos: Placement, a_size: Box, b_pos: Placement, b_size: Box) -> bool:
    """True if the two axis-aligned boxes share interior area."""
    ax, ay = a_pos
    bx, by = b_pos
    aw, ah = a_size
    bw, bh = b_size
    return ax < bx + bw and bx < ax + aw and ay < by + bh and by < ay + ah


# ─── Tile-to-rows ─────────────────────────────────────────────────────────────


@dataclass
class _Row:
    width: int = 0
    height: int = 0
    members: list[int] = field(default_factory=list)


class TileToRowsPacker:
    """Greedy row packer.

    Boxes are taken by decreasing height. Each box is appended to the row
    (or a fresh row below all others) that keeps the bounding drawing
    closest to the target ratio, measured as ``max(width, height * ratio)``.
    """

    def pack(self, boxes: Sequence[Box], target_ratio: float) -> list[Placement]:
        if not boxes:
            return []

        order = sorted(range(len(boxes)), key=lambda i: -boxes[i][1])
        rows: list[_Row] = []
        total_height = 0

        for i in order:
            w, h = boxes[i]
            current_width = max((row.width for row in rows), default=0)

            # Candidate: new row at the bottom.
            best_row = -1
            best_score = max(current_width, w, (total_height + h) * target_ratio)

            for r, row in enumerate(rows):
                width = max(current_width, row.width + w)
                height = total_height + max(0, h - row.height)
                score = max(width, height * target_ratio)
                if score <= best_score:
                    if best_row < 0 or score < best_score:
                        best_row = r
                        best_score = score

            if best_row < 0:
                rows.append(_Row(width=w, height=h, members=[i]))
                total_height += h
            else:
                row = rows[best_row]
                row.members.append(i)
                row.width += w
                if h > row.height:
                    total_height += h - row.height
                    row.height = h

        placements: list[Placement] = [(0, 0)] * len(boxes)
        y = 0
        for row in rows:
            x = 0
            for i in row.members:
                placements[i] = (x, y)
                x += boxes[i][0]
            y += row.height
        return placements


# ─── rectpack ─────────────────────────────────────────────────────────────────


class RectpackPacker:
    """Packer backed by ``rectpack``'s MaxRects bin packer.

    All boxes go into a single strip bin whose width matches the target
    ratio; boxes are never rotated here because the reassembler already
    fixed each component's orientation.
    """

    def pack(self, boxes: Sequence[Box], target_ratio: float) -> list[Placement]:
        if not boxes:
            return []

        total_area = sum(w * h for w, h in boxes)
        bin_width = max(max(w for w, _ in boxes), math.ceil(math.sqrt(total_area * target_ratio)))
        bin_height = sum(h for _, h in boxes)

        packer = newPacker(rotation=False)
        packer.add_bin(bin_width, bin_height)
        for rid, (w, h) in enumerate(boxes):
            packer.add_rect(w, h, rid=rid)
        packer.pack()

        placements: dict[int, Placement] = {}
        for _b, x, y, _w, _h, rid in packer.rect_list():
            placements[rid] = (x, y)

        if len(placements) != len(boxes):
            missing = sorted(set(range(len(boxes))) - set(placements))
            raise PackingError(f"rectpack could not place boxes {missing}")

        return [placements[i] for i in range(len(boxes))]
