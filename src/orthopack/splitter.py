"""Component splitter — lay out each connected component alone, then repack."""

from __future__ import annotations

import logging
from typing import Protocol

from orthopack.components import ComponentCopy, ComponentPartition
from orthopack.config import PackingConfig
from orthopack.graph import DrawingGraph
from orthopack.packing import Packer
from orthopack.reassembly import DrawingReassembler

logger = logging.getLogger(__name__)


class SecondaryLayout(Protocol):
    """Protocol for the layout applied to every component copy."""

    def layout(self, drawing: DrawingGraph) -> None:
        """Lay out ``drawing`` in place."""
        ...


class ComponentSplitterLayout:
    """Splits a drawing into connected components and packs their layouts.

    Each component is copied into its own ``DrawingGraph``, laid out by the
    secondary layout, copied back, and finally the reassembler rotates and
    packs all component drawings into one.
    """

    def __init__(
        self,
        secondary_layout: SecondaryLayout | None = None,
        packer: Packer | None = None,
        config: PackingConfig | None = None,
    ) -> None:
        self.secondary_layout = secondary_layout
        self.config = config if config is not None else PackingConfig()
        self.reassembler = DrawingReassembler(packer=packer, config=self.config)

    @property
    def packer(self) -> Packer:
        return self.reassembler.packer

    def call(self, drawing: DrawingGraph) -> None:
        """Lay out ``drawing`` in place, one component at a time."""
        if self.secondary_layout is None:
            logger.debug("no secondary layout configured, nothing to do")
            return

        partition = ComponentPartition.of(drawing.graph)
        if not partition.components:
            return

        logger.debug("laying out %d components", len(partition))

        for component in partition.components:
            copy = ComponentCopy.build(drawing, component)
            self.secondary_layout.layout(copy.drawing)
            copy.write_back(drawing)

        self.reassembler.reassemble_drawings(drawing, partition)

    # A splitter can itself serve as another splitter's secondary layout.
    layout = call
