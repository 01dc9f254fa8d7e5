"""Configuration for compaction and component packing.

Both configs are immutable and validated on construction.
"""

from __future__ import annotations

from dataclasses import dataclass

# Margin added to each component box dimension before packing.
DEFAULT_BORDER: int = 30
# Width / height ratio the packer aims for.
DEFAULT_TARGET_RATIO: float = 1.0
# 0 means "run the tightening pass until nothing moves".
DEFAULT_MAX_IMPROVEMENT_STEPS: int = 0


@dataclass(frozen=True)
class CompactionConfig:
    """Options of the longest-path compaction.

    Attributes:
        tighten: Run the tightening pass in ``improvement_heuristics``.
        max_improvement_steps: Upper bound on pseudo-component moves;
            0 means no upper limit.
    """

    tighten: bool = True
    max_improvement_steps: int = DEFAULT_MAX_IMPROVEMENT_STEPS

    def __post_init__(self) -> None:
        if self.max_improvement_steps < 0:
            raise ValueError(f"max_improvement_steps must be >= 0: {self.max_improvement_steps}")


@dataclass(frozen=True)
class PackingConfig:
    """Options of the component splitter and the drawing reassembler.

    Attributes:
        border: Margin (drawing units) added to both box dimensions.
        target_ratio: Desired width / height ratio of the packed drawing.
    """

    border: int = DEFAULT_BORDER
    target_ratio: float = DEFAULT_TARGET_RATIO

    def __post_init__(self) -> None:
        if self.border < 0:
            raise ValueError(f"border must be non-negative: {self.border}")
        if self.target_ratio <= 0:
            raise ValueError(f"target_ratio must be positive: {self.target_ratio}")
