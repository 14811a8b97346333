"""Solver configuration."""

from dataclasses import dataclass
from typing import Optional, Tuple

from solvers.assembler import TRAVERSALS
from solvers.pattern_scan import SEA_MONSTER


@dataclass
class SolverConfig:
    """All configurable parameters."""
    # Worklist order for assembly ('depth' = stack, 'breadth' = queue)
    traversal: str = 'depth'
    # Shuffle neighbor order with this seed (None keeps side order)
    seed: Optional[int] = None

    # Marker pattern rows; ignored when pattern_path is set
    pattern_lines: Tuple[str, ...] = SEA_MONSTER
    # Text file ('#'/'.' rows) or bitmap image (dark pixels = on)
    pattern_path: Optional[str] = None

    # Canvas image output
    output_path: Optional[str] = None
    pixel_scale: int = 4
    show_ids: bool = False

    verbose: bool = True

    def __post_init__(self):
        if self.traversal not in TRAVERSALS:
            raise ValueError(f"traversal must be one of {TRAVERSALS}, got {self.traversal!r}")
        if self.pixel_scale < 1:
            raise ValueError(f"pixel_scale must be >= 1, got {self.pixel_scale}")
