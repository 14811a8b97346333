"""
Marker search over the 8 orientations of an assembled canvas.

A marker matches at an offset when every on-cell of the pattern is also on in
the canvas; extra on-cells in the canvas do not matter.
"""

import numpy as np
from dataclasses import dataclass, field
from scipy.signal import correlate2d
from typing import List, Tuple

from core.grid import Grid
from core.parsing import parse_pattern
from .errors import PatternNotFoundError
from .transform import Transform, apply_to_grid


SEA_MONSTER = (
    "                  # ",
    "#    ##    ##    ###",
    " #  #  #  #  #  #   ",
)


def default_pattern() -> Grid:
    return parse_pattern(SEA_MONSTER)


@dataclass
class ScanResult:
    """
    Attributes:
        transform: Canvas orientation in which the marker was found
        matches: Number of marker occurrences in that orientation
        offsets: Top-left (x, y) of each occurrence, in the oriented canvas
        roughness: Active canvas cells minus the cells covered by markers
    """
    transform: Transform
    matches: int
    offsets: List[Tuple[int, int]] = field(default_factory=list)
    roughness: int = 0


def find_matches(canvas: Grid, pattern: Grid) -> List[Tuple[int, int]]:
    """
    Every (x, y) offset where the pattern fits and all its on-cells are on.

    Offsets are in row-major order.
    """
    if pattern.width > canvas.width or pattern.height > canvas.height:
        return []

    mask = pattern.values.astype(np.int32)
    overlap = correlate2d(canvas.values.astype(np.int32), mask, mode='valid')
    ys, xs = np.nonzero(overlap == int(mask.sum()))
    return [(int(x), int(y)) for y, x in zip(ys, xs)]


def scan(canvas: Grid, pattern: Grid, verbose: bool = False) -> ScanResult:
    """
    Try the canvas in each orientation and stop at the first with matches.

    Args:
        canvas: Assembled image (left untouched)
        pattern: Marker pattern
        verbose: Print progress info

    Returns:
        ScanResult for the first matching orientation

    Raises:
        PatternNotFoundError: If no orientation contains the marker
    """
    for transform in Transform.all():
        oriented = apply_to_grid(transform, canvas.copy())
        offsets = find_matches(oriented, pattern)
        if verbose:
            print(f"  rotation={transform.rotation} reflection={transform.reflection}: "
                  f"{len(offsets)} match(es)")
        if offsets:
            roughness = canvas.count() - len(offsets) * pattern.count()
            return ScanResult(transform=transform, matches=len(offsets),
                              offsets=offsets, roughness=roughness)

    raise PatternNotFoundError(
        f"Pattern ({pattern.width}x{pattern.height}) not found in any orientation "
        f"of the {canvas.width}x{canvas.height} canvas"
    )
