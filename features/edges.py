"""Border fingerprints for square tiles."""

import numpy as np
from typing import Tuple

from core.grid import Grid


RIGHT, BOTTOM, LEFT, TOP = 0, 1, 2, 3
SIDE_NAMES = ('right', 'bottom', 'left', 'top')


def border_pixels(pixels: Grid, side: int) -> np.ndarray:
    """
    Border pixels of one side, read clockwise around the tile.

    right: top to bottom, bottom: right to left,
    left: bottom to top, top: left to right.
    """
    values = pixels.values
    if side == RIGHT:
        return values[:, -1]
    elif side == BOTTOM:
        return values[-1, ::-1]
    elif side == LEFT:
        return values[::-1, 0]
    elif side == TOP:
        return values[0, :]
    raise ValueError(f"Unknown side: {side}")


def encode_border(strip) -> int:
    """Bit i of the code is pixel i of the strip."""
    code = 0
    for i, pixel in enumerate(strip):
        if pixel:
            code |= 1 << i
    return code


def side_codes(pixels: Grid) -> Tuple[int, int, int, int]:
    """Edge codes for (right, bottom, left, top)."""
    if pixels.width != pixels.height:
        raise ValueError(f"Tile must be square, got {pixels.width}x{pixels.height}")
    return tuple(encode_border(border_pixels(pixels, side)) for side in range(4))


def reverse_code(code: int, width: int) -> int:
    """Reverse the low `width` bits of code: the same border read from its other end."""
    result = 0
    for _ in range(width):
        result = (result << 1) | (code & 1)
        code >>= 1
    return result
