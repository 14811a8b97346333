"""Numpy-backed 2-D grid used for tiles, the assembled canvas and the id grid."""

import numpy as np
from typing import Callable, Iterator, List, Optional, Tuple


class Grid:
    """
    Fixed-size 2-D grid addressed by (x, y), x to the right and y downwards.

    Values live in a numpy array indexed [y, x]. Rotations and flips work in
    place; rotations are only defined for square grids.
    """

    def __init__(self, width: int, height: int, dtype=bool):
        if width < 0 or height < 0:
            raise ValueError(f"Grid size must be non-negative, got {width}x{height}")
        self.values = np.zeros((height, width), dtype=dtype)

    @classmethod
    def new_with(cls, width: int, height: int, get: Callable[[int, int], object],
                 dtype=bool) -> 'Grid':
        """Build a grid by calling get(x, y) for every cell in row-major order."""
        grid = cls(width, height, dtype=dtype)
        for x, y in grid.enumerate():
            grid.values[y, x] = get(x, y)
        return grid

    @classmethod
    def from_array(cls, array) -> 'Grid':
        """Wrap a copy of a 2-D array."""
        array = np.array(array, copy=True)
        if array.ndim != 2:
            raise ValueError(f"Grid needs a 2-D array, got shape {array.shape}")
        grid = cls.__new__(cls)
        grid.values = array
        return grid

    @property
    def width(self) -> int:
        return self.values.shape[1]

    @property
    def height(self) -> int:
        return self.values.shape[0]

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int):
        if not self.contains(x, y):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        return self.values[y, x]

    def try_get(self, x: int, y: int) -> Optional[object]:
        if self.contains(x, y):
            return self.values[y, x]
        return None

    def set(self, x: int, y: int, value) -> None:
        if not self.contains(x, y):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        self.values[y, x] = value

    def enumerate(self) -> Iterator[Tuple[int, int]]:
        """Yield every (x, y) in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def count(self) -> int:
        """Number of truthy cells."""
        return int(np.count_nonzero(self.values))

    def copy(self) -> 'Grid':
        return Grid.from_array(self.values)

    # -------------------------------------------------------------------------
    # In-place symmetry operations
    # -------------------------------------------------------------------------

    def _require_square(self):
        if self.width != self.height:
            raise ValueError(f"Rotation needs a square grid, got {self.width}x{self.height}")

    def rotate_cw(self) -> None:
        self._require_square()
        self.values = np.ascontiguousarray(np.rot90(self.values, k=-1))

    def rotate_ccw(self) -> None:
        self._require_square()
        self.values = np.ascontiguousarray(np.rot90(self.values, k=1))

    def rotate_half(self) -> None:
        self._require_square()
        self.values = np.ascontiguousarray(np.rot90(self.values, k=2))

    def flip_horizontal(self) -> None:
        """Mirror left/right (x -> width - 1 - x)."""
        self.values = np.ascontiguousarray(np.fliplr(self.values))

    def flip_vertical(self) -> None:
        """Mirror top/bottom (y -> height - 1 - y)."""
        self.values = np.ascontiguousarray(np.flipud(self.values))

    # -------------------------------------------------------------------------
    # Sub-regions
    # -------------------------------------------------------------------------

    def slice(self, x: int, y: int, width: int, height: int) -> 'Grid':
        """Copy out the width x height region whose top-left corner is (x, y)."""
        if (x < 0 or y < 0 or width < 0 or height < 0
                or x + width > self.width or y + height > self.height):
            raise IndexError(
                f"Slice {width}x{height} at ({x}, {y}) exceeds {self.width}x{self.height} grid"
            )
        return Grid.from_array(self.values[y:y + height, x:x + width])

    def blit(self, x: int, y: int, other: 'Grid') -> None:
        """Copy other into this grid with its top-left corner at (x, y)."""
        if x < 0 or y < 0 or x + other.width > self.width or y + other.height > self.height:
            raise IndexError(
                f"Cannot blit {other.width}x{other.height} at ({x}, {y}) "
                f"into {self.width}x{self.height} grid"
            )
        self.values[y:y + other.height, x:x + other.width] = other.values

    def to_lines(self, on: str = '#', off: str = '.') -> List[str]:
        return [''.join(on if cell else off for cell in row) for row in self.values]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.values.shape == other.values.shape and bool(np.array_equal(self.values, other.values))

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, dtype={self.values.dtype})"
