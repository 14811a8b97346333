"""
Symmetries of the square (the dihedral group D4).

A Transform first rotates by `rotation` quarter turns clockwise and then,
if `reflection` is set, mirrors left/right. Coordinates are screen
coordinates: x to the right, y downwards.
"""

from dataclasses import dataclass
from typing import List, Tuple

from core.grid import Grid


@dataclass(frozen=True)
class Transform:
    rotation: int = 0
    reflection: bool = False

    def __post_init__(self):
        if self.rotation not in (0, 1, 2, 3):
            raise ValueError(f"Rotation must be 0-3, got {self.rotation}")

    @classmethod
    def identity(cls) -> 'Transform':
        return cls(0, False)

    @classmethod
    def all(cls) -> List['Transform']:
        """The 8 elements: 4 rotations, then the same 4 reflected."""
        return [cls(r, False) for r in range(4)] + [cls(r, True) for r in range(4)]

    def then(self, other: 'Transform') -> 'Transform':
        """This transform followed by other."""
        return compose(self, other)

    def inverse(self) -> 'Transform':
        return inverse(self)

    def apply(self, offset: Tuple[int, int]) -> Tuple[int, int]:
        return apply(self, offset)


def compose(a: Transform, b: Transform) -> Transform:
    """
    Apply a, then b.

    A reflection reverses the sense of the rotations composed after it,
    so the rotations subtract when a is reflected.
    """
    if not a.reflection:
        return Transform((a.rotation + b.rotation) % 4, b.reflection)
    return Transform((a.rotation - b.rotation) % 4, a.reflection != b.reflection)


def inverse(t: Transform) -> Transform:
    # every reflection is its own inverse
    if t.reflection:
        return t
    return Transform((-t.rotation) % 4, False)


def apply(t: Transform, offset: Tuple[int, int]) -> Tuple[int, int]:
    """Rotate then reflect an integer offset."""
    x, y = offset
    for _ in range(t.rotation):
        x, y = -y, x
    if t.reflection:
        x = -x
    return x, y


def apply_to_grid(t: Transform, grid: Grid) -> Grid:
    """Transform a square grid in place and return it."""
    if t.rotation == 1:
        grid.rotate_cw()
    elif t.rotation == 2:
        grid.rotate_half()
    elif t.rotation == 3:
        grid.rotate_ccw()
    if t.reflection:
        grid.flip_horizontal()
    return grid
