"""Tile data model."""

from dataclasses import dataclass
from typing import List, Tuple

from core.grid import Grid
from .edges import side_codes


@dataclass(frozen=True)
class Tile:
    """
    A parsed square tile.

    Attributes:
        id: Tile id from the input header
        sides: Edge codes (right, bottom, left, top), read clockwise
        inner: Pixels with the 1-pixel border stripped
        pixels: Full pixels including the border
    """
    id: int
    sides: Tuple[int, int, int, int]
    inner: Grid
    pixels: Grid

    @classmethod
    def from_pixels(cls, tile_id: int, pixels: Grid) -> 'Tile':
        """Create a tile from its full square pixel grid."""
        size = pixels.width
        if size < 3 or pixels.height != size:
            raise ValueError(f"Tile {tile_id}: expected square tile of size >= 3, "
                             f"got {pixels.width}x{pixels.height}")
        return cls(
            id=tile_id,
            sides=side_codes(pixels),
            inner=pixels.slice(1, 1, size - 2, size - 2),
            pixels=pixels.copy(),
        )

    @property
    def border_size(self) -> int:
        return self.pixels.width

    @property
    def inner_size(self) -> int:
        return self.inner.width


def create_tiles(blocks: List[Tuple[int, Grid]]) -> List[Tile]:
    """Turn parsed (id, pixels) blocks into tiles, keeping input order."""
    return [Tile.from_pixels(tile_id, pixels) for tile_id, pixels in blocks]
