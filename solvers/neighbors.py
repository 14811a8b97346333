"""
Neighbor graph over a tile set.

Two tiles that share a border both read it clockwise around themselves, so
they store it in opposite directions: a match against the reversed code means
the tiles meet without a reflection, a match against the code itself means
one of them is mirrored.
"""

from collections import Counter, defaultdict
from typing import Dict, List, Optional, Tuple

from features.edges import reverse_code
from features.tiles import Tile
from .errors import AmbiguousBorderError
from .transform import Transform


NeighborEntry = Optional[Tuple[int, Transform]]


def mirrored_side(side: int) -> int:
    """Side index after a left/right mirror: right and left swap."""
    return (2 - side) % 4


def alignment_transform(side: int, other_side: int, reflection: bool) -> Transform:
    """
    Transform taking the neighbor's frame into this tile's frame.

    The neighbor's matched side must end up facing this tile, i.e. pointing
    the opposite way from `side`.
    """
    facing = (side + 2) % 4
    if reflection:
        facing = mirrored_side(facing)
    return Transform((facing - other_side) % 4, reflection)


class NeighborGraph:
    """
    For every tile and side, the (at most one) matching neighbor.

    Attributes:
        tiles: Tiles addressed by index
        entries: entries[i][side] is (neighbor_index, transform) or None
    """

    def __init__(self, tiles: List[Tile], verbose: bool = False):
        self.tiles = tiles
        self.entries: List[List[NeighborEntry]] = [[None] * 4 for _ in tiles]
        self.index = self._build_index()
        self._match_all()

        if verbose:
            histogram = self.open_side_counts()
            print(f"  Neighbor graph: {len(tiles)} tiles, {self.edge_count()} shared borders")
            for open_sides in sorted(histogram):
                print(f"    {histogram[open_sides]} tile(s) with {open_sides} unmatched side(s)")

    def _build_index(self) -> Dict[int, List[Tuple[int, int]]]:
        index = defaultdict(list)
        for i, tile in enumerate(self.tiles):
            for side, code in enumerate(tile.sides):
                index[code].append((i, side))
        return index

    def _match_all(self):
        for i, tile in enumerate(self.tiles):
            width = tile.border_size
            for side, code in enumerate(tile.sides):
                direct = [(j, t) for j, t in self.index.get(reverse_code(code, width), ()) if j != i]
                mirrored = [(j, t) for j, t in self.index.get(code, ())
                            if j != i and (j, t) not in direct]

                candidates = ([(j, t, False) for j, t in direct]
                              + [(j, t, True) for j, t in mirrored])
                if not candidates:
                    continue
                if len(candidates) > 1:
                    found = ', '.join(f"tile {self.tiles[j].id} side {t}" for j, t, _ in candidates)
                    raise AmbiguousBorderError(
                        f"Tile {tile.id} side {side} matches {len(candidates)} borders: {found}"
                    )

                j, t, reflection = candidates[0]
                self.entries[i][side] = (j, alignment_transform(side, t, reflection))

    def neighbors(self, i: int) -> List[NeighborEntry]:
        return self.entries[i]

    def unmatched_sides(self, i: int) -> List[int]:
        return [side for side, entry in enumerate(self.entries[i]) if entry is None]

    def corners(self) -> List[int]:
        """Indices of tiles with exactly two unmatched sides."""
        return [i for i in range(len(self.tiles)) if len(self.unmatched_sides(i)) == 2]

    def open_side_counts(self) -> Counter:
        """Histogram: number of unmatched sides -> number of tiles."""
        return Counter(len(self.unmatched_sides(i)) for i in range(len(self.tiles)))

    def edge_count(self) -> int:
        """Number of shared borders (each counted once)."""
        matched = sum(1 for row in self.entries for entry in row if entry is not None)
        return matched // 2
