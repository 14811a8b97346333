"""
Tile assembly.

Anchors a corner tile at the top-left cell, then walks the neighbor graph
assigning each tile a world transform and grid position, and paints the
transformed tile interiors into a single canvas.
"""

import math
import random
import numpy as np
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from core.grid import Grid
from features.edges import LEFT
from features.tiles import Tile
from .errors import AssemblyError, InconsistentError, NoCornerError
from .neighbors import NeighborGraph
from .transform import Transform, apply, apply_to_grid, compose


# Unit step towards each side: right, bottom, left, top
UNIT_STEPS = ((1, 0), (0, 1), (-1, 0), (0, -1))

TRAVERSALS = ('depth', 'breadth')


@dataclass(frozen=True)
class Placement:
    position: Tuple[int, int]
    transform: Transform


@dataclass
class Assembly:
    """
    Result of assembling a tile set.

    Attributes:
        canvas: Boolean grid of all tile interiors, (size * inner)^2
        ids: Tile id per grid cell, size^2
        placements: Tile index -> world position and transform, in visit order
        inner_size: Interior size of a single tile
    """
    canvas: Grid
    ids: Grid
    placements: Dict[int, Placement]
    inner_size: int

    @property
    def tiles_per_side(self) -> int:
        return self.ids.width

    def corner_ids(self) -> List[int]:
        last = self.tiles_per_side - 1
        return [int(self.ids.get(x, y)) for x, y in ((0, 0), (last, 0), (0, last), (last, last))]

    def corner_product(self) -> int:
        return math.prod(self.corner_ids())


def tiles_per_side(tile_count: int) -> int:
    size = math.isqrt(tile_count)
    if tile_count == 0 or size * size != tile_count:
        raise AssemblyError(f"Number of tiles ({tile_count}) is not a perfect square")
    return size


def anchor_transform(graph: NeighborGraph, index: int) -> Optional[Transform]:
    """
    Rotation that turns a corner's two unmatched sides to face left and top.

    Returns None when the unmatched sides are not adjacent.
    """
    missing = graph.unmatched_sides(index)
    if len(missing) != 2:
        return None
    for side in missing:
        if (side + 1) % 4 in missing:
            return Transform((LEFT - side) % 4, False)
    return None


def choose_anchor(graph: NeighborGraph) -> Tuple[int, Transform]:
    """First corner tile (by index) together with its anchoring transform."""
    corners = graph.corners()
    if not corners:
        raise NoCornerError("No tile has exactly two unmatched sides")
    for index in corners:
        transform = anchor_transform(graph, index)
        if transform is not None:
            return index, transform
    ids = [graph.tiles[i].id for i in corners]
    raise NoCornerError(f"Corner candidates {ids} have no two adjacent unmatched sides")


def place_tiles(graph: NeighborGraph, anchor: int, anchor_world: Transform, size: int,
                traversal: str = 'depth', seed: Optional[int] = None) -> Dict[int, Placement]:
    """
    Propagate world transforms and positions from the anchor over the graph.

    Args:
        graph: Neighbor graph of the tile set
        anchor: Index of the tile placed at (0, 0)
        anchor_world: World transform of the anchor
        size: Tiles per side of the final square
        traversal: 'depth' (stack) or 'breadth' (queue)
        seed: If given, neighbors are pushed in a shuffled order

    Returns:
        Tile index -> Placement, in the order tiles were placed

    Raises:
        InconsistentError: If a tile is reached with a different placement,
            two tiles claim one cell, a tile lands outside the square, or
            some tiles are unreachable
    """
    if traversal not in TRAVERSALS:
        raise ValueError(f"Unknown traversal: {traversal!r} (expected one of {TRAVERSALS})")
    rng = random.Random(seed) if seed is not None else None

    tiles = graph.tiles
    placements: Dict[int, Placement] = {}
    occupied: Dict[Tuple[int, int], int] = {}
    work = deque([((0, 0), anchor, anchor_world)])

    while work:
        position, index, world = work.pop() if traversal == 'depth' else work.popleft()
        placement = Placement(position, world)

        if index in placements:
            if placements[index] != placement:
                raise InconsistentError(
                    f"Tile {tiles[index].id} reached as {placement}, already placed as {placements[index]}"
                )
            continue

        x, y = position
        if not (0 <= x < size and 0 <= y < size):
            raise InconsistentError(f"Tile {tiles[index].id} lands outside the {size}x{size} square at {position}")
        if position in occupied:
            raise InconsistentError(
                f"Tiles {tiles[occupied[position]].id} and {tiles[index].id} both placed at {position}"
            )
        placements[index] = placement
        occupied[position] = index

        sides = list(range(4))
        if rng is not None:
            rng.shuffle(sides)
        for side in sides:
            entry = graph.neighbors(index)[side]
            if entry is None:
                continue
            neighbor, neighbor_to_tile = entry
            dx, dy = apply(world, UNIT_STEPS[side])
            work.append(((x + dx, y + dy), neighbor, compose(neighbor_to_tile, world)))

    if len(placements) != len(tiles):
        missing = [tiles[i].id for i in range(len(tiles)) if i not in placements]
        raise InconsistentError(f"{len(missing)} tile(s) unreachable from the anchor: {missing}")
    return placements


def paint(tiles: List[Tile], placements: Dict[int, Placement], size: int) -> Tuple[Grid, Grid]:
    """Blit every transformed tile interior into the canvas and record ids."""
    inner = tiles[0].inner_size
    canvas = Grid(size * inner, size * inner, dtype=bool)
    ids = Grid(size, size, dtype=np.int64)

    for index, placement in placements.items():
        x, y = placement.position
        image = apply_to_grid(placement.transform, tiles[index].inner.copy())
        canvas.blit(x * inner, y * inner, image)
        ids.set(x, y, tiles[index].id)

    return canvas, ids


def assemble(tiles: List[Tile], graph: Optional[NeighborGraph] = None,
             traversal: str = 'depth', seed: Optional[int] = None,
             verbose: bool = False) -> Assembly:
    """
    Assemble a tile set into one image.

    Args:
        tiles: Parsed tiles
        graph: Prebuilt neighbor graph (built from tiles if None)
        traversal: 'depth' or 'breadth' worklist order
        seed: Optional shuffle seed for neighbor order
        verbose: Print progress info

    Returns:
        Assembly with canvas, id grid and per-tile placements
    """
    size = tiles_per_side(len(tiles))
    if graph is None:
        graph = NeighborGraph(tiles, verbose=verbose)

    anchor, anchor_world = choose_anchor(graph)
    if verbose:
        print(f"  Anchor: tile {tiles[anchor].id} (rotation {anchor_world.rotation})")

    placements = place_tiles(graph, anchor, anchor_world, size, traversal=traversal, seed=seed)
    canvas, ids = paint(tiles, placements, size)

    if verbose:
        print(f"  Placed {len(placements)} tiles into a {size}x{size} grid "
              f"({canvas.width}x{canvas.height} pixels)")

    return Assembly(canvas=canvas, ids=ids, placements=placements, inner_size=tiles[0].inner_size)
