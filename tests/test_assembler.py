"""Tests for tile assembly."""

import sys
import os

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from features.edges import side_codes, reverse_code, RIGHT, BOTTOM, LEFT, TOP
from pipeline.tile_pipeline import produce_tiles
from solvers.assembler import anchor_transform, assemble, choose_anchor, tiles_per_side
from solvers.errors import AssemblyError, InconsistentError, NoCornerError
from solvers.neighbors import NeighborGraph
from solvers.transform import Transform, apply_to_grid

from synthetic import make_tile_set, random_tile_text, variants

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")


def example_tiles():
    with open(os.path.join(DATA_DIR, "example_tiles.txt")) as f:
        return produce_tiles(f.read())


def test_example_corner_product():
    assembly = assemble(example_tiles())
    assert assembly.tiles_per_side == 3
    assert sorted(assembly.corner_ids()) == [1171, 1951, 2971, 3079]
    assert assembly.corner_product() == 20899048083289


def test_example_canvas_size_and_active_cells():
    assembly = assemble(example_tiles())
    assert (assembly.canvas.width, assembly.canvas.height) == (24, 24)
    assert assembly.canvas.count() == 303
    assert assembly.inner_size == 8


def test_every_cell_gets_one_tile():
    tiles = example_tiles()
    assembly = assemble(tiles)
    positions = [p.position for p in assembly.placements.values()]
    assert len(set(positions)) == len(tiles)
    assert sorted(int(v) for v in assembly.ids.values.flat) == sorted(t.id for t in tiles)


def test_anchor_faces_left_and_top():
    tiles = example_tiles()
    assembly = assemble(tiles)
    anchor = next(i for i, p in assembly.placements.items() if p.position == (0, 0))
    graph = NeighborGraph(tiles)
    world = assembly.placements[anchor].transform
    assert anchor_transform(graph, anchor) == world
    # open sides end up on the left and top of the world frame
    open_sides = graph.unmatched_sides(anchor)
    facing = sorted((side + world.rotation) % 4 for side in open_sides)
    assert facing == [LEFT, TOP]


def _transformed_codes(tile, transform):
    return side_codes(apply_to_grid(transform, tile.pixels.copy()))


@pytest.mark.parametrize("source", ["example", "synthetic"])
def test_adjacent_borders_match(source):
    if source == "example":
        tiles = example_tiles()
    else:
        tiles = produce_tiles(make_tile_set(4, 4, seed=11)[0])
    assembly = assemble(tiles)
    width = tiles[0].border_size

    by_position = {p.position: (i, p.transform) for i, p in assembly.placements.items()}
    for (x, y), (i, transform) in by_position.items():
        codes = _transformed_codes(tiles[i], transform)
        if (x + 1, y) in by_position:
            j, other = by_position[(x + 1, y)]
            assert codes[RIGHT] == reverse_code(_transformed_codes(tiles[j], other)[LEFT], width)
        if (x, y + 1) in by_position:
            j, other = by_position[(x, y + 1)]
            assert codes[BOTTOM] == reverse_code(_transformed_codes(tiles[j], other)[TOP], width)


@pytest.mark.parametrize("rows,seed", [(3, 1), (4, 2), (5, 3)])
def test_synthetic_reconstruction(rows, seed):
    text, canvas, ids = make_tile_set(rows, rows, seed=seed)
    assembly = assemble(produce_tiles(text))

    matching = [k for k, (c, i) in enumerate(zip(variants(assembly.canvas.values),
                                                 variants(assembly.ids.values)))
                if np.array_equal(c, canvas) and np.array_equal(i, ids)]
    assert len(matching) >= 1


def test_traversal_order_does_not_matter():
    tiles = produce_tiles(make_tile_set(5, 5, seed=7)[0])
    graph = NeighborGraph(tiles)
    reference = assemble(tiles, graph, traversal='depth')

    others = [assemble(tiles, graph, traversal='breadth')]
    others += [assemble(tiles, graph, traversal=order, seed=seed)
               for order in ('depth', 'breadth') for seed in (1, 2, 3)]
    for other in others:
        assert other.canvas == reference.canvas
        assert other.ids == reference.ids
        assert other.placements == reference.placements


def test_unknown_traversal():
    with pytest.raises(ValueError):
        assemble(example_tiles(), traversal='sideways')


def test_tile_count_must_be_square():
    tiles = example_tiles()[:8]
    with pytest.raises(AssemblyError):
        assemble(tiles)
    assert tiles_per_side(16) == 4


def test_single_tile_has_no_corner():
    tiles = produce_tiles(random_tile_text(5))
    with pytest.raises(NoCornerError):
        assemble(tiles)


def test_strip_has_no_usable_corner():
    # a 1x4 strip: the middle tiles have two open sides, but opposite ones
    tiles = produce_tiles(make_tile_set(1, 4, seed=4)[0])
    graph = NeighborGraph(tiles)
    assert len(graph.corners()) == 2
    assert all(anchor_transform(graph, i) is None for i in graph.corners())
    with pytest.raises(NoCornerError):
        choose_anchor(graph)


def test_unreachable_tiles_are_inconsistent():
    text, _, _ = make_tile_set(3, 3, seed=5)
    loose = [random_tile_text(tile_id, seed=100 + tile_id) for tile_id in range(1, 8)]
    tiles = produce_tiles(text + "\n" + "\n\n".join(loose) + "\n")
    assert len(tiles) == 16
    with pytest.raises(InconsistentError):
        assemble(tiles)


def test_oversized_layout_is_inconsistent():
    # 2x8 tiles cannot fit a 4x4 square
    tiles = produce_tiles(make_tile_set(2, 8, seed=6)[0])
    with pytest.raises(InconsistentError):
        assemble(tiles)
