"""Group-law tests for the D4 transforms."""

import sys
import os

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.grid import Grid
from solvers.transform import Transform, apply, apply_to_grid, compose, inverse


ALL = Transform.all()
UNITS = [(1, 0), (0, 1), (-1, 0), (0, -1)]
OFFSETS = UNITS + [(2, 3), (-4, 1), (0, 0), (5, -7)]


def test_eight_distinct_elements():
    assert len(set(ALL)) == 8
    assert ALL[0] == Transform.identity()
    assert not any(t.reflection for t in ALL[:4])
    assert all(t.reflection for t in ALL[4:])


def test_closure_and_identity():
    identity = Transform.identity()
    for a in ALL:
        assert compose(a, identity) == a
        assert compose(identity, a) == a
        for b in ALL:
            assert compose(a, b) in ALL


def test_associativity():
    for a in ALL:
        for b in ALL:
            for c in ALL:
                assert compose(compose(a, b), c) == compose(a, compose(b, c))


def test_inverse():
    for t in ALL:
        assert compose(t, inverse(t)) == Transform.identity()
        assert compose(inverse(t), t) == Transform.identity()
        assert t.inverse() == inverse(t)


def test_composition_rule():
    assert compose(Transform(1, False), Transform(2, True)) == Transform(3, True)
    assert compose(Transform(1, True), Transform(2, False)) == Transform(3, True)
    assert compose(Transform(1, True), Transform(3, True)) == Transform(2, False)


def test_apply_is_a_bijection_on_unit_offsets():
    for t in ALL:
        images = [apply(t, unit) for unit in UNITS]
        assert sorted(images) == sorted(UNITS)


def test_apply_then_inverse_round_trips():
    for t in ALL:
        for p in OFFSETS:
            assert apply(inverse(t), apply(t, p)) == p


def test_compose_means_first_then_second():
    for a in ALL:
        for b in ALL:
            for p in OFFSETS:
                assert apply(compose(a, b), p) == apply(b, apply(a, p))
                assert a.then(b).apply(p) == b.apply(a.apply(p))


def test_quarter_turn_is_clockwise_on_screen():
    # x right, y down: right -> down -> left -> up
    quarter = Transform(1, False)
    assert apply(quarter, (1, 0)) == (0, 1)
    assert apply(quarter, (0, 1)) == (-1, 0)
    assert apply(Transform(0, True), (1, 0)) == (-1, 0)


def test_invalid_rotation():
    with pytest.raises(ValueError):
        Transform(4, False)


def test_grid_transform_matches_offset_transform():
    size = 5
    for t in ALL:
        for x, y in [(0, 0), (4, 1), (2, 3), (1, 4)]:
            grid = Grid(size, size)
            grid.set(x, y, True)
            apply_to_grid(t, grid)
            ys, xs = np.nonzero(grid.values)
            # offsets from the centre, doubled to stay integral
            moved = (2 * int(xs[0]) - (size - 1), 2 * int(ys[0]) - (size - 1))
            assert moved == apply(t, (2 * x - (size - 1), 2 * y - (size - 1)))


def test_grid_transform_composes():
    rng = np.random.default_rng(3)
    grid = Grid.from_array(rng.random((6, 6)) < 0.5)
    for a in ALL:
        for b in ALL:
            step_by_step = apply_to_grid(b, apply_to_grid(a, grid.copy()))
            assert apply_to_grid(compose(a, b), grid.copy()) == step_by_step
