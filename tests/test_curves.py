import math

import numpy as np
import pytest

from tsp_tours.config import SUPPORTED_GRID_SIZES
from tsp_tours.curves import (
    MOORE_AXIOM,
    curve_iterations,
    lsystem,
    moore_curve,
    moore_lsystem,
    normalize_to_grid,
    turtle_path,
)


class TestLSystem:
    def test_zero_iterations_is_the_axiom(self):
        assert moore_lsystem(0) == MOORE_AXIOM

    def test_one_iteration(self):
        block = "-RF+LFL+FR-"
        assert moore_lsystem(1) == block + "F" + block + "+F+" + block + "F" + block

    def test_symbols_without_rules_are_copied(self):
        assert lsystem("AB+", {"A": "AA"}, 2) == "AAAAB+"

    def test_forward_moves_grow_fourfold(self):
        for k in range(4):
            assert moore_lsystem(k).count("F") == 4 ** (k + 1) - 1


class TestTurtle:
    def test_axiom_walk(self):
        path = turtle_path("LFL+F+LFL")
        assert path.tolist() == [[0, 0], [0, -1], [1, -1], [1, 0]]

    def test_left_turn(self):
        assert turtle_path("-F").tolist() == [[0, 0], [-1, 0]]

    def test_no_moves(self):
        assert turtle_path("LR+-").tolist() == [[0, 0]]


class TestNormalize:
    def test_bounding_box_maps_onto_grid(self):
        path = np.array([[-1, 0], [2, -3]])
        assert normalize_to_grid(path, 4).tolist() == [[0, 3], [3, 0]]

    def test_zero_width_axis_is_constant(self):
        path = np.array([[5, 0], [5, 1], [5, 3]])
        result = normalize_to_grid(path, 4)
        assert result[:, 0].tolist() == [0, 0, 0]
        assert result[:, 1].tolist() == [0, 1, 3]

    def test_single_vertex(self):
        assert normalize_to_grid(np.array([[7, 7]]), 8).tolist() == [[0, 0]]


class TestMooreCurve:
    def test_grid_of_two(self):
        assert moore_curve(2) == ((0, 1), (0, 0), (1, 0), (1, 1))

    def test_grid_of_four(self):
        expected = (
            (1, 3), (0, 3), (0, 2), (1, 2), (1, 1), (0, 1), (0, 0), (1, 0),
            (2, 0), (3, 0), (3, 1), (2, 1), (2, 2), (3, 2), (3, 3), (2, 3),
        )
        assert moore_curve(4) == expected

    @pytest.mark.parametrize("grid_size", SUPPORTED_GRID_SIZES)
    def test_covers_every_cell_once(self, grid_size):
        vertices = moore_curve(grid_size)
        assert len(vertices) == grid_size ** 2
        assert set(vertices) == {(x, y) for x in range(grid_size) for y in range(grid_size)}

    @pytest.mark.parametrize("grid_size", SUPPORTED_GRID_SIZES)
    def test_closed_unit_steps(self, grid_size):
        curve = np.array(moore_curve(grid_size))
        steps = np.abs(np.roll(curve, -1, axis=0) - curve).sum(axis=1)
        assert np.all(steps == 1)

    @pytest.mark.parametrize("grid_size", [4, 8, 16, 32, 64])
    def test_middle_row_and_column_are_covered(self, grid_size):
        vertices = set(moore_curve(grid_size))
        for mid in (grid_size // 2 - 1, grid_size // 2):
            for i in range(grid_size):
                assert (mid, i) in vertices
                assert (i, mid) in vertices

    @pytest.mark.parametrize("grid_size", SUPPORTED_GRID_SIZES)
    def test_iterations_are_one_below_the_order(self, grid_size):
        assert curve_iterations(grid_size) == int(math.log2(grid_size)) - 1

    def test_unsupported_size_is_snapped(self):
        assert moore_curve(5) == moore_curve(8)
        assert moore_curve(1000) == moore_curve(64)

    def test_tiny_grid_gives_single_vertex(self):
        assert moore_curve(1) == ((0, 0),)
        assert moore_curve(0) == ((0, 0),)

    def test_curve_is_memoized(self):
        assert moore_curve(16) is moore_curve(16)
