import logging
import math

import pytest

from tsp_tours.config import SUPPORTED_GRID_SIZES
from tsp_tours.utils import (
    generate_random_points,
    is_supported_grid_size,
    max_points_for_grid,
    points_to_array,
    snap_grid_size,
)


class TestSnapGridSize:
    @pytest.mark.parametrize("grid_size", SUPPORTED_GRID_SIZES)
    def test_supported_sizes_are_kept(self, grid_size):
        assert snap_grid_size(grid_size) == grid_size
        assert is_supported_grid_size(grid_size)

    @pytest.mark.parametrize("grid_size, expected", [(5, 8), (6, 8), (10, 16), (20, 32), (3, 4), (45, 64), (33, 64)])
    def test_nearest_power_of_two(self, grid_size, expected):
        assert snap_grid_size(grid_size) == expected

    @pytest.mark.parametrize("grid_size, expected", [(1, 2), (0, 2), (-4, 2), (100, 64), (4096, 64)])
    def test_clamped_to_supported_range(self, grid_size, expected):
        assert snap_grid_size(grid_size) == expected

    def test_always_supported(self):
        for grid_size in range(1, 130):
            assert snap_grid_size(grid_size) in SUPPORTED_GRID_SIZES
            assert math.log2(snap_grid_size(grid_size)).is_integer()

    def test_unsupported_size(self):
        assert not is_supported_grid_size(12)


class TestGenerateRandomPoints:
    def test_requested_count(self):
        assert len(generate_random_points(16, 25, seed=1)) == 25

    def test_coordinates_within_grid(self):
        for p in generate_random_points(8, 40, seed=2):
            assert 0 <= p.x <= 7
            assert 0 <= p.y <= 7

    def test_unique_positions(self):
        points = generate_random_points(4, 16, seed=3)
        assert len({(p.x, p.y) for p in points}) == 16

    def test_sequential_ids(self):
        points = generate_random_points(16, 10, seed=4)
        assert [p.id for p in points] == list(range(10))

    def test_seed_is_reproducible(self):
        assert generate_random_points(16, 10, seed=5) == generate_random_points(16, 10, seed=5)

    def test_clamped_to_capacity(self, caplog):
        with caplog.at_level(logging.WARNING, logger="tsp_tours"):
            points = generate_random_points(2, 10, seed=6)
        assert len(points) == max_points_for_grid(2) == 4
        assert "Only 4 distinct points" in caplog.text

    def test_zero_points(self):
        assert generate_random_points(8, 0) == []

    def test_negative_count(self):
        with pytest.raises(ValueError):
            generate_random_points(8, -1)


def test_points_to_array():
    points = generate_random_points(8, 5, seed=7)
    array = points_to_array(points)
    assert array.shape == (5, 2)
    assert array[3].tolist() == [points[3].x, points[3].y]
    assert points_to_array([]).shape == (0, 2)
