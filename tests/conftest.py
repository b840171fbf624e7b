import matplotlib

matplotlib.use("Agg")

import pytest

from tsp_tours import Point, generate_random_points


@pytest.fixture
def square():
    return [Point(0, 0, 0), Point(10, 0, 1), Point(10, 10, 2), Point(0, 10, 3)]


@pytest.fixture
def triangle():
    return [(0, 0), (5, 0), (2, 4)]


@pytest.fixture
def two_points():
    return [Point(0, 0, 0), Point(3, 4, 1)]


@pytest.fixture
def random_points():
    return generate_random_points(16, 30, seed=7)


@pytest.fixture
def small_points():
    return generate_random_points(8, 7, seed=3)
