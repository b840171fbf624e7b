import itertools
import math
import types

import pytest

from tsp_tours.geometry import tour_length
from tsp_tours.steps import SolutionStep
from tsp_tours.tsp_solver import (
    exhaustive,
    exhaustive_steps,
    iter_exhaustive_steps,
    optimality_ratio,
)
from tsp_tours.utils import generate_random_points

LATTICE_2X3 = [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]


def brute_force_minimum(points):
    n = len(points)
    return min(tour_length(points, (0,) + rest) for rest in itertools.permutations(range(1, n)))


class TestExhaustive:
    def test_square(self, square):
        result = exhaustive(square)
        assert result.feasible
        assert result.tour == [0, 1, 2, 3]
        assert result.distance == pytest.approx(40)

    def test_collinear_points(self):
        result = exhaustive([(0, 0), (1, 0), (2, 0), (3, 0)])
        assert result.distance == pytest.approx(6)
        assert result.tour[0] == 0

    def test_lexicographically_first_optimum(self):
        result = exhaustive(LATTICE_2X3)
        assert result.tour == [0, 1, 2, 5, 4, 3]
        assert result.distance == pytest.approx(6)

    def test_trivial_inputs(self, two_points):
        assert exhaustive([]) == ([], 0.0, True)
        assert exhaustive([(4, 4)]) == ([0], 0.0, True)
        result = exhaustive(two_points)
        assert result.tour == [0, 1]
        assert result.distance == pytest.approx(10)

    def test_coincident_points(self):
        result = exhaustive([(1, 1)] * 4)
        assert result.tour == [0, 1, 2, 3]
        assert result.distance == 0

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_matches_brute_force(self, seed):
        points = generate_random_points(8, 7, seed=seed)
        result = exhaustive(points)
        assert result.tour[0] == 0
        assert sorted(result.tour) == list(range(7))
        assert result.distance == pytest.approx(brute_force_minimum(points))
        assert tour_length(points, result.tour) == pytest.approx(result.distance)

    def test_too_many_points_is_infeasible(self):
        points = generate_random_points(8, 13, seed=0)
        result = exhaustive(points)
        assert not result.feasible
        assert result.tour is None
        assert result.distance is None

    def test_custom_limit(self, small_points):
        assert not exhaustive(small_points, max_points=5).feasible


class TestExhaustiveSteps:
    def test_trace_shape(self, small_points):
        steps = exhaustive_steps(small_points)
        result = exhaustive(small_points)
        assert all(isinstance(step, SolutionStep) for step in steps)

        first, improvements, last = steps[0], steps[1:-1], steps[-1]
        assert first.tour == ()
        assert first.description.startswith("Progress: 0% | Starting exhaustive search over 720 permutations")
        assert improvements
        assert list(last.tour) == result.tour
        assert last.best_distance == pytest.approx(result.distance)
        assert last.checked == math.factorial(6)
        assert last.progress == 100.0

    def test_improvements_are_strict_and_progress_advances(self, small_points):
        improvements = exhaustive_steps(small_points)[1:-1]
        distances = [step.best_distance for step in improvements]
        assert distances == sorted(distances, reverse=True)
        assert len(set(distances)) == len(distances)
        checked = [step.checked for step in improvements]
        assert checked == sorted(checked)
        assert all(len(step.tour) == len(small_points) for step in improvements)
        for step in improvements:
            assert step.distance(small_points) == pytest.approx(step.best_distance)

    def test_stream_matches_list(self, small_points):
        stream = iter_exhaustive_steps(small_points)
        assert isinstance(stream, types.GeneratorType)
        assert list(stream) == exhaustive_steps(small_points)

    def test_infeasible_marker(self):
        steps = exhaustive_steps(generate_random_points(8, 13, seed=1))
        assert len(steps) == 1
        assert not steps[0].feasible
        assert steps[0].tour == ()

    def test_small_inputs(self, two_points):
        assert exhaustive_steps([]) == []
        assert [step.tour for step in exhaustive_steps([(0, 0)])] == [(0,)]
        steps = exhaustive_steps(two_points)
        assert len(steps) == 1
        assert steps[0].tour == (0, 1)
        assert steps[0].best_distance == pytest.approx(10)


class TestOptimalityRatio:
    def test_ratio(self):
        assert optimality_ratio(50, 40) == pytest.approx(1.25)

    def test_zero_optimum(self):
        assert optimality_ratio(0, 0) == 1.0
        assert optimality_ratio(3, 0) == math.inf
