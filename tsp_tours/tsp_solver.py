"""
Exact TSP by exhaustive permutation search.

Index 0 is fixed as the start and the remaining indices are enumerated in
lexicographic order. A branch is abandoned as soon as its partial length
reaches the best complete tour found so far, and only strict improvements
replace the incumbent, so the result is the lexicographically first
optimal tour.

The number of permutations grows as (n-1)!, so instances above
``EXHAUSTIVE_MAX_POINTS`` are reported as infeasible instead of solved.
"""
import logging
import math
from typing import Iterator, List, NamedTuple, Optional

from .config import EXHAUSTIVE_MAX_POINTS
from .geometry import as_coords, distance_matrix
from .steps import SolutionStep

logger = logging.getLogger(__name__)

# Lengths closer than this are the same tour summed in a different order
TIE_TOLERANCE = 1e-9


class ExhaustiveResult(NamedTuple):
    """Optimal tour and its length; ``tour`` and ``distance`` are None when infeasible."""
    tour: Optional[List[int]]
    distance: Optional[float]
    feasible: bool = True


class _Improvement(NamedTuple):
    tour: List[int]
    distance: float
    checked: int


def _search(dist: list, n: int) -> Iterator[_Improvement]:
    """
    Yield every strict improvement of the incumbent, in enumeration order.

    ``checked`` counts the permutations accounted for so far; a pruned
    branch counts all the permutations below it.
    """
    best = math.inf
    checked = 0
    prefix = [0]
    used = [False] * n
    used[0] = True

    def descend(last: int, length: float):
        nonlocal best, checked
        depth = len(prefix)
        if depth == n:
            checked += 1
            length += dist[last][0]
            if length < best - TIE_TOLERANCE:
                best = length
                yield _Improvement(list(prefix), length, checked)
            return

        for city in range(1, n):
            if used[city]:
                continue
            partial = length + dist[last][city]
            if partial >= best - TIE_TOLERANCE:
                checked += math.factorial(n - depth - 1)
                continue
            used[city] = True
            prefix.append(city)
            yield from descend(city, partial)
            prefix.pop()
            used[city] = False

    yield from descend(0, 0.0)


def exhaustive(points, max_points: int = EXHAUSTIVE_MAX_POINTS) -> ExhaustiveResult:
    """
    Compute the optimal closed tour over ``points``.

    Returns an infeasible result when there are more than ``max_points``
    points. One point gives ``[0]``, no points give ``[]``, both with
    distance 0.
    """
    coords = as_coords(points)
    n = len(coords)

    if n <= 1:
        return ExhaustiveResult(list(range(n)), 0.0)
    if n > max_points:
        logger.debug("Exhaustive search refused for %d points (max %d)", n, max_points)
        return ExhaustiveResult(None, None, feasible=False)

    dist = distance_matrix(coords).tolist()
    best = None
    for best in _search(dist, n):
        pass
    return ExhaustiveResult(best.tour, best.distance)


def iter_exhaustive_steps(points, max_points: int = EXHAUSTIVE_MAX_POINTS) -> Iterator[SolutionStep]:
    """
    Stream the exhaustive search as SolutionSteps: an opening step, one
    step per strict improvement and a closing step with the optimal tour.
    """
    coords = as_coords(points)
    n = len(coords)

    if n == 0:
        return
    if n == 1:
        yield SolutionStep(tour=(0,), description="Single point: trivial tour", progress=100.0)
        return
    if n > max_points:
        yield SolutionStep(
            tour=(),
            description=f"Too many points ({n}) for exhaustive search (max {max_points})",
            feasible=False,
        )
        return

    dist = distance_matrix(coords).tolist()

    if n == 2:
        length = dist[0][1] + dist[1][0]
        yield SolutionStep(
            tour=(0, 1),
            description=f"Progress: 100% | Optimal tour: distance {length:.2f}",
            best_distance=length,
            progress=100.0,
            checked=1,
        )
        return

    total = math.factorial(n - 1)
    yield SolutionStep(
        tour=(),
        description=f"Progress: 0% | Starting exhaustive search over {total} permutations",
        best_distance=math.inf,
    )

    best = None
    count = 0
    for best in _search(dist, n):
        count += 1
        progress = best.checked / total * 100
        yield SolutionStep(
            tour=tuple(best.tour),
            description=(
                f"Progress: {progress:.1f}% | Improvement #{count}: "
                f"distance {best.distance:.2f} (checked {best.checked})"
            ),
            best_distance=best.distance,
            progress=round(progress, 1),
            checked=best.checked,
        )

    yield SolutionStep(
        tour=tuple(best.tour),
        description=f"Progress: 100% | Optimal tour: distance {best.distance:.2f} ({total} permutations)",
        best_distance=best.distance,
        progress=100.0,
        checked=total,
    )


def exhaustive_steps(points, max_points: int = EXHAUSTIVE_MAX_POINTS) -> List[SolutionStep]:
    return list(iter_exhaustive_steps(points, max_points=max_points))


def optimality_ratio(tour_distance: float, optimal_distance: float) -> float:
    """Tour length over optimal length (1.0 means optimal)."""
    if optimal_distance == 0:
        return 1.0 if tour_distance == 0 else math.inf
    return tour_distance / optimal_distance
