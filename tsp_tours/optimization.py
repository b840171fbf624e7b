"""
Local-search tour improvers.

Both improvers share one harness: an outer loop that runs a scan until a
scan accepts nothing or the iteration cap is reached. A scan walks the
tour, applies every move whose gain exceeds ``epsilon`` and yields one
OptimizeStep per accepted move.

- 2-opt stops its scan at the first accepted reversal, so every accepted
  move restarts the search (one iteration per move).
- Adjacent-pair swap keeps scanning after a swap (one iteration per
  full pass).

The progressive functions return the list of steps; the atomic ones
return only the final tour and the summed gain. Tours with fewer than
four points are returned unchanged with no steps.
"""
import logging
from typing import Callable, Iterator, List, NamedTuple, Sequence

from .config import (
    COMBINED_MAX_ROUNDS,
    EPSILON,
    PAIR_SWAP_MAX_ITERATIONS,
    TWO_OPT_MAX_ITERATIONS,
)
from .geometry import as_coords, distance_matrix, validate_tour
from .steps import OptimizeStep

logger = logging.getLogger(__name__)

MIN_TOUR_SIZE = 4


class ImprovementResult(NamedTuple):
    tour: List[int]
    improvement: float


Scan = Callable[[list, List[int], float], Iterator[OptimizeStep]]


# -------------------------
# SCANS
# -------------------------
def _two_opt_scan(dist: list, tour: List[int], epsilon: float) -> Iterator[OptimizeStep]:
    n = len(tour)
    for i in range(n - 1):
        for j in range(i + 2, n):
            if i == 0 and j == n - 1:
                continue

            a, b = tour[i], tour[i + 1]
            c, d = tour[j], tour[(j + 1) % n]
            old = dist[a][b] + dist[c][d]
            new = dist[a][c] + dist[b][d]

            if new < old - epsilon:
                tour[i + 1:j + 1] = tour[i + 1:j + 1][::-1]
                gain = old - new
                yield OptimizeStep(
                    tour=tuple(tour),
                    description=f"2-opt: reversed segment [{i + 1}, {j}], saved {gain:.2f} units",
                    improvement=gain,
                    reversed=(i + 1, j),
                )
                return


def _pair_swap_scan(dist: list, tour: List[int], epsilon: float) -> Iterator[OptimizeStep]:
    n = len(tour)
    for i in range(n - 2):
        p1, p2 = tour[i], tour[i + 1]
        p3, p4 = tour[(i + 2) % n], tour[(i + 3) % n]
        old = dist[p1][p2] + dist[p3][p4]
        new = dist[p1][p3] + dist[p2][p4]

        if new < old - epsilon:
            second, third = (i + 1) % n, (i + 2) % n
            tour[second], tour[third] = tour[third], tour[second]
            gain = old - new
            yield OptimizeStep(
                tour=tuple(tour),
                description=f"Pair swap: exchanged points {tour[second]} and {tour[third]}, saved {gain:.2f} units",
                improvement=gain,
                swapped=(tour[second], tour[third]),
            )


# -------------------------
# HARNESS
# -------------------------
def _local_search(dist: list, initial_tour: Sequence[int], scan: Scan,
                  max_iterations: int, epsilon: float) -> Iterator[OptimizeStep]:
    """Run ``scan`` until it accepts nothing or the iteration cap is hit."""
    tour = list(initial_tour)
    if len(tour) < MIN_TOUR_SIZE:
        return

    iteration = 0
    improved = True
    while improved and iteration < max_iterations:
        improved = False
        iteration += 1
        for step in scan(dist, tour, epsilon):
            improved = True
            yield step

    logger.debug("%s stopped after %d iterations", scan.__name__.strip("_"), iteration)


def _prepare(points, tour):
    coords = as_coords(points)
    tour = validate_tour(tour, len(coords))
    return distance_matrix(coords).tolist(), tour


def _collect(initial_tour: List[int], steps: Iterator[OptimizeStep]) -> ImprovementResult:
    tour = list(initial_tour)
    total = 0.0
    for step in steps:
        tour = list(step.tour)
        total += step.improvement
    return ImprovementResult(tour, total)


# -------------------------
# 2-OPT
# -------------------------
def two_opt_steps(points, tour, max_iterations: int = TWO_OPT_MAX_ITERATIONS,
                  epsilon: float = EPSILON) -> List[OptimizeStep]:
    """One OptimizeStep per accepted segment reversal."""
    dist, tour = _prepare(points, tour)
    return list(_local_search(dist, tour, _two_opt_scan, max_iterations, epsilon))


def two_opt(points, tour, max_iterations: int = TWO_OPT_MAX_ITERATIONS,
            epsilon: float = EPSILON) -> ImprovementResult:
    """
    First-improvement 2-opt. For edges (i, i+1) and (j, j+1) the segment
    tour[i+1..j] is reversed as soon as that shortens the tour by more
    than ``epsilon``, and the scan restarts from the beginning.
    """
    dist, tour = _prepare(points, tour)
    return _collect(tour, _local_search(dist, tour, _two_opt_scan, max_iterations, epsilon))


# -------------------------
# ADJACENT PAIR SWAP
# -------------------------
def pair_swap_steps(points, tour, max_iterations: int = PAIR_SWAP_MAX_ITERATIONS,
                    epsilon: float = EPSILON) -> List[OptimizeStep]:
    """One OptimizeStep per accepted swap of two consecutive points."""
    dist, tour = _prepare(points, tour)
    return list(_local_search(dist, tour, _pair_swap_scan, max_iterations, epsilon))


def pair_swap(points, tour, max_iterations: int = PAIR_SWAP_MAX_ITERATIONS,
              epsilon: float = EPSILON) -> ImprovementResult:
    """Swap consecutive points (the "zigzag" fix) while that shortens the tour."""
    dist, tour = _prepare(points, tour)
    return _collect(tour, _local_search(dist, tour, _pair_swap_scan, max_iterations, epsilon))


# -------------------------
# COMBINED
# -------------------------
def _combined_moves(dist: list, initial_tour: List[int], max_rounds: int,
                    max_iterations: int, epsilon: float) -> Iterator[OptimizeStep]:
    tour = list(initial_tour)
    if len(tour) < MIN_TOUR_SIZE:
        return

    for round_idx in range(max_rounds):
        improved = False
        for scan in (_pair_swap_scan, _two_opt_scan):
            for step in _local_search(dist, tour, scan, max_iterations, epsilon):
                improved = True
                tour = list(step.tour)
                yield step
        if not improved:
            logger.debug("Combined search converged after %d rounds", round_idx + 1)
            return


def combined_steps(points, tour, max_rounds: int = COMBINED_MAX_ROUNDS,
                   max_iterations: int = TWO_OPT_MAX_ITERATIONS,
                   epsilon: float = EPSILON) -> List[OptimizeStep]:
    """Pair-swap and 2-opt steps, interleaved in the order they were accepted."""
    dist, tour = _prepare(points, tour)
    return list(_combined_moves(dist, tour, max_rounds, max_iterations, epsilon))


def combined(points, tour, max_rounds: int = COMBINED_MAX_ROUNDS,
             max_iterations: int = TWO_OPT_MAX_ITERATIONS,
             epsilon: float = EPSILON) -> ImprovementResult:
    """
    Alternate a pair-swap pass and a 2-opt pass until a round where
    neither improves, or ``max_rounds`` rounds. ``max_iterations`` caps
    each individual pass.
    """
    dist, tour = _prepare(points, tour)
    return _collect(tour, _combined_moves(dist, tour, max_rounds, max_iterations, epsilon))


# === Accessible improvers ===
improvers_registry_dict = {
    "2-opt": two_opt,
    "Pair swap": pair_swap,
    "Combined": combined,
}

improvers_steps_registry_dict = {
    "2-opt": two_opt_steps,
    "Pair swap": pair_swap_steps,
    "Combined": combined_steps,
}
