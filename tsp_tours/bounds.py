"""
1-tree lower bound (Held-Karp style).

Every closed tour is a 1-tree: a spanning tree on vertices 1..n-1 plus
two edges at vertex 0. The weight of the minimum 1-tree (MST of the
other vertices plus the two cheapest edges at vertex 0) is therefore at
most the length of any tour, and a tour matching it is optimal.
"""
from typing import NamedTuple, Sequence

import numpy as np

from .config import EPSILON
from .geometry import as_coords, distance_matrix

ONE_TREE = "1-tree"


class LowerBound(NamedTuple):
    lower_bound: float
    method: str = ONE_TREE


class OptimalityReport(NamedTuple):
    is_optimal: bool
    lower_bound: float
    gap: float
    gap_percent: float
    method: str


def mst_weight(dist: np.ndarray, vertices: Sequence[int]) -> float:
    """Weight of the minimum spanning tree over ``vertices`` (Prim, O(m^2))."""
    vertices = list(vertices)
    m = len(vertices)
    if m <= 1:
        return 0.0

    sub = dist[np.ix_(vertices, vertices)]
    in_tree = np.zeros(m, dtype=bool)
    min_edge = np.full(m, np.inf)
    min_edge[0] = 0.0
    total = 0.0

    for _ in range(m):
        u = int(np.argmin(np.where(in_tree, np.inf, min_edge)))
        in_tree[u] = True
        total += min_edge[u]
        min_edge = np.minimum(min_edge, sub[u])

    return float(total)


def one_tree_bound(points) -> LowerBound:
    """
    Lower bound on the optimal tour length.

    Zero for fewer than two points; for two points the closed two-cycle
    length, which is exact.
    """
    coords = as_coords(points)
    n = len(coords)
    if n <= 1:
        return LowerBound(0.0)

    dist = distance_matrix(coords)
    if n == 2:
        return LowerBound(float(2 * dist[0, 1]))

    tree = mst_weight(dist, range(1, n))
    m1, m2 = np.partition(dist[0, 1:], 1)[:2]
    return LowerBound(float(tree + m1 + m2))


def verify_optimality(tour_distance: float, points, epsilon: float = EPSILON) -> OptimalityReport:
    """
    Compare a tour length with the 1-tree bound. The tour is proven
    optimal when it is within ``epsilon`` of the bound.
    """
    lower_bound, method = one_tree_bound(points)
    gap = tour_distance - lower_bound
    gap_percent = gap / lower_bound * 100 if lower_bound > 0 else 0.0
    return OptimalityReport(
        is_optimal=tour_distance <= lower_bound + epsilon,
        lower_bound=lower_bound,
        gap=gap,
        gap_percent=gap_percent,
        method=method,
    )
