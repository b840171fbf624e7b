import math
from typing import NamedTuple, Sequence, Tuple

import numpy as np


# -------------------------
# 1. POINTS
# -------------------------
class Point(NamedTuple):
    """A grid point with a stable identifier."""
    x: int
    y: int
    id: int = 0


def as_coords(points) -> np.ndarray:
    """
    Convert a point set into a float array of shape (n, 2).

    Accepts an (n, 2) array-like, a sequence of (x, y) pairs, or a
    sequence of objects exposing ``x`` and ``y`` (e.g. ``Point``).
    The input is never modified.
    """
    if isinstance(points, np.ndarray):
        coords = np.array(points, dtype=float)
    else:
        points = list(points)
        if not points:
            return np.empty((0, 2), dtype=float)
        coords = np.array(
            [(p.x, p.y) if hasattr(p, "x") else (p[0], p[1]) for p in points],
            dtype=float,
        )

    if coords.size == 0:
        return np.empty((0, 2), dtype=float)
    if coords.ndim != 2 or coords.shape[1] != 2:
        raise ValueError(f"points must have shape (n, 2), got {coords.shape}")
    if not np.all(np.isfinite(coords)):
        raise ValueError("points must have finite coordinates")
    return coords


# -------------------------
# 2. DISTANCES
# -------------------------
def distance(p1, p2) -> float:
    """Euclidean distance between two 2D points."""
    return math.hypot(p1[0] - p2[0], p1[1] - p2[1])


def distance_matrix(coords: np.ndarray) -> np.ndarray:
    """Full n x n Euclidean distance matrix."""
    coords = np.asarray(coords, dtype=float)
    diff = coords[:, None, :] - coords[None, :, :]
    return np.hypot(diff[..., 0], diff[..., 1])


def tour_length(points, tour: Sequence[int]) -> float:
    """
    Length of the closed tour, including the edge from the last index
    back to the first. Tours with fewer than two indices have length 0.
    """
    if len(tour) < 2:
        return 0.0
    coords = as_coords(points)
    ordered = coords[list(tour)]
    closing = np.roll(ordered, -1, axis=0)
    return float(np.sum(np.hypot(*(closing - ordered).T)))


def centroid(coords: np.ndarray) -> Tuple[float, float]:
    """Mean x and mean y of a non-empty point set."""
    coords = np.asarray(coords, dtype=float)
    cx, cy = coords.mean(axis=0)
    return float(cx), float(cy)


# -------------------------
# 3. TOUR CHECKS
# -------------------------
def validate_tour(tour: Sequence[int], n: int) -> list:
    """
    Check that ``tour`` is a permutation of 0..n-1 and return it as a
    list of ints. Raises ValueError otherwise.
    """
    tour = [int(i) for i in tour]
    if len(tour) != n:
        raise ValueError(f"tour has {len(tour)} indices for {n} points")
    if sorted(tour) != list(range(n)):
        raise ValueError("tour must visit every point index exactly once")
    return tour
