import logging
import math
from typing import List

import numpy as np

from .config import SUPPORTED_GRID_SIZES
from .geometry import Point

logger = logging.getLogger(__name__)


# -------------------------
# GRID SIZES
# -------------------------
def snap_grid_size(grid_size: int) -> int:
    """
    Snap an arbitrary grid size to the smallest supported Moore grid that
    covers it (next power of two, clamped to 2..64), so every cell of a
    grid_size x grid_size grid lies on the curve.

    >>> snap_grid_size(5), snap_grid_size(10), snap_grid_size(100)
    (8, 16, 64)
    """
    lowest, highest = SUPPORTED_GRID_SIZES[0], SUPPORTED_GRID_SIZES[-1]
    if grid_size <= lowest:
        return lowest
    order = math.ceil(math.log2(grid_size))
    return int(min(highest, max(lowest, 2 ** order)))


def is_supported_grid_size(grid_size: int) -> bool:
    return grid_size in SUPPORTED_GRID_SIZES


def max_points_for_grid(grid_size: int) -> int:
    """Number of distinct cells in a grid_size x grid_size grid."""
    return max(0, int(grid_size)) ** 2


# -------------------------
# RANDOM POINTS
# -------------------------
def generate_random_points(grid_size: int, num_points: int, seed=None) -> List[Point]:
    """
    Sample distinct grid points with coordinates in 0..grid_size-1.

    Identifiers are sequential from 0. The count is clamped to the grid
    capacity (grid_size ** 2).
    """
    if num_points < 0:
        raise ValueError(f"num_points must be non-negative, got {num_points}")

    capacity = max_points_for_grid(grid_size)
    if num_points > capacity:
        logger.warning(
            "Only %d distinct points fit on a %dx%d grid (requested %d)",
            capacity, grid_size, grid_size, num_points,
        )
        num_points = capacity
    if num_points == 0:
        return []

    rng = np.random.default_rng(seed)
    cells = rng.choice(capacity, size=num_points, replace=False)
    return [
        Point(int(cell % grid_size), int(cell // grid_size), idx)
        for idx, cell in enumerate(cells)
    ]


def points_to_array(points: List[Point]) -> np.ndarray:
    """Integer (n, 2) array of the coordinates of ``points``."""
    if not points:
        return np.empty((0, 2), dtype=int)
    return np.array([(p.x, p.y) for p in points], dtype=int)
