"""
Moore space-filling curve built from an L-system.

The curve is generated by rewriting the axiom ``LFL+F+LFL`` and walking
the result with a turtle, then rescaled onto an integer grid. With ``k``
rewriting iterations the walk visits ``4 ** (k + 1)`` vertices and spans
a ``2 ** (k + 1)`` grid, so a grid of size ``g`` needs ``log2(g) - 1``
iterations.
"""
import logging
import math
from functools import lru_cache
from typing import Dict, Tuple

import numpy as np

from .utils import snap_grid_size

logger = logging.getLogger(__name__)

MOORE_AXIOM = "LFL+F+LFL"
MOORE_RULES = {
    "L": "-RF+LFL+FR-",
    "R": "+LF-RFR-FL+",
}

# 0=up, 1=right, 2=down, 3=left in screen coordinates (y grows downward)
HEADINGS = ((0, -1), (1, 0), (0, 1), (-1, 0))

CurveVertices = Tuple[Tuple[int, int], ...]


# -------------------------
# L-SYSTEM
# -------------------------
def lsystem(axiom: str, rules: Dict[str, str], iterations: int) -> str:
    """Rewrite ``axiom`` ``iterations`` times; symbols without a rule are copied."""
    sequence = axiom
    for _ in range(iterations):
        sequence = "".join(rules.get(symbol, symbol) for symbol in sequence)
    return sequence


def moore_lsystem(iterations: int) -> str:
    return lsystem(MOORE_AXIOM, MOORE_RULES, iterations)


# -------------------------
# TURTLE
# -------------------------
def turtle_path(sequence: str) -> np.ndarray:
    """
    Interpret an L-system string: ``F`` moves one unit, ``+`` turns
    right, ``-`` turns left, anything else is ignored. Returns the start
    position followed by the position after every ``F``.
    """
    x = y = 0
    heading = 0
    path = [(x, y)]

    for symbol in sequence:
        if symbol == "F":
            dx, dy = HEADINGS[heading]
            x += dx
            y += dy
            path.append((x, y))
        elif symbol == "+":
            heading = (heading + 1) % 4
        elif symbol == "-":
            heading = (heading + 3) % 4

    return np.array(path, dtype=int)


def normalize_to_grid(path: np.ndarray, grid_size: int) -> np.ndarray:
    """
    Rescale the bounding box of ``path`` onto 0..grid_size-1 and round
    half up. An axis with zero extent maps to 0.
    """
    path = np.asarray(path, dtype=float)
    lo = path.min(axis=0)
    span = path.max(axis=0) - lo

    scaled = np.zeros_like(path)
    spread = span > 0
    scaled[:, spread] = (path[:, spread] - lo[spread]) / span[spread] * (grid_size - 1)
    return np.floor(scaled + 0.5).astype(int)


# -------------------------
# MOORE CURVE
# -------------------------
def curve_order(grid_size: int) -> int:
    """Order k of the Moore curve filling a 2^k x 2^k grid."""
    return max(1, int(round(math.log2(grid_size))))


def curve_iterations(grid_size: int) -> int:
    """L-system iterations for a grid: the axiom already holds one level."""
    return max(0, curve_order(grid_size) - 1)


def moore_curve(grid_size: int) -> CurveVertices:
    """
    Vertices of the closed Moore curve covering a grid_size x grid_size
    grid, in curve order.

    Unsupported sizes are snapped to the nearest supported one; a grid of
    size 1 or less yields the single vertex (0, 0).
    """
    if grid_size <= 1:
        return ((0, 0),)
    return _moore_curve(snap_grid_size(grid_size))


@lru_cache(maxsize=None)
def _moore_curve(grid_size: int) -> CurveVertices:
    iterations = curve_iterations(grid_size)
    path = turtle_path(moore_lsystem(iterations))
    vertices = normalize_to_grid(path, grid_size)
    logger.debug(
        "Moore curve for %dx%d grid: %d iterations, %d vertices",
        grid_size, grid_size, iterations, len(vertices),
    )
    return tuple((int(x), int(y)) for x, y in vertices)
