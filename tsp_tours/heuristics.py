import logging
import math
from typing import List, Optional, Tuple

import numpy as np

from .curves import curve_order, moore_curve
from .geometry import as_coords, centroid
from .steps import CurveStep, Step, SweepStep, VisitStep
from .utils import snap_grid_size

logger = logging.getLogger(__name__)

# The sweep starts at the "down" direction of screen coordinates
SWEEP_START_ANGLE = math.pi / 2

# Points per nearest-vertex batch; bounds the (chunk, vertices, 2) buffer
CURVE_CHUNK_SIZE = 256


def _format_coord(value: float) -> str:
    return f"{value:g}"


# -------------------------
# SWEEP (RADIAL / POLAR ANGLE)
# -------------------------
def sweep_angles(coords: np.ndarray):
    """
    Polar angle of every point around the centroid.
    Returns (raw_angles, sweep_angles, centroid) where the sweep angles
    are shifted to start at the "down" direction and lie in [0, 2*pi).
    """
    cx, cy = centroid(coords)
    raw = np.arctan2(coords[:, 1] - cy, coords[:, 0] - cx)
    shifted = raw - SWEEP_START_ANGLE
    shifted = np.where(shifted < 0, shifted + 2 * math.pi, shifted)
    return raw, shifted, (cx, cy)


def sweep_tour(points) -> Tuple[List[int], Optional[Tuple[float, float]]]:
    """
    Order points by polar angle around their centroid.
    Returns (tour, centroid); ties keep input order.
    """
    coords = as_coords(points)
    if len(coords) == 0:
        return [], None

    _, shifted, center = sweep_angles(coords)
    order = np.argsort(shifted, kind="stable")
    return [int(i) for i in order], center


def sweep_tour_steps(points) -> List[SweepStep]:
    """One SweepStep per point, in sweep order."""
    coords = as_coords(points)
    n = len(coords)
    if n == 0:
        return []

    raw, shifted, center = sweep_angles(coords)
    order = np.argsort(shifted, kind="stable")

    steps = []
    tour = []
    for i, idx in enumerate(order):
        idx = int(idx)
        tour.append(idx)
        angle = float(raw[idx])
        degrees = (math.degrees(angle) + 360) % 360
        progress = (i + 1) / n * 100
        x, y = coords[idx]
        steps.append(SweepStep(
            tour=tuple(tour),
            description=(
                f"Progress: {progress:.1f}% | Angle: {degrees:.1f}° | "
                f"Point {idx} ({_format_coord(x)}, {_format_coord(y)})"
            ),
            angle=angle,
            centroid=center,
            progress=round(progress, 1),
        ))
    return steps


# -------------------------
# MOORE CURVE PROJECTION
# -------------------------
def curve_positions(coords: np.ndarray, vertices) -> np.ndarray:
    """
    Index of the nearest curve vertex for every point; on ties the lower
    curve index wins.

    Points sitting exactly on a vertex are looked up directly; the rest
    are matched against the whole curve ``CURVE_CHUNK_SIZE`` points at a
    time.
    """
    index = {vertex: i for i, vertex in enumerate(vertices)}
    positions = np.empty(len(coords), dtype=int)
    misses = []
    for i, (x, y) in enumerate(coords):
        hit = index.get((x, y))
        if hit is None:
            misses.append(i)
        else:
            positions[i] = hit

    curve = np.asarray(vertices, dtype=float)
    for start in range(0, len(misses), CURVE_CHUNK_SIZE):
        chunk = misses[start:start + CURVE_CHUNK_SIZE]
        diff = coords[chunk][:, None, :] - curve[None, :, :]
        positions[chunk] = np.argmin(np.sum(diff ** 2, axis=2), axis=1)
    return positions


def curve_tour(points, grid_size: int) -> Tuple[List[int], tuple]:
    """
    Order points by the position of their nearest Moore curve vertex.
    Returns (tour, curve_vertices).
    """
    coords = as_coords(points)
    if len(coords) == 0:
        return [], ()

    vertices = moore_curve(grid_size)
    positions = curve_positions(coords, vertices)
    order = np.argsort(positions, kind="stable")
    return [int(i) for i in order], vertices


def curve_tour_steps(points, grid_size: int) -> List[Step]:
    """A CurveStep describing the curve, then one VisitStep per point."""
    coords = as_coords(points)
    if len(coords) == 0:
        return []

    vertices = moore_curve(grid_size)
    size = snap_grid_size(grid_size) if grid_size > 1 else 1
    order_k = curve_order(size) if size > 1 else 0
    positions = curve_positions(coords, vertices)
    order = np.argsort(positions, kind="stable")
    last_position = max(1, len(vertices) - 1)

    steps = [CurveStep(
        tour=(),
        description=f"Moore curve generated (order {order_k}, {size}×{size} grid)",
        curve_vertices=vertices,
        order=order_k,
        grid_size=size,
    )]

    tour = []
    for idx in order:
        idx = int(idx)
        tour.append(idx)
        position = int(positions[idx])
        curve_progress = round(position / last_position * 100, 1)
        x, y = coords[idx]
        steps.append(VisitStep(
            tour=tuple(tour),
            description=(
                f"Progress: {curve_progress:.1f}% | "
                f"Point {idx} ({_format_coord(x)}, {_format_coord(y)})"
            ),
            curve_vertices=vertices,
            grid_size=size,
            curve_position=position,
            curve_progress=curve_progress,
        ))

    logger.debug("Curve tour over %d points on a %dx%d grid", len(coords), size, size)
    return steps


# === Accessible constructors ===
constructors_registry_dict = {
    "Sweep": sweep_tour,
    "Moore": curve_tour,
}

constructors_steps_registry_dict = {
    "Sweep": sweep_tour_steps,
    "Moore": curve_tour_steps,
}
