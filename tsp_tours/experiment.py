import logging
import time

import numpy as np

from .bounds import one_tree_bound
from .config import DEFAULT_GRID_SIZE, EXHAUSTIVE_MAX_POINTS
from .geometry import tour_length
from .heuristics import constructors_registry_dict, curve_tour, sweep_tour
from .optimization import improvers_registry_dict
from .tsp_solver import exhaustive, optimality_ratio
from .utils import generate_random_points, max_points_for_grid

logger = logging.getLogger(__name__)


# -------------------------
# MEASUREMENT HELPERS
# -------------------------
def measure_time(fn, *args, **kwargs):
    """Call fn and return (result, elapsed_ms)."""
    start = time.perf_counter()
    result = fn(*args, **kwargs)
    return result, (time.perf_counter() - start) * 1000


def summary_stats(values):
    """Mean, population std, min and max of a non-empty sequence."""
    values = np.asarray(values, dtype=float)
    return {
        "mean": float(values.mean()),
        "std": float(values.std()),
        "min": float(values.min()),
        "max": float(values.max()),
    }


def format_time(ms: float) -> str:
    if ms < 1:
        return f"{ms * 1000:.2f}μs"
    if ms < 1000:
        return f"{ms:.2f}ms"
    return f"{ms / 1000:.2f}s"


def _construct(fn, points, grid_size):
    if fn is curve_tour:
        return fn(points, grid_size)
    return fn(points)


# -------------------------
# BENCHMARKS
# -------------------------
def benchmark_constructors(points, grid_size: int = DEFAULT_GRID_SIZE, runs: int = 5):
    """Time every registered constructor on the same points."""
    records = []
    for name, fn in constructors_registry_dict.items():
        times, lengths = [], []
        tour = []
        for _ in range(runs):
            (tour, _), ms = measure_time(_construct, fn, points, grid_size)
            times.append(ms)
            lengths.append(tour_length(points, tour))
        records.append({
            "name": name,
            "n": len(points),
            "time": summary_stats(times),
            "distance": summary_stats(lengths),
            "tour": tour,
        })
    return records


def benchmark_improvers(points, initial_tour, runs: int = 5):
    """Time every registered improver starting from the same tour."""
    records = []
    for name, fn in improvers_registry_dict.items():
        times, lengths, gains = [], [], []
        tour = list(initial_tour)
        for _ in range(runs):
            result, ms = measure_time(fn, points, initial_tour)
            times.append(ms)
            tour = result.tour
            lengths.append(tour_length(points, tour))
            gains.append(result.improvement)
        records.append({
            "name": name,
            "n": len(points),
            "time": summary_stats(times),
            "distance": summary_stats(lengths),
            "improvement": summary_stats(gains),
            "tour": tour,
        })
    return records


def evaluate_against_optimum(points, grid_size: int = DEFAULT_GRID_SIZE):
    """
    Ratio of every constructor (alone and followed by the combined
    improver) to the exact optimum when the instance is small enough,
    otherwise to the 1-tree lower bound.
    """
    bound = one_tree_bound(points).lower_bound
    reference = exhaustive(points) if len(points) <= EXHAUSTIVE_MAX_POINTS else None
    combined = improvers_registry_dict["Combined"]

    results = {}
    for name, fn in constructors_registry_dict.items():
        tour, _ = _construct(fn, points, grid_size)
        improved = combined(points, tour).tour
        entry = {
            "distance": tour_length(points, tour),
            "improved_distance": tour_length(points, improved),
            "lower_bound": bound,
        }
        if reference is not None and reference.feasible:
            entry["optimal_distance"] = reference.distance
            entry["ratio"] = optimality_ratio(entry["distance"], reference.distance)
            entry["improved_ratio"] = optimality_ratio(entry["improved_distance"], reference.distance)
        results[name] = entry
    return results


def run_benchmarks(sizes=(10, 25, 50, 100), runs: int = 5,
                   grid_size: int = DEFAULT_GRID_SIZE, seed=42):
    """Benchmark constructors, then improvers on the sweep tour, for every size."""
    records = []
    for offset, n in enumerate(sizes):
        if n > max_points_for_grid(grid_size):
            logger.warning("Skipping n=%d: does not fit on a %dx%d grid", n, grid_size, grid_size)
            continue

        points = generate_random_points(grid_size, n, seed=None if seed is None else seed + offset)
        logger.info("Benchmarking n=%d on a %dx%d grid (%d runs)", n, grid_size, grid_size, runs)

        constructors = benchmark_constructors(points, grid_size=grid_size, runs=runs)
        initial_tour, _ = sweep_tour(points)
        improvers = benchmark_improvers(points, initial_tour, runs=runs)

        for record in constructors + improvers:
            logger.info(
                "  %-10s time %s | distance %.2f",
                record["name"], format_time(record["time"]["mean"]), record["distance"]["mean"],
            )
        records.extend(constructors + improvers)

    logger.info("Benchmarks completed for sizes %s.", list(sizes))
    return records


if __name__ == "__main__":
    from .logging_config import setup_logging

    setup_logging()
    run_benchmarks()
