"""
Step records emitted by the progressive algorithms.

A progressive call returns a list of steps that a display layer can
replay in order. Every step holds a snapshot of the (possibly partial)
tour and a human readable description; the subclasses add the payload
of their kind. Steps are frozen and never change after emission.
"""
from dataclasses import asdict, dataclass
from typing import ClassVar, Optional, Tuple

from .geometry import tour_length

Tour = Tuple[int, ...]


@dataclass(frozen=True)
class Step:
    tour: Tour
    description: str

    kind: ClassVar[str] = "step"

    def distance(self, points) -> float:
        """Closed length of the tour snapshot over ``points``."""
        return tour_length(points, self.tour)

    def to_dict(self) -> dict:
        record = asdict(self)
        record["type"] = self.kind
        return record


@dataclass(frozen=True)
class SweepStep(Step):
    """One point added by the radial sweep."""
    angle: float
    centroid: Tuple[float, float]
    progress: float

    kind: ClassVar[str] = "sweep"


@dataclass(frozen=True)
class CurveStep(Step):
    """The generated Moore curve, shown before any point is visited."""
    curve_vertices: Tuple[Tuple[int, int], ...]
    order: int
    grid_size: int

    kind: ClassVar[str] = "curve"


@dataclass(frozen=True)
class VisitStep(Step):
    """One point appended in curve order."""
    curve_vertices: Tuple[Tuple[int, int], ...]
    grid_size: int
    curve_position: int
    curve_progress: float

    kind: ClassVar[str] = "visit"


@dataclass(frozen=True)
class OptimizeStep(Step):
    """
    One accepted local-search move. ``reversed`` holds the inclusive
    tour positions of a 2-opt reversal, ``swapped`` the two point
    indices exchanged by an adjacent-pair swap.
    """
    improvement: float
    reversed: Optional[Tuple[int, int]] = None
    swapped: Optional[Tuple[int, int]] = None

    kind: ClassVar[str] = "optimize"


@dataclass(frozen=True)
class SolutionStep(Step):
    """Progress of the exhaustive search."""
    best_distance: float = 0.0
    progress: float = 0.0
    checked: int = 0
    feasible: bool = True

    kind: ClassVar[str] = "solution"


def no_improvement_step(tour) -> OptimizeStep:
    """Placeholder for displays that need a step when an improver found nothing."""
    return OptimizeStep(
        tour=tuple(int(i) for i in tour),
        description="No improvement found",
        improvement=0.0,
    )
