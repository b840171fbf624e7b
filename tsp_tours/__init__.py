# Re-export convenient entry points for external use

from .config import (
    EPSILON,
    EXHAUSTIVE_MAX_POINTS,
    SUPPORTED_GRID_SIZES,
)

from .geometry import (
    Point,
    as_coords,
    distance,
    distance_matrix,
    tour_length,
    centroid,
    validate_tour,
)

from .curves import (
    lsystem,
    moore_lsystem,
    turtle_path,
    normalize_to_grid,
    curve_iterations,
    moore_curve,
)

from .steps import (
    Step,
    SweepStep,
    CurveStep,
    VisitStep,
    OptimizeStep,
    SolutionStep,
    no_improvement_step,
)

from .heuristics import (
    sweep_tour,
    sweep_tour_steps,
    curve_tour,
    curve_tour_steps,
    constructors_registry_dict,
    constructors_steps_registry_dict,
)

from .optimization import (
    ImprovementResult,
    two_opt,
    two_opt_steps,
    pair_swap,
    pair_swap_steps,
    combined,
    combined_steps,
    improvers_registry_dict,
    improvers_steps_registry_dict,
)

from .tsp_solver import (
    ExhaustiveResult,
    exhaustive,
    exhaustive_steps,
    iter_exhaustive_steps,
    optimality_ratio,
)

from .bounds import (
    LowerBound,
    OptimalityReport,
    one_tree_bound,
    verify_optimality,
)

from .utils import (
    snap_grid_size,
    generate_random_points,
    max_points_for_grid,
)

from .plotting import (
    plot_points,
    plot_tour,
    plot_curve,
    plot_step,
    render_steps,
    plot_comparison,
)

from .experiment import (
    benchmark_constructors,
    benchmark_improvers,
    evaluate_against_optimum,
    run_benchmarks,
)

from .logging_config import setup_logging

__version__ = "0.1.0"
