"""
Global constants
================
Default tolerances and work caps shared by the tour constructors,
improvers and verifiers. Every cap can be overridden per call through
the matching keyword argument.

Exports:
    EPSILON (float): Minimum gain for a local-search move to be accepted.
    TWO_OPT_MAX_ITERATIONS (int): Accepted 2-opt moves before giving up.
    PAIR_SWAP_MAX_ITERATIONS (int): Full adjacent-pair scans before giving up.
    COMBINED_MAX_ROUNDS (int): Pair-swap / 2-opt alternation rounds.
    EXHAUSTIVE_MAX_POINTS (int): Largest instance the exhaustive search accepts.
    SUPPORTED_GRID_SIZES (tuple): Grid sizes a Moore curve can fill exactly.
    DEFAULT_GRID_SIZE (int): Grid used by demos and benchmarks.
"""
from typing import Tuple

EPSILON: float = 1e-3

TWO_OPT_MAX_ITERATIONS: int = 50
PAIR_SWAP_MAX_ITERATIONS: int = 100
COMBINED_MAX_ROUNDS: int = 100

EXHAUSTIVE_MAX_POINTS: int = 12

SUPPORTED_GRID_SIZES: Tuple[int, ...] = (2, 4, 8, 16, 32, 64)
DEFAULT_GRID_SIZE: int = 16
