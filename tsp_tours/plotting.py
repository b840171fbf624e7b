# plotting.py
#
# Matplotlib rendering of point sets, tours and progressive steps.
# Only Figure objects are built here, so no GUI backend is needed; a
# viewer embeds or saves them.
import numpy as np
from matplotlib.figure import Figure
from matplotlib.collections import LineCollection

from .geometry import as_coords
from .steps import CurveStep, Step, SweepStep, VisitStep


# ============================================================
# Building blocks
# ============================================================
def make_figure(figsize=(6, 6), title=None):
    fig = Figure(figsize=figsize, dpi=100)
    ax = fig.add_subplot(111)
    if title:
        ax.set_title(title)
    return fig, ax


def plot_points(ax, points, grid_size=None):
    """Scatter the points, with a light grid of grid_size cells if given."""
    coords = as_coords(points)

    if grid_size:
        for i in range(grid_size):
            ax.axhline(i, color="lightgray", linewidth=0.5, zorder=0)
            ax.axvline(i, color="lightgray", linewidth=0.5, zorder=0)
        ax.set_xlim(-0.5, grid_size - 0.5)
        ax.set_ylim(grid_size - 0.5, -0.5)  # screen coordinates: y grows downward

    ax.set_aspect("equal")
    if len(coords):
        ax.scatter(coords[:, 0], coords[:, 1], s=30, color="black", zorder=5, label="Points")
    return ax


def plot_tour(ax, points, tour, closed=True, color="tab:blue", label="Tour"):
    """Draw the tour as a polyline; ``closed`` adds the edge back to the start."""
    coords = as_coords(points)
    tour = list(tour)
    if len(tour) < 2:
        return None

    ordered = coords[tour]
    if closed:
        ordered = np.vstack([ordered, ordered[:1]])
    line, = ax.plot(ordered[:, 0], ordered[:, 1], "-", color=color, lw=1.5, label=label)
    return line


def plot_curve(ax, vertices, color="tab:orange", alpha=0.35):
    """Draw a closed curve through the given grid vertices."""
    curve = np.asarray(vertices, dtype=float)
    if len(curve) < 2:
        return None
    segments = np.stack([curve, np.roll(curve, -1, axis=0)], axis=1)
    collection = LineCollection(segments, colors=color, linewidths=1, alpha=alpha)
    ax.add_collection(collection)
    return collection


# ============================================================
# Steps
# ============================================================
def plot_step(ax, points, step: Step, grid_size=None):
    """
    Draw one progressive step: the curve for curve/visit steps, the
    centroid for sweep steps, and the tour snapshot for every step
    (left open while it is still partial).
    """
    coords = as_coords(points)
    plot_points(ax, coords, grid_size or getattr(step, "grid_size", None))

    if isinstance(step, (CurveStep, VisitStep)):
        plot_curve(ax, step.curve_vertices)
        if isinstance(step, VisitStep):
            cx, cy = step.curve_vertices[step.curve_position]
            ax.scatter([cx], [cy], s=80, facecolors="none", edgecolors="tab:orange", zorder=6)

    if isinstance(step, SweepStep):
        cx, cy = step.centroid
        ax.scatter([cx], [cy], marker="x", s=60, color="tab:red", zorder=6, label="Centroid")

    complete = len(step.tour) == len(coords)
    plot_tour(ax, coords, step.tour, closed=complete)
    ax.set_title(step.description, fontsize=8)
    return ax


def render_steps(points, steps, grid_size=None, figsize=(6, 6)):
    """One Figure per step, in trace order."""
    figures = []
    for step in steps:
        fig, ax = make_figure(figsize=figsize)
        plot_step(ax, points, step, grid_size=grid_size)
        figures.append(fig)
    return figures


def plot_comparison(points, tours, labels, grid_size=None, title=""):
    """Overlay several closed tours over the same points."""
    fig, ax = make_figure(title=title)
    plot_points(ax, points, grid_size)
    colors = ["tab:blue", "tab:green", "tab:purple", "tab:red", "tab:brown"]
    for idx, (tour, label) in enumerate(zip(tours, labels)):
        plot_tour(ax, points, tour, color=colors[idx % len(colors)], label=label)
    ax.legend(loc="upper right", fontsize=8)
    return fig
