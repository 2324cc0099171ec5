"""Matplotlib plots of a stress field.

Functions
---------
plot_stress_field
    Filled contours of σz/q with isobar lines.
plot_profile
    Stress versus depth below a given offset.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np


def _subsample(n: int, max_points: int) -> int:
    return max(1, int(np.ceil(n / max_points)))


def plot_stress_field(
    field: Any,
    ax: Any = None,
    contours: int = 20,
    isobars: Sequence[float] = (0.1, 0.2, 0.4, 0.6, 0.8),
    colorbar: bool = True,
    cmap: str = "RdBu",
    max_points: int = 400,
    title: str = "",
) -> Any:
    """Plot the normalised stress σz/q of a field.

    Depth increases downward.  Large fields are subsampled to at most
    *max_points* along each axis.

    Args:
        field: A :class:`~stripstress.solvers.field.StressField`.
        ax: Matplotlib axes (creates new figure if None).
        contours: Number of filled contour levels.
        isobars: Stress ratios drawn as labelled contour lines.
        colorbar: Show colour bar.
        cmap: Matplotlib colour map name.
        max_points: Maximum samples per axis.
        title: Plot title.

    Returns:
        Matplotlib axes.
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(10, 6))

    sz = _subsample(field.rows, max_points)
    sx = _subsample(field.columns, max_points)
    x = field.x[::sx]
    z = field.z[::sz]
    ratio = field.percent[::sz, ::sx]

    cs = ax.contourf(x, z, ratio, levels=contours, cmap=cmap, vmin=0.0, vmax=1.0)
    if colorbar:
        plt.colorbar(cs, ax=ax, label="σz / q")
    if isobars:
        lines = ax.contour(x, z, ratio, levels=sorted(isobars), colors="k", linewidths=0.6)
        ax.clabel(lines, fmt="%.1f", fontsize=8)

    b = field.load.b
    ax.axvspan(-b / 2.0, b / 2.0, ymax=1.0, ymin=0.98, color="k")
    ax.set_ylim(z[-1], z[0])
    ax.set_aspect("equal")
    ax.set_xlabel("x (m)")
    ax.set_ylabel("z (m)")
    ax.set_title(title or f"Vertical stress, b = {b:g} m, q = {field.load.q:g} kN/m²")
    return ax


def plot_profile(
    field: Any,
    x: float = 0.0,
    ax: Any = None,
) -> Any:
    """Plot σz against depth at the column nearest to *x*.

    Args:
        field: A :class:`~stripstress.solvers.field.StressField`.
        x: Horizontal offset from the load centreline (m).
        ax: Matplotlib axes (creates new figure if None).

    Returns:
        Matplotlib axes.
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(5, 7))

    ax.plot(field.column(x), field.z, "b-", linewidth=1.5)
    ax.set_ylim(field.z[-1], field.z[0])
    ax.set_xlabel("σz (kN/m²)")
    ax.set_ylabel("z (m)")
    ax.set_title(f"Stress profile at x = {x:g} m")
    ax.grid(True, alpha=0.3)
    return ax
