"""Closed-form vertical stress below a uniform strip load.

Implements the Boussinesq/Carothers plane-strain solution in angle
form::

    σz = q/π · (α + sin α · cos(α + 2β))

where, for a point at horizontal offset *x* from the load centreline
and depth *z*, β is the angle between the vertical and the line to the
load's right edge, and α the angle subtended by the whole load width.

Functions
---------
angle_from_vertical_axis
    β = atan((x - b/2) / z).
angle_span
    α = atan((x + b/2) / z) - β.
vertical_stress
    σz from α, β and q.
stress_at_point
    σz at a coordinate, with the surface singularity handled.
build_stress_field
    Dense evaluation over a :class:`~stripstress.parameters.GridSpec`.

Classes
-------
StripLoadSolver
    Solver object wrapping :func:`build_stress_field`.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from numpy.typing import ArrayLike

from stripstress.parameters import GridSpec, LoadParameters
from stripstress.solvers.field import StressField

logger = logging.getLogger(__name__)

#: Minimum depth, as a fraction of ``b``, used in place of the ground
#: surface (z = 0) where the angle functions are singular.
SURFACE_EPSILON = 1e-9


def angle_from_vertical_axis(x: ArrayLike, z: ArrayLike, b: float) -> np.ndarray:
    """Angle β (rad) from the vertical to the load's right edge.

    Args:
        x: Horizontal offset(s) from the load centreline (m).
        z: Depth(s) below the surface (m).
        b: Load width basis (m).

    Returns:
        β = atan((x - b/2) / z).  At ``z = 0`` this tends to ±π/2 and
        is NaN exactly at the load edge; callers needing finite values
        should use :func:`stress_at_point`.
    """
    x_arr = np.asarray(x, dtype=float)
    z_arr = np.asarray(z, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.arctan((x_arr - b / 2.0) / z_arr)


def angle_span(x: ArrayLike, z: ArrayLike, b: float) -> np.ndarray:
    """Angle α (rad) subtended by the full load width.

    Args:
        x: Horizontal offset(s) from the load centreline (m).
        z: Depth(s) below the surface (m).
        b: Load width basis (m).

    Returns:
        α = atan((x + b/2) / z) - β.
    """
    x_arr = np.asarray(x, dtype=float)
    z_arr = np.asarray(z, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        left = np.arctan((x_arr + b / 2.0) / z_arr)
    return left - angle_from_vertical_axis(x_arr, z_arr, b)


def vertical_stress(alpha: ArrayLike, beta: ArrayLike, q: float) -> np.ndarray:
    """Vertical stress σz = q/π · (α + sin α · cos(α + 2β)).

    Args:
        alpha: Angle subtended by the load (rad).
        beta: Angle to the right load edge (rad).
        q: Surface load magnitude (kN/m²).

    Returns:
        Vertical stress, in the units of *q*.
    """
    a = np.asarray(alpha, dtype=float)
    bt = np.asarray(beta, dtype=float)
    return (q / np.pi) * (a + np.sin(a) * np.cos(a + 2.0 * bt))


def stress_at_point(b: float, x: ArrayLike, z: ArrayLike, q: float) -> np.ndarray:
    """Vertical stress at offset *x* and depth *z*.

    Depths below ``SURFACE_EPSILON * b`` (including the surface itself
    and negative values) are evaluated at that minimum depth, so the
    surface row takes its limiting value: ≈ q under the load, ≈ q/2 at
    the edges and ≈ 0 outside.

    Close to the surface the angle form rounds to ``q`` or just above
    it, and far outside the load to tiny negative values.  The result
    is therefore clipped to ``[0, q)``, the upper bound being the
    largest float below ``q``.

    Args:
        b: Load width basis (m).
        x: Horizontal offset(s) from the load centreline (m).
        z: Depth(s) below the surface (m).
        q: Surface load magnitude (kN/m²).

    Returns:
        Vertical stress (kN/m²), broadcast over *x* and *z*.
    """
    z_arr = np.maximum(np.asarray(z, dtype=float), SURFACE_EPSILON * b)
    beta = angle_from_vertical_axis(x, z_arr, b)
    alpha = angle_span(x, z_arr, b)
    sigma = vertical_stress(alpha, beta, q)
    return np.clip(sigma, 0.0, np.nextafter(q, 0.0))


def build_stress_field(
    load: LoadParameters,
    grid: GridSpec,
    *,
    workers: int | None = None,
    chunk_cells: int = 2 ** 20,
) -> StressField:
    """Evaluate the vertical stress over a regular grid.

    Row ``iz`` sits at depth ``z = iz·b/s`` and column ``ix`` at
    ``x = (ix - w·s)·b/s``, so the centreline falls on column
    ``columns // 2``.  Rows are evaluated in blocks of roughly
    *chunk_cells* cells written into a preallocated array.

    Args:
        load: Load width and magnitude.
        grid: Grid resolution and extents.
        workers: If greater than 1, evaluate row blocks on a thread
            pool of this size.  The result is identical to the serial
            evaluation.
        chunk_cells: Approximate number of cells per block.

    Returns:
        The computed :class:`StressField`.
    """
    b, q = load.b, load.q
    step = grid.cell_size(b)
    x = np.arange(-grid.half_columns, grid.half_columns, dtype=float) * step
    z = np.arange(grid.rows, dtype=float) * step
    values = np.empty(grid.shape, dtype=float)

    rows_per_block = max(1, int(chunk_cells) // x.size)
    starts = range(0, grid.rows, rows_per_block)
    x_row = x[np.newaxis, :]

    def fill(start: int) -> None:
        stop = min(start + rows_per_block, grid.rows)
        values[start:stop] = stress_at_point(b, x_row, z[start:stop, np.newaxis], q)

    logger.debug(
        "Building %dx%d stress field (b=%g, q=%g, s=%d)",
        grid.rows, grid.columns, b, q, grid.s,
    )
    t0 = time.perf_counter()
    if workers is not None and workers > 1 and len(starts) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # list() re-raises any exception from a block
            list(pool.map(fill, starts))
    else:
        for start in starts:
            fill(start)
    logger.info(
        "Stress field of %d cells computed in %.3f s",
        grid.n_cells, time.perf_counter() - t0,
    )

    return StressField(values, x=x, z=z, load=load, grid=grid)


class StripLoadSolver:
    """Solver for the stress field below a uniform strip load.

    Args:
        workers: Thread-pool size for row-block evaluation (serial if
            None or 1).
        chunk_cells: Approximate number of cells per block.

    Example::

        solver = StripLoadSolver(workers=4)
        field = solver.solve(LoadParameters(b=5, q=10), GridSpec(s=50))
    """

    def __init__(self, workers: int | None = None, chunk_cells: int = 2 ** 20) -> None:
        self.workers = workers
        self.chunk_cells = chunk_cells

    def solve(self, load: LoadParameters, grid: GridSpec) -> StressField:
        """Compute the stress field for *load* on *grid*."""
        return build_stress_field(
            load, grid, workers=self.workers, chunk_cells=self.chunk_cells,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(workers={self.workers})"
