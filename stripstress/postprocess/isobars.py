"""Pressure bulb metrics.

Functions
---------
influence_depth
    Depth at which the analytical stress falls to a fraction of q.
isobar_extent
    Depth and half-width of an isobar in a computed field.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from stripstress.parameters import LoadParameters
from stripstress.solvers.boussinesq import stress_at_point


def influence_depth(
    load: LoadParameters,
    fraction: float = 0.1,
    x: float = 0.0,
    max_depth_in_b: float = 1e4,
) -> float:
    """Depth below offset *x* where σz drops to ``fraction · q``.

    For ``x = 0`` and ``fraction = 0.1`` this is the classical depth of
    the 0.1 q pressure bulb, about 6.4 b.

    Args:
        load: Load parameters.
        fraction: Target stress ratio, strictly between 0 and 1.
        x: Horizontal offset from the load centreline (m).
        max_depth_in_b: Search limit, in multiples of ``b``.

    Returns:
        Depth (m).

    Raises:
        ValueError: If *fraction* is outside (0, 1), or the stress below
            *x* never reaches ``fraction · q`` from above within the
            search range.
    """
    from scipy.optimize import brentq

    if not 0.0 < fraction < 1.0:
        raise ValueError(f"fraction must lie in (0, 1), got {fraction!r}")

    target = fraction * load.q

    def residual(z: float) -> float:
        return float(stress_at_point(load.b, x, z, load.q)) - target

    z_lo = 0.0
    z_hi = max_depth_in_b * load.b
    if residual(z_lo) <= 0.0 or residual(z_hi) >= 0.0:
        # Outside the load the stress first grows with depth; start from
        # the depth of the maximum instead of the surface.
        z_grid = np.linspace(0.0, 10.0 * load.b + 2.0 * abs(x), 2001)
        sigma = stress_at_point(load.b, x, z_grid, load.q)
        z_lo = float(z_grid[int(np.argmax(sigma))])
        if residual(z_lo) <= 0.0 or residual(z_hi) >= 0.0:
            raise ValueError(
                f"stress below x={x:g} never reaches {fraction:g} q "
                f"within {max_depth_in_b:g} b"
            )
    return float(brentq(residual, z_lo, z_hi, xtol=1e-10 * load.b))


def isobar_extent(field: Any, fraction: float) -> tuple[float, float]:
    """Extent of the region where ``σz / q >= fraction`` in *field*.

    Args:
        field: A :class:`~stripstress.solvers.field.StressField`.
        fraction: Stress ratio of the isobar.

    Returns:
        ``(max_depth, max_half_width)`` in metres, ``(0.0, 0.0)`` if no
        node reaches the ratio.  Values are limited by the grid extents.
    """
    inside = field.percent >= fraction
    if not inside.any():
        return 0.0, 0.0
    rows = np.flatnonzero(inside.any(axis=1))
    cols = np.flatnonzero(inside.any(axis=0))
    return float(field.z[rows.max()]), float(np.abs(field.x[cols]).max())
