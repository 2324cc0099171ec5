"""Point and line probes on a computed stress field.

Classes
-------
PointProbe
    Sample the stress at a single point.
LineProbe
    Sample the stress along a line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass
class PointProbe:
    """Extract the stress at a specific location.

    Args:
        location: Coordinates ``(x, z)`` in metres.
    """

    location: tuple[float, float]

    def sample(self, field: Any) -> float:
        """Sample the field at this probe location.

        Uses the nearest grid node.

        Args:
            field: A :class:`~stripstress.solvers.field.StressField`.

        Returns:
            Stress (kN/m²).
        """
        x, z = self.location
        return field.at(x, z)


@dataclass
class LineProbe:
    """Sample the stress along a line.

    Args:
        start: Start point ``(x, z)``.
        end: End point ``(x, z)``.
        n_points: Number of sample points.
    """

    start: tuple[float, float]
    end: tuple[float, float]
    n_points: int = 100

    def sample(self, field: Any) -> tuple[np.ndarray, np.ndarray]:
        """Sample the field along this line.

        Args:
            field: A :class:`~stripstress.solvers.field.StressField`.

        Returns:
            Tuple ``(distances, values)`` where *distances* is the
            arc-length coordinate along the line.
        """
        s = np.asarray(self.start, dtype=float)
        e = np.asarray(self.end, dtype=float)
        t = np.linspace(0.0, 1.0, self.n_points)
        points = s + np.outer(t, e - s)
        distances = t * np.linalg.norm(e - s)

        ix = np.abs(field.x[np.newaxis, :] - points[:, 0:1]).argmin(axis=1)
        iz = np.abs(field.z[np.newaxis, :] - points[:, 1:2]).argmin(axis=1)
        return distances, field.values[iz, ix].copy()
