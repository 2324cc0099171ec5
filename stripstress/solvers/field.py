"""Container for a computed vertical stress field.

Classes
-------
StressField
    Read-only grid of vertical stresses with its coordinates.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from stripstress.parameters import GridSpec, LoadParameters


class StressField:
    """Vertical stress on a regular grid.

    ``values[iz, ix]`` is the stress at depth ``z[iz]`` and horizontal
    offset ``x[ix]``.  Depth increases downward from the surface and the
    load centreline falls on column ``columns // 2``.  The arrays are
    flagged read-only; a parameter change requires a new field.

    Attributes:
        values: Stress array (kN/m²), shape ``(rows, columns)``.
        x: Horizontal offsets of the columns (m).
        z: Depths of the rows (m).
        load: Load parameters used for the computation.
        grid: Grid specification used for the computation.
    """

    def __init__(
        self,
        values: np.ndarray,
        x: np.ndarray,
        z: np.ndarray,
        load: LoadParameters,
        grid: GridSpec,
    ) -> None:
        values = np.asarray(values, dtype=float)
        if values.shape != (len(z), len(x)):
            raise ValueError(
                f"values shape {values.shape} does not match "
                f"(len(z), len(x)) = {(len(z), len(x))}"
            )
        self.values = values
        self.x = np.asarray(x, dtype=float)
        self.z = np.asarray(z, dtype=float)
        for arr in (self.values, self.x, self.z):
            arr.setflags(write=False)
        self.load = load
        self.grid = grid

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape

    @property
    def rows(self) -> int:
        return self.values.shape[0]

    @property
    def columns(self) -> int:
        return self.values.shape[1]

    @property
    def percent(self) -> np.ndarray:
        """Stress normalised by the surface load, ``values / q``."""
        return self.values / self.load.q

    def __getitem__(self, key: Any) -> Any:
        return self.values[key]

    def index_of(self, x: float, z: float) -> tuple[int, int]:
        """Indices ``(iz, ix)`` of the cell nearest to ``(x, z)``."""
        ix = int(np.argmin(np.abs(self.x - x)))
        iz = int(np.argmin(np.abs(self.z - z)))
        return iz, ix

    def at(self, x: float, z: float) -> float:
        """Stress at the grid node nearest to ``(x, z)``."""
        iz, ix = self.index_of(x, z)
        return float(self.values[iz, ix])

    def column(self, x: float = 0.0) -> np.ndarray:
        """Depth profile of the stress at the column nearest to *x*."""
        _, ix = self.index_of(x, 0.0)
        return self.values[:, ix]

    def row(self, z: float) -> np.ndarray:
        """Horizontal profile of the stress at the row nearest to *z*."""
        iz, _ = self.index_of(0.0, z)
        return self.values[iz, :]

    def plot(self, ax: Any = None, **kwargs: Any) -> Any:
        """Quick filled-contour plot; see :func:`~stripstress.visualization.plot_stress_field`."""
        from stripstress.visualization.plot2d import plot_stress_field
        return plot_stress_field(self, ax=ax, **kwargs)

    def export_csv(self, filename: str, layout: str = "long") -> None:
        """Export to CSV; see :func:`~stripstress.postprocess.export_csv`."""
        from stripstress.postprocess.export import export_csv
        export_csv(self, filename, layout=layout)

    def __repr__(self) -> str:
        return (
            f"StressField(shape={self.shape}, b={self.load.b:g}, "
            f"q={self.load.q:g}, s={self.grid.s})"
        )
