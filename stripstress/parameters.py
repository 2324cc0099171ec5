"""Physical and grid parameters for a strip-load computation.

Classes
-------
LoadParameters
    Width basis and magnitude of the surface strip load.
GridSpec
    Resolution and extents of the evaluation grid.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def _check_positive(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")
    return value


@dataclass(frozen=True)
class LoadParameters:
    """Uniform strip load applied at the ground surface.

    The load spans ``-b/2 <= x <= b/2`` and is infinitely long in the
    out-of-plane direction (plane strain).

    Args:
        b: Load width basis (m).
        q: Surface load magnitude (kN/m²).
    """

    b: float = 5.0
    q: float = 10.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "b", _check_positive("b", self.b))
        object.__setattr__(self, "q", _check_positive("q", self.q))


@dataclass(frozen=True)
class GridSpec:
    """Regular evaluation grid, expressed in multiples of ``b``.

    The grid is symmetric about the load centreline: it covers
    ``-w·b <= x < w·b`` horizontally and ``0 <= z < h·b`` in depth, with
    ``s`` cells per ``b`` in both directions.

    Args:
        s: Number of grid cells per unit of ``b``.
        w: Half-width of the grid, in multiples of ``b``.
        h: Depth of the grid, in multiples of ``b``.
    """

    s: int = 200
    w: float = 7.0
    h: float = 7.0

    def __post_init__(self) -> None:
        if isinstance(self.s, bool) or int(self.s) != self.s or self.s <= 0:
            raise ValueError(f"s must be a positive integer, got {self.s!r}")
        object.__setattr__(self, "s", int(self.s))
        object.__setattr__(self, "w", _check_positive("w", self.w))
        object.__setattr__(self, "h", _check_positive("h", self.h))
        if self.rows < 1 or self.half_columns < 1:
            raise ValueError(
                f"grid {self.w}b x {self.h}b at s={self.s} has no cells"
            )

    @property
    def rows(self) -> int:
        """Number of depth rows, ``h·s``."""
        return int(round(self.h * self.s))

    @property
    def half_columns(self) -> int:
        """Number of columns on each side of the centreline, ``w·s``."""
        return int(round(self.w * self.s))

    @property
    def columns(self) -> int:
        """Total number of columns, ``2·w·s``."""
        return 2 * self.half_columns

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.columns)

    @property
    def n_cells(self) -> int:
        return self.rows * self.columns

    def cell_size(self, b: float) -> float:
        """Physical size (m) of one grid cell for a load of width basis *b*."""
        return b / self.s
