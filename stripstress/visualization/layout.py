"""Pixel layout of the stress chart.

Coordinates passed to :meth:`Layout.coord_to_pixel` are in grid-cell
units: ``x`` is the column offset from the load centreline and ``z``
the row index below the surface.
"""

from __future__ import annotations

from dataclasses import dataclass

CENTER_FRACTION = 0.45
TOP_FRACTION = 0.10
PLOT_FRACTION = 0.80


@dataclass(frozen=True)
class Layout:
    """Affine mapping from grid cells to canvas pixels.

    Attributes:
        center: Pixel x of the load centreline.
        base_y: Pixel y of the ground surface.
        unit_scale: Pixels per grid cell.
        plot_left, plot_right: Horizontal pixel bounds of the plot area.
        plot_top, plot_bottom: Vertical pixel bounds of the plot area.
    """

    center: float
    base_y: float
    unit_scale: float
    plot_left: float
    plot_right: float
    plot_top: float
    plot_bottom: float

    @property
    def plot_width(self) -> float:
        return self.plot_right - self.plot_left

    @property
    def plot_height(self) -> float:
        return self.plot_bottom - self.plot_top

    def coord_to_pixel(self, x: float, z: float) -> tuple[float, float]:
        return (
            self.center + float(x) * self.unit_scale,
            self.base_y + float(z) * self.unit_scale,
        )

    def pixel_to_coord(self, px: float, py: float) -> tuple[float, float]:
        return (
            (float(px) - self.center) / self.unit_scale,
            (float(py) - self.base_y) / self.unit_scale,
        )

    def contains_x(self, px: float, tol: float = 1e-9) -> bool:
        return self.plot_left - tol <= px <= self.plot_right + tol

    def contains_y(self, py: float, tol: float = 1e-9) -> bool:
        return self.plot_top - tol <= py <= self.plot_bottom + tol


def compute_layout(
    canvas_width: float,
    canvas_height: float,
    grid_height_in_b: float,
    subdivisions: int,
) -> Layout:
    """Derive the chart layout for a canvas.

    The load centreline sits at 45 % of the canvas width and the ground
    surface 10 % below the top.  The plot area spans 80 % of the width
    (centred on the load) and 80 % of the height, which holds the full
    grid depth.

    Args:
        canvas_width: Canvas width (px).
        canvas_height: Canvas height (px).
        grid_height_in_b: Grid depth in multiples of ``b``.
        subdivisions: Grid cells per ``b``.

    Returns:
        The :class:`Layout`.
    """
    canvas_width = float(canvas_width)
    canvas_height = float(canvas_height)
    if canvas_width <= 0 or canvas_height <= 0:
        raise ValueError(
            f"canvas must have positive size, got {canvas_width}x{canvas_height}"
        )
    cells_deep = float(grid_height_in_b) * int(subdivisions)
    if cells_deep <= 0:
        raise ValueError("grid must have a positive depth")

    center = CENTER_FRACTION * canvas_width
    base_y = TOP_FRACTION * canvas_height
    plot_height = PLOT_FRACTION * canvas_height
    half_width = PLOT_FRACTION * canvas_width / 2.0
    return Layout(
        center=center,
        base_y=base_y,
        unit_scale=plot_height / cells_deep,
        plot_left=center - half_width,
        plot_right=center + half_width,
        plot_top=base_y,
        plot_bottom=base_y + plot_height,
    )
