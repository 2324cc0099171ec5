"""Colour-mapped rendering of a stress field onto a :class:`Surface`.

Classes
-------
RenderSpec
    Display-only rendering options.
FieldRenderer
    Draws the field, grid outline, legend and load indicator.

Functions
---------
load_arrows
    RGBA bitmap of a distributed load symbol.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field as dc_field

import numpy as np

from stripstress.parameters import GridSpec
from stripstress.solvers.field import StressField
from stripstress.visualization.colors import BLACK, RGB, Gradient
from stripstress.visualization.layout import Layout, compute_layout
from stripstress.visualization.surface import Surface

logger = logging.getLogger(__name__)

STRESS_UNIT = "kN/m²"
LEGEND_X_FRACTION = 0.87
LEGEND_WIDTH_FRACTION = 0.03
INDICATOR_HEIGHT_FRACTION = 0.05


@dataclass(frozen=True)
class RenderSpec:
    """Rendering options.

    Args:
        graph_distance: Grid lines per ``b``; every ``graph_distance``-th
            line falls on a whole multiple of ``b`` and is labelled.
        gradient: Colour gradient from zero to full relative stress.
        visibility_threshold: Cells with ``stress / q`` at or below this
            value are not drawn.
        font_size: Label size (px).
        line_color: Colour of the minor grid lines.
        major_line_color: Colour of the outline and whole-``b`` lines.
        text_color: Label colour.
        show_load_indicator: Draw the load symbol above the surface.
    """

    graph_distance: int = 2
    gradient: Gradient = dc_field(default_factory=Gradient)
    visibility_threshold: float = 0.085
    font_size: float = 12.0
    line_color: RGB = RGB(190, 190, 190)
    major_line_color: RGB = BLACK
    text_color: RGB = BLACK
    show_load_indicator: bool = True

    def __post_init__(self) -> None:
        gd = self.graph_distance
        if isinstance(gd, bool) or int(gd) != gd or gd < 1:
            raise ValueError(f"graph_distance must be a positive integer, got {gd!r}")
        object.__setattr__(self, "graph_distance", int(gd))
        for name in ("visibility_threshold", "font_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size!r}")


def load_arrows(
    width: int,
    height: int,
    n_arrows: int | None = None,
    color: RGB = BLACK,
) -> np.ndarray:
    """Bitmap of a bar with evenly spaced downward arrows.

    Args:
        width: Bitmap width (px).
        height: Bitmap height (px).
        n_arrows: Number of arrows; defaults to one per 12 px (min. 2).
        color: Symbol colour.

    Returns:
        RGBA array of shape ``(height, width, 4)``, transparent outside
        the symbol.
    """
    width = max(int(width), 1)
    height = max(int(height), 1)
    n = n_arrows or max(2, width // 12)

    yy, xx = np.mgrid[0:height, 0:width]
    xc = xx + 0.5
    bar = max(1, height // 10)
    head = max(2, height // 3)
    head_half = 0.3 * head + 1.0

    mask = yy < bar
    for c in (np.arange(n) + 0.5) * width / n:
        shaft = (np.abs(xc - c) <= 1.0) & (yy < height - head)
        tip = (yy >= height - head) & (np.abs(xc - c) <= (height - yy) / head * head_half)
        mask |= shaft | tip

    img = np.zeros((height, width, 4), dtype=np.uint8)
    img[..., :3] = color
    img[..., 3] = np.where(mask, 255, 0)
    return img


def _label(value: float) -> str:
    return f"{value:g}"


class FieldRenderer:
    """Draw a :class:`StressField` on a :class:`Surface`.

    Args:
        surface: Target surface; its size determines the layout.
        grid: Grid of the fields that will be drawn.
        spec: Rendering options.

    Example::

        surface = ImageSurface(800, 800)
        renderer = FieldRenderer(surface, field.grid)
        renderer.render(field)
        surface.save("stress.png")
    """

    def __init__(
        self,
        surface: Surface,
        grid: GridSpec,
        spec: RenderSpec | None = None,
    ) -> None:
        self.surface = surface
        self.grid = grid
        self.spec = spec or RenderSpec()
        self.layout: Layout = compute_layout(surface.width, surface.height, grid.h, grid.s)

    # ------------------------------------------------------------------
    # Grid outline
    # ------------------------------------------------------------------

    def draw_outline(self, b: float) -> None:
        """Stroke the plot area and the labelled grid lines.

        Vertical lines are drawn every ``1/graph_distance`` b across the
        plot width and labelled below the plot with ``|x|`` in metres at
        whole multiples of b; horizontal lines are drawn likewise down
        the depth and labelled on the left with ``z``.

        Args:
            b: Load width basis (m), used for the labels.
        """
        lay = self.layout
        spec = self.spec
        surface = self.surface
        gd = spec.graph_distance
        step = self.grid.s / gd
        font = spec.font_size

        surface.stroke_rect(
            lay.plot_left, lay.plot_top, lay.plot_width, lay.plot_height,
            color=spec.major_line_color, line_width=2.0,
        )

        half_plot_b = lay.plot_width / 2.0 / (self.grid.s * lay.unit_scale)
        k_max = math.ceil(max(self.grid.w, half_plot_b) * gd)
        for k in range(-k_max, k_max + 1):
            px, _ = lay.coord_to_pixel(k * step, 0.0)
            if not lay.contains_x(px):
                continue
            major = k % gd == 0
            surface.stroke_rect(
                px, lay.plot_top, 0.0, lay.plot_height,
                color=spec.major_line_color if major else spec.line_color,
                line_width=1.5 if major else 1.0,
            )
            if major:
                surface.draw_text(
                    _label(abs(k / gd) * b), px, lay.plot_bottom + 1.4 * font,
                    font_size=font, color=spec.text_color, align="center",
                )

        depth_plot_b = lay.plot_height / (self.grid.s * lay.unit_scale)
        for k in range(0, math.ceil(depth_plot_b * gd) + 1):
            _, py = lay.coord_to_pixel(0.0, k * step)
            if not lay.contains_y(py):
                continue
            major = k % gd == 0
            surface.stroke_rect(
                lay.plot_left, py, lay.plot_width, 0.0,
                color=spec.major_line_color if major else spec.line_color,
                line_width=1.5 if major else 1.0,
            )
            if major:
                surface.draw_text(
                    _label(abs(k / gd) * b), lay.plot_left - 0.5 * font, py + 0.35 * font,
                    font_size=font, color=spec.text_color, align="right",
                )

    # ------------------------------------------------------------------
    # Legend
    # ------------------------------------------------------------------

    def draw_gradient_legend(self, q: float) -> None:
        """Draw the vertical colour bar from 100 % (top) down to 0 %.

        Labels every 10 % give the corresponding stress ``q·p/100``; the
        top label carries the unit.

        Args:
            q: Surface load magnitude (kN/m²).
        """
        lay = self.layout
        spec = self.spec
        surface = self.surface
        font = spec.font_size

        bar_x = LEGEND_X_FRACTION * surface.width
        bar_w = LEGEND_WIDTH_FRACTION * surface.width
        band = lay.plot_height / 101.0

        for p in range(100, -1, -1):
            y = lay.plot_top + (100 - p) * band
            surface.fill_rect(bar_x, y, bar_w, band, spec.gradient(p / 100.0))
            if p % 10 == 0:
                text = _label(q * p / 100.0)
                if p == 100:
                    text = f"{text} {STRESS_UNIT}"
                surface.draw_text(
                    text, bar_x + bar_w + 0.4 * font, y + band / 2.0 + 0.35 * font,
                    font_size=font, color=spec.text_color,
                )

        surface.stroke_rect(
            bar_x, lay.plot_top, bar_w, 101 * band,
            color=spec.major_line_color, line_width=1.0,
        )

    # ------------------------------------------------------------------
    # Field
    # ------------------------------------------------------------------

    def draw_field(self, field: StressField) -> int:
        """Fill one rectangle per visible cell, coloured by ``stress / q``.

        Cells at or below the visibility threshold are skipped, as are
        cells extending past the horizontal plot bounds.  When a cell is
        smaller than a pixel only every ``floor(1/unit_scale)``-th row
        and column is drawn, each rectangle covering the skipped cells.
        The stress ratio is not clamped.

        Args:
            field: Stress field computed on this renderer's grid.

        Returns:
            Number of rectangles drawn.
        """
        if field.grid.s != self.grid.s or field.grid.h != self.grid.h:
            raise ValueError(
                f"field grid {field.grid} does not match renderer grid {self.grid}"
            )
        lay = self.layout
        spec = self.spec
        fill_rect = self.surface.fill_rect

        stride = max(1, int(1.0 / lay.unit_scale))
        size = stride * lay.unit_scale
        percent = field.percent

        ix = np.arange(0, field.columns, stride)
        px = lay.center + (ix - field.grid.half_columns) * lay.unit_scale
        inside = (px >= lay.plot_left - 1e-9) & (px + size <= lay.plot_right + 1e-9)
        ix, px = ix[inside], px[inside]

        drawn = 0
        for iz in range(0, field.rows, stride):
            row = percent[iz, ix]
            visible = row > spec.visibility_threshold
            if not visible.any():
                continue
            colors = spec.gradient.array(row[visible])
            py = lay.base_y + iz * lay.unit_scale
            for x_pix, (cr, cg, cb) in zip(px[visible].tolist(), colors.tolist()):
                fill_rect(x_pix, py, size, size, RGB(cr, cg, cb))
            drawn += len(colors)

        logger.debug("Drew %d cells with stride %d", drawn, stride)
        return drawn

    # ------------------------------------------------------------------
    # Load symbol
    # ------------------------------------------------------------------

    def draw_load_indicator(self, b: float, q: float) -> None:
        """Draw the load symbol over the loaded width, above the surface."""
        lay = self.layout
        load_px = self.grid.s * lay.unit_scale
        height = INDICATOR_HEIGHT_FRACTION * self.surface.height
        left = lay.center - load_px / 2.0
        top = lay.base_y - height - 2.0

        image = load_arrows(round(load_px), round(height))
        self.surface.draw_image(image, left, top, load_px, height)
        self.surface.draw_text(
            f"q = {_label(q)} {STRESS_UNIT}, b = {_label(b)} m",
            lay.center, top - 0.4 * self.spec.font_size,
            font_size=self.spec.font_size, color=self.spec.text_color, align="center",
        )

    def render(self, field: StressField) -> int:
        """Clear the surface and draw the complete chart.

        Args:
            field: Stress field computed on this renderer's grid.

        Returns:
            Number of field rectangles drawn.
        """
        surface = self.surface
        surface.clear_rect(0, 0, surface.width, surface.height)
        drawn = self.draw_field(field)
        self.draw_outline(field.load.b)
        self.draw_gradient_legend(field.load.q)
        if self.spec.show_load_indicator:
            self.draw_load_indicator(field.load.b, field.load.q)
        logger.info(
            "Rendered %s on %dx%d surface (%d cells drawn)",
            field, surface.width, surface.height, drawn,
        )
        return drawn
