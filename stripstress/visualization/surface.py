"""Drawing surfaces.

Classes
-------
Surface
    Abstract 2-D raster surface used by the renderer.
ImageSurface
    In-memory RGB raster, exportable through Matplotlib.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
from PIL import Image

from stripstress.visualization.colors import BLACK, WHITE, RGB

Color = Sequence[float]


@dataclass(frozen=True)
class TextItem:
    """Text queued on an :class:`ImageSurface`."""

    text: str
    x: float
    y: float
    font_size: float
    color: RGB
    align: str = "left"


class Surface(ABC):
    """Abstract raster surface with canvas-like drawing primitives.

    All positions and sizes are in pixels, with the origin at the top
    left corner and y increasing downward.
    """

    width: int
    height: int

    @abstractmethod
    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        """Reset a region to the background."""

    @abstractmethod
    def stroke_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        color: Color = BLACK,
        line_width: float = 1.0,
    ) -> None:
        """Draw the outline of a rectangle.

        A rectangle of zero width or height draws a straight line.
        """

    @abstractmethod
    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        """Fill a rectangle with a solid colour."""

    @abstractmethod
    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        font_size: float = 12.0,
        color: Color = BLACK,
        align: str = "left",
    ) -> None:
        """Draw *text* with its baseline at *y*."""

    @abstractmethod
    def draw_image(self, image: np.ndarray, x: float, y: float, w: float, h: float) -> None:
        """Draw an RGB or RGBA bitmap scaled into the given rectangle."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self.width}, height={self.height})"


class ImageSurface(Surface):
    """RGB raster held in a NumPy array.

    Rectangles snap outward to whole pixels, so any non-empty rectangle
    covers at least one pixel, and are clipped to the canvas.  Colour
    channels are clipped to 0..255 when stored.  Bitmaps are resampled
    and alpha-blended with Pillow.  Text is recorded and composited when
    the surface is turned into a Matplotlib figure.

    Args:
        width: Canvas width (px).
        height: Canvas height (px).
        background: Background colour.

    Example::

        surface = ImageSurface(800, 600)
        surface.fill_rect(10, 10, 100, 50, (255, 0, 0))
        surface.save("chart.png")
    """

    def __init__(self, width: int = 800, height: int = 800, background: Color = WHITE) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"surface must have positive size, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.background = _to_rgb(background)
        self.pixels = np.empty((self.height, self.width, 3), dtype=np.uint8)
        self.pixels[...] = self.background
        self.texts: list[TextItem] = []

    # ------------------------------------------------------------------
    # Pixel spans
    # ------------------------------------------------------------------

    @staticmethod
    def _span(start: float, length: float, limit: int) -> tuple[int, int]:
        """Whole-pixel span ``[lo, hi)`` covering ``[start, start + length)``."""
        if length < 0:
            start, length = start + length, -length
        lo = math.floor(start)
        hi = max(lo + 1, math.ceil(start + length))
        return max(lo, 0), min(hi, limit)

    def _fill(self, x: float, y: float, w: float, h: float, color: RGB) -> None:
        if w == 0 or h == 0:
            return
        x0, x1 = self._span(x, w, self.width)
        y0, y1 = self._span(y, h, self.height)
        if x0 < x1 and y0 < y1:
            self.pixels[y0:y1, x0:x1] = color

    # ------------------------------------------------------------------
    # Surface primitives
    # ------------------------------------------------------------------

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        self._fill(x, y, w, h, self.background)
        x_lo, x_hi = sorted((x, x + w))
        y_lo, y_hi = sorted((y, y + h))
        self.texts = [
            t for t in self.texts
            if not (x_lo <= t.x <= x_hi and y_lo <= t.y <= y_hi)
        ]

    def stroke_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        color: Color = BLACK,
        line_width: float = 1.0,
    ) -> None:
        rgb = _to_rgb(color)
        lw = max(float(line_width), 1.0)
        half = lw / 2.0
        # horizontal edges
        self._fill(x - half, y - half, w + lw, lw, rgb)
        self._fill(x - half, y + h - half, w + lw, lw, rgb)
        # vertical edges
        self._fill(x - half, y - half, lw, h + lw, rgb)
        self._fill(x + w - half, y - half, lw, h + lw, rgb)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        self._fill(x, y, w, h, _to_rgb(color))

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        font_size: float = 12.0,
        color: Color = BLACK,
        align: str = "left",
    ) -> None:
        if align not in ("left", "center", "right"):
            raise ValueError(f"Unknown text alignment {align!r}")
        self.texts.append(TextItem(str(text), float(x), float(y), float(font_size), _to_rgb(color), align))

    def draw_image(self, image: np.ndarray, x: float, y: float, w: float, h: float) -> None:
        img = np.asarray(image)
        if img.ndim != 3 or img.shape[2] not in (3, 4):
            raise ValueError(f"image must have shape (h, w, 3|4), got {img.shape}")
        if w <= 0 or h <= 0:
            return
        if img.shape[2] == 3:
            img = np.dstack([img, np.full(img.shape[:2], 255)])
        tx0, tx1 = math.floor(x), max(math.floor(x) + 1, math.ceil(x + w))
        ty0, ty1 = math.floor(y), max(math.floor(y) + 1, math.ceil(y + h))
        sprite = Image.fromarray(np.clip(img, 0, 255).astype(np.uint8)).resize(
            (tx1 - tx0, ty1 - ty0), Image.Resampling.NEAREST,
        )

        # paste() clips the sprite to the canvas
        layer = Image.new("RGBA", (self.width, self.height), (0, 0, 0, 0))
        layer.paste(sprite, (tx0, ty0))
        canvas = Image.fromarray(self.pixels).convert("RGBA")
        self.pixels = np.array(Image.alpha_composite(canvas, layer).convert("RGB"))

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_figure(self, dpi: float = 100.0) -> Any:
        """Composite the raster and the queued text into a Matplotlib figure.

        Args:
            dpi: Figure resolution; the figure is sized so that one
                canvas pixel maps to one output pixel.

        Returns:
            A :class:`matplotlib.figure.Figure`.
        """
        try:
            from matplotlib.figure import Figure
        except ImportError as exc:
            raise ImportError(
                "matplotlib is required to export an ImageSurface.  "
                "Install with: pip install matplotlib"
            ) from exc

        fig = Figure(figsize=(self.width / dpi, self.height / dpi), dpi=dpi)
        ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
        ax.imshow(
            self.pixels,
            interpolation="nearest",
            extent=(0, self.width, self.height, 0),
        )
        ax.set_xlim(0, self.width)
        ax.set_ylim(self.height, 0)
        ax.set_axis_off()

        # font sizes are in canvas pixels
        points_per_pixel = 72.0 / dpi
        for item in self.texts:
            ax.text(
                item.x, item.y, item.text,
                fontsize=item.font_size * points_per_pixel,
                color=tuple(c / 255.0 for c in item.color),
                ha=item.align,
                va="baseline",
            )
        return fig

    def save(self, filename: str, dpi: float = 100.0) -> None:
        """Write the surface, including text, to an image file.

        Args:
            filename: Output path; the format follows the extension.
            dpi: Figure resolution.
        """
        fig = self.to_figure(dpi=dpi)
        fig.savefig(filename, dpi=dpi)


def _to_rgb(color: Color) -> RGB:
    if len(color) != 3:
        raise ValueError(f"colour must have three channels, got {color!r}")
    return RGB(*(int(np.clip(c, 0, 255)) for c in color))
