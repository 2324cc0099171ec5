"""Visualization: colour-mapped raster rendering and Matplotlib plots."""

from stripstress.visualization.colors import RGB, Gradient, lerp
from stripstress.visualization.layout import Layout, compute_layout
from stripstress.visualization.surface import Surface, ImageSurface
from stripstress.visualization.renderer import FieldRenderer, RenderSpec, load_arrows
from stripstress.visualization.plot2d import plot_stress_field, plot_profile

__all__ = [
    "RGB",
    "Gradient",
    "lerp",
    "Layout",
    "compute_layout",
    "Surface",
    "ImageSurface",
    "FieldRenderer",
    "RenderSpec",
    "load_arrows",
    "plot_stress_field",
    "plot_profile",
]
