"""Computation pipeline and command-line entry point.

Functions
---------
compute_and_render
    Build the stress field and draw it on a surface.
main
    ``stripstress`` command.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from stripstress.config import Config, config_from_mapping, load_config
from stripstress.logging_config import setup_logging
from stripstress.parameters import GridSpec, LoadParameters
from stripstress.solvers.boussinesq import build_stress_field
from stripstress.solvers.field import StressField
from stripstress.visualization.renderer import FieldRenderer, RenderSpec
from stripstress.visualization.surface import ImageSurface, Surface

logger = logging.getLogger(__name__)


def compute_and_render(
    load: LoadParameters,
    grid: GridSpec,
    spec: RenderSpec | None = None,
    surface: Surface | None = None,
    workers: int | None = None,
) -> tuple[StressField, Surface]:
    """Compute the stress field for *load* and render it.

    Each call recomputes the field from scratch.

    Args:
        load: Load parameters.
        grid: Grid resolution and extents.
        spec: Rendering options.
        surface: Target surface (an 800 × 800 :class:`ImageSurface`
            if None).
        workers: Thread-pool size for the field computation.

    Returns:
        Tuple ``(field, surface)``.
    """
    field = build_stress_field(load, grid, workers=workers)
    if surface is None:
        surface = ImageSurface(800, 800)
    FieldRenderer(surface, grid, spec).render(field)
    return field, surface


def _canvas_size(text: str) -> tuple[int, int]:
    try:
        w, h = (int(v) for v in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}") from None
    return w, h


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stripstress",
        description="Vertical stress below a uniform strip load (Boussinesq).",
    )
    parser.add_argument("--config", help="TOML configuration file")
    parser.add_argument("--b", type=float, help="load width basis (m)")
    parser.add_argument("--q", type=float, help="surface load (kN/m²)")
    parser.add_argument("-s", "--subdivisions", type=int, help="grid cells per b")
    parser.add_argument("-w", "--width", type=float, help="grid half-width, in b")
    parser.add_argument("--height", type=float, help="grid depth, in b")
    parser.add_argument("--graph-distance", type=int, help="grid lines per b")
    parser.add_argument("--canvas", type=_canvas_size, default=(800, 800), help="canvas size WxH (px)")
    parser.add_argument("--workers", type=int, default=None, help="threads for the field computation")
    parser.add_argument("-o", "--output", help="write the chart to this image file")
    parser.add_argument("--csv", help="write the stress field to this CSV file")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def _config_from_args(args: argparse.Namespace) -> Config:
    config = load_config(args.config) if args.config else Config()
    overrides = {
        "load": {k: v for k, v in (("b", args.b), ("q", args.q)) if v is not None},
        "grid": {
            k: v for k, v in (
                ("s", args.subdivisions), ("w", args.width), ("h", args.height),
            ) if v is not None
        },
        "render": {"graph_distance": args.graph_distance} if args.graph_distance is not None else {},
    }
    return config_from_mapping(overrides, base=config)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING)

    try:
        config = _config_from_args(args)
        width, height = args.canvas
        surface = ImageSurface(width, height)
        field, surface = compute_and_render(
            config.load, config.grid, config.render, surface, workers=args.workers,
        )
    except (ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 2

    print(field)
    print(f"σz under the centre at z = {field.z[-1]:.4g} m: {field.column(0.0)[-1]:.4g} kN/m²")

    written: list[Path] = []
    try:
        if args.csv:
            field.export_csv(args.csv)
            written.append(Path(args.csv))
        if args.output:
            surface.save(args.output)
            written.append(Path(args.output))
            logger.info("Chart written to %s", args.output)
    except (ValueError, OSError) as exc:
        logger.error("Could not write output: %s", exc)
        # leave no partial set of outputs behind
        for path in written:
            path.unlink(missing_ok=True)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
