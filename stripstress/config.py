"""Default parameter sets and TOML configuration files.

Presets
-------
DEFAULT_LOAD
    b = 5 m, q = 10 kN/m².
STANDALONE_GRID
    s = 5000, w = 2, h = 4: fine grid for one-off computations.
INTERACTIVE_GRID
    s = 200, w = 7, h = 7: coarser, wider grid for charts.

A configuration file may hold any of the tables below; omitted keys
keep their defaults::

    [load]
    b = 5.0
    q = 10.0

    [grid]
    s = 200
    w = 7
    h = 7

    [render]
    graph_distance = 2
    visibility_threshold = 0.085
    font_size = 12
    show_load_indicator = true
    gradient = [[255, 0, 0], [0, 0, 255]]
"""

from __future__ import annotations

import dataclasses
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from stripstress.parameters import GridSpec, LoadParameters
from stripstress.visualization.colors import RGB, Gradient
from stripstress.visualization.renderer import RenderSpec

logger = logging.getLogger(__name__)

DEFAULT_LOAD = LoadParameters(b=5.0, q=10.0)
STANDALONE_GRID = GridSpec(s=5000, w=2.0, h=4.0)
INTERACTIVE_GRID = GridSpec(s=200, w=7.0, h=7.0)

_RENDER_KEYS = ("graph_distance", "visibility_threshold", "font_size", "show_load_indicator", "gradient")


@dataclass(frozen=True)
class Config:
    """Complete set of inputs for one computation and render pass."""

    load: LoadParameters = DEFAULT_LOAD
    grid: GridSpec = INTERACTIVE_GRID
    render: RenderSpec = field(default_factory=RenderSpec)


def _table(data: Mapping[str, Any], section: str) -> Mapping[str, Any]:
    table = data.get(section, {})
    if not isinstance(table, Mapping):
        raise ValueError(f"[{section}] must be a table, got {table!r}")
    return table


def _update(base: Any, table: Mapping[str, Any], allowed: tuple[str, ...], section: str) -> Any:
    unknown = set(table) - set(allowed)
    if unknown:
        raise ValueError(f"Unknown key(s) in [{section}]: {', '.join(sorted(unknown))}")
    try:
        return dataclasses.replace(base, **table)
    except TypeError as exc:
        raise ValueError(f"Invalid value in [{section}]: {exc}") from exc


def _gradient(value: Any) -> Gradient:
    try:
        low, high = value
        if len(low) != 3 or len(high) != 3:
            raise ValueError
        return Gradient(RGB(*(int(c) for c in low)), RGB(*(int(c) for c in high)))
    except (TypeError, ValueError):
        raise ValueError(
            f"gradient must be two [r, g, b] colours, got {value!r}"
        ) from None


def config_from_mapping(data: Mapping[str, Any], base: Config | None = None) -> Config:
    """Build a :class:`Config` from nested ``load``/``grid``/``render`` tables.

    Raises:
        ValueError: On unknown tables or keys, or invalid values.
    """
    base = base or Config()
    unknown = set(data) - {"load", "grid", "render"}
    if unknown:
        raise ValueError(f"Unknown configuration table(s): {', '.join(sorted(unknown))}")

    load = _update(base.load, _table(data, "load"), ("b", "q"), "load")
    grid = _update(base.grid, _table(data, "grid"), ("s", "w", "h"), "grid")

    render_table = dict(_table(data, "render"))
    if "gradient" in render_table:
        render_table["gradient"] = _gradient(render_table["gradient"])
    render = _update(base.render, render_table, _RENDER_KEYS, "render")
    return Config(load=load, grid=grid, render=render)


def load_config(path: str | Path, base: Config | None = None) -> Config:
    """Read a TOML configuration file.

    Args:
        path: File path.
        base: Values for anything the file omits (defaults if None).

    Returns:
        The merged :class:`Config`.
    """
    path = Path(path)
    with path.open("rb") as fh:
        data = tomllib.load(fh)
    logger.debug("Loaded configuration from %s", path)
    return config_from_mapping(data, base=base)
