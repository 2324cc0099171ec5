"""
stripstress: vertical stress below a uniform surface strip load.

Evaluates the Boussinesq/Carothers closed-form elastic solution over a
regular grid and renders the result as a colour-mapped chart.

Subpackages
-----------
solvers
    Stress field engine.
visualization
    Colour gradients, chart layout, raster surfaces and rendering.
postprocess
    Probes, pressure bulb metrics, export.

Modules
-------
parameters
    Load and grid parameters.
config
    Presets and TOML configuration files.
app
    Computation pipeline and command-line entry point.
"""

from stripstress import (
    solvers,
    visualization,
    postprocess,
)
from stripstress.parameters import GridSpec, LoadParameters
from stripstress.solvers import StressField, build_stress_field, stress_at_point

__version__ = "0.1.0"

__all__ = [
    "solvers",
    "visualization",
    "postprocess",
    "GridSpec",
    "LoadParameters",
    "StressField",
    "build_stress_field",
    "stress_at_point",
]
