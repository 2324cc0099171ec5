"""Solvers: closed-form stress field engine."""

from stripstress.solvers.field import StressField
from stripstress.solvers.boussinesq import (
    SURFACE_EPSILON,
    StripLoadSolver,
    angle_from_vertical_axis,
    angle_span,
    build_stress_field,
    stress_at_point,
    vertical_stress,
)

__all__ = [
    "StressField",
    "StripLoadSolver",
    "SURFACE_EPSILON",
    "angle_from_vertical_axis",
    "angle_span",
    "vertical_stress",
    "stress_at_point",
    "build_stress_field",
]
