"""Export a stress field to CSV.

Functions
---------
export_csv
    Write the field as ``x, z, sigma_z`` records or as a matrix.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)


def export_csv(field: Any, filename: str, layout: str = "long") -> None:
    """Export a stress field to CSV.

    Args:
        field: A :class:`~stripstress.solvers.field.StressField`.
        filename: Output file path.
        layout: ``"long"`` writes one ``x,z,sigma_z`` record per grid
            node; ``"matrix"`` writes one line per depth row, the first
            column holding ``z`` and the header the ``x`` offsets.
    """
    if layout == "long":
        X, Z = np.meshgrid(field.x, field.z)
        data = np.column_stack([X.ravel(), Z.ravel(), field.values.ravel()])
        header = "x,z,sigma_z"
    elif layout == "matrix":
        data = np.column_stack([field.z, field.values])
        header = ",".join(["z"] + [f"{x:.6g}" for x in field.x])
    else:
        raise ValueError(f"Unknown CSV layout {layout!r}")

    np.savetxt(filename, data, delimiter=",", header=header, comments="")
    logger.info("Exported %s to %s (%s layout)", field, filename, layout)
