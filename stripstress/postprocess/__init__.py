"""Post-processing: probes, pressure bulb metrics, export."""

from stripstress.postprocess.probes import PointProbe, LineProbe
from stripstress.postprocess.isobars import influence_depth, isobar_extent
from stripstress.postprocess.export import export_csv

__all__ = [
    "PointProbe",
    "LineProbe",
    "influence_depth",
    "isobar_extent",
    "export_csv",
]
