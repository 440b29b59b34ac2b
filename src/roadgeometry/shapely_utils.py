"""
Utility functions for converting polylines to and from Shapely geometries.

Polylines are projected into the web-mercator plane first so that Shapely's
planar operations work in meters.
"""

from typing import List, Optional, Sequence
from shapely.geometry import LineString

from .coordinate import Coordinate
from .projection import ProjectedPoint, WebMercatorProjection, web_mercator


def coords_to_linestring(
    polyline: Sequence[Coordinate], projection: Optional[WebMercatorProjection] = None
) -> LineString:
    """
    Convert a polyline to a Shapely LineString in projected coordinates.

    Args:
        polyline: Sequence of coordinates
        projection: Projection to use (default: shared web-mercator)

    Returns:
        LineString with (x, y) vertices in meters

    Raises:
        ValueError: If polyline has less than 2 points
    """
    if not polyline or len(polyline) < 2:
        raise ValueError("At least two coordinates are required to create a LineString.")

    if projection is None:
        projection = web_mercator()

    return LineString([tuple(projection.forward(coordinate)) for coordinate in polyline])


def linestring_to_coords(
    linestring: LineString, projection: Optional[WebMercatorProjection] = None
) -> List[Coordinate]:
    """Convert a projected LineString back to fixed-point coordinates."""
    if projection is None:
        projection = web_mercator()

    return [projection.inverse(ProjectedPoint(x, y)) for x, y in linestring.coords]
