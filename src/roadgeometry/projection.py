#!/usr/bin/env python3
"""
Planar projection and nearest-point queries.

Segments are handled in a spherical web-mercator plane, where linear
interpolation between projected endpoints is a reasonable stand-in for the
path along a short road segment.
"""

from typing import NamedTuple, Optional, Tuple
import functools
import logging
import sys

import pyproj

from .coordinate import Coordinate, FloatCoordinate, require_valid
from .distance import great_circle_distance

logger = logging.getLogger(__name__)

# Latitude at which the web-mercator plane becomes square
MAX_MERCATOR_LATITUDE = 85.051128779806


class ProjectedPoint(NamedTuple):
    """A point in the projected plane, in meters."""

    x: float
    y: float


class NearestPoint(NamedTuple):
    """Result of projecting a query coordinate onto a segment."""

    distance: float  # Great-circle approximation in meters
    nearest: Coordinate
    ratio: float  # Position along the segment, 0 = source, 1 = target


class WebMercatorProjection:
    """Spherical web-mercator projection between coordinates and the plane."""

    def __init__(self):
        self._proj = pyproj.Proj("+proj=merc +a=6378137 +b=6378137 +lat_ts=0 +lon_0=0 +x_0=0 +y_0=0 +k=1 +units=m +no_defs")

    @staticmethod
    def _clamp_latitude(latitude: float) -> float:
        return max(-MAX_MERCATOR_LATITUDE, min(MAX_MERCATOR_LATITUDE, latitude))

    def forward(self, coordinate: Coordinate) -> ProjectedPoint:
        """
        Project a coordinate into the plane.

        Latitudes beyond the mercator limit are clamped to it.

        Args:
            coordinate: Coordinate to project

        Returns:
            ProjectedPoint in meters
        """
        x, y = self._proj(coordinate.longitude, self._clamp_latitude(coordinate.latitude))
        return ProjectedPoint(x, y)

    def inverse(self, point: ProjectedPoint) -> Coordinate:
        """Convert a projected point back to a fixed-point coordinate."""
        longitude, latitude = self._proj(point.x, point.y, inverse=True)
        return FloatCoordinate(longitude, latitude).to_fixed()

    def lat_to_y(self, latitude: float) -> float:
        """Projected y value of a latitude in degrees."""
        _, y = self._proj(0.0, self._clamp_latitude(latitude))
        return y


@functools.lru_cache(maxsize=None)
def web_mercator() -> WebMercatorProjection:
    """Return the shared projection instance."""
    return WebMercatorProjection()


def project_point_on_segment(
    source: ProjectedPoint, target: ProjectedPoint, query: ProjectedPoint
) -> Tuple[float, ProjectedPoint]:
    """
    Project a point onto a segment in the projected plane.

    Args:
        source: Segment start
        target: Segment end
        query: Point to project

    Returns:
        Tuple of (ratio, nearest) where ratio is clamped to [0, 1] and nearest
        is the closest point on the segment. A segment shorter than machine
        epsilon yields (0.0, source).
    """
    slope_x = target.x - source.x
    slope_y = target.y - source.y
    rel_x = query.x - source.x
    rel_y = query.y - source.y

    squared_length = slope_x * slope_x + slope_y * slope_y
    if squared_length < sys.float_info.epsilon:
        return 0.0, source

    ratio = (slope_x * rel_x + slope_y * rel_y) / squared_length
    ratio = max(0.0, min(1.0, ratio))

    return ratio, ProjectedPoint(
        (1.0 - ratio) * source.x + ratio * target.x,
        (1.0 - ratio) * source.y + ratio * target.y,
    )


def perpendicular_projection(
    source: Coordinate,
    target: Coordinate,
    query: Coordinate,
    projection: Optional[WebMercatorProjection] = None,
) -> NearestPoint:
    """
    Find the point on a segment nearest to a query coordinate.

    For a zero-length segment (source == target) the nearest point is the
    source and the ratio is 0.0.

    Args:
        source: Segment start
        target: Segment end
        query: Query coordinate
        projection: Planar projection to use (default: shared web-mercator)

    Returns:
        NearestPoint with the distance in meters, the nearest coordinate and
        the ratio along the segment

    Raises:
        ValueError: If the query coordinate is invalid
    """
    require_valid(query)
    if projection is None:
        projection = web_mercator()

    ratio, projected_nearest = project_point_on_segment(
        projection.forward(source),
        projection.forward(target),
        projection.forward(query),
    )
    # The helper contract allows unclamped ratios from other implementations
    ratio = max(0.0, min(1.0, ratio))
    if ratio == 0.0:
        nearest = source
    elif ratio == 1.0:
        nearest = target
    else:
        nearest = projection.inverse(projected_nearest)

    if source == target:
        logger.debug(f"Degenerate segment at {source}, using source as nearest point")

    distance = great_circle_distance(query, nearest)
    return NearestPoint(distance, nearest, ratio)


def perpendicular_distance(
    source: Coordinate,
    target: Coordinate,
    query: Coordinate,
    projection: Optional[WebMercatorProjection] = None,
) -> float:
    """Distance in meters from a query coordinate to a segment."""
    return perpendicular_projection(source, target, query, projection).distance
