#!/usr/bin/env python3
"""
Polyline analysis: regression lines, closest distances, deviation profiles
and parallelism checks.
"""

from typing import Iterator, List, NamedTuple, Optional, Sequence
import logging
import math

from .config import DEFAULT_CONFIG, GeometryConfig
from .coordinate import Coordinate, FloatCoordinate, Segment, require_valid
from .distance import haversine_distance
from .projection import WebMercatorProjection, perpendicular_projection
from .shapes import bearing, deg_to_rad, difference, rotate_ccw_around_zero
from .shapely_utils import coords_to_linestring, linestring_to_coords

logger = logging.getLogger(__name__)

NULL_ISLAND = Coordinate(0, 0)


class RegressionLine(NamedTuple):
    """Best-fit line through a polyline, given by two endpoints."""

    source: Coordinate
    target: Coordinate
    # True when the fit was degenerate and the polyline's first and last points are returned
    is_fallback: bool


def _require_polyline(polyline: Sequence[Coordinate], minimum: int) -> None:
    if len(polyline) < minimum:
        raise ValueError(f"Polyline must have at least {minimum} coordinates, got {len(polyline)}")


def polyline_segments(polyline: Sequence[Coordinate]) -> Iterator[Segment]:
    """Yield every pair of consecutive coordinates as a Segment."""
    for i in range(len(polyline) - 1):
        yield Segment(polyline[i], polyline[i + 1])


def least_square_regression(
    polyline: Sequence[Coordinate], config: GeometryConfig = DEFAULT_CONFIG
) -> RegressionLine:
    """
    Fit a line through a polyline by ordinary least squares on (lon, lat).

    Args:
        polyline: At least two coordinates
        config: Tunables for the degenerate threshold and endpoint margin

    Returns:
        RegressionLine with endpoints just beyond the smallest and largest
        longitude. If the fit is near vertical, the polyline's first and last
        coordinates are returned with is_fallback set.

    Raises:
        ValueError: If the polyline has fewer than two coordinates
    """
    _require_polyline(polyline, 2)

    longitudes = [coordinate.longitude for coordinate in polyline]
    latitudes = [coordinate.latitude for coordinate in polyline]
    count = len(polyline)

    sum_lon = sum(longitudes)
    sum_lat = sum(latitudes)
    sum_lon_lon = sum(lon * lon for lon in longitudes)
    sum_lon_lat = sum(lon * lat for lon, lat in zip(longitudes, latitudes))

    dividend = count * sum_lon_lat - sum_lon * sum_lat
    divisor = count * sum_lon_lon - sum_lon * sum_lon
    if abs(divisor) < config.regression_epsilon:
        logger.debug(f"Degenerate regression over {count} coordinates, using first and last")
        return RegressionLine(polyline[0], polyline[-1], True)

    slope = dividend / divisor
    intercept = (sum_lat - slope * sum_lon) / count

    def point_at(longitude: float) -> Coordinate:
        return FloatCoordinate(longitude, intercept + slope * longitude).to_fixed()

    return RegressionLine(
        point_at(min(longitudes) - config.regression_margin),
        point_at(max(longitudes) + config.regression_margin),
        False,
    )


def closest_distance_to_segment(
    coordinate: Coordinate,
    source: Coordinate,
    target: Coordinate,
    projection: Optional[WebMercatorProjection] = None,
) -> float:
    """
    Calculate the haversine distance from a coordinate to the nearest point of a segment.

    Args:
        coordinate: Query coordinate
        source: Segment start
        target: Segment end
        projection: Planar projection used to find the nearest point

    Returns:
        Distance in meters
    """
    nearest = perpendicular_projection(source, target, coordinate, projection).nearest
    return haversine_distance(coordinate, nearest)


def closest_distance_to_polyline(
    coordinate: Coordinate,
    polyline: Sequence[Coordinate],
    projection: Optional[WebMercatorProjection] = None,
) -> float:
    """
    Calculate the distance from a coordinate to the closest segment of a polyline.

    A single-point polyline is treated as that point.

    Args:
        coordinate: Query coordinate
        polyline: Non-empty sequence of coordinates
        projection: Planar projection used to find nearest points

    Returns:
        Distance in meters

    Raises:
        ValueError: If the polyline is empty
    """
    _require_polyline(polyline, 1)

    if len(polyline) == 1:
        return haversine_distance(coordinate, polyline[0])

    return min(
        closest_distance_to_segment(coordinate, segment.source, segment.target, projection)
        for segment in polyline_segments(polyline)
    )


def closest_distance_between_polylines(
    lhs: Sequence[Coordinate],
    rhs: Sequence[Coordinate],
    projection: Optional[WebMercatorProjection] = None,
) -> float:
    """
    Calculate the smallest distance from any coordinate of lhs to the polyline rhs.

    Raises:
        ValueError: If either polyline is empty
    """
    _require_polyline(lhs, 1)
    return min(closest_distance_to_polyline(coordinate, rhs, projection) for coordinate in lhs)


def get_deviations(
    source: Sequence[Coordinate],
    target: Sequence[Coordinate],
    projection: Optional[WebMercatorProjection] = None,
) -> List[float]:
    """
    Calculate how far each coordinate of source lies from the target polyline.

    Args:
        source: Polyline whose coordinates are measured
        target: Non-empty reference polyline
        projection: Planar projection used to find nearest points

    Returns:
        List of distances in meters, one per source coordinate, in source order
    """
    return [closest_distance_to_polyline(coordinate, target, projection) for coordinate in source]


def _slope(vector: Coordinate) -> float:
    # Slope of a fixed-point vector seen from the origin; vertical vectors are infinitely steep
    if vector.lon == 0:
        return math.inf
    return vector.lat / vector.lon


def are_parallel(
    lhs: Sequence[Coordinate],
    rhs: Sequence[Coordinate],
    config: GeometryConfig = DEFAULT_CONFIG,
) -> bool:
    """
    Check whether two polylines run roughly parallel.

    Both polylines are reduced to their regression lines. The direction
    vectors are rotated so that the lhs line points east; the polylines are
    parallel if the rotated rhs line is nearly flat.

    Args:
        lhs: Reference polyline, at least two coordinates
        rhs: Compared polyline, at least two coordinates
        config: Tunables for the slope threshold and the regression fit

    Returns:
        True if the absolute rotated slope of rhs is below
        config.parallel_slope_threshold

    Raises:
        ValueError: If either polyline has fewer than two coordinates
    """
    regression_lhs = least_square_regression(lhs, config)
    regression_rhs = least_square_regression(rhs, config)

    difference_lhs = difference(regression_lhs.source, regression_lhs.target)
    difference_rhs = difference(regression_rhs.source, regression_rhs.target)

    bearing_lhs = bearing(NULL_ISLAND, difference_lhs)
    # Counter-clockwise by (bearing - 90) turns a vector with this bearing due east
    rotation_angle = deg_to_rad(bearing_lhs - 90.0)

    rotated_lhs = rotate_ccw_around_zero(difference_lhs, rotation_angle)
    rotated_rhs = rotate_ccw_around_zero(difference_rhs, rotation_angle)
    slope_rhs = _slope(rotated_rhs)

    parallel = abs(slope_rhs) < config.parallel_slope_threshold
    logger.debug(
        f"Parallel check: lhs bearing={bearing_lhs:.2f}°, rotated lhs slope={_slope(rotated_lhs):.4f}, "
        f"rotated rhs slope={slope_rhs:.4f}, "
        f"parallel={parallel} (threshold={config.parallel_slope_threshold})"
    )
    return parallel


def simplify_polyline(
    polyline: Sequence[Coordinate],
    tolerance: float,
    projection: Optional[WebMercatorProjection] = None,
) -> List[Coordinate]:
    """
    Simplify a polyline with the Douglas-Peucker algorithm.

    Args:
        polyline: At least two coordinates
        tolerance: Maximum deviation in projected meters
        projection: Planar projection (default: shared web-mercator)

    Returns:
        Simplified polyline; first and last coordinates are kept unchanged

    Raises:
        ValueError: If tolerance is negative or the polyline is too short
    """
    if tolerance < 0:
        raise ValueError(f"Simplification tolerance must be non-negative, got {tolerance}")
    _require_polyline(polyline, 2)
    require_valid(*polyline)

    linestring = coords_to_linestring(polyline, projection)
    simplified = linestring.simplify(tolerance, preserve_topology=False)
    coordinates = linestring_to_coords(simplified, projection)
    if len(coordinates) < 2:
        coordinates = [polyline[0], polyline[-1]]

    # Projection round trips can move endpoints by a fixed unit
    coordinates[0] = polyline[0]
    coordinates[-1] = polyline[-1]

    logger.debug(f"Simplified polyline from {len(polyline)} to {len(coordinates)} coordinates")
    return coordinates
