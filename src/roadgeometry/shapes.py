#!/usr/bin/env python3
"""
Shape primitives: bearings, turn angles, orientation, circle fitting and
interpolation between coordinates.
"""

from enum import Enum
from typing import Optional, Tuple
import logging
import math
import sys

from .coordinate import Coordinate, FloatCoordinate, require_valid, to_floating
from .distance import haversine_distance
from .projection import WebMercatorProjection, web_mercator
from .trigonometry import Atan2Function, atan2_lookup

logger = logging.getLogger(__name__)

EPSILON = sys.float_info.epsilon


def deg_to_rad(degree: float) -> float:
    return degree * (math.pi / 180.0)


def rad_to_deg(radian: float) -> float:
    return radian * (180.0 / math.pi)


def _normalize_degrees(angle: float) -> float:
    # Loops rather than modulo so that values rounding onto 360 end up at 0
    while angle < 0.0:
        angle += 360.0
    while angle >= 360.0:
        angle -= 360.0
    return angle


def centroid(lhs: Coordinate, rhs: Coordinate) -> Coordinate:
    """
    Midpoint of two coordinates in fixed-point space.

    Each axis is halved with integer division truncating toward zero, so an
    odd sum loses half a fixed unit.
    """

    def halve(value: int) -> int:
        return value // 2 if value >= 0 else -(-value // 2)

    return Coordinate(halve(lhs.lon + rhs.lon), halve(lhs.lat + rhs.lat))


def bearing(first: Coordinate, second: Coordinate) -> float:
    """
    Calculate the initial great-circle bearing between two coordinates.

    Args:
        first: Start coordinate
        second: End coordinate

    Returns:
        Bearing in degrees in [0, 360), 0 = North, 90 = East.
        Identical coordinates give 0.0.
    """
    lon_delta = deg_to_rad(to_floating(second.lon - first.lon))
    lat1 = deg_to_rad(first.latitude)
    lat2 = deg_to_rad(second.latitude)

    y = math.sin(lon_delta) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(lon_delta)

    return _normalize_degrees(rad_to_deg(math.atan2(y, x)))


def compute_angle(
    first: Coordinate,
    second: Coordinate,
    third: Coordinate,
    atan2: Atan2Function = atan2_lookup,
    projection: Optional[WebMercatorProjection] = None,
) -> float:
    """
    Calculate the turn angle at `second` between the rays to `first` and `third`.

    The rays are measured in the web-mercator plane.

    Args:
        first: Coordinate before the turn
        second: Coordinate at the turn
        third: Coordinate after the turn
        atan2: Angle lookup capability (default: shared lookup table)
        projection: Planar projection (default: shared web-mercator)

    Returns:
        Angle in degrees in [0, 360); 180 means straight through. Exactly 180
        when either outer coordinate coincides with the middle one.

    Raises:
        ValueError: If any coordinate is invalid
    """
    if first == second or second == third:
        return 180.0

    require_valid(first, second, third)
    if projection is None:
        projection = web_mercator()

    p1 = projection.forward(first)
    p2 = projection.forward(second)
    p3 = projection.forward(third)

    v1x, v1y = p1.x - p2.x, p1.y - p2.y
    v2x, v2y = p3.x - p2.x, p3.y - p2.y

    angle = rad_to_deg(atan2(v2y, v2x) - atan2(v1y, v1x))
    return _normalize_degrees(angle)


def signed_area(first: Coordinate, second: Coordinate, third: Coordinate) -> float:
    """Signed area of a triangle in square degrees, positive if counter-clockwise."""
    lon_1, lat_1 = first.longitude, first.latitude
    lon_2, lat_2 = second.longitude, second.latitude
    lon_3, lat_3 = third.longitude, third.latitude
    return 0.5 * (
        -lon_2 * lat_1
        + lon_3 * lat_1
        + lon_1 * lat_2
        - lon_3 * lat_2
        - lon_1 * lat_3
        + lon_2 * lat_3
    )


def is_ccw(first: Coordinate, second: Coordinate, third: Coordinate) -> bool:
    return signed_area(first, second, third) > 0


class ChordCase(Enum):
    """Classification of the chords c1->c2 and c2->c3 for circle fitting."""

    COLLINEAR = "collinear"
    VERTICAL_FIRST = "vertical_first"
    VERTICAL_SECOND = "vertical_second"
    FLAT_FIRST = "flat_first"
    GENERIC = "generic"

    def __str__(self) -> str:
        return self.value


def _chord_deltas(c1: Coordinate, c2: Coordinate, c3: Coordinate) -> Tuple[float, float, float, float]:
    return (
        to_floating(c2.lon - c1.lon),
        to_floating(c2.lat - c1.lat),
        to_floating(c3.lon - c2.lon),
        to_floating(c3.lat - c2.lat),
    )


def classify_chords(c1: Coordinate, c2: Coordinate, c3: Coordinate) -> ChordCase:
    first_lon, first_lat, second_lon, second_lat = _chord_deltas(c1, c2, c3)

    if (abs(first_lon) < EPSILON and abs(second_lon) < EPSILON) or (
        abs(first_lat) < EPSILON and abs(second_lat) < EPSILON
    ):
        return ChordCase.COLLINEAR
    if abs(first_lon) < EPSILON:
        return ChordCase.VERTICAL_FIRST
    if abs(second_lon) < EPSILON:
        return ChordCase.VERTICAL_SECOND
    if abs(first_lat / first_lon) < EPSILON:
        return ChordCase.FLAT_FIRST
    return ChordCase.GENERIC


# Reorderings that move a vertical or flat chord out of the first position
_CHORD_REORDERINGS = {
    ChordCase.VERTICAL_FIRST: lambda c1, c2, c3: (c1, c3, c2),
    ChordCase.VERTICAL_SECOND: lambda c1, c2, c3: (c2, c1, c3),
    ChordCase.FLAT_FIRST: lambda c1, c2, c3: (c3, c2, c1),
}

# Three non-collinear points reach the generic case within this many reorderings
_MAX_REORDERINGS = 3


def _solve_circle_center(c1: Coordinate, c2: Coordinate, c3: Coordinate) -> Optional[Coordinate]:
    # Intersection of the perpendicular bisectors of c1c2 and c2c3
    first_lon, first_lat, second_lon, second_lat = _chord_deltas(c1, c2, c3)
    first_slope = first_lat / first_lon
    second_slope = second_lat / second_lon

    if abs(first_slope - second_slope) < EPSILON:
        logger.debug(f"Chords through {c1}, {c2}, {c3} are parallel")
        return None

    x1, y1 = c1.longitude, c1.latitude
    x2, y2 = c2.longitude, c2.latitude
    x3, y3 = c3.longitude, c3.latitude

    lon = (
        first_slope * second_slope * (y1 - y3)
        + second_slope * (x1 + x2)
        - first_slope * (x2 + x3)
    ) / (2 * (second_slope - first_slope))
    lat = (0.5 * (x1 + x2) - lon) / first_slope + 0.5 * (y1 + y2)

    if lon < -180.0 or lon > 180.0 or lat < -90.0 or lat > 90.0:
        logger.debug(f"Circle center ({lon:.6f}, {lat:.6f}) is out of bounds")
        return None

    return FloatCoordinate(lon, lat).to_fixed()


def circle_center(c1: Coordinate, c2: Coordinate, c3: Coordinate) -> Optional[Coordinate]:
    """
    Find the center of the circle through three coordinates.

    The center is computed in floating degree space as the intersection of
    two chord bisectors. Vertical and flat chords are handled by reordering
    the points before solving.

    Args:
        c1: First coordinate
        c2: Second coordinate
        c3: Third coordinate

    Returns:
        The center, or None if the points are not distinct, are collinear, or
        the center falls outside the valid coordinate range
    """
    if c1 == c2 or c2 == c3 or c1 == c3:
        return None

    for _ in range(_MAX_REORDERINGS + 1):
        case = classify_chords(c1, c2, c3)
        if case == ChordCase.COLLINEAR:
            logger.debug(f"Points {c1}, {c2}, {c3} are collinear")
            return None
        if case == ChordCase.GENERIC:
            return _solve_circle_center(c1, c2, c3)
        c1, c2, c3 = _CHORD_REORDERINGS[case](c1, c2, c3)

    logger.debug(f"No chord ordering of {c1}, {c2}, {c3} admits a circle center")
    return None


def circle_radius(c1: Coordinate, c2: Coordinate, c3: Coordinate) -> float:
    """
    Radius in meters of the circle through three coordinates.

    Returns:
        Haversine distance from c1 to the center, or math.inf when there is no center
    """
    center = circle_center(c1, c2, c3)
    if center is None:
        return math.inf
    return haversine_distance(c1, center)


def interpolate_linear(factor: float, source: Coordinate, target: Coordinate) -> Coordinate:
    """
    Interpolate between two coordinates in fixed-point space.

    Args:
        factor: Position between source (0) and target (1)
        source: Start coordinate
        target: End coordinate

    Returns:
        Interpolated coordinate, each axis truncated toward zero

    Raises:
        ValueError: If factor is outside [0, 1]
    """
    if not 0.0 <= factor <= 1.0:
        raise ValueError(f"Interpolation factor must be in [0, 1], got {factor}")

    return Coordinate(
        int(source.lon + factor * (target.lon - source.lon)),
        int(source.lat + factor * (target.lat - source.lat)),
    )


def difference(lhs: Coordinate, rhs: Coordinate) -> Coordinate:
    """Vector from rhs to lhs in fixed units."""
    return Coordinate(lhs.lon - rhs.lon, lhs.lat - rhs.lat)


def rotate_ccw_around_zero(coordinate: Coordinate, angle_radians: float) -> Coordinate:
    """
    Rotate a coordinate vector counter-clockwise around (0, 0).

    Works on the floating degree values, so the result is a vector rather
    than a geographic position.
    """
    cos_alpha = math.cos(angle_radians)
    sin_alpha = math.sin(angle_radians)

    lon = coordinate.longitude
    lat = coordinate.latitude

    return FloatCoordinate(
        cos_alpha * lon - sin_alpha * lat,
        sin_alpha * lon + cos_alpha * lat,
    ).to_fixed()
