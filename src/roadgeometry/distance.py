#!/usr/bin/env python3
"""
Distance calculation utilities for coordinates and polylines.
"""

from typing import List, Sequence
import logging
import math

from .coordinate import Coordinate, require_valid

logger = logging.getLogger(__name__)

# Mean earth radius in meters
EARTH_RADIUS = 6372797.560856


def squared_euclidean_distance(lhs: Coordinate, rhs: Coordinate) -> int:
    """
    Calculate the squared distance between two coordinates in fixed units.

    No spherical or projected correction is applied. The result has no
    physical unit and only orders points that are close together and at a
    similar latitude.

    Args:
        lhs: First coordinate
        rhs: Second coordinate

    Returns:
        Sum of the squared fixed-point longitude and latitude deltas
    """
    dx = lhs.lon - rhs.lon
    dy = lhs.lat - rhs.lat
    return dx * dx + dy * dy


def haversine_distance(lhs: Coordinate, rhs: Coordinate) -> float:
    """
    Calculate the haversine distance between two coordinates.

    Args:
        lhs: First coordinate
        rhs: Second coordinate

    Returns:
        Distance in meters

    Raises:
        ValueError: If either coordinate is invalid
    """
    require_valid(lhs, rhs)

    lat1, lon1 = math.radians(lhs.latitude), math.radians(lhs.longitude)
    lat2, lon2 = math.radians(rhs.latitude), math.radians(rhs.longitude)

    dlat = lat1 - lat2
    dlon = lon1 - lon2
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # atan2 keeps the result defined for antipodal points where a rounds above 1
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(max(0.0, 1.0 - a)))

    return EARTH_RADIUS * c


def great_circle_distance(lhs: Coordinate, rhs: Coordinate) -> float:
    """
    Approximate the distance between two nearby coordinates on a flat earth.

    The longitude delta is scaled by the cosine of the mean latitude. Only
    accurate over short distances such as a single road segment.

    Args:
        lhs: First coordinate
        rhs: Second coordinate

    Returns:
        Distance in meters

    Raises:
        ValueError: If either coordinate is invalid
    """
    require_valid(lhs, rhs)

    lat1, lon1 = math.radians(lhs.latitude), math.radians(lhs.longitude)
    lat2, lon2 = math.radians(rhs.latitude), math.radians(rhs.longitude)

    x_value = (lon2 - lon1) * math.cos((lat1 + lat2) / 2.0)
    y_value = lat2 - lat1
    return math.hypot(x_value, y_value) * EARTH_RADIUS


def cumulative_distances(polyline: Sequence[Coordinate]) -> List[float]:
    """
    Calculate cumulative haversine distances along a polyline.

    Args:
        polyline: Sequence of coordinates

    Returns:
        List of cumulative distances in meters, with same length as polyline
    """
    if not polyline:
        return []

    distances = [0.0]
    for i in range(1, len(polyline)):
        distances.append(distances[-1] + haversine_distance(polyline[i - 1], polyline[i]))

    return distances


def polyline_length(polyline: Sequence[Coordinate]) -> float:
    """Total haversine length of a polyline in meters."""
    distances = cumulative_distances(polyline)
    return distances[-1] if distances else 0.0
