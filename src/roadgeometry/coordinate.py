#!/usr/bin/env python3
"""
Coordinate model for road geometry.

Coordinates are stored as fixed-point integers (degrees scaled by
COORDINATE_PRECISION) so that repeated arithmetic stays exact. A floating
degree form is available for trigonometry.
"""

from typing import NamedTuple
import logging
import math

logger = logging.getLogger(__name__)

COORDINATE_PRECISION = 1e6

# Sentinel fixed value marking an unset coordinate
INVALID_FIXED = -(2**31)


def to_fixed(degrees: float) -> int:
    """
    Convert floating degrees to fixed-point units.

    Rounds half away from zero to the nearest fixed unit.

    Args:
        degrees: Value in decimal degrees

    Returns:
        Value in fixed-point units
    """
    scaled = degrees * COORDINATE_PRECISION
    return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))


def to_floating(fixed: int) -> float:
    """Convert fixed-point units to decimal degrees."""
    return fixed / COORDINATE_PRECISION


class FloatCoordinate(NamedTuple):
    """A geographic position in floating decimal degrees."""

    longitude: float
    latitude: float

    def to_fixed(self) -> "Coordinate":
        return Coordinate(to_fixed(self.longitude), to_fixed(self.latitude))


class Coordinate(NamedTuple):
    """
    A geographic position in fixed-point degrees.

    Equality compares the fixed integers, never the floating forms.
    """

    lon: int
    lat: int

    @classmethod
    def from_degrees(cls, longitude: float, latitude: float) -> "Coordinate":
        """Create a coordinate from decimal degrees."""
        return cls(to_fixed(longitude), to_fixed(latitude))

    @property
    def longitude(self) -> float:
        return to_floating(self.lon)

    @property
    def latitude(self) -> float:
        return to_floating(self.lat)

    def to_floating(self) -> FloatCoordinate:
        return FloatCoordinate(self.longitude, self.latitude)

    def is_valid(self) -> bool:
        """
        Check whether the coordinate lies within the valid degree ranges.

        Returns:
            True for latitude in [-90, 90] and longitude in [-180, 180],
            False for out-of-range values and the invalid sentinel
        """
        if self.lon == INVALID_FIXED or self.lat == INVALID_FIXED:
            return False
        return (
            -90 * COORDINATE_PRECISION <= self.lat <= 90 * COORDINATE_PRECISION
            and -180 * COORDINATE_PRECISION <= self.lon <= 180 * COORDINATE_PRECISION
        )

    def __str__(self) -> str:
        return f"({self.longitude:.6f}, {self.latitude:.6f})"


INVALID_COORDINATE = Coordinate(INVALID_FIXED, INVALID_FIXED)


class Segment(NamedTuple):
    """An ordered pair of coordinates."""

    source: Coordinate
    target: Coordinate


def require_valid(*coordinates: Coordinate) -> None:
    """
    Check that every coordinate is valid.

    Args:
        coordinates: Coordinates to check

    Raises:
        ValueError: If any coordinate is out of range or the invalid sentinel
    """
    for coordinate in coordinates:
        if not coordinate.is_valid():
            raise ValueError(f"Invalid coordinate: lon={coordinate.lon}, lat={coordinate.lat}")
