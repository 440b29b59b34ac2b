#!/usr/bin/env python3
"""
roadgeometry - Geodesic and planar geometry primitives for road networks.

This package provides distance metrics, nearest-point queries, turn angles,
circle fitting and polyline comparison on fixed-point geographic coordinates.
"""
import importlib.metadata

__version__ = importlib.metadata.version("roadgeometry")

# Import main functions for public API
from .config import DEFAULT_CONFIG, GeometryConfig
from .coordinate import (
    COORDINATE_PRECISION,
    INVALID_COORDINATE,
    Coordinate,
    FloatCoordinate,
    Segment,
)
from .distance import (
    EARTH_RADIUS,
    cumulative_distances,
    great_circle_distance,
    haversine_distance,
    polyline_length,
    squared_euclidean_distance,
)
from .projection import (
    NearestPoint,
    ProjectedPoint,
    WebMercatorProjection,
    perpendicular_distance,
    perpendicular_projection,
    project_point_on_segment,
    web_mercator,
)
from .shapes import (
    bearing,
    centroid,
    circle_center,
    circle_radius,
    compute_angle,
    difference,
    interpolate_linear,
    is_ccw,
    rotate_ccw_around_zero,
    signed_area,
)
from .polyline import (
    RegressionLine,
    are_parallel,
    closest_distance_between_polylines,
    closest_distance_to_polyline,
    closest_distance_to_segment,
    get_deviations,
    least_square_regression,
    simplify_polyline,
)
from .trigonometry import Atan2Table, atan2_exact, atan2_lookup

__all__ = [
    "DEFAULT_CONFIG",
    "GeometryConfig",
    "COORDINATE_PRECISION",
    "INVALID_COORDINATE",
    "Coordinate",
    "FloatCoordinate",
    "Segment",
    "EARTH_RADIUS",
    "cumulative_distances",
    "great_circle_distance",
    "haversine_distance",
    "polyline_length",
    "squared_euclidean_distance",
    "NearestPoint",
    "ProjectedPoint",
    "WebMercatorProjection",
    "perpendicular_distance",
    "perpendicular_projection",
    "project_point_on_segment",
    "web_mercator",
    "bearing",
    "centroid",
    "circle_center",
    "circle_radius",
    "compute_angle",
    "difference",
    "interpolate_linear",
    "is_ccw",
    "rotate_ccw_around_zero",
    "signed_area",
    "RegressionLine",
    "are_parallel",
    "closest_distance_between_polylines",
    "closest_distance_to_polyline",
    "closest_distance_to_segment",
    "get_deviations",
    "least_square_regression",
    "simplify_polyline",
    "Atan2Table",
    "atan2_exact",
    "atan2_lookup",
]
