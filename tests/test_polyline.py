import math
import pytest

from roadgeometry.config import GeometryConfig
from roadgeometry.coordinate import Coordinate, Segment
from roadgeometry.distance import EARTH_RADIUS, haversine_distance
from roadgeometry.polyline import (
    RegressionLine,
    are_parallel,
    closest_distance_between_polylines,
    closest_distance_to_polyline,
    closest_distance_to_segment,
    get_deviations,
    least_square_regression,
    polyline_segments,
    simplify_polyline,
)


def deg(lon, lat):
    return Coordinate.from_degrees(lon, lat)


METERS_PER_MILLIDEGREE = EARTH_RADIUS * math.radians(0.001)


def test_polyline_segments():
    polyline = [deg(0, 0), deg(1, 0), deg(2, 0)]
    assert list(polyline_segments(polyline)) == [
        Segment(polyline[0], polyline[1]),
        Segment(polyline[1], polyline[2]),
    ]
    assert list(polyline_segments(polyline[:1])) == []


# Tests for least_square_regression
def test_regression_vertical_two_points_falls_back():
    polyline = [deg(13.0, 52.0), deg(13.0, 52.001)]
    regression = least_square_regression(polyline)
    assert regression == RegressionLine(polyline[0], polyline[1], True)


def test_regression_two_points_lies_on_line():
    regression = least_square_regression([deg(0.0, 0.0), deg(0.001, 0.001)])
    assert not regression.is_fallback
    assert regression.source == Coordinate(-10, -10)
    assert regression.target == Coordinate(1010, 1010)


def test_regression_without_margin_reproduces_endpoints():
    config = GeometryConfig(regression_margin=0.0)
    regression = least_square_regression([deg(0.0, 0.0), deg(0.001, 0.001)], config)
    assert regression.source == Coordinate(0, 0)
    assert regression.target == Coordinate(1000, 1000)


def test_regression_horizontal_polyline():
    polyline = [deg(0.0, 0.5), deg(0.002, 0.5), deg(0.001, 0.5), deg(0.003, 0.5)]
    regression = least_square_regression(polyline)
    assert not regression.is_fallback
    assert regression.source.lat == 500000
    assert regression.target.lat == 500000
    assert regression.source.lon == -10
    assert regression.target.lon == 3010


def test_regression_requires_two_points():
    with pytest.raises(ValueError):
        least_square_regression([deg(0.0, 0.0)])
    with pytest.raises(ValueError):
        least_square_regression([])


# Tests for closest distances
def test_closest_distance_to_segment():
    distance = closest_distance_to_segment(deg(0.0005, 0.001), deg(0.0, 0.0), deg(0.001, 0.0))
    assert distance == pytest.approx(METERS_PER_MILLIDEGREE, rel=1e-3)


def test_closest_distance_to_polyline_on_polyline():
    polyline = [deg(0.0, 0.0), deg(0.001, 0.0), deg(0.001, 0.001)]
    assert closest_distance_to_polyline(deg(0.001, 0.0005), polyline) == pytest.approx(0.0, abs=0.5)


def test_closest_distance_to_polyline_checks_every_segment():
    polyline = [deg(0.0, 0.0), deg(0.001, 0.0), deg(0.002, 0.0), deg(0.002, 0.001)]
    query = deg(0.0025, 0.0005)
    expected = closest_distance_to_segment(query, polyline[2], polyline[3])
    assert closest_distance_to_polyline(query, polyline) == pytest.approx(expected)
    assert expected < haversine_distance(query, polyline[-1])


def test_closest_distance_to_single_point_polyline():
    point = deg(0.0, 0.0)
    query = deg(0.001, 0.0)
    assert closest_distance_to_polyline(query, [point]) == haversine_distance(query, point)


def test_closest_distance_to_empty_polyline():
    with pytest.raises(ValueError):
        closest_distance_to_polyline(deg(0.0, 0.0), [])


def test_closest_distance_between_polylines():
    lhs = [deg(0.0, 0.001), deg(0.001, 0.001), deg(0.002, 0.003)]
    rhs = [deg(0.0, 0.0), deg(0.002, 0.0)]
    assert closest_distance_between_polylines(lhs, rhs) == pytest.approx(METERS_PER_MILLIDEGREE, rel=1e-3)


def test_get_deviations_keeps_source_order():
    source = [deg(0.0, 0.001), deg(0.0005, 0.002), deg(0.001, 0.003)]
    target = [deg(0.0, 0.0), deg(0.001, 0.0)]
    deviations = get_deviations(source, target)
    assert len(deviations) == len(source)
    for deviation, multiple in zip(deviations, [1, 2, 3]):
        assert deviation == pytest.approx(multiple * METERS_PER_MILLIDEGREE, rel=1e-3)


def test_get_deviations_empty_source():
    assert get_deviations([], [deg(0.0, 0.0), deg(0.001, 0.0)]) == []


# Tests for are_parallel
def test_are_parallel_horizontal_lines():
    lhs = [deg(0.0, 0.0), deg(0.001, 0.0)]
    rhs = [deg(0.0, 0.001), deg(0.001, 0.001)]
    assert are_parallel(lhs, rhs)


def test_are_parallel_horizontal_and_vertical():
    lhs = [deg(0.0, 0.0), deg(0.001, 0.0)]
    rhs = [deg(0.0, 0.0), deg(0.0, 0.001)]
    assert not are_parallel(lhs, rhs)


def test_are_parallel_horizontal_and_roughly_vertical():
    lhs = [deg(0.0, 0.0), deg(0.001, 0.0)]
    rhs = [deg(0.0, 0.0), deg(0.0001, 0.001)]
    assert not are_parallel(lhs, rhs)


def test_are_parallel_diagonal_lines():
    lhs = [deg(0.0, 0.0), deg(0.0005, 0.0005), deg(0.001, 0.001)]
    rhs = [deg(0.0, 0.0005), deg(0.001, 0.0015)]
    assert are_parallel(lhs, rhs)


def test_are_parallel_vertical_lines():
    lhs = [deg(0.0, 0.0), deg(0.0, 0.001)]
    rhs = [deg(0.0005, 0.0), deg(0.0005, 0.001)]
    assert are_parallel(lhs, rhs)


def test_are_parallel_threshold_is_configurable():
    lhs = [deg(0.0, 0.0), deg(0.01, 0.0)]
    rhs = [deg(0.0, 0.001), deg(0.01, 0.0015)]
    assert are_parallel(lhs, rhs)
    assert not are_parallel(lhs, rhs, GeometryConfig(parallel_slope_threshold=0.01))


def test_are_parallel_requires_two_points():
    with pytest.raises(ValueError):
        are_parallel([deg(0.0, 0.0)], [deg(0.0, 0.0), deg(0.001, 0.0)])


# Tests for simplify_polyline
def test_simplify_polyline_drops_nearly_collinear_points():
    polyline = [deg(0.0, 0.0), deg(0.0005, 0.0000001), deg(0.001, 0.0)]
    assert simplify_polyline(polyline, tolerance=1.0) == [polyline[0], polyline[-1]]


def test_simplify_polyline_keeps_significant_points():
    polyline = [deg(0.0, 0.0), deg(0.0005, 0.0005), deg(0.001, 0.0)]
    simplified = simplify_polyline(polyline, tolerance=1.0)
    assert len(simplified) == 3
    assert simplified[0] == polyline[0]
    assert simplified[-1] == polyline[-1]
    assert abs(simplified[1].lon - polyline[1].lon) <= 1
    assert abs(simplified[1].lat - polyline[1].lat) <= 1


def test_simplify_polyline_rejects_negative_tolerance():
    with pytest.raises(ValueError):
        simplify_polyline([deg(0.0, 0.0), deg(0.001, 0.0)], tolerance=-1.0)
