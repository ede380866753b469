"""
Tests for geo utilities
"""
import math

import pytest

import sys
sys.path.insert(0, '.')

from src.core.geo_utils import (
    Coordinate,
    haversine_distance,
    distance,
    format_distance,
    format_coordinates,
)


class TestDistance:
    """Test suite for great-circle distance."""

    def test_same_point_is_zero(self):
        """Distance from a point to itself is zero."""
        for point in [
            Coordinate(0, 0),
            Coordinate(18.5204, 73.8567),
            Coordinate(-33.8688, 151.2093),
            Coordinate(90, 180),
        ]:
            assert distance(point, point) == 0

    def test_symmetry(self):
        """Distance does not depend on argument order."""
        a = Coordinate(18.5204, 73.8567)
        b = Coordinate(19.0760, 72.8777)

        assert abs(distance(a, b) - distance(b, a)) < 1e-9

    def test_one_degree_longitude_at_equator(self):
        """One degree of longitude at the equator is about 111.19 km."""
        result = distance(Coordinate(0, 0), Coordinate(0, 1))

        assert result == pytest.approx(111.19, abs=0.01)

    def test_pune_to_mumbai(self):
        """Known city pair is roughly 120 km apart."""
        result = haversine_distance(18.5204, 73.8567, 19.0760, 72.8777)

        assert 115 < result < 125

    def test_antipodal_points(self):
        """Opposite sides of the globe are half the circumference apart."""
        result = distance(Coordinate(0, 0), Coordinate(0, 180))

        assert result == pytest.approx(math.pi * 6371.0, rel=1e-9)

    def test_nan_input_gives_nan(self):
        """Malformed input is not validated here."""
        result = distance(Coordinate(float("nan"), 0), Coordinate(0, 0))

        assert math.isnan(result)


class TestFormatDistance:
    """Test suite for distance labels."""

    def test_half_kilometer(self):
        assert format_distance(0.5) == "500m away"

    def test_rounds_half_meter_up(self):
        assert format_distance(0.0005) == "1m away"

    def test_rounds_to_nearest_meter(self):
        assert format_distance(0.1234) == "123m away"
        assert format_distance(0.9996) == "1000m away"

    def test_zero(self):
        assert format_distance(0) == "0m away"

    def test_exactly_one_kilometer(self):
        assert format_distance(1.0) == "1.0km away"

    def test_kilometers_one_decimal(self):
        assert format_distance(12.34) == "12.3km away"
        assert format_distance(120.0) == "120.0km away"

    def test_rounds_half_tenth_up(self):
        assert format_distance(1.25) == "1.3km away"
        assert format_distance(2.25) == "2.3km away"


class TestCoordinate:
    """Test Coordinate value type."""

    def test_unset(self):
        assert Coordinate(0, 0).is_unset
        assert not Coordinate(0, 1).is_unset
        assert not Coordinate(1, 0).is_unset

    def test_immutable(self):
        point = Coordinate(18.5, 73.8)

        with pytest.raises(AttributeError):
            point.latitude = 1.0

    def test_validity(self):
        assert Coordinate(-90, 180).is_valid
        assert not Coordinate(91, 0).is_valid
        assert not Coordinate(0, -181).is_valid

    def test_format_coordinates(self):
        assert format_coordinates(Coordinate(18.5204, 73.8567)) == "18.520400°, 73.856700°"
        assert format_coordinates(Coordinate(-33.8688, 151.2093)) == "-33.868800°, 151.209300°"
