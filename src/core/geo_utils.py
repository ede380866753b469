"""
CivicReport - Geospatial Utilities
Distance calculations and display formatting for report locations.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Tuple
from dataclasses import dataclass

from src.core.constants import COORDINATE_DECIMALS, EARTH_RADIUS_KM


@dataclass(frozen=True)
class Coordinate:
    """Geographic point with latitude and longitude in decimal degrees."""
    latitude: float
    longitude: float

    @property
    def is_unset(self) -> bool:
        """(0, 0) marks a location that was never captured."""
        return self.latitude == 0 and self.longitude == 0

    @property
    def is_valid(self) -> bool:
        return -90 <= self.latitude <= 90 and -180 <= self.longitude <= 180

    def to_tuple(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


def haversine_distance(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate the great-circle distance between two points on Earth.

    Args:
        lat1, lon1: First point coordinates in decimal degrees
        lat2, lon2: Second point coordinates in decimal degrees

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in kilometers."""
    return haversine_distance(a.latitude, a.longitude, b.latitude, b.longitude)


def format_distance(distance_km: float) -> str:
    """
    Render a distance for display.

    Below one kilometer the value is shown in whole meters, otherwise in
    kilometers with one decimal. Ties round up in both units.

    Examples:
        0.5   -> "500m away"
        1.25  -> "1.3km away"
        12.34 -> "12.3km away"
    """
    if distance_km < 1:
        meters = math.floor(distance_km * 1000 + 0.5)
        return f"{meters}m away"
    if not math.isfinite(distance_km):
        return f"{distance_km:.1f}km away"
    km = Decimal(distance_km).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{km}km away"


def format_coordinates(coordinate: Coordinate) -> str:
    """Plain "lat°, lng°" string used when no address can be built."""
    return (
        f"{coordinate.latitude:.{COORDINATE_DECIMALS}f}°, "
        f"{coordinate.longitude:.{COORDINATE_DECIMALS}f}°"
    )
