"""
CivicReport - Core Utilities
Central configuration, logging, and geo utility functions.
"""

from src.core.config import settings
from src.core.constants import (
    EARTH_RADIUS_KM,
    NEARBY_RADIUS_KM,
    LOCATION_NOT_AVAILABLE,
    REPORT_CATEGORIES,
    STATUS_LABELS,
)
from src.core.geo_utils import (
    Coordinate,
    haversine_distance,
    distance,
    format_distance,
    format_coordinates,
)

__all__ = [
    "settings",
    "EARTH_RADIUS_KM",
    "NEARBY_RADIUS_KM",
    "LOCATION_NOT_AVAILABLE",
    "REPORT_CATEGORIES",
    "STATUS_LABELS",
    "Coordinate",
    "haversine_distance",
    "distance",
    "format_distance",
    "format_coordinates",
]
