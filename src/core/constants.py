"""
CivicReport - Constants and Reference Data
Static values used throughout the application.
"""

from typing import Dict, List, Tuple

# =============================================================================
# GEOGRAPHY
# =============================================================================

# Earth's mean radius in kilometers
EARTH_RADIUS_KM: float = 6371.0

# "Near me" cutoff (km)
NEARBY_RADIUS_KM: float = 10.0

# Default map center (latitude, longitude) when there is nothing to show
DEFAULT_MAP_CENTER: Tuple[float, float] = (20.5937, 78.9629)

# Decimal places used when an address falls back to raw coordinates
COORDINATE_DECIMALS: int = 6

# Returned instead of an address for the unset (0, 0) coordinate
LOCATION_NOT_AVAILABLE: str = "Location not available"

# =============================================================================
# REPORTS
# =============================================================================

REPORT_CATEGORIES: List[str] = [
    "Pothole",
    "Garbage",
    "Streetlight",
    "Water Leak",
    "Sewage Block",
    "Other",
]

# Status ordinal -> display label
STATUS_LABELS: Dict[int, str] = {
    0: "Reported",
    1: "Validated",
    2: "Working",
    3: "Completed",
}

# Status ordinal -> map marker color
STATUS_COLORS: Dict[int, str] = {
    0: "gray",
    1: "blue",
    2: "orange",
    3: "green",
}

# =============================================================================
# BACKEND
# =============================================================================

REPORTS_COLLECTION: str = "reports"

IMAGE_UPLOAD_PREFIX: str = "reports"
AUDIO_UPLOAD_PREFIX: str = "audio"

# Nominatim usage policy: max 1 request per second
NOMINATIM_MIN_INTERVAL_SECONDS: float = 1.0
