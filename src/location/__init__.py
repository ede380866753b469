"""
CivicReport - Location Module
Reverse geocoding, address formatting and device position lookup.
"""

from src.location.geocoding import (
    AddressComponents,
    ReverseGeocoder,
    NominatimGeocoder,
    parse_nominatim_address,
)
from src.location.address_resolver import (
    AddressResolver,
    build_address,
)
from src.location.device import (
    LocationProvider,
    StaticLocationProvider,
    CurrentLocation,
    get_current_location,
)

__all__ = [
    # Geocoding
    "AddressComponents",
    "ReverseGeocoder",
    "NominatimGeocoder",
    "parse_nominatim_address",
    # Address Resolver
    "AddressResolver",
    "build_address",
    # Device
    "LocationProvider",
    "StaticLocationProvider",
    "CurrentLocation",
    "get_current_location",
]
