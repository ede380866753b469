"""
CivicReport - Address Resolver
Builds a single display address for a coordinate.

Address segments are collected from most to least precise:

    street  ->  district  ->  subregion  ->  city (or region)

A segment is skipped when it repeats one already collected, and district and
subregion are skipped when they equal the city. When nothing usable comes back,
or the geocoder fails, the raw coordinates are shown instead.
"""

import asyncio
import logging
from typing import Dict, List, Mapping, Optional

from src.core.constants import LOCATION_NOT_AVAILABLE
from src.core.geo_utils import Coordinate, format_coordinates
from src.location.geocoding import AddressComponents, ReverseGeocoder

logger = logging.getLogger(__name__)


def _street_segment(components: AddressComponents) -> Optional[str]:
    if components.street:
        if components.street_number:
            return f"{components.street_number} {components.street}"
        return components.street

    name = components.name
    if name and name != components.city and name != components.subregion:
        return name
    return None


def build_address(components: Optional[AddressComponents]) -> Optional[str]:
    """
    Join address components into "street, district, subregion, city".

    Args:
        components: Geocoder result, may be None

    Returns:
        Display string, or None if no component was usable
    """
    if components is None:
        return None

    parts: List[str] = []

    def add(segment: Optional[str]) -> None:
        if segment and segment not in parts:
            parts.append(segment)

    add(_street_segment(components))

    city = components.city
    if components.district and components.district != city:
        add(components.district)
    if components.subregion and components.subregion != city:
        add(components.subregion)

    if city:
        add(city)
    elif components.region:
        add(components.region)

    if not parts:
        return None
    return ", ".join(parts)


class AddressResolver:
    """
    Resolves coordinates to human-readable addresses.

    Never raises: geocoder failures degrade to a coordinate string.
    """

    def __init__(self, geocoder: ReverseGeocoder):
        self.geocoder = geocoder

    async def resolve(self, coordinate: Optional[Coordinate]) -> str:
        """
        Get a readable address for a coordinate.

        Args:
            coordinate: Location to describe; None or (0, 0) means unknown

        Returns:
            Address string, coordinate fallback, or LOCATION_NOT_AVAILABLE
        """
        if coordinate is None or coordinate.is_unset:
            return LOCATION_NOT_AVAILABLE

        try:
            components = await self.geocoder.reverse_geocode(coordinate)
        except Exception as e:
            logger.warning(
                "Reverse geocoding failed for (%s, %s): %s",
                coordinate.latitude, coordinate.longitude, e,
            )
            return format_coordinates(coordinate)

        address = build_address(components)
        if address is None:
            logger.debug("No usable address for %s, using coordinates", coordinate)
            return format_coordinates(coordinate)
        return address

    async def resolve_many(
        self, locations: Mapping[str, Optional[Coordinate]]
    ) -> Dict[str, str]:
        """
        Resolve several coordinates concurrently.

        Args:
            locations: Mapping of report id -> coordinate

        Returns:
            Mapping of report id -> address string
        """
        keys = list(locations)
        addresses = await asyncio.gather(
            *(self.resolve(locations[key]) for key in keys)
        )
        return dict(zip(keys, addresses))
