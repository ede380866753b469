"""
CivicReport - Device Location
Current-position lookup with a readable address attached.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from src.core.exceptions import LocationPermissionDenied
from src.core.geo_utils import Coordinate
from src.location.address_resolver import AddressResolver

logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    """Source of the device's current position."""

    async def get_current_coordinate(self, high_accuracy: bool = False) -> Coordinate:
        """Raises LocationPermissionDenied when access is refused."""
        ...


class StaticLocationProvider:
    """
    Location provider that always reports the same position.

    Used where there is no device GPS, e.g. server-side requests that carry
    the client's coordinates, or tests.
    """

    def __init__(self, coordinate: Optional[Coordinate] = None, permission_granted: bool = True):
        self.coordinate = coordinate
        self.permission_granted = permission_granted

    async def get_current_coordinate(self, high_accuracy: bool = False) -> Coordinate:
        if not self.permission_granted or self.coordinate is None:
            raise LocationPermissionDenied("Location permission not granted")
        return self.coordinate


@dataclass
class CurrentLocation:
    """Device position and its resolved address."""
    coordinate: Coordinate
    address: str

    def to_dict(self) -> dict:
        return {
            "latitude": self.coordinate.latitude,
            "longitude": self.coordinate.longitude,
            "address": self.address,
        }


async def get_current_location(
    provider: LocationProvider,
    resolver: AddressResolver,
    high_accuracy: bool = False,
) -> Optional[CurrentLocation]:
    """
    Get the current position with its address.

    Args:
        provider: Device location capability
        resolver: Address resolver for the coordinate
        high_accuracy: Ask the provider for its most precise fix

    Returns:
        CurrentLocation, or None if permission was denied or the lookup failed
    """
    try:
        coordinate = await provider.get_current_coordinate(high_accuracy=high_accuracy)
    except LocationPermissionDenied:
        logger.info("Location permission denied")
        return None
    except Exception as e:
        logger.error(f"Error getting current location: {e}")
        return None

    address = await resolver.resolve(coordinate)
    logger.debug(f"Current location {coordinate.to_tuple()} -> {address}")
    return CurrentLocation(coordinate=coordinate, address=address)
