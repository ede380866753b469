"""
CivicReport - Reverse Geocoding
Turns coordinates into structured address components via Nominatim.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Protocol

import httpx

from src.core.config import settings
from src.core.constants import NOMINATIM_MIN_INTERVAL_SECONDS
from src.core.exceptions import GeocodingError
from src.core.geo_utils import Coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddressComponents:
    """Best-match address for a coordinate. Any field may be missing."""
    street: Optional[str] = None
    street_number: Optional[str] = None
    name: Optional[str] = None
    district: Optional[str] = None
    city: Optional[str] = None
    subregion: Optional[str] = None
    region: Optional[str] = None
    postal_code: Optional[str] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class ReverseGeocoder(Protocol):
    """Anything that can look up an address for a coordinate."""

    async def reverse_geocode(
        self, coordinate: Coordinate
    ) -> Optional[AddressComponents]:
        ...


# First key present wins
NOMINATIM_KEY_MAP: Dict[str, tuple] = {
    "street": ("road", "pedestrian", "footway"),
    "street_number": ("house_number",),
    "district": ("suburb", "neighbourhood", "city_district", "quarter"),
    "city": ("city", "town", "village", "municipality"),
    "subregion": ("county", "state_district"),
    "region": ("state", "province"),
    "postal_code": ("postcode",),
}


def parse_nominatim_address(payload: Dict[str, Any]) -> Optional[AddressComponents]:
    """
    Map a Nominatim /reverse JSON payload onto AddressComponents.

    Args:
        payload: Decoded jsonv2 response body

    Returns:
        AddressComponents, or None when Nominatim found nothing
    """
    if not payload or "error" in payload:
        return None

    address = payload.get("address")
    if not address:
        return None

    values: Dict[str, Optional[str]] = {}
    for field_name, keys in NOMINATIM_KEY_MAP.items():
        values[field_name] = next(
            (address[k] for k in keys if address.get(k)), None
        )

    # jsonv2 puts the feature name at the top level
    values["name"] = payload.get("name") or None

    components = AddressComponents(**values)
    if components.is_empty():
        return None
    return components


class NominatimGeocoder:
    """
    Async client for the Nominatim reverse-geocoding endpoint.
    Rate limited to 1 request per second across concurrent callers.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        language: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        min_interval: float = NOMINATIM_MIN_INTERVAL_SECONDS,
    ):
        """
        Initialize the geocoder.

        Args:
            base_url: Nominatim server root
            timeout: Request timeout in seconds
            user_agent: User-Agent header (required by the Nominatim usage policy)
            language: Preferred language for address names
            client: Pre-built HTTP client, mainly for tests
            min_interval: Minimum seconds between requests
        """
        self.base_url = (base_url or settings.nominatim_url).rstrip("/")
        self.timeout = timeout or settings.geocoder_timeout_seconds
        self.user_agent = user_agent or settings.geocoder_user_agent
        self.language = language or settings.geocoder_language
        self.min_interval = min_interval

        self._client = client
        self._owns_client = client is None
        self._lock = asyncio.Lock()
        self._last_request_time = 0.0

    async def __aenter__(self):
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            )
        return self._client

    async def _rate_limit(self) -> None:
        async with self._lock:
            elapsed = time.monotonic() - self._last_request_time
            if elapsed < self.min_interval:
                await asyncio.sleep(self.min_interval - elapsed)
            self._last_request_time = time.monotonic()

    async def reverse_geocode(
        self, coordinate: Coordinate
    ) -> Optional[AddressComponents]:
        """
        Look up the best-match address for a coordinate.

        Args:
            coordinate: Location to resolve

        Returns:
            AddressComponents, or None if nothing matched

        Raises:
            GeocodingError: On transport errors or bad responses
        """
        await self._rate_limit()

        params = {
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "format": "jsonv2",
            "addressdetails": 1,
            "accept-language": self.language,
        }

        try:
            response = await self._get_client().get(
                f"{self.base_url}/reverse",
                params=params,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise GeocodingError(
                f"Reverse geocoding failed for "
                f"({coordinate.latitude}, {coordinate.longitude}): {e}"
            ) from e

        components = parse_nominatim_address(payload)
        logger.debug(
            "Nominatim (%s, %s) -> %s",
            coordinate.latitude, coordinate.longitude, components,
        )
        return components
