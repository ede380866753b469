"""
Tests for the Nominatim reverse geocoder
"""
import asyncio

import httpx
import pytest

import sys
sys.path.insert(0, '.')

from src.core.constants import NOMINATIM_MIN_INTERVAL_SECONDS
from src.core.exceptions import GeocodingError
from src.core.geo_utils import Coordinate
from src.location.geocoding import (
    AddressComponents,
    NominatimGeocoder,
    parse_nominatim_address,
)

PUNE_PAYLOAD = {
    "place_id": 123,
    "name": "",
    "display_name": "12, MG Road, Camp, Pune, Maharashtra, 411001, India",
    "address": {
        "house_number": "12",
        "road": "MG Road",
        "suburb": "Camp",
        "city": "Pune",
        "county": "Pune",
        "state": "Maharashtra",
        "postcode": "411001",
        "country": "India",
        "country_code": "in",
    },
}


def make_geocoder(handler) -> NominatimGeocoder:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return NominatimGeocoder(
        base_url="https://nominatim.test",
        client=client,
        min_interval=0,
    )


class TestParseNominatimAddress:
    """Test mapping of Nominatim payloads."""

    def test_full_address(self):
        components = parse_nominatim_address(PUNE_PAYLOAD)

        assert components == AddressComponents(
            street="MG Road",
            street_number="12",
            name=None,
            district="Camp",
            city="Pune",
            subregion="Pune",
            region="Maharashtra",
            postal_code="411001",
        )

    def test_town_used_as_city(self):
        payload = {"name": "Lonavala Lake", "address": {"town": "Lonavala", "state": "Maharashtra"}}

        components = parse_nominatim_address(payload)

        assert components.city == "Lonavala"
        assert components.name == "Lonavala Lake"
        assert components.street is None

    def test_error_payload(self):
        assert parse_nominatim_address({"error": "Unable to geocode"}) is None

    def test_missing_address(self):
        assert parse_nominatim_address({"display_name": "Somewhere"}) is None
        assert parse_nominatim_address({}) is None

    def test_only_country_is_empty(self):
        assert parse_nominatim_address({"address": {"country": "India"}}) is None


class TestNominatimGeocoder:
    """Test suite for NominatimGeocoder."""

    def test_reverse_geocode(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=PUNE_PAYLOAD)

        geocoder = make_geocoder(handler)

        components = asyncio.run(geocoder.reverse_geocode(Coordinate(18.5204, 73.8567)))

        assert components.street == "MG Road"
        assert components.city == "Pune"
        assert seen["path"] == "/reverse"
        assert seen["params"]["format"] == "jsonv2"
        assert seen["params"]["lat"] == "18.5204"
        assert seen["params"]["lon"] == "73.8567"

    def test_no_match(self):
        geocoder = make_geocoder(
            lambda request: httpx.Response(200, json={"error": "Unable to geocode"})
        )

        assert asyncio.run(geocoder.reverse_geocode(Coordinate(10.0, -140.0))) is None

    def test_http_error_raises(self):
        geocoder = make_geocoder(lambda request: httpx.Response(503, text="busy"))

        with pytest.raises(GeocodingError):
            asyncio.run(geocoder.reverse_geocode(Coordinate(18.5, 73.8)))

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        geocoder = make_geocoder(handler)

        with pytest.raises(GeocodingError):
            asyncio.run(geocoder.reverse_geocode(Coordinate(18.5, 73.8)))

    def test_invalid_json_raises(self):
        geocoder = make_geocoder(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(GeocodingError):
            asyncio.run(geocoder.reverse_geocode(Coordinate(18.5, 73.8)))

    def test_defaults_from_settings(self):
        geocoder = NominatimGeocoder()

        assert geocoder.base_url.startswith("https://")
        assert geocoder.user_agent
        assert geocoder.min_interval == NOMINATIM_MIN_INTERVAL_SECONDS
