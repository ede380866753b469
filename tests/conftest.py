"""
Pytest configuration and fixtures
"""
import pytest
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.core.geo_utils import Coordinate
from src.crowdsource.report import Report, ReportStatus
from src.location.geocoding import AddressComponents


class StubGeocoder:
    """Reverse geocoder returning a canned result or raising a canned error."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def reverse_geocode(self, coordinate):
        self.calls.append(coordinate)
        if self.error is not None:
            raise self.error
        return self.result


class FailingIfCalledGeocoder:
    """Geocoder that fails the test when used."""

    def __init__(self):
        self.calls = []

    async def reverse_geocode(self, coordinate):
        self.calls.append(coordinate)
        pytest.fail("reverse_geocode should not have been called")


@pytest.fixture
def pune():
    """Reference position: central Pune."""
    return Coordinate(latitude=18.5204, longitude=73.8567)


@pytest.fixture
def mg_road_address():
    """Address where subregion repeats the city."""
    return AddressComponents(street="MG Road", city="Pune", subregion="Pune")


@pytest.fixture
def stub_geocoder():
    """Factory for StubGeocoder."""
    return StubGeocoder


@pytest.fixture
def failing_geocoder():
    return FailingIfCalledGeocoder()


@pytest.fixture
def sample_reports():
    """Reports around Pune, newest first, plus one far away and one unlocated."""
    now = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)
    return [
        Report(
            id="r1",
            title="Deep pothole near signal",
            description="Two-wheelers swerving around it",
            category="Pothole",
            location=Coordinate(latitude=18.5304, longitude=73.8567),  # ~1.1 km north
            created_at=now,
            owner_id="user-a",
            user_name="Asha",
            voted_by={"user-b", "user-c"},
        ),
        Report(
            id="r2",
            title="Overflowing garbage bin",
            description="Not collected for a week",
            category="Garbage",
            location=Coordinate(latitude=18.5654, longitude=73.8567),  # ~5 km north
            status=ReportStatus.WORKING,
            created_at=now - timedelta(hours=1),
            owner_id="user-b",
            user_name="Bilal",
        ),
        Report(
            id="r3",
            title="Streetlight out",
            description="Whole lane is dark",
            category="Streetlight",
            location=Coordinate(latitude=19.0760, longitude=72.8777),  # Mumbai
            status=ReportStatus.COMPLETED,
            created_at=now - timedelta(hours=2),
            owner_id="user-a",
            user_name="Asha",
            voted_by={"user-d"},
        ),
        Report(
            id="r4",
            title="Water leak",
            description="Location was not captured",
            category="Water Leak",
            location=None,
            created_at=now - timedelta(hours=3),
            owner_id="user-c",
            user_name="Chen",
        ),
    ]
