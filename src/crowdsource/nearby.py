"""
Nearby report filtering
Selects reports within a radius of the user's position.
"""

import logging
from typing import Dict, Iterable, List, Optional

from src.core.config import settings
from src.core.constants import NEARBY_RADIUS_KM
from src.core.geo_utils import Coordinate, distance, format_distance
from src.crowdsource.report import Report
from src.crowdsource.report_store import ReportStore

logger = logging.getLogger(__name__)


def nearby_reports(
    reports: Iterable[Report],
    origin: Coordinate,
    radius_km: float = NEARBY_RADIUS_KM,
) -> List[Report]:
    """
    Filter reports to those strictly closer than radius_km to origin.

    Input order is kept. Reports without a location are dropped.

    Args:
        reports: Report snapshot supplied by the caller
        origin: Reference position
        radius_km: Cutoff distance in kilometers (exclusive)

    Returns:
        Matching reports
    """
    return [
        report for report in reports
        if report.location is not None
        and distance(origin, report.location) < radius_km
    ]


def get_nearby_reports(
    store: ReportStore,
    origin: Coordinate,
    radius_km: Optional[float] = None,
    limit: Optional[int] = None,
) -> List[Report]:
    """
    Fetch all reports from a store and keep the ones near origin.

    Args:
        store: Report store
        origin: Reference position
        radius_km: Cutoff distance, defaults to settings.nearby_radius_km
        limit: Keep only the first N matches (newest first)

    Returns:
        Nearby reports
    """
    radius = settings.nearby_radius_km if radius_km is None else radius_km
    reports = nearby_reports(store.list_all_reports(), origin, radius)

    logger.debug(
        f"{len(reports)} reports within {radius}km of "
        f"({origin.latitude}, {origin.longitude})"
    )

    if limit is not None:
        reports = reports[:limit]
    return reports


def distance_labels(reports: Iterable[Report], origin: Coordinate) -> Dict[str, str]:
    """Map report id -> "1.2km away" style label for located reports."""
    return {
        report.id: format_distance(distance(origin, report.location))
        for report in reports
        if report.id and report.location is not None
    }
