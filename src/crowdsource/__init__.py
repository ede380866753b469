"""
CivicReport - Crowdsource Module
Handles citizen issue reports, votes and nearby lookups.
"""

from src.crowdsource.report import (
    Report,
    ReportStatus,
)
from src.crowdsource.report_store import (
    ReportStore,
    InMemoryReportStore,
    FirestoreReportStore,
)
from src.crowdsource.report_handler import (
    ReportHandler,
    ReportStatistics,
    filter_by_status,
    summarize_reports,
)
from src.crowdsource.nearby import (
    nearby_reports,
    get_nearby_reports,
    distance_labels,
)
from src.crowdsource.media_storage import MediaStorage

__all__ = [
    # Model
    "Report",
    "ReportStatus",
    # Store
    "ReportStore",
    "InMemoryReportStore",
    "FirestoreReportStore",
    # Handler
    "ReportHandler",
    "ReportStatistics",
    "filter_by_status",
    "summarize_reports",
    # Nearby
    "nearby_reports",
    "get_nearby_reports",
    "distance_labels",
    # Media
    "MediaStorage",
]
