"""
Civic report handler
Validates submissions, votes and status changes before they reach the store
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from src.core.constants import REPORT_CATEGORIES
from src.core.geo_utils import Coordinate
from src.crowdsource.report import Report, ReportStatus
from src.crowdsource.report_store import ReportStore

logger = logging.getLogger(__name__)


@dataclass
class ReportStatistics:
    """Per-user summary shown on the profile page."""
    total: int = 0
    resolved: int = 0
    in_progress: int = 0
    votes_received: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "resolved": self.resolved,
            "in_progress": self.in_progress,
            "votes_received": self.votes_received,
        }


def filter_by_status(
    reports: Iterable[Report],
    status: Optional[ReportStatus] = None
) -> List[Report]:
    """Keep reports with the given status; None keeps everything."""
    if status is None:
        return list(reports)
    return [r for r in reports if r.status == status]


def summarize_reports(reports: Iterable[Report]) -> ReportStatistics:
    """Count totals, resolved and in-progress reports and received votes."""
    stats = ReportStatistics()
    for report in reports:
        stats.total += 1
        if report.is_resolved:
            stats.resolved += 1
        else:
            stats.in_progress += 1
        stats.votes_received += report.vote_count
    return stats


class ReportHandler:
    """
    Handles civic reports from users.

    Thin layer over a ReportStore that checks input and logs changes.
    """

    def __init__(self, store: ReportStore):
        """
        Initialize report handler.

        Args:
            store: Backend for storing reports
        """
        self.store = store

    def submit_report(
        self,
        title: str,
        description: str,
        category: str,
        location: Coordinate,
        owner_id: str,
        user_name: str,
        image_url: Optional[str] = None,
        audio_url: Optional[str] = None,
    ) -> str:
        """
        Validate and store a new report.

        Args:
            title: Short summary
            description: Details of the issue
            category: One of REPORT_CATEGORIES
            location: Where the issue is
            owner_id: Submitting user ID
            user_name: Submitting user display name
            image_url: Uploaded photo URL
            audio_url: Uploaded voice note URL

        Returns:
            New report ID

        Raises:
            ValueError: If a field is missing or out of range
        """
        if not title or not title.strip():
            raise ValueError("Title is required")
        if category not in REPORT_CATEGORIES:
            raise ValueError(f"Unknown category: {category}")
        if not owner_id:
            raise ValueError("Owner is required")
        if not location.is_valid:
            raise ValueError(
                f"Invalid coordinates: ({location.latitude}, {location.longitude})"
            )
        if location.is_unset:
            raise ValueError("Location not available")

        report_id = self.store.create_report(
            title=title.strip(),
            description=description,
            category=category,
            location=location,
            owner_id=owner_id,
            user_name=user_name,
            image_url=image_url,
            audio_url=audio_url,
        )

        logger.info(
            f"New report {report_id} ({category}) at "
            f"({location.latitude}, {location.longitude})"
        )
        return report_id

    def get_report(self, report_id: str) -> Report:
        return self.store.get_report(report_id)

    def list_reports(self, status: Optional[ReportStatus] = None) -> List[Report]:
        return filter_by_status(self.store.list_all_reports(), status)

    def vote(self, report_id: str, user_id: str, upvote: bool = True) -> Report:
        """
        Add or remove a user's vote.

        Returns:
            The report after the change
        """
        self.store.set_vote(report_id, user_id, upvote)
        logger.info(f"User {user_id} {'upvoted' if upvote else 'removed vote on'} {report_id}")
        return self.store.get_report(report_id)

    def toggle_vote(self, report_id: str, user_id: str) -> Report:
        """Flip the user's vote on a report."""
        report = self.store.get_report(report_id)
        return self.vote(report_id, user_id, upvote=not report.has_voted(user_id))

    def update_status(self, report_id: str, status: ReportStatus) -> Report:
        """
        Move a report to a new lifecycle stage.

        Returns:
            The updated report
        """
        report = self.store.get_report(report_id)
        old_status = report.status
        self.store.update_status(report_id, status)

        logger.info(f"Report {report_id} status: {old_status.label} -> {status.label}")
        return self.store.get_report(report_id)

    def user_reports(self, owner_id: str) -> List[Report]:
        return self.store.list_reports_by_owner(owner_id)

    def user_statistics(self, owner_id: str) -> ReportStatistics:
        return summarize_reports(self.store.list_reports_by_owner(owner_id))
