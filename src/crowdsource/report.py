"""
Civic issue report model
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Dict, Optional, Set

from src.core.constants import STATUS_LABELS
from src.core.geo_utils import Coordinate


class ReportStatus(IntEnum):
    """Lifecycle stage of a report. Values are stored as-is in the backend."""
    REPORTED = 0
    VALIDATED = 1
    WORKING = 2
    COMPLETED = 3

    @property
    def label(self) -> str:
        return STATUS_LABELS[self.value]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Report:
    """
    Civic issue submitted by a user.

    Contains location, category, optional media and the set of users who
    upvoted it.
    """
    id: Optional[str]
    title: str
    description: str
    category: str
    location: Optional[Coordinate]

    # Media
    image_url: Optional[str] = None
    audio_url: Optional[str] = None

    status: ReportStatus = ReportStatus.REPORTED
    created_at: datetime = field(default_factory=_utcnow)

    # Owner
    owner_id: str = ""
    user_name: str = ""

    voted_by: Set[str] = field(default_factory=set)

    @property
    def vote_count(self) -> int:
        return len(self.voted_by)

    @property
    def is_resolved(self) -> bool:
        return self.status == ReportStatus.COMPLETED

    def has_voted(self, user_id: str) -> bool:
        return user_id in self.voted_by

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "latitude": self.location.latitude if self.location else None,
            "longitude": self.location.longitude if self.location else None,
            "image_url": self.image_url,
            "audio_url": self.audio_url,
            "status": int(self.status),
            "status_label": self.status.label,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "owner_id": self.owner_id,
            "user_name": self.user_name,
            "vote_count": self.vote_count,
            "voted_by": sorted(self.voted_by),
        }
