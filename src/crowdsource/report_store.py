"""
Report storage backends
In-memory store for local runs and tests, Firestore for production.
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

from firebase_admin import firestore

from src.core.constants import REPORTS_COLLECTION
from src.core.exceptions import ReportNotFoundError, ReportStoreError
from src.core.firebase import get_firebase_app
from src.core.geo_utils import Coordinate
from src.crowdsource.report import Report, ReportStatus

logger = logging.getLogger(__name__)


class ReportStore(Protocol):
    """Backing store for civic reports."""

    def list_all_reports(self) -> List[Report]:
        ...

    def list_reports_by_owner(self, owner_id: str) -> List[Report]:
        ...

    def get_report(self, report_id: str) -> Report:
        ...

    def create_report(
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
        ...

    def set_vote(self, report_id: str, user_id: str, add: bool) -> None:
        ...

    def update_status(self, report_id: str, status: ReportStatus) -> None:
        ...


def newest_first(reports: List[Report]) -> List[Report]:
    """Sort reports by creation time, newest first. Missing timestamps go last."""
    epoch = datetime.min.replace(tzinfo=timezone.utc)
    return sorted(
        reports,
        key=lambda r: r.created_at or epoch,
        reverse=True,
    )


class InMemoryReportStore:
    """
    Process-local report store.

    Vote sets behave like the Firestore array-union / array-remove pair:
    adding twice or removing an absent voter is a no-op.
    """

    def __init__(self, reports: Optional[List[Report]] = None):
        self._reports: Dict[str, Report] = {}
        for report in reports or []:
            report_id = report.id or self._new_id()
            self._reports[report_id] = replace(
                report, id=report_id, voted_by=set(report.voted_by)
            )

        logger.info("InMemoryReportStore initialized")

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex[:20]

    def _get(self, report_id: str) -> Report:
        report = self._reports.get(report_id)
        if report is None:
            raise ReportNotFoundError(report_id)
        return report

    def list_all_reports(self) -> List[Report]:
        return newest_first(list(self._reports.values()))

    def list_reports_by_owner(self, owner_id: str) -> List[Report]:
        return newest_first(
            [r for r in self._reports.values() if r.owner_id == owner_id]
        )

    def get_report(self, report_id: str) -> Report:
        return self._get(report_id)

    def create_report(
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
        report_id = self._new_id()
        self._reports[report_id] = Report(
            id=report_id,
            title=title,
            description=description,
            category=category,
            location=location,
            image_url=image_url,
            audio_url=audio_url,
            owner_id=owner_id,
            user_name=user_name,
        )
        logger.info(f"Report created with ID: {report_id}")
        return report_id

    def set_vote(self, report_id: str, user_id: str, add: bool) -> None:
        report = self._get(report_id)
        if add:
            report.voted_by.add(user_id)
        else:
            report.voted_by.discard(user_id)

    def update_status(self, report_id: str, status: ReportStatus) -> None:
        report = self._get(report_id)
        report.status = ReportStatus(status)


def report_from_document(doc_id: str, data: Dict[str, Any]) -> Report:
    """
    Build a Report from a Firestore document.

    Args:
        doc_id: Document ID
        data: Document fields

    Returns:
        Report
    """
    location = None
    raw_location = data.get("location")
    if raw_location is not None:
        if isinstance(raw_location, dict):
            lat = raw_location.get("latitude")
            lng = raw_location.get("longitude")
        else:
            lat = getattr(raw_location, "latitude", None)
            lng = getattr(raw_location, "longitude", None)
        if lat is not None and lng is not None:
            location = Coordinate(latitude=float(lat), longitude=float(lng))

    try:
        status = ReportStatus(int(data.get("status", 0)))
    except (TypeError, ValueError):
        logger.warning(f"Report {doc_id} has unknown status {data.get('status')!r}")
        status = ReportStatus.REPORTED

    return Report(
        id=doc_id,
        title=data.get("title", ""),
        description=data.get("description", ""),
        category=data.get("type", ""),
        location=location,
        image_url=data.get("imageURL"),
        audio_url=data.get("audioURL"),
        status=status,
        created_at=data.get("timestamp"),
        owner_id=data.get("uid", ""),
        user_name=data.get("userName", ""),
        voted_by=set(data.get("votedBy") or []),
    )


class FirestoreReportStore:
    """
    Report store backed by a Firestore ``reports`` collection.

    Field names match the documents written by the mobile client.
    """

    def __init__(self, client: Optional[Any] = None, collection: str = REPORTS_COLLECTION):
        """
        Initialize the Firestore store.

        Args:
            client: Firestore client; the default firebase-admin app's client
                is used when omitted
            collection: Collection name
        """
        if client is None:
            client = firestore.client(get_firebase_app())

        self._db = client
        self.collection = collection

    def _collection(self):
        return self._db.collection(self.collection)

    def _existing(self, report_id: str):
        doc_ref = self._collection().document(report_id)
        if not doc_ref.get().exists:
            raise ReportNotFoundError(report_id)
        return doc_ref

    def _load(self, query) -> List[Report]:
        try:
            docs = list(query.stream())
        except Exception as e:
            logger.error(f"Error reading reports: {e}")
            raise ReportStoreError(f"Failed to read reports: {e}") from e
        return newest_first([report_from_document(d.id, d.to_dict()) for d in docs])

    def list_all_reports(self) -> List[Report]:
        return self._load(self._collection())

    def list_reports_by_owner(self, owner_id: str) -> List[Report]:
        # Sorted here to avoid needing a composite (uid, timestamp) index
        return self._load(self._collection().where("uid", "==", owner_id))

    def get_report(self, report_id: str) -> Report:
        try:
            snapshot = self._collection().document(report_id).get()
        except Exception as e:
            logger.error(f"Error reading report {report_id}: {e}")
            raise ReportStoreError(f"Failed to read report: {e}") from e
        if not snapshot.exists:
            raise ReportNotFoundError(report_id)
        return report_from_document(snapshot.id, snapshot.to_dict())

    def create_report(
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
        payload = {
            "title": title,
            "description": description,
            "type": category,
            "location": firestore.GeoPoint(location.latitude, location.longitude),
            "imageURL": image_url,
            "audioURL": audio_url,
            "status": int(ReportStatus.REPORTED),
            "timestamp": datetime.now(timezone.utc),
            "uid": owner_id,
            "userName": user_name,
            "votedBy": [],
        }

        try:
            _, doc_ref = self._collection().add(payload)
        except Exception as e:
            logger.error(f"Error creating report: {e}")
            raise ReportStoreError(f"Failed to create report: {e}") from e

        logger.info(f"Report created with ID: {doc_ref.id}")
        return doc_ref.id

    def set_vote(self, report_id: str, user_id: str, add: bool) -> None:
        doc_ref = self._existing(report_id)
        if add:
            doc_ref.update({"votedBy": firestore.ArrayUnion([user_id])})
        else:
            doc_ref.update({"votedBy": firestore.ArrayRemove([user_id])})

    def update_status(self, report_id: str, status: ReportStatus) -> None:
        doc_ref = self._existing(report_id)
        doc_ref.update({"status": int(status)})
