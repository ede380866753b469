"""
CivicReport - Exceptions
Error types raised by the capability layers.
"""


class CivicReportError(Exception):
    """Base class for application errors."""


class GeocodingError(CivicReportError):
    """The reverse-geocoding service failed or returned an unreadable response."""


class LocationPermissionDenied(CivicReportError):
    """The user did not grant access to device location."""


class ReportStoreError(CivicReportError):
    """The backing report store rejected or failed an operation."""


class ReportNotFoundError(ReportStoreError):
    """No report exists with the requested identifier."""

    def __init__(self, report_id: str):
        super().__init__(f"Report not found: {report_id}")
        self.report_id = report_id


class MediaUploadError(CivicReportError):
    """Uploading an image or audio clip to object storage failed."""
