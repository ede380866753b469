"""
CivicReport - REST API

FastAPI application exposing civic issue reports, nearby lookups,
reverse geocoding and the report map to mobile clients.

Run with: uvicorn src.api.main:app --reload
"""

from datetime import datetime, timezone
from functools import lru_cache
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from src.core.config import Settings, get_settings
from src.core.constants import REPORT_CATEGORIES, STATUS_LABELS
from src.core.exceptions import ReportNotFoundError, ReportStoreError
from src.core.geo_utils import Coordinate, distance, format_distance
from src.core.logging import setup_logging
from src.crowdsource.nearby import get_nearby_reports
from src.crowdsource.report import Report, ReportStatus
from src.crowdsource.report_handler import ReportHandler
from src.crowdsource.report_store import (
    FirestoreReportStore,
    InMemoryReportStore,
    ReportStore,
)
from src.location.address_resolver import AddressResolver
from src.location.geocoding import NominatimGeocoder
from src.visualization.map_generator import create_report_map

API_VERSION = "1.0.0"

logger = setup_logging()

app = FastAPI(
    title="CivicReport",
    debug=get_settings().debug,
    description="Civic issue reporting API: submit, browse, upvote and track local reports",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Pydantic Models
# ============================================================================

class ReportResponse(BaseModel):
    """Civic issue report."""
    id: str
    title: str
    description: str
    category: str
    latitude: Optional[float]
    longitude: Optional[float]
    image_url: Optional[str]
    audio_url: Optional[str]
    status: int = Field(description="0 Reported, 1 Validated, 2 Working, 3 Completed")
    status_label: str
    created_at: Optional[str]
    owner_id: str
    user_name: str
    vote_count: int
    voted_by: List[str]


class NearbyReportResponse(ReportResponse):
    """Report with its distance from the caller."""
    distance_km: float
    distance_label: str
    address: Optional[str] = None


class ReportListResponse(BaseModel):
    """List of reports."""
    count: int
    reports: List[ReportResponse]


class NearbyReportListResponse(BaseModel):
    """Reports near a position."""
    count: int
    radius_km: float
    reports: List[NearbyReportResponse]


class ReportCreateRequest(BaseModel):
    """Request to create a report."""
    title: str = Field(..., min_length=1)
    description: str = ""
    category: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    owner_id: str = Field(..., min_length=1)
    user_name: str = ""
    image_url: Optional[str] = None
    audio_url: Optional[str] = None


class VoteRequest(BaseModel):
    """Vote on a report. Omit upvote to toggle."""
    user_id: str = Field(..., min_length=1)
    upvote: Optional[bool] = None


class StatsResponse(BaseModel):
    """Per-user report statistics."""
    owner_id: str
    total: int
    resolved: int
    in_progress: int
    votes_received: int


class AddressResponse(BaseModel):
    """Reverse geocoding result."""
    latitude: float
    longitude: float
    address: str


class DistanceResponse(BaseModel):
    """Distance between two points."""
    distance_km: float
    label: str


class ClientConfigResponse(BaseModel):
    """Settings the mobile client needs at startup."""
    default_language: str
    force_show_onboarding: bool
    nearby_radius_km: float
    categories: List[str]
    statuses: Dict[int, str]


class HealthResponse(BaseModel):
    """API health check response."""
    status: str
    version: str
    timestamp: str
    environment: str
    store_backend: str


# ============================================================================
# Dependencies
# ============================================================================

@lru_cache()
def get_report_store() -> ReportStore:
    """Report store selected by settings.report_store_backend."""
    if get_settings().uses_firestore:
        return FirestoreReportStore()
    return InMemoryReportStore()


def get_report_handler(store: ReportStore = Depends(get_report_store)) -> ReportHandler:
    return ReportHandler(store)


@lru_cache()
def get_address_resolver() -> AddressResolver:
    return AddressResolver(NominatimGeocoder())


def to_response(report: Report) -> ReportResponse:
    return ReportResponse(**report.to_dict())


def parse_status(status: int) -> ReportStatus:
    try:
        return ReportStatus(status)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid status: {status}")


# ============================================================================
# System Routes
# ============================================================================

@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check(settings: Settings = Depends(get_settings)):
    """Check API health status."""
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
        store_backend=settings.report_store_backend,
    )


@app.get("/api/v1/config", response_model=ClientConfigResponse, tags=["System"])
async def client_config(settings: Settings = Depends(get_settings)):
    """Language, onboarding and nearby settings for the mobile client."""
    return ClientConfigResponse(
        default_language=settings.default_language,
        force_show_onboarding=settings.force_show_onboarding,
        nearby_radius_km=settings.nearby_radius_km,
        categories=REPORT_CATEGORIES,
        statuses=STATUS_LABELS,
    )


# ============================================================================
# Report Routes
# ============================================================================

@app.get("/api/v1/reports", response_model=ReportListResponse, tags=["Reports"])
async def list_reports(
    status: Optional[int] = Query(None, description="Filter by status ordinal (0-3)"),
    limit: int = Query(default=50, ge=1, le=500),
    handler: ReportHandler = Depends(get_report_handler),
):
    """List all reports, newest first."""
    status_enum = parse_status(status) if status is not None else None
    try:
        reports = handler.list_reports(status_enum)[:limit]
    except ReportStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return ReportListResponse(
        count=len(reports),
        reports=[to_response(r) for r in reports],
    )


@app.get("/api/v1/reports/nearby", response_model=NearbyReportListResponse, tags=["Reports"])
async def list_nearby_reports(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    radius_km: Optional[float] = Query(None, gt=0, description="Defaults to the configured nearby radius"),
    limit: Optional[int] = Query(None, ge=1),
    with_address: bool = Query(False, description="Reverse geocode each report"),
    store: ReportStore = Depends(get_report_store),
    resolver: AddressResolver = Depends(get_address_resolver),
    settings: Settings = Depends(get_settings),
):
    """
    Reports within radius_km of the given position.

    Each report carries its distance and a display label; addresses are
    resolved concurrently when with_address is set.
    """
    origin = Coordinate(latitude=latitude, longitude=longitude)
    radius = settings.nearby_radius_km if radius_km is None else radius_km

    try:
        reports = get_nearby_reports(store, origin, radius_km=radius, limit=limit)
    except ReportStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    addresses: Dict[str, str] = {}
    if with_address:
        addresses = await resolver.resolve_many({r.id: r.location for r in reports})

    results = []
    for report in reports:
        km = distance(origin, report.location)
        results.append(
            NearbyReportResponse(
                **report.to_dict(),
                distance_km=round(km, 3),
                distance_label=format_distance(km),
                address=addresses.get(report.id),
            )
        )

    return NearbyReportListResponse(count=len(results), radius_km=radius, reports=results)


@app.get("/api/v1/reports/user/{owner_id}", response_model=ReportListResponse, tags=["Reports"])
async def list_user_reports(
    owner_id: str,
    handler: ReportHandler = Depends(get_report_handler),
):
    """Reports submitted by one user, newest first."""
    try:
        reports = handler.user_reports(owner_id)
    except ReportStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return ReportListResponse(count=len(reports), reports=[to_response(r) for r in reports])


@app.get("/api/v1/reports/user/{owner_id}/stats", response_model=StatsResponse, tags=["Reports"])
async def get_user_stats(
    owner_id: str,
    handler: ReportHandler = Depends(get_report_handler),
):
    """Totals for a user's profile page."""
    try:
        stats = handler.user_statistics(owner_id)
    except ReportStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return StatsResponse(owner_id=owner_id, **stats.to_dict())


@app.get("/api/v1/reports/{report_id}", response_model=ReportResponse, tags=["Reports"])
async def get_report(
    report_id: str,
    handler: ReportHandler = Depends(get_report_handler),
):
    """Get a specific report by ID."""
    try:
        return to_response(handler.get_report(report_id))
    except ReportNotFoundError:
        raise HTTPException(status_code=404, detail="Report not found")
    except ReportStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/v1/reports", response_model=ReportResponse, tags=["Reports"])
async def create_report(
    request: ReportCreateRequest,
    handler: ReportHandler = Depends(get_report_handler),
):
    """Submit a new civic issue report."""
    try:
        report_id = handler.submit_report(
            title=request.title,
            description=request.description,
            category=request.category,
            location=Coordinate(latitude=request.latitude, longitude=request.longitude),
            owner_id=request.owner_id,
            user_name=request.user_name,
            image_url=request.image_url,
            audio_url=request.audio_url,
        )
        return to_response(handler.get_report(report_id))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ReportStoreError as e:
        logger.error(f"Report submission failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/v1/reports/{report_id}/vote", response_model=ReportResponse, tags=["Reports"])
async def vote_report(
    report_id: str,
    request: VoteRequest,
    handler: ReportHandler = Depends(get_report_handler),
):
    """Upvote, remove a vote, or toggle when upvote is omitted."""
    try:
        if request.upvote is None:
            report = handler.toggle_vote(report_id, request.user_id)
        else:
            report = handler.vote(report_id, request.user_id, request.upvote)
    except ReportNotFoundError:
        raise HTTPException(status_code=404, detail="Report not found")
    return to_response(report)


@app.put("/api/v1/reports/{report_id}/status", response_model=ReportResponse, tags=["Reports"])
async def update_report_status(
    report_id: str,
    status: int = Query(..., description="New status ordinal: 0-3"),
    handler: ReportHandler = Depends(get_report_handler),
):
    """Move a report to a new lifecycle stage."""
    status_enum = parse_status(status)
    try:
        return to_response(handler.update_status(report_id, status_enum))
    except ReportNotFoundError:
        raise HTTPException(status_code=404, detail="Report not found")


# ============================================================================
# Location Routes
# ============================================================================

@app.get("/api/v1/geocode/reverse", response_model=AddressResponse, tags=["Location"])
async def reverse_geocode(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    resolver: AddressResolver = Depends(get_address_resolver),
):
    """Readable address for a coordinate. Falls back to the raw coordinates."""
    address = await resolver.resolve(Coordinate(latitude=latitude, longitude=longitude))
    return AddressResponse(latitude=latitude, longitude=longitude, address=address)


@app.get("/api/v1/distance", response_model=DistanceResponse, tags=["Location"])
async def get_distance(
    from_lat: float = Query(..., ge=-90, le=90),
    from_lon: float = Query(..., ge=-180, le=180),
    to_lat: float = Query(..., ge=-90, le=90),
    to_lon: float = Query(..., ge=-180, le=180),
):
    """Great-circle distance between two points."""
    km = distance(
        Coordinate(latitude=from_lat, longitude=from_lon),
        Coordinate(latitude=to_lat, longitude=to_lon),
    )
    return DistanceResponse(distance_km=km, label=format_distance(km))


# ============================================================================
# Map Routes
# ============================================================================

@app.get("/api/v1/map/reports", response_class=HTMLResponse, tags=["Map"])
async def get_reports_map(
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    store: ReportStore = Depends(get_report_store),
):
    """Interactive map of all reports, centered on the caller when given."""
    user_location = None
    if latitude is not None and longitude is not None:
        user_location = Coordinate(latitude=latitude, longitude=longitude)

    try:
        reports = store.list_all_reports()
    except ReportStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    report_map = create_report_map(reports, user_location=user_location)
    return report_map._repr_html_()


# ============================================================================
# Main
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
