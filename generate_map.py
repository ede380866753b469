#!/usr/bin/env python3
"""
CivicReport - Generate Interactive Report Map
Loads reports from the configured store and writes an HTML map.
"""
import argparse
import os
import sys
from datetime import datetime

# Add src to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dotenv import load_dotenv

load_dotenv()

from src.core.config import get_settings
from src.core.constants import STATUS_LABELS
from src.core.geo_utils import Coordinate
from src.core.logging import setup_logging
from src.crowdsource.nearby import nearby_reports
from src.crowdsource.report_handler import summarize_reports
from src.crowdsource.report_store import FirestoreReportStore, InMemoryReportStore
from src.visualization.map_generator import save_report_map


def main():
    parser = argparse.ArgumentParser(description="Render civic reports on a map")
    parser.add_argument("--lat", type=float, help="Only reports near this latitude")
    parser.add_argument("--lon", type=float, help="Only reports near this longitude")
    parser.add_argument("--radius", type=float, default=None, help="Nearby radius in km")
    parser.add_argument("--output", default="reports_map.html")
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings.log_level)

    print("=" * 60)
    print("CivicReport - Generating Report Map")
    print("=" * 60)

    if settings.uses_firestore:
        store = FirestoreReportStore()
    else:
        print("WARNING: REPORT_STORE_BACKEND is not 'firestore', map will be empty")
        store = InMemoryReportStore()

    reports = store.list_all_reports()
    origin = None
    if args.lat is not None and args.lon is not None:
        origin = Coordinate(latitude=args.lat, longitude=args.lon)
        radius = args.radius if args.radius is not None else settings.nearby_radius_km
        reports = nearby_reports(reports, origin, radius)
        print(f"\nFiltering to {radius}km around ({args.lat}, {args.lon})")

    print(f"\nTotal reports: {len(reports)}")

    stats = summarize_reports(reports)
    by_status = {label: 0 for label in STATUS_LABELS.values()}
    for report in reports:
        by_status[report.status.label] += 1

    print(f"\nStatistics:")
    for label, count in by_status.items():
        print(f"  - {label + ':':<12} {count}")
    print(f"  - Total votes: {stats.votes_received}")

    output_path = save_report_map(
        reports,
        output_path=args.output,
        title=f"CivicReport ({datetime.now().strftime('%Y-%m-%d %H:%M')})",
        user_location=origin,
    )

    print(f"\nMap saved to: {output_path}")
    print("=" * 60)


if __name__ == "__main__":
    main()
