"""
Map Visualization Module for CivicReport

Generates interactive maps using Folium to display civic issue reports,
colored by status and optionally clustered.
"""

import html
import logging
from typing import Optional

import folium
from folium.plugins import MarkerCluster

from src.core.constants import DEFAULT_MAP_CENTER, STATUS_COLORS, STATUS_LABELS
from src.core.geo_utils import Coordinate

logger = logging.getLogger(__name__)


def get_status_color(status: int) -> str:
    """Get marker color for a report status ordinal."""
    return STATUS_COLORS.get(int(status), "red")


def create_report_map(
    reports: list,
    center: Optional[tuple[float, float]] = None,
    zoom: int = 13,
    title: str = "CivicReport - Reported Issues",
    cluster_markers: bool = True,
    user_location: Optional[Coordinate] = None,
) -> folium.Map:
    """
    Create an interactive map with report markers.

    Args:
        reports: List of Report objects
        center: Map center (lat, lon). Auto-calculated if None.
        zoom: Initial zoom level (1-18)
        title: Map title
        cluster_markers: Cluster markers when zoomed out
        user_location: Draw a "you are here" marker

    Returns:
        Folium Map object
    """
    located = [r for r in reports if r.location is not None and not r.location.is_unset]

    if center is None:
        if user_location is not None:
            center = user_location.to_tuple()
        elif located:
            lats = [r.location.latitude for r in located]
            lons = [r.location.longitude for r in located]
            center = (sum(lats) / len(lats), sum(lons) / len(lons))

    if not located:
        logger.warning("No located reports provided, creating empty map")
        return folium.Map(location=center or DEFAULT_MAP_CENTER, zoom_start=5)

    report_map = folium.Map(
        location=center,
        zoom_start=zoom,
        tiles="OpenStreetMap",
    )

    if cluster_markers:
        marker_group = MarkerCluster(name="Reports")
    else:
        marker_group = folium.FeatureGroup(name="Reports")

    for report in located:
        color = get_status_color(report.status)

        popup_html = f"""
        <div style="font-family: Arial; min-width: 180px;">
            <b>{html.escape(report.title)}</b><br>
            {html.escape(report.category)}<br>
            <b>Status:</b> {STATUS_LABELS.get(int(report.status), "Unknown")}<br>
            <b>Votes:</b> {report.vote_count}
        </div>
        """

        folium.CircleMarker(
            location=[report.location.latitude, report.location.longitude],
            radius=10,
            popup=folium.Popup(popup_html, max_width=300),
            color=color,
            fill=True,
            fill_color=color,
            fill_opacity=0.8,
            weight=2,
        ).add_to(marker_group)

    marker_group.add_to(report_map)

    if user_location is not None:
        folium.Marker(
            location=list(user_location.to_tuple()),
            tooltip="You are here",
            icon=folium.Icon(color="blue", icon="user"),
        ).add_to(report_map)

    title_html = f'''
    <div style="position: fixed;
                top: 10px; left: 50px;
                background-color: rgba(255,255,255,0.9);
                padding: 8px 16px;
                border-radius: 5px;
                z-index: 9999;
                font-family: Arial;">
        <h4 style="margin: 0;">{html.escape(title)}</h4>
        <p style="margin: 4px 0 0 0; color: #555; font-size: 12px;">
            {len(located)} reports
        </p>
    </div>
    '''
    report_map.get_root().html.add_child(folium.Element(title_html))

    legend_rows = "".join(
        f'<span style="color: {STATUS_COLORS[s]};">●</span> {label}<br>'
        for s, label in STATUS_LABELS.items()
    )
    legend_html = f'''
    <div style="position: fixed;
                bottom: 30px; right: 30px;
                background-color: rgba(255,255,255,0.9);
                padding: 10px;
                border-radius: 5px;
                z-index: 9999;
                font-family: Arial;
                font-size: 12px;">
        <b>Report Status</b><br>
        {legend_rows}
    </div>
    '''
    report_map.get_root().html.add_child(folium.Element(legend_html))

    logger.info(f"Created map with {len(located)} reports")
    return report_map


def save_report_map(
    reports: list,
    output_path: str = "reports_map.html",
    **kwargs,
) -> str:
    """
    Generate and save a report map.

    Returns:
        Path to saved file
    """
    report_map = create_report_map(reports, **kwargs)
    report_map.save(output_path)
    logger.info(f"Map saved to {output_path}")
    return output_path
