"""
Tests for report map generation
"""
import folium

import sys
sys.path.insert(0, '.')

from src.core.geo_utils import Coordinate
from src.visualization.map_generator import (
    create_report_map,
    get_status_color,
    save_report_map,
)


class TestReportMap:
    """Test suite for the folium report map."""

    def test_status_colors(self):
        assert get_status_color(0) == "gray"
        assert get_status_color(3) == "green"
        assert get_status_color(42) == "red"

    def test_map_with_reports(self, sample_reports):
        report_map = create_report_map(sample_reports, title="Pune issues")

        html = report_map.get_root().render()

        assert isinstance(report_map, folium.Map)
        assert "Pune issues" in html
        assert "3 reports" in html
        assert "Deep pothole near signal" in html

    def test_empty_map(self):
        report_map = create_report_map([])

        assert isinstance(report_map, folium.Map)

    def test_user_location_marker(self, sample_reports, pune):
        report_map = create_report_map(sample_reports, user_location=pune)

        assert "You are here" in report_map.get_root().render()

    def test_unset_locations_are_skipped(self, sample_reports):
        sample_reports[0].location = Coordinate(0, 0)

        html = create_report_map(sample_reports).get_root().render()

        assert "2 reports" in html

    def test_save(self, sample_reports, tmp_path):
        output = tmp_path / "map.html"

        path = save_report_map(sample_reports, output_path=str(output))

        assert path == str(output)
        assert output.exists()
