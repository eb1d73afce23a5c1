"""Tests for the render-ready group export."""

import json

import pytest

from atlas.layers import build_layers
from atlas.layers.export import export_group


@pytest.fixture
def groups(dataset):
    return build_layers(dataset).groups


@pytest.mark.unit
class TestExportGroup:
    def test_route_group(self, groups):
        """Route group."""
        data = export_group(groups["routes"])
        assert data["name"] == "routes"
        assert data["visible"] is True
        first = data["features"][0]
        assert first["geometry"] == {
            "type": "LineString",
            "coordinates": [[42.6417, 18.1067], [42.6410, 18.1105]],
        }
        assert first["style"]["color"] == "#ef4444"
        assert first["tooltip"]["text"] == "Stradun"

    def test_band_has_radius(self, groups):
        """Band has radius."""
        band = export_group(groups["distance"])["features"][0]
        assert band["radius"] == 500
        assert band["popup"] is None

    def test_subject_has_icon_and_z_offset(self, groups):
        """Subject has icon and z offset."""
        subject = export_group(groups["subject"])["features"][0]
        assert subject["icon"]["class_name"] == "subject-marker"
        assert subject["zIndexOffset"] == 1000
        assert subject["style"] is None

    def test_json_serializable(self, groups):
        """Json serializable."""
        for group in groups.values():
            json.dumps(export_group(group))
