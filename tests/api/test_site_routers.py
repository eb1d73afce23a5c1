"""Unit tests for the map, layer and analytics routers."""
from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.routers.analytics import router as analytics_router
from app.routers.layers import router as layers_router
from app.routers.map import router as map_router
from atlas.context import SiteContext


def _make_app(site=None):
    app = FastAPI()
    app.include_router(map_router)
    app.include_router(layers_router)
    app.include_router(analytics_router)
    app.state.site = site
    return app


@pytest.fixture
def client(dataset):
    return TestClient(_make_app(SiteContext.build(dataset)))


@pytest.mark.unit
class TestNotLoaded:
    """Every endpoint answers 503 when the load failed."""

    @pytest.mark.parametrize("method, path", [
        ("get", "/api/map"),
        ("get", "/api/layers"),
        ("get", "/api/layers/routes"),
        ("post", "/api/layers/routes/toggle"),
        ("get", "/api/analytics/summary"),
        ("get", "/api/analytics/chart"),
    ])
    def test_503(self, method, path):
        """Data endpoints answer 503 before a site is loaded."""
        client = TestClient(_make_app(None))
        resp = getattr(client, method)(path)
        assert resp.status_code == 503


@pytest.mark.unit
class TestMapRouter:
    def test_map_config(self, client):
        """Map config."""
        resp = client.get("/api/map")
        assert resp.status_code == 200
        data = resp.json()
        assert data["center"] == [42.6410, 18.1094]
        assert data["zoom"] == 17
        assert data["tiles"]["subdomains"] == "abcd"
        assert data["tiles"]["maxZoom"] == 20


@pytest.mark.unit
class TestLayersRouter:
    def test_list_layers(self, client):
        """List layers."""
        resp = client.get("/api/layers")
        assert resp.status_code == 200
        layers = {entry["name"]: entry for entry in resp.json()}
        assert set(layers) == {"routes", "distance", "landmarks", "competitors", "subject"}
        assert layers["distance"]["visible"] is False
        assert layers["routes"]["visible"] is True
        assert layers["competitors"]["feature_count"] == 3

    def test_get_layer(self, client):
        """Get layer."""
        resp = client.get("/api/layers/landmarks")
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["features"]) == 2
        assert data["features"][0]["geometry"]["coordinates"] == [42.6417, 18.1063]

    def test_get_unknown_layer(self, client):
        """Get unknown layer."""
        assert client.get("/api/layers/nonexistent").status_code == 404

    def test_toggle_twice(self, client):
        """Toggle twice."""
        first = client.post("/api/layers/distance/toggle").json()
        assert first == {"name": "distance", "visible": True}
        second = client.post("/api/layers/distance/toggle").json()
        assert second == {"name": "distance", "visible": False}

    def test_toggle_unknown(self, client):
        """Toggle unknown."""
        resp = client.post("/api/layers/nonexistent/toggle")
        assert resp.status_code == 404
        assert "nonexistent" in resp.json()["detail"]


@pytest.mark.unit
class TestAnalyticsRouter:
    def test_summary(self, client):
        """Summary endpoint returns the aggregated figures."""
        data = client.get("/api/analytics/summary").json()
        assert data["subject_footfall"] == 62
        assert data["avg_competitor_footfall"] == 53
        assert data["primary_spine_count"] == 1
        assert data["primary_spine_avg_footfall"] == 80
        assert data["slots"]["avg-competitor-footfall"] == "53"

    def test_chart(self, client):
        """Chart endpoint returns competitors sorted by footfall."""
        data = client.get("/api/analytics/chart").json()
        assert data["values"] == [80, 50, 30]
        assert data["tooltips"][0] == "Footfall: 80 (primary spine)"
