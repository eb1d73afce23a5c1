"""Unit tests for app.main — router registration and the startup load."""
from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from app import main as app_main


@pytest.fixture
def configured(monkeypatch, tmp_path, site_document):
    path = tmp_path / "site.json"
    path.write_text(json.dumps(site_document), encoding="utf-8")
    monkeypatch.setattr(app_main.settings, "dataset_source", str(path))
    return path


@pytest.mark.unit
class TestAppMain:
    def test_routes_registered(self):
        """Every public endpoint appears in the OpenAPI schema."""
        paths = app_main.app.openapi()["paths"]
        assert "/health" in paths
        assert "/api/layers" in paths
        assert "/api/layers/{name}/toggle" in paths
        assert "/api/analytics/summary" in paths
        assert "/api/map" in paths

    def test_lifespan_loads_site(self, configured):
        """A valid dataset file is loaded once at startup."""
        with TestClient(app_main.app) as client:
            assert client.get("/health").json() == {"status": "ok", "loaded": True}
            assert client.get("/api/analytics/summary").json()["primary_spine_count"] == 1

    def test_lifespan_load_failure(self, monkeypatch, tmp_path):
        """A missing dataset leaves the app up but every data endpoint 503."""
        monkeypatch.setattr(app_main.settings, "dataset_source", str(tmp_path / "missing.json"))
        with TestClient(app_main.app) as client:
            assert client.get("/health").json()["loaded"] is False
            assert client.get("/api/layers").status_code == 503

    def test_lifespan_non_utf8_dataset(self, monkeypatch, tmp_path):
        """An undecodable dataset file is a load failure, not a startup crash."""
        path = tmp_path / "site.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        monkeypatch.setattr(app_main.settings, "dataset_source", str(path))
        with TestClient(app_main.app) as client:
            assert client.get("/health").json()["loaded"] is False
            assert client.get("/api/analytics/summary").status_code == 503

    def test_lifespan_malformed_url(self, monkeypatch):
        """A malformed dataset URL is a load failure, not a startup crash."""
        monkeypatch.setattr(app_main.settings, "dataset_source", "http://[::1")
        with TestClient(app_main.app) as client:
            assert client.get("/api/map").status_code == 503

    def test_excluded_entities_warned_once(self, monkeypatch, tmp_path, site_document,
                                           warnings_logged):
        """Startup does not repeat the per-entity exclusion warnings."""
        del site_document["competitors"][1]["footfall"]
        path = tmp_path / "site.json"
        path.write_text(json.dumps(site_document), encoding="utf-8")
        monkeypatch.setattr(app_main.settings, "dataset_source", str(path))
        with TestClient(app_main.app) as client:
            assert client.get("/health").json()["loaded"] is True
        assert len([m for m in warnings_logged if "competitor #1" in m]) == 1
