"""Tests for the preview service app factory."""

from __future__ import annotations

from fastapi import FastAPI

from libreclaw import __version__
from libreclaw.interfaces.web.app import create_app
from libreclaw.prompts.settings import DEFAULT_WORKSPACE_DIR


class TestCreateApp:
    """Test app construction and settings resolution."""

    def test_returns_fastapi_app(self, app, preview_settings):
        assert isinstance(app, FastAPI)
        assert app.title == "LibreClaw System Prompt Preview"
        assert app.state.preview_settings is preview_settings

    def test_routes_registered(self, app):
        paths = {route.path for route in app.routes}
        assert "/api/system-prompt/preview" in paths
        assert "/api/system-prompt/sections" in paths
        assert "/health" in paths

    def test_settings_from_config_file(self, write_config, workspace):
        path = write_config({"agents": {"defaults": {"workspace": str(workspace), "docsPath": "/d"}}})
        app = create_app(config_path=path)
        assert app.state.preview_settings.workspace_dir == str(workspace)
        assert app.state.preview_settings.docs_path == "/d"

    def test_default_settings_without_config(self):
        app = create_app()
        assert app.state.preview_settings.workspace_dir == DEFAULT_WORKSPACE_DIR


class TestHealthEndpoint:
    """Test GET /health."""

    def test_health(self, client, workspace):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "version": __version__,
            "sections": 25,
            "workspace": str(workspace),
        }

    def test_cors_headers(self, client):
        response = client.get("/health", headers={"Origin": "http://localhost:5173"})
        assert "access-control-allow-origin" in response.headers
