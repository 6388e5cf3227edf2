"""Preview service test fixtures."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from libreclaw.interfaces.web.app import create_app
from libreclaw.prompts.context import RuntimeInfo
from libreclaw.prompts.settings import AgentPromptSettings


@pytest.fixture
def preview_settings(workspace):
    """Settings for an agent whose workspace holds a few bootstrap files."""
    return AgentPromptSettings(
        workspace_dir=str(workspace),
        docs_path="/srv/docs",
        model_alias_lines=["- Opus: anthropic/claude-opus-4-5"],
        context_fields={
            "tool_names": ("read", "message"),
            "runtime": RuntimeInfo(agent_id="main", host="test-host"),
        },
    )


@pytest.fixture
def app(preview_settings):
    return create_app(settings=preview_settings)


@pytest.fixture
def client(app):
    """Synchronous test client for the preview service."""
    return TestClient(app)
