"""
Pytest configuration and shared test utilities.

This module provides shared fixtures for all LibreClaw tests: an isolated
configuration environment, agent workspaces and a deterministic generation
context.
"""

from pathlib import Path

import pytest
import yaml

from libreclaw.prompts.context import ContextFile, RuntimeInfo, build_generation_context
from libreclaw.utils.config import reset_config_cache

# ===================================================================
# Configuration Isolation
# ===================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run every test without a config file unless the test writes one.

    The config singleton is cached per process, so it is reset before and
    after each test and CONFIG_FILE is removed from the environment.
    """
    monkeypatch.delenv("CONFIG_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture
def write_config(tmp_path):
    """Write a config.yml into the (current) temp directory and return its path."""

    def _write(data: dict, name: str = "config.yml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data, sort_keys=False))
        reset_config_cache()
        return path

    return _write


# ===================================================================
# Workspaces
# ===================================================================


@pytest.fixture
def workspace(tmp_path):
    """Agent workspace with a few bootstrap files, one containing its own headings."""
    root = tmp_path / "workspace"
    root.mkdir()
    (root / "AGENTS.md").write_text(
        "# Agent Rules\n\n## Every Session\nRead SOUL.md first.\n\n### Details\nKeep notes."
    )
    (root / "SOUL.md").write_text("Be warm and direct.")
    (root / "TOOLS.md").write_text("Camera: use the `nodes` tool.")
    return root


# ===================================================================
# Generation Context Factory
# ===================================================================


def create_test_context(workspace_dir: str = "/srv/agent", **overrides):
    """Factory for generation contexts with deterministic runtime facts.

    Args:
        workspace_dir: Workspace path rendered into the Workspace section
        **overrides: Any ``build_generation_context`` keyword

    Examples:
        Context with injected files::

            ctx = create_test_context(
                context_files=[{"path": "/srv/agent/AGENTS.md", "content": "# Rules"}]
            )
    """
    overrides.setdefault(
        "runtime",
        RuntimeInfo(agent_id="main", host="test-host", os="Linux", arch="x86_64", python="3.12.0"),
    )
    return build_generation_context(workspace_dir, **overrides)


@pytest.fixture
def make_context():
    """Provide the generation context factory to tests."""
    return create_test_context


SAMPLE_CONTEXT_FILES = (
    ContextFile(
        path="/srv/agent/AGENTS.md",
        content="# Agent Rules\n\n## Every Session\nRead SOUL.md first.\n\n### Details\nKeep notes.",
    ),
    ContextFile(path="/srv/agent/SOUL.md", content="Be warm and direct."),
)


@pytest.fixture
def full_context_kwargs():
    """Keyword arguments that make every conditional section render."""
    return {
        "context_files": SAMPLE_CONTEXT_FILES,
        "docs_path": "/srv/agent/docs",
        "model_alias_lines": ["- Opus: anthropic/claude-opus-4-5"],
        "tool_names": ["read", "exec", "message", "memory_search", "gateway", "sessions_spawn"],
        "skills_prompt": "<available_skills></available_skills>",
        "owner_lines": ["+15555550123"],
        "user_timezone": "Europe/Berlin",
        "sandbox": {"enabled": True, "container_workspace_dir": "/workspace", "workspace_access": "rw"},
        "reply_tags_enabled": True,
        "tts_hint": "Keep spoken replies short.",
        "extra_system_prompt": "You are in the #general group.",
        "subagent_context": "Summarize the logs.",
        "reaction_guidance": {"level": "minimal", "channel": "telegram"},
        "reasoning_tag_hint": True,
        "heartbeat_prompt": "Check HEARTBEAT.md",
        "runtime": RuntimeInfo(
            agent_id="main",
            host="test-host",
            os="Linux",
            arch="x86_64",
            python="3.12.0",
            channel="telegram",
            capabilities=("inlineButtons",),
        ),
    }


@pytest.fixture
def full_context(full_context_kwargs):
    """Generation context in which all 25 sections render."""
    return create_test_context(**full_context_kwargs)
