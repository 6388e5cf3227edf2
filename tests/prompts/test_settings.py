"""Tests for generation context building and agent prompt settings."""

import dataclasses

import pytest

from libreclaw.prompts import (
    ContextFile,
    GenerationContext,
    ReactionGuidance,
    RuntimeEnvironmentError,
    RuntimeInfo,
    SandboxInfo,
)
from libreclaw.prompts.context import build_generation_context, coerce_context_files
from libreclaw.prompts.settings import DEFAULT_WORKSPACE_DIR, AgentPromptSettings, detect_runtime


class TestBuildGenerationContext:
    """Test conversion of loosely typed inputs."""

    def test_defaults(self):
        context = build_generation_context("/ws")
        assert context.workspace_dir == "/ws"
        assert context.context_files == ()
        assert context.sandbox == SandboxInfo()
        assert context.runtime == RuntimeInfo()
        assert context.safety_style == "libreclaw"

    def test_mappings_and_lists_converted(self):
        context = build_generation_context(
            "/ws",
            context_files=[{"path": "/ws/A.md", "content": "a"}],
            model_alias_lines=["- A: b/c"],
            tool_names=["read"],
            owner_lines="+1555",
            sandbox={"enabled": True},
            reaction_guidance={"level": "extensive"},
            runtime={"host": "h", "capabilities": ["x", "y"]},
        )
        assert context.context_files == (ContextFile("/ws/A.md", "a"),)
        assert context.model_alias_lines == ("- A: b/c",)
        assert context.tool_names == ("read",)
        assert context.owner_lines == ("+1555",)
        assert context.sandbox.enabled is True
        assert context.reaction_guidance == ReactionGuidance(level="extensive", channel="chat")
        assert context.runtime.capabilities == ("x", "y")

    def test_unknown_field_rejected(self):
        with pytest.raises(TypeError):
            build_generation_context("/ws", unknown=True)

    def test_context_is_immutable(self):
        context = build_generation_context("/ws")
        with pytest.raises(dataclasses.FrozenInstanceError):
            context.workspace_dir = "/other"

    def test_with_safety_style(self):
        context = build_generation_context("/ws")
        assert context.with_safety_style("libreclaw") is context
        switched = context.with_safety_style("openclaw")
        assert switched.safety_style == "openclaw"
        assert context.safety_style == "libreclaw"

    def test_has_tool(self):
        context = build_generation_context("/ws", tool_names=("read", "exec"))
        assert context.has_tool("exec")
        assert not context.has_tool("message")

    def test_coerce_context_files_keeps_objects(self):
        item = ContextFile("/a", "b")
        assert coerce_context_files([item]) == (item,)
        assert coerce_context_files(None) == ()

    def test_generation_context_requires_workspace(self):
        with pytest.raises(TypeError):
            GenerationContext()


class TestDetectRuntime:
    """Test runtime fact detection."""

    def test_fills_host_facts(self):
        runtime = detect_runtime("main", "anthropic/claude-opus-4-5")
        assert runtime.agent_id == "main"
        assert runtime.model == runtime.default_model == "anthropic/claude-opus-4-5"
        assert runtime.host
        assert runtime.python


class TestAgentPromptSettings:
    """Test reading agents.defaults from config.yml."""

    def test_defaults_without_config_file(self):
        settings = AgentPromptSettings.from_config()
        assert settings.workspace_dir == DEFAULT_WORKSPACE_DIR
        assert settings.docs_path is None
        assert settings.model_alias_lines == []
        assert isinstance(settings.context_fields["runtime"], RuntimeInfo)

    def test_explicit_missing_config_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AgentPromptSettings.from_config(str(tmp_path / "missing.yml"))

    def test_reads_agent_defaults(self, write_config, workspace):
        write_config(
            {
                "agents": {
                    "defaults": {
                        "id": "main",
                        "model": "anthropic/claude-opus-4-5",
                        "workspace": str(workspace),
                        "docsPath": "/docs",
                        "modelAliases": {"Opus": "anthropic/claude-opus-4-5"},
                        "bootstrapMaxChars": 500,
                        "tools": ["read", "message"],
                        "userTimezone": "UTC",
                        "heartbeat": {"prompt": "ping"},
                    }
                }
            }
        )
        settings = AgentPromptSettings.from_config()
        assert settings.workspace_dir == str(workspace)
        assert settings.docs_path == "/docs"
        assert settings.model_alias_lines == ["- Opus: anthropic/claude-opus-4-5"]
        assert settings.bootstrap_max_chars == 500
        assert settings.context_fields["tool_names"] == ("read", "message")
        assert settings.context_fields["user_timezone"] == "UTC"
        assert settings.context_fields["heartbeat_prompt"] == "ping"
        assert settings.context_fields["runtime"].agent_id == "main"

    def test_resolved_workspace_dir_expands_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert AgentPromptSettings(workspace_dir="~/agent").resolved_workspace_dir == str(tmp_path / "agent")

    def test_load_context_files(self, workspace):
        settings = AgentPromptSettings(workspace_dir=str(workspace))
        assert len(settings.load_context_files()) == 3

    def test_load_context_files_disabled(self, tmp_path):
        settings = AgentPromptSettings(workspace_dir=str(tmp_path / "missing"), inject_context_files=False)
        assert settings.load_context_files() == ()

    def test_load_context_files_missing_workspace(self, tmp_path):
        settings = AgentPromptSettings(workspace_dir=str(tmp_path / "missing"))
        with pytest.raises(RuntimeEnvironmentError):
            settings.load_context_files()
