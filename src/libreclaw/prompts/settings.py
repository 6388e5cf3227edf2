"""Agent-level prompt inputs read from config.yml.

The CLI and the preview service both build prompts for "the configured
agent". This module gathers the non-customization inputs they share
(workspace, docs path, model aliases, tools, runtime facts) from the
``agents.defaults`` block.
"""

import platform
import socket
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from libreclaw.utils.config import get_config_builder
from libreclaw.utils.logger import get_logger

from .context import ContextFile, RuntimeInfo
from .customization import format_model_alias_lines
from .workspace import DEFAULT_BOOTSTRAP_MAX_CHARS, load_workspace_context

logger = get_logger("prompts")

DEFAULT_WORKSPACE_DIR = "~/libreclaw"


def detect_runtime(agent_id: str | None = None, model: str | None = None) -> RuntimeInfo:
    """Runtime facts of the current process."""
    return RuntimeInfo(
        agent_id=agent_id,
        host=socket.gethostname(),
        os=platform.system(),
        arch=platform.machine(),
        python=platform.python_version(),
        model=model,
        default_model=model,
    )


@dataclass
class AgentPromptSettings:
    """Inputs for building the configured agent's prompt.

    Attributes:
        workspace_dir: Agent workspace (``~`` allowed)
        docs_path: Local docs path, or None
        model_alias_lines: Formatted alias lines
        bootstrap_max_chars: Per-file budget for injected bootstrap files
        inject_context_files: Whether to read bootstrap files from the workspace
        context_fields: Extra GenerationContext attributes
    """

    workspace_dir: str = DEFAULT_WORKSPACE_DIR
    docs_path: str | None = None
    model_alias_lines: list[str] = field(default_factory=list)
    bootstrap_max_chars: int = DEFAULT_BOOTSTRAP_MAX_CHARS
    inject_context_files: bool = True
    context_fields: dict[str, Any] = field(default_factory=dict)

    @property
    def resolved_workspace_dir(self) -> str:
        return str(Path(self.workspace_dir).expanduser())

    def load_context_files(self) -> tuple[ContextFile, ...]:
        """Read bootstrap files from the workspace.

        Raises:
            RuntimeEnvironmentError: If the workspace does not exist
        """
        if not self.inject_context_files:
            return ()
        return load_workspace_context(self.workspace_dir, max_chars=self.bootstrap_max_chars)

    @classmethod
    def from_config(cls, config_path: str | None = None) -> "AgentPromptSettings":
        """Read ``agents.defaults`` from config.yml; defaults when there is no config file."""
        try:
            config = get_config_builder(config_path)
        except FileNotFoundError:
            if config_path is not None:
                raise
            logger.debug("No config.yml found; using default agent prompt settings")
            return cls(context_fields={"runtime": detect_runtime()})

        defaults = config.get("agents.defaults", {}) or {}
        model = defaults.get("model")

        context_fields: dict[str, Any] = {"runtime": detect_runtime(defaults.get("id"), model)}
        if defaults.get("tools"):
            context_fields["tool_names"] = tuple(defaults["tools"])
        if defaults.get("userTimezone"):
            context_fields["user_timezone"] = defaults["userTimezone"]
        heartbeat = defaults.get("heartbeat") or {}
        if heartbeat.get("prompt"):
            context_fields["heartbeat_prompt"] = heartbeat["prompt"]

        return cls(
            workspace_dir=str(defaults.get("workspace") or DEFAULT_WORKSPACE_DIR),
            docs_path=defaults.get("docsPath"),
            model_alias_lines=format_model_alias_lines(defaults.get("modelAliases")),
            bootstrap_max_chars=int(defaults.get("bootstrapMaxChars", DEFAULT_BOOTSTRAP_MAX_CHARS)),
            inject_context_files=bool(defaults.get("injectContextFiles", True)),
            context_fields=context_fields,
        )
