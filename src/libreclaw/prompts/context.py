"""Read-only inputs consumed by section builders.

A GenerationContext is built once per prompt build and handed to every
section builder. Builders only read from it; nothing here touches the
filesystem or the clock, so identical contexts produce identical prompts.
"""

from dataclasses import dataclass, field, replace
from typing import Literal

SafetyStyle = Literal["libreclaw", "openclaw"]

SAFETY_STYLES: tuple[str, ...] = ("libreclaw", "openclaw")
DEFAULT_SAFETY_STYLE: SafetyStyle = "libreclaw"


@dataclass(frozen=True)
class ContextFile:
    """A workspace file injected into the prompt."""

    path: str
    content: str


@dataclass(frozen=True)
class SandboxInfo:
    """Sandbox runtime facts.

    Attributes:
        enabled: Whether tools run inside a sandbox container
        container_workspace_dir: Workspace mount point inside the container
        workspace_access: ``"rw"``, ``"ro"`` or ``"none"``
    """

    enabled: bool = False
    container_workspace_dir: str | None = None
    workspace_access: str | None = None


@dataclass(frozen=True)
class ReactionGuidance:
    """Reaction policy for the current channel."""

    level: Literal["minimal", "extensive"] = "minimal"
    channel: str = "chat"


@dataclass(frozen=True)
class RuntimeInfo:
    """Runtime environment details rendered into the Runtime section."""

    agent_id: str | None = None
    host: str | None = None
    os: str | None = None
    arch: str | None = None
    python: str | None = None
    model: str | None = None
    default_model: str | None = None
    channel: str | None = None
    capabilities: tuple[str, ...] = ()
    thinking: str = "off"


@dataclass(frozen=True)
class GenerationContext:
    """Everything a section builder may consume.

    Only ``workspace_dir`` is required. Empty/None values make the
    corresponding conditional sections drop out of the document.
    """

    workspace_dir: str
    context_files: tuple[ContextFile, ...] = ()
    docs_path: str | None = None
    model_alias_lines: tuple[str, ...] = ()
    tool_names: tuple[str, ...] = ()
    skills_prompt: str | None = None
    owner_lines: tuple[str, ...] = ()
    user_timezone: str | None = None
    current_time: str | None = None
    sandbox: SandboxInfo = field(default_factory=SandboxInfo)
    reply_tags_enabled: bool = False
    tts_hint: str | None = None
    extra_system_prompt: str | None = None
    subagent_context: str | None = None
    reaction_guidance: ReactionGuidance | None = None
    reasoning_tag_hint: bool = False
    heartbeat_prompt: str | None = None
    runtime: RuntimeInfo = field(default_factory=RuntimeInfo)
    safety_style: SafetyStyle = DEFAULT_SAFETY_STYLE

    def with_safety_style(self, safety_style: SafetyStyle) -> "GenerationContext":
        """Return a copy that renders the given safety style."""
        if safety_style == self.safety_style:
            return self
        return replace(self, safety_style=safety_style)

    def has_tool(self, name: str) -> bool:
        return name in self.tool_names


def coerce_context_files(files) -> tuple[ContextFile, ...]:
    """Accept ContextFile objects or ``{"path", "content"}`` mappings."""
    if not files:
        return ()
    coerced = []
    for item in files:
        if isinstance(item, ContextFile):
            coerced.append(item)
        else:
            coerced.append(ContextFile(path=str(item["path"]), content=str(item["content"])))
    return tuple(coerced)


def _as_tuple(value) -> tuple:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def build_generation_context(
    workspace_dir: str,
    *,
    context_files=None,
    docs_path: str | None = None,
    model_alias_lines=None,
    safety_style: SafetyStyle = DEFAULT_SAFETY_STYLE,
    **fields,
) -> GenerationContext:
    """Build a GenerationContext from loosely-typed caller parameters.

    Lists become tuples and ``sandbox``, ``runtime`` and ``reaction_guidance``
    may be given as plain mappings.

    Raises:
        TypeError: If ``fields`` names an unknown context attribute
    """
    for name in ("tool_names", "owner_lines"):
        if name in fields:
            fields[name] = _as_tuple(fields[name])
    if isinstance(fields.get("sandbox"), dict):
        fields["sandbox"] = SandboxInfo(**fields["sandbox"])
    if isinstance(fields.get("reaction_guidance"), dict):
        fields["reaction_guidance"] = ReactionGuidance(**fields["reaction_guidance"])
    if isinstance(fields.get("runtime"), dict):
        runtime = dict(fields["runtime"])
        if "capabilities" in runtime:
            runtime["capabilities"] = _as_tuple(runtime["capabilities"])
        fields["runtime"] = RuntimeInfo(**runtime)

    return GenerationContext(
        workspace_dir=str(workspace_dir),
        context_files=coerce_context_files(context_files),
        docs_path=docs_path,
        model_alias_lines=_as_tuple(model_alias_lines),
        safety_style=safety_style,
        **fields,
    )
