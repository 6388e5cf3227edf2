"""System prompt engine.

Builds the agent system prompt from a closed catalogue of sections and applies
operator customizations.

Key Components:
    - **SectionId / SectionRegistry**: the ordered catalogue of addressable sections
    - **SectionPromptBuilder**: base class for one titled section
    - **assemble**: renders all applicable sections in registry order
    - **remove_sections**: heading-aware removal of top-level sections
    - **build_agent_system_prompt**: validation, assembly, filtering and composition
    - **SystemPromptConfig**: the ``agents.defaults.systemPrompt`` customization block

Examples:
    Building a prompt for a workspace::

        from libreclaw.prompts import build_agent_system_prompt, load_workspace_context

        files = load_workspace_context("~/libreclaw")
        prompt = build_agent_system_prompt(
            "~/libreclaw",
            context_files=files,
            system_prompt_config={"removeSections": ["heartbeats"]},
        )

    Listing valid section ids::

        from libreclaw.prompts import get_section_registry

        for entry in get_section_registry().catalogue():
            print(entry["id"], entry["title"])
"""

from .assembler import assemble
from .base import SectionPromptBuilder
from .composer import (
    CompositionState,
    build_agent_system_prompt,
    compose_system_prompt,
    resolve_composition_state,
)
from .context import ContextFile, GenerationContext, ReactionGuidance, RuntimeInfo, SandboxInfo
from .customization import (
    SystemPromptConfig,
    format_model_alias_lines,
    load_system_prompt_config,
    merge_system_prompt_config,
    validate_system_prompt_config,
)
from .exceptions import ConfigValidationError, PromptEngineError, RuntimeEnvironmentError
from .registry import SectionRegistry, get_section_registry
from .section_filter import remove_sections
from .section_ids import SectionId
from .workspace import load_workspace_context

__all__ = [
    "CompositionState",
    "ConfigValidationError",
    "ContextFile",
    "GenerationContext",
    "PromptEngineError",
    "ReactionGuidance",
    "RuntimeEnvironmentError",
    "RuntimeInfo",
    "SandboxInfo",
    "SectionId",
    "SectionPromptBuilder",
    "SectionRegistry",
    "SystemPromptConfig",
    "assemble",
    "build_agent_system_prompt",
    "compose_system_prompt",
    "format_model_alias_lines",
    "get_section_registry",
    "load_system_prompt_config",
    "load_workspace_context",
    "merge_system_prompt_config",
    "remove_sections",
    "resolve_composition_state",
    "validate_system_prompt_config",
]
