"""
Customization composer: the public entry point for building the agent system prompt.

The composer picks one of three composition states from the customization
config, then either wraps the filtered generated prompt with prepend/append
text or, in unlocked replace mode, returns the operator's text verbatim.

Replace mode needs two independent switches (``mode: replace`` and
``allowUnsafeReplace: true``). With only the first set, the config is
treated as default mode and a warning is logged.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from libreclaw.utils.logger import get_logger

from .assembler import join_sections, render_sections
from .base import debug_print_prompt
from .context import build_generation_context
from .customization import SystemPromptConfig, validate_system_prompt_config
from .section_filter import remove_section_blocks, remove_sections

logger = get_logger("prompts")

SEGMENT_JOINER = "\n\n"


class CompositionState(Enum):
    """How the final prompt is composed.

    Attributes:
        DEFAULT: prepend + filtered generated prompt + append
        REPLACE_UNLOCKED: prepend text is the whole prompt
        REPLACE_BLOCKED: replace requested without the unsafe flag; behaves as DEFAULT
    """

    DEFAULT = "default"
    REPLACE_UNLOCKED = "replace_unlocked"
    REPLACE_BLOCKED = "replace_blocked"

    @property
    def uses_generated_prompt(self) -> bool:
        return self is not CompositionState.REPLACE_UNLOCKED


def resolve_composition_state(config: SystemPromptConfig) -> CompositionState:
    """Map a customization config to its composition state (pure function)."""
    if config.mode == "replace":
        if config.allow_unsafe_replace:
            return CompositionState.REPLACE_UNLOCKED
        return CompositionState.REPLACE_BLOCKED
    return CompositionState.DEFAULT


def join_segments(*segments: str) -> str:
    """Join non-empty segments with a blank line; empty segments drop with their joiner."""
    return SEGMENT_JOINER.join(segment for segment in segments if segment)


def compose_system_prompt(generated_prompt: str, config: SystemPromptConfig) -> str:
    """Apply a customization config to an already assembled prompt.

    Section removal here scans the text, see
    :func:`libreclaw.prompts.section_filter.remove_sections`.

    Args:
        generated_prompt: Output of :func:`libreclaw.prompts.assembler.assemble`
        config: Validated customization

    Returns:
        The final prompt text
    """
    if resolve_composition_state(config) is CompositionState.REPLACE_UNLOCKED:
        return config.prepend
    return _wrap_body(remove_sections(generated_prompt, config.remove_sections), config)


def _wrap_body(body: str, config: SystemPromptConfig) -> str:
    if resolve_composition_state(config) is CompositionState.REPLACE_BLOCKED:
        logger.warning(
            "systemPrompt.mode is 'replace' but allowUnsafeReplace is false; "
            "keeping the generated prompt"
        )
    return join_segments(config.prepend, body, config.append)


def build_agent_system_prompt(
    workspace_dir: str,
    *,
    context_files=None,
    docs_path: str | None = None,
    model_alias_lines=None,
    system_prompt_config: SystemPromptConfig | Mapping[str, Any] | None = None,
    **context_fields,
) -> str:
    """Build the complete agent system prompt.

    This is the engine's single entry point: it validates the customization,
    assembles every applicable section in registry order, removes configured
    sections and applies prepend/append (or the guarded full replace).

    :param workspace_dir: Agent workspace path rendered into the Workspace section
    :type workspace_dir: str
    :param context_files: Ordered ContextFile objects or ``{"path", "content"}`` mappings
    :param docs_path: Local documentation path; enables the Documentation section
    :type docs_path: Optional[str]
    :param model_alias_lines: Preformatted ``- Alias: provider/model`` lines
    :param system_prompt_config: SystemPromptConfig, raw mapping, or None for defaults
    :param context_fields: Any other GenerationContext attribute (``tool_names``,
        ``runtime``, ``sandbox``, ...). The safety style comes only from
        ``safetyStyle`` in ``system_prompt_config``
    :return: Final system prompt
    :rtype: str
    :raises ConfigValidationError: If ``system_prompt_config`` is a mapping that fails validation
    :raises TypeError: If ``safety_style`` is passed as a context field

    Examples:
        Default composition::

            prompt = build_agent_system_prompt(
                "/srv/agent",
                system_prompt_config={"prepend": "Be brief.", "removeSections": ["heartbeats"]},
            )

        Full replace (both gates set)::

            prompt = build_agent_system_prompt(
                "/srv/agent",
                system_prompt_config={
                    "mode": "replace",
                    "allowUnsafeReplace": True,
                    "prepend": "You are a terse assistant.",
                },
            )
            assert prompt == "You are a terse assistant."
    """
    if "safety_style" in context_fields:
        raise TypeError(
            "build_agent_system_prompt() does not accept safety_style; "
            "set safetyStyle in system_prompt_config instead"
        )

    config = validate_system_prompt_config(system_prompt_config)
    state = resolve_composition_state(config)

    if state.uses_generated_prompt:
        context = build_generation_context(
            workspace_dir,
            context_files=context_files,
            docs_path=docs_path,
            model_alias_lines=model_alias_lines,
            safety_style=config.safety_style,
            **context_fields,
        )
        blocks = remove_section_blocks(render_sections(context), config.remove_sections)
        prompt = _wrap_body(join_sections(blocks), config)
    else:
        logger.info("Unsafe replace mode active; generated system prompt discarded")
        prompt = config.prepend

    logger.debug(
        f"Built system prompt: state={state.value}, removed={len(config.remove_sections)}, "
        f"chars={len(prompt)}"
    )
    debug_print_prompt(prompt, "agent_system_prompt", "build_agent_system_prompt")
    return prompt
