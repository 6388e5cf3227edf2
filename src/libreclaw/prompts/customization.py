"""System prompt customization config and its validation boundary.

``SystemPromptConfig`` mirrors ``agents.defaults.systemPrompt`` in config.yml.
Field names are snake_case in Python and camelCase on the wire (YAML, JSON
preview requests); both spellings are accepted on input.

Validation happens here, before the engine runs. Unknown section ids in
``removeSections`` are rejected with a message that lists every valid id so
that config UIs and humans can correct the value without reading the code.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from libreclaw.utils.config import get_config_value
from libreclaw.utils.logger import get_logger

from .exceptions import ConfigValidationError
from .registry import get_section_registry
from .section_ids import SectionId

logger = get_logger("prompts")

SYSTEM_PROMPT_CONFIG_PATH = "agents.defaults.systemPrompt"
INVALID_SECTION_ID_MESSAGE = "Invalid system prompt section ID"


def invalid_section_id_message(value: Any) -> str:
    valid = ", ".join(get_section_registry().section_ids())
    return f"{INVALID_SECTION_ID_MESSAGE} '{value}'. Valid IDs: {valid}"


class SystemPromptConfig(BaseModel):
    """Operator customization of the generated system prompt.

    Attributes:
        mode: ``"default"`` wraps the generated prompt; ``"replace"`` swaps it
            for ``prepend`` but only together with ``allow_unsafe_replace``
        allow_unsafe_replace: Second gate for replace mode
        remove_sections: Section ids dropped from the generated prompt
        prepend: Text placed before the generated prompt (or the whole prompt
            in unlocked replace mode)
        append: Text placed after the generated prompt
        safety_style: Wording variant of the Safety section
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    mode: Literal["default", "replace"] = "default"
    allow_unsafe_replace: bool = False
    remove_sections: tuple[SectionId, ...] = Field(default=())
    prepend: str = ""
    append: str = ""
    safety_style: Literal["libreclaw", "openclaw"] = "libreclaw"

    @field_validator("remove_sections", mode="before")
    @classmethod
    def _check_section_ids(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str) or not isinstance(value, Iterable):
            raise ValueError("removeSections must be a list of section IDs")

        registry = get_section_registry()
        checked: list[SectionId] = []
        for item in value:
            if not registry.is_valid_section_id(item):
                raise ValueError(invalid_section_id_message(item))
            section_id = SectionId(item)
            if section_id not in checked:
                checked.append(section_id)
        return tuple(checked)

    @field_validator("prepend", "append", mode="before")
    @classmethod
    def _empty_text_for_none(cls, value: Any) -> Any:
        # YAML ``prepend:`` with no value loads as None
        return "" if value is None else value

    def to_wire(self) -> dict[str, Any]:
        """camelCase mapping suitable for YAML/JSON."""
        data = self.model_dump(by_alias=True)
        data["removeSections"] = [section.value for section in self.remove_sections]
        return data


def _format_issue(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "invalid value")
    # pydantic prefixes messages raised from validators
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return f"{location}: {message}" if location else message


def validate_system_prompt_config(data: Mapping[str, Any] | SystemPromptConfig | None) -> SystemPromptConfig:
    """Validate a raw customization mapping.

    Args:
        data: camelCase or snake_case mapping, an existing config, or None for defaults

    Returns:
        Validated SystemPromptConfig

    Raises:
        ConfigValidationError: With one issue per schema violation. Unknown
            section ids produce "Invalid system prompt section ID" plus the
            full list of valid ids.
    """
    if isinstance(data, SystemPromptConfig):
        return data
    if data is None:
        return SystemPromptConfig()
    if not isinstance(data, Mapping):
        raise ConfigValidationError(
            f"systemPrompt must be a mapping, got {type(data).__name__}",
            issues=[f"systemPrompt: expected a mapping, got {type(data).__name__}"],
        )

    try:
        return SystemPromptConfig.model_validate(dict(data))
    except ValidationError as e:
        issues = [_format_issue(error) for error in e.errors()]
        raise ConfigValidationError(
            "Invalid system prompt configuration:\n" + "\n".join(f"- {issue}" for issue in issues),
            issues=issues,
            technical_details={"input": dict(data)},
        ) from e


def merge_system_prompt_config(
    base: SystemPromptConfig | None, overrides: Mapping[str, Any]
) -> SystemPromptConfig:
    """Apply overrides (camelCase or snake_case keys) on top of ``base`` and revalidate.

    Keys whose value is None are ignored so callers can pass unset CLI options through.
    """
    merged = (base or SystemPromptConfig()).to_wire()
    for key, value in overrides.items():
        if value is None:
            continue
        merged[to_camel(key) if "_" in key else key] = value
    return validate_system_prompt_config(merged)


def load_system_prompt_config(config_path: str | None = None) -> SystemPromptConfig:
    """Read and validate ``agents.defaults.systemPrompt`` from config.yml.

    Missing block means defaults. A missing config file is not an error here;
    the engine works without one.

    Raises:
        ConfigValidationError: If the configured block is invalid
    """
    try:
        raw = get_config_value(SYSTEM_PROMPT_CONFIG_PATH, None, config_path)
    except FileNotFoundError:
        if config_path is not None:
            raise
        logger.debug("No config.yml found; using default system prompt customization")
        raw = None
    return validate_system_prompt_config(raw)


def format_model_alias_lines(aliases: Mapping[str, str] | None) -> list[str]:
    """Turn ``{alias: provider/model}`` into sorted ``- Alias: provider/model`` lines."""
    if not aliases:
        return []
    lines = []
    for alias in sorted(aliases, key=str.lower):
        model = str(aliases[alias] or "").strip()
        if alias.strip() and model:
            lines.append(f"- {alias.strip()}: {model}")
    return lines
