"""
Base class for system prompt section builders.

Every addressable section of the agent system prompt is produced by one
SectionPromptBuilder subclass. A builder owns three pieces of metadata (its
stable id, the heading title it renders under, and a human-readable
description for the section catalogue) plus a single hook, ``build_body``,
that turns a GenerationContext into body text. Returning None or an empty
string means the section has nothing to contribute and is left out of the
document entirely.
"""

import os
import textwrap
from abc import ABC, abstractmethod
from datetime import datetime
from typing import ClassVar

from libreclaw.prompts.context import GenerationContext
from libreclaw.prompts.section_ids import SectionId
from libreclaw.utils.config import get_agent_dir, get_config_value
from libreclaw.utils.logger import get_logger

logger = get_logger("prompts")

SECTION_HEADING_PREFIX = "## "


class SectionPromptBuilder(ABC):
    """Abstract base class for one titled section of the system prompt.

    Subclasses declare ``SECTION_ID``, ``TITLE`` and ``DESCRIPTION`` and
    implement :meth:`build_body`. The base class handles heading rendering so
    every section follows the same ``## Title`` convention the section filter
    relies on.

    :raises NotImplementedError: If build_body() is not implemented

    .. warning::
       ``TITLE`` must be unique across all registered builders; the section
       filter maps heading lines back to ids by title.

    Examples:
        Always-present section::

            class RuntimeSectionBuilder(SectionPromptBuilder):
                SECTION_ID = SectionId.RUNTIME
                TITLE = "Runtime"
                DESCRIPTION = "Runtime environment details."

                def build_body(self, context):
                    return f"Runtime: host={context.runtime.host}"

        Conditional section::

            class DocumentationSectionBuilder(SectionPromptBuilder):
                ...
                def build_body(self, context):
                    if not context.docs_path:
                        return None
                    return f"OpenClaw docs: {context.docs_path}"

    .. seealso::
       :class:`libreclaw.prompts.registry.SectionRegistry` : Ordered catalogue of builders
       :func:`libreclaw.prompts.assembler.assemble` : Renders every builder in order
    """

    SECTION_ID: ClassVar[SectionId]
    TITLE: ClassVar[str]
    DESCRIPTION: ClassVar[str] = ""

    @abstractmethod
    def build_body(self, context: GenerationContext) -> str | None:
        """Produce the section body for the given context.

        :param context: Read-only generation inputs
        :type context: GenerationContext
        :return: Body text, or None/empty when the section does not apply
        :rtype: Optional[str]
        """
        pass

    @property
    def section_id(self) -> SectionId:
        return self.SECTION_ID

    def heading(self) -> str:
        """Return the level-1 heading line for this section."""
        return f"{SECTION_HEADING_PREFIX}{self.TITLE}"

    def render(self, context: GenerationContext) -> str:
        """Render heading plus body, or an empty string if there is no body.

        :param context: Read-only generation inputs
        :type context: GenerationContext
        :return: ``"## " + title + "\\n" + body`` or ``""``
        :rtype: str
        """
        body = self.build_body(context)
        if not body or not body.strip():
            return ""
        body = body.strip("\n")
        return f"{self.heading()}\n{body}"

    def describe(self) -> dict[str, str]:
        """Catalogue entry for this section."""
        return {"id": self.SECTION_ID.value, "title": self.TITLE, "description": self.DESCRIPTION}


def debug_print_prompt(prompt: str, name: str, builder_class: str | None = None) -> None:
    """Output an assembled prompt for debugging.

    Controlled by the ``development.prompts`` configuration block:

    - show_all: log the prompt with separators
    - print_all: write the prompt to ``development.prompts_dir``
    - latest_only: ``<name>_latest.md`` instead of timestamped files

    Without a config file debug output is disabled. Any other failure is
    logged as a warning so that debugging never breaks prompt generation.

    :param prompt: The complete prompt text
    :type prompt: str
    :param name: Descriptive name, used in log output and filename
    :type name: str
    :param builder_class: Optional name of the producing component
    :type builder_class: Optional[str]

    Examples:
        Enable in config.yml::

            development:
              prompts:
                show_all: true
                print_all: true
                latest_only: false
    """
    try:
        prompts_config = get_config_value("development.prompts", {}) or {}
    except FileNotFoundError:
        return

    try:
        if prompts_config.get("show_all", False):
            builder_info = f" ({builder_class})" if builder_class else ""

            logger.info(f"\n{'='*80}")
            logger.info(f"🔍 DEBUG PROMPT: {name}{builder_info}")
            logger.info(f"{'='*80}")
            logger.info(prompt)
            logger.info(f"{'='*80}\n")

        if prompts_config.get("print_all", False):
            prompts_dir = get_agent_dir("prompts_dir")
            os.makedirs(prompts_dir, exist_ok=True)

            latest_only = prompts_config.get("latest_only", True)
            if latest_only:
                filename = f"{name}_latest.md"
            else:
                timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
                filename = f"{name}_{timestamp}.md"

            prompt_file_path = os.path.join(prompts_dir, filename)

            timestamp_str = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            header = textwrap.dedent(
                f"""
                # PROMPT METADATA
                # Generated: {timestamp_str}
                # Name: {name}
                # Builder: {builder_class or 'Unknown'}
                # File: {prompt_file_path}
                # Latest Only: {latest_only}
                """
            ).strip()

            with open(prompt_file_path, "w") as f:
                f.write(header + "\n\n\n" + prompt)
            logger.debug(f"Prompt written to {prompt_file_path}")

    except Exception as e:
        logger.warning(f"Error displaying prompt: {e}")
