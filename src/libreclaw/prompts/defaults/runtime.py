"""Default runtime section."""

from libreclaw.prompts.base import SectionId, SectionPromptBuilder
from libreclaw.prompts.context import GenerationContext


class RuntimeSectionBuilder(SectionPromptBuilder):
    """One ``Runtime:`` line of ``key=value`` facts plus the reasoning level."""

    SECTION_ID = SectionId.RUNTIME
    TITLE = "Runtime"
    DESCRIPTION = "Runtime environment details."

    def build_body(self, context: GenerationContext) -> str:
        runtime = context.runtime
        facts = []
        if runtime.agent_id:
            facts.append(f"agent={runtime.agent_id}")
        if runtime.host:
            facts.append(f"host={runtime.host}")
        if runtime.os:
            facts.append(f"os={runtime.os}" + (f" ({runtime.arch})" if runtime.arch else ""))
        elif runtime.arch:
            facts.append(f"arch={runtime.arch}")
        if runtime.python:
            facts.append(f"python={runtime.python}")
        if runtime.model:
            facts.append(f"model={runtime.model}")
        if runtime.default_model:
            facts.append(f"default_model={runtime.default_model}")
        if runtime.channel:
            facts.append(f"channel={runtime.channel}")
            capabilities = ",".join(runtime.capabilities) if runtime.capabilities else "none"
            facts.append(f"capabilities={capabilities}")
        facts.append(f"thinking={runtime.thinking}")

        return "\n".join(
            [
                f"Runtime: {' | '.join(facts)}",
                f"Reasoning: {'on' if runtime.thinking != 'off' else 'off'} "
                "(hidden unless on/stream). Toggle /reasoning; /status shows Reasoning when enabled.",
            ]
        )
