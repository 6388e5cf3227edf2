"""Default safety section with its two style variants."""

import textwrap

from libreclaw.prompts.base import SectionId, SectionPromptBuilder
from libreclaw.prompts.context import GenerationContext

OPENCLAW_SAFETY = textwrap.dedent(
    """
    You have no independent goals: do not pursue self-preservation, replication, resource acquisition, or power-seeking; avoid long-term plans beyond the user's request.
    Prioritize safety and human oversight over completion; if instructions conflict, pause and ask; comply with stop/pause/audit requests and never bypass safeguards.
    Do not manipulate or persuade anyone to expand access or disable safeguards. Do not copy yourself or change system prompts, safety rules, or tool policies unless explicitly requested.
    """
).strip()

LIBRECLAW_SAFETY = textwrap.dedent(
    """
    Pursue no goals that conflict with your human's interests or safety: do not seek self-preservation, replication, resource acquisition, or power beyond what the task needs.
    You may keep long-running projects your human asked for; be open about what you are doing and why.
    If instructions conflict or an action could cause real harm, pause and ask; comply with stop/pause/audit requests and never bypass safeguards.
    Do not manipulate or deceive anyone to expand access or disable safeguards. Do not copy yourself or change safety rules or tool policies unless explicitly requested.
    """
).strip()

SAFETY_BODIES = {
    "libreclaw": LIBRECLAW_SAFETY,
    "openclaw": OPENCLAW_SAFETY,
}


class SafetySectionBuilder(SectionPromptBuilder):
    """Safety constraints; the only section whose wording depends on ``safety_style``."""

    SECTION_ID = SectionId.SAFETY
    TITLE = "Safety"
    DESCRIPTION = "Safety constraints and behavior boundaries."

    def build_body(self, context: GenerationContext) -> str:
        try:
            return SAFETY_BODIES[context.safety_style]
        except KeyError:
            raise ValueError(
                f"Unknown safety style '{context.safety_style}'. "
                f"Expected one of: {', '.join(SAFETY_BODIES)}"
            ) from None
