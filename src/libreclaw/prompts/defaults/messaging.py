"""Default conversation-surface sections.

Reply tags, messaging, voice, group chat, sub-agents, reactions, reasoning
format, silent replies and heartbeats.
"""

import textwrap

from libreclaw.prompts.base import SectionId, SectionPromptBuilder
from libreclaw.prompts.context import GenerationContext

SILENT_REPLY_TOKEN = "NO_REPLY"
HEARTBEAT_TOKEN = "HEARTBEAT_OK"


class ReplyTagsSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.REPLY_TAGS
    TITLE = "Reply Tags"
    DESCRIPTION = "Reply-tag behavior for native quote/reply surfaces."

    def build_body(self, context: GenerationContext) -> str | None:
        if not context.reply_tags_enabled:
            return None
        return textwrap.dedent(
            """
            To request a native reply/quote on supported surfaces, include one tag in your reply:
            - [[reply_to_current]] replies to the triggering message.
            - [[reply_to:<id>]] replies to a specific message id when you have it.
            Whitespace inside the tag is allowed (e.g. [[ reply_to_current ]] / [[ reply_to: 123 ]]).
            Tags are stripped before sending; support depends on the current channel config.
            """
        ).strip()


class MessagingSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.MESSAGING
    TITLE = "Messaging"
    DESCRIPTION = "Messaging routing and tool usage rules."

    def build_body(self, context: GenerationContext) -> str | None:
        if not context.has_tool("message"):
            return None
        lines = [
            "- Reply in current session: automatically routes to the source channel (Signal, Telegram, etc.)",
            "- Cross-session messaging: use sessions_send(sessionKey, message)",
            "- Never use exec/curl for provider messaging; OpenClaw handles all routing internally.",
            "",
            "### message tool",
            "- Use `message` for proactive sends + channel actions (polls, reactions, etc.).",
            "- For `action=send`, include `to` and `message`.",
            f"- If you use `message` (`action=send`) to deliver your user-visible reply, respond with ONLY: {SILENT_REPLY_TOKEN} (avoid duplicate replies).",
        ]
        if context.runtime.channel:
            lines.append(f"- Current channel: {context.runtime.channel}")
        return "\n".join(lines)


class VoiceTtsSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.VOICE_TTS
    TITLE = "Voice (TTS)"
    DESCRIPTION = "Voice and text-to-speech behavior."

    def build_body(self, context: GenerationContext) -> str | None:
        hint = (context.tts_hint or "").strip()
        return hint or None


class GroupChatContextSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.GROUP_CHAT_CONTEXT
    TITLE = "Group Chat Context"
    DESCRIPTION = "Group chat metadata and participation guidance."

    def build_body(self, context: GenerationContext) -> str | None:
        extra = (context.extra_system_prompt or "").strip()
        return extra or None


class SubagentContextSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.SUBAGENT_CONTEXT
    TITLE = "Subagent Context"
    DESCRIPTION = "Sub-agent orchestration context and guardrails."

    def build_body(self, context: GenerationContext) -> str | None:
        subagent = (context.subagent_context or "").strip()
        if not subagent:
            return None
        return "\n".join(
            [
                "You are a sub-agent spawned to complete one task. Stay on that task; do not start unrelated work.",
                "Your final message is delivered to the requesting session; make it a complete, self-contained result.",
                subagent,
            ]
        )


class ReactionsSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.REACTIONS
    TITLE = "Reactions"
    DESCRIPTION = "Reaction handling guidance."

    def build_body(self, context: GenerationContext) -> str | None:
        guidance = context.reaction_guidance
        if guidance is None:
            return None
        if guidance.level == "extensive":
            lines = [
                f"Reactions are enabled for {guidance.channel} in EXTENSIVE mode.",
                "Feel free to react liberally:",
                "- Acknowledge messages with appropriate emojis",
                "- Express sentiment and personality through reactions",
                "- React to interesting content, humor, or notable events",
                "- Use reactions to confirm understanding or agreement",
                "Guideline: react whenever it feels natural.",
            ]
        else:
            lines = [
                f"Reactions are enabled for {guidance.channel} in MINIMAL mode.",
                "React ONLY when truly relevant:",
                "- Acknowledge important user requests or confirmations",
                "- Express genuine sentiment (humor, appreciation) sparingly",
                "- Avoid reacting to routine messages or your own replies",
                "Guideline: at most 1 reaction per 5-10 exchanges.",
            ]
        return "\n".join(lines)


class ReasoningFormatSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.REASONING_FORMAT
    TITLE = "Reasoning Format"
    DESCRIPTION = "Reasoning/verbosity format requirements."

    def build_body(self, context: GenerationContext) -> str | None:
        if not context.reasoning_tag_hint:
            return None
        return textwrap.dedent(
            """
            ALL internal reasoning MUST be inside <think>...</think>.
            Do not output any analysis outside <think>.
            Format every reply as <think>...</think> then <final>...</final>, with no other text.
            Only the final user-visible reply may appear inside <final>.
            Only text inside <final> is shown to the user; everything else is discarded and never seen by the user.
            """
        ).strip()


class SilentRepliesSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.SILENT_REPLIES
    TITLE = "Silent Replies"
    DESCRIPTION = "When to respond with NO_REPLY."

    def build_body(self, context: GenerationContext) -> str:
        return textwrap.dedent(
            f"""
            When you have nothing to say, respond with ONLY: {SILENT_REPLY_TOKEN}
            ⚠️ Rules:
            - It must be your ENTIRE message - nothing else
            - Never append it to an actual response (never include "{SILENT_REPLY_TOKEN}" in real replies)
            - Never wrap it in markdown or code blocks
            ❌ Wrong: "Here's help... {SILENT_REPLY_TOKEN}"
            ❌ Wrong: "{SILENT_REPLY_TOKEN}"
            ✅ Right: {SILENT_REPLY_TOKEN}
            """
        ).strip()


class HeartbeatsSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.HEARTBEATS
    TITLE = "Heartbeats"
    DESCRIPTION = "Heartbeat poll acknowledgment behavior."

    def build_body(self, context: GenerationContext) -> str:
        heartbeat_prompt = (context.heartbeat_prompt or "").strip() or "(configured)"
        return "\n".join(
            [
                f"Heartbeat prompt: {heartbeat_prompt}",
                "If you receive a heartbeat poll (a user message matching the heartbeat prompt above), "
                "and there is nothing that needs attention, reply exactly:",
                HEARTBEAT_TOKEN,
                f'OpenClaw treats a leading/trailing "{HEARTBEAT_TOKEN}" as a heartbeat ack (and may discard it).',
                f'If something needs attention, do NOT include "{HEARTBEAT_TOKEN}"; reply with the alert text instead.',
            ]
        )
