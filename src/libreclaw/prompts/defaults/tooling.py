"""Default tool-related sections: tooling, call style, CLI, skills, memory, self-update."""

import textwrap

from libreclaw.prompts.base import SectionId, SectionPromptBuilder
from libreclaw.prompts.context import GenerationContext

TOOL_SUMMARIES = {
    "read": "Read file contents",
    "write": "Create or overwrite files",
    "edit": "Make precise edits to files",
    "apply_patch": "Apply multi-file patches",
    "grep": "Search file contents for patterns",
    "find": "Find files by glob pattern",
    "ls": "List directory contents",
    "exec": "Run shell commands (pty available for TTY-required CLIs)",
    "process": "Manage background exec sessions",
    "web_search": "Search the web",
    "web_fetch": "Fetch and extract readable content from a URL",
    "browser": "Control the web browser",
    "canvas": "Present/eval/snapshot the Canvas",
    "nodes": "List/describe/notify/camera/screen on paired nodes",
    "cron": "Manage cron jobs and wake events",
    "message": "Send messages and channel actions",
    "gateway": "Restart, apply config, or run updates on the running gateway",
    "agents_list": "List agent ids allowed for sessions_spawn",
    "sessions_list": "List other sessions with filters/last",
    "sessions_history": "Fetch history for another session/sub-agent",
    "sessions_send": "Send a message to another session/sub-agent",
    "sessions_spawn": "Spawn a sub-agent session",
    "session_status": "Show a /status-equivalent status card",
    "memory_search": "Semantically search MEMORY.md and memory/*.md",
    "memory_get": "Read a snippet from a memory file",
    "image": "Analyze an image with the configured image model",
}


class ToolingSectionBuilder(SectionPromptBuilder):
    """Lists the tools available to the agent, in the caller's order."""

    SECTION_ID = SectionId.TOOLING
    TITLE = "Tooling"
    DESCRIPTION = "Available tools and their usage constraints."

    def build_body(self, context: GenerationContext) -> str:
        lines = [
            "Tool availability (filtered by policy):",
            "Tool names are case-sensitive. Call tools exactly as listed.",
        ]
        seen = set()
        for name in context.tool_names:
            if name in seen:
                continue
            seen.add(name)
            summary = TOOL_SUMMARIES.get(name)
            lines.append(f"- {name}: {summary}" if summary else f"- {name}")
        if not seen:
            lines.append("- (no tools available in this session)")
        lines.append(
            "TOOLS.md does not control tool availability; it is user guidance for how to use external tools."
        )
        if "sessions_spawn" in seen:
            lines.append(
                "If a task is more complex or takes longer, spawn a sub-agent. "
                "It will do the work for you and ping you when it's done."
            )
        return "\n".join(lines)


class ToolCallStyleSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.TOOL_CALL_STYLE
    TITLE = "Tool Call Style"
    DESCRIPTION = "Guidelines for when and how to narrate tool calls."

    def build_body(self, context: GenerationContext) -> str:
        return textwrap.dedent(
            """
            Default: do not narrate routine, low-risk tool calls (just call the tool).
            Narrate only when it helps: multi-step work, complex/challenging problems, sensitive actions (e.g., deletions), or when the user explicitly asks.
            Keep narration brief and value-dense; avoid repeating obvious steps.
            Use plain human language for narration unless in a technical context.
            """
        ).strip()


class CliQuickReferenceSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.OPENCLAW_CLI_QUICK_REFERENCE
    TITLE = "OpenClaw CLI Quick Reference"
    DESCRIPTION = "Valid OpenClaw CLI commands and usage notes."

    def build_body(self, context: GenerationContext) -> str:
        return textwrap.dedent(
            """
            OpenClaw is controlled via subcommands. Do not invent commands.
            To manage the Gateway daemon service (start/stop/restart):
            - openclaw gateway status
            - openclaw gateway start
            - openclaw gateway stop
            - openclaw gateway restart
            If unsure, ask the user to run `openclaw help` (or `openclaw gateway --help`) and paste the output.
            """
        ).strip()


class SkillsSectionBuilder(SectionPromptBuilder):
    """Skill selection rules; present only when a skills prompt is supplied."""

    SECTION_ID = SectionId.SKILLS
    TITLE = "Skills"
    DESCRIPTION = "Rules for selecting and loading skills."

    def build_body(self, context: GenerationContext) -> str | None:
        skills_prompt = (context.skills_prompt or "").strip()
        if not skills_prompt:
            return None
        return "\n".join(
            [
                "Before replying: scan <available_skills> <description> entries.",
                "- If exactly one skill clearly applies: read its SKILL.md at <location> with `read`, then follow it.",
                "- If multiple could apply: choose the most specific one, then read/follow it.",
                "- If none clearly apply: do not read any SKILL.md.",
                "Constraints: never read more than one skill up front; only read after selecting.",
                skills_prompt,
            ]
        )


class MemoryRecallSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.MEMORY_RECALL
    TITLE = "Memory Recall"
    DESCRIPTION = "Memory search policy and citation behavior."

    def build_body(self, context: GenerationContext) -> str | None:
        if not (context.has_tool("memory_search") or context.has_tool("memory_get")):
            return None
        return textwrap.dedent(
            """
            Before answering anything about prior work, decisions, dates, people, preferences, or todos: run memory_search on MEMORY.md + memory/*.md; then use memory_get to pull only the needed lines.
            If low confidence after search, say you checked.
            Citations: include Source: <path#line> when it helps the user verify memory snippets.
            """
        ).strip()


class SelfUpdateSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.OPENCLAW_SELF_UPDATE
    TITLE = "OpenClaw Self-Update"
    DESCRIPTION = "Restrictions for self-update and config apply operations."

    def build_body(self, context: GenerationContext) -> str | None:
        if not context.has_tool("gateway"):
            return None
        return textwrap.dedent(
            """
            Get Updates (self-update) is ONLY allowed when the user explicitly asks for it.
            Do not run config.apply or update.run unless the user explicitly requests an update or config change; if it's not explicit, ask first.
            Actions: config.get, config.schema, config.apply (validate + write full config, then restart), update.run (update deps or git, then restart).
            After restart, OpenClaw pings the last active session automatically.
            """
        ).strip()
