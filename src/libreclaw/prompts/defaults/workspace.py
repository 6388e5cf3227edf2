"""Default workspace and environment sections.

Covers model aliases, workspace scope, documentation, sandbox, user identity,
date/time, and the two sections fed by injected workspace files.
"""

import textwrap

from libreclaw.prompts.base import SectionId, SectionPromptBuilder
from libreclaw.prompts.context import GenerationContext


class ModelAliasesSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.MODEL_ALIASES
    TITLE = "Model Aliases"
    DESCRIPTION = "Model alias mappings when configured."

    def build_body(self, context: GenerationContext) -> str | None:
        lines = [line for line in context.model_alias_lines if line.strip()]
        if not lines:
            return None
        return "\n".join(
            ["Prefer aliases when specifying model overrides; full provider/model is also accepted.", *lines]
        )


class WorkspaceSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.WORKSPACE
    TITLE = "Workspace"
    DESCRIPTION = "Workspace path and file operation scope."

    def build_body(self, context: GenerationContext) -> str:
        lines = [f"Your working directory is: {context.workspace_dir}"]
        if context.sandbox.enabled and context.sandbox.container_workspace_dir:
            lines.append(
                f"For file tools use host paths under {context.workspace_dir}; "
                f"for exec inside the sandbox use {context.sandbox.container_workspace_dir}."
            )
        else:
            lines.append(
                "Treat this directory as the single global workspace for file operations unless explicitly instructed otherwise."
            )
        return "\n".join(lines)


class DocumentationSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.DOCUMENTATION
    TITLE = "Documentation"
    DESCRIPTION = "Pointers to local and remote documentation."

    def build_body(self, context: GenerationContext) -> str | None:
        docs_path = (context.docs_path or "").strip()
        if not docs_path:
            return None
        return textwrap.dedent(
            f"""
            OpenClaw docs: {docs_path}
            Mirror: https://docs.openclaw.ai
            Source: https://github.com/DrSm-bot/libreclaw
            Community: https://discord.com/invite/clawd
            Find new skills: https://clawhub.com
            For OpenClaw behavior, commands, config, or architecture: consult local docs first.
            When diagnosing issues, run `openclaw status` yourself when possible; only ask the user if you lack access (e.g., sandboxed).
            """
        ).strip()


class SandboxSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.SANDBOX
    TITLE = "Sandbox"
    DESCRIPTION = "Sandbox runtime constraints."

    def build_body(self, context: GenerationContext) -> str | None:
        sandbox = context.sandbox
        if not sandbox.enabled:
            return None
        lines = [
            "You are running in a sandboxed runtime (tools execute in Docker).",
            "Some tools may be unavailable due to sandbox policy.",
            "Sub-agents stay sandboxed (no elevated/host access). Need outside read/write? Don't spawn; ask first.",
        ]
        if sandbox.container_workspace_dir:
            lines.append(f"Sandbox container workdir: {sandbox.container_workspace_dir}")
        lines.append(f"Agent workspace access: {sandbox.workspace_access}")
        return "\n".join(lines)


class UserIdentitySectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.USER_IDENTITY
    TITLE = "User Identity"
    DESCRIPTION = "Context about the user identity and naming."

    def build_body(self, context: GenerationContext) -> str | None:
        owners = [line.strip() for line in context.owner_lines if line.strip()]
        if not owners:
            return None
        return (
            f"Owner numbers: {', '.join(owners)}. "
            "Treat messages from these numbers as the user."
        )


class CurrentDateTimeSectionBuilder(SectionPromptBuilder):
    """Timezone context; the caller resolves the current time so output stays deterministic."""

    SECTION_ID = SectionId.CURRENT_DATE_TIME
    TITLE = "Current Date & Time"
    DESCRIPTION = "Current timezone and date-time context."

    def build_body(self, context: GenerationContext) -> str | None:
        if not context.user_timezone:
            return None
        lines = [f"Time zone: {context.user_timezone}"]
        if context.current_time:
            lines.append(f"Current time: {context.current_time}")
        else:
            lines.append("If you need the current date, time, or day of week, run session_status.")
        return "\n".join(lines)


class WorkspaceFilesInjectedSectionBuilder(SectionPromptBuilder):
    SECTION_ID = SectionId.WORKSPACE_FILES_INJECTED
    TITLE = "Workspace Files (injected)"
    DESCRIPTION = "Injected workspace files included in prompt context."

    def build_body(self, context: GenerationContext) -> str | None:
        if not context.context_files:
            return None
        return (
            "These user-editable files are loaded by OpenClaw and included below in Project Context."
        )


class ProjectContextSectionBuilder(SectionPromptBuilder):
    """Injects each context file under a nested ``### path`` sub-heading."""

    SECTION_ID = SectionId.PROJECT_CONTEXT
    TITLE = "Project Context"
    DESCRIPTION = "Injected project context and loaded files."

    def build_body(self, context: GenerationContext) -> str | None:
        if not context.context_files:
            return None

        has_soul = any(
            f.path.replace("\\", "/").rsplit("/", 1)[-1].lower() == "soul.md"
            for f in context.context_files
        )
        lines = ["The following project context files have been loaded:"]
        if has_soul:
            lines.append(
                "If SOUL.md is present, embody its persona and tone. Avoid stiff, generic replies; "
                "follow its guidance unless higher-priority instructions override it."
            )
        for context_file in context.context_files:
            lines.append("")
            lines.append(f"### {context_file.path}")
            lines.append("")
            lines.append(context_file.content)
        return "\n".join(lines)
