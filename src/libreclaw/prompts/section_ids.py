"""Stable identifiers for system prompt sections.

These strings are part of the public configuration contract
(``agents.defaults.systemPrompt.removeSections``). Member order matches the
order sections render in.
"""

from enum import Enum


class SectionId(str, Enum):
    """Closed set of addressable system prompt sections."""

    TOOLING = "tooling"
    TOOL_CALL_STYLE = "tool_call_style"
    SAFETY = "safety"
    OPENCLAW_CLI_QUICK_REFERENCE = "openclaw_cli_quick_reference"
    SKILLS = "skills"
    MEMORY_RECALL = "memory_recall"
    OPENCLAW_SELF_UPDATE = "openclaw_self_update"
    MODEL_ALIASES = "model_aliases"
    WORKSPACE = "workspace"
    DOCUMENTATION = "documentation"
    SANDBOX = "sandbox"
    USER_IDENTITY = "user_identity"
    CURRENT_DATE_TIME = "current_date_time"
    WORKSPACE_FILES_INJECTED = "workspace_files_injected"
    REPLY_TAGS = "reply_tags"
    MESSAGING = "messaging"
    VOICE_TTS = "voice_tts"
    GROUP_CHAT_CONTEXT = "group_chat_context"
    SUBAGENT_CONTEXT = "subagent_context"
    REACTIONS = "reactions"
    REASONING_FORMAT = "reasoning_format"
    PROJECT_CONTEXT = "project_context"
    SILENT_REPLIES = "silent_replies"
    HEARTBEATS = "heartbeats"
    RUNTIME = "runtime"

    def __str__(self) -> str:
        return self.value
