"""Default section builder implementations package."""

from ..base import SectionPromptBuilder
from .messaging import (
    GroupChatContextSectionBuilder,
    HeartbeatsSectionBuilder,
    MessagingSectionBuilder,
    ReactionsSectionBuilder,
    ReasoningFormatSectionBuilder,
    ReplyTagsSectionBuilder,
    SilentRepliesSectionBuilder,
    SubagentContextSectionBuilder,
    VoiceTtsSectionBuilder,
)
from .runtime import RuntimeSectionBuilder
from .safety import SAFETY_BODIES, SafetySectionBuilder
from .tooling import (
    CliQuickReferenceSectionBuilder,
    MemoryRecallSectionBuilder,
    SelfUpdateSectionBuilder,
    SkillsSectionBuilder,
    ToolCallStyleSectionBuilder,
    ToolingSectionBuilder,
)
from .workspace import (
    CurrentDateTimeSectionBuilder,
    DocumentationSectionBuilder,
    ModelAliasesSectionBuilder,
    ProjectContextSectionBuilder,
    SandboxSectionBuilder,
    UserIdentitySectionBuilder,
    WorkspaceFilesInjectedSectionBuilder,
    WorkspaceSectionBuilder,
)

# Rendering order
DEFAULT_SECTION_BUILDER_CLASSES: tuple[type[SectionPromptBuilder], ...] = (
    ToolingSectionBuilder,
    ToolCallStyleSectionBuilder,
    SafetySectionBuilder,
    CliQuickReferenceSectionBuilder,
    SkillsSectionBuilder,
    MemoryRecallSectionBuilder,
    SelfUpdateSectionBuilder,
    ModelAliasesSectionBuilder,
    WorkspaceSectionBuilder,
    DocumentationSectionBuilder,
    SandboxSectionBuilder,
    UserIdentitySectionBuilder,
    CurrentDateTimeSectionBuilder,
    WorkspaceFilesInjectedSectionBuilder,
    ReplyTagsSectionBuilder,
    MessagingSectionBuilder,
    VoiceTtsSectionBuilder,
    GroupChatContextSectionBuilder,
    SubagentContextSectionBuilder,
    ReactionsSectionBuilder,
    ReasoningFormatSectionBuilder,
    ProjectContextSectionBuilder,
    SilentRepliesSectionBuilder,
    HeartbeatsSectionBuilder,
    RuntimeSectionBuilder,
)


def default_section_builders() -> tuple[SectionPromptBuilder, ...]:
    """Fresh instances of every default builder, in rendering order."""
    return tuple(builder_class() for builder_class in DEFAULT_SECTION_BUILDER_CLASSES)


__all__ = [
    "DEFAULT_SECTION_BUILDER_CLASSES",
    "SAFETY_BODIES",
    "default_section_builders",
    "CliQuickReferenceSectionBuilder",
    "CurrentDateTimeSectionBuilder",
    "DocumentationSectionBuilder",
    "GroupChatContextSectionBuilder",
    "HeartbeatsSectionBuilder",
    "MemoryRecallSectionBuilder",
    "MessagingSectionBuilder",
    "ModelAliasesSectionBuilder",
    "ProjectContextSectionBuilder",
    "ReactionsSectionBuilder",
    "ReasoningFormatSectionBuilder",
    "ReplyTagsSectionBuilder",
    "RuntimeSectionBuilder",
    "SafetySectionBuilder",
    "SandboxSectionBuilder",
    "SelfUpdateSectionBuilder",
    "SilentRepliesSectionBuilder",
    "SkillsSectionBuilder",
    "SubagentContextSectionBuilder",
    "ToolCallStyleSectionBuilder",
    "ToolingSectionBuilder",
    "UserIdentitySectionBuilder",
    "VoiceTtsSectionBuilder",
    "WorkspaceFilesInjectedSectionBuilder",
    "WorkspaceSectionBuilder",
]
