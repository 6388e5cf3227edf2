"""Tests for heading-aware section removal."""

import itertools

import pytest

from libreclaw.prompts import SectionId, assemble, get_section_registry, remove_sections
from libreclaw.prompts.assembler import render_sections
from libreclaw.prompts.section_filter import remove_section_blocks

DOCUMENT = "\n".join(
    [
        "## Tooling",
        "- read",
        "",
        "## Project Context",
        "The following project context files have been loaded:",
        "",
        "### /ws/AGENTS.md",
        "",
        "## Every Session",
        "Read SOUL.md first.",
        "",
        "## Silent Replies",
        "NO_REPLY",
        "",
        "## Runtime",
        "Runtime: thinking=off",
    ]
)


class TestRemoveSections:
    """Test the linear heading scan."""

    def test_no_ids_returns_document_unchanged(self):
        assert remove_sections(DOCUMENT, []) == DOCUMENT
        assert remove_sections(DOCUMENT, None) == DOCUMENT

    def test_removes_section_and_its_nested_headings(self):
        result = remove_sections(DOCUMENT, ["project_context"])
        assert "## Project Context" not in result
        assert "### /ws/AGENTS.md" not in result
        # Unregistered level-2 heading inside the removed section goes with it
        assert "## Every Session" not in result
        assert "Read SOUL.md first." not in result
        assert result == "## Tooling\n- read\n\n## Silent Replies\nNO_REPLY\n\n## Runtime\nRuntime: thinking=off"

    def test_nested_headings_in_retained_section_stay(self):
        result = remove_sections(DOCUMENT, ["tooling"])
        assert result.startswith("## Project Context\n")
        assert "### /ws/AGENTS.md" in result
        assert "## Every Session" in result

    def test_removing_last_section_trims_trailing_blank_lines(self):
        result = remove_sections(DOCUMENT, ["runtime"])
        assert result.endswith("NO_REPLY")

    def test_removing_adjacent_sections_leaves_single_separator(self):
        result = remove_sections(DOCUMENT, ["project_context", "silent_replies"])
        assert result == "## Tooling\n- read\n\n## Runtime\nRuntime: thinking=off"

    def test_preamble_before_first_heading_is_kept(self):
        document = "Intro line\n\n## Tooling\n- read"
        assert remove_sections(document, ["tooling"]) == "Intro line"

    def test_ids_without_matching_heading_are_ignored(self):
        assert remove_sections(DOCUMENT, ["sandbox"]) == DOCUMENT

    def test_accepts_enum_members(self):
        result = remove_sections(DOCUMENT, [SectionId.RUNTIME, SectionId.TOOLING])
        assert "## Runtime" not in result
        assert "## Tooling" not in result

    def test_removing_everything_yields_empty_string(self):
        assert remove_sections(DOCUMENT, get_section_registry().section_ids()) == ""

    def test_similar_heading_text_is_not_a_boundary(self):
        document = "## Tooling\n- read\n## Runtime notes\nstill tooling\n\n## Runtime\nfacts"
        assert remove_sections(document, ["tooling"]) == "## Runtime\nfacts"

    def test_earlier_title_inside_later_section_is_content(self):
        document = "\n".join(
            [
                "## Tooling",
                "- read",
                "",
                "## Project Context",
                "### /ws/AGENTS.md",
                "## Safety",
                "- Don't exfiltrate private data.",
                "",
                "## Runtime",
                "facts",
            ]
        )
        assert remove_sections(document, ["project_context"]) == "## Tooling\n- read\n\n## Runtime\nfacts"
        assert remove_sections(document, ["safety"]) == document

    def test_repeated_title_is_content(self):
        document = "## Tooling\n- read\n## Tooling\nmore\n\n## Runtime\nfacts"
        assert remove_sections(document, ["tooling"]) == "## Runtime\nfacts"


class TestRemoveSectionsOnAssembledPrompt:
    """Properties of removal over real assembled prompts."""

    @pytest.mark.parametrize(
        "removed",
        [
            {"tooling"},
            {"project_context"},
            {"safety", "runtime"},
            {"messaging", "heartbeats", "workspace"},
            set(get_section_registry().section_ids()[::3]),
        ],
    )
    def test_removed_titles_never_appear_as_headings(self, full_context, removed):
        registry = get_section_registry()
        result = remove_sections(assemble(full_context), removed)
        result_lines = set(result.split("\n"))
        for section_id in registry.section_ids():
            heading = registry.get(section_id).heading()
            if section_id in removed:
                assert heading not in result_lines
            else:
                assert heading in result_lines

    def test_every_pair_of_sections(self, full_context):
        prompt = assemble(full_context)
        registry = get_section_registry()
        for pair in itertools.combinations(registry.section_ids(), 2):
            result = remove_sections(prompt, pair)
            lines = result.split("\n")
            for section_id in pair:
                assert registry.get(section_id).heading() not in lines
            assert "\n\n\n" not in result

    def test_project_context_removal_keeps_later_sections_verbatim(self, full_context):
        registry = get_section_registry()
        prompt = assemble(full_context)
        result = remove_sections(prompt, ["project_context"])

        assert "## Project Context" not in result
        assert "### /srv/agent/AGENTS.md" not in result
        assert "### /srv/agent/SOUL.md" not in result
        assert "## Every Session" not in result
        for section_id in ("silent_replies", "heartbeats", "runtime"):
            assert registry.get(section_id).render(full_context) in result

    def test_removal_is_idempotent(self, full_context):
        once = remove_sections(assemble(full_context), ["reactions", "sandbox"])
        assert remove_sections(once, ["reactions", "sandbox"]) == once


class TestRemoveSectionBlocks:
    """Removal over rendered ``(SectionId, block)`` pairs."""

    def test_drops_listed_ids_in_order(self, full_context):
        blocks = render_sections(full_context)
        kept = remove_section_blocks(blocks, ["safety", SectionId.PROJECT_CONTEXT])
        kept_ids = [section_id for section_id, _ in kept]
        assert SectionId.SAFETY not in kept_ids
        assert SectionId.PROJECT_CONTEXT not in kept_ids
        assert kept_ids == [sid for sid, _ in blocks if sid not in (SectionId.SAFETY, SectionId.PROJECT_CONTEXT)]

    def test_no_ids_keeps_every_block(self, full_context):
        blocks = render_sections(full_context)
        assert remove_section_blocks(blocks, None) == blocks

    def test_injected_title_stays_inside_retained_block(self, make_context):
        context = make_context(
            context_files=[{"path": "/ws/AGENTS.md", "content": "## Safety\nKeep secrets."}]
        )
        kept = dict(remove_section_blocks(render_sections(context), ["safety"]))
        assert "## Safety\nKeep secrets." in kept[SectionId.PROJECT_CONTEXT]
