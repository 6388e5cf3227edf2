"""
Removal of top-level sections from an assembled prompt.

Two forms are provided. :func:`remove_section_blocks` works on the
``(SectionId, block)`` pairs produced by
:func:`libreclaw.prompts.assembler.render_sections` and is what the prompt
builder uses, so injected text can never move a section boundary.
:func:`remove_sections` works on already joined text.

In the text form a line opens a section only when it is exactly
``## <registered title>`` and that section renders strictly later than the
one currently open. Everything else, including deeper headings and a
``## Safety`` line inside an injected ``AGENTS.md``, is content of the open
section and is removed with it.

Each section owns the blank lines that follow it, so dropping a section
between two kept ones never leaves a doubled blank line.
"""

from collections.abc import Iterable, Sequence

from libreclaw.utils.logger import get_logger

from .base import SectionId
from .registry import SectionRegistry, get_section_registry

logger = get_logger("section_filter")


def _normalize_ids(section_ids: Iterable[str | SectionId] | None) -> set[str]:
    return {sid.value if isinstance(sid, SectionId) else sid for sid in (section_ids or ())}


def remove_section_blocks(
    blocks: Sequence[tuple[SectionId, str]],
    section_ids: Iterable[str | SectionId] | None,
) -> list[tuple[SectionId, str]]:
    """Drop the rendered blocks whose id is listed, keeping order."""
    removed = _normalize_ids(section_ids)
    return [(section_id, block) for section_id, block in blocks if section_id.value not in removed]


def remove_sections(
    document: str,
    section_ids: Iterable[str | SectionId] | None,
    registry: SectionRegistry | None = None,
) -> str:
    """Remove the listed top-level sections and all of their nested content.

    Lines before the first registered heading are always kept. Ids without a
    matching heading in ``document`` are ignored.

    Args:
        document: Assembled prompt text
        section_ids: Section ids to remove
        registry: Registry used to recognise headings, defaults to the global one

    Returns:
        The filtered document with trailing blank lines trimmed, or ``""``
    """
    removed = _normalize_ids(section_ids)
    if not removed:
        return document

    registry = registry or get_section_registry()
    kept: list[str] = []
    # Section whose body we are inside; None before the first heading
    current: SectionId | None = None

    for line in document.split("\n"):
        heading_id = registry.heading_to_id(line)
        # Sections render in registry order, so an earlier or repeated title is nested text
        if heading_id is not None and (
            current is None or registry.position(heading_id) > registry.position(current)
        ):
            current = heading_id
        if current is None or current.value not in removed:
            kept.append(line)

    while kept and not kept[-1].strip():
        kept.pop()

    result = "\n".join(kept)
    logger.debug(
        f"Removed section(s) {sorted(removed)}: {len(document)} -> {len(result)} chars"
    )
    return result
