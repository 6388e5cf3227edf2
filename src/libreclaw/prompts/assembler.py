"""Document assembler: renders every registered section in order."""

from .base import SectionId
from .context import SAFETY_STYLES, GenerationContext
from .registry import SectionRegistry, get_section_registry

SECTION_SEPARATOR = "\n\n"


def render_sections(
    context: GenerationContext,
    safety_style: str | None = None,
    registry: SectionRegistry | None = None,
) -> list[tuple[SectionId, str]]:
    """Render each applicable section, paired with its id, in rendering order.

    Sections whose builder has nothing to contribute are omitted entirely,
    so no empty heading is ever emitted.

    :param context: Generation inputs shared by all builders
    :param safety_style: Overrides ``context.safety_style`` when given
    :param registry: Registry to render, defaults to the global registry
    :raises ValueError: If ``safety_style`` is not a known style
    """
    if safety_style is not None:
        if safety_style not in SAFETY_STYLES:
            raise ValueError(
                f"Unknown safety style '{safety_style}'. Expected one of: {', '.join(SAFETY_STYLES)}"
            )
        context = context.with_safety_style(safety_style)

    registry = registry or get_section_registry()
    rendered = ((builder.section_id, builder.render(context)) for builder in registry.descriptors())
    return [(section_id, block) for section_id, block in rendered if block]


def join_sections(blocks: list[tuple[SectionId, str]]) -> str:
    return SECTION_SEPARATOR.join(block for _, block in blocks)


def assemble(
    context: GenerationContext,
    safety_style: str | None = None,
    registry: SectionRegistry | None = None,
) -> str:
    """Concatenate the rendered sections of ``registry`` in rendering order.

    See :func:`render_sections` for the parameters.
    """
    return join_sections(render_sections(context, safety_style, registry))
