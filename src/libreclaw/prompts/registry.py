"""
Section registry for the system prompt.

This file holds the closed, ordered catalogue of system prompt sections. Each
entry is a ``SectionPromptBuilder`` carrying its stable identifier, heading
title and description. The order of the catalogue is the rendering order of
the assembled prompt, and the set of identifiers is the only vocabulary
accepted by ``systemPrompt.removeSections``.

The registry is built once at import time and never mutated. Lookups by id
and by title are derived from the same ordered tuple, so the catalogue, the
assembler and the section filter can never disagree about which sections
exist.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .base import SECTION_HEADING_PREFIX, SectionId, SectionPromptBuilder
from .defaults import default_section_builders


class SectionRegistry:
    """Ordered catalogue of section builders with derived lookups.

    :param builders: Section builders in rendering order
    :type builders: Iterable[SectionPromptBuilder]
    :raises ValueError: If ids or titles repeat, or an id has no builder

    .. note::
       This class is typically accessed through :func:`get_section_registry`
       rather than instantiated directly. Direct construction is useful in
       tests that need a registry with a different builder set.

    Examples:
        Checking a configured id::

            registry = get_section_registry()
            registry.is_valid_section_id("tooling")   # True
            registry.is_valid_section_id("unknown")   # False

        Resolving a heading back to its section::

            registry.title_to_id()["Project Context"]  # SectionId.PROJECT_CONTEXT
    """

    def __init__(self, builders: Iterable[SectionPromptBuilder], *, require_complete: bool = True):
        self._builders: tuple[SectionPromptBuilder, ...] = tuple(builders)

        by_id: dict[str, SectionPromptBuilder] = {}
        by_title: dict[str, SectionId] = {}
        for builder in self._builders:
            section_id = builder.section_id.value
            if section_id in by_id:
                raise ValueError(f"Duplicate system prompt section ID '{section_id}'")
            if builder.TITLE in by_title:
                raise ValueError(f"Duplicate system prompt section title '{builder.TITLE}'")
            by_id[section_id] = builder
            by_title[builder.TITLE] = builder.section_id

        if require_complete:
            missing = [section.value for section in SectionId if section.value not in by_id]
            if missing:
                raise ValueError(f"No builder registered for section ID(s): {', '.join(missing)}")

        self._by_id = MappingProxyType(by_id)
        self._by_title = MappingProxyType(by_title)
        self._positions = MappingProxyType(
            {builder.section_id: index for index, builder in enumerate(self._builders)}
        )

    def descriptors(self) -> tuple[SectionPromptBuilder, ...]:
        """All section builders in rendering order."""
        return self._builders

    def section_ids(self) -> tuple[str, ...]:
        """All valid section id strings in rendering order."""
        return tuple(builder.section_id.value for builder in self._builders)

    def is_valid_section_id(self, value) -> bool:
        if isinstance(value, SectionId):
            value = value.value
        return isinstance(value, str) and value in self._by_id

    def title_to_id(self) -> Mapping[str, SectionId]:
        """Read-only mapping of heading title to section id."""
        return self._by_title

    def heading_to_id(self, line: str) -> SectionId | None:
        """Return the section id if ``line`` is exactly a registered level-1 heading."""
        if not line.startswith(SECTION_HEADING_PREFIX):
            return None
        return self._by_title.get(line[len(SECTION_HEADING_PREFIX):])

    def position(self, section_id: SectionId) -> int:
        """Rendering position of ``section_id`` (0-based).

        :raises KeyError: If the id is not registered
        """
        return self._positions[section_id]

    def get(self, section_id: str | SectionId) -> SectionPromptBuilder:
        """Look up a builder by id.

        :raises KeyError: If the id is not registered
        """
        key = section_id.value if isinstance(section_id, SectionId) else section_id
        try:
            return self._by_id[key]
        except KeyError:
            raise KeyError(
                f"Unknown system prompt section ID '{key}'. "
                f"Available: {', '.join(self.section_ids())}"
            ) from None

    def catalogue(self) -> list[dict[str, str]]:
        """Id, title and description of every section, in rendering order."""
        return [builder.describe() for builder in self._builders]

    def __len__(self) -> int:
        return len(self._builders)

    def __iter__(self):
        return iter(self._builders)


# Global registry instance
_section_registry = SectionRegistry(default_section_builders())


def get_section_registry() -> SectionRegistry:
    """Get the process-wide section registry."""
    return _section_registry


__all__ = ["SectionId", "SectionRegistry", "get_section_registry"]
