"""Single-section edits: locate, append or replace, and persist"""

import logging
from typing import TYPE_CHECKING

from mdmemory.core.models import SectionUpdate, UpdateMode
from mdmemory.core.sections import find_section_index, parse_sections, rebuild_content
from mdmemory.errors import ValidationError

if TYPE_CHECKING:
    from mdmemory.crud.store import DocumentStore


logger = logging.getLogger(__name__)


def coerce_mode(mode: UpdateMode | str | None) -> UpdateMode:
    """Validate a mode flag; None means append."""
    if mode is None:
        return UpdateMode.append
    try:
        return UpdateMode(mode)
    except ValueError:
        raise ValidationError('mode must be either "append" or "replace"') from None


def append_new_section(text: str, section_name: str, content: str) -> str:
    """Add a level-2 section at the end of text without touching anything above it."""
    lines = text.split('\n')
    lines.extend(['', f"## {section_name}", '', content])
    return '\n'.join(lines)


def apply_section_update(
    text: str,
    section_name: str,
    content: str,
    mode: UpdateMode = UpdateMode.append,
    ) -> tuple[str, bool]:
    """Return (new_text, created).

    An absent section is appended to the raw text as-is. A present section is
    updated and the whole document re-serialized, which normalizes spacing
    between all sections.
    """
    sections = parse_sections(text)
    index = find_section_index(sections, section_name)
    if index is None:
        return append_new_section(text, section_name, content), True

    section = sections[index]
    if mode == UpdateMode.append and section.content:
        section.content = f"{section.content}\n\n{content}"
    else:
        section.content = content
    return rebuild_content(sections), False


def update_section(
    store: "DocumentStore",
    doc_id: str,
    section_name: str,
    content: str,
    mode: UpdateMode | str | None = UpdateMode.append,
    ) -> SectionUpdate:
    """Append to, replace, or create a named section of a stored document."""
    if not doc_id or not section_name or content is None:
        raise ValidationError("memory_id, section, and content are required")
    mode = coerce_mode(mode)

    doc = store.require(doc_id)
    doc.content, created = apply_section_update(doc.content, section_name, content, mode)
    store.save(doc)

    if created:
        logger.info("Created section '%s' in %s", section_name, doc_id)
    else:
        logger.info("Updated section '%s' in %s (%s)", section_name, doc_id, mode.value)
    return SectionUpdate(document_id=doc_id, section=section_name, mode=mode, created=created)
