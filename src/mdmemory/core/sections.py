"""Heading-delimited section parsing, lookup, and serialization

Only ATX headings are recognised: 1-6 '#' characters, at least one whitespace
character, then a non-empty remainder. Text before the first heading belongs
to no section and is dropped by the parser.
"""

import re
from typing import Optional

from mdmemory.core.models import Section


HEADING_RE = re.compile(r'^(#{1,6})\s+(.+)$')
_NON_ALNUM_RE = re.compile(r'[^a-z0-9]')


def parse_sections(text: str) -> list[Section]:
    """Split raw text into ordered sections; content is trimmed, interior blank lines kept."""
    sections: list[Section] = []
    current: Optional[Section] = None
    buffer: list[str] = []

    for line in text.split('\n'):
        m = HEADING_RE.match(line)
        if m:
            if current is not None:
                current.content = '\n'.join(buffer).strip()
                sections.append(current)
            current = Section(name=m.group(2).strip(), level=len(m.group(1)))
            buffer = []
        elif current is not None:
            buffer.append(line)

    if current is not None:
        current.content = '\n'.join(buffer).strip()
        sections.append(current)

    return sections


def normalize_name(name: str) -> str:
    """Lowercase name with every character outside [a-z0-9] replaced by '_'."""
    return _NON_ALNUM_RE.sub('_', name.lower())


def section_matches(section: Section, query: str) -> bool:
    """Exact case-insensitive match, or the section's normalized name equals the lowercased query.

    The query itself is only lowercased, never normalized: 'Contact_Network'
    does not match the query 'Contact Network'.
    """
    q = query.lower()
    return section.name.lower() == q or normalize_name(section.name) == q


def find_section_index(sections: list[Section], query: str) -> int | None:
    """Index of the first section matching query in document order, or None."""
    for i, section in enumerate(sections):
        if section_matches(section, query):
            return i
    return None


def find_section(text: str, query: str) -> Section | None:
    """Parse text and return the first section matching query, or None."""
    sections = parse_sections(text)
    index = find_section_index(sections, query)
    return sections[index] if index is not None else None


def section_names(text: str) -> list[str]:
    return [s.name for s in parse_sections(text)]


def rebuild_content(sections: list[Section]) -> str:
    """Serialize sections back to text: heading, blank line, then content and a blank line if non-empty."""
    lines: list[str] = []
    for section in sections:
        lines.append('#' * section.level + ' ' + section.name)
        lines.append('')
        if section.content:
            lines.append(section.content)
            lines.append('')
    return '\n'.join(lines).rstrip()
