"""Item boundary detection, relocation, and field patching within a section's content

An item is an informal line-range, conventionally a '### Name' heading followed
by '- **Field**: value' bullets. Items are never parsed into a structure; every
operation recomputes boundaries over an immutable list of lines.
"""

import re
from typing import Any, Mapping, Optional

from mdmemory.core.models import ItemBoundaries


ITEM_HEADING = '### '


def _is_item_heading(line: str) -> bool:
    return line.strip().startswith(ITEM_HEADING)


def find_item_boundaries(lines: list[str], identifier: str) -> ItemBoundaries | None:
    """Locate the item whose first line contains identifier (case-insensitive).

    The first matching line may be a heading or any content line. The item runs
    until the line before the next '### ' heading, or the line before a blank
    line that directly precedes one, or the last line.
    """
    needle = identifier.lower()
    for i, line in enumerate(lines):
        if needle not in line.strip().lower():
            continue

        end = i
        for j in range(i + 1, len(lines)):
            current = lines[j]
            if _is_item_heading(current):
                end = j - 1
                break
            if current.strip() == '' and j + 1 < len(lines) and _is_item_heading(lines[j + 1]):
                end = j - 1
                break
            end = j
        return ItemBoundaries(start_index=i, end_index=end)

    return None


def count_items(lines: list[str]) -> int:
    """Number of '### ' item headings among lines."""
    return sum(1 for line in lines if _is_item_heading(line))


def extract_item_lines(lines: list[str], boundaries: ItemBoundaries) -> list[str]:
    return lines[boundaries.start_index:boundaries.end_index + 1]


def remove_item_from_lines(lines: list[str], boundaries: ItemBoundaries) -> list[str]:
    """Lines with the item deleted. Surrounding blank lines are left as they are."""
    return lines[:boundaries.start_index] + lines[boundaries.end_index + 1:]


def add_reason_to_item(item_lines: list[str], reason: str, from_section: str) -> list[str]:
    """Append a Markdown comment recording where the item came from and why."""
    return item_lines + [f"  <!-- Moved from {from_section}: {reason} -->"]


def prepare_destination_content(item_lines: list[str], existing_content: Optional[str]) -> str:
    """Full content for the destination section; None means the section does not exist yet."""
    if existing_content is not None:
        return '\n'.join(existing_content.split('\n') + [''] + item_lines)
    return '\n'.join(item_lines)


def _field_pattern(field: str) -> re.Pattern:
    return re.compile(rf'^(\s*-\s*\*\*{re.escape(field)}\*\*:)(.*)$', re.IGNORECASE)


def patch_item_fields(item_lines: list[str], updates: Mapping[str, Any]) -> list[str]:
    """Rewrite '- **Field**: value' bullets in place; add missing fields.

    A missing field is inserted right after the item's heading line when the
    item starts with one, otherwise appended to the end of the item.
    """
    patched = list(item_lines)
    for field, value in updates.items():
        pattern = _field_pattern(str(field))
        for i, line in enumerate(patched):
            m = pattern.match(line)
            if m:
                patched[i] = f"{m.group(1)} {value}"
                break
        else:
            bullet = f"- **{field}**: {value}"
            if patched and patched[0].startswith(ITEM_HEADING):
                patched.insert(1, bullet)
            else:
                patched.append(bullet)
    return patched


def replace_item_lines(lines: list[str], boundaries: ItemBoundaries, item_lines: list[str]) -> list[str]:
    """Splice item_lines back into lines in place of the bounded range."""
    return lines[:boundaries.start_index] + item_lines + lines[boundaries.end_index + 1:]
