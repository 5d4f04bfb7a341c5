"""Generic Markdown formatting for list items added to a section"""

import re
from typing import Any, Mapping


TITLE_FIELDS = ('name', 'title', 'destination', 'company', 'activity')
RATING_FIELDS = ('rating', 'stars')
STAR = '⭐'


def format_key_name(key: str) -> str:
    """snake_case or kebab-case key to Title Case ('start_date' -> 'Start Date')."""
    spaced = re.sub(r'[_-]', ' ', key)
    return re.sub(r'\b\w', lambda m: m.group(0).upper(), spaced)


def format_field_list(fields: Mapping[str, Any]) -> str:
    """Render '- **Key**: value' lines for every truthy value."""
    return ''.join(
        f"- **{format_key_name(key)}**: {value}\n"
        for key, value in fields.items()
        if value
    )


def format_star_rating(rating: Any) -> str:
    """' ⭐⭐⭐' for ratings 1-5 (digits extracted from strings), else ''."""
    if not rating:
        return ''
    digits = re.sub(r'[^0-9]', '', str(rating))
    stars = int(digits) if digits else 0
    if 1 <= stars <= 5:
        return ' ' + STAR * stars
    return ''


def format_generic_item(item: Any) -> str:
    """Format a string or mapping as Markdown for appending to a section.

    Mappings with a title-like field become a '### Title' item followed by a
    field list; mappings without one become a bare field list.
    """
    if isinstance(item, str):
        return f"- {item}"

    if isinstance(item, Mapping):
        title = next((str(item[f]) for f in TITLE_FIELDS if item.get(f)), '')
        if title:
            stars = format_star_rating(item.get('rating') or item.get('stars'))
            rest = {
                k: str(v) for k, v in item.items()
                if k not in TITLE_FIELDS and k not in RATING_FIELDS and v
            }
            return f"### {title}{stars}\n" + format_field_list(rest)
        return format_field_list({k: str(v) for k, v in item.items() if v})

    return f"- {item}"
