"""Document id generation from human-readable names"""

import re


def slugify(name: str) -> str:
    """Lowercase, drop characters outside [a-z0-9 whitespace -], hyphenate whitespace."""
    text = name.lower()
    text = re.sub(r'[^a-z0-9\s-]', '', text)
    text = re.sub(r'\s+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')
