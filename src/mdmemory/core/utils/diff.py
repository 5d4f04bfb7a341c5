"""Unified diffs between two revisions of a document"""

import difflib


def diff_stats(old: str, new: str) -> dict[str, int]:
    """Return added/deleted/unchanged line counts between old and new."""
    matcher = difflib.SequenceMatcher(None, old.splitlines(), new.splitlines())
    stats = {"added": 0, "deleted": 0, "unchanged": 0}

    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            stats["unchanged"] += i2 - i1
        if tag in ("replace", "delete"):
            stats["deleted"] += i2 - i1
        if tag in ("replace", "insert"):
            stats["added"] += j2 - j1

    return stats


def unified_diff(old: str, new: str, from_label: str, to_label: str, context: int = 3) -> list[str]:
    """Unified diff lines (newline-terminated) from old to new; empty when identical."""
    return list(difflib.unified_diff(
        old.splitlines(keepends=True),
        new.splitlines(keepends=True),
        fromfile=from_label,
        tofile=to_label,
        n=context,
    ))
