"""Content analysis and summary statistics for memory documents"""

from datetime import datetime

from markdown_it import MarkdownIt

from mdmemory.core.models import (
    ContentAnalysis, Document, DocumentSummary, SectionStat, utc_now,
)
from mdmemory.core.sections import parse_sections


ITEM_HEADING_MIN_LEVEL = 3
ORDERED_MARKUP = {'.', ')'}


def _make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    return MarkdownIt(preset, options_update={"linkify": False})


def _heading_level(token) -> int | None:
    """Heading level (1-6) for a heading_open token, else None."""
    if token.type == 'heading_open' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def word_count(text: str) -> int:
    return len(text.split())


def analyze_content(content: str) -> ContentAnalysis:
    """Count bullet items, numbered items, and level 3+ headings in content."""
    analysis = ContentAnalysis()
    for tok in _make_parser().parse(content):
        if tok.type == 'list_item_open':
            if tok.markup in ORDERED_MARKUP:
                analysis.numbered_count += 1
            else:
                analysis.bullet_count += 1
        else:
            level = _heading_level(tok)
            if level is not None and level >= ITEM_HEADING_MIN_LEVEL:
                analysis.heading_count += 1
    return analysis


def days_since(then: datetime, now: datetime) -> int:
    return int((now - then).total_seconds() // 86400)


def find_active_sections(sections: list, limit: int = 3) -> list[str]:
    """Names of the non-empty sections with the most content, longest first."""
    non_empty = [s for s in sections if s.content.strip()]
    return [s.name for s in sorted(non_empty, key=lambda s: len(s.content), reverse=True)[:limit]]


def summarize(doc: Document, now: datetime | None = None) -> DocumentSummary:
    """Compute section, item, and size statistics for a document."""
    now = now or utc_now()
    sections = parse_sections(doc.content)

    list_sections = total_items = 0
    for section in sections:
        content = section.content.strip()
        if not content:
            continue
        items = analyze_content(content).total_items
        if items:
            total_items += items
            list_sections += 1

    return DocumentSummary(
        meta=doc.meta,
        total_sections=len(sections),
        non_empty_sections=sum(1 for s in sections if s.content.strip()),
        list_sections=list_sections,
        total_items=total_items,
        total_words=word_count(doc.content),
        total_chars=len(doc.content),
        active_sections=find_active_sections(sections),
        days_since_created=days_since(doc.meta.created, now),
        days_since_updated=days_since(doc.meta.updated, now),
        sections=[SectionStat(name=s.name, words=word_count(s.content)) for s in sections],
    )
