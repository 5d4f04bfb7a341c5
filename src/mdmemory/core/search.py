"""Keyword search across a document's sections"""

import re

from mdmemory.core.models import SearchHit, Section


PHRASE_SCORE = 10
PHRASE_MATCH_LIMIT = 3
TERM_MATCH_LIMIT = 2


def query_terms(query: str) -> list[str]:
    return query.lower().split()


def _score_section(section: Section, phrase: str, terms: list[str]) -> SearchHit | None:
    content = section.content.lower()
    lines = section.content.split('\n')

    if phrase in content:
        matches = [line for line in lines if phrase in line.lower()]
        return SearchHit(section=section.name, matches=matches[:PHRASE_MATCH_LIMIT], score=PHRASE_SCORE)

    found = [t for t in terms if t in content]
    if not found:
        return None
    matches = [line for line in lines if any(t in line.lower() for t in found)]
    if not matches:
        return None
    return SearchHit(section=section.name, matches=matches[:TERM_MATCH_LIMIT], score=len(found))


def search_sections(sections: list[Section], query: str) -> list[SearchHit]:
    """Rank sections by phrase match first, then by number of matched terms.

    A whole-phrase match scores 10; otherwise the score is the count of
    distinct query terms present. Ties are ordered by section name.
    """
    phrase = query.lower()
    terms = query_terms(query)
    hits = [h for h in (_score_section(s, phrase, terms) for s in sections) if h]
    return sorted(hits, key=lambda h: (-h.score, h.section.casefold()))


def highlight(line: str, terms: list[str]) -> str:
    """Wrap each case-insensitive occurrence of every term in '**'."""
    for term in terms:
        line = re.sub(f"({re.escape(term)})", r"**\1**", line, flags=re.IGNORECASE)
    return line
