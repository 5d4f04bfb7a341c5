"""Human-readable text for CLI output"""

from mdmemory.core.models import (
    Document, DocumentListing, DocumentSummary, ItemMove, SearchHit, Section, SectionUpdate,
)
from mdmemory.core.search import highlight, query_terms


def _date(dt) -> str:
    return dt.date().isoformat()


def render_document(doc: Document) -> str:
    tags = ", ".join(doc.meta.tags) or "None"
    return (
        f"# Full Memory: {doc.id}\n\n"
        f"**Created:** {doc.meta.created.isoformat()}\n"
        f"**Updated:** {doc.meta.updated.isoformat()}\n"
        f"**Status:** {doc.meta.status}\n"
        f"**Tags:** {tags}\n\n"
        f"---\n\n"
        f"{doc.content}"
    )


def render_section(doc: Document, section: Section) -> str:
    body = section.content or "(This section is empty)"
    return (
        f"## {section.name}\n\n{body}\n\n---\n"
        f"*From memory document: {doc.id}*\n"
        f"*Last updated: {doc.meta.updated.isoformat()}*"
    )


def render_listing(listings: list[DocumentListing]) -> str:
    lines = [f"Found {len(listings)} memory document{'' if len(listings) == 1 else 's'}:", ""]
    for d in listings:
        status = f" ({d.status})" if d.status else ""
        lines.append(f"## {d.id}{status}")
        lines.append(f"- **Created**: {_date(d.created)}")
        lines.append(f"- **Updated**: {_date(d.updated)}")
        lines.append(f"- **Sections**: {d.section_count}")
        if d.tags:
            lines.append(f"- **Tags**: {', '.join(d.tags)}")
        lines.append(f"- **File**: {d.path}")
        lines.append("")
    return "\n".join(lines).rstrip()


def render_update(result: SectionUpdate) -> str:
    if result.created:
        action = f'Created new section "{result.section}" with content'
    elif result.action == "replaced":
        action = f'Replaced content in section "{result.section}"'
    else:
        action = f'Appended content to section "{result.section}"'
    return f"Updated memory document '{result.document_id}': {action} (mode: {result.mode.value})"


def render_move(result: ItemMove) -> str:
    lines = [
        f"Moved item '{result.item}' in memory document '{result.document_id}':",
        f"- **From**: {result.from_section}",
        f"- **To**: {result.to_section}",
    ]
    if result.reason:
        lines.append(f"- **Reason**: {result.reason}")
    dest = "Created new section" if result.destination_created else "Updated existing section"
    lines.append(f"- **Destination Section**: {dest}")
    return "\n".join(lines)


def render_search(doc_id: str, query: str, hits: list[SearchHit], searched: int) -> str:
    out = [f'# Search Results in "{doc_id}"', "", f'**Query**: "{query}"', ""]
    if not hits:
        out.append(f'No matches found for "{query}".')
        return "\n".join(out)

    terms = query_terms(query)
    out.append(f"Found {len(hits)} section{'' if len(hits) == 1 else 's'} with matches:")
    out.append("")
    for i, hit in enumerate(hits, start=1):
        out.append(f"## {i}. {hit.section}")
        out.extend(f"- {highlight(m.strip(), terms)}" for m in hit.matches if m.strip())
        out.append("")
    out.append("---")
    out.append(f"*Search completed across {searched} sections*")
    return "\n".join(out)


def render_summary(s: DocumentSummary) -> str:
    out = [
        f"# Memory Document Summary: {s.meta.id}",
        "",
        "## Overview",
        f"- **Created**: {_date(s.meta.created)} ({s.days_since_created} days ago)",
        f"- **Last Updated**: {_date(s.meta.updated)} ({s.days_since_updated} days ago)",
        f"- **Status**: {s.meta.status or 'active'}",
    ]
    if s.meta.tags:
        out.append(f"- **Tags**: {', '.join(s.meta.tags)}")
    out += [
        "",
        "## Content Metrics",
        f"- **Total Sections**: {s.total_sections} ({s.non_empty_sections} with content)",
        f"- **List Sections**: {s.list_sections}",
        f"- **Total Items**: {s.total_items}",
        f"- **Word Count**: {s.total_words} words",
        f"- **Character Count**: {s.total_chars} characters",
        "",
        "## Section Breakdown",
    ]
    if not s.sections:
        out.append("No sections found.")
    for stat in s.sections:
        out.append(f"- **{stat.name}**: {f'{stat.words} words' if stat.words else 'Empty'}")
    if s.active_sections:
        out += ["", "## Most Active Sections"]
        out += [f"{i}. {name}" for i, name in enumerate(s.active_sections, start=1)]
    return "\n".join(out)
