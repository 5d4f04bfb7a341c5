"""Document operations: create, read, list edits, item patching, relocation, search, summary

Each operation validates its arguments, then re-reads the document from the
store; nothing is cached between calls. Multi-write operations (move) are not
transactional: a failure on the second write leaves the first applied.
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, Mapping, Optional

from mdmemory.core.analyze import summarize
from mdmemory.core.format import format_generic_item
from mdmemory.core.items import (
    add_reason_to_item, count_items, extract_item_lines, find_item_boundaries,
    patch_item_fields, prepare_destination_content, remove_item_from_lines,
    replace_item_lines,
)
from mdmemory.core.models import (
    Document, DocumentListing, DocumentMeta, DocumentSummary, ItemMove, ItemPatch,
    SearchHit, Section, UpdateMode,
)
from mdmemory.core.mutate import update_section
from mdmemory.core.search import search_sections
from mdmemory.core.sections import find_section, find_section_index, parse_sections, section_names
from mdmemory.core.utils.slug import slugify
from mdmemory.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from mdmemory.crud.store import DocumentStore


logger = logging.getLogger(__name__)

DEFAULT_STATUS = "active"
NOTES_PLACEHOLDER = "[Add your notes and organize into sections as needed]"


def _require(**kwargs: Any) -> None:
    """Raise ValidationError naming all arguments if any is missing or empty."""
    if not any(v is None or v == "" for v in kwargs.values()):
        return
    names = list(kwargs)
    if len(names) == 1:
        raise ValidationError(f"{names[0]} is required")
    if len(names) == 2:
        raise ValidationError(f"{names[0]} and {names[1]} are required")
    raise ValidationError(f"{', '.join(names[:-1])}, and {names[-1]} are required")


def _section_not_found(doc: Document, section_name: str, label: str = "Section") -> NotFoundError:
    available = ", ".join(section_names(doc.content)) or "(none)"
    return NotFoundError(
        f"{label} '{section_name}' not found in memory document '{doc.id}'. "
        f"Available sections: {available}"
    )


def _require_section(doc: Document, section_name: str, label: str = "Section") -> Section:
    section = find_section(doc.content, section_name)
    if section is None:
        raise _section_not_found(doc, section_name, label)
    return section


def document_id_for(name: str) -> str:
    """Document id derived from a human-readable name. Raises ValidationError if nothing is left."""
    doc_id = slugify(name)
    if not doc_id:
        raise ValidationError("Name must contain at least some alphanumeric characters")
    return doc_id


def _create(store: "DocumentStore", name: str, content: str, tags: list[str], status: str) -> Document:
    doc_id = document_id_for(name)
    if store.exists(doc_id):
        raise ValidationError(f"Memory document with ID '{doc_id}' already exists")
    doc = Document(meta=DocumentMeta(id=doc_id, tags=tags, status=status), content=content)
    store.save(doc)
    logger.info("Created memory document %s", doc_id)
    return doc


def create_document(store: "DocumentStore", name: str, context: Optional[str] = None) -> Document:
    """Create a new document titled name, with optional initial context."""
    _require(name=name)
    body = f"## Notes\n\n{NOTES_PLACEHOLDER}"
    if context:
        body = f"## Context\n\n{context}\n\n{body}"
    return _create(store, name, f"# {name}\n\n{body}", [], DEFAULT_STATUS)


def create_document_from_content(
    store: "DocumentStore",
    name: str,
    content: str,
    tags: Optional[list[str]] = None,
    status: Optional[str] = None,
    ) -> Document:
    """Create a new document whose content is stored verbatim."""
    _require(name=name, content=content)
    return _create(store, name, content, list(tags or []), status or DEFAULT_STATUS)


def get_full_document(store: "DocumentStore", doc_id: str) -> Document:
    _require(memory_id=doc_id)
    return store.require(doc_id)


def get_section(store: "DocumentStore", doc_id: str, section_name: str) -> tuple[Document, Section]:
    """Return (document, section). NotFoundError lists the available section names."""
    _require(memory_id=doc_id, section=section_name)
    doc = store.require(doc_id)
    return doc, _require_section(doc, section_name)


def list_documents(store: "DocumentStore") -> list[DocumentListing]:
    return store.list_all()


def add_to_list(store: "DocumentStore", doc_id: str, section_name: str, item: Any) -> str:
    """Format item and append it to an existing section. Returns the appended text."""
    _require(memory_id=doc_id, section=section_name, item=item or None)
    doc = store.require(doc_id)
    _require_section(doc, section_name)

    item_text = format_generic_item(item)
    update_section(store, doc_id, section_name, item_text, UpdateMode.append)
    return item_text


def update_list_item(
    store: "DocumentStore",
    doc_id: str,
    section_name: str,
    identifier: str,
    updates: Mapping[str, Any],
    ) -> ItemPatch:
    """Patch '- **Field**: value' bullets of one item in place."""
    _require(memory_id=doc_id, section=section_name, item_identifier=identifier, updates=updates)
    doc = store.require(doc_id)
    section = _require_section(doc, section_name)

    lines = section.content.split('\n')
    boundaries = find_item_boundaries(lines, identifier)
    if boundaries is None:
        raise NotFoundError(f"Item '{identifier}' not found in section '{section_name}'")

    patched = patch_item_fields(extract_item_lines(lines, boundaries), updates)
    new_content = '\n'.join(replace_item_lines(lines, boundaries, patched))
    update_section(store, doc_id, section_name, new_content, UpdateMode.replace)

    logger.info("Patched %d field(s) of '%s' in %s/%s", len(updates), identifier, doc_id, section_name)
    return ItemPatch(document_id=doc_id, section=section_name, item=identifier, fields=[str(f) for f in updates])


def move_list_item(
    store: "DocumentStore",
    doc_id: str,
    from_section: str,
    to_section: str,
    identifier: str,
    reason: Optional[str] = None,
    ) -> ItemMove:
    """Move an item between sections, creating the destination if needed.

    The source section is written first, then the destination; there is no
    rollback if the second write fails.
    """
    _require(memory_id=doc_id, from_section=from_section, to_section=to_section, item_identifier=identifier)
    doc = store.require(doc_id)
    source = _require_section(doc, from_section, label="Source section")
    sections = parse_sections(doc.content)
    if find_section_index(sections, from_section) == find_section_index(sections, to_section):
        raise ValidationError(f"Source and destination are the same section: '{source.name}'")
    destination = find_section(doc.content, to_section)

    from_lines = source.content.split('\n')
    boundaries = find_item_boundaries(from_lines, identifier)
    if boundaries is None:
        raise NotFoundError(f"Item '{identifier}' not found in section '{from_section}'")

    item_lines = extract_item_lines(from_lines, boundaries)
    if reason:
        item_lines = add_reason_to_item(item_lines, reason, from_section)
    remaining = remove_item_from_lines(from_lines, boundaries)

    new_to_content = prepare_destination_content(
        item_lines, destination.content if destination is not None else None
    )
    update_section(store, doc_id, from_section, '\n'.join(remaining), UpdateMode.replace)
    update_section(store, doc_id, to_section, new_to_content, UpdateMode.replace)

    logger.info("Moved '%s' from '%s' to '%s' in %s", identifier, from_section, to_section, doc_id)
    return ItemMove(
        document_id=doc_id,
        item=identifier,
        from_section=from_section,
        to_section=to_section,
        reason=reason or None,
        destination_created=destination is None,
        remaining_items=count_items(remaining),
    )


def search_document(store: "DocumentStore", doc_id: str, query: str) -> tuple[list[SearchHit], int]:
    """Return (ranked hits, number of sections searched)."""
    _require(memory_id=doc_id, query=query)
    sections = parse_sections(store.require(doc_id).content)
    return search_sections(sections, query), len(sections)


def summarize_document(store: "DocumentStore", doc_id: str, now: Optional[datetime] = None) -> DocumentSummary:
    _require(memory_id=doc_id)
    return summarize(store.require(doc_id), now)
