"""Unit tests for crud/frontmatter.py"""

from datetime import datetime, timezone

import pytest

from mdmemory.core.models import Document, DocumentMeta
from mdmemory.crud.frontmatter import parse_document, render_document, split_frontmatter


def test_split_frontmatter_with_yaml():
    fm, body = split_frontmatter("---\nid: trip\n---\n# Body\n")
    assert fm == {"id": "trip"}
    assert body == "# Body\n"


def test_split_frontmatter_none():
    text = "# No frontmatter\n"
    assert split_frontmatter(text) == ({}, text)


@pytest.mark.parametrize("text", ["---\nkey: [unclosed\n---\nbody", "---\n- a list\n---\nbody"])
def test_split_frontmatter_invalid(text):
    with pytest.raises(ValueError, match="Invalid YAML frontmatter"):
        split_frontmatter(text)


def test_parse_document_defaults():
    """Missing fields fall back to the file id, empty tags, and aware timestamps."""
    doc = parse_document("## Notes\nhello\n", "notes")
    assert doc.id == "notes"
    assert doc.meta.tags == []
    assert doc.meta.status is None
    assert doc.meta.created.tzinfo is not None
    assert doc.content == "## Notes\nhello"


def test_parse_document_naive_timestamp_assumed_utc():
    doc = parse_document("---\nid: x\ncreated: 2026-01-02 03:04:05\n---\nbody\n", "x")
    assert doc.meta.created == datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_render_then_parse_round_trip():
    meta = DocumentMeta(id="trip", tags=["travel", "2026"], status="active")
    doc = Document(meta=meta, content="# Trip\n\n## Places\n\n- Duluth\n")
    parsed = parse_document(render_document(doc), "ignored")
    assert parsed.meta == meta
    assert parsed.content == doc.content


def test_render_omits_empty_status():
    text = render_document(Document(meta=DocumentMeta(id="x"), content="body"))
    assert "status" not in text
    assert text.startswith("---\nid: x\n")
    assert text.endswith("---\nbody\n")


def test_split_frontmatter_keeps_leading_blank_lines():
    fm, body = split_frontmatter("---\nid: x\n---\n\n\nintro\n")
    assert fm == {"id": "x"}
    assert body == "\n\nintro\n"


def test_split_frontmatter_crlf():
    fm, body = split_frontmatter("---\r\nid: x\r\n---\r\n# Body\r\n")
    assert fm == {"id": "x"}
    assert body == "# Body\r\n"


@pytest.mark.parametrize("content", ["\n\nintro\n## X\n\nA", "\n\n## X\n\nc", ""])
def test_round_trip_preserves_leading_blank_lines(content):
    doc = Document(meta=DocumentMeta(id="x"), content=content)
    assert parse_document(render_document(doc), "x").content == content
