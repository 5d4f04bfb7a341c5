"""YAML frontmatter (de)serialization for memory document files"""

import re
from pathlib import Path
from typing import Any

import yaml

from mdmemory.core.models import Document, DocumentMeta, utc_now


FRONTMATTER_RE = re.compile(r'^---[ \t]*\r?\n(.*?)\r?\n---[ \t]*\r?\n', re.DOTALL)


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with the YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML frontmatter: {e}") from e
    if not isinstance(fm, dict):
        raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
    return fm, text[m.end():]


def parse_document(text: str, doc_id: str, path: Path | None = None) -> Document:
    """Build a Document from file text; missing frontmatter fields fall back to defaults."""
    fm, body = split_frontmatter(text)
    if body.endswith('\n'):
        body = body[:-1]        # render_document always terminates the body with one newline
    meta = DocumentMeta(
        id=str(fm.get('id') or doc_id),
        created=fm.get('created') or utc_now(),
        updated=fm.get('updated') or utc_now(),
        tags=[str(t) for t in fm.get('tags') or []],
        status=fm.get('status'),
    )
    return Document(meta=meta, content=body, path=path)


def render_document(doc: Document) -> str:
    """Serialize a Document as a YAML frontmatter block followed by its content."""
    fm: dict[str, Any] = {
        'id': doc.meta.id,
        'created': doc.meta.created.isoformat(),
        'updated': doc.meta.updated.isoformat(),
        'tags': list(doc.meta.tags),
    }
    if doc.meta.status:
        fm['status'] = doc.meta.status
    header = yaml.safe_dump(fm, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n{doc.content}\n"
