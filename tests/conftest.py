"""Root test configuration: isolated storage and environment"""

import pytest

from mdmemory.config import Settings
from mdmemory.core.models import Document, DocumentMeta
from mdmemory.crud.store import DocumentStore


SAMPLE_DOC = """\
# Job Search

## Active Pipeline

- Acme Corp: Staff Engineer
  - **Status**: Applied
- Globex: Platform Lead
  - **Status**: Phone screen

## Ruled Out

Nothing yet.

## Contacts

- **Name**: Jane Doe
- **Company**: Initech
- **Last Contact**: 2026-09-01

## Notes

Follow up every Friday."""


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run every test from an empty directory with no MDMEMORY_* variables set."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"MDMEMORY_{name.upper()}", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(name="store")
def store_fixture(tmp_path):
    """A DocumentStore rooted in a fresh temporary directory."""
    return DocumentStore(tmp_path / "memories")


@pytest.fixture(name="make_doc")
def make_doc_fixture(store):
    """Persist a document with the given content and return its id."""
    def _make(content: str = SAMPLE_DOC, doc_id: str = "job-search", **meta) -> str:
        store.save(Document(meta=DocumentMeta(id=doc_id, **meta), content=content))
        return doc_id
    return _make
