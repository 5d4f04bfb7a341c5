"""File-backed persistence for memory documents: load, save, list"""

import logging
from pathlib import Path

from mdmemory.config import Settings
from mdmemory.core.models import Document, DocumentListing, utc_now
from mdmemory.core.sections import parse_sections
from mdmemory.crud.backups import BACKUP_DIR, prune_backups, save_backup
from mdmemory.crud.frontmatter import parse_document, render_document
from mdmemory.errors import NotFoundError, ValidationError


logger = logging.getLogger(__name__)

DOC_SUFFIX = '.md'


class DocumentStore:
    """Reads and writes <id>.md documents under a single storage directory."""

    def __init__(self, storage_path: Path | str, backups: bool = True, max_backups: int = 0):
        self.storage_path = Path(storage_path)
        self.backups = backups
        self.max_backups = max_backups

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentStore":
        return cls(settings.storage_path, backups=settings.backups, max_backups=settings.max_backups)

    @property
    def backup_dir(self) -> Path:
        return self.storage_path / BACKUP_DIR

    def ensure_storage(self) -> None:
        self.storage_path.mkdir(parents=True, exist_ok=True)

    def path_for(self, doc_id: str) -> Path:
        """File path for a document id. Rejects ids that would escape the storage directory."""
        if not doc_id or doc_id.startswith('.') or '/' in doc_id or '\\' in doc_id:
            raise ValidationError(f"Invalid memory document id '{doc_id}'")
        return self.storage_path / f"{doc_id}{DOC_SUFFIX}"

    def exists(self, doc_id: str) -> bool:
        return self.path_for(doc_id).is_file()

    def read_text(self, doc_id: str) -> str | None:
        """Raw file text, or None when the file does not exist. Other I/O errors propagate."""
        try:
            return self.path_for(doc_id).read_text(encoding='utf-8')
        except FileNotFoundError:
            return None

    def load(self, doc_id: str) -> Document | None:
        text = self.read_text(doc_id)
        if text is None:
            logger.debug("Document %s not found in %s", doc_id, self.storage_path)
            return None
        return parse_document(text, doc_id, self.path_for(doc_id))

    def require(self, doc_id: str) -> Document:
        """Load a document or raise NotFoundError."""
        doc = self.load(doc_id)
        if doc is None:
            raise NotFoundError(f"Memory document '{doc_id}' not found")
        return doc

    def save(self, doc: Document) -> Document:
        """Stamp `updated`, back up the previous file if any, and write the document."""
        self.ensure_storage()
        path = self.path_for(doc.id)
        if self.backups and path.exists():
            backup = save_backup(self, doc.id)
            logger.info("Backed up %s to %s", doc.id, backup.name)
            if self.max_backups > 0:
                prune_backups(self, doc.id, self.max_backups)

        doc.meta.updated = utc_now()
        path.write_text(render_document(doc), encoding='utf-8')
        doc.path = path
        logger.info("Wrote memory document %s", path)
        return doc

    def list_all(self) -> list[DocumentListing]:
        """All documents in the storage directory, most recently updated first."""
        if not self.storage_path.is_dir():
            return []
        listings = []
        for path in sorted(self.storage_path.glob(f"*{DOC_SUFFIX}")):
            if path.name.startswith('.') or not path.is_file():
                continue
            doc = parse_document(path.read_text(encoding='utf-8'), path.stem, path)
            listings.append(DocumentListing(
                id=doc.meta.id,
                created=doc.meta.created,
                updated=doc.meta.updated,
                tags=doc.meta.tags,
                status=doc.meta.status,
                path=str(path),
                section_count=len(parse_sections(doc.content)),
            ))
        return sorted(listings, key=lambda d: d.updated, reverse=True)
