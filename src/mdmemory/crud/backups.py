"""Document backup persistence: save, prune, list, diff, and restore operations

Backups are plain copies of a document file stored as
<storage_path>/.backups/<id>-<UTC timestamp>.md. Timestamps sort
lexicographically in chronological order.
"""

import logging
import re
import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from mdmemory.core.models import Document
from mdmemory.core.utils.diff import diff_stats, unified_diff
from mdmemory.crud.frontmatter import parse_document
from mdmemory.errors import NotFoundError

if TYPE_CHECKING:
    from mdmemory.crud.store import DocumentStore


logger = logging.getLogger(__name__)

BACKUP_DIR = '.backups'
STAMP_FORMAT = '%Y-%m-%dT%H-%M-%S-%fZ'
_STAMP_RE = r'\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}-\d{6}Z'


def _backup_re(doc_id: str) -> re.Pattern:
    return re.compile(rf'^{re.escape(doc_id)}-{_STAMP_RE}\.md$')


def save_backup(store: "DocumentStore", doc_id: str) -> Path:
    """Copy the current document file into the backup directory. Returns the backup path."""
    store.backup_dir.mkdir(parents=True, exist_ok=True)
    now = datetime.now(timezone.utc)
    target = store.backup_dir / f"{doc_id}-{now.strftime(STAMP_FORMAT)}.md"
    while target.exists():      # same-tick saves
        now += timedelta(microseconds=1)
        target = store.backup_dir / f"{doc_id}-{now.strftime(STAMP_FORMAT)}.md"
    shutil.copyfile(store.path_for(doc_id), target)
    return target


def list_backups(store: "DocumentStore", doc_id: str) -> list[Path]:
    """Backups for a document, oldest first."""
    if not store.backup_dir.is_dir():
        return []
    pattern = _backup_re(doc_id)
    return sorted(p for p in store.backup_dir.iterdir() if pattern.match(p.name))


def prune_backups(store: "DocumentStore", doc_id: str, max_backups: int) -> int:
    """Delete oldest backups beyond max_backups. Returns count deleted. No-op if max_backups=0."""
    if max_backups == 0:
        return 0

    backups = list_backups(store, doc_id)
    excess = len(backups) - max_backups
    if excess <= 0:
        return 0

    for p in backups[:excess]:
        p.unlink()
    logger.info("Pruned %d backup(s) of %s", excess, doc_id)
    return excess


def get_backup(store: "DocumentStore", doc_id: str, name: str) -> Path:
    """Resolve a backup file name for doc_id. Raises NotFoundError if it does not exist."""
    path = store.backup_dir / name
    if not _backup_re(doc_id).match(name) or not path.is_file():
        raise NotFoundError(f"Backup '{name}' not found for memory document '{doc_id}'")
    return path


def _load_backup(store: "DocumentStore", doc_id: str, name: str) -> Document:
    return parse_document(get_backup(store, doc_id, name).read_text(encoding='utf-8'), doc_id)


def diff_backup(store: "DocumentStore", doc_id: str, name: str, context: int = 3) -> list[str]:
    """Unified diff lines from a backup's content to the document's current content."""
    current = store.require(doc_id)
    backup = _load_backup(store, doc_id, name)
    return unified_diff(backup.content, current.content, name, "current", context)


def backup_stats(store: "DocumentStore", doc_id: str, name: str) -> dict[str, int]:
    """Added/deleted/unchanged line counts from a backup to the current content."""
    current = store.require(doc_id)
    return diff_stats(_load_backup(store, doc_id, name).content, current.content)


def restore_backup(store: "DocumentStore", doc_id: str, name: str) -> Document:
    """Write a backup's content, tags, and status back as the current document.

    The current state is itself backed up by the save (when backups are on),
    so a restore can be undone.
    """
    doc = store.require(doc_id)
    backup = _load_backup(store, doc_id, name)

    doc.content = backup.content
    doc.meta.tags = backup.meta.tags
    doc.meta.status = backup.meta.status
    logger.info("Restoring %s from %s", doc_id, name)
    return store.save(doc)
