"""CLI command implementations"""

import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdmemory.cli.render import (
    render_document, render_listing, render_move, render_search, render_section,
    render_summary, render_update,
)
from mdmemory.config import Settings, load_config
from mdmemory.core import operations as ops
from mdmemory.core.mutate import update_section
from mdmemory.crud.backups import backup_stats, diff_backup, list_backups, restore_backup
from mdmemory.crud.store import DocumentStore
from mdmemory.errors import MemoryDocError
from mdmemory.logging_setup import setup_logging


StorageOpt = Annotated[Optional[str], typer.Option("--storage-path", help="Directory holding memory documents")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _store(storage: Optional[str]) -> DocumentStore:
    settings = _settings(overrides={"storage_path": storage})
    setup_logging(settings.log_level)
    return DocumentStore.from_settings(settings)


def _read_input(value: Optional[str], file: Optional[Path]) -> Optional[str]:
    """Text from --file, from stdin when value is '-', else value itself."""
    if file is not None:
        return file.read_text(encoding="utf-8")
    if value == "-":
        return sys.stdin.read()
    return value


def _pairs(values: Optional[list[str]]) -> dict[str, str]:
    """Parse repeated key=value options into an ordered dict."""
    pairs: dict[str, str] = {}
    for raw in values or []:
        key, sep, val = raw.partition("=")
        if not sep or not key.strip():
            _fail(f"Expected key=value, got '{raw}'")
        pairs[key.strip()] = val.strip()
    return pairs


def create_cmd(
    name: Annotated[str, typer.Argument(help="Human-readable document name")],
    context: Annotated[Optional[str], typer.Option("--context", help="Initial context section")] = None,
    storage: StorageOpt = None,
    ):
    """Create a new memory document."""
    store = _store(storage)
    try:
        doc = ops.create_document(store, name, context)
    except (MemoryDocError, ValueError) as e:
        _fail(str(e))
    typer.echo(f'Created memory document "{name}"')
    typer.echo(f"Memory ID: {doc.id}")
    typer.echo(f"File location: {doc.path}")


def import_cmd(
    name: Annotated[str, typer.Argument(help="Human-readable document name")],
    source: Annotated[Path, typer.Argument(help="Markdown file to import, or '-' for stdin")],
    tags: Annotated[Optional[list[str]], typer.Option("--tag", help="Tag (repeatable)")] = None,
    status: Annotated[Optional[str], typer.Option("--status", help="Document status (default: active)")] = None,
    storage: StorageOpt = None,
    ):
    """Create a memory document from existing Markdown content."""
    store = _store(storage)
    try:
        content = sys.stdin.read() if str(source) == "-" else source.read_text(encoding="utf-8")
        doc = ops.create_document_from_content(store, name, content, tags, status)
    except (MemoryDocError, ValueError, OSError) as e:
        _fail(str(e))
    typer.echo(f'Created memory document "{name}"')
    typer.echo(f"Memory ID: {doc.id}")
    typer.echo(f"File location: {doc.path}")


def list_cmd(storage: StorageOpt = None):
    """List all memory documents, most recently updated first."""
    listings = ops.list_documents(_store(storage))
    if not listings:
        typer.echo("No memory documents found. Create one with 'mdmemory create <name>'.")
        return
    typer.echo(render_listing(listings))


def show_cmd(
    memory_id: Annotated[str, typer.Argument(help="Memory document id")],
    storage: StorageOpt = None,
    ):
    """Print a full memory document."""
    try:
        doc = ops.get_full_document(_store(storage), memory_id)
    except (MemoryDocError, ValueError) as e:
        _fail(str(e))
    typer.echo(render_document(doc))


def section_cmd(
    memory_id: Annotated[str, typer.Argument(help="Memory document id")],
    section: Annotated[str, typer.Argument(help="Section name")],
    storage: StorageOpt = None,
    ):
    """Print one section of a memory document."""
    try:
        doc, found = ops.get_section(_store(storage), memory_id, section)
    except (MemoryDocError, ValueError) as e:
        _fail(str(e))
    typer.echo(render_section(doc, found))


def summary_cmd(
    memory_id: Annotated[str, typer.Argument(help="Memory document id")],
    storage: StorageOpt = None,
    ):
    """Print section and item statistics for a memory document."""
    try:
        summary = ops.summarize_document(_store(storage), memory_id)
    except (MemoryDocError, ValueError) as e:
        _fail(str(e))
    typer.echo(render_summary(summary))


def search_cmd(
    memory_id: Annotated[str, typer.Argument(help="Memory document id")],
    query: Annotated[str, typer.Argument(help="Words or phrase to search for")],
    storage: StorageOpt = None,
    ):
    """Search within a memory document."""
    try:
        hits, searched = ops.search_document(_store(storage), memory_id, query)
    except (MemoryDocError, ValueError) as e:
        _fail(str(e))
    typer.echo(render_search(memory_id, query, hits, searched))


def update_section_cmd(
    memory_id: Annotated[str, typer.Argument(help="Memory document id")],
    section: Annotated[str, typer.Argument(help="Section name (created if absent)")],
    content: Annotated[Optional[str], typer.Argument(help="New content, or '-' for stdin")] = None,
    text: Annotated[Optional[str], typer.Option("--content", "-c", help="New content; use this for text starting with '-'")] = None,
    file: Annotated[Optional[Path], typer.Option("--file", help="Read content from file")] = None,
    mode: Annotated[Optional[str], typer.Option("--mode", help="append or replace")] = None,
    storage: StorageOpt = None,
    ):
    """Append to or replace a section of a memory document."""
    settings = _settings(overrides={"storage_path": storage})
    setup_logging(settings.log_level)
    store = DocumentStore.from_settings(settings)
    try:
        result = update_section(
            store, memory_id, section, _read_input(content if text is None else text, file),
            mode or settings.default_mode,
        )
    except (MemoryDocError, ValueError, OSError) as e:
        _fail(str(e))
    typer.echo(render_update(result))


def add_item_cmd(
    memory_id: Annotated[str, typer.Argument(help="Memory document id")],
    section: Annotated[str, typer.Argument(help="Existing section name")],
    text: Annotated[Optional[str], typer.Argument(help="Plain item text")] = None,
    fields: Annotated[Optional[list[str]], typer.Option("--field", help="key=value (repeatable)")] = None,
    storage: StorageOpt = None,
    ):
    """Add a formatted item to a section."""
    item = _pairs(fields) if fields else text
    try:
        item_text = ops.add_to_list(_store(storage), memory_id, section, item)
    except (MemoryDocError, ValueError) as e:
        _fail(str(e))
    typer.echo(f"Added item to {section} in memory document '{memory_id}':")
    typer.echo("")
    typer.echo(item_text.rstrip())


def update_item_cmd(
    memory_id: Annotated[str, typer.Argument(help="Memory document id")],
    section: Annotated[str, typer.Argument(help="Section containing the item")],
    identifier: Annotated[str, typer.Argument(help="Text identifying the item")],
    updates: Annotated[list[str], typer.Option("--set", help="Field=value (repeatable)")],
    storage: StorageOpt = None,
    ):
    """Update fields of an item in place."""
    try:
        result = ops.update_list_item(_store(storage), memory_id, section, identifier, _pairs(updates))
    except (MemoryDocError, ValueError) as e:
        _fail(str(e))
    count = len(result.fields)
    typer.echo(f"Updated item '{identifier}' in section '{section}' of memory document '{memory_id}':")
    typer.echo(f"- **Fields Updated**: {', '.join(result.fields)}")
    typer.echo(f"- **Changes Made**: {count} field{'' if count == 1 else 's'}")


def move_item_cmd(
    memory_id: Annotated[str, typer.Argument(help="Memory document id")],
    from_section: Annotated[str, typer.Argument(help="Source section")],
    to_section: Annotated[str, typer.Argument(help="Destination section (created if absent)")],
    identifier: Annotated[str, typer.Argument(help="Text identifying the item")],
    reason: Annotated[Optional[str], typer.Option("--reason", help="Recorded as a comment on the item")] = None,
    storage: StorageOpt = None,
    ):
    """Move an item from one section to another."""
    try:
        result = ops.move_list_item(_store(storage), memory_id, from_section, to_section, identifier, reason)
    except (MemoryDocError, ValueError) as e:
        _fail(str(e))
    typer.echo(render_move(result))


def backups_cmd(
    memory_id: Annotated[str, typer.Argument(help="Memory document id")],
    diff: Annotated[Optional[str], typer.Option("--diff", help="Show changes since this backup")] = None,
    storage: StorageOpt = None,
    ):
    """List backups of a memory document, or diff one against the current content."""
    store = _store(storage)
    try:
        if diff:
            lines = diff_backup(store, memory_id, diff)
            if not lines:
                typer.echo("No changes.")
                return
            stats = backup_stats(store, memory_id, diff)
            typer.echo("\n".join(line.rstrip("\n") for line in lines))
            typer.echo(f"\n{stats['added']} added, {stats['deleted']} deleted, {stats['unchanged']} unchanged")
            return
        backups = list_backups(store, memory_id)
    except (MemoryDocError, ValueError) as e:
        _fail(str(e))
    if not backups:
        typer.echo(f"No backups found for '{memory_id}'.")
        return
    for p in backups:
        typer.echo(p.name)


def restore_cmd(
    memory_id: Annotated[str, typer.Argument(help="Memory document id")],
    backup: Annotated[str, typer.Argument(help="Backup file name (see 'mdmemory backups')")],
    storage: StorageOpt = None,
    ):
    """Restore a memory document from a backup."""
    try:
        restore_backup(_store(storage), memory_id, backup)
    except (MemoryDocError, ValueError) as e:
        _fail(str(e))
    typer.echo(f"Restored '{memory_id}' from {backup}")
