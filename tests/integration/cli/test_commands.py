"""Integration tests for the CLI commands against a temporary storage directory"""

import pytest
from typer.testing import CliRunner

from mdmemory.cli.cli import app


runner = CliRunner()


@pytest.fixture(name="invoke")
def invoke_fixture(tmp_path):
    """Run a command with --storage-path pointed at tmp_path/memories."""
    storage = str(tmp_path / "memories")

    def _invoke(*args: str, input: str = None):
        return runner.invoke(app, [*args, "--storage-path", storage], input=input)
    return _invoke


@pytest.fixture(name="created")
def created_fixture(invoke):
    result = invoke("create", "Job Search", "--context", "Senior backend roles")
    assert result.exit_code == 0, result.output
    return "job-search"


def test_create_cmd(invoke, tmp_path):
    result = invoke("create", "Minnesota Trip 2026")
    assert result.exit_code == 0, result.output
    assert "Memory ID: minnesota-trip-2026" in result.output
    assert (tmp_path / "memories" / "minnesota-trip-2026.md").is_file()


def test_create_cmd_duplicate_fails(invoke, created):
    result = invoke("create", "job search")
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_import_cmd_from_file(invoke, tmp_path):
    src = tmp_path / "notes.md"
    src.write_text("## Stack\n\n- Python\n")
    result = invoke("import", "My Project", str(src), "--tag", "work")
    assert result.exit_code == 0, result.output

    shown = invoke("show", "my-project")
    assert "**Tags:** work" in shown.output
    assert "- Python" in shown.output


def test_import_cmd_from_stdin(invoke):
    result = invoke("import", "Piped", "-", input="## From Stdin\n\nhello\n")
    assert result.exit_code == 0, result.output
    assert "hello" in invoke("section", "piped", "from_stdin").output


def test_list_cmd_empty(invoke):
    result = invoke("list")
    assert result.exit_code == 0
    assert "No memory documents found" in result.output


def test_list_cmd(invoke, created):
    result = invoke("list")
    assert result.exit_code == 0
    assert "Found 1 memory document:" in result.output
    assert "## job-search (active)" in result.output


def test_show_cmd_missing(invoke):
    result = invoke("show", "ghost")
    assert result.exit_code == 1
    assert "Memory document 'ghost' not found" in result.output


def test_section_cmd(invoke, created):
    result = invoke("section", created, "context")
    assert result.exit_code == 0
    assert "## Context" in result.output
    assert "Senior backend roles" in result.output


def test_section_cmd_missing_lists_available(invoke, created):
    result = invoke("section", created, "Offers")
    assert result.exit_code == 1
    assert "Available sections: Job Search, Context, Notes" in result.output


def test_update_section_cmd_creates_then_appends(invoke, created):
    first = invoke("update-section", created, "Pipeline", "--content=- Acme Corp")
    assert first.exit_code == 0, first.output
    assert 'Created new section "Pipeline"' in first.output

    second = invoke("update-section", created, "Pipeline", "-c", "- Globex")
    assert 'Appended content to section "Pipeline"' in second.output
    assert "- Acme Corp\n\n- Globex" in invoke("section", created, "Pipeline").output


def test_update_section_cmd_replace_from_stdin(invoke, created):
    result = invoke("update-section", created, "Context", "-", "--mode", "replace", input="Staff roles only")
    assert result.exit_code == 0, result.output
    assert "(mode: replace)" in result.output
    out = invoke("section", created, "Context").output
    assert "Staff roles only" in out
    assert "Senior backend roles" not in out


def test_update_section_cmd_bullets_from_file(invoke, created, tmp_path):
    src = tmp_path / "pipeline.md"
    src.write_text("- Acme Corp\n- Globex\n")
    result = invoke("update-section", created, "Pipeline", "--file", str(src))
    assert result.exit_code == 0, result.output
    assert "- Acme Corp\n- Globex" in invoke("section", created, "Pipeline").output


def test_update_section_cmd_bad_mode(invoke, created):
    result = invoke("update-section", created, "Context", "x", "--mode", "merge")
    assert result.exit_code == 1
    assert 'mode must be either "append" or "replace"' in result.output


def test_update_section_cmd_default_mode_from_env(invoke, created, monkeypatch):
    monkeypatch.setenv("MDMEMORY_DEFAULT_MODE", "replace")
    invoke("update-section", created, "Context", "Replaced")
    out = invoke("section", created, "Context").output
    assert "Replaced" in out
    assert "Senior backend roles" not in out


def test_add_item_cmd_fields(invoke, created):
    result = invoke("add-item", created, "Notes", "--field", "company=Acme Corp", "--field", "rating=4")
    assert result.exit_code == 0, result.output
    assert "### Acme Corp ⭐⭐⭐⭐" in result.output


def test_add_item_cmd_bad_field(invoke, created):
    result = invoke("add-item", created, "Notes", "--field", "no-equals-sign")
    assert result.exit_code == 1
    assert "Expected key=value" in result.output


def test_add_item_cmd_missing_section(invoke, created):
    result = invoke("add-item", created, "Pipeline", "Acme")
    assert result.exit_code == 1
    assert "Section 'Pipeline' not found" in result.output


def test_update_and_move_item_cmds(invoke, created):
    setup = invoke("update-section", created, "Pipeline", "--content=- Acme Corp\n  - **Status**: Applied\n- Globex")
    assert setup.exit_code == 0, setup.output

    updated = invoke("update-item", created, "Pipeline", "acme", "--set", "Status=Onsite", "--set", "Next=Friday")
    assert updated.exit_code == 0, updated.output
    assert "- **Changes Made**: 2 fields" in updated.output

    moved = invoke("move-item", created, "Pipeline", "Offers", "Acme", "--reason", "Offer received")
    assert moved.exit_code == 0, moved.output
    assert "- **Destination Section**: Created new section" in moved.output

    offers = invoke("section", created, "Offers").output
    assert "  - **Status**: Onsite" in offers
    assert "- **Next**: Friday" in offers
    assert "<!-- Moved from Pipeline: Offer received -->" in offers


def test_search_cmd(invoke, created):
    result = invoke("search", created, "backend roles")
    assert result.exit_code == 0
    assert "## 1. Context" in result.output
    assert "Senior **backend** **roles**" in result.output


def test_search_cmd_no_matches(invoke, created):
    result = invoke("search", created, "kubernetes")
    assert 'No matches found for "kubernetes".' in result.output


def test_summary_cmd(invoke, created):
    result = invoke("summary", created)
    assert result.exit_code == 0, result.output
    assert "# Memory Document Summary: job-search" in result.output
    assert "- **Total Sections**: 3 (2 with content)" in result.output


def test_backups_and_restore_cmds(invoke, created):
    invoke("update-section", created, "Context", "Changed", "--mode", "replace")

    listed = invoke("backups", created)
    assert listed.exit_code == 0
    name = listed.output.strip().splitlines()[0]
    assert name.startswith("job-search-")

    diff = invoke("backups", created, "--diff", name)
    assert "-Senior backend roles" in diff.output
    assert "+Changed" in diff.output
    assert "1 added, 1 deleted" in diff.output

    restored = invoke("restore", created, name)
    assert restored.exit_code == 0, restored.output
    assert "Senior backend roles" in invoke("section", created, "Context").output


def test_restore_cmd_unknown_backup(invoke, created):
    result = invoke("restore", created, "nope.md")
    assert result.exit_code == 1
    assert "Backup 'nope.md' not found" in result.output
