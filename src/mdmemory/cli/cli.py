"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdmemory.cli.commands import (
    add_item_cmd, backups_cmd, create_cmd, import_cmd, list_cmd, move_item_cmd,
    restore_cmd, search_cmd, section_cmd, show_cmd, summary_cmd, update_item_cmd,
    update_section_cmd,
)


app = typer.Typer(name="mdmemory", no_args_is_help=True, help="Structured Markdown memory documents")

app.command(name="create")(create_cmd)
app.command(name="import")(import_cmd)
app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
app.command(name="section")(section_cmd)
app.command(name="summary")(summary_cmd)
app.command(name="search")(search_cmd)
app.command(name="update-section")(update_section_cmd)
app.command(name="add-item")(add_item_cmd)
app.command(name="update-item")(update_item_cmd)
app.command(name="move-item")(move_item_cmd)
app.command(name="backups")(backups_cmd)
app.command(name="restore")(restore_cmd)
