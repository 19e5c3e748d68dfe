"""CLI entrypoint: Typer app definition and command registration"""

import typer

from cortex.cli.commands import add_cmd, init_cmd, migrate_cmd, rollback_cmd, show_cmd, status_cmd


app = typer.Typer(name="cortex", no_args_is_help=True, help="Convert knowledge-base entries from flat text to blocks")

app.command(name="init")(init_cmd)
app.command(name="add")(add_cmd)
app.command(name="status")(status_cmd)
app.command(name="migrate")(migrate_cmd)
app.command(name="rollback")(rollback_cmd)
app.command(name="show")(show_cmd)
