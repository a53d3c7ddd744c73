"""CLI entrypoint: Typer app definition and command registration"""

import typer

from pageimport.cli.commands import import_cmd, init_cmd, logs_cmd, preview_cmd, stats_cmd


app = typer.Typer(name="pageimport", no_args_is_help=True, help="Import exported HTML pages into a content store")

app.command(name="init")(init_cmd)
app.command(name="import")(import_cmd)
app.command(name="preview")(preview_cmd)
app.command(name="logs")(logs_cmd)
app.command(name="stats")(stats_cmd)
