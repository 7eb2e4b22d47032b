"""CLI entrypoint: Typer app definition and command registration"""

import typer

from sitepub.cli.commands import aliases_cmd, build_cmd, ingest_cmd, init_cmd, schema_cmd


app = typer.Typer(name="sitepub", no_args_is_help=True, help="Drupal content graph to static site routes")

app.command(name="init")(init_cmd)
app.command(name="ingest")(ingest_cmd)
app.command(name="build")(build_cmd)
app.command(name="aliases")(aliases_cmd)
app.command(name="schema")(schema_cmd)
