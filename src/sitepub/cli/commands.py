"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from sitepub.config import Settings, load_config
from sitepub.core.aliases import AliasCollisionError, AliasRegistry, DuplicateAliasError
from sitepub.core.pages import BuildError
from sitepub.core.pipeline import run_build, run_ingest
from sitepub.core.schema import type_defs
from sitepub.core.utils.logs import setup_logging
from sitepub.crud.database import init_db, make_engine, reset_db


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logging(settings.log_level)
    return settings


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize the content graph database. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def ingest_cmd(
    staging: Annotated[Optional[str], typer.Option("--staging-dir", help="Directory of staged node JSON")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset for markdown bodies")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
    ):
    """Load staged CMS nodes into the content graph and derive their fields."""
    settings = _settings(overrides={"staging_dir": staging, "parser_config": parser, "log_level": log_level})
    engine = make_engine(settings.db_url)
    init_db(engine)

    try:
        counts, changes = run_ingest(engine, Path(settings.staging_dir), settings.parser_config)
    except RuntimeError as e:
        _fail(str(e))
    if not counts:
        typer.echo(f"Nothing staged in {settings.staging_dir}/.")
        raise typer.Exit(1)

    for status, label in changes:
        typer.echo(f"  {status}: {label}")
    typer.echo(
        f"Ingest complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged"
    )


def build_cmd(
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    strict: Annotated[bool, typer.Option("--strict-aliases", help="Fail when two nodes resolve to the same path")] = False,
    cms_aliases: Annotated[bool, typer.Option("--cms-aliases", help="Pass through CMS path aliases")] = False,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
    ):
    """Emit a page per content node, the alias table, and menu sitemaps."""
    settings = _settings(overrides={
        "output_dir": out, "strict_aliases": strict or None,
        "use_cms_aliases": cms_aliases or None, "log_level": log_level,
    })
    engine = make_engine(settings.db_url)
    init_db(engine)

    try:
        report = run_build(engine, settings)
    except BuildError as e:
        _fail("Build aborted", e)
    except (AliasCollisionError, DuplicateAliasError) as e:
        _fail("Alias conflict", e)

    for alias, dest in report.pages:
        typer.echo(f"  {alias} -> {dest}")
    for path, keys in report.collisions.items():
        typer.echo(f"  warning: {path} is shared by nodes {', '.join(map(str, keys))}", err=True)
    typer.echo(f"Emitted {len(report.pages)} page(s) to {settings.output_dir}/")
    typer.echo(f"Aliases: {report.alias_file}")
    typer.echo(f"Sitemaps: {len(report.sitemaps)} menu(s)")


def aliases_cmd(
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory of a previous build")] = None,
    ):
    """List the alias table written by the last build."""
    settings = _settings(overrides={"output_dir": out})
    path = Path(settings.output_dir) / settings.alias_file
    if not path.exists():
        typer.echo(f"No alias table at {path}. Run 'sitepub build' first.")
        raise typer.Exit(1)
    try:
        registry = AliasRegistry.load(path)
    except ValueError as e:
        _fail(str(e))
    for key, alias in sorted(registry.as_dict().items()):
        typer.echo(f"{key}\t{alias}")


def schema_cmd():
    """Print the content graph type definitions."""
    typer.echo(type_defs(), nl=False)
