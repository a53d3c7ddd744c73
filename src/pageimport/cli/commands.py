"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlmodel import Session

from pageimport.config import Settings, load_config
from pageimport.core.errors import ExtractionError
from pageimport.core.models import ContentBlock, PageStatus, SanitizePolicy
from pageimport.core.parse import discover_files
from pageimport.core.pipeline import import_files, preview_file
from pageimport.crud.assets import SQLAssetStore
from pageimport.crud.database import init_db, make_engine, reset_db
from pageimport.crud.logs import clear_old_logs, get_logs, get_stats


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


def _configure_logging(settings: Settings, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s", force=True)


def _echo_blocks(blocks: list[ContentBlock], depth: int = 0) -> None:
    """Print one line per block, indenting group children."""
    for b in blocks:
        pad = "  " * (depth + 1)
        if b.type == "group":
            typer.echo(f"{pad}group ({len(b.children)})")
            _echo_blocks(b.children, depth + 1)
        elif b.type == "heading":
            typer.echo(f"{pad}heading h{b.level}")
        elif b.type == "image":
            typer.echo(f"{pad}image {b.src}")
        else:
            typer.echo(f"{pad}{b.type}")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def import_cmd(
    paths: Annotated[list[Path], typer.Argument(help="HTML files or directories to import")],
    status: Annotated[Optional[PageStatus], typer.Option("--status", help="Status for created pages")] = None,
    images: Annotated[Optional[str], typer.Option("--images-folder", help="Comma-separated image folders")] = None,
    documents: Annotated[Optional[str], typer.Option("--documents-folder", help="Folder with linked documents")] = None,
    pattern: Annotated[Optional[str], typer.Option("--block-pattern", help="Wrapper template containing {content}")] = None,
    policy: Annotated[Optional[SanitizePolicy], typer.Option("--sanitize-policy", help="Attributes to strip: full or minimal")] = None,
    parent: Annotated[Optional[int], typer.Option("--parent", help="Parent page id")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Import HTML files as pages, copying referenced images and documents into the media store."""
    settings = _settings(overrides={
        "page_status": status, "images_folder": images, "documents_folder": documents,
        "block_pattern": pattern, "sanitize_policy": policy, "page_parent": parent,
    })
    _configure_logging(settings, verbose)
    try:
        options = settings.import_options()
    except ValueError as e:
        _fail("Invalid import options", e)

    files: list[Path] = []
    for p in paths:
        found = discover_files(p) if p.exists() else [p]
        files.extend(found)
    if not files:
        typer.echo("No HTML files found.")
        raise typer.Exit(1)

    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        store = SQLAssetStore(session, Path(settings.media_dir), settings.media_url)
        summary = import_files(files, options, session, store, settings.max_file_size)

    for r in summary.succeeded:
        typer.echo(f"  imported: {r.file_name} -> page #{r.page_id} '{r.title}' (featured image: {r.featured_image})")
    for r in summary.failed:
        typer.echo(f"  failed: {r.file_name} [{r.reason.value}] {r.message}")
    typer.echo(
        f"Import complete - {summary.success_count} imported, "
        f"{summary.failed_count} failed, {summary.total} total"
    )
    if summary.failed_count:
        raise typer.Exit(1)


def preview_cmd(
    path: Annotated[Path, typer.Argument(help="HTML file to preview")],
    pattern: Annotated[Optional[str], typer.Option("--block-pattern", help="Preview with minimal sanitizing")] = None,
    policy: Annotated[Optional[SanitizePolicy], typer.Option("--sanitize-policy", help="Attributes to strip: full or minimal")] = None,
    ):
    """Show what would be extracted from a file without importing it."""
    settings = _settings(overrides={"block_pattern": pattern, "sanitize_policy": policy})
    try:
        doc = preview_file(path, settings.import_options(), settings.max_file_size)
    except ExtractionError as e:
        _fail(f"{e.reason.value}: {e.message}")
    except ValueError as e:
        _fail("Invalid import options", e)

    typer.echo(f"Title:      {doc.title}")
    typer.echo(f"Date:       {doc.published_at.isoformat(sep=' ') if doc.published_at else '-'}")
    typer.echo(f"Lead image: {doc.lead_image_filename or '-'}")
    typer.echo(f"Blocks:     {len(doc.blocks)}")
    _echo_blocks(doc.blocks)


def logs_cmd(
    limit: Annotated[int, typer.Option("--limit", help="Number of entries to show")] = 20,
    status: Annotated[Optional[str], typer.Option("--status", help="Only 'success' or 'error' entries")] = None,
    clear_days: Annotated[Optional[int], typer.Option("--clear-older-than", help="Delete entries older than N days")] = None,
    ):
    """Show recent import log entries."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        if clear_days is not None:
            removed = clear_old_logs(session, clear_days)
            session.commit()
            typer.echo(f"Removed {removed} log entries.")
            return
        entries = get_logs(session, limit=limit, status=status)
    if not entries:
        typer.echo("No import log entries.")
        return
    for e in entries:
        page = f"page #{e.page_id}" if e.page_id else "-"
        typer.echo(f"{e.created_at:%Y-%m-%d %H:%M:%S}  {e.status:<7}  {e.file_name}  {page}  {e.message}")


def stats_cmd():
    """Summarize logged imports."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        stats = get_stats(session)
    typer.echo(f"Total: {stats['total']}  Success: {stats['success']}  Error: {stats['error']}")
