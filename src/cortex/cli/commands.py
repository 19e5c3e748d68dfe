"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlalchemy.engine import Engine
from sqlmodel import Session

from cortex.config import Settings, load_config
from cortex.core.migration import BlockMigrationService
from cortex.core.parse import discover_files, read_entry_file
from cortex.crud.database import init_db, make_engine, reset_db
from cortex.crud.entries import count_by_status, create_entry, get_blocks, get_entry
from cortex.crud.sql_repo import SQLEntryStore
from cortex.exceptions import ConfigError, CortexError, EntryNotFoundError
from cortex.logging_config import setup_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config and configure logging, with standard CLI error handling."""
    try:
        settings = load_config(overrides=overrides)
    except ConfigError as e:
        _fail(str(e))
    setup_logging(settings.log_level, settings.log_format)
    return settings


def _engine(settings: Settings) -> Engine:
    engine = make_engine(settings.db_url)
    init_db(engine)
    return engine


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


def add_cmd(
    path: Annotated[str, typer.Argument(help="File or directory of text entries to import")],
    tags: Annotated[Optional[list[str]], typer.Option("--tag", help="Tag applied to every imported entry")] = None,
    ):
    """Import .md/.mdx/.txt files as legacy (unconverted) entries."""
    settings = _settings()
    engine = _engine(settings)

    files = discover_files(Path(path))
    if not files:
        typer.echo(f"No importable files found at {path}.")
        raise typer.Exit(1)

    try:
        with Session(engine) as session:
            for f in files:
                title, content, file_tags = read_entry_file(f)
                entry = create_entry(session, title, content, file_tags + list(tags or []))
                typer.echo(f"  {f} -> {entry.id}")
            session.commit()
    except ValueError as e:
        _fail("Import failed", e)
    typer.echo(f"Imported {len(files)} entr{'y' if len(files) == 1 else 'ies'}.")


def status_cmd():
    """Show how many entries are converted to blocks and how many still need migration."""
    settings = _settings()
    engine = _engine(settings)
    with Session(engine) as session:
        counts = count_by_status(session)
        pending = BlockMigrationService(SQLEntryStore(session)).needs_migration()
    typer.echo(f"Converted:   {counts['converted']}")
    typer.echo(f"Unconverted: {counts['unconverted']}")
    typer.echo("Migration needed." if pending else "Nothing to migrate.")


def migrate_cmd(
    entry_id: Annotated[Optional[str], typer.Option("--id", help="Convert only this entry")] = None,
    interval: Annotated[Optional[int], typer.Option("--checkpoint-interval", help="Entries between intermediate commits")] = None,
    ):
    """Convert legacy entries to blocks (all unconverted entries, or one by id)."""
    settings = _settings(overrides={"checkpoint_interval": interval})
    engine = _engine(settings)

    with Session(engine) as session:
        service = BlockMigrationService(SQLEntryStore(session), settings.checkpoint_interval)
        try:
            if entry_id:
                entry = service.migrate_by_id(entry_id)
                typer.echo(f"Converted {entry.id} ({len(entry.blocks)} blocks)")
                return
            if not service.needs_migration():
                typer.echo("Nothing to migrate.")
                return
            service.migrate_all()
        except EntryNotFoundError as e:
            _fail(str(e))
        except CortexError as e:
            _fail("Migration failed", e)
        counts = count_by_status(session)

    typer.echo(
        f"Migration complete - {service.migrated_entries} processed, "
        f"{counts['converted']} converted, {counts['unconverted']} unconverted"
    )


def rollback_cmd(
    entry_id: Annotated[str, typer.Argument(help="Entry to revert to plain text")],
    ):
    """Remove an entry's blocks and mark it unconverted."""
    settings = _settings()
    engine = _engine(settings)

    with Session(engine) as session:
        entry = get_entry(session, entry_id)
        if entry is None:
            _fail(str(EntryNotFoundError(entry_id)))
        if not entry.is_converted:
            typer.echo(f"Entry {entry_id} is not converted; nothing to do.")
            return
        try:
            BlockMigrationService(SQLEntryStore(session)).rollback(entry)
        except CortexError as e:
            _fail("Rollback failed", e)
    typer.echo(f"Rolled back {entry_id}.")


def show_cmd(
    entry_id: Annotated[str, typer.Argument(help="Entry to display")],
    markdown: Annotated[bool, typer.Option("--markdown", help="Render blocks as markdown")] = False,
    ):
    """List an entry's blocks, or render them back to markdown."""
    settings = _settings()
    engine = _engine(settings)

    with Session(engine) as session:
        entry = get_entry(session, entry_id)
        if entry is None:
            _fail(str(EntryNotFoundError(entry_id)))
        typer.echo(f"{entry.title} [{'blocks' if entry.is_converted else 'text'}]")
        if markdown:
            typer.echo(entry.content_text())
            return
        for block in get_blocks(session, entry_id):
            extra = ""
            if block.language:
                extra = f" ({block.language})"
            elif block.is_checked is not None:
                extra = " [x]" if block.is_checked else " [ ]"
            first_line = block.content.splitlines()[0] if block.content else ""
            typer.echo(f"  {block.order:>3} {block.type.value}{extra}: {first_line}")
