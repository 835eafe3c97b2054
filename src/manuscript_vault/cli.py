"""CLI for the manuscript vault (works, edits, change review, snapshots)."""

import json
import sqlite3
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from manuscript_vault.config import DATABASE_FILENAME, resolve_data_directory
from manuscript_vault.core.database.schema import connect, migrate_schema
from manuscript_vault.core.database.store import delete_work, list_works, load_work, save_work
from manuscript_vault.core.diff.lines import render_diff
from manuscript_vault.core.review.baselines import SnapshotBaseline, canonical_file_name
from manuscript_vault.core.review.selection import (
    ToggleFileSelection,
    make_selection_state,
    reduce_selection,
)
from manuscript_vault.core.review.summary import build_summaries
from manuscript_vault.core.snapshot.manifest import SnapshotManifestBuildError
from manuscript_vault.core.snapshot.snapshots import (
    create_snapshot,
    find_snapshot,
    snapshot_manifest,
)
from manuscript_vault.core.tree.documents import update_document
from manuscript_vault.core.tree.factory import create_work
from manuscript_vault.logging_config import configure_logging
from manuscript_vault.models.work import Work, WorkTemplate

app = typer.Typer(help="Manuscript vault: edit works, review changes, save snapshots.")

DataDirOption = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Vault database directory"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _now() -> datetime:
    return datetime.now(UTC)


def _open_db(data_dir: Path | None, *, create: bool = False) -> sqlite3.Connection:
    """Open the vault database. Only `create` may make a new one."""
    dst = data_dir or resolve_data_directory()
    db_path = dst / DATABASE_FILENAME
    if not create and not db_path.exists():
        logger.error("Vault database not found: {}. Create a work with 'new' first.", db_path)
        raise typer.Exit(1)
    dst.mkdir(parents=True, exist_ok=True)
    conn = connect(db_path)
    migrate_schema(conn)
    return conn


def _load(conn: sqlite3.Connection, work_id: str) -> Work:
    try:
        parsed = uuid.UUID(work_id)
    except ValueError:
        typer.echo(f"Invalid work id '{work_id}'.")
        raise typer.Exit(1) from None
    work = load_work(conn, parsed)
    if work is None:
        typer.echo(f"Work '{work_id}' not found.")
        raise typer.Exit(1)
    return work


@app.command()
def new(
    title: str = typer.Argument(..., help="Work title"),
    template: WorkTemplate = typer.Option(
        WorkTemplate.STANDARD, "--template", "-t", help="Files to create"
    ),
    data_dir: DataDirOption = None,
) -> None:
    """Create a new work."""
    conn = _open_db(data_dir, create=True)
    try:
        work = create_work(title, template, now=_now())
        save_work(conn, work)
        typer.echo(str(work.id))
    finally:
        conn.close()


@app.command()
def works(data_dir: DataDirOption = None) -> None:
    """List all works."""
    conn = _open_db(data_dir)
    try:
        rows = list_works(conn)
        typer.echo(f"{len(rows)} works:\n")
        for work in rows:
            typer.echo(
                f"  {work.title} - {len(work.documents)} files, "
                f"{len(work.snapshots)} snapshots  [id={work.id}]"
            )
    finally:
        conn.close()


@app.command()
def write(
    work_id: str = typer.Argument(..., help="Work ID"),
    file_name: str = typer.Argument(..., help="File name, e.g. content.md"),
    text: Annotated[str | None, typer.Option("--text", help="New text")] = None,
    from_file: Annotated[
        Path | None,
        typer.Option("--from", "-f", help="Read the new text from this file"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Replace a file's text (reads stdin when no text is given)."""
    if text is None:
        text = (
            from_file.read_text(encoding="utf-8")
            if from_file is not None
            else typer.get_text_stream("stdin").read()
        )

    conn = _open_db(data_dir)
    try:
        work = _load(conn, work_id)
        if not update_document(work, file_name, text, now=_now()):
            typer.echo(f"File '{file_name}' not found in work.")
            raise typer.Exit(1)
        save_work(conn, work)
        typer.echo(f"Updated {canonical_file_name(file_name)}")
    finally:
        conn.close()


@app.command()
def changes(
    work_id: str = typer.Argument(..., help="Work ID"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    data_dir: DataDirOption = None,
) -> None:
    """Show per-file changes since the latest snapshots."""
    conn = _open_db(data_dir)
    try:
        work = _load(conn, work_id)
        summaries = build_summaries(work, SnapshotBaseline(work))
        if output_json:
            data = [
                {
                    "file_name": s.file_name,
                    "added": s.added_line_count,
                    "removed": s.removed_line_count,
                }
                for s in summaries
            ]
            typer.echo(json.dumps(data, indent=2))
            return
        for s in summaries:
            typer.echo(f"  {s.file_name}  +{s.added_line_count} -{s.removed_line_count}")
    finally:
        conn.close()


@app.command()
def diff(
    work_id: str = typer.Argument(..., help="Work ID"),
    file_name: str = typer.Argument(..., help="File name, e.g. content.md"),
    data_dir: DataDirOption = None,
) -> None:
    """Show the line diff of one file against its snapshot baseline."""
    conn = _open_db(data_dir)
    try:
        work = _load(conn, work_id)
        name = canonical_file_name(file_name)
        summary = next(
            (s for s in build_summaries(work, SnapshotBaseline(work)) if s.file_name == name),
            None,
        )
        if summary is None:
            typer.echo(f"File '{file_name}' not found in work.")
            raise typer.Exit(1)
        typer.echo(render_diff(list(summary.lines)))
    finally:
        conn.close()


@app.command()
def snapshot(
    work_id: str = typer.Argument(..., help="Work ID"),
    title: str = typer.Option(..., "--title", "-t", help="Snapshot title"),
    memo: str = typer.Option("", "--memo", "-m", help="Snapshot memo"),
    files: Annotated[
        list[str] | None,
        typer.Option("--file", "-f", help="File to include (repeatable)"),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option("--exclude", "-x", help="Changed file to leave out (repeatable)"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Save a snapshot of the given files, or of every changed file."""
    conn = _open_db(data_dir)
    try:
        work = _load(conn, work_id)
        if files:
            selected = files
        else:
            state = make_selection_state(build_summaries(work, SnapshotBaseline(work)))
            for name in exclude or []:
                state = reduce_selection(state, ToggleFileSelection(canonical_file_name(name)))
            if not state.can_save_selection:
                typer.echo("No changed files to snapshot.")
                raise typer.Exit(1)
            selected = state.selected_in_order()

        try:
            snap = create_snapshot(work, selected, title=title, memo=memo, now=_now())
        except SnapshotManifestBuildError as e:
            logger.error("Cannot create snapshot: {}", e)
            typer.echo(str(e))
            raise typer.Exit(1) from None

        save_work(conn, work)
        typer.echo(f"Saved snapshot {snap.id} ({', '.join(sorted(selected))})")
    finally:
        conn.close()


@app.command()
def history(
    work_id: str = typer.Argument(..., help="Work ID"),
    data_dir: DataDirOption = None,
) -> None:
    """List the snapshots of a work, newest first."""
    conn = _open_db(data_dir)
    try:
        work = _load(conn, work_id)
        for snap in reversed(sorted(work.snapshots, key=lambda s: s.created_at)):
            typer.echo(f"  {snap.title} ({snap.kind}) {snap.created_at:%Y-%m-%d %H:%M}")
            if snap.memo:
                typer.echo(f"    memo: {snap.memo[:60]}")
            typer.echo(f"    id={snap.id}  device={snap.device_name}")
    finally:
        conn.close()


@app.command(name="show-snapshot")
def show_snapshot(
    work_id: str = typer.Argument(..., help="Work ID"),
    snapshot_id: str = typer.Argument(..., help="Snapshot ID"),
    data_dir: DataDirOption = None,
) -> None:
    """Print the files stored in a snapshot."""
    conn = _open_db(data_dir)
    try:
        work = _load(conn, work_id)
        try:
            snap = find_snapshot(work, uuid.UUID(snapshot_id))
        except ValueError:
            snap = None
        if snap is None:
            typer.echo(f"Snapshot '{snapshot_id}' not found.")
            raise typer.Exit(1)
        manifest = snapshot_manifest(snap)
        typer.echo(
            f"{snap.title} (manifest v{manifest.version}, "
            f"{manifest.created_at:%Y-%m-%d %H:%M})"
        )
        for entry in manifest.files:
            typer.echo(f"\n== {entry.file_name}")
            typer.echo(entry.text)
    finally:
        conn.close()


@app.command()
def delete(
    work_id: str = typer.Argument(..., help="Work ID"),
    data_dir: DataDirOption = None,
) -> None:
    """Delete a work with all its files and snapshots."""
    conn = _open_db(data_dir)
    try:
        work = _load(conn, work_id)
        delete_work(conn, work.id)
        typer.echo(f"Deleted '{work.title}'")
    finally:
        conn.close()
