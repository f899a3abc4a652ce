"""Command-line interface for Sparkflow."""

import json
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any

import typer
from loguru import logger

from sparkflow.config import notes_path
from sparkflow.core.codec import note_to_dict
from sparkflow.core.search.searcher import filtered_and_sorted, pick_featured, resolve_note
from sparkflow.core.tags import TagColor, tag_color, tag_counts
from sparkflow.logging_config import configure_logging
from sparkflow.models.note import Note, NoteValidationError
from sparkflow.store import NoteStore, open_store

app = typer.Typer(help="Sparkflow: capture sparks and keep reflecting on them.")

_DataDir = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Directory holding notes.json"),
]

_TERMINAL_COLORS: dict[TagColor, str | None] = {
    TagColor.AMBER: typer.colors.YELLOW,
    TagColor.STONE: typer.colors.WHITE,
    TagColor.ORANGE: typer.colors.BRIGHT_RED,
    TagColor.ROSE: typer.colors.MAGENTA,
    TagColor.INDIGO: typer.colors.BLUE,
    TagColor.SLATE: typer.colors.BRIGHT_BLACK,
    TagColor.NEUTRAL: typer.colors.WHITE,
    TagColor.PURPLE: typer.colors.BRIGHT_MAGENTA,
    TagColor.CORAL: typer.colors.RED,
    TagColor.TEAL: typer.colors.CYAN,
    TagColor.DEFAULT: None,
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


@contextmanager
def _open_store(data_dir: Path | None) -> Iterator[NoteStore]:
    """Load the store for the notes file in ``data_dir``; save it when the command ends."""
    path = notes_path(data_dir.expanduser() if data_dir else None)
    logger.debug("Using notes file {}", path)
    with open_store(path) as store:
        yield store


def _require_note(store: NoteStore, ref: str) -> Note:
    note = resolve_note(store.notes, ref)
    if note is None:
        typer.echo(f"Note '{ref}' not found (or id prefix is ambiguous).")
        raise typer.Exit(1)
    return note


def _format_day(value: datetime) -> str:
    local = value.astimezone()
    return f"{local:%A}, {local.day} {local:%B %Y}"


def _styled_tags(tags: tuple[str, ...]) -> str:
    return " ".join(typer.style(f"#{t}", fg=_TERMINAL_COLORS[tag_color(t)]) for t in tags)


def _summary(note: Note) -> dict[str, Any]:
    return {
        "id": note.id,
        "spark": note.spark,
        "source": note.source,
        "tags": list(note.tags),
        "createdAt": note.created_at.isoformat(),
        "bulletCount": note.bullet_count,
    }


def _echo_note(note: Note) -> None:
    typer.echo(typer.style(note.spark, bold=True))
    if note.source:
        typer.echo(f"  - {note.source}")
    if note.tags:
        typer.echo(f"  {_styled_tags(note.tags)}")
    typer.echo(f"  {_format_day(note.created_at)}  id={note.id}")
    typer.echo()
    for i, bullet in enumerate(note.bullets, 1):
        stamp = bullet.timestamp.astimezone()
        typer.echo(f"  {i}. [{stamp:%Y-%m-%d %H:%M}] {bullet.text}")


@app.command()
def add(
    spark: str = typer.Argument(..., help="The quote or idea"),
    reflection: str = typer.Option(..., "--reflection", "-r", help="First reflection"),
    source: Annotated[
        str | None,
        typer.Option("--source", "-s", help="Where the spark came from"),
    ] = None,
    tags: Annotated[
        list[str] | None,
        typer.Option("--tag", "-t", help="Tag (repeatable)"),
    ] = None,
    theme: Annotated[str | None, typer.Option("--theme", help="Theme name")] = None,
    data_dir: _DataDir = None,
) -> None:
    """Capture a new spark with its first reflection."""
    with _open_store(data_dir) as store:
        try:
            note = store.create_note(
                spark, initial_bullet=reflection, source=source, tags=tags or (), theme=theme
            )
        except NoteValidationError as e:
            typer.echo(f"Cannot add note: {e}")
            raise typer.Exit(1) from e
    typer.echo(f"Added note {note.id}")


@app.command(name="list")
def list_cmd(
    query: Annotated[
        str | None,
        typer.Option("--query", "-q", help="Search spark, source and reflections"),
    ] = None,
    tag: Annotated[str | None, typer.Option("--tag", "-t", help="Only notes with this tag")] = None,
    limit: int = typer.Option(20, "--limit", "-n", min=0, help="Max notes to show"),
    data_dir: _DataDir = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List notes, newest first."""
    with _open_store(data_dir) as store:
        matches = filtered_and_sorted(store.notes, query=query, tag=tag.lower() if tag else None)
    shown = matches[:limit]

    if output_json:
        data = {"results": [_summary(n) for n in shown], "total": len(matches)}
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    typer.echo(f"{len(matches)} notes (showing {len(shown)}):\n")
    for note in shown:
        local = note.created_at.astimezone()
        typer.echo(f"  {note.id[:8]}  {local:%Y-%m-%d}  {note.spark[:70]}")
        details = f"{note.bullet_count} reflection{'s' if note.bullet_count != 1 else ''}"
        if note.tags:
            details += f"  {_styled_tags(note.tags)}"
        typer.echo(f"            {details}")


@app.command()
def show(
    note_ref: str = typer.Argument(..., help="Note id or unique id prefix"),
    data_dir: _DataDir = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show a note with all its reflections."""
    with _open_store(data_dir) as store:
        note = _require_note(store, note_ref)
    if output_json:
        typer.echo(json.dumps(note_to_dict(note), indent=2, ensure_ascii=False))
    else:
        _echo_note(note)


@app.command()
def reflect(
    note_ref: str = typer.Argument(..., help="Note id or unique id prefix"),
    text: str = typer.Argument(..., help="Reflection text"),
    data_dir: _DataDir = None,
) -> None:
    """Append a reflection to a note."""
    with _open_store(data_dir) as store:
        note = _require_note(store, note_ref)
        bullet = store.add_bullet(note.id, text)
    if bullet is None:
        typer.echo("Reflection is empty, nothing added.")
        raise typer.Exit(1)
    typer.echo(f"Added reflection {len(note.bullets) + 1} to {note.id}")


@app.command()
def retag(
    note_ref: str = typer.Argument(..., help="Note id or unique id prefix"),
    tags: Annotated[
        list[str] | None,
        typer.Option("--tag", "-t", help="New tag (repeatable); none clears all tags"),
    ] = None,
    data_dir: _DataDir = None,
) -> None:
    """Replace the tags of a note."""
    with _open_store(data_dir) as store:
        note = _require_note(store, note_ref)
        updated = store.update_note(note.id, tags=tags or ())
    if updated is None:
        typer.echo(f"Note '{note_ref}' not found.")
        raise typer.Exit(1)
    typer.echo(f"Tags of {note.id}: {', '.join(updated.tags) or '(none)'}")


@app.command()
def delete(
    note_ref: str = typer.Argument(..., help="Note id or unique id prefix"),
    data_dir: _DataDir = None,
) -> None:
    """Delete a note permanently."""
    with _open_store(data_dir) as store:
        note = _require_note(store, note_ref)
        store.delete_note(note.id)
    typer.echo(f"Deleted note {note.id}")


@app.command()
def tags(
    data_dir: _DataDir = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List all tags with note counts."""
    with _open_store(data_dir) as store:
        counts = tag_counts(store.notes)
    if output_json:
        data = [{"tag": t, "count": c, "color": str(tag_color(t))} for t, c in counts.items()]
        typer.echo(json.dumps(data, indent=2))
        return
    typer.echo(f"{len(counts)} tags:\n")
    for tag, count in counts.items():
        typer.echo(f"  {_styled_tags((tag,))}  {count}")


@app.command()
def featured(data_dir: _DataDir = None) -> None:
    """Show a random note."""
    with _open_store(data_dir) as store:
        note = pick_featured(store.notes)
    if note is None:
        typer.echo("No notes yet.")
        return
    _echo_note(note)


@app.command(name="reset-demo")
def reset_demo(data_dir: _DataDir = None) -> None:
    """Replace all notes with the demo notes."""
    with _open_store(data_dir) as store:
        store.reset_to_demo_data()
        count = len(store)
    typer.echo(f"Reset to {count} demo notes")


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    data_dir: _DataDir = None,
) -> None:
    """Delete every note."""
    with _open_store(data_dir) as store:
        if not yes:
            typer.confirm(f"Delete all {len(store)} notes?", abort=True)
        store.clear_all()
    typer.echo("All notes deleted")


@app.command()
def serve() -> None:
    """Start the MCP server (stdio transport)."""
    from sparkflow.mcp.server import run_mcp_server

    run_mcp_server()
