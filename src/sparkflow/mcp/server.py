"""MCP server exposing Sparkflow notes as tools."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger
from mcp.server.fastmcp import Context, FastMCP

from sparkflow.config import notes_path
from sparkflow.core.codec import bullet_to_dict, note_to_dict
from sparkflow.core.search.searcher import filtered_and_sorted, resolve_note
from sparkflow.core.tags import tag_color, tag_counts
from sparkflow.models.note import Note, NoteValidationError
from sparkflow.store import NoteStore, open_store


def _latest_reflection(note: Note) -> str:
    return note.bullets[-1].text


def _concise(note: Note) -> dict[str, Any]:
    return {
        "note_id": note.id,
        "spark": note.spark,
        "source": note.source,
        "tags": list(note.tags),
        "created_at": note.created_at.isoformat(),
        "bullet_count": note.bullet_count,
        "latest_reflection": _latest_reflection(note),
    }


# --- Core functions (testable without MCP context) ---


def sparkflow_search(
    store: NoteStore,
    *,
    query: str = "",
    tag: str | None = None,
    limit: int = 20,
    offset: int = 0,
    response_format: str = "concise",
) -> dict[str, Any]:
    """Search notes by text and/or tag, newest first.

    An empty query lists every note (optionally restricted to ``tag``).

    Args:
        query: Case-insensitive text matched against spark, source and reflections.
        tag: Only notes carrying this tag.
        limit: Max results (1-50, default 20).
        offset: Pagination offset.
        response_format: "concise" or "detailed" (full reflections).
    """
    limit = max(1, min(limit, 50))
    offset = max(0, offset)

    matches = filtered_and_sorted(store.notes, query=query, tag=tag.lower() if tag else None)
    page = matches[offset : offset + limit]
    if response_format == "detailed":
        results = [note_to_dict(n) for n in page]
    else:
        results = [_concise(n) for n in page]

    has_more = offset + len(page) < len(matches)
    output: dict[str, Any] = {
        "results": results,
        "count": len(page),
        "total": len(matches),
        "has_more": has_more,
    }
    if has_more:
        output["next_offset"] = offset + len(page)
    return output


def sparkflow_get_note(store: NoteStore, *, note_id: str) -> dict[str, Any]:
    """Return a note with all of its reflections."""
    note = resolve_note(store.notes, note_id)
    if note is None:
        return {"error": f"Note '{note_id}' not found."}
    data = note_to_dict(note)
    data["bullet_count"] = note.bullet_count
    data["tag_colors"] = {t: str(tag_color(t)) for t in note.tags}
    return data


def sparkflow_list_tags(store: NoteStore) -> dict[str, Any]:
    """List all tags with note counts and colour categories."""
    counts = tag_counts(store.notes)
    return {
        "tags": [
            {"tag": tag, "count": count, "color": str(tag_color(tag))}
            for tag, count in counts.items()
        ],
        "count": len(counts),
    }


def sparkflow_add_note(
    store: NoteStore,
    *,
    spark: str,
    reflection: str,
    source: str | None = None,
    tags: list[str] | None = None,
    theme: str | None = None,
) -> dict[str, Any]:
    """Capture a new spark with its first reflection."""
    try:
        note = store.create_note(
            spark, initial_bullet=reflection, source=source, tags=tags or (), theme=theme
        )
    except NoteValidationError as e:
        return {"success": False, "error": str(e)}
    return {"success": True, "note_id": note.id, "tags": list(note.tags)}


def sparkflow_add_reflection(store: NoteStore, *, note_id: str, text: str) -> dict[str, Any]:
    """Append a reflection to an existing note."""
    if not text.strip():
        return {"success": False, "error": "Reflection text is empty."}
    note = resolve_note(store.notes, note_id)
    if note is None:
        return {"success": False, "error": f"Note '{note_id}' not found."}
    bullet = store.add_bullet(note.id, text)
    if bullet is None:
        return {"success": False, "error": f"Note '{note_id}' not found."}
    updated = store.get_note(note.id)
    return {
        "success": True,
        "note_id": note.id,
        "bullet": bullet_to_dict(bullet),
        "bullet_count": updated.bullet_count if updated else None,
    }


def sparkflow_delete_note(store: NoteStore, *, note_id: str) -> dict[str, Any]:
    """Delete a note permanently."""
    note = resolve_note(store.notes, note_id)
    if note is None or not store.delete_note(note.id):
        return {"success": False, "error": f"Note '{note_id}' not found."}
    return {"success": True, "note_id": note.id}


# --- Server wiring ---


@dataclass
class ServerContext:
    """Shared resources for the MCP server lifetime."""

    store: NoteStore
    notes_file: Path


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    """Load notes on startup, save them on shutdown."""
    path = notes_path()
    with open_store(path) as store:
        logger.info("Serving {} notes from {}", len(store), path)
        yield ServerContext(store=store, notes_file=path)


mcp_server = FastMCP(
    "sparkflow",
    instructions="""\
Sparkflow is a personal commonplace book. Each note is a "spark" (a quote or
idea, optionally with a source) plus an append-only list of dated reflections.

- Use sparkflow_search_tool to find notes; an empty query lists everything.
- Use sparkflow_get_note_tool to read every reflection of a note.
- Reflections can only be appended (sparkflow_add_reflection_tool), never edited.
- Note ids may be shortened to any unique prefix.
""",
    lifespan=server_lifespan,
)


def _store(mcp_ctx: Context) -> NoteStore:
    return mcp_ctx.request_context.lifespan_context.store  # type: ignore[no-any-return]


# --- MCP Tool Wrappers ---


@mcp_server.tool()
async def sparkflow_search_tool(
    ctx: Context,
    query: str = "",
    tag: str | None = None,
    limit: int = 20,
    offset: int = 0,
    response_format: str = "concise",
) -> dict[str, Any]:
    """Search notes by text (spark, source, reflections) and/or tag.

    Pagination: When has_more is true, use next_offset in a follow-up call.

    Args:
        query: Search text, case-insensitive. Empty lists all notes.
        tag: Restrict to notes with this tag.
        limit: Max results (1-50, default 20).
        offset: Pagination offset.
        response_format: "concise" or "detailed".
    """
    return sparkflow_search(
        _store(ctx),
        query=query,
        tag=tag,
        limit=limit,
        offset=offset,
        response_format=response_format,
    )


@mcp_server.tool()
async def sparkflow_get_note_tool(ctx: Context, note_id: str) -> dict[str, Any]:
    """Read a note with all its reflections.

    Args:
        note_id: Note id or unique id prefix.
    """
    return sparkflow_get_note(_store(ctx), note_id=note_id)


@mcp_server.tool()
async def sparkflow_list_tags_tool(ctx: Context) -> dict[str, Any]:
    """List all tags with how many notes use each."""
    return sparkflow_list_tags(_store(ctx))


@mcp_server.tool()
async def sparkflow_add_note_tool(
    ctx: Context,
    spark: str,
    reflection: str,
    source: str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Capture a new spark.

    Args:
        spark: The quote or idea (required).
        reflection: First reflection on it (required).
        source: Where it came from (book, person).
        tags: Tags; stored lowercase without duplicates.
    """
    return sparkflow_add_note(
        _store(ctx), spark=spark, reflection=reflection, source=source, tags=tags
    )


@mcp_server.tool()
async def sparkflow_add_reflection_tool(ctx: Context, note_id: str, text: str) -> dict[str, Any]:
    """Append a dated reflection to a note.

    Args:
        note_id: Note id or unique id prefix.
        text: Reflection text.
    """
    return sparkflow_add_reflection(_store(ctx), note_id=note_id, text=text)


@mcp_server.tool()
async def sparkflow_delete_note_tool(ctx: Context, note_id: str) -> dict[str, Any]:
    """Delete a note and all its reflections. This cannot be undone.

    Args:
        note_id: Note id or unique id prefix.
    """
    return sparkflow_delete_note(_store(ctx), note_id=note_id)


def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    from sparkflow.logging_config import configure_logging

    configure_logging(verbose=False)
    mcp_server.run(transport="stdio")
