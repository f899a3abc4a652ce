"""Convert between Note models and the persisted JSON document."""

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from sparkflow.models.note import Bullet, Note


def _format_time(value: datetime) -> str:
    return value.isoformat()


def _parse_time(raw: Any, where: str) -> datetime:
    if not isinstance(raw, str):
        msg = f"{where}: expected ISO-8601 string, got {raw!r}"
        raise ValueError(msg)
    value = datetime.fromisoformat(raw)
    # Older files may carry naive timestamps; they were always written in UTC.
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def _optional_str(raw: Any, where: str) -> str | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        msg = f"{where}: expected string or null, got {raw!r}"
        raise ValueError(msg)
    return raw or None


def _required_str(raw: Any, where: str) -> str:
    if not isinstance(raw, str) or not raw:
        msg = f"{where}: expected non-empty string, got {raw!r}"
        raise ValueError(msg)
    return raw


def bullet_to_dict(bullet: Bullet) -> dict[str, Any]:
    return {
        "id": bullet.id,
        "text": bullet.text,
        "timestamp": _format_time(bullet.timestamp),
    }


def note_to_dict(note: Note) -> dict[str, Any]:
    return {
        "id": note.id,
        "spark": note.spark,
        "source": note.source,
        "tags": list(note.tags),
        "bullets": [bullet_to_dict(b) for b in note.bullets],
        "createdAt": _format_time(note.created_at),
        "theme": note.theme,
    }


def notes_to_document(notes: Iterable[Note]) -> list[dict[str, Any]]:
    """Serialize a note collection into a JSON-ready list, keeping its order."""
    return [note_to_dict(n) for n in notes]


def _parse_bullet(raw: Any, where: str) -> Bullet:
    if not isinstance(raw, dict):
        msg = f"{where}: expected object, got {type(raw).__name__}"
        raise ValueError(msg)
    return Bullet(
        id=_required_str(raw.get("id"), f"{where}.id"),
        text=_required_str(raw.get("text"), f"{where}.text"),
        timestamp=_parse_time(raw.get("timestamp"), f"{where}.timestamp"),
    )


def _parse_note(raw: Any, where: str) -> Note:
    if not isinstance(raw, dict):
        msg = f"{where}: expected object, got {type(raw).__name__}"
        raise ValueError(msg)

    raw_tags = raw.get("tags", [])
    if not isinstance(raw_tags, list) or not all(isinstance(t, str) for t in raw_tags):
        msg = f"{where}.tags: expected list of strings, got {raw_tags!r}"
        raise ValueError(msg)

    raw_bullets = raw.get("bullets")
    if not isinstance(raw_bullets, list) or not raw_bullets:
        msg = f"{where}.bullets: expected non-empty list, got {raw_bullets!r}"
        raise ValueError(msg)

    return Note(
        id=_required_str(raw.get("id"), f"{where}.id"),
        spark=_required_str(raw.get("spark"), f"{where}.spark"),
        source=_optional_str(raw.get("source"), f"{where}.source"),
        tags=tuple(raw_tags),
        bullets=tuple(
            _parse_bullet(b, f"{where}.bullets[{i}]") for i, b in enumerate(raw_bullets)
        ),
        created_at=_parse_time(raw.get("createdAt"), f"{where}.createdAt"),
        theme=_optional_str(raw.get("theme"), f"{where}.theme"),
    )


def parse_notes_document(data: Any) -> list[Note]:
    """Parse a persisted document into notes, in document order.

    Args:
        data: Decoded JSON, expected to be a list of note objects.

    Returns:
        List of Notes.

    Raises:
        ValueError: If the document does not have the expected shape or two
            notes share an id. The message names the offending note and field.
    """
    if not isinstance(data, list):
        msg = f"Notes document must be a list, got {type(data).__name__}"
        raise ValueError(msg)
    notes = [_parse_note(raw, f"notes[{i}]") for i, raw in enumerate(data)]
    seen: set[str] = set()
    for i, note in enumerate(notes):
        if note.id in seen:
            msg = f"notes[{i}].id: duplicate note id {note.id!r}"
            raise ValueError(msg)
        seen.add(note.id)
    return notes
