"""In-memory search and filtering over the note collection."""

import random
from collections.abc import Sequence

from sparkflow.models.note import Note


def note_matches(note: Note, query: str) -> bool:
    """Case-insensitive substring match on spark, source and reflections.

    Tags are not searched; filter on them with ``tag=`` instead.
    """
    needle = query.strip().casefold()
    if not needle:
        return True
    if needle in note.spark.casefold():
        return True
    if note.source and needle in note.source.casefold():
        return True
    return any(needle in b.text.casefold() for b in note.bullets)


def filtered_and_sorted(
    notes: Sequence[Note],
    *,
    query: str | None = None,
    tag: str | None = None,
) -> list[Note]:
    """Filter notes by search text and tag.

    Args:
        notes: Notes in display order (newest first, as kept by the store).
        query: Search text. Empty or whitespace-only matches everything.
        tag: Only keep notes carrying exactly this tag.

    Returns:
        Matching notes, in the order given.
    """
    return [
        n for n in notes if (tag is None or tag in n.tags) and note_matches(n, query or "")
    ]


def resolve_note(notes: Sequence[Note], ref: str) -> Note | None:
    """Find a note by full id, or by an id prefix that matches exactly one note."""
    ref = ref.strip()
    if not ref:
        return None
    prefixed: list[Note] = []
    for note in notes:
        if note.id == ref:
            return note
        if note.id.startswith(ref):
            prefixed.append(note)
    return prefixed[0] if len(prefixed) == 1 else None


def pick_featured(notes: Sequence[Note], *, rng: random.Random | None = None) -> Note | None:
    """Pick a random note to feature, or None if there are no notes."""
    if not notes:
        return None
    return (rng or random).choice(notes)
