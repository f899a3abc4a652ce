"""Tag normalization, aggregation and colour lookup."""

from collections import Counter
from collections.abc import Iterable, Sequence
from enum import StrEnum

from sparkflow.models.note import Note


class TagColor(StrEnum):
    """Display colour category for a tag."""

    AMBER = "amber"
    STONE = "stone"
    ORANGE = "orange"
    ROSE = "rose"
    INDIGO = "indigo"
    SLATE = "slate"
    NEUTRAL = "neutral"
    PURPLE = "purple"
    CORAL = "coral"
    TEAL = "teal"
    DEFAULT = "default"


TAG_COLORS: dict[str, TagColor] = {
    "inspiration": TagColor.AMBER,
    "quote": TagColor.STONE,
    "idea": TagColor.ORANGE,
    "journal": TagColor.ROSE,
    "dream": TagColor.INDIGO,
    "stoicism": TagColor.SLATE,
    "design": TagColor.NEUTRAL,
    "philosophy": TagColor.PURPLE,
    "creativity": TagColor.CORAL,
    "mindfulness": TagColor.TEAL,
}


def tag_color(tag: str) -> TagColor:
    return TAG_COLORS.get(tag.lower(), TagColor.DEFAULT)


def normalize_tag(raw: str) -> str:
    return raw.strip().lower()


def normalize_tags(raw: Iterable[str]) -> tuple[str, ...]:
    """Lowercase and strip tags, dropping blanks and repeats (first one wins).

    Raises:
        TypeError: If ``raw`` is a single string rather than a collection of tags.
    """
    if isinstance(raw, str):
        msg = f"tags must be a collection of strings, not a single string: {raw!r}"
        raise TypeError(msg)
    seen: dict[str, None] = {}
    for tag in raw:
        tag = normalize_tag(tag)
        if tag:
            seen.setdefault(tag, None)
    return tuple(seen)


def all_tags(notes: Iterable[Note]) -> list[str]:
    """Return every distinct tag across ``notes``, sorted."""
    return sorted({tag for note in notes for tag in note.tags})


def tag_counts(notes: Iterable[Note]) -> dict[str, int]:
    """Map each tag to the number of notes carrying it, sorted by tag."""
    counts = Counter(tag for note in notes for tag in set(note.tags))
    return dict(sorted(counts.items()))


def sort_by_first_tag(notes: Sequence[Note]) -> list[Note]:
    """Group notes by their first tag so same-coloured entries sit together.

    Untagged notes go last. The sort is stable.
    """
    return sorted(notes, key=lambda n: (not n.tags, n.tags[0].lower() if n.tags else ""))
