"""Domain models for Sparkflow notes."""

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime


class NoteValidationError(ValueError):
    """Raised when a note or reflection is created from blank text."""


def _new_id() -> str:
    return str(uuid.uuid4())


def _require_text(value: str, what: str) -> str:
    stripped = value.strip()
    if not stripped:
        msg = f"{what} must not be empty"
        raise NoteValidationError(msg)
    return stripped


@dataclass(frozen=True)
class Bullet:
    """A single timestamped reflection on a note."""

    text: str
    timestamp: datetime
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True)
class Note:
    """A captured spark with its reflections.

    Notes are immutable values. Appending a reflection or retagging produces a
    new ``Note`` with the same ``id``; the store swaps it into the collection.
    """

    spark: str
    bullets: tuple[Bullet, ...]
    created_at: datetime
    source: str | None = None
    tags: tuple[str, ...] = ()
    theme: str | None = None
    id: str = field(default_factory=_new_id)

    @property
    def bullet_count(self) -> int:
        return len(self.bullets)


def new_note(
    spark: str,
    *,
    initial_bullet: str,
    now: datetime,
    source: str | None = None,
    tags: Iterable[str] = (),
    theme: str | None = None,
) -> Note:
    """Build a note whose first reflection is stamped with its creation time.

    Args:
        spark: The captured idea or quote.
        initial_bullet: Text of the first reflection.
        now: Creation time, used for both the note and its first bullet.
        source: Optional attribution; blank means no source.
        tags: Tags as given. Normalization is up to the caller.
        theme: Optional theme name, stored as-is.

    Raises:
        NoteValidationError: If ``spark`` or ``initial_bullet`` is blank.
    """
    spark = _require_text(spark, "spark")
    first = _require_text(initial_bullet, "initial reflection")
    source = source.strip() if source else None
    return Note(
        spark=spark,
        source=source or None,
        tags=tuple(tags),
        bullets=(Bullet(text=first, timestamp=now),),
        created_at=now,
        theme=theme,
    )


def append_bullet(note: Note, text: str, *, now: datetime) -> tuple[Note, Bullet]:
    """Return ``note`` with one more reflection at the end, plus that reflection.

    The timestamp never precedes ``note.created_at``.

    Raises:
        NoteValidationError: If ``text`` is blank.
    """
    bullet = Bullet(text=_require_text(text, "reflection"), timestamp=max(now, note.created_at))
    return replace(note, bullets=(*note.bullets, bullet)), bullet
