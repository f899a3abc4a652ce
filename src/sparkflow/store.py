"""The note store: in-memory collection, persistence and change notification."""

import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

from loguru import logger

from sparkflow.core.codec import notes_to_document, parse_notes_document
from sparkflow.core.storage.json_file import JsonFileStorage
from sparkflow.core.tags import normalize_tags
from sparkflow.models.note import Bullet, Note, append_bullet, new_note
from sparkflow.protocols import StorageProtocol
from sparkflow.seed import sample_notes

Clock = Callable[[], datetime]
Listener = Callable[["NoteStore"], None]


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _newest_first(notes: Iterable[Note]) -> list[Note]:
    return sorted(notes, key=lambda n: n.created_at, reverse=True)


class NoteStore:
    """Own the note collection and mediate every read and write to storage.

    Every mutation is applied in memory first and then the whole collection is
    written back. A failed write is logged and leaves the in-memory state as
    the source of truth; nothing is rolled back or retried.

    The collection is kept newest first: ``load()`` sorts by ``created_at``
    and new notes are inserted at the front.
    """

    def __init__(
        self,
        storage: StorageProtocol,
        *,
        clock: Clock | None = None,
        seed: Callable[[datetime], list[Note]] | None = None,
    ) -> None:
        self.storage = storage
        self._clock = clock or _utc_now
        self._seed = seed or sample_notes
        self._notes: list[Note] = []
        self._listeners: list[Listener] = []
        # Held across read-modify-write-save so mutations never interleave.
        self._lock = threading.RLock()
        self.loaded = False

    @property
    def notes(self) -> tuple[Note, ...]:
        """Snapshot of the collection, newest first."""
        return tuple(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(self.notes)

    def get_note(self, note_id: str) -> Note | None:
        index = self._index_of(note_id)
        return None if index is None else self._notes[index]

    def _index_of(self, note_id: str) -> int | None:
        for i, note in enumerate(self._notes):
            if note.id == note_id:
                return i
        return None

    # --- Change notification ---

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Call ``callback(store)`` after each load and each mutation.

        Returns:
            A function that removes the subscription.
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._listeners):
            try:
                callback(self)
            except Exception:
                logger.exception("Note store subscriber {!r} failed", callback)

    # --- Persistence ---

    def load(self) -> tuple[Note, ...]:
        """Replace the collection with the stored document, or demo notes.

        Never raises: a missing, unreadable or malformed document falls back
        to the built-in demo notes.
        """
        with self._lock:
            try:
                data = self.storage.read_document()
                if data is None:
                    logger.info("No notes document in {}, starting with demo notes", self.storage)
                    notes = self._seed(self._clock())
                else:
                    notes = parse_notes_document(data)
                    logger.debug("Loaded {} notes from {}", len(notes), self.storage)
            except (OSError, ValueError, TypeError, KeyError, RecursionError) as e:
                logger.warning("Cannot load notes from {} ({}), using demo notes", self.storage, e)
                notes = self._seed(self._clock())

            self._notes = _newest_first(notes)
            self.loaded = True
        self._notify()
        return self.notes

    def save(self) -> bool:
        """Write the whole collection to storage.

        Returns:
            True if the document was written, False if the write failed.
        """
        with self._lock:
            try:
                self.storage.write_document(notes_to_document(self._notes))
            except (OSError, TypeError, ValueError):
                logger.exception("Unable to save {} notes to {}", len(self._notes), self.storage)
                return False
            logger.debug("Saved {} notes to {}", len(self._notes), self.storage)
            return True

    # --- Mutations ---

    def create_note(
        self,
        spark: str,
        *,
        initial_bullet: str,
        source: str | None = None,
        tags: Iterable[str] = (),
        theme: str | None = None,
    ) -> Note:
        """Create a note at the front of the collection and save.

        Raises:
            NoteValidationError: If ``spark`` or ``initial_bullet`` is blank.
                Nothing is inserted or saved in that case.
        """
        with self._lock:
            note = new_note(
                spark,
                initial_bullet=initial_bullet,
                now=self._clock(),
                source=source,
                tags=normalize_tags(tags),
                theme=theme,
            )
            self._notes.insert(0, note)
            logger.debug("Created note {}", note.id)
            self.save()
        self._notify()
        return note

    def add_bullet(self, note_id: str, text: str) -> Bullet | None:
        """Append a reflection to a note and save.

        Blank text or an unknown ``note_id`` is a no-op that returns None.
        """
        if not text.strip():
            logger.debug("Ignoring blank reflection for note {}", note_id)
            return None
        with self._lock:
            index = self._index_of(note_id)
            if index is None:
                logger.debug("add_bullet: note {} not found", note_id)
                return None
            self._notes[index], bullet = append_bullet(
                self._notes[index], text, now=self._clock()
            )
            self.save()
        self._notify()
        return bullet

    def update_note(self, note_id: str, *, tags: Iterable[str]) -> Note | None:
        """Replace a note's tags and save. Spark, source and reflections are fixed.

        An unknown ``note_id`` is a no-op that returns None.
        """
        with self._lock:
            index = self._index_of(note_id)
            if index is None:
                logger.debug("update_note: note {} not found", note_id)
                return None
            note = replace(self._notes[index], tags=normalize_tags(tags))
            self._notes[index] = note
            self.save()
        self._notify()
        return note

    def delete_note(self, note_id: str) -> bool:
        """Remove a note and save. Returns False if there was no such note."""
        with self._lock:
            index = self._index_of(note_id)
            if index is None:
                logger.debug("delete_note: note {} not found", note_id)
                return False
            del self._notes[index]
            self.save()
        self._notify()
        return True

    def clear_all(self) -> None:
        """Delete every note and save the empty collection."""
        with self._lock:
            self._notes = []
            self.save()
        self._notify()

    def reset_to_demo_data(self) -> None:
        """Replace the collection with fresh demo notes and save."""
        with self._lock:
            self._notes = _newest_first(self._seed(self._clock()))
            self.save()
        self._notify()


@contextmanager
def open_store(path: str | Path, *, clock: Clock | None = None) -> Iterator[NoteStore]:
    """Load a store backed by the JSON file at ``path``; save it again on exit."""
    store = NoteStore(JsonFileStorage(path), clock=clock)
    store.load()
    try:
        yield store
    finally:
        store.save()
