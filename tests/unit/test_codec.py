"""Tests for the notes document codec."""

from datetime import UTC, datetime, timedelta, timezone
from typing import Any

import pytest

from sparkflow.core.codec import note_to_dict, notes_to_document, parse_notes_document
from sparkflow.models.note import append_bullet, new_note

NOW = datetime(2025, 12, 6, 9, 30, tzinfo=UTC)


def _raw_note(**overrides: Any) -> dict[str, Any]:
    raw: dict[str, Any] = {
        "id": "n1",
        "spark": "The obstacle is the way.",
        "source": None,
        "tags": ["stoicism"],
        "bullets": [{"id": "b1", "text": "setback", "timestamp": "2025-12-01T08:00:00+00:00"}],
        "createdAt": "2025-12-01T08:00:00+00:00",
        "theme": None,
    }
    raw.update(overrides)
    return raw


def test_note_to_dict_uses_document_field_names() -> None:
    note = new_note("s", initial_bullet="b", now=NOW, source="src", tags=["x"], theme="dusk")

    data = note_to_dict(note)

    assert set(data) == {"id", "spark", "source", "tags", "bullets", "createdAt", "theme"}
    assert set(data["bullets"][0]) == {"id", "text", "timestamp"}
    assert data["createdAt"] == "2025-12-06T09:30:00+00:00"
    assert data["tags"] == ["x"]


def test_parse_reads_note_with_bullets_in_order() -> None:
    raw = _raw_note(
        bullets=[
            {"id": "b1", "text": "one", "timestamp": "2025-12-01T08:00:00+00:00"},
            {"id": "b2", "text": "two", "timestamp": "2025-12-02T08:00:00+00:00"},
        ]
    )

    (note,) = parse_notes_document([raw])

    assert note.id == "n1"
    assert [b.text for b in note.bullets] == ["one", "two"]
    assert note.tags == ("stoicism",)
    assert note.source is None


def test_document_round_trip_preserves_notes() -> None:
    note = new_note("s", initial_bullet="b", now=NOW, source="src", tags=["a", "b"])
    note, _ = append_bullet(note, "later", now=NOW + timedelta(hours=3, microseconds=7))

    assert parse_notes_document(notes_to_document([note])) == [note]


def test_parse_keeps_timezone_offsets() -> None:
    (note,) = parse_notes_document([_raw_note(createdAt="2025-12-01T10:00:00+02:00")])

    assert note.created_at == datetime(2025, 12, 1, 10, tzinfo=timezone(timedelta(hours=2)))


def test_parse_treats_naive_timestamps_as_utc() -> None:
    (note,) = parse_notes_document([_raw_note(createdAt="2025-12-01T08:00:00")])

    assert note.created_at == datetime(2025, 12, 1, 8, tzinfo=UTC)


def test_parse_empty_source_becomes_none() -> None:
    (note,) = parse_notes_document([_raw_note(source="")])
    assert note.source is None


def test_parse_rejects_non_list_document() -> None:
    with pytest.raises(ValueError, match="must be a list"):
        parse_notes_document({"notes": []})


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"bullets": []}, "bullets"),
        ({"spark": ""}, "spark"),
        ({"createdAt": 1733475000}, "createdAt"),
        ({"createdAt": "yesterday"}, None),
        ({"tags": "idea"}, "tags"),
        ({"source": 3}, "source"),
    ],
)
def test_parse_rejects_malformed_note(overrides: dict[str, Any], field: str | None) -> None:
    """Errors name the note index and the field at fault."""
    with pytest.raises(ValueError) as excinfo:
        parse_notes_document([_raw_note(), _raw_note(**overrides)])

    if field is not None:
        assert f"notes[1].{field}" in str(excinfo.value)


def test_parse_rejects_bad_bullet() -> None:
    with pytest.raises(ValueError, match=r"notes\[0\]\.bullets\[0\]\.text"):
        parse_notes_document([_raw_note(bullets=[{"id": "b1", "timestamp": "2025-12-01"}])])


def test_parse_rejects_duplicate_note_ids() -> None:
    data = [_raw_note(), _raw_note(spark="Another spark")]

    with pytest.raises(ValueError, match=r"notes\[1\]\.id"):
        parse_notes_document(data)
