"""Tests for tag helpers."""

from datetime import UTC, datetime

import pytest

from sparkflow.core.tags import (
    TagColor,
    all_tags,
    normalize_tags,
    sort_by_first_tag,
    tag_color,
    tag_counts,
)
from sparkflow.models.note import Note, new_note

NOW = datetime(2025, 12, 6, 9, 30, tzinfo=UTC)


def _note(*tags: str) -> Note:
    return new_note("s", initial_bullet="b", now=NOW, tags=tags)


@pytest.mark.parametrize(
    ("tag", "color"),
    [
        ("stoicism", TagColor.SLATE),
        ("Quote", TagColor.STONE),
        ("mindfulness", TagColor.TEAL),
        ("gardening", TagColor.DEFAULT),
        ("", TagColor.DEFAULT),
    ],
)
def test_tag_color_lookup(tag: str, color: TagColor) -> None:
    assert tag_color(tag) is color


def test_normalize_tags_lowercases_strips_and_dedupes() -> None:
    assert normalize_tags([" Idea ", "idea", "", "  ", "DREAM", "dream"]) == ("idea", "dream")


def test_normalize_tags_rejects_single_string() -> None:
    with pytest.raises(TypeError, match="single string"):
        normalize_tags("idea")  # type: ignore[arg-type]


def test_all_tags_distinct_and_sorted() -> None:
    notes = [_note("quote", "stoicism"), _note("design"), _note("quote"), _note()]

    assert all_tags(notes) == ["design", "quote", "stoicism"]


def test_all_tags_empty() -> None:
    assert all_tags([]) == []


def test_tag_counts_counts_notes() -> None:
    notes = [_note("quote", "stoicism"), _note("quote"), _note("idea")]

    assert tag_counts(notes) == {"idea": 1, "quote": 2, "stoicism": 1}


def test_sort_by_first_tag_groups_and_puts_untagged_last() -> None:
    untagged = _note()
    quote_a = _note("quote", "idea")
    design = _note("Design")
    quote_b = _note("quote")

    result = sort_by_first_tag([untagged, quote_a, design, quote_b])

    assert result == [design, quote_a, quote_b, untagged]
