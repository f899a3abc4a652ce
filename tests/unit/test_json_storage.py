"""Tests for JsonFileStorage: single-file JSON with atomic replace."""

import json
import os
import stat
from pathlib import Path

import pytest

from sparkflow.core.storage.json_file import JsonFileStorage
from sparkflow.protocols import StorageProtocol


def test_satisfies_storage_protocol(tmp_path: Path) -> None:
    assert isinstance(JsonFileStorage(tmp_path / "notes.json"), StorageProtocol)


def test_read_missing_file_returns_none(tmp_path: Path) -> None:
    assert JsonFileStorage(tmp_path / "notes.json").read_document() is None


def test_write_then_read(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path / "notes.json")

    storage.write_document([{"spark": "café ✨"}])

    assert storage.read_document() == [{"spark": "café ✨"}]
    assert "café ✨" in (tmp_path / "notes.json").read_text(encoding="utf-8")


def test_write_creates_parent_directories(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path / "a" / "b" / "notes.json")

    storage.write_document([])

    assert (tmp_path / "a" / "b" / "notes.json").exists()


def test_write_overwrites_whole_document(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path / "notes.json")
    storage.write_document([1, 2, 3])

    storage.write_document([4])

    assert json.loads((tmp_path / "notes.json").read_text()) == [4]


def test_read_corrupt_file_raises(tmp_path: Path) -> None:
    (tmp_path / "notes.json").write_text("[{not json")

    with pytest.raises(ValueError):
        JsonFileStorage(tmp_path / "notes.json").read_document()


def test_read_deeply_nested_file_raises_value_error(tmp_path: Path) -> None:
    (tmp_path / "notes.json").write_text("[" * 200_000)

    with pytest.raises(ValueError, match="nested too deeply"):
        JsonFileStorage(tmp_path / "notes.json").read_document()


def test_failed_replace_keeps_previous_document(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A crash before the rename leaves the old file and no temp files behind."""
    storage = JsonFileStorage(tmp_path / "notes.json")
    storage.write_document(["old"])

    def boom(src: str, dst: str) -> None:
        raise OSError("disk full")

    monkeypatch.setattr("sparkflow.core.storage.json_file.os.replace", boom)

    with pytest.raises(OSError, match="disk full"):
        storage.write_document(["new"])

    assert storage.read_document() == ["old"]
    assert [p.name for p in tmp_path.iterdir()] == ["notes.json"]


def test_unserializable_data_leaves_file_untouched(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path / "notes.json")
    storage.write_document(["old"])

    with pytest.raises(TypeError):
        storage.write_document([object()])

    assert storage.read_document() == ["old"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
def test_written_file_is_owner_only(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path / "notes.json")

    storage.write_document([])

    mode = stat.S_IMODE((tmp_path / "notes.json").stat().st_mode)
    assert mode == 0o600
