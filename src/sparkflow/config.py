"""Configuration constants for Sparkflow."""

import os
from pathlib import Path

# Name of the notes document inside the data directory.
NOTES_FILENAME: str = "notes.json"

# Environment variable overriding the data directory.
DATA_DIR_ENV: str = "SPARKFLOW_DATA_DIR"

# Directory with data. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/sparkflow").expanduser(),
    Path("~/.sparkflow").expanduser(),
    Path("~/.config/sparkflow").expanduser(),
]


def resolve_data_directory() -> Path:
    """Pick the data directory.

    ``$SPARKFLOW_DATA_DIR`` wins if set. Otherwise the first existing entry
    of ``DATA_DIRECTORIES``, falling back to the first entry, which is
    created on first save.
    """
    env_dir = os.environ.get(DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]


def notes_path(data_dir: Path | None = None) -> Path:
    return (data_dir or resolve_data_directory()) / NOTES_FILENAME
