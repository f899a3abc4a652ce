"""Single-file JSON storage with atomic replace."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from loguru import logger


class JsonFileStorage:
    """Read and overwrite one JSON document on disk.

    Writes go to a temporary file in the same directory which is then renamed
    over the target, so readers only ever see the previous or the new
    document, never a partial one.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def __repr__(self) -> str:
        return f"JsonFileStorage({str(self.path)!r})"

    def read_document(self) -> Any | None:
        """Read and decode the document.

        Returns:
            Decoded JSON if the file exists, None if it does not.
            Raises on all other errors; a document nested too deeply to decode
            raises ValueError.
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                contents = f.read()
        except FileNotFoundError:
            return None
        try:
            return json.loads(contents)
        except RecursionError as e:
            msg = f"{self.path} is nested too deeply to decode"
            raise ValueError(msg) from e

    def write_document(self, data: Any) -> None:
        """Serialize ``data`` and atomically replace the document with it."""
        contents = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(contents)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote {} bytes to {}", len(contents), self.path)
