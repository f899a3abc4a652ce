"""Protocols for dependency injection in the note store."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StorageProtocol(Protocol):
    """Protocol for the backing store of the notes document."""

    def read_document(self) -> Any | None:
        """Return the decoded document, or None if nothing was stored yet."""
        ...

    def write_document(self, data: Any) -> None:
        """Replace the stored document with ``data``."""
        ...
