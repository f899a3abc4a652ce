"""Sparkflow: a personal commonplace book of sparks and reflections."""

from sparkflow.core.storage.json_file import JsonFileStorage
from sparkflow.models.note import Bullet, Note, NoteValidationError
from sparkflow.protocols import StorageProtocol
from sparkflow.store import NoteStore, open_store

__all__ = [
    "Bullet",
    "JsonFileStorage",
    "Note",
    "NoteStore",
    "NoteValidationError",
    "StorageProtocol",
    "open_store",
]
