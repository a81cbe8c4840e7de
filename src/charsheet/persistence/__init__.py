"""Saving and loading character sheets.

- ``codec``: record <-> JSON document, tolerant restoration
- ``document``: JSON Schema of the canonical layout, used for diagnostics
- ``storage``: atomic file storage under a fixed default name
"""

from .codec import load, parse_document, restore, save, serialize
from .document import DOCUMENT_SCHEMA, document_problems
from .storage import DEFAULT_FILENAME, CharacterStorage, default_storage_root

__all__ = [
    "serialize",
    "restore",
    "save",
    "load",
    "parse_document",
    "DOCUMENT_SCHEMA",
    "document_problems",
    "CharacterStorage",
    "DEFAULT_FILENAME",
    "default_storage_root",
]
