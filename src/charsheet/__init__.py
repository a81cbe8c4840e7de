"""
Character sheet editor core.

Headless model of a tabletop character sheet:
- Scalar character info fields plus six repeated sections
- Entry add/remove with an injected confirmation step and a default-row policy
- Lossless JSON save/load that tolerates partial documents

UI layers (desktop, web, CLI) should import and compose these services.
"""
from .schema import SCHEMAS, SECTION_KINDS, CHARACTER_INFO_FIELDS, FieldSchema, get_schema
from .models import Entry, Section, Record
from .entries import EntryCollectionManager, ensure_default_rows
from .persistence import serialize, restore, save, load
from .session import EditorSession, on_form_activated
from .errors import (
    CharSheetError,
    MalformedDocumentError,
    EntryNotFoundError,
    StorageError,
    SettingsError,
)

__all__ = [
    "SCHEMAS",
    "SECTION_KINDS",
    "CHARACTER_INFO_FIELDS",
    "FieldSchema",
    "get_schema",
    "Entry",
    "Section",
    "Record",
    "EntryCollectionManager",
    "ensure_default_rows",
    "serialize",
    "restore",
    "save",
    "load",
    "EditorSession",
    "on_form_activated",
    "CharSheetError",
    "MalformedDocumentError",
    "EntryNotFoundError",
    "StorageError",
    "SettingsError",
]
