from __future__ import annotations

from typing import Optional


class CharSheetError(Exception):
    """Base error for character sheet domain exceptions."""


class MalformedDocumentError(CharSheetError):
    """Raised when a character document cannot be parsed as structured data."""

    def __init__(self, message: str, lineno: Optional[int] = None, colno: Optional[int] = None):
        self.message = message
        self.lineno = lineno
        self.colno = colno
        location = f" (line {lineno}, column {colno})" if lineno is not None and colno is not None else ""
        super().__init__(f"Malformed character document{location}: {message}")


class EntryNotFoundError(CharSheetError):
    """Raised when removing an entry that does not belong to the section."""


class StorageError(CharSheetError):
    """Raised when the storage collaborator cannot read a saved sheet."""


class SettingsError(CharSheetError):
    """Raised when a settings file cannot be read."""
