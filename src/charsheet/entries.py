from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

from .errors import EntryNotFoundError
from .models import Entry, Record, Section
from .schema import ACHIEVEMENTS, ATTACKS, GM_NOTES, INVENTORY, PLAYER_NOTES, SKILLS

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[Entry], bool]
RenderFn = Callable[[Section], None]


def _always_confirm(entry: Entry) -> bool:
    return True


class EntryCollectionManager:
    """Adds and removes entries in a record's sections.

    Removal goes through an injected ``confirm`` capability (the UI's yes/no
    prompt). When ``renderer`` is given it is called with the section after
    every change so a presentation layer can redraw it.

    The manager never repopulates a section on its own after a removal;
    callers run :meth:`ensure_default_rows` when state settles.
    """

    def __init__(self, confirm: Optional[ConfirmFn] = None, renderer: Optional[RenderFn] = None) -> None:
        self._confirm = confirm or _always_confirm
        self._renderer = renderer

    def add_entry(self, section: Section, initial_values: Optional[Sequence[Any]] = None) -> Entry:
        """Append a new entry to the end of ``section``.

        Values are matched to schema fields by position. Short input is
        padded with empty strings and extra values are dropped.
        """
        values = list(initial_values) if initial_values is not None else []
        if len(values) > section.schema.arity:
            logger.debug(
                "Dropping %d extra value(s) for %s entry", len(values) - section.schema.arity, section.kind
            )
        entry = Entry(schema=section.schema, values=values) if values else Entry.blank(section.schema)
        section.entries.append(entry)
        self._render(section)
        return entry

    def remove_entry(self, section: Section, entry: Entry) -> bool:
        """Remove ``entry`` if the confirm capability agrees.

        Returns True when the entry was removed, False when the user declined.
        """
        index = section.index_of(entry)
        if index is None:
            raise EntryNotFoundError(f"Entry is not part of the {section.kind} section")
        if not self._confirm(entry):
            logger.debug("Removal of %s entry #%d declined", section.kind, index)
            return False
        del section.entries[index]
        logger.debug("Removed %s entry #%d (%d left)", section.kind, index, len(section))
        self._render(section)
        return True

    def clear_section(self, section: Section) -> None:
        section.entries.clear()
        self._render(section)

    def ensure_default_rows(self, record: Record) -> List[str]:
        """Give every empty section exactly one blank entry.

        Sections are visited in registry order. Returns the kinds that were
        patched; a second call on the same record returns an empty list.
        """
        patched: List[str] = []
        for section in record:
            if section.is_empty():
                self.add_entry(section)
                patched.append(section.kind)
        if patched:
            logger.debug("Added default rows to: %s", ", ".join(patched))
        return patched

    # One helper per "Add" button on the sheet

    def add_attack(self, record: Record, values: Optional[Sequence[Any]] = None) -> Entry:
        return self.add_entry(record.section(ATTACKS), values)

    def add_skill(self, record: Record, values: Optional[Sequence[Any]] = None) -> Entry:
        return self.add_entry(record.section(SKILLS), values)

    def add_achievement(self, record: Record, values: Optional[Sequence[Any]] = None) -> Entry:
        return self.add_entry(record.section(ACHIEVEMENTS), values)

    def add_item(self, record: Record, values: Optional[Sequence[Any]] = None) -> Entry:
        return self.add_entry(record.section(INVENTORY), values)

    def add_player_note(self, record: Record, values: Optional[Sequence[Any]] = None) -> Entry:
        return self.add_entry(record.section(PLAYER_NOTES), values)

    def add_gm_note(self, record: Record, values: Optional[Sequence[Any]] = None) -> Entry:
        return self.add_entry(record.section(GM_NOTES), values)

    def _render(self, section: Section) -> None:
        if self._renderer is not None:
            self._renderer(section)


def ensure_default_rows(record: Record) -> List[str]:
    """Module-level shortcut using a manager with no UI hooks."""
    return EntryCollectionManager().ensure_default_rows(record)
