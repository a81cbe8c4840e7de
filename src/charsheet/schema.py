"""Field schemas for the repeated sections of a character sheet.

The registry is built once at import time and exposed read-only. Section
order here is the order used for default-row patching and serialization.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

ATTACKS = "attacks"
SKILLS = "skills"
ACHIEVEMENTS = "achievements"
INVENTORY = "inventory"
PLAYER_NOTES = "playerNotes"
GM_NOTES = "gmNotes"

SECTION_KINDS: Tuple[str, ...] = (
    ATTACKS,
    SKILLS,
    ACHIEVEMENTS,
    INVENTORY,
    PLAYER_NOTES,
    GM_NOTES,
)

# Labels of the scalar inputs on the default form. Values are stored
# positionally, so only the count and order matter to the document format.
CHARACTER_INFO_FIELDS: Tuple[str, ...] = (
    "Character Name",
    "Player Name",
    "Class",
    "Level",
    "Ancestry",
    "Background",
    "Experience",
    "Hit Points",
    "Defense",
    "Speed",
    "Strength",
    "Dexterity",
    "Constitution",
    "Intelligence",
    "Wisdom",
    "Charisma",
)


@dataclass(frozen=True)
class FieldSchema:
    """Ordered field names for one section kind."""

    kind: str
    fields: Tuple[str, ...]
    multiline: bool = False

    @property
    def arity(self) -> int:
        return len(self.fields)

    def index_of(self, field_name: str) -> int:
        try:
            return self.fields.index(field_name)
        except ValueError:
            raise KeyError(f"{self.kind} has no field {field_name!r}") from None


SCHEMAS: Mapping[str, FieldSchema] = MappingProxyType(
    {
        ATTACKS: FieldSchema(ATTACKS, ("Attack Name", "Type", "Ability Used", "Attack Bonus", "Damage")),
        SKILLS: FieldSchema(SKILLS, ("Skill Name", "Base Ability", "Level", "Benefit")),
        ACHIEVEMENTS: FieldSchema(ACHIEVEMENTS, ("Achievement Name", "How Earned", "Benefits")),
        INVENTORY: FieldSchema(INVENTORY, ("Item Name", "Type", "Benefits / Effects")),
        PLAYER_NOTES: FieldSchema(PLAYER_NOTES, ("Note",), multiline=True),
        GM_NOTES: FieldSchema(GM_NOTES, ("Note",), multiline=True),
    }
)


def get_schema(kind: str) -> FieldSchema:
    """Look up the schema for a section kind, raising KeyError for unknown kinds."""
    try:
        return SCHEMAS[kind]
    except KeyError:
        raise KeyError(f"Unknown section kind: {kind!r}") from None
