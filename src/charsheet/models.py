from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from .schema import CHARACTER_INFO_FIELDS, SCHEMAS, SECTION_KINDS, FieldSchema, get_schema


def coerce_value(value: Any) -> str:
    """Turn a loosely typed document value into a form field string.

    Strings are kept verbatim and numbers are stringified. Anything else
    (None, booleans, containers) becomes an empty field.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return ""


@dataclass
class Entry:
    """One row of a repeated section.

    The value list always has exactly one slot per schema field.
    """

    schema: FieldSchema
    values: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.values = self._fit(self.values)

    def _fit(self, values: Sequence[Any]) -> List[str]:
        fitted = [coerce_value(v) for v in list(values)[: self.schema.arity]]
        fitted.extend([""] * (self.schema.arity - len(fitted)))
        return fitted

    @classmethod
    def blank(cls, schema: FieldSchema) -> "Entry":
        return cls(schema=schema)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __getitem__(self, key: Union[int, str]) -> str:
        if isinstance(key, str):
            key = self.schema.index_of(key)
        return self.values[key]

    def __setitem__(self, key: Union[int, str], value: Any) -> None:
        if isinstance(key, str):
            key = self.schema.index_of(key)
        self.values[key] = coerce_value(value)

    def set(self, field_name: str, value: Any) -> None:
        self[field_name] = value

    def as_dict(self) -> Dict[str, str]:
        return dict(zip(self.schema.fields, self.values))

    def is_blank(self) -> bool:
        return all(v == "" for v in self.values)


@dataclass
class Section:
    """Ordered entries sharing one field schema."""

    schema: FieldSchema
    entries: List[Entry] = field(default_factory=list)

    @property
    def kind(self) -> str:
        return self.schema.kind

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> Entry:
        return self.entries[index]

    def is_empty(self) -> bool:
        return not self.entries

    def index_of(self, entry: Entry) -> Optional[int]:
        """Position of this exact entry object, or None."""
        for idx, candidate in enumerate(self.entries):
            if candidate is entry:
                return idx
        return None

    def rows(self) -> List[List[str]]:
        return [list(e.values) for e in self.entries]


@dataclass
class Record:
    """A whole character sheet: positional scalar fields plus six sections."""

    info_fields: Tuple[str, ...] = CHARACTER_INFO_FIELDS
    character_info: List[str] = field(default_factory=list)
    sections: Dict[str, Section] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.info_fields = tuple(self.info_fields)
        info = [coerce_value(v) for v in self.character_info[: len(self.info_fields)]]
        info.extend([""] * (len(self.info_fields) - len(info)))
        self.character_info = info
        # Every kind is present and in registry order, whatever was passed in
        self.sections = {
            kind: self.sections[kind] if kind in self.sections else Section(schema=SCHEMAS[kind])
            for kind in SECTION_KINDS
        }

    def section(self, kind: str) -> Section:
        get_schema(kind)
        return self.sections[kind]

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections.values())

    @property
    def attacks(self) -> Section:
        return self.sections["attacks"]

    @property
    def skills(self) -> Section:
        return self.sections["skills"]

    @property
    def achievements(self) -> Section:
        return self.sections["achievements"]

    @property
    def inventory(self) -> Section:
        return self.sections["inventory"]

    @property
    def player_notes(self) -> Section:
        return self.sections["playerNotes"]

    @property
    def gm_notes(self) -> Section:
        return self.sections["gmNotes"]

    def get_info(self, label: str) -> str:
        return self.character_info[self._info_index(label)]

    def set_info(self, label: str, value: Any) -> None:
        self.character_info[self._info_index(label)] = coerce_value(value)

    def _info_index(self, label: str) -> int:
        try:
            return self.info_fields.index(label)
        except ValueError:
            raise KeyError(f"Unknown character info field: {label!r}") from None
