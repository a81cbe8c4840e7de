import pytest

from charsheet.entries import EntryCollectionManager, ensure_default_rows
from charsheet.errors import EntryNotFoundError
from charsheet.models import Entry, Record, Section
from charsheet.schema import SCHEMAS, SECTION_KINDS


def test_add_entry_pads_short_values():
    mgr = EntryCollectionManager()
    record = Record()
    entry = mgr.add_item(record, ["a"])
    assert entry.values == ["a", "", ""]
    assert record.inventory.entries == [entry]


def test_add_entry_truncates_extra_values():
    mgr = EntryCollectionManager()
    record = Record()
    entry = mgr.add_player_note(record, ["first", "second", "third"])
    assert entry.values == ["first"]


def test_add_entry_appends_in_order():
    mgr = EntryCollectionManager()
    record = Record()
    mgr.add_skill(record, ["Stealth"])
    mgr.add_skill(record, ["Climb"])
    assert [e["Skill Name"] for e in record.skills] == ["Stealth", "Climb"]


def test_entry_field_access_by_name():
    mgr = EntryCollectionManager()
    record = Record()
    attack = mgr.add_attack(record)
    attack.set("Damage", "2d6")
    attack["Attack Bonus"] = 4
    assert attack.values == ["", "", "", "4", "2d6"]
    with pytest.raises(KeyError):
        attack.set("Range", "30 ft")


def test_ensure_default_rows_fills_every_section_once():
    record = Record()
    patched = ensure_default_rows(record)
    assert patched == list(SECTION_KINDS)
    for section in record:
        assert len(section) == 1
        assert section[0].is_blank()
        assert len(section[0]) == SCHEMAS[section.kind].arity

    # Second call is a no-op
    snapshot = [list(s.entries) for s in record]
    assert ensure_default_rows(record) == []
    assert [list(s.entries) for s in record] == snapshot


def test_ensure_default_rows_leaves_populated_sections_alone():
    mgr = EntryCollectionManager()
    record = Record()
    mgr.add_attack(record, ["Claw"])
    mgr.add_attack(record, ["Bite"])
    patched = mgr.ensure_default_rows(record)
    assert "attacks" not in patched
    assert len(record.attacks) == 2


def test_remove_entry_confirmed():
    mgr = EntryCollectionManager(confirm=lambda entry: True)
    record = Record()
    first = mgr.add_achievement(record, ["Dragon Slayer"])
    second = mgr.add_achievement(record, ["Pacifist"])
    assert mgr.remove_entry(record.achievements, first) is True
    assert record.achievements.entries == [second]


def test_remove_entry_does_not_repopulate():
    mgr = EntryCollectionManager()
    record = Record()
    only = mgr.add_gm_note(record, ["secret"])
    assert mgr.remove_entry(record.gm_notes, only)
    assert record.gm_notes.is_empty()
    mgr.ensure_default_rows(record)
    assert len(record.gm_notes) == 1


def test_remove_entry_declined_keeps_identical_entries():
    asked = []

    def decline(entry):
        asked.append(entry)
        return False

    mgr = EntryCollectionManager(confirm=decline)
    record = Record()
    entries = [mgr.add_skill(record, [name]) for name in ("A", "B", "C")]
    before = list(record.skills.entries)

    assert mgr.remove_entry(record.skills, entries[1]) is False
    assert asked == [entries[1]]
    assert len(record.skills.entries) == len(before)
    assert all(a is b for a, b in zip(record.skills.entries, before))


def test_remove_uses_identity_not_equality():
    mgr = EntryCollectionManager()
    record = Record()
    first = mgr.add_item(record, ["Rope"])
    second = mgr.add_item(record, ["Rope"])
    assert first == second
    mgr.remove_entry(record.inventory, second)
    assert record.inventory.entries[0] is first


def test_remove_foreign_entry_raises():
    mgr = EntryCollectionManager()
    section = Section(schema=SCHEMAS["skills"])
    stray = Entry(schema=SCHEMAS["skills"], values=["X"])
    with pytest.raises(EntryNotFoundError):
        mgr.remove_entry(section, stray)


def test_renderer_called_on_changes():
    rendered = []
    mgr = EntryCollectionManager(renderer=lambda section: rendered.append(section.kind))
    record = Record()
    entry = mgr.add_attack(record)
    mgr.remove_entry(record.attacks, entry)
    assert rendered == ["attacks", "attacks"]


def test_unknown_section_kind():
    with pytest.raises(KeyError):
        Record().section("spells")


def test_add_entry_without_values_is_blank():
    mgr = EntryCollectionManager()
    record = Record()
    entry = mgr.add_entry(record.achievements)
    assert entry == Entry.blank(SCHEMAS["achievements"])
    assert entry.values == ["", "", ""]
