from charsheet.models import Record
from charsheet.persistence import DOCUMENT_SCHEMA, document_problems, serialize


def test_serialized_record_has_no_problems():
    assert document_problems(serialize(Record())) == []


def test_missing_sections_reported():
    problems = document_problems({"characterInfo": []})
    assert len(problems) == 6
    assert problems[0] == "At $: 'attacks' is a required property"


def test_wrong_leaf_type_reported_with_path():
    doc = serialize(Record())
    doc["skills"] = [["Swim", 3]]
    problems = document_problems(doc)
    assert problems == ["At skills.0.1: 3 is not of type 'string'"]


def test_schema_lists_every_section():
    assert DOCUMENT_SCHEMA["required"] == [
        "characterInfo",
        "attacks",
        "skills",
        "achievements",
        "inventory",
        "playerNotes",
        "gmNotes",
    ]
