from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from ..entries import EntryCollectionManager
from ..errors import MalformedDocumentError
from ..models import Record, coerce_value
from ..schema import SECTION_KINDS
from .document import document_problems

logger = logging.getLogger(__name__)

CHARACTER_INFO_KEY = "characterInfo"

Document = Dict[str, Any]


def serialize(record: Record) -> Document:
    """Capture a record as a plain document.

    Entries are written as positional value lists in schema order. Every
    section key is present even when the section has no entries.
    """
    data: Document = {CHARACTER_INFO_KEY: list(record.character_info)}
    for kind in SECTION_KINDS:
        data[kind] = record.section(kind).rows()
    return data


def parse_document(data: Union[str, bytes, bytearray]) -> Document:
    """Parse JSON text or bytes into a document mapping.

    Raises MalformedDocumentError if the input is not JSON or its top level
    is not an object.
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedDocumentError(f"not UTF-8 text: {e}") from e
    try:
        parsed = json.loads(data)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(e.msg, e.lineno, e.colno) from e
    except RecursionError as e:
        raise MalformedDocumentError("nesting too deep to parse") from e
    if not isinstance(parsed, dict):
        raise MalformedDocumentError(f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def restore(
    record: Record,
    document: Union[Mapping[str, Any], str, bytes, bytearray],
    manager: Optional[EntryCollectionManager] = None,
) -> Record:
    """Rebuild ``record`` from a document of the shape :func:`serialize` emits.

    Text input is parsed first; if parsing fails the record is left as it
    was. Past that point nothing raises: missing keys, short rows and odd
    value types are filled in with empty strings. Sections that end up with
    no entries get one blank row.
    """
    if isinstance(document, (str, bytes, bytearray)):
        document = parse_document(document)
    elif not isinstance(document, Mapping):
        raise MalformedDocumentError(f"expected a mapping, got {type(document).__name__}")

    problems = document_problems(dict(document))
    if problems:
        logger.warning("Loaded document deviates from the sheet layout (%d issue(s))", len(problems))
        for problem in problems:
            logger.debug("  %s", problem)

    manager = manager or EntryCollectionManager()

    info = _as_list(document.get(CHARACTER_INFO_KEY))
    record.character_info = [_value_at(info, idx) for idx in range(len(record.info_fields))]

    for kind in SECTION_KINDS:
        section = record.section(kind)
        manager.clear_section(section)
        for row in _as_list(document.get(kind)):
            manager.add_entry(section, row if _is_rows(row) else None)

    patched = manager.ensure_default_rows(record)
    logger.info(
        "Restored character sheet (%s)%s",
        ", ".join(f"{s.kind}={len(s)}" for s in record),
        f"; blank rows added to {', '.join(patched)}" if patched else "",
    )
    return record


def save(record: Record, *, indent: int = 2) -> bytes:
    """Encode a record as pretty-printed UTF-8 JSON."""
    data = serialize(record)
    try:
        return json.dumps(data, ensure_ascii=False, indent=indent).encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates cannot be UTF-8 encoded; \u escapes load back identically
        logger.debug("Sheet contains unpaired surrogates; writing ASCII-escaped JSON")
        return json.dumps(data, ensure_ascii=True, indent=indent).encode("utf-8")


def load(
    data: Union[str, bytes, bytearray],
    record: Optional[Record] = None,
    manager: Optional[EntryCollectionManager] = None,
) -> Record:
    """Parse saved bytes and restore them into ``record`` (a new one if omitted)."""
    document = parse_document(data)
    return restore(record if record is not None else Record(), document, manager)


def _value_at(values: Sequence[Any], index: int) -> str:
    return coerce_value(values[index]) if index < len(values) else ""


def _is_rows(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _as_list(value: Any) -> Sequence[Any]:
    return value if _is_rows(value) else ()
