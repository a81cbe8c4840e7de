from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from ..schema import SECTION_KINDS

_STRING_ROWS: Dict[str, Any] = {
    "type": "array",
    "items": {"type": "array", "items": {"type": "string"}},
}

# Canonical shape of a saved sheet. Used to report deviations only; loading
# stays tolerant of anything that parses.
DOCUMENT_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Character sheet",
    "type": "object",
    "properties": {
        "characterInfo": {"type": "array", "items": {"type": "string"}},
        **{kind: _STRING_ROWS for kind in SECTION_KINDS},
    },
    "required": ["characterInfo", *SECTION_KINDS],
}

_validator = Draft202012Validator(DOCUMENT_SCHEMA)


def document_problems(document: Any) -> List[str]:
    """List readable deviations of ``document`` from the canonical shape.

    An empty list means the document is exactly what :func:`serialize`
    would produce.
    """
    problems: List[str] = []
    for err in sorted(_validator.iter_errors(document), key=lambda e: [str(p) for p in e.absolute_path]):
        where = ".".join(str(p) for p in err.absolute_path) or "$"
        problems.append(f"At {where}: {err.message}")
    return problems
