from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .errors import CharSheetError
from .logging_config import configure_logging
from .models import Entry, Section
from .persistence import document_problems, parse_document
from .persistence.storage import CharacterStorage
from .schema import SECTION_KINDS
from .session import EditorSession
from .settings import Settings

logger = logging.getLogger(__name__)

REMOVE_PROMPT = "Are you sure you want to remove this entry? [y/N] "


def format_section(section: Section) -> str:
    lines = [f"== {section.kind} =="]
    for idx, entry in enumerate(section, start=1):
        lines.append(f"  #{idx}")
        for name, value in entry.as_dict().items():
            if section.schema.multiline and "\n" in value:
                value = value.replace("\n", "\n      ")
            lines.append(f"    {name}: {value}")
    return "\n".join(lines)


def prompt_confirm(entry: Entry, ask: Optional[Callable[[str], str]] = None) -> bool:
    try:
        answer = (ask or input)(REMOVE_PROMPT)
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _sheet_storage(args: argparse.Namespace, settings: Settings) -> CharacterStorage:
    if args.file:
        path = Path(args.file)
        return CharacterStorage(path.parent, path.name)
    return CharacterStorage(settings.storage.root(), settings.storage.filename)


def _open_session(args: argparse.Namespace, settings: Settings, **kwargs) -> Tuple[EditorSession, CharacterStorage]:
    storage = _sheet_storage(args, settings)
    session = EditorSession(settings=settings, **kwargs)
    session.load_stored(storage)
    return session, storage


def _cmd_new(args: argparse.Namespace, settings: Settings) -> int:
    storage = _sheet_storage(args, settings)
    if storage.exists() and not args.force:
        print(f"Refusing to overwrite {storage.path} (use --force)", file=sys.stderr)
        return 1
    session = EditorSession(settings=settings)
    session.on_form_activated()
    print(f"Created {session.save_to(storage)}")
    return 0


def _cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    session, _ = _open_session(args, settings)
    record = session.record
    print("== characterInfo ==")
    for label, value in zip(record.info_fields, record.character_info):
        print(f"  {label}: {value}")
    for section in record:
        if args.section and section.kind != args.section:
            continue
        print(format_section(section))
    return 0


def _cmd_add(args: argparse.Namespace, settings: Settings) -> int:
    session, storage = _open_session(args, settings)
    section = session.record.section(args.kind)
    session.entries.add_entry(section, args.values)
    session.save_to(storage)
    print(f"Added {args.kind} entry #{len(section)}")
    return 0


def _cmd_remove(args: argparse.Namespace, settings: Settings) -> int:
    confirm = (lambda entry: True) if args.yes else prompt_confirm
    session, storage = _open_session(args, settings, confirm=confirm)
    section = session.record.section(args.kind)
    if not 1 <= args.index <= len(section):
        print(f"No {args.kind} entry #{args.index} (have {len(section)})", file=sys.stderr)
        return 1
    if not session.entries.remove_entry(section, section[args.index - 1]):
        print("Removal cancelled")
        return 0
    session.on_form_activated()
    session.save_to(storage)
    print(f"Removed {args.kind} entry #{args.index}")
    return 0


def _cmd_set_info(args: argparse.Namespace, settings: Settings) -> int:
    session, storage = _open_session(args, settings)
    session.record.set_info(args.label, args.value)
    session.save_to(storage)
    print(f"{args.label}: {session.record.get_info(args.label)}")
    return 0


def _cmd_check(args: argparse.Namespace, settings: Settings) -> int:
    storage = _sheet_storage(args, settings)
    document = parse_document(storage.read_bytes())
    problems = document_problems(document)
    if not problems:
        print(f"OK: {storage.path}")
        return 0
    print(f"{storage.path} deviates from the sheet layout (it will still load):")
    for problem in problems:
        print(f" - {problem}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="charsheet", description="Character sheet editor")
    p.add_argument("-f", "--file", help="Sheet file (defaults to the configured storage location)")
    p.add_argument("--settings", help="YAML settings override file", default=None)
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    n = sub.add_parser("new", help="Create a blank sheet")
    n.add_argument("--force", action="store_true", help="Overwrite an existing sheet")
    n.set_defaults(func=_cmd_new)

    s = sub.add_parser("show", help="Print the sheet")
    s.add_argument("--section", choices=SECTION_KINDS, default=None)
    s.set_defaults(func=_cmd_show)

    a = sub.add_parser("add", help="Append an entry to a section")
    a.add_argument("kind", choices=SECTION_KINDS)
    a.add_argument("values", nargs="*", help="Field values in schema order")
    a.set_defaults(func=_cmd_add)

    r = sub.add_parser("remove", help="Remove an entry (1-based index)")
    r.add_argument("kind", choices=SECTION_KINDS)
    r.add_argument("index", type=int)
    r.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    r.set_defaults(func=_cmd_remove)

    i = sub.add_parser("set-info", help="Set a character info field by label")
    i.add_argument("label")
    i.add_argument("value")
    i.set_defaults(func=_cmd_set_info)

    c = sub.add_parser("check", help="Report deviations from the sheet layout")
    c.set_defaults(func=_cmd_check)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.load(Path(args.settings) if args.settings else None)
        configure_logging(settings.logging.level, debug=args.debug)
        return args.func(args, settings)
    except (CharSheetError, KeyError) as e:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
