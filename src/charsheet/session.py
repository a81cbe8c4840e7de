from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Union

from .entries import ConfirmFn, EntryCollectionManager, RenderFn
from .models import Record
from .persistence import codec
from .persistence.storage import CharacterStorage
from .settings import Settings

logger = logging.getLogger(__name__)

ByteSource = Callable[[], bytes]


def on_form_activated(record: Record, manager: Optional[EntryCollectionManager] = None) -> List[str]:
    """Run the default-row policy for a form that has just been shown."""
    return (manager or EntryCollectionManager()).ensure_default_rows(record)


class EditorSession:
    """One open character sheet and the operations the editor offers on it.

    The session owns its Record explicitly; presentation concerns (confirm
    prompts, redraws, file pickers) come in as callables.
    """

    def __init__(
        self,
        record: Optional[Record] = None,
        *,
        confirm: Optional[ConfirmFn] = None,
        renderer: Optional[RenderFn] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.record = record if record is not None else Record(info_fields=self.settings.form.character_info)
        self.entries = EntryCollectionManager(confirm=confirm, renderer=renderer)

    def on_form_activated(self) -> List[str]:
        return on_form_activated(self.record, self.entries)

    def save_bytes(self) -> bytes:
        return codec.save(self.record, indent=self.settings.storage.indent)

    def load_bytes(self, data: Union[str, bytes]) -> Record:
        """Replace the sheet contents with a saved document.

        On MalformedDocumentError the current sheet is left untouched.
        """
        document = codec.parse_document(data)
        return codec.restore(self.record, document, self.entries)

    def load_from(self, read_bytes: ByteSource) -> Record:
        """Load from a byte source such as a file picker callback."""
        return self.load_bytes(read_bytes())

    def storage(self, root: Optional[Path] = None) -> CharacterStorage:
        return CharacterStorage(root or self.settings.storage.root(), self.settings.storage.filename)

    def save_to(self, storage: Optional[CharacterStorage] = None) -> Path:
        storage = storage or self.storage()
        return storage.write_bytes(self.save_bytes())

    def load_stored(self, storage: Optional[CharacterStorage] = None) -> Record:
        storage = storage or self.storage()
        return self.load_from(storage.read_bytes)
