from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from platformdirs import user_data_dir

from ..errors import StorageError

logger = logging.getLogger(__name__)

APP_NAME = "charsheet"
DEFAULT_FILENAME = "character.json"


def default_storage_root() -> Path:
    """Per-user data directory for saved sheets."""
    return Path(user_data_dir(appname=APP_NAME))


class CharacterStorage:
    """Filesystem-backed home for a saved sheet.

    Bytes are written atomically (temporary file, fsync, replace) so an
    interrupted save never leaves a truncated document behind.
    """

    def __init__(self, root: Optional[Path] = None, filename: str = DEFAULT_FILENAME) -> None:
        self.root = Path(root) if root is not None else default_storage_root()
        self.path = self.root / filename

    def exists(self) -> bool:
        return self.path.exists()

    def write_bytes(self, data: bytes) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        logger.debug("Writing sheet to temporary file: %s", tmp_path)
        with open(tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, self.path)
        logger.info("Saved character sheet to %s", self.path)
        return self.path

    def read_bytes(self) -> bytes:
        try:
            with open(self.path, "rb") as f:
                return f.read()
        except FileNotFoundError as e:
            raise StorageError(f"No saved sheet at {self.path}") from e
        except OSError as e:
            logger.error("Failed to read %s: %s", self.path, e)
            raise StorageError(f"Unable to read {self.path}: {e}") from e
