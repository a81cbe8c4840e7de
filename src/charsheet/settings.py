from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import List, Optional

import yaml

from .errors import SettingsError
from .schema import CHARACTER_INFO_FIELDS
from .persistence.storage import DEFAULT_FILENAME, default_storage_root

logger = logging.getLogger(__name__)

SETTINGS_ENV = "CHARSHEET_SETTINGS"


@dataclass
class FormSettings:
    character_info: List[str] = field(default_factory=lambda: list(CHARACTER_INFO_FIELDS))


@dataclass
class StorageSettings:
    directory: Optional[str] = None
    filename: str = DEFAULT_FILENAME
    indent: int = 2

    def root(self) -> Path:
        return Path(self.directory).expanduser() if self.directory else default_storage_root()


@dataclass
class LoggingSettings:
    level: str = "INFO"


@dataclass
class Settings:
    form: FormSettings = field(default_factory=FormSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise SettingsError(f"Unable to read settings from {path}: {e}") from e

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        try:
            form = FormSettings(**(data.get("form") or {}))
            storage = StorageSettings(**(data.get("storage") or {}))
            logging_ = LoggingSettings(**(data.get("logging") or {}))
        except TypeError as e:
            raise SettingsError(f"Unknown settings key: {e}") from e
        return Settings(form=form, storage=storage, logging=logging_)

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Load settings from built-in defaults and an optional user override file.

        When ``user_path`` is omitted the CHARSHEET_SETTINGS environment
        variable is consulted.
        """
        try:
            with resources.files("charsheet").joinpath("default_settings.yaml").open("r", encoding="utf-8") as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(Settings())

        if user_path is None and os.getenv(SETTINGS_ENV):
            user_path = Path(os.environ[SETTINGS_ENV])

        user_data = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        settings = cls._from_dict(merged)
        logger.debug("Settings merged: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=False)
        logger.info("Saved settings to %s", path)
