from pathlib import Path

import pytest

from charsheet.errors import SettingsError
from charsheet.schema import CHARACTER_INFO_FIELDS
from charsheet.settings import Settings


def test_defaults_from_packaged_yaml(monkeypatch):
    monkeypatch.delenv("CHARSHEET_SETTINGS", raising=False)
    settings = Settings.load()
    assert settings.form.character_info == list(CHARACTER_INFO_FIELDS)
    assert settings.storage.filename == "character.json"
    assert settings.storage.indent == 2
    assert settings.storage.directory is None
    assert settings.logging.level == "INFO"


def test_user_overlay_is_deep_merged(tmp_path: Path):
    user = tmp_path / "settings.yaml"
    user.write_text("storage:\n  directory: /tmp/sheets\nform:\n  character_info: [Name, Class]\n", encoding="utf-8")
    settings = Settings.load(user)
    assert settings.form.character_info == ["Name", "Class"]
    assert settings.storage.directory == "/tmp/sheets"
    # Untouched keys keep their defaults
    assert settings.storage.filename == "character.json"
    assert settings.storage.root() == Path("/tmp/sheets")


def test_env_var_points_to_user_file(tmp_path: Path, monkeypatch):
    user = tmp_path / "env.yaml"
    user.write_text("logging:\n  level: DEBUG\n", encoding="utf-8")
    monkeypatch.setenv("CHARSHEET_SETTINGS", str(user))
    assert Settings.load().logging.level == "DEBUG"


def test_missing_user_file_falls_back(tmp_path: Path, caplog):
    settings = Settings.load(tmp_path / "absent.yaml")
    assert settings.storage.filename == "character.json"
    assert "not found" in caplog.text


def test_unreadable_yaml_raises(tmp_path: Path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("form: [unclosed\n", encoding="utf-8")
    with pytest.raises(SettingsError):
        Settings.load(bad)


def test_save_and_reload(tmp_path: Path):
    settings = Settings()
    settings.storage.filename = "hero.json"
    out = tmp_path / "cfg" / "settings.yaml"
    settings.save(out)
    assert Settings.load(out).storage.filename == "hero.json"


def test_unknown_key_raises(tmp_path: Path):
    user = tmp_path / "settings.yaml"
    user.write_text("logging:\n  verbosity: loud\n", encoding="utf-8")
    with pytest.raises(SettingsError):
        Settings.load(user)
