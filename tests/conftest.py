import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Keep a developer's own settings file and data dir out of test runs."""
    monkeypatch.delenv("CHARSHEET_SETTINGS", raising=False)
    monkeypatch.delenv("CHARSHEET_LOG_LEVEL", raising=False)
    monkeypatch.setattr(
        "charsheet.persistence.storage.user_data_dir", lambda appname: str(tmp_path / "data" / appname)
    )
