from __future__ import annotations

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from recipedocs.config import default_config  # noqa: E402
from recipedocs.config import EffectiveConfig  # noqa: E402


@pytest.fixture()
def catalogs_dir() -> Path:
    return ROOT / "fixtures" / "catalogs"


@pytest.fixture()
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture()
def cfg(tmp_path: Path) -> EffectiveConfig:
    return default_config(str(tmp_path))
