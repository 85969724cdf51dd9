import os
import sys
from pathlib import Path

import pytest


def pytest_sessionstart(session):
    # Ensure headless Qt where applicable
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    # Ensure src is on sys.path without needing plugins
    root = Path(__file__).resolve().parents[1]
    src = root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the platformdirs user data folder at a temp directory."""
    import toastnotifier.config as cfgmod

    target = tmp_path / "data"

    class DummyPlatformDirs:
        def __init__(self, appname: str, appauthor: str, roaming: bool = False):
            self.user_data_dir = str(target)

    monkeypatch.setattr(cfgmod, "PlatformDirs", DummyPlatformDirs)
    return target
