from __future__ import annotations

import logging
from types import SimpleNamespace
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib  # Python 3.11+
except ImportError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]

from platformdirs import PlatformDirs

from .services.delivery import BACKENDS

log = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"
APP_NAME = "ToastNotifier"
APP_AUTHOR = "ToastNotifier"

# Embedded default config, written to the data folder on first use
_DEFAULT_CONFIG_TOML = b"""
[app]
app_id_prefix = "ToastNotifier"
timeout_seconds = 30
throw_on_fail = true
backend = "auto"
log_level = "WARNING"
"""


def _load_from_path(p: Path) -> Dict[str, Any]:
    with p.open("rb") as f:
        return tomllib.load(f)


def data_dir() -> Path:
    dirs = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR, roaming=False)
    p = Path(dirs.user_data_dir)
    p.mkdir(parents=True, exist_ok=True)
    return p


def _candidate_config_paths() -> list[Path]:
    """Return likely config paths in decreasing priority for seeding the data folder."""
    candidates: list[Path] = []
    # Project root (development runs)
    dev_root = Path(__file__).resolve().parents[2]
    candidates.append(dev_root / CONFIG_FILENAME)
    return candidates


def _write_default_to(path: Path) -> None:
    path.write_bytes(_DEFAULT_CONFIG_TOML)
    log.info("Created default config at %s", path)


def load_config(path: Optional[Path | str] = None) -> SimpleNamespace:
    """Load configuration into a SimpleNamespace.

    Behavior:
    - If an explicit `path` is provided and the file doesn't exist, raise FileNotFoundError.
    - If `path` is None, use the user data folder; if no config exists there, seed it from a
      project copy or the embedded defaults, then load it.
    """
    data: Dict[str, Any]

    if path is not None:
        cfg_path = Path(path)
        if not cfg_path.exists():
            raise FileNotFoundError(f"Config file not found at {cfg_path}")
        data = _load_from_path(cfg_path)
    else:
        user_cfg = data_dir() / CONFIG_FILENAME
        if not user_cfg.exists():
            seeded = False
            for cand in _candidate_config_paths():
                try:
                    if cand.exists():
                        user_cfg.write_bytes(cand.read_bytes())
                        log.info("Copied default config from %s to %s", cand, user_cfg)
                        seeded = True
                        break
                except OSError as e:
                    log.debug("Could not seed config from %s: %s", cand, e)
            if not seeded:
                _write_default_to(user_cfg)
        data = _load_from_path(user_cfg)

    # Minimal validation and defaults
    app = data.get("app", {})
    app_id_prefix = str(app.get("app_id_prefix", APP_NAME))
    timeout_seconds = float(app.get("timeout_seconds", 30))
    throw_on_fail = bool(app.get("throw_on_fail", True))
    backend = str(app.get("backend", "auto")).lower()
    log_level = str(app.get("log_level", "WARNING")).upper()

    if timeout_seconds <= 0:
        log.warning("timeout_seconds must be positive, using 30 instead of %s", timeout_seconds)
        timeout_seconds = 30.0
    if backend not in BACKENDS:
        log.warning("Unknown backend %r in config, using 'auto'", backend)
        backend = "auto"

    ns = SimpleNamespace(
        app=SimpleNamespace(
            app_id_prefix=app_id_prefix,
            timeout_seconds=timeout_seconds,
            throw_on_fail=throw_on_fail,
            backend=backend,
            log_level=log_level,
        )
    )
    log.debug(
        "Loaded config: app_id_prefix=%s, timeout_seconds=%s, throw_on_fail=%s, backend=%s, log_level=%s",
        app_id_prefix, timeout_seconds, throw_on_fail, backend, log_level,
    )
    return ns
