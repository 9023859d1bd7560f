from dotenv import dotenv_values
import os
from pathlib import Path
from functools import lru_cache

import yaml

from pulsecheck.utils import _find_project_root

_ENV_LOADED_MARKER = "_PULSECHECK_ENV_LOADED"
_TRUTHY = frozenset({"1", "true", "yes", "on", "y"})


def load_env_once(dotenv_path: str | None = None):
    """Load settings from .env into os.environ, once per process.

    Values already present in the environment are left untouched.
    """
    if os.environ.get(_ENV_LOADED_MARKER):
        return
    env_file = Path(dotenv_path or ".env")
    if env_file.exists():
        for key, value in dotenv_values(env_file).items():
            if value is None or key in os.environ:
                continue
            os.environ[key] = str(value)
    os.environ[_ENV_LOADED_MARKER] = "1"


DEFAULT_CONFIG = {
    "app": {"title": "PulseCheck", "default_theme": "dark"},
    "store": {"path": "data/local_store.json"},
    "scoring": {"variant": "detailed"},
    "animation": {
        "interval_s": 0.5,
        "total_delay_s": 2.5,
        "counter_tick_s": 0.02,
        "counter_max_frames": 60,
    },
}


def load_config(config_path: str | Path | None = None) -> dict:
    """Read config.yaml and fill in any section or key it leaves out from DEFAULT_CONFIG."""
    p = Path(config_path) if config_path else _find_project_root() / "config" / "config.yaml"
    cfg: dict = {}
    if p.exists():
        with p.open("r") as f:
            cfg = yaml.safe_load(f) or {}
    for section, defaults in DEFAULT_CONFIG.items():
        cfg.setdefault(section, {})
        for k, v in defaults.items():
            cfg[section].setdefault(k, v)
    override = os.getenv("PULSECHECK_SCORING_VARIANT", "").strip()
    if override:
        cfg["scoring"]["variant"] = override
    return cfg


def ensure_dirs(cfg: dict) -> None:
    """Create the directory holding the local store if it doesn't exist."""
    store_path = Path(cfg.get("store", {}).get("path", "")).expanduser()
    if str(store_path):
        store_path.parent.mkdir(parents=True, exist_ok=True)


def _truthy(value) -> bool:
    if isinstance(value, (bool, int, float)):
        return bool(value)
    return str(value).strip().lower() in _TRUTHY


def env_flag(name: str, default: bool = False) -> bool:
    """True when env var `name` is set to 1/true/yes/on; `default` when unset."""
    load_env_once()
    raw = os.getenv(name)
    return bool(default) if raw is None else _truthy(raw)


@lru_cache(maxsize=None)
def is_production_env() -> bool:
    """True when PULSECHECK_ENV is 'production'."""
    load_env_once()
    return os.getenv("PULSECHECK_ENV", "").strip().lower() == "production"
