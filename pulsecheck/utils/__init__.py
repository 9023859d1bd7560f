from __future__ import annotations
from pathlib import Path
import logging
import logging.config
import os

import yaml

_CONFIGURED = False


def _find_project_root() -> Path:
    """Nearest ancestor holding config/config.yaml; the repo root otherwise."""
    here = Path(__file__).resolve()
    for candidate in here.parents:
        if (candidate / "config" / "config.yaml").exists():
            return candidate
    return here.parents[2]


def _configure_logging() -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return
    cfg = _find_project_root() / "config" / "logging_config.yaml"
    lvl = os.getenv("LOG_LEVEL", "INFO").upper()
    if cfg.exists():
        with open(cfg, "r") as f:
            logging.config.dictConfig(yaml.safe_load(f))
        logging.getLogger("pulsecheck").setLevel(getattr(logging, lvl, logging.INFO))
    else:
        logging.basicConfig(level=getattr(logging, lvl, logging.INFO),
                            format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    _CONFIGURED = True


# Small logger so modules can do: from pulsecheck.utils import log
def get_logger(name: str = "pulsecheck"):
    _configure_logging()
    return logging.getLogger(name)


log = get_logger()
