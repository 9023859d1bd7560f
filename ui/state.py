from __future__ import annotations
from typing import Any, MutableMapping, Optional

import streamlit as st

from pulsecheck.animation import ProcessingSequence, ScoreCounter
from pulsecheck.local_store import LocalStore
from pulsecheck.risk_engine import RiskResult
from pulsecheck.wizard import WizardController


# Centralized session keys used across pages
KEY_PAGE = "page"
KEY_CONTROLLER = "_wizard"
KEY_RESULT = "_risk_result"
KEY_PENDING = "_evaluation_pending"
KEY_PROCESSING = "_processing_sequence"
KEY_COUNTER = "_score_counter"
KEY_STORE = "_local_store"

PAGES = ["Home", "Assessment", "Results", "Login"]


def _ss(ss: Optional[MutableMapping[str, Any]] = None) -> MutableMapping[str, Any]:
    return st.session_state if ss is None else ss


def ensure_session(cfg: dict, ss: Optional[MutableMapping[str, Any]] = None) -> None:
    """Initialize expected session keys with safe defaults (never overwrites)."""
    s = _ss(ss)
    anim = cfg.get("animation", {})
    s.setdefault(KEY_PAGE, "Home")
    s.setdefault(KEY_CONTROLLER, WizardController())
    s.setdefault(KEY_RESULT, None)
    s.setdefault(KEY_PENDING, False)
    s.setdefault(KEY_PROCESSING, ProcessingSequence(
        interval=float(anim.get("interval_s", 0.5)),
        total_delay=float(anim.get("total_delay_s", 2.5)),
    ))
    s.setdefault(KEY_COUNTER, ScoreCounter(
        tick=float(anim.get("counter_tick_s", 0.02)),
        max_frames=int(anim.get("counter_max_frames", 60)),
    ))
    if KEY_STORE not in s:
        store_cfg = cfg.get("store", {})
        s[KEY_STORE] = LocalStore(
            store_cfg.get("path"),
            default_theme=cfg.get("app", {}).get("default_theme", "dark"),
        )


def get_controller(ss: Optional[MutableMapping[str, Any]] = None) -> WizardController:
    return _ss(ss)[KEY_CONTROLLER]


def get_store(ss: Optional[MutableMapping[str, Any]] = None) -> LocalStore:
    return _ss(ss)[KEY_STORE]


def get_result(ss: Optional[MutableMapping[str, Any]] = None) -> Optional[RiskResult]:
    val = _ss(ss).get(KEY_RESULT)
    return val if isinstance(val, RiskResult) else None


def go_to(page: str, ss: Optional[MutableMapping[str, Any]] = None) -> None:
    if page not in PAGES:
        raise ValueError(f"Unknown page '{page}'")
    _ss(ss)[KEY_PAGE] = page


def set_result(result: RiskResult, ss: Optional[MutableMapping[str, Any]] = None) -> None:
    """Store a fresh result and queue the processing animation for it."""
    s = _ss(ss)
    s[KEY_PROCESSING].cancel()
    s[KEY_COUNTER].cancel()
    s[KEY_RESULT] = result
    s[KEY_PENDING] = True


def restart_assessment(ss: Optional[MutableMapping[str, Any]] = None) -> None:
    """Back to step 1 with an empty record; drops any result and running animation."""
    s = _ss(ss)
    get_controller(s).reset()
    s[KEY_PROCESSING].cancel()
    s[KEY_COUNTER].cancel()
    s[KEY_RESULT] = None
    s[KEY_PENDING] = False
    s[KEY_PAGE] = "Assessment"
