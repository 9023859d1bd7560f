from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging

_log = logging.getLogger(__name__)

# Keys kept in the store
KEY_THEME = "theme"
KEY_CURRENT_USER = "currentUser"

THEMES = ("dark", "light")
DEFAULT_THEME = "dark"
_DEFAULT_PATH = Path("data") / "local_store.json"


@dataclass(frozen=True)
class User:
    name: str
    email: str

    @property
    def first_name(self) -> str:
        parts = self.name.split()
        return parts[0] if parts else self.name

    @property
    def greeting(self) -> str:
        return f"Hi, {self.first_name}"

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "email": self.email}


class LocalStore:
    """
    Small JSON-backed key-value store for per-device preferences.

    Missing or unreadable files behave like an empty store. Writes are
    best-effort: a failure is logged and the in-memory value still applies
    for the rest of the session.
    """

    def __init__(self, path: str | Path | None = None, default_theme: str = DEFAULT_THEME):
        self.path = Path(path) if path else _DEFAULT_PATH
        self.default_theme = default_theme if default_theme in THEMES else DEFAULT_THEME
        self._data: Dict[str, Any] = self._read()

    def _read(self) -> Dict[str, Any]:
        try:
            if not self.path.exists():
                return {}
            with open(self.path, "r") as f:
                data = json.load(f)
            return data if isinstance(data, dict) else {}
        except (OSError, ValueError) as e:
            _log.warning(f"Local store unreadable ({self.path}): {e}; starting empty")
            return {}

    def _write(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(self._data, f, indent=2)
        except OSError as e:
            _log.warning(f"Local store write failed ({self.path}): {e}")

    # ---- raw key-value access ----
    def get_item(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set_item(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._write()

    def remove_item(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._write()

    # ---- theme ----
    def get_theme(self) -> str:
        theme = self.get_item(KEY_THEME)
        return theme if theme in THEMES else self.default_theme

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme '{theme}'; expected one of {THEMES}")
        self.set_item(KEY_THEME, theme)

    def toggle_theme(self) -> str:
        new_theme = "light" if self.get_theme() == "dark" else "dark"
        self.set_theme(new_theme)
        return new_theme

    # ---- mock auth ----
    def get_current_user(self) -> Optional[User]:
        raw = self.get_item(KEY_CURRENT_USER)
        if not isinstance(raw, dict) or not raw.get("email"):
            return None
        return User(name=str(raw.get("name") or "User"), email=str(raw["email"]))

    def sign_in(self, email: str, password: str = "") -> User:
        """Mock sign-in: any email is accepted; the password is never checked or stored."""
        return self._save_user("User", email)

    def sign_up(self, name: str, email: str, password: str = "") -> User:
        if not (name or "").strip():
            raise ValueError("Name is required to create an account")
        return self._save_user(name.strip(), email)

    def sign_out(self) -> None:
        self.remove_item(KEY_CURRENT_USER)

    def _save_user(self, name: str, email: str) -> User:
        if not (email or "").strip():
            raise ValueError("Email is required")
        user = User(name=name, email=email.strip())
        self.set_item(KEY_CURRENT_USER, user.to_dict())
        _log.info(f"Signed in as {user.email}")
        return user
