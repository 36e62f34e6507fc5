"""Local persistence: JSON key-value store, typed settings, and account list."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import uuid
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from .config import (
    DATA_DIR,
    DEFAULT_NOTIFICATION_TIME,
    KEY_ACCOUNTS,
    KEY_ACTIVE_ACCOUNT,
    KEY_AUTOSTART,
    KEY_LANGUAGE,
    KEY_LAST_REMINDER_DATE,
    KEY_LOG_TEMPLATES,
    KEY_NOTIFICATION_ENABLED,
    KEY_NOTIFICATION_TIME,
    KEY_PRIVACY_MODE,
    KEY_THEME,
    LANGUAGES,
    STATE_FILE_NAME,
    THEMES,
)
from .models import Account

logger = logging.getLogger(__name__)


class LocalStore:
    """Tiny JSON-file key-value store.

    Every mutation rewrites the whole file through a temp file and
    ``os.replace`` so readers never observe a half-written state. A missing or
    unparsable file is treated as empty.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else DATA_DIR / STATE_FILE_NAME
        self._data: dict[str, Any] = self._read()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed state file %s (not an object)", self.path)
            return {}
        return data

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".state-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(self._data, fh, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._write()

    def set_many(self, values: dict[str, Any]) -> None:
        self._data.update(values)
        self._write()

    def delete(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._write()

    def keys(self) -> list[str]:
        return list(self._data.keys())

    def clear(self) -> None:
        self._data = {}
        self._write()


# =============================================================================
# Settings
# =============================================================================
@dataclass(slots=True)
class UserSettings:
    theme: str = "light"
    language: str = "en"
    notification_enabled: bool = False
    notification_time: str = DEFAULT_NOTIFICATION_TIME
    autostart: bool = False
    privacy_mode: bool = False
    log_templates: list[str] = field(default_factory=list)
    last_reminder_date: str | None = None


_SETTING_KEYS: dict[str, str] = {
    "theme": KEY_THEME,
    "language": KEY_LANGUAGE,
    "notification_enabled": KEY_NOTIFICATION_ENABLED,
    "notification_time": KEY_NOTIFICATION_TIME,
    "autostart": KEY_AUTOSTART,
    "privacy_mode": KEY_PRIVACY_MODE,
    "log_templates": KEY_LOG_TEMPLATES,
    "last_reminder_date": KEY_LAST_REMINDER_DATE,
}


def _valid_time(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    hh, sep, mm = value.partition(":")
    if not sep or not (hh.isdigit() and mm.isdigit()):
        return False
    return 0 <= int(hh) <= 23 and 0 <= int(mm) <= 59


def _coerce(name: str, value: Any, default: Any) -> Any:
    """Return ``value`` when it is valid for setting ``name``, else ``default``."""
    if name == "theme":
        return value if value in THEMES else default
    if name == "language":
        return value if value in LANGUAGES else default
    if name in {"notification_enabled", "autostart", "privacy_mode"}:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in {"true", "false"}:
            return value.lower() == "true"
        return default
    if name == "notification_time":
        return value if _valid_time(value) else default
    if name == "log_templates":
        if not isinstance(value, list):
            return default
        return [str(v) for v in value if isinstance(v, str) and v.strip()]
    if name == "last_reminder_date":
        return value if isinstance(value, str) or value is None else default
    return value


class SettingsStore:
    """Typed view over the settings keys of a LocalStore."""

    def __init__(self, store: LocalStore):
        self.store = store

    def load(self) -> UserSettings:
        defaults = UserSettings()
        values: dict[str, Any] = {}
        for f in fields(UserSettings):
            default = getattr(defaults, f.name)
            raw = self.store.get(_SETTING_KEYS[f.name], default)
            values[f.name] = _coerce(f.name, raw, default)
        return UserSettings(**values)

    def update(self, **partial: Any) -> UserSettings:
        """Merge ``partial`` into the current settings and persist in one write."""
        unknown = set(partial) - set(_SETTING_KEYS)
        if unknown:
            raise KeyError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        current = self.load()
        merged = asdict(current)
        for name, value in partial.items():
            coerced = _coerce(name, value, None)
            if coerced is None and name != "last_reminder_date":
                raise ValueError(f"Invalid value for {name}: {value!r}")
            merged[name] = coerced
        self.store.set_many({_SETTING_KEYS[name]: merged[name] for name in merged})
        return UserSettings(**merged)

    # ------------------ Log templates ------------------
    def add_template(self, text: str) -> list[str]:
        cleaned = (text or "").strip()
        templates = self.load().log_templates
        if not cleaned or cleaned in templates:
            return templates
        return self.update(log_templates=[*templates, cleaned]).log_templates

    def remove_template(self, text: str) -> list[str]:
        templates = [t for t in self.load().log_templates if t != text]
        return self.update(log_templates=templates).log_templates


# =============================================================================
# Accounts
# =============================================================================
def normalize_domain(domain: str) -> str:
    return (domain or "").strip().rstrip("/")


class AccountRepository:
    """Account metadata (never credentials) persisted in insertion order."""

    def __init__(self, store: LocalStore):
        self.store = store

    def list_accounts(self) -> list[Account]:
        raw = self.store.get(KEY_ACCOUNTS, [])
        if not isinstance(raw, list):
            logger.warning("Ignoring malformed account list in local state")
            return []
        out: list[Account] = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            try:
                out.append(Account(id=str(item["id"]), email=str(item["email"]), domain=str(item["domain"])))
            except KeyError:
                continue
        return out

    def _save(self, accounts: list[Account], active_id: str | None) -> None:
        self.store.set_many(
            {
                KEY_ACCOUNTS: [asdict(a) for a in accounts],
                KEY_ACTIVE_ACCOUNT: active_id or "",
            }
        )

    def get(self, account_id: str) -> Account | None:
        return next((a for a in self.list_accounts() if a.id == account_id), None)

    def add(self, email: str, domain: str) -> Account:
        email = (email or "").strip()
        domain = normalize_domain(domain)
        if not email or not domain:
            raise ValueError("email and domain are required")
        account = Account(id=uuid.uuid4().hex, email=email, domain=domain)
        self._save([*self.list_accounts(), account], account.id)
        return account

    def remove(self, account_id: str) -> Account | None:
        accounts = self.list_accounts()
        removed = next((a for a in accounts if a.id == account_id), None)
        remaining = [a for a in accounts if a.id != account_id]
        active = self.store.get(KEY_ACTIVE_ACCOUNT) or ""
        if active == account_id or not any(a.id == active for a in remaining):
            active = remaining[0].id if remaining else ""
        self._save(remaining, active)
        return removed

    def active(self) -> Account | None:
        accounts = self.list_accounts()
        if not accounts:
            return None
        active_id = self.store.get(KEY_ACTIVE_ACCOUNT)
        return next((a for a in accounts if a.id == active_id), accounts[0])

    def set_active(self, account_id: str) -> Account:
        account = self.get(account_id)
        if account is None:
            raise KeyError(f"Unknown account id: {account_id}")
        self.store.set(KEY_ACTIVE_ACCOUNT, account_id)
        return account
