"""API token storage: OS keyring first, local store as fallback."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import keyring

from .config import FALLBACK_TOKEN_PREFIX, SERVICE_NAME
from .models import Account
from .storage import LocalStore

logger = logging.getLogger(__name__)


class SecureBackend(Protocol):
    def get_password(self, service_name: str, username: str) -> str | None: ...

    def set_password(self, service_name: str, username: str, password: str) -> None: ...

    def delete_password(self, service_name: str, username: str) -> None: ...


def fallback_key(email: str) -> str:
    return f"{FALLBACK_TOKEN_PREFIX}{email}"


class TokenStore:
    """Resolve and persist per-account API tokens.

    The keyring is authoritative. The fallback store is only written when the
    keyring write fails, and is cleared after every successful keyring write so
    a stale fallback token can never be read later.
    """

    def __init__(self, fallback: LocalStore, secure: Any = None, service: str = SERVICE_NAME):
        self.fallback = fallback
        self.secure: SecureBackend = secure if secure is not None else keyring
        self.service = service

    def _secure_get(self, email: str) -> str | None:
        try:
            return self.secure.get_password(self.service, email)
        except Exception as exc:
            logger.warning("Keyring lookup failed for %s, trying fallback: %s", email, exc)
            return None

    def get_token(self, email: str) -> str | None:
        token = self._secure_get(email)
        if token:
            return token
        fallback = self.fallback.get(fallback_key(email))
        if isinstance(fallback, str) and fallback:
            return fallback
        return None

    def resolve_token(self, account: Account | None) -> str | None:
        """Return the account's token, or None meaning "not authenticated"."""
        if account is None or not account.email:
            return None
        return self.get_token(account.email)

    def save_token(self, email: str, token: str) -> bool:
        """Store ``token``; returns True when the keyring accepted it."""
        try:
            self.secure.set_password(self.service, email, token)
        except Exception as exc:
            logger.warning("Keyring write failed for %s, using local fallback: %s", email, exc)
            self.fallback.set(fallback_key(email), token)
            return False
        self.fallback.delete(fallback_key(email))
        return True

    def delete_token(self, email: str) -> None:
        try:
            self.secure.delete_password(self.service, email)
        except Exception as exc:
            logger.warning("Keyring delete failed for %s: %s", email, exc)
        self.fallback.delete(fallback_key(email))
