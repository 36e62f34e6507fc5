"""Masking helpers for privacy mode (screen sharing)."""

from __future__ import annotations

HIDDEN_EMAIL = "Hidden email"
HIDDEN_DOMAIN = "Hidden domain"
HIDDEN_SUMMARY = "••••••"


def mask_email(email: str, enabled: bool) -> str:
    if not enabled:
        return email
    return HIDDEN_EMAIL


def mask_domain(domain: str, enabled: bool) -> str:
    if not enabled:
        return domain
    return HIDDEN_DOMAIN


def mask_summary(text: str | None, enabled: bool) -> str:
    if not enabled:
        return text or ""
    return HIDDEN_SUMMARY if text else ""
