"""Elapsed-time display and manual hour overrides."""

from __future__ import annotations

import math


def format_elapsed(seconds: float) -> str:
    """Format ``seconds`` as ``HH:MM:SS``; the hour field widens past 99."""
    total = max(0, int(seconds))
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def parse_hours_override(text: str | None) -> int | None:
    """Parse fractional hours (``"1.5"`` or ``"1,5"``) into whole seconds.

    Returns None for empty, non-numeric, negative or non-finite input.
    """
    if text is None:
        return None
    cleaned = str(text).strip().replace(",", ".")
    if not cleaned:
        return None
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return int(round(value * 3600))
