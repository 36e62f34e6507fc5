"""Calendar window arithmetic for weekly and monthly reporting periods."""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from xtime_app.core.config import VIEW_MONTHLY, VIEW_WEEKLY
from xtime_app.core.models import CalendarWindow


def clamp_offset(offset: int) -> int:
    """Clamp a navigation offset so it never points into the future."""
    return max(0, int(offset))


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def week_start(day: date) -> date:
    # isoweekday(): Monday=1 .. Sunday=7
    return day - timedelta(days=day.isoweekday() - 1)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``(year, month)`` by ``delta`` months, rolling over year boundaries."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def compute_window(reference_date: date | datetime, mode: str, offset: int = 0) -> CalendarWindow:
    """Compute the inclusive calendar window for ``mode`` stepped ``offset`` periods back.

    Parameters
    ----------
    reference_date : date or datetime
        The day that anchors the current period (usually today). Datetimes are
        truncated to their calendar date.
    mode : str
        ``"weekly"`` (Monday to Sunday) or ``"monthly"`` (full calendar month).
    offset : int
        Number of whole periods to step into the past; ``0`` is the current one.

    Returns
    -------
    CalendarWindow
        Inclusive ``start``/``end`` dates with no time component.
    """
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    ref = _as_date(reference_date)
    if mode == VIEW_WEEKLY:
        start = week_start(ref) - timedelta(weeks=offset)
        return CalendarWindow(start=start, end=start + timedelta(days=6))
    if mode == VIEW_MONTHLY:
        year, month = shift_month(ref.year, ref.month, -offset)
        last_day = calendar.monthrange(year, month)[1]
        return CalendarWindow(start=date(year, month, 1), end=date(year, month, last_day))
    raise ValueError(f"Unknown view mode: {mode!r}")
