"""Headline totals and per-day chart series for the dashboard."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, tzinfo

import pandas as pd

from xtime_app.analytics.filters import local_day
from xtime_app.analytics.windows import compute_window
from xtime_app.core.config import PLACEHOLDER_DAY_LABELS, VIEW_MONTHLY, VIEW_WEEKLY, local_timezone
from xtime_app.core.mappers import worklogs_to_dataframe
from xtime_app.core.models import DailyPoint, DashboardStats, WorklogEntry

SECONDS_PER_HOUR = 3600


def hours(seconds: float) -> float:
    return seconds / SECONDS_PER_HOUR


def day_label(day: date) -> str:
    return f"{day:%a} {day.day}"


def _with_days(entries: Iterable[WorklogEntry], tz: tzinfo) -> pd.DataFrame:
    df = worklogs_to_dataframe(entries)
    if df.empty:
        df["day"] = pd.Series(dtype=object)
        return df
    df["day"] = df["started"].apply(lambda ts: local_day(pd.Timestamp(ts).to_pydatetime(), tz))
    return df


def daily_buckets(entries: Iterable[WorklogEntry], tz: tzinfo | None = None) -> dict[str, int]:
    """Sum seconds per local start day, keyed by ISO date in ascending order."""
    df = _with_days(entries, tz or local_timezone())
    if df.empty:
        return {}
    grouped = df.groupby("day")["time_spent_seconds"].sum().sort_index()
    return {day.isoformat(): int(total) for day, total in grouped.items()}


def aggregate(
    entries: Iterable[WorklogEntry],
    today: date | datetime,
    tz: tzinfo | None = None,
) -> DashboardStats:
    """Compute today / current-week / current-month totals and the daily series.

    The week and month totals always refer to the periods containing ``today``,
    regardless of the window the entries were fetched for; they are meaningful
    only when the caller fetched the current period.
    """
    tz = tz or local_timezone()
    today_d = today.date() if isinstance(today, datetime) else today
    df = _with_days(entries, tz)
    if df.empty:
        return DashboardStats()

    days = df["day"]
    seconds = df["time_spent_seconds"]
    week = compute_window(today_d, VIEW_WEEKLY, 0)
    month = compute_window(today_d, VIEW_MONTHLY, 0)

    today_seconds = int(seconds[days == today_d].sum())
    week_seconds = int(seconds[days.apply(week.contains)].sum())
    month_seconds = int(seconds[days.apply(month.contains)].sum())

    grouped = df.groupby("day")["time_spent_seconds"].sum().sort_index()
    series = [
        DailyPoint(label=day_label(day), hours=round(hours(int(total)), 1), day=day)
        for day, total in grouped.items()
    ]
    return DashboardStats(
        today_seconds=today_seconds,
        week_seconds=week_seconds,
        month_seconds=month_seconds,
        daily_series=series,
    )


def placeholder_series() -> list[DailyPoint]:
    """Zero-hour weekday series shown when no real data is available."""
    return [DailyPoint(label=label, hours=0.0) for label in PLACEHOLDER_DAY_LABELS]
