"""Ownership and date-range filtering for worklog entries."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, tzinfo

import pytz

from xtime_app.core.config import local_timezone
from xtime_app.core.models import CalendarWindow, WorklogEntry


def to_local(started: datetime, tz: tzinfo | None = None) -> datetime:
    """Convert ``started`` to ``tz``, or to the device zone when no zone is configured.

    Naive datetimes are assumed to be UTC.
    """
    target = tz or local_timezone()
    if started.tzinfo is None:
        started = pytz.UTC.localize(started)
    return started.astimezone(target)


def local_day(started: datetime, tz: tzinfo | None = None) -> date:
    return to_local(started, tz).date()


def entry_day(entry: WorklogEntry, tz: tzinfo | None = None) -> date:
    return local_day(entry.started, tz)


def filter_entries(
    entries: Iterable[WorklogEntry],
    window: CalendarWindow,
    trusted_author_id: str | None = None,
    tz: tzinfo | None = None,
) -> list[WorklogEntry]:
    """Keep entries owned by ``trusted_author_id`` whose start day lies in ``window``.

    The search API matches tickets, not worklogs: a ticket found by
    ``worklogAuthor = currentUser()`` still embeds entries logged by other
    collaborators. When the author id is unknown only the date filter applies.
    """
    tz = tz or local_timezone()
    out: list[WorklogEntry] = []
    for entry in entries:
        if trusted_author_id is not None and entry.author_id != trusted_author_id:
            continue
        if not window.contains(entry_day(entry, tz)):
            continue
        out.append(entry)
    return out
