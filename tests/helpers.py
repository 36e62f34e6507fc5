"""Shared builders for worklog test data."""

from __future__ import annotations

from datetime import datetime

import pytz

from xtime_app.core.models import WorklogEntry

UTC = pytz.UTC


def entry(
    started: datetime,
    seconds: int = 3600,
    issue_key: str = "ABC-1",
    author_id: str | None = "me",
    entry_id: str = "1",
) -> WorklogEntry:
    if started.tzinfo is None:
        started = UTC.localize(started)
    return WorklogEntry(
        id=entry_id,
        issue_key=issue_key,
        issue_summary=f"Summary of {issue_key}",
        time_spent_seconds=seconds,
        started=started,
        comment=None,
        author_id=author_id,
    )


def raw_worklog(started: str, seconds: int = 3600, author: str = "me", log_id: str = "10") -> dict:
    return {
        "id": log_id,
        "started": started,
        "timeSpentSeconds": seconds,
        "author": {"accountId": author, "displayName": author.title()},
        "comment": {
            "type": "doc",
            "version": 1,
            "content": [{"type": "paragraph", "content": [{"type": "text", "text": "work"}]}],
        },
    }
