"""Mapping raw Jira JSON into WorklogEntry / IssueOption instances."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict
from typing import Any

import pandas as pd

from .models import IssueOption, WorklogEntry

WORKLOG_COLUMNS = (
    "id",
    "issue_key",
    "issue_summary",
    "time_spent_seconds",
    "started",
    "comment",
    "author_id",
)


def parse_dt(val):
    if not val:
        return None
    ts = pd.to_datetime(val, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def adf_to_text(node: Any) -> str | None:
    """Flatten an Atlassian Document Format node (or plain string) to text."""
    if node is None:
        return None
    if isinstance(node, str):
        return node
    parts: list[str] = []

    def walk(n: Any):
        if isinstance(n, dict):
            if n.get("type") == "text" and isinstance(n.get("text"), str):
                parts.append(n["text"])
            for child in n.get("content") or []:
                walk(child)
            if n.get("type") == "paragraph":
                parts.append("\n")
        elif isinstance(n, list):
            for child in n:
                walk(child)

    walk(node)
    text = "".join(parts).strip()
    return text or None


def map_worklog(raw: dict[str, Any], issue_key: str, issue_summary: str) -> WorklogEntry | None:
    started = parse_dt(raw.get("started"))
    if started is None:
        return None
    try:
        seconds = max(0, int(raw.get("timeSpentSeconds") or 0))
    except (TypeError, ValueError):
        seconds = 0
    author = raw.get("author") or {}
    return WorklogEntry(
        id=str(raw.get("id") or ""),
        issue_key=issue_key,
        issue_summary=issue_summary,
        time_spent_seconds=seconds,
        started=started,
        comment=adf_to_text(raw.get("comment")),
        author_id=author.get("accountId") if isinstance(author, dict) else None,
    )


def embedded_worklogs(raw_issue: dict[str, Any]) -> list[dict[str, Any]]:
    fields = raw_issue.get("fields") or {}
    block = fields.get("worklog") or {}
    return list(block.get("worklogs") or [])


def map_issue_worklogs(raw_issue: dict[str, Any]) -> list[WorklogEntry]:
    key = raw_issue.get("key") or ""
    summary = (raw_issue.get("fields") or {}).get("summary") or ""
    out: list[WorklogEntry] = []
    for raw in embedded_worklogs(raw_issue):
        entry = map_worklog(raw, key, summary)
        if entry is not None:
            out.append(entry)
    return out


def map_issue_option(raw_issue: dict[str, Any]) -> IssueOption:
    fields = raw_issue.get("fields") or {}
    status = fields.get("status") or {}
    return IssueOption(
        key=raw_issue.get("key") or "",
        summary=fields.get("summary") or "",
        status_name=(status.get("name") or "") if isinstance(status, dict) else str(status),
    )


def worklogs_to_dataframe(entries: Iterable[WorklogEntry]) -> pd.DataFrame:
    rows = [asdict(e) for e in entries]
    if not rows:
        return pd.DataFrame(columns=list(WORKLOG_COLUMNS))
    df = pd.DataFrame(rows, columns=list(WORKLOG_COLUMNS))
    df["time_spent_seconds"] = pd.to_numeric(df["time_spent_seconds"], errors="coerce").fillna(0).astype(int)
    return df
