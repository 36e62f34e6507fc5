"""Reusable table helpers for Streamlit rendering."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import tzinfo

import pandas as pd
import streamlit as st

from xtime_app.analytics.filters import to_local
from xtime_app.core.config import local_timezone
from xtime_app.core.mappers import worklogs_to_dataframe
from xtime_app.core.models import IssueOption, WorklogEntry
from xtime_app.visual.privacy import mask_summary

WORKLOG_DISPLAY_COLUMNS = ["Ticket", "issue_summary", "started", "hours", "comment"]
ISSUE_DISPLAY_COLUMNS = ["Ticket", "summary", "status"]


def add_ticket_link(df: pd.DataFrame, server: str, key_col: str = "key", label: str = "Ticket"):
    if df.empty or key_col not in df.columns:
        return df, {}
    out = df.copy()
    base = server.rstrip("/")
    out[label] = out[key_col].astype(str).apply(lambda k: f"{base}/browse/{k}" if k and k != "nan" else "")
    cfg = {
        label: st.column_config.LinkColumn(
            label,
            display_text=r"browse/(.*)$",
            help="Open in Jira",
            width="small",
        )
    }
    return out, cfg


def worklog_table(
    entries: Sequence[WorklogEntry],
    server: str,
    *,
    privacy: bool = False,
    tz: tzinfo | None = None,
) -> tuple[pd.DataFrame, list[str], dict[str, object]]:
    df = worklogs_to_dataframe(entries)
    if df.empty:
        return df, [], {}
    tz = tz or local_timezone()
    df["started"] = df["started"].apply(
        lambda ts: to_local(pd.Timestamp(ts).to_pydatetime(), tz).strftime("%Y-%m-%d %H:%M")
    )
    df["hours"] = (df["time_spent_seconds"] / 3600).round(2)
    df["issue_summary"] = df["issue_summary"].apply(lambda s: mask_summary(s, privacy))
    df["comment"] = df["comment"].apply(lambda s: mask_summary(s, privacy))
    df = df.sort_values(by="started", ascending=False)
    table, cfg = add_ticket_link(df, server, key_col="issue_key")
    cols = [c for c in WORKLOG_DISPLAY_COLUMNS if c in table.columns]
    return table, cols, cfg


def issue_table(
    issues: Sequence[IssueOption],
    server: str,
    *,
    privacy: bool = False,
) -> tuple[pd.DataFrame, list[str], dict[str, object]]:
    if not issues:
        return pd.DataFrame(), [], {}
    df = pd.DataFrame(
        [
            {"key": i.key, "summary": mask_summary(i.summary, privacy), "status": i.status_name}
            for i in issues
        ]
    )
    table, cfg = add_ticket_link(df, server)
    cols = [c for c in ISSUE_DISPLAY_COLUMNS if c in table.columns]
    return table, cols, cfg
