"""Project-based aggregations."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import pandas as pd

from xtime_app.core.mappers import worklogs_to_dataframe
from xtime_app.core.models import WorklogEntry


def project_key(issue_key: str) -> str:
    """Return the prefix before the first hyphen (``"ABC-123"`` -> ``"ABC"``).

    Keys without a hyphen are their own project key.
    """
    head, sep, _ = str(issue_key).partition("-")
    return head if sep else str(issue_key)


def by_project(entries: Iterable[WorklogEntry]) -> dict[str, float]:
    df = worklogs_to_dataframe(entries)
    if df.empty:
        return {}
    df["project"] = df["issue_key"].apply(project_key)
    agg = df.groupby("project", sort=False)["time_spent_seconds"].sum()
    return {str(name): round(int(total) / 3600, 2) for name, total in agg.items()}


def project_distribution(buckets: Mapping[str, float]) -> pd.DataFrame:
    """``by_project`` buckets as a frame (``project``, ``hours``) sorted by hours."""
    if not buckets:
        return pd.DataFrame(columns=["project", "hours"])
    out = pd.DataFrame({"project": list(buckets.keys()), "hours": list(buckets.values())})
    return out.sort_values(by="hours", ascending=False).reset_index(drop=True)
