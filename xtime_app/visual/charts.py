"""Chart builders (Altair) for daily effort and project distribution."""

from __future__ import annotations

from collections.abc import Sequence

import altair as alt
import pandas as pd

from xtime_app.analytics.aggregations.projects import project_distribution
from xtime_app.core.config import DAILY_TARGET_HOURS, VIEW_MONTHLY
from xtime_app.core.models import DailyPoint

COLOR_BELOW_TARGET = "#2563eb"
COLOR_TARGET_MET = "#10b981"
PROJECT_PALETTE = ["#2563eb", "#06b6d4", "#10b981", "#f59e0b", "#8b5cf6"]


def series_frame(points: Sequence[DailyPoint]) -> pd.DataFrame:
    rows = [
        {
            "label": p.label,
            "hours": float(p.hours),
            "date": p.day.isoformat() if p.day else "",
            "target_met": float(p.hours) >= DAILY_TARGET_HOURS,
        }
        for p in points
    ]
    return pd.DataFrame(rows, columns=["label", "hours", "date", "target_met"])


def daily_hours_chart(points: Sequence[DailyPoint], mode: str | None = None):
    """Bar chart of hours per day; bars at or above the daily target turn green."""
    chart_df = series_frame(points)
    if chart_df.empty:
        return None
    label_angle = -45 if mode == VIEW_MONTHLY else 0
    chart = (
        alt.Chart(chart_df)
        .mark_bar(cornerRadiusTopLeft=4, cornerRadiusTopRight=4, size=28)
        .encode(
            x=alt.X("label:N", title=None, sort=None, axis=alt.Axis(labelAngle=label_angle)),
            y=alt.Y("hours:Q", title="Hours"),
            color=alt.condition(
                alt.datum.target_met,
                alt.value(COLOR_TARGET_MET),
                alt.value(COLOR_BELOW_TARGET),
            ),
            tooltip=[
                alt.Tooltip("label:N", title="Day"),
                alt.Tooltip("date:N", title="Date"),
                alt.Tooltip("hours:Q", title="Hours", format=".1f"),
            ],
        )
        .properties(height=300)
    )
    return chart


def project_distribution_chart(projects: dict[str, float]):
    """Donut chart of hours per project key."""
    if not projects:
        return None
    data = project_distribution(projects)
    chart = (
        alt.Chart(data)
        .mark_arc(innerRadius=60, outerRadius=90)
        .encode(
            theta=alt.Theta("hours:Q"),
            color=alt.Color(
                "project:N",
                scale=alt.Scale(range=PROJECT_PALETTE),
                legend=alt.Legend(orient="bottom", title=None),
            ),
            tooltip=[
                alt.Tooltip("project:N", title="Project"),
                alt.Tooltip("hours:Q", title="Hours", format=".2f"),
            ],
        )
        .properties(height=260)
    )
    return chart
