"""Pure helpers to build the dashboard context (no Streamlit)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo

from xtime_app.analytics.aggregations.projects import by_project
from xtime_app.analytics.aggregations.stats import aggregate, hours, placeholder_series
from xtime_app.analytics.windows import clamp_offset, compute_window
from xtime_app.core.config import local_timezone
from xtime_app.core.jira_client import JiraRequestError
from xtime_app.core.models import CalendarWindow, DailyPoint, DashboardStats, WorklogEntry
from xtime_app.core.service import ProgressCallback, WorklogService, worklog_jql

logger = logging.getLogger(__name__)

STATUS_CONNECTED = "connected"
STATUS_MOCK = "mock"


@dataclass(slots=True)
class DashboardContext:
    """Everything the Dashboard page renders for one window."""

    mode: str
    offset: int
    window: CalendarWindow
    jql: str
    status: str
    entries: list[WorklogEntry] = field(default_factory=list)
    stats: DashboardStats = field(default_factory=DashboardStats)
    projects: dict[str, float] = field(default_factory=dict)
    chart_series: list[DailyPoint] = field(default_factory=list)
    error: str | None = None

    @property
    def today_hours(self) -> float:
        return hours(self.stats.today_seconds)

    @property
    def week_hours(self) -> float:
        return hours(self.stats.week_seconds)

    @property
    def month_hours(self) -> float:
        return hours(self.stats.month_seconds)

    @property
    def is_mock(self) -> bool:
        return self.status != STATUS_CONNECTED


def _today(today: date | datetime | None, tz: tzinfo | None) -> date:
    if today is None:
        return datetime.now(tz).date()
    return today.date() if isinstance(today, datetime) else today


def build_dashboard_context(
    entries: list[WorklogEntry],
    *,
    mode: str,
    offset: int = 0,
    today: date | datetime | None = None,
    tz: tzinfo | None = None,
) -> DashboardContext:
    """Assemble a connected context from already-filtered entries."""
    tz = tz or local_timezone()
    today_d = _today(today, tz)
    offset = clamp_offset(offset)
    window = compute_window(today_d, mode, offset)
    stats = aggregate(entries, today_d, tz=tz)
    return DashboardContext(
        mode=mode,
        offset=offset,
        window=window,
        jql=worklog_jql(window),
        status=STATUS_CONNECTED,
        entries=list(entries),
        stats=stats,
        projects=by_project(entries),
        chart_series=stats.daily_series or placeholder_series(),
    )


def mock_context(
    *,
    mode: str,
    offset: int = 0,
    today: date | datetime | None = None,
    tz: tzinfo | None = None,
    error: str | None = None,
) -> DashboardContext:
    """Placeholder context used when not authenticated or the fetch failed."""
    tz = tz or local_timezone()
    offset = clamp_offset(offset)
    window = compute_window(_today(today, tz), mode, offset)
    return DashboardContext(
        mode=mode,
        offset=offset,
        window=window,
        jql=worklog_jql(window),
        status=STATUS_MOCK,
        chart_series=placeholder_series(),
        error=error,
    )


def load_dashboard(
    service: WorklogService | None,
    *,
    mode: str,
    offset: int = 0,
    account_id: str | None = None,
    today: date | datetime | None = None,
    tz: tzinfo | None = None,
    fresh: bool = False,
    progress: ProgressCallback | None = None,
) -> DashboardContext:
    """Fetch and aggregate one window, degrading to the mock context on failure."""
    tz = tz or local_timezone()
    if service is None:
        return mock_context(mode=mode, offset=offset, today=today, tz=tz)
    today_d = _today(today, tz)
    window = compute_window(today_d, mode, clamp_offset(offset))
    try:
        entries = service.fetch_worklogs(
            window, account_id=account_id, tz=tz, fresh=fresh, progress=progress
        )
    except JiraRequestError as exc:
        logger.warning("Worklog fetch failed, showing placeholder data: %s", exc)
        return mock_context(mode=mode, offset=offset, today=today_d, tz=tz, error=str(exc))
    return build_dashboard_context(entries, mode=mode, offset=offset, today=today_d, tz=tz)
