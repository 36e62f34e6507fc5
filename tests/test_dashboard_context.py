from datetime import date, datetime

import pytz

from helpers import entry

from xtime_app.core.jira_client import JiraRequestError
from xtime_app.features.dashboard import (
    STATUS_CONNECTED,
    STATUS_MOCK,
    build_dashboard_context,
    load_dashboard,
    mock_context,
)

UTC = pytz.UTC
TODAY = date(2024, 1, 17)


class StubService:
    def __init__(self, entries=None, error=None):
        self.entries = entries or []
        self.error = error
        self.calls = []

    def fetch_worklogs(self, window, *, account_id=None, tz=None, fresh=False, progress=None):
        self.calls.append((window, account_id, fresh))
        if self.error:
            raise self.error
        return [e for e in self.entries if window.contains(e.started.date())]


def test_build_context_connected():
    entries = [
        entry(datetime(2024, 1, 17, 9, 0), seconds=5400, issue_key="ABC-1", entry_id="1"),
        entry(datetime(2024, 1, 16, 9, 0), seconds=1800, issue_key="XYZ-2", entry_id="2"),
    ]
    ctx = build_dashboard_context(entries, mode="weekly", offset=0, today=TODAY, tz=UTC)
    assert ctx.status == STATUS_CONNECTED
    assert not ctx.is_mock
    assert ctx.today_hours == 1.5
    assert ctx.week_hours == 2.0
    assert ctx.projects == {"ABC": 1.5, "XYZ": 0.5}
    assert [p.hours for p in ctx.chart_series] == [0.5, 1.5]
    assert 'worklogDate >= "2024-01-15"' in ctx.jql


def test_empty_connected_context_uses_placeholder_chart():
    ctx = build_dashboard_context([], mode="monthly", today=TODAY, tz=UTC)
    assert ctx.window.start == date(2024, 1, 1)
    assert [p.label for p in ctx.chart_series] == ["Mon", "Tue", "Wed", "Thu", "Fri"]
    assert ctx.projects == {}


def test_mock_context_has_zero_totals():
    ctx = mock_context(mode="weekly", offset=2, today=TODAY, tz=UTC)
    assert ctx.status == STATUS_MOCK
    assert ctx.is_mock
    assert ctx.today_hours == 0
    assert ctx.window.start == date(2024, 1, 1)
    assert len(ctx.chart_series) == 5


def test_load_without_service_is_mock():
    ctx = load_dashboard(None, mode="weekly", today=TODAY, tz=UTC)
    assert ctx.is_mock
    assert ctx.error is None


def test_load_passes_window_and_account():
    service = StubService(entries=[entry(datetime(2024, 1, 8, 9, 0), entry_id="prev-week")])
    ctx = load_dashboard(service, mode="weekly", offset=1, account_id="acc", today=TODAY, tz=UTC, fresh=True)
    window, account_id, fresh = service.calls[0]
    assert window.start == date(2024, 1, 8)
    assert account_id == "acc"
    assert fresh is True
    assert [e.id for e in ctx.entries] == ["prev-week"]
    assert ctx.offset == 1


def test_negative_offset_is_clamped():
    ctx = load_dashboard(StubService(), mode="weekly", offset=-4, today=TODAY, tz=UTC)
    assert ctx.offset == 0
    assert ctx.window.start == date(2024, 1, 15)


def test_fetch_failure_degrades_to_mock():
    service = StubService(error=JiraRequestError("GET failed: 503"))
    ctx = load_dashboard(service, mode="monthly", today=TODAY, tz=UTC)
    assert ctx.status == STATUS_MOCK
    assert "503" in ctx.error
