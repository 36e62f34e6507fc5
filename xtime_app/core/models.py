"""Domain data models for accounts, worklogs, calendar windows, and issues."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(slots=True)
class Account:
    id: str
    email: str
    domain: str


@dataclass(slots=True)
class WorklogEntry:
    id: str
    issue_key: str
    issue_summary: str
    time_spent_seconds: int
    started: datetime
    comment: str | None = None
    author_id: str | None = None


@dataclass(slots=True, frozen=True)
class CalendarWindow:
    start: date
    end: date

    @property
    def after(self) -> str:
        return self.start.isoformat()

    @property
    def before(self) -> str:
        return self.end.isoformat()

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(slots=True)
class IssueOption:
    key: str
    summary: str
    status_name: str


@dataclass(slots=True)
class DailyPoint:
    label: str
    hours: float
    day: date | None = None


@dataclass(slots=True)
class DashboardStats:
    today_seconds: int = 0
    week_seconds: int = 0
    month_seconds: int = 0
    daily_series: list[DailyPoint] = field(default_factory=list)
