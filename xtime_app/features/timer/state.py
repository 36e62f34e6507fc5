"""Running timer state derived from a start timestamp (no per-second counter)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from xtime_app.analytics.timefmt import format_elapsed, parse_hours_override


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class TimerState:
    started_at: datetime | None = None
    stopped_at: datetime | None = None
    override_seconds: int | None = None
    issue_key: str = ""
    description: str = ""

    @property
    def running(self) -> bool:
        return self.started_at is not None and self.stopped_at is None

    @property
    def awaiting_save(self) -> bool:
        return self.started_at is not None and self.stopped_at is not None

    def start(self, now: datetime | None = None) -> None:
        self.started_at = now or _now()
        self.stopped_at = None
        self.override_seconds = None

    def stop(self, now: datetime | None = None) -> None:
        if self.running:
            self.stopped_at = now or _now()

    def elapsed(self, now: datetime | None = None) -> int:
        if self.started_at is None:
            return 0
        end = self.stopped_at or now or _now()
        return max(0, int((end - self.started_at).total_seconds()))

    def display(self, now: datetime | None = None) -> str:
        return format_elapsed(self.elapsed(now))

    def apply_override(self, text: str | None) -> bool:
        """Use ``text`` (fractional hours) as the logged duration; False if invalid."""
        seconds = parse_hours_override(text)
        if seconds is None:
            return False
        self.override_seconds = seconds
        return True

    def clear_override(self) -> None:
        self.override_seconds = None

    def seconds_to_log(self, now: datetime | None = None) -> int:
        if self.override_seconds is not None:
            return self.override_seconds
        return self.elapsed(now)

    def reset(self) -> None:
        self.started_at = None
        self.stopped_at = None
        self.override_seconds = None
        self.issue_key = ""
        self.description = ""
