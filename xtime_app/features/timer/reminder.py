"""Once-a-day worklog reminder driven by a cooperative periodic tick."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, time

from xtime_app.core.storage import SettingsStore

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]

REMINDER_TITLE = "Time to log your work"
REMINDER_BODY = "Don't forget to log today's effort in Jira."


def parse_clock(value: str) -> time | None:
    try:
        hh, mm = value.split(":", 1)
        return time(int(hh), int(mm))
    except (AttributeError, ValueError):
        return None


class ReminderScheduler:
    """Decide on each tick whether the daily reminder is due.

    State lives only in the settings store (``last_reminder_date``), so a
    restart never produces a second reminder on the same day.
    """

    def __init__(self, settings: SettingsStore, notify: Notifier):
        self.settings = settings
        self.notify = notify

    def is_due(self, now: datetime) -> bool:
        current = self.settings.load()
        if not current.notification_enabled:
            return False
        at = parse_clock(current.notification_time)
        if at is None:
            return False
        if current.last_reminder_date == now.date().isoformat():
            return False
        return now.time() >= at

    def tick(self, now: datetime | None = None) -> bool:
        """Fire the reminder if due; returns True when it fired."""
        now = now or datetime.now()
        if not self.is_due(now):
            return False
        # Persist first so a failing notifier cannot cause repeats
        self.settings.update(last_reminder_date=now.date().isoformat())
        try:
            self.notify(REMINDER_TITLE, REMINDER_BODY)
        except Exception as exc:
            logger.warning("Reminder notification failed: %s", exc)
        return True
