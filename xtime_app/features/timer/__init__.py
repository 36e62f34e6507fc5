"""Timer feature module: running timer state and the daily reminder."""

from xtime_app.features.timer.reminder import ReminderScheduler
from xtime_app.features.timer.state import TimerState

__all__ = ["ReminderScheduler", "TimerState"]
