"""Central configuration, constants, JQL templates, and storage keys."""

from __future__ import annotations

import os
from collections.abc import Sequence
from datetime import tzinfo
from pathlib import Path

import pytz

# =============================================================================
# Application Identity
# =============================================================================
APP_NAME = "XTime"
# Keyring service name under which API tokens are stored (per account email)
SERVICE_NAME = "xtime-jira"

# =============================================================================
# Timezone / Local Storage
# =============================================================================
# Leave unset to follow the device's local calendar
TIMEZONE: str | None = os.environ.get("XTIME_TIMEZONE") or None


def _default_data_dir() -> Path:
    override = os.environ.get("XTIME_DATA_DIR")
    if override:
        return Path(override)
    if os.name == "nt":
        base = os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming"
        return Path(base) / APP_NAME
    base = os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    return Path(base) / APP_NAME


DATA_DIR: Path = _default_data_dir()
STATE_FILE_NAME = "state.json"


def local_timezone() -> tzinfo | None:
    """Return the configured pytz zone, or None for the device zone.

    None is passed straight to ``datetime.astimezone`` so every instant is
    converted with the system rules in force at that instant (DST included).
    """
    if TIMEZONE:
        return pytz.timezone(TIMEZONE)
    return None


# =============================================================================
# Jira Queries
# =============================================================================
WORKLOG_JQL_TEMPLATE = (
    'worklogAuthor = currentUser() AND worklogDate >= "{after}" AND worklogDate <= "{before}"'
)

# Terminal status names excluded from the "assigned to me" list. These are
# workflow-scheme specific; trackers with other terminal names need edits here.
ASSIGNED_EXCLUDED_STATUSES: Sequence[str] = ("Done", "Resolved")

ASSIGNED_JQL = (
    "assignee IN (currentUser()) AND status NOT IN ({statuses}) "
    "ORDER BY created DESC, lastViewed ASC"
).format(statuses=", ".join(ASSIGNED_EXCLUDED_STATUSES))

WORKLOG_SEARCH_FIELDS: Sequence[str] = ("worklog", "summary")
ASSIGNED_SEARCH_FIELDS: Sequence[str] = ("summary", "status")
SEARCH_PAGE_SIZE = 100

# Search results embed at most this many worklogs per issue
EMBEDDED_WORKLOG_LIMIT = 20

# Parallel worklog hydration tuning (I/O bound HTTP calls)
WORKLOG_HYDRATION_MAX_WORKERS = 8
WORKLOG_HYDRATION_MIN_PARALLEL = 4

SEARCH_CACHE_TTL_SECONDS = 300.0

# =============================================================================
# Worklog Submission
# =============================================================================
DEFAULT_LOG_COMMENT = "XTime Log"

# =============================================================================
# Targets shown on the dashboard cards (hours)
# =============================================================================
DAILY_TARGET_HOURS = 8.0
WEEKLY_TARGET_HOURS = 40.0
# 22 working days * 8 hours
MONTHLY_TARGET_HOURS = 176.0

# =============================================================================
# View Modes
# =============================================================================
VIEW_WEEKLY = "weekly"
VIEW_MONTHLY = "monthly"

# Display-only series used when no worklogs are available
PLACEHOLDER_DAY_LABELS: Sequence[str] = ("Mon", "Tue", "Wed", "Thu", "Fri")

# =============================================================================
# Persisted Keys
# =============================================================================
KEY_THEME = "theme"
KEY_LANGUAGE = "language"
KEY_NOTIFICATION_ENABLED = "notification_enabled"
KEY_NOTIFICATION_TIME = "notification_time"
KEY_AUTOSTART = "autostart"
KEY_PRIVACY_MODE = "privacy_mode"
KEY_ACCOUNTS = "jira_accounts"
KEY_ACTIVE_ACCOUNT = "active_account_id"
KEY_LOG_TEMPLATES = "log_templates"
KEY_LAST_REMINDER_DATE = "last_reminder_date"
FALLBACK_TOKEN_PREFIX = "jira_token_"

DEFAULT_NOTIFICATION_TIME = "17:00"
LANGUAGES: Sequence[str] = ("en", "tr")
THEMES: Sequence[str] = ("light", "dark")

