"""WorklogService: orchestrates worklog search, hydration, mapping, and submission."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, tzinfo
from typing import Any

from xtime_app.analytics.filters import filter_entries

from .config import (
    ASSIGNED_JQL,
    ASSIGNED_SEARCH_FIELDS,
    DEFAULT_LOG_COMMENT,
    EMBEDDED_WORKLOG_LIMIT,
    WORKLOG_HYDRATION_MAX_WORKERS,
    WORKLOG_HYDRATION_MIN_PARALLEL,
    WORKLOG_JQL_TEMPLATE,
    WORKLOG_SEARCH_FIELDS,
)
from .jira_client import JiraAPI, JiraRequestError
from .mappers import map_issue_option, map_issue_worklogs
from .models import CalendarWindow, IssueOption, WorklogEntry

ProgressCallback = Callable[[str, int | None, int | None], None]

logger = logging.getLogger(__name__)


def worklog_jql(window: CalendarWindow) -> str:
    return WORKLOG_JQL_TEMPLATE.format(after=window.after, before=window.before)


def format_started(moment: datetime) -> str:
    """Render ``moment`` in UTC with a literal ``+0000`` offset (Jira's format)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    utc = moment.astimezone(UTC)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}+0000"


def build_worklog_payload(seconds: int, description: str | None, started: datetime) -> dict[str, Any]:
    text = (description or "").strip() or DEFAULT_LOG_COMMENT
    return {
        "timeSpentSeconds": int(seconds),
        "comment": {
            "type": "doc",
            "version": 1,
            "content": [
                {
                    "type": "paragraph",
                    "content": [{"type": "text", "text": text}],
                }
            ],
        },
        "started": format_started(started),
    }


class TrustedAuthorCache:
    """Per-account cache of the remote ``accountId`` behind ``currentUser()``.

    Failed lookups are not cached, so the next fetch retries them.
    """

    def __init__(self):
        self._ids: dict[str, str] = {}

    def get(self, account_id: str) -> str | None:
        return self._ids.get(account_id)

    def resolve(self, account_id: str, lookup: Callable[[], str | None]) -> str | None:
        if account_id in self._ids:
            return self._ids[account_id]
        value = lookup()
        if value:
            self._ids[account_id] = value
        return value

    def invalidate(self, account_id: str | None = None) -> None:
        if account_id is None:
            self._ids.clear()
        else:
            self._ids.pop(account_id, None)


class WorklogService:
    def __init__(self, api: JiraAPI, author_cache: TrustedAuthorCache | None = None):
        self.api = api
        self.author_cache = author_cache if author_cache is not None else TrustedAuthorCache()

    # ------------------ Identity ------------------
    def _lookup_author(self) -> str | None:
        try:
            me = self.api.myself()
        except JiraRequestError as exc:
            logger.warning("Could not resolve current Jira user, filtering by date only: %s", exc)
            return None
        account_id = me.get("accountId") if isinstance(me, dict) else None
        return str(account_id) if account_id else None

    def trusted_author_id(self, account_id: str | None = None) -> str | None:
        if account_id is None:
            return self._lookup_author()
        return self.author_cache.resolve(account_id, self._lookup_author)

    # ------------------ Fetch Methods ------------------
    def fetch_worklogs(
        self,
        window: CalendarWindow,
        *,
        account_id: str | None = None,
        tz: tzinfo | None = None,
        fresh: bool = False,
        progress: ProgressCallback | None = None,
    ) -> list[WorklogEntry]:
        """Fetch the current user's worklogs whose start day lies in ``window``.

        The JQL narrows the ticket set server side, but the embedded worklog
        arrays are re-filtered locally by author and by date.
        """
        if fresh:
            self.api.clear_cache()
        jql = worklog_jql(window)
        if progress:
            progress("Searching tickets with worklogs in your window", None, None)
        raw = self.api.search_enhanced(jql, fields=list(WORKLOG_SEARCH_FIELDS))
        self._hydrate_truncated_worklogs(raw, progress=progress)

        entries: list[WorklogEntry] = []
        for issue in raw:
            entries.extend(map_issue_worklogs(issue))
        if progress:
            progress("Resolving worklog author", None, None)
        author = self.trusted_author_id(account_id)
        filtered = filter_entries(entries, window, trusted_author_id=author, tz=tz)
        logger.debug(
            "Worklogs for %s..%s: %s raw, %s kept", window.after, window.before, len(entries), len(filtered)
        )
        return filtered

    def fetch_assigned_issues(self) -> list[IssueOption]:
        raw = self.api.search_enhanced(ASSIGNED_JQL, fields=list(ASSIGNED_SEARCH_FIELDS))
        return [opt for opt in (map_issue_option(r) for r in raw) if opt.key]

    # ------------------ Submission ------------------
    def submit_worklog(
        self,
        issue_key: str,
        seconds: int,
        description: str | None = None,
        started: datetime | None = None,
    ) -> dict[str, Any]:
        key = (issue_key or "").strip().upper()
        if not key:
            raise ValueError("An issue key is required")
        if int(seconds) <= 0:
            raise ValueError("Logged time must be greater than zero")
        payload = build_worklog_payload(seconds, description, started or datetime.now(UTC))
        result = self.api.add_worklog(key, payload)
        # New worklog must show up on the next dashboard fetch
        self.api.clear_cache()
        logger.info("Logged %ss on %s", int(seconds), key)
        return result

    def clear_caches(self, account_id: str | None = None) -> None:
        self.api.clear_cache()
        self.author_cache.invalidate(account_id)

    # ------------------ Internal Worklog Hydration ------------------
    def _hydrate_truncated_worklogs(
        self,
        raw_issues: list[dict[str, Any]],
        *,
        progress: ProgressCallback | None = None,
    ) -> None:
        """Replace truncated worklog arrays with full lists (in-place).

        Search results embed only the first N worklogs of an issue but report
        the real count in ``fields.worklog.total``; affected issues are
        re-fetched through the per-issue worklog endpoint.
        """
        work: list[dict[str, Any]] = []
        for issue in raw_issues or []:
            block = (issue.get("fields") or {}).get("worklog") or {}
            logs = block.get("worklogs") or []
            total = block.get("total")
            if (
                isinstance(total, int)
                and total > len(logs)
                or total is None
                and len(logs) >= EMBEDDED_WORKLOG_LIMIT
            ):
                work.append(issue)
        if not work:
            return

        if progress:
            progress("Loading complete worklog history", 0, len(work))
        if len(work) < WORKLOG_HYDRATION_MIN_PARALLEL:
            for idx, issue in enumerate(work, start=1):
                self._hydrate_single_issue(issue)
                if progress:
                    progress("Loading complete worklog history", idx, len(work))
            return

        from concurrent.futures import ThreadPoolExecutor, as_completed

        completed = 0
        with ThreadPoolExecutor(max_workers=WORKLOG_HYDRATION_MAX_WORKERS) as pool:
            futures = [pool.submit(self._hydrate_single_issue, iss) for iss in work]
            for fut in as_completed(futures):
                try:
                    fut.result()
                except Exception as exc:  # pragma: no cover
                    logger.warning("Hydration task failed: %s", exc)
                finally:
                    completed += 1
                    if progress:
                        progress("Loading complete worklog history", completed, len(work))

    def _hydrate_single_issue(self, issue: dict[str, Any]) -> None:
        key = issue.get("key")
        if not key:
            return
        fields = issue.setdefault("fields", {})
        block = fields.get("worklog") or {}
        existing = block.get("worklogs") or []
        try:
            full = self.api.fetch_issue_worklogs(key)
        except JiraRequestError as exc:
            logger.warning("Failed to hydrate worklogs of %s: %s", key, exc)
            return
        if len(full) >= len(existing):
            block["worklogs"] = full
            block["total"] = len(full)
            fields["worklog"] = block
            logger.debug("Hydrated %s worklogs: %s -> %s", key, len(existing), len(full))
