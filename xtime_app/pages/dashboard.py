"""Dashboard page.

Shows today / week / month totals, the per-day chart for the selected
weekly or monthly window, the project split, the window's worklogs and the
tickets currently assigned to the user.
"""

from __future__ import annotations

import streamlit as st

from xtime_app.app import account_repository, active_service, register_page, settings_store
from xtime_app.core.config import (
    DAILY_TARGET_HOURS,
    MONTHLY_TARGET_HOURS,
    VIEW_MONTHLY,
    VIEW_WEEKLY,
    WEEKLY_TARGET_HOURS,
    local_timezone,
)
from xtime_app.core.jira_client import JiraRequestError
from xtime_app.features.dashboard import DashboardContext, load_dashboard
from xtime_app.visual.charts import daily_hours_chart, project_distribution_chart
from xtime_app.visual.i18n import t
from xtime_app.visual.progress import FetchProgress
from xtime_app.visual.tables import issue_table, worklog_table


def _stat_card(column, label: str, value: float, target: float) -> None:
    with column:
        st.caption(label.upper())
        st.metric(label, f"{value:.1f} / {target:.1f}h", label_visibility="collapsed")
        st.progress(min(value / target, 1.0) if target else 0.0)


def _navigation(language: str) -> tuple[str, int]:
    mode = st.session_state.setdefault("view_mode", VIEW_WEEKLY)
    offset = st.session_state.setdefault("view_offset", 0)
    weekly = mode == VIEW_WEEKLY

    chosen = st.radio(
        t("statistics", language),
        [VIEW_WEEKLY, VIEW_MONTHLY],
        index=0 if weekly else 1,
        horizontal=True,
        format_func=lambda m: t(m, language),
    )
    if chosen != mode:
        st.session_state["view_mode"] = chosen
        st.session_state["view_offset"] = 0
        st.rerun()

    prev_col, now_col, next_col = st.columns(3)
    if prev_col.button(t("previous_week" if weekly else "previous_month", language)):
        st.session_state["view_offset"] = offset + 1
        st.rerun()
    if now_col.button(t("this_week" if weekly else "this_month", language), disabled=offset == 0):
        st.session_state["view_offset"] = 0
        st.rerun()
    if next_col.button(t("next_week" if weekly else "next_month", language), disabled=offset == 0):
        st.session_state["view_offset"] = max(0, offset - 1)
        st.rerun()
    return mode, offset


@register_page("Dashboard")
def dashboard_page():
    settings = settings_store().load()
    language = settings.language
    privacy = settings.privacy_mode
    st.title(t("dashboard", language))

    account = account_repository().active()
    if account is None:
        st.warning(t("no_account", language))
    service = active_service(account)
    tz = local_timezone()

    mode, offset = _navigation(language)
    refresh = st.button(t("refresh", language), type="primary", disabled=account is None)

    key = (account.id if account else None, mode, offset)
    ctx: DashboardContext | None = None
    cached = st.session_state.get("dashboard_ctx")
    if cached and cached[0] == key and not refresh:
        ctx = cached[1]
    else:
        reporter = FetchProgress(f"Fetching worklogs ({mode})")
        ctx = load_dashboard(
            service,
            mode=mode,
            offset=offset,
            account_id=account.id if account else None,
            tz=tz,
            fresh=refresh,
            progress=reporter.callback,
        )
        reporter.clear()
        st.session_state["dashboard_ctx"] = (key, ctx)

    if ctx.error:
        st.warning(f"Jira request failed, showing placeholder data: {ctx.error}")

    c1, c2, c3 = st.columns(3)
    _stat_card(c1, t("today_effort", language), ctx.today_hours, DAILY_TARGET_HOURS)
    _stat_card(c2, t("week_effort", language), ctx.week_hours, WEEKLY_TARGET_HOURS)
    _stat_card(c3, t("month_effort", language), ctx.month_hours, MONTHLY_TARGET_HOURS)

    st.caption(f"{ctx.window.after} → {ctx.window.before}")
    left, right = st.columns([1, 2])
    with left:
        st.subheader(t("project_distribution", language))
        pie = project_distribution_chart(ctx.projects)
        if pie is not None:
            st.altair_chart(pie, use_container_width=True)
        else:
            st.info("No worklogs in this window.")
    with right:
        st.subheader(t("statistics", language))
        bars = daily_hours_chart(ctx.chart_series, mode)
        if bars is not None:
            st.altair_chart(bars, use_container_width=True)
    st.caption(t("source_mock" if ctx.is_mock else "source_connected", language))

    with st.expander("JQL"):
        st.code(ctx.jql, language="sql")

    server = account.domain if account else ""
    if ctx.entries:
        st.subheader(t("worklogs", language))
        table, cols, cfg = worklog_table(ctx.entries, server, privacy=privacy, tz=tz)
        st.dataframe(table[cols], hide_index=True, column_config=cfg)

    st.subheader(t("my_tickets", language))
    if service is None:
        st.info(t("no_tickets", language))
        return
    issues = st.session_state.get("assigned_issues")
    if issues is None or issues[0] != (account.id if account else None) or refresh:
        try:
            fetched = service.fetch_assigned_issues()
        except JiraRequestError as exc:
            st.warning(f"Could not load assigned tickets: {exc}")
            fetched = []
        issues = (account.id if account else None, fetched)
        st.session_state["assigned_issues"] = issues
    if not issues[1]:
        st.info(t("no_tickets", language))
        return
    table, cols, cfg = issue_table(issues[1], server, privacy=privacy)
    st.dataframe(table[cols], hide_index=True, column_config=cfg)
