"""Timer page: track elapsed time and save it as a Jira worklog."""

from __future__ import annotations

from datetime import UTC, datetime

import streamlit as st

from xtime_app.analytics.timefmt import format_elapsed
from xtime_app.app import account_repository, active_service, register_page, settings_store
from xtime_app.core.jira_client import JiraRequestError
from xtime_app.features.timer.state import TimerState
from xtime_app.visual.i18n import t
from xtime_app.visual.privacy import mask_summary


def _timer() -> TimerState:
    return st.session_state.setdefault("timer", TimerState())


@st.fragment(run_every=1)
def _live_clock(timer: TimerState, label: str) -> None:
    st.metric(label, timer.display(datetime.now(UTC)))


def _save_form(timer: TimerState, language: str, privacy: bool) -> None:
    account = account_repository().active()
    service = active_service(account)
    templates = settings_store().load().log_templates

    st.subheader(t("save_worklog", language))
    st.metric(t("elapsed", language), format_elapsed(timer.elapsed()))

    options: list[str] = []
    labels: dict[str, str] = {}
    if service is not None:
        # Reloaded after each stop so a new save form sees fresh tickets
        if "timer_issue_options" not in st.session_state:
            try:
                st.session_state["timer_issue_options"] = service.fetch_assigned_issues()
            except JiraRequestError as exc:
                st.warning(f"Could not load assigned tickets: {exc}")
                st.session_state["timer_issue_options"] = []
        for opt in st.session_state["timer_issue_options"]:
            options.append(opt.key)
            labels[opt.key] = f"{opt.key}: {mask_summary(opt.summary, privacy)} ({opt.status_name})"

    picked = None
    if options:
        picked = st.selectbox("Ticket", [""] + options, format_func=lambda k: labels.get(k, "-"))
    issue_key = st.text_input(t("issue_key", language), value=picked or timer.issue_key, placeholder="ABC-123")

    template = ""
    if templates:
        template = st.selectbox(t("template", language), [""] + templates)
    description = st.text_area(t("description", language), value=template or timer.description, height=90)
    override = st.text_input(t("hours_override", language), value="")

    save_col, discard_col = st.columns(2)
    if discard_col.button(t("discard", language)):
        timer.reset()
        st.session_state.pop("timer_issue_options", None)
        st.rerun()
    if save_col.button(t("save_worklog", language), type="primary"):
        if override.strip():
            if not timer.apply_override(override):
                st.error("Enter a non-negative number of hours, e.g. 1.5 or 1,5.")
                return
        else:
            timer.clear_override()
        if service is None:
            st.error("No API token available for the active account.")
            return
        seconds = timer.seconds_to_log()
        try:
            service.submit_worklog(issue_key, seconds, description, started=timer.started_at)
        except ValueError as exc:
            st.error(str(exc))
            return
        except JiraRequestError as exc:
            st.error(f"Saving the worklog failed: {exc}")
            return
        st.toast(f"{t('saved', language)}: {issue_key.strip().upper()} {format_elapsed(seconds)}")
        timer.reset()
        for key in ("timer_issue_options", "dashboard_ctx"):
            st.session_state.pop(key, None)
        st.rerun()


@register_page("Timer")
def timer_page():
    settings = settings_store().load()
    language = settings.language
    st.title(t("timer", language))
    timer = _timer()

    if timer.running:
        _live_clock(timer, t("elapsed", language))
        if st.button(t("stop", language), type="primary"):
            timer.stop()
            st.session_state.pop("timer_issue_options", None)
            st.rerun()
        return

    if timer.awaiting_save:
        _save_form(timer, language, settings.privacy_mode)
        return

    st.metric(t("elapsed", language), format_elapsed(0))
    if st.button(t("start", language), type="primary"):
        timer.start()
        st.rerun()
