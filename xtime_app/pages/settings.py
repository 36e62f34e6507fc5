"""Settings page: preferences, quick-log templates, accounts, and cache reset."""

from __future__ import annotations

from datetime import time

import streamlit as st

from xtime_app.app import (
    account_repository,
    hard_reset,
    register_page,
    settings_store,
    soft_clear_cache,
    token_store,
)
from xtime_app.core.config import LANGUAGES, THEMES
from xtime_app.features.timer.reminder import parse_clock
from xtime_app.visual.i18n import t
from xtime_app.visual.privacy import mask_domain, mask_email


def _general(language: str) -> None:
    store = settings_store()
    current = store.load()
    with st.form("general_settings"):
        lang = st.selectbox(
            t("language", language),
            list(LANGUAGES),
            index=list(LANGUAGES).index(current.language),
            format_func=lambda code: {"en": "English", "tr": "Türkçe"}.get(code, code),
        )
        theme = st.selectbox(t("theme", language), list(THEMES), index=list(THEMES).index(current.theme))
        privacy = st.checkbox(t("privacy_mode", language), value=current.privacy_mode)
        notify = st.checkbox(t("notifications", language), value=current.notification_enabled)
        at = st.time_input(
            t("notification_time", language),
            value=parse_clock(current.notification_time) or time(17, 0),
            step=300,
        )
        autostart = st.checkbox(t("autostart", language), value=current.autostart)
        if st.form_submit_button("Save", type="primary"):
            store.update(
                language=lang,
                theme=theme,
                privacy_mode=privacy,
                notification_enabled=notify,
                notification_time=at.strftime("%H:%M"),
                autostart=autostart,
            )
            st.rerun()


def _templates(language: str) -> None:
    store = settings_store()
    st.subheader(t("templates", language))
    templates = store.load().log_templates
    if not templates:
        st.caption("No templates added yet. Create a new template below.")
    for idx, text in enumerate(templates):
        col_text, col_btn = st.columns([5, 1])
        col_text.write(text)
        if col_btn.button(t("delete", language), key=f"tpl_del_{idx}"):
            store.remove_template(text)
            st.rerun()
    with st.form("add_template", clear_on_submit=True):
        new_template = st.text_input(t("add_template", language))
        if st.form_submit_button(t("add_template", language)) and new_template.strip():
            store.add_template(new_template)
            st.rerun()


def _accounts(language: str, privacy: bool) -> None:
    repo = account_repository()
    tokens = token_store()
    st.subheader(t("accounts", language))
    active = repo.active()
    for account in repo.list_accounts():
        col_info, col_btn = st.columns([5, 1])
        marker = " (active)" if active and account.id == active.id else ""
        col_info.write(f"**{mask_email(account.email, privacy)}**{marker}  \n{mask_domain(account.domain, privacy)}")
        if col_btn.button(t("delete", language), key=f"acc_del_{account.id}"):
            tokens.delete_token(account.email)
            repo.remove(account.id)
            soft_clear_cache()
            st.rerun()

    # Pre-fill from secrets if available (user can override)
    jira_secrets = st.secrets.get("jira", {}) if _has_secrets() else {}
    with st.form("add_account", clear_on_submit=True):
        email = st.text_input("Email", value=jira_secrets.get("JIRA_EMAIL", ""))
        domain = st.text_input("Jira URL", value=jira_secrets.get("JIRA_SERVER", ""), placeholder="https://example.atlassian.net")
        token = st.text_input("API Token", type="password", value=jira_secrets.get("JIRA_API_TOKEN", ""))
        if st.form_submit_button(t("add_account", language), type="primary"):
            if not (email and domain and token):
                st.error("All fields required.")
                return
            secure = tokens.save_token(email.strip(), token)
            repo.add(email, domain)
            if not secure:
                st.warning("Secure storage unavailable; the token was saved to local storage.")
            st.rerun()


def _has_secrets() -> bool:
    try:
        return "jira" in st.secrets
    except FileNotFoundError:
        return False


@register_page("Settings")
def settings_page():
    current = settings_store().load()
    language = current.language
    st.title(t("settings", language))

    _general(language)
    st.markdown("---")
    _templates(language)
    st.markdown("---")
    _accounts(language, current.privacy_mode)
    st.markdown("---")

    st.caption("Actions below only affect this application's cache and settings.")
    soft_col, hard_col = st.columns(2)
    if soft_col.button(t("soft_clear", language)):
        soft_clear_cache()
        st.success("Cache cleared.")
    if hard_col.button(t("hard_reset", language)):
        st.session_state["confirm_hard_reset"] = True
    if st.session_state.get("confirm_hard_reset"):
        st.warning("This deletes all accounts, tokens and settings.")
        if st.button("Confirm reset", type="primary"):
            hard_reset()
            st.rerun()
