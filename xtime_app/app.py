"""Application entry point: page registry, router, and shared process state."""

from __future__ import annotations

import logging

import streamlit as st

from xtime_app.core.credentials import TokenStore
from xtime_app.core.models import Account
from xtime_app.core.service import TrustedAuthorCache, WorklogService
from xtime_app.core.session import open_service
from xtime_app.core.storage import AccountRepository, LocalStore, SettingsStore
from xtime_app.features.timer.reminder import ReminderScheduler
from xtime_app.visual.i18n import t
from xtime_app.visual.privacy import mask_email

logger = logging.getLogger(__name__)

PAGES = {}

DARK_CSS = """
<style>
.stApp { background-color: #0f172a; color: #f1f5f9; }
[data-testid="stSidebar"] { background-color: #1e293b; }
</style>
"""


def register_page(label):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


# ------------------ Process-lifetime resources ------------------
@st.cache_resource
def get_local_store() -> LocalStore:
    return LocalStore()


@st.cache_resource
def get_author_cache() -> TrustedAuthorCache:
    return TrustedAuthorCache()


def settings_store() -> SettingsStore:
    return SettingsStore(get_local_store())


def account_repository() -> AccountRepository:
    return AccountRepository(get_local_store())


def token_store() -> TokenStore:
    return TokenStore(get_local_store())


def active_service(account: Account | None) -> WorklogService | None:
    """Return the session's service for ``account``, reconnecting on account switch."""
    if account is None:
        st.session_state.pop("worklog_service", None)
        return None
    cached = st.session_state.get("worklog_service")
    if cached and cached[0] == account.id and cached[1] is not None:
        return cached[1]
    service = open_service(account, token_store(), author_cache=get_author_cache())
    st.session_state["worklog_service"] = (account.id, service)
    return service


def soft_clear_cache() -> None:
    """Drop cached remote data; settings and accounts are kept."""
    cached = st.session_state.get("worklog_service")
    if cached and cached[1] is not None:
        cached[1].clear_caches()
    get_author_cache().invalidate()
    for key in ("dashboard_ctx", "assigned_issues"):
        st.session_state.pop(key, None)
    logger.info("Soft cache clear")


def hard_reset() -> None:
    """Delete every stored token, all local state and all cached data."""
    tokens = token_store()
    for account in account_repository().list_accounts():
        tokens.delete_token(account.email)
    get_local_store().clear()
    get_author_cache().invalidate()
    for key in list(st.session_state.keys()):
        del st.session_state[key]
    logger.info("Hard reset of local data")


def account_selector(privacy: bool) -> Account | None:
    """Sidebar picker for the active account; the choice is persisted."""
    repo = account_repository()
    accounts = repo.list_accounts()
    if not accounts:
        return None
    active = repo.active()
    ids = [a.id for a in accounts]
    by_id = {a.id: a for a in accounts}
    chosen = st.sidebar.selectbox(
        "Account",
        ids,
        index=ids.index(active.id) if active else 0,
        format_func=lambda i: mask_email(by_id[i].email, privacy),
    )
    if active is None or chosen != active.id:
        return repo.set_active(chosen)
    return active


@st.fragment(run_every=60)
def reminder_tick() -> None:
    ReminderScheduler(settings_store(), notify=lambda title, body: st.toast(f"**{title}**  \n{body}")).tick()


def main():
    current = settings_store().load()
    language = current.language
    st.sidebar.title("XTime")
    if current.theme == "dark":
        st.markdown(DARK_CSS, unsafe_allow_html=True)
    account_selector(current.privacy_mode)
    reminder_tick()
    pages = list(PAGES.keys())
    if not pages:
        st.write("No pages registered yet.")
        return
    preferred_order = ["Dashboard", "Timer", "Settings"]
    ordered = [name for name in preferred_order if name in pages]
    trailing = sorted(name for name in pages if name not in preferred_order)
    pages = ordered + trailing

    # Without any account the only useful page is Settings
    if "Settings" in pages and not account_repository().list_accounts():
        default = pages.index("Settings")
    else:
        default = 0
    page = st.sidebar.radio(
        "Page",
        pages,
        index=default,
        format_func=lambda name: t(name.lower(), language),
    )
    PAGES[page]()


if __name__ == "__main__":
    main()
