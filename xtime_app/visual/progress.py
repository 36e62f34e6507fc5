"""Transient progress banner for worklog fetches."""

from __future__ import annotations

import streamlit as st


class FetchProgress:
    """Single placeholder redrawn on every WorklogService progress step.

    Steps without a total only change the caption; hydration steps also move
    the bar. ``clear`` removes the banner once the page has its data.
    """

    def __init__(self, title: str):
        self._title = title
        self._slot = st.empty()

    def callback(self, message: str, current: int | None = None, total: int | None = None) -> None:
        with self._slot.container():
            st.caption(f"{self._title}: {message}")
            if total:
                st.progress(min(max(current or 0, 0) / total, 1.0))

    def clear(self) -> None:
        self._slot.empty()
