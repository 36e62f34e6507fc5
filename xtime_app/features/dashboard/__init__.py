"""Dashboard feature module: window stats, chart series and project split."""

from xtime_app.features.dashboard.context import (
    STATUS_CONNECTED,
    STATUS_MOCK,
    DashboardContext,
    build_dashboard_context,
    load_dashboard,
    mock_context,
)

__all__ = [
    "STATUS_CONNECTED",
    "STATUS_MOCK",
    "DashboardContext",
    "build_dashboard_context",
    "load_dashboard",
    "mock_context",
]
