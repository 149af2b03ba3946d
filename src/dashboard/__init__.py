"""Streamlit dashboard for controlling and observing the ticket simulation."""

from src.dashboard.models import NO_LOGS_PLACEHOLDER, ViewSnapshot
from src.dashboard.settings import DashboardSettings
from src.dashboard.state import ViewState

__all__ = [
    "NO_LOGS_PLACEHOLDER",
    "DashboardSettings",
    "ViewSnapshot",
    "ViewState",
]
