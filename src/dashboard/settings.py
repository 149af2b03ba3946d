"""Settings for the Streamlit dashboard."""
from pydantic import BaseModel, Field


class DashboardSettings(BaseModel):
    """Configuration for the dashboard."""

    refresh_interval_seconds: float = Field(default=1.0, gt=0)
    max_logs_displayed: int = Field(default=200, gt=0)
    action_timeout_seconds: float = Field(default=30.0, gt=0)
