"""Configuration for the simulation poller."""

from pydantic import BaseModel, Field


class PollingSettings(BaseModel):
    """Settings for PollingController.

    Attributes:
        interval_seconds: Period between ticks.
        discard_stale_results: Drop results from ticks older than the
            latest applied one.
    """

    interval_seconds: float = Field(default=1.0, gt=0)
    discard_stale_results: bool = True
