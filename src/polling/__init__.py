"""Polling module for observing a running simulation."""

from .poller import LOGS_ACTION, POOL_SIZE_ACTION, PollerState, PollingController
from .settings import PollingSettings

__all__ = [
    "LOGS_ACTION",
    "POOL_SIZE_ACTION",
    "PollerState",
    "PollingController",
    "PollingSettings",
]
