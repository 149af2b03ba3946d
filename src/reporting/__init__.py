"""Error reporting module."""

from .error_reporter import NETWORK_MESSAGE, ErrorReporter, ReportedError
from .settings import ErrorReportingSettings

__all__ = [
    "NETWORK_MESSAGE",
    "ErrorReporter",
    "ErrorReportingSettings",
    "ReportedError",
]
