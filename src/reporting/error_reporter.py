"""Latest-error reporting for the control client."""
import logging
from dataclasses import dataclass
from datetime import datetime

from src.client.errors import ApiError, ErrorKind


logger = logging.getLogger(__name__)

NETWORK_MESSAGE = "Network error: Unable to connect to the server."


@dataclass(frozen=True)
class ReportedError:
    """One formatted error message.

    Attributes:
        message: Text shown to the operator.
        action: Label of the attempted action, e.g. "starting simulation".
        kind: Classification of the failure.
        timestamp: When it was reported.
    """

    message: str
    action: str
    kind: ErrorKind
    timestamp: datetime


class ErrorReporter:
    """Single-slot error model.

    ``report`` replaces whatever was stored before; the last failure to
    resolve wins. Replaced messages are kept in a bounded history, most
    recent first, for diagnostics only.
    """

    def __init__(self, history_size: int = 20) -> None:
        self._current: ReportedError | None = None
        self._history: list[ReportedError] = []
        self._history_size = history_size

    @property
    def message(self) -> str | None:
        """The current error message, if any."""
        return self._current.message if self._current else None

    @property
    def current(self) -> ReportedError | None:
        return self._current

    @property
    def history(self) -> list[ReportedError]:
        """Previously reported errors, most recent first."""
        return self._history

    @staticmethod
    def format(error: ApiError, action: str) -> str:
        """Format a failure for display."""
        if error.kind == ErrorKind.NETWORK:
            return NETWORK_MESSAGE
        return f"Error {action}: {error.message}"

    def report(self, error: ApiError, action: str) -> str:
        """Store the message for ``error`` and return it."""
        message = self.format(error, action)
        logger.warning(message)

        reported = ReportedError(
            message=message,
            action=action,
            kind=error.kind,
            timestamp=datetime.now(),
        )
        self._current = reported
        if self._history_size > 0:
            self._history.insert(0, reported)
            # Trim to history size
            if len(self._history) > self._history_size:
                self._history = self._history[: self._history_size]
        return message

    def clear(self, action: str | None = None) -> bool:
        """Empty the slot.

        Args:
            action: If given, clear only when the current message came from
                this action.

        Returns:
            True if a message was cleared.
        """
        if self._current is None:
            return False
        if action is not None and self._current.action != action:
            return False
        self._current = None
        return True

    def clear_history(self) -> None:
        self._history = []
