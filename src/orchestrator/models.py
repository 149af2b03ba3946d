"""Data models for the simulation controller."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ActionStatus(Enum):
    """Outcome of an operator action."""

    OK = "ok"
    BLOCKED = "blocked"
    SKIPPED = "skipped"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass
class ActionResult:
    """Result of a configure, start or stop request.

    Attributes:
        action: Action label, e.g. "starting simulation".
        status: Outcome.
        message: Status line on success, notice or error text otherwise.
        timestamp: When the action finished.
    """

    action: str
    status: ActionStatus
    message: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def ok(self) -> bool:
        return self.status == ActionStatus.OK
