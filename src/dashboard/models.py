"""Data models for the dashboard."""
from dataclasses import dataclass, field

from src.simulation.models import RunState, SimulationConfig


NO_LOGS_PLACEHOLDER = "No logs available"


@dataclass(frozen=True)
class ViewSnapshot:
    """Immutable copy of the view state, safe to read from another thread.

    Attributes:
        config: Current form values.
        validation_errors: Field name to message for invalid fields.
        run_state: Whether the simulation is believed to be running.
        logs: Displayed log lines.
        ticket_pool_size: Last observed pool occupancy.
        error: Latest error message, if any.
    """

    config: SimulationConfig
    validation_errors: dict[str, str] = field(default_factory=dict)
    run_state: RunState = RunState.IDLE
    logs: tuple[str, ...] = ()
    ticket_pool_size: int = 0
    error: str | None = None

    @property
    def is_running(self) -> bool:
        return self.run_state == RunState.RUNNING

    @property
    def has_validation_errors(self) -> bool:
        return bool(self.validation_errors)

    @property
    def can_start(self) -> bool:
        return not self.is_running and not self.has_validation_errors

    @property
    def can_stop(self) -> bool:
        return self.is_running

    @property
    def can_configure(self) -> bool:
        return not self.has_validation_errors

    @property
    def display_logs(self) -> list[str]:
        """Log lines to render, or the empty-state placeholder."""
        return list(self.logs) if self.logs else [NO_LOGS_PLACEHOLDER]
