"""View state observed by the presentation layer."""
import logging
from dataclasses import replace
from typing import Callable

from src.client.errors import ApiError
from src.dashboard.models import ViewSnapshot
from src.polling.poller import LOGS_ACTION, POOL_SIZE_ACTION
from src.reporting.error_reporter import ErrorReporter
from src.simulation.models import RunState, SimulationConfig, SimulationSnapshot, canonical_field_name
from src.simulation.validation import validate_form


logger = logging.getLogger(__name__)

Listener = Callable[["ViewState"], None]


class ViewState:
    """Aggregation root for everything the operator sees.

    Owned by a single SimulationController and mutated only through the
    transition methods below, all on the controller's event loop. Every
    transition notifies subscribers.

    Poll results are applied only while the simulation is RUNNING. Once the
    owning controller starts closing, no poll result is applied. With
    ``discard_stale`` enabled, a poll result older than the latest tick
    already applied on the same channel is dropped.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        reporter: ErrorReporter | None = None,
        discard_stale: bool = True,
    ) -> None:
        self._config = config or SimulationConfig()
        self._validation_errors = validate_form(self._config)
        self._run_state = RunState.IDLE
        self._simulation = SimulationSnapshot()
        self._reporter = reporter or ErrorReporter()
        self._discard_stale = discard_stale
        self._closing = False
        self._latest_tick: dict[str, int] = {LOGS_ACTION: 0, POOL_SIZE_ACTION: 0}
        self._listeners: list[Listener] = []

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def validation_errors(self) -> dict[str, str]:
        return dict(self._validation_errors)

    @property
    def run_state(self) -> RunState:
        return self._run_state

    @property
    def is_running(self) -> bool:
        return self._run_state == RunState.RUNNING

    @property
    def is_closing(self) -> bool:
        return self._closing

    @property
    def simulation(self) -> SimulationSnapshot:
        """Latest observed logs and pool size."""
        return self._simulation

    @property
    def logs(self) -> list[str]:
        return list(self._simulation.logs)

    @property
    def ticket_pool_size(self) -> int:
        return self._simulation.ticket_pool_size

    @property
    def error(self) -> str | None:
        return self._reporter.message

    @property
    def reporter(self) -> ErrorReporter:
        return self._reporter

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every transition.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> ViewSnapshot:
        """Return an immutable copy of the current state."""
        return ViewSnapshot(
            config=self._config,
            validation_errors=dict(self._validation_errors),
            run_state=self._run_state,
            logs=self._simulation.logs,
            ticket_pool_size=self._simulation.ticket_pool_size,
            error=self._reporter.message,
        )

    # Transitions

    def set_field(self, name: str, value: int) -> str | None:
        """Update one field and recompute validation.

        Returns:
            The field's validation message, or None if valid.
        """
        self._config = self._config.with_field(name, value)
        self._validation_errors = validate_form(self._config)
        self._notify()
        return self._validation_errors.get(self._field_key(name))

    def show_status(self, line: str) -> None:
        """Replace the displayed logs with a single status line."""
        self._simulation = replace(self._simulation, logs=(line,))
        self._notify()

    def mark_running(self) -> None:
        self._run_state = RunState.RUNNING
        self._notify()

    def mark_idle(self) -> None:
        self._run_state = RunState.IDLE
        self._notify()

    def mark_closing(self) -> None:
        """Stop accepting poll results; the client is about to go away."""
        self._closing = True

    def apply_logs(self, tick: int, logs: list[str]) -> bool:
        """Replace the displayed logs with a polled log list.

        Returns:
            False if the result was discarded as stale.
        """
        if not self._accepts(LOGS_ACTION, tick):
            return False
        self._simulation = replace(self._simulation, logs=tuple(logs))
        self._reporter.clear(LOGS_ACTION)
        self._notify()
        return True

    def apply_pool_size(self, tick: int, size: int) -> bool:
        """Record a polled ticket pool size.

        Returns:
            False if the result was discarded as stale.
        """
        if not self._accepts(POOL_SIZE_ACTION, tick):
            return False
        self._simulation = replace(self._simulation, ticket_pool_size=size)
        self._reporter.clear(POOL_SIZE_ACTION)
        self._notify()
        return True

    def apply_poll_error(self, tick: int, error: ApiError, action: str) -> bool:
        """Report a failed poll read unless it is stale."""
        if not self._accepts(action, tick):
            return False
        self._reporter.report(error, action)
        self._notify()
        return True

    def report_error(self, error: ApiError, action: str) -> str:
        message = self._reporter.report(error, action)
        self._notify()
        return message

    def clear_error(self, action: str | None = None) -> None:
        if self._reporter.clear(action):
            self._notify()

    def _accepts(self, channel: str, tick: int) -> bool:
        if self._closing:
            logger.debug(f"Discarding {channel} result from tick {tick}: controller closing")
            return False
        if self._run_state != RunState.RUNNING:
            logger.debug(f"Discarding {channel} result from tick {tick}: simulation idle")
            return False
        latest = self._latest_tick.get(channel, 0)
        if self._discard_stale and tick < latest:
            logger.debug(f"Discarding {channel} result from tick {tick}: tick {latest} already applied")
            return False
        self._latest_tick[channel] = max(latest, tick)
        return True

    @staticmethod
    def _field_key(name: str) -> str:
        return canonical_field_name(name) or name

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("View state listener failed")
