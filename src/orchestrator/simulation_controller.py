"""Controller that drives the remote simulation on behalf of the operator."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from src.client.errors import ApiError
from src.client.simulation_client import SimulationClient
from src.config.settings import Settings
from src.dashboard.state import ViewState
from src.orchestrator.models import ActionResult, ActionStatus
from src.polling.poller import PollingController
from src.polling.settings import PollingSettings
from src.reporting.error_reporter import ErrorReporter
from src.simulation.models import RunState
from src.simulation.validation import is_submittable


logger = logging.getLogger(__name__)

CONFIGURE_ACTION = "configuring simulation"
START_ACTION = "starting simulation"
STOP_ACTION = "stopping simulation"

CONFIGURE_BLOCKED = "Please correct the errors in the form before configuring."
START_BLOCKED = "Please correct the errors in the form before starting the simulation."


class SimulationController:
    """Coordinates validation, remote calls, polling and view state.

    Configure and start are gated by form validation. Start arms the poller
    only after the service confirms. Stop is optimistic: the poller is
    disarmed and the run state returns to IDLE whatever the outcome of the
    stop request. Control actions are serialized.
    """

    def __init__(
        self,
        client: SimulationClient,
        view: ViewState | None = None,
        polling: PollingSettings | None = None,
        drain_timeout_seconds: float = 5.0,
    ):
        polling = polling or PollingSettings()

        self._client = client
        self._view = view or ViewState(discard_stale=polling.discard_stale_results)
        self._poller = PollingController(
            client,
            on_logs=self._view.apply_logs,
            on_pool_size=self._view.apply_pool_size,
            on_error=self._view.apply_poll_error,
            interval_seconds=polling.interval_seconds,
        )
        self._drain_timeout = drain_timeout_seconds
        self._action_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SimulationController":
        """Build a controller and its collaborators from loaded settings."""
        client = SimulationClient(
            base_url=settings.service.base_url,
            timeout_seconds=settings.service.request_timeout_seconds,
        )
        view = ViewState(
            config=settings.simulation,
            reporter=ErrorReporter(history_size=settings.errors.history_size),
            discard_stale=settings.polling.discard_stale_results,
        )
        return cls(client, view=view, polling=settings.polling)

    @property
    def view(self) -> ViewState:
        return self._view

    @property
    def poller(self) -> PollingController:
        return self._poller

    @property
    def client(self) -> SimulationClient:
        return self._client

    @property
    def run_state(self) -> RunState:
        return self._view.run_state

    def update_field(self, name: str, value: int) -> str | None:
        """Apply an operator edit to one field.

        Returns:
            Validation message for the field, or None if valid.
        """
        return self._view.set_field(name, value)

    async def configure(self) -> ActionResult:
        """Send the current configuration to the service."""
        async with self._action_lock:
            config = self._view.config
            if not is_submittable(config):
                logger.warning("Configure blocked by validation errors")
                return ActionResult(CONFIGURE_ACTION, ActionStatus.BLOCKED, CONFIGURE_BLOCKED)

            try:
                line = await self._client.configure(config)
            except ApiError as e:
                message = self._view.report_error(e, CONFIGURE_ACTION)
                return ActionResult(CONFIGURE_ACTION, ActionStatus.FAILED, message)

            self._view.show_status(line)
            self._view.clear_error()
            logger.info(f"Simulation configured: {line}")
            return ActionResult(CONFIGURE_ACTION, ActionStatus.OK, line)

    async def start(self) -> ActionResult:
        """Start the remote simulation and begin polling on success."""
        async with self._action_lock:
            if self._view.is_running:
                logger.warning("Start ignored: simulation already running")
                return ActionResult(START_ACTION, ActionStatus.SKIPPED, "Simulation already running")

            if not is_submittable(self._view.config):
                logger.warning("Start blocked by validation errors")
                return ActionResult(START_ACTION, ActionStatus.BLOCKED, START_BLOCKED)

            try:
                line = await self._client.start()
            except ApiError as e:
                message = self._view.report_error(e, START_ACTION)
                return ActionResult(START_ACTION, ActionStatus.FAILED, message)

            self._view.show_status(line)
            self._view.mark_running()
            self._poller.arm()
            self._view.clear_error()
            logger.info(f"Simulation started: {line}")
            return ActionResult(START_ACTION, ActionStatus.OK, line)

    async def stop(self) -> ActionResult:
        """Stop the remote simulation.

        The poller is disarmed and the run state set to IDLE even if the
        request fails.
        """
        async with self._action_lock:
            if not self._view.is_running:
                logger.warning("Stop ignored: simulation not running")
                return ActionResult(STOP_ACTION, ActionStatus.SKIPPED, "Simulation not running")

            self._poller.disarm()
            try:
                line = await self._client.stop()
            except ApiError as e:
                message = self._view.report_error(e, STOP_ACTION)
                return ActionResult(STOP_ACTION, ActionStatus.FAILED, message)
            else:
                self._view.show_status(line)
                self._view.clear_error()
                logger.info(f"Simulation stopped: {line}")
                return ActionResult(STOP_ACTION, ActionStatus.OK, line)
            finally:
                self._view.mark_idle()

    async def close(self) -> None:
        """Disarm polling, let in-flight reads settle, release the client."""
        self._poller.disarm()
        if self._view.is_running:
            logger.warning("Closing controller while the remote simulation is still running")

        try:
            await asyncio.wait_for(self._poller.wait_idle(), timeout=self._drain_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"{self._poller.in_flight} poll requests still pending at close")

        # Reads still pending fail once the session closes
        self._view.mark_closing()
        await self._client.disconnect()

    @asynccontextmanager
    async def session(self) -> AsyncIterator["SimulationController"]:
        """Connect the client and guarantee teardown on every exit path."""
        await self._client.connect()
        try:
            yield self
        finally:
            await self.close()
