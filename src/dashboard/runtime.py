"""Background event loop hosting the controller for the Streamlit dashboard."""
import asyncio
import concurrent.futures
import logging
import threading
from typing import Any, Awaitable, Callable, TypeVar

from src.config.settings import Settings
from src.dashboard.models import ViewSnapshot
from src.orchestrator.models import ActionResult, ActionStatus
from src.orchestrator.simulation_controller import (
    CONFIGURE_ACTION,
    START_ACTION,
    STOP_ACTION,
    SimulationController,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")


class DashboardRuntime:
    """Runs one SimulationController on a dedicated asyncio loop thread.

    Streamlit reruns its script on every interaction, so the controller
    lives on its own loop and the page talks to it through ``call`` and
    ``snapshot``. All view state mutation stays on the loop thread.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._run_loop, name="simulation-controller", daemon=True
        )
        self._ready = threading.Event()
        self._shutdown: asyncio.Event | None = None
        self._controller: SimulationController | None = None
        self._startup_error: BaseException | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def is_alive(self) -> bool:
        return self._thread.is_alive()

    @property
    def controller(self) -> SimulationController:
        if self._controller is None:
            raise RuntimeError("Runtime not started. Call start() first.")
        return self._controller

    def start(self, timeout: float = 10.0) -> None:
        """Start the loop thread and wait for the controller session."""
        self._thread.start()
        if not self._ready.wait(timeout):
            raise RuntimeError("Simulation controller did not start in time")
        if self._startup_error is not None:
            raise RuntimeError("Simulation controller failed to start") from self._startup_error

    def shutdown(self, timeout: float = 10.0) -> None:
        """Tear down the controller session and stop the loop thread. Idempotent."""
        if not self._thread.is_alive() or self._shutdown is None:
            return
        self._loop.call_soon_threadsafe(self._shutdown.set)
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning("Simulation controller thread did not stop in time")

    def call(
        self,
        fn: Callable[..., Awaitable[T]],
        *args: Any,
        timeout: float | None = None,
    ) -> T:
        """Run a coroutine function on the loop and wait for its result.

        Raises:
            concurrent.futures.TimeoutError: The coroutine did not finish in
                time. It is cancelled before the error propagates.
        """
        future = asyncio.run_coroutine_threadsafe(fn(*args), self._loop)
        try:
            return future.result(timeout or self._settings.dashboard.action_timeout_seconds)
        except concurrent.futures.TimeoutError:
            future.cancel()
            raise

    def update_field(self, name: str, value: int) -> str | None:
        async def _update() -> str | None:
            return self.controller.update_field(name, value)

        return self.call(_update)

    def configure(self) -> ActionResult:
        return self._action(CONFIGURE_ACTION, self.controller.configure)

    def start_simulation(self) -> ActionResult:
        return self._action(START_ACTION, self.controller.start)

    def stop_simulation(self) -> ActionResult:
        return self._action(STOP_ACTION, self.controller.stop)

    def _action(self, action: str, fn: Callable[[], Awaitable[ActionResult]]) -> ActionResult:
        try:
            return self.call(fn)
        except concurrent.futures.TimeoutError:
            timeout = self._settings.dashboard.action_timeout_seconds
            logger.warning(f"Timed out after {timeout}s {action}")
            return ActionResult(
                action,
                ActionStatus.TIMED_OUT,
                f"Timed out {action}: no response after {timeout:g} seconds.",
            )

    def snapshot(self) -> ViewSnapshot:
        async def _snapshot() -> ViewSnapshot:
            return self.controller.view.snapshot()

        return self.call(_snapshot)

    def _run_loop(self) -> None:
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_until_complete(self._serve())
        finally:
            self._loop.close()

    async def _serve(self) -> None:
        self._shutdown = asyncio.Event()
        try:
            self._controller = SimulationController.from_settings(self._settings)
            async with self._controller.session():
                self._ready.set()
                logger.info(f"Controller session open ({self._settings.service.base_url})")
                await self._shutdown.wait()
        except Exception as e:
            self._startup_error = e
            logger.error(f"Controller session failed: {e}")
        finally:
            self._ready.set()
            logger.info("Controller session closed")
