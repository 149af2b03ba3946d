"""Repeating poller that reads simulation state while it runs."""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, TypeVar

from src.client.errors import ApiError, ClientError
from src.client.simulation_client import SimulationClient


logger = logging.getLogger(__name__)

T = TypeVar("T")

LOGS_ACTION = "fetching logs"
POOL_SIZE_ACTION = "fetching ticket pool size"


class PollerState(Enum):
    """State of the polling timer."""

    DISARMED = "disarmed"
    ARMED = "armed"


class PollingController:
    """Owns the single repeating timer that polls the simulation service.

    Each tick fires ``fetch_logs`` and ``fetch_pool_size`` as independent
    tasks. Results are handed to the callbacks together with the tick's
    sequence number; ticks never wait for earlier ticks to settle.
    Disarming cancels the timer only, in-flight fetches still complete.
    """

    def __init__(
        self,
        client: SimulationClient,
        on_logs: Callable[[int, list[str]], None],
        on_pool_size: Callable[[int, int], None],
        on_error: Callable[[int, ApiError, str], None],
        interval_seconds: float = 1.0,
    ):
        self._client = client
        self._on_logs = on_logs
        self._on_pool_size = on_pool_size
        self._on_error = on_error
        self._interval = interval_seconds

        self._timer: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()
        self._tick = 0

    @property
    def state(self) -> PollerState:
        if self._timer is not None and not self._timer.done():
            return PollerState.ARMED
        return PollerState.DISARMED

    @property
    def is_armed(self) -> bool:
        return self.state == PollerState.ARMED

    @property
    def tick_count(self) -> int:
        """Number of ticks fired since creation."""
        return self._tick

    @property
    def in_flight(self) -> int:
        """Fetches issued but not yet resolved."""
        return len(self._in_flight)

    def arm(self) -> None:
        """Start the timer. No-op if already armed."""
        if self.is_armed:
            return
        self._timer = asyncio.create_task(self._run())
        logger.info(f"Poller armed ({self._interval}s interval)")

    def disarm(self) -> None:
        """Cancel the timer. Idempotent."""
        if self._timer is None:
            return
        timer, self._timer = self._timer, None
        if not timer.done():
            timer.cancel()
            logger.info("Poller disarmed")

    async def wait_idle(self) -> None:
        """Wait until every in-flight fetch has resolved."""
        while self._in_flight:
            await asyncio.wait(list(self._in_flight))

    async def _run(self) -> None:
        """Timer loop."""
        try:
            while True:
                await asyncio.sleep(self._interval)
                self._fire()
        except asyncio.CancelledError:
            pass

    def _fire(self) -> None:
        self._tick += 1
        tick = self._tick
        logger.debug(f"Poll tick {tick}")
        self._spawn(self._fetch(tick, self._client.fetch_logs, self._on_logs, LOGS_ACTION))
        self._spawn(
            self._fetch(tick, self._client.fetch_pool_size, self._on_pool_size, POOL_SIZE_ACTION)
        )

    def _spawn(self, coro: Awaitable[None]) -> None:
        task = asyncio.create_task(coro)
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _fetch(
        self,
        tick: int,
        call: Callable[[], Awaitable[T]],
        on_result: Callable[[int, T], None],
        action: str,
    ) -> None:
        try:
            result = await call()
        except ApiError as e:
            self._on_error(tick, e, action)
            return
        except Exception as e:
            logger.error(f"Unexpected error {action}: {e}")
            self._on_error(tick, ClientError(str(e)), action)
            return
        on_result(tick, result)
