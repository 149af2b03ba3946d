# src/client/simulation_client.py
"""HTTP client for the remote ticket simulation service."""

import asyncio
import json
import logging
from typing import Any, Optional

import aiohttp

from src.client.errors import ClientError, NetworkUnreachable, ServerError
from src.simulation.models import SimulationConfig


logger = logging.getLogger(__name__)


class SimulationClient:
    """Facade over the five simulation service endpoints.

    Every operation is a single request with no retry. Failures are raised
    as ``ApiError`` subclasses:

    - ``ServerError``: the service responded with a non-success status.
    - ``NetworkUnreachable``: no response was received.
    - ``ClientError``: any other failure.

    Attributes:
        DEFAULT_BASE_URL: Service address used when none is given.
    """

    DEFAULT_BASE_URL = "http://localhost:8080"

    CONFIGURE_PATH = "/api/configure"
    START_PATH = "/api/start"
    STOP_PATH = "/api/stop"
    LOGS_PATH = "/api/logs"
    POOL_SIZE_PATH = "/api/ticket-pool-size"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float | None = None,
    ):
        """Initialize SimulationClient.

        Args:
            base_url: Root address of the simulation service.
            timeout_seconds: Total per-request timeout. None keeps the
                aiohttp default.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def base_url(self) -> str:
        """Return the service root address."""
        return self._base_url

    @property
    def is_connected(self) -> bool:
        return self._session is not None and not self._session.closed

    async def connect(self) -> None:
        """Open the underlying HTTP session."""
        if self.is_connected:
            return
        if self._timeout_seconds is None:
            self._session = aiohttp.ClientSession()
        else:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout_seconds)
            )

    async def disconnect(self) -> None:
        """Close the underlying HTTP session."""
        if self._session is not None:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "SimulationClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    async def configure(self, config: SimulationConfig) -> str:
        """Submit the full configuration.

        Returns:
            Status line echoed by the service.
        """
        body = await self._request("POST", self.CONFIGURE_PATH, payload=config.to_payload())
        return self._status_line(body)

    async def start(self) -> str:
        """Ask the service to start the simulation."""
        body = await self._request("POST", self.START_PATH)
        return self._status_line(body)

    async def stop(self) -> str:
        """Ask the service to stop the simulation."""
        body = await self._request("POST", self.STOP_PATH)
        return self._status_line(body)

    async def fetch_logs(self) -> list[str]:
        """Fetch the full current log list.

        Raises:
            ClientError: If the body is not a JSON array.
        """
        data = self._decode_json(await self._request("GET", self.LOGS_PATH))
        if not isinstance(data, list):
            raise ClientError(f"Expected a list of log lines, got {type(data).__name__}")
        return [entry if isinstance(entry, str) else str(entry) for entry in data]

    async def fetch_pool_size(self) -> int:
        """Fetch the number of tickets currently in the pool.

        Raises:
            ClientError: If the body is not a non-negative JSON integer.
        """
        data = self._decode_json(await self._request("GET", self.POOL_SIZE_PATH))
        if isinstance(data, bool) or not isinstance(data, int) or data < 0:
            raise ClientError(f"Expected a non-negative ticket pool size, got {data!r}")
        return data

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> str:
        """Issue one request and return the raw success body.

        Raises:
            ServerError: Non-success status.
            NetworkUnreachable: No response received.
            ClientError: Anything else.
        """
        if not self.is_connected:
            raise ClientError("Simulation client not connected. Call connect() first.")

        url = f"{self._base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            async with self._session.request(method, url, json=payload) as response:
                body = await response.text()
                if not response.ok:
                    logger.debug(f"{method} {url} -> {response.status}")
                    raise ServerError(body, status=response.status)
                logger.debug(f"{method} {url} -> {response.status}")
                return body
        except (aiohttp.ClientConnectionError, asyncio.TimeoutError) as e:
            raise NetworkUnreachable() from e
        except (aiohttp.ClientError, ValueError) as e:
            raise ClientError(str(e) or type(e).__name__) from e

    @staticmethod
    def _decode_json(body: str) -> Any:
        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise ClientError(f"Invalid JSON response: {e}") from e

    @staticmethod
    def _status_line(body: str) -> str:
        """Unwrap a status line sent either as plain text or as a JSON string."""
        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            return body
        return data if isinstance(data, str) else body
