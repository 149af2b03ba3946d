"""Shared pytest fixtures: an in-process fake of the simulation service."""
import asyncio
import json
import socket
import threading

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer


class FakeSimulationService:
    """Minimal stand-in for the remote ticket simulation.

    Tests can inject failures per path with ``fail(path, status, body)`` and
    slow responses with ``delay(path, seconds)``.
    """

    def __init__(self) -> None:
        self.config: dict | None = None
        self.running = False
        self.logs: list[str] = []
        self.pool_size = 0
        self.requests: list[tuple[str, str]] = []
        self.failures: dict[str, tuple[int, str]] = {}
        self.delays: dict[str, float] = {}
        self.status_as_json = False

    def fail(self, path: str, status: int = 500, body: str = "Internal error") -> None:
        self.failures[path] = (status, body)

    def delay(self, path: str, seconds: float) -> None:
        self.delays[path] = seconds

    def build_app(self) -> web.Application:
        app = web.Application(middlewares=[self._record])
        app.router.add_post("/api/configure", self._configure)
        app.router.add_post("/api/start", self._start)
        app.router.add_post("/api/stop", self._stop)
        app.router.add_get("/api/logs", self._logs)
        app.router.add_get("/api/ticket-pool-size", self._pool_size)
        return app

    @web.middleware
    async def _record(self, request: web.Request, handler):
        self.requests.append((request.method, request.path))
        if request.path in self.delays:
            await asyncio.sleep(self.delays[request.path])
        if request.path in self.failures:
            status, body = self.failures[request.path]
            return web.Response(status=status, text=body)
        return await handler(request)

    def _status(self, line: str) -> web.Response:
        if self.status_as_json:
            return web.json_response(line)
        return web.Response(text=line)

    async def _configure(self, request: web.Request) -> web.Response:
        self.config = await request.json()
        return self._status("Simulation configured successfully")

    async def _start(self, request: web.Request) -> web.Response:
        self.running = True
        self.logs.append("Simulation started")
        return self._status("Simulation started")

    async def _stop(self, request: web.Request) -> web.Response:
        self.running = False
        self.logs.append("Simulation stopped")
        return self._status("Simulation stopped")

    async def _logs(self, request: web.Request) -> web.Response:
        return web.Response(text=json.dumps(self.logs), content_type="application/json")

    async def _pool_size(self, request: web.Request) -> web.Response:
        return web.json_response(self.pool_size)


@pytest.fixture
def fake_service() -> FakeSimulationService:
    return FakeSimulationService()


@pytest_asyncio.fixture
async def service_url(fake_service: FakeSimulationService):
    """Base URL of a running fake service."""
    server = TestServer(fake_service.build_app())
    await server.start_server()
    yield str(server.make_url("/")).rstrip("/")
    await server.close()


@pytest.fixture
def unreachable_url() -> str:
    """Base URL of a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}"


@pytest.fixture
def threaded_service_url(fake_service: FakeSimulationService):
    """Base URL of a fake service running on its own loop thread.

    For synchronous tests that block the calling thread, such as the
    dashboard runtime and page tests.
    """
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, name="fake-service", daemon=True)
    thread.start()

    async def _start() -> TestServer:
        server = TestServer(fake_service.build_app())
        await server.start_server()
        return server

    server = asyncio.run_coroutine_threadsafe(_start(), loop).result(10)
    yield str(server.make_url("/")).rstrip("/")

    asyncio.run_coroutine_threadsafe(server.close(), loop).result(10)
    loop.call_soon_threadsafe(loop.stop)
    thread.join(10)
    loop.close()
