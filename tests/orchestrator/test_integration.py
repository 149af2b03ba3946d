"""End-to-end controller tests against the in-process fake service."""

import asyncio

import pytest

from src.client.simulation_client import SimulationClient
from src.orchestrator.models import ActionStatus
from src.orchestrator.simulation_controller import SimulationController
from src.polling.poller import PollerState
from src.polling.settings import PollingSettings
from src.simulation.models import RunState


def make_controller(base_url: str) -> SimulationController:
    return SimulationController(
        SimulationClient(base_url),
        polling=PollingSettings(interval_seconds=0.02),
    )


class TestSimulationLifecycle:
    """Configure, start, observe and stop a simulation."""

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, fake_service, service_url) -> None:
        controller = make_controller(service_url)

        async with controller.session():
            configured = await controller.configure()
            assert configured.status == ActionStatus.OK
            assert fake_service.config["maximumCapacity"] == 20

            started = await controller.start()
            assert started.status == ActionStatus.OK
            assert controller.poller.state == PollerState.ARMED

            fake_service.logs.append("Vendor-1 added 1 ticket")
            fake_service.pool_size = 6
            await asyncio.sleep(0.1)

            assert controller.view.logs == ["Simulation started", "Vendor-1 added 1 ticket"]
            assert controller.view.ticket_pool_size == 6

            stopped = await controller.stop()
            assert stopped.status == ActionStatus.OK

        assert controller.run_state == RunState.IDLE
        assert controller.poller.state == PollerState.DISARMED
        assert fake_service.running is False
        assert controller.view.logs == ["Simulation stopped"]

    @pytest.mark.asyncio
    async def test_invalid_form_never_reaches_service(self, fake_service, service_url) -> None:
        controller = make_controller(service_url)

        async with controller.session():
            controller.update_field("maximumCapacity", 150)
            configured = await controller.configure()
            started = await controller.start()

        assert configured.status == ActionStatus.BLOCKED
        assert started.status == ActionStatus.BLOCKED
        assert fake_service.requests == []

    @pytest.mark.asyncio
    async def test_server_rejects_start(self, fake_service, service_url) -> None:
        fake_service.fail("/api/start", status=400, body="Simulation is not configured")
        controller = make_controller(service_url)

        async with controller.session():
            result = await controller.start()

        assert result.status == ActionStatus.FAILED
        assert controller.view.error == "Error starting simulation: Simulation is not configured"
        assert controller.run_state == RunState.IDLE
        assert controller.poller.state == PollerState.DISARMED

    @pytest.mark.asyncio
    async def test_poll_failure_keeps_running(self, fake_service, service_url) -> None:
        fake_service.fail("/api/logs", status=503, body="Log buffer unavailable")
        controller = make_controller(service_url)

        async with controller.session():
            await controller.start()
            await asyncio.sleep(0.1)

            assert controller.view.error == "Error fetching logs: Log buffer unavailable"
            assert controller.run_state == RunState.RUNNING
            assert controller.poller.is_armed

            await controller.stop()

    @pytest.mark.asyncio
    async def test_service_down(self, unreachable_url) -> None:
        controller = make_controller(unreachable_url)

        async with controller.session():
            result = await controller.configure()

        assert result.status == ActionStatus.FAILED
        assert controller.view.error == "Network error: Unable to connect to the server."
