# main.py
"""Headless console for the ticket simulation service.

Configures and starts the remote simulation, prints every view change,
and stops it on Ctrl-C (or after SIMULATION_RUN_SECONDS seconds).
"""
import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.config.settings import Settings
from src.dashboard.state import ViewState
from src.orchestrator.models import ActionStatus
from src.orchestrator.simulation_controller import SimulationController


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(levelname)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

CONFIG_PATH = Path("config/settings.yaml")


def load_and_validate_config(config_path: Path = CONFIG_PATH) -> Settings:
    """Load and validate configuration.

    Returns:
        Settings loaded from YAML, or defaults if the file is absent.

    Raises:
        SystemExit: If the YAML file cannot be parsed.
    """
    load_dotenv()

    if not config_path.exists():
        logger.warning(f"{config_path} not found, using defaults")
        return Settings()

    try:
        settings = Settings.from_yaml(config_path)
        logger.info(f"✓ Settings loaded from {config_path}")
    except Exception as e:
        logger.error(f"Failed to parse {config_path}: {e}")
        sys.exit(1)

    return settings


def read_run_seconds() -> float | None:
    """Optional run duration from SIMULATION_RUN_SECONDS.

    Raises:
        SystemExit: If the variable is set but not a positive number.
    """
    raw = os.getenv("SIMULATION_RUN_SECONDS")
    if not raw:
        return None
    try:
        seconds = float(raw)
    except ValueError:
        seconds = 0.0
    if seconds <= 0:
        logger.error(f"SIMULATION_RUN_SECONDS must be a positive number, got {raw!r}")
        sys.exit(1)
    return seconds


def print_startup_banner(settings: Settings) -> None:
    """Print startup banner."""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.system.name}")
    logger.info(f"Service: {settings.service.base_url}")
    logger.info(f"Version: {settings.system.version}")
    logger.info("=" * 60)


def print_view(view: ViewState) -> None:
    """Listener that echoes the latest view to stdout."""
    status = view.run_state.value.upper()
    print(f"[{status}] pool={view.ticket_pool_size} logs={len(view.logs)}")
    if view.logs:
        print(f"  last: {view.logs[-1]}")
    if view.error:
        print(f"  error: {view.error}")


async def run(settings: Settings, run_seconds: float | None = None) -> int:
    """Configure, start and observe the simulation until interrupted.

    Returns:
        Process exit code.
    """
    controller = SimulationController.from_settings(settings)

    errors = controller.view.validation_errors
    if errors:
        for name, message in errors.items():
            logger.error(f"{name}: {message}")
        return 1

    async with controller.session():
        unsubscribe = controller.view.subscribe(print_view)
        try:
            result = await controller.configure()
            if result.status != ActionStatus.OK:
                return 1

            result = await controller.start()
            if result.status != ActionStatus.OK:
                return 1

            try:
                if run_seconds is None:
                    await asyncio.Event().wait()
                else:
                    await asyncio.sleep(run_seconds)
            except asyncio.CancelledError:
                logger.info("Interrupted")
        finally:
            if controller.view.is_running:
                await controller.stop()
            unsubscribe()

    return 0


def main() -> None:
    settings = load_and_validate_config()
    logging.getLogger().setLevel(settings.system.log_level)
    print_startup_banner(settings)

    try:
        code = asyncio.run(run(settings, read_run_seconds()))
    except KeyboardInterrupt:
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    main()
