from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.dashboard.settings import DashboardSettings
from src.polling.settings import PollingSettings
from src.reporting.settings import ErrorReportingSettings
from src.simulation.models import SimulationConfig


class SystemConfig(BaseModel):
    name: str = "Ticket System Simulation"
    version: str = "1.0.0"
    log_level: str = "INFO"


class SimulationServiceConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SIMULATION_SERVICE_")

    base_url: str = "http://localhost:8080"
    request_timeout_seconds: float | None = Field(default=10.0, gt=0)


class Settings(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    service: SimulationServiceConfig = Field(default_factory=SimulationServiceConfig)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    polling: PollingSettings = Field(default_factory=PollingSettings)
    errors: ErrorReportingSettings = Field(default_factory=ErrorReportingSettings)
    dashboard: DashboardSettings = Field(default_factory=DashboardSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file with env var overrides."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        # Environment wins over the YAML service section
        yaml_service = data.pop("service", None) or {}
        env_service = SimulationServiceConfig().model_dump(exclude_unset=True)
        service = SimulationServiceConfig(**{**yaml_service, **env_service})

        return cls(**data, service=service)
