"""Data models for the ticket simulation."""
import re
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RunState(Enum):
    """Run state of the remote simulation as seen by the client."""

    IDLE = "idle"
    RUNNING = "running"


class SimulationConfig(BaseModel):
    """The five numeric parameters of a simulation run.

    Values outside the valid ranges are accepted here on purpose; range
    checks live in ``src.simulation.validation``.

    Attributes:
        maximum_capacity: Ticket pool capacity (tickets).
        retrieval_rate: Vendor release interval (ms).
        customer_buying_rate: Customer purchase interval (ms).
        vendor_count: Number of vendors.
        customer_count: Number of customers.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    maximum_capacity: int = 20
    retrieval_rate: int = 1000
    customer_buying_rate: int = 1000
    vendor_count: int = 5
    customer_count: int = 5

    def with_field(self, name: str, value: int) -> "SimulationConfig":
        """Return a copy with one field replaced.

        Raises:
            ValueError: If ``name`` is not a config field.
        """
        key = canonical_field_name(name)
        if key is None:
            raise ValueError(f"Unknown simulation field: {name}")
        data = self.model_dump()
        data[key] = value
        return SimulationConfig.model_validate(data)

    def to_payload(self) -> dict[str, int]:
        """Serialize using the service's camelCase field names."""
        return self.model_dump(by_alias=True)


FIELD_NAMES: tuple[str, ...] = tuple(SimulationConfig.model_fields)

_ALIASES: dict[str, str] = {to_camel(name): name for name in FIELD_NAMES}


def canonical_field_name(name: str) -> str | None:
    """Map a snake_case or camelCase field name to the snake_case form."""
    if name in SimulationConfig.model_fields:
        return name
    return _ALIASES.get(name)


def field_label(name: str) -> str:
    """Human label for a field, e.g. ``vendor_count`` -> ``Vendor Count``."""
    key = canonical_field_name(name) or name
    spaced = re.sub(r"([A-Z])", r" \1", to_camel(key))
    return spaced[:1].upper() + spaced[1:]


@dataclass(frozen=True)
class SimulationSnapshot:
    """Latest observed state of the remote simulation.

    Attributes:
        logs: Full log list from the last successful read (replaced, never appended).
        ticket_pool_size: Tickets currently in the pool.
    """

    logs: tuple[str, ...] = field(default_factory=tuple)
    ticket_pool_size: int = 0
