"""Range validation for simulation parameters.

All functions here are pure: results depend only on their arguments.
"""
from dataclasses import dataclass

from src.simulation.models import FIELD_NAMES, SimulationConfig, canonical_field_name


CAPACITY_MESSAGE = "Maximum capacity must be between 1 and 100"
RATE_MESSAGE = "Rate must be between 100 and 10000 milliseconds"
COUNT_MESSAGE = "Count must be between 1 and 20"


@dataclass(frozen=True)
class FieldRule:
    """Closed integer range and the message shown when a value falls outside it."""

    minimum: int
    maximum: int
    message: str

    def check(self, value: int) -> str | None:
        if self.minimum <= value <= self.maximum:
            return None
        return self.message


FIELD_RULES: dict[str, FieldRule] = {
    "maximum_capacity": FieldRule(1, 100, CAPACITY_MESSAGE),
    "retrieval_rate": FieldRule(100, 10000, RATE_MESSAGE),
    "customer_buying_rate": FieldRule(100, 10000, RATE_MESSAGE),
    "vendor_count": FieldRule(1, 20, COUNT_MESSAGE),
    "customer_count": FieldRule(1, 20, COUNT_MESSAGE),
}


def validate_field(name: str, value: int) -> str | None:
    """Validate a single field value.

    Args:
        name: Field name, snake_case or camelCase.
        value: Candidate integer value.

    Returns:
        Error message if the value is out of range, otherwise None.
        Unknown field names are never flagged.
    """
    key = canonical_field_name(name)
    if key is None:
        return None
    return FIELD_RULES[key].check(value)


def validate_form(config: SimulationConfig) -> dict[str, str]:
    """Compute the complete error set for a configuration.

    Returns:
        Mapping of snake_case field name to message. Empty when valid.
    """
    errors: dict[str, str] = {}
    for name in FIELD_NAMES:
        message = validate_field(name, getattr(config, name))
        if message is not None:
            errors[name] = message
    return errors


def is_submittable(config: SimulationConfig) -> bool:
    """Return True if the configuration can be sent to the service."""
    return not validate_form(config)
