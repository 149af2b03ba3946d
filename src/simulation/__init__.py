"""Simulation parameter models and validation."""

from .models import (
    FIELD_NAMES,
    RunState,
    SimulationConfig,
    SimulationSnapshot,
    canonical_field_name,
    field_label,
)
from .validation import FIELD_RULES, FieldRule, is_submittable, validate_field, validate_form

__all__ = [
    "FIELD_NAMES",
    "FIELD_RULES",
    "FieldRule",
    "RunState",
    "SimulationConfig",
    "SimulationSnapshot",
    "canonical_field_name",
    "field_label",
    "is_submittable",
    "validate_field",
    "validate_form",
]
