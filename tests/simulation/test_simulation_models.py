"""Tests for simulation data models."""
import pytest
from pydantic import ValidationError

from src.simulation.models import (
    FIELD_NAMES,
    RunState,
    SimulationConfig,
    SimulationSnapshot,
    canonical_field_name,
    field_label,
)


class TestSimulationConfig:
    """Tests for SimulationConfig."""

    def test_defaults(self) -> None:
        config = SimulationConfig()

        assert config.maximum_capacity == 20
        assert config.retrieval_rate == 1000
        assert config.customer_buying_rate == 1000
        assert config.vendor_count == 5
        assert config.customer_count == 5

    def test_out_of_range_values_are_representable(self) -> None:
        """The model stores values validation would flag."""
        config = SimulationConfig(maximum_capacity=150, vendor_count=-3)

        assert config.maximum_capacity == 150
        assert config.vendor_count == -3

    def test_accepts_camel_case_names(self) -> None:
        config = SimulationConfig.model_validate({"maximumCapacity": 40, "vendorCount": 2})

        assert config.maximum_capacity == 40
        assert config.vendor_count == 2

    def test_rejects_non_integer(self) -> None:
        with pytest.raises(ValidationError):
            SimulationConfig(retrieval_rate=12.5)

    def test_is_immutable(self) -> None:
        config = SimulationConfig()

        with pytest.raises(ValidationError):
            config.vendor_count = 3

    def test_with_field_returns_new_config(self) -> None:
        config = SimulationConfig()

        updated = config.with_field("customerCount", 9)

        assert updated.customer_count == 9
        assert config.customer_count == 5

    def test_with_field_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown simulation field"):
            SimulationConfig().with_field("ticketPrice", 10)

    def test_payload_uses_wire_names(self) -> None:
        payload = SimulationConfig().to_payload()

        assert payload == {
            "maximumCapacity": 20,
            "retrievalRate": 1000,
            "customerBuyingRate": 1000,
            "vendorCount": 5,
            "customerCount": 5,
        }


class TestFieldNames:
    """Tests for field name helpers."""

    def test_field_order(self) -> None:
        assert FIELD_NAMES == (
            "maximum_capacity",
            "retrieval_rate",
            "customer_buying_rate",
            "vendor_count",
            "customer_count",
        )

    def test_canonical_field_name(self) -> None:
        assert canonical_field_name("retrievalRate") == "retrieval_rate"
        assert canonical_field_name("retrieval_rate") == "retrieval_rate"
        assert canonical_field_name("unknown") is None

    def test_field_label(self) -> None:
        assert field_label("maximum_capacity") == "Maximum Capacity"
        assert field_label("customerBuyingRate") == "Customer Buying Rate"


def test_snapshot_defaults() -> None:
    snapshot = SimulationSnapshot()

    assert snapshot.logs == ()
    assert snapshot.ticket_pool_size == 0


def test_run_state_values() -> None:
    assert RunState.IDLE.value == "idle"
    assert RunState.RUNNING.value == "running"
