"""Tests for PollingSettings."""
import pytest

from src.polling.settings import PollingSettings


class TestPollingSettings:
    """Tests for PollingSettings."""

    def test_defaults(self) -> None:
        settings = PollingSettings()

        assert settings.interval_seconds == 1.0
        assert settings.discard_stale_results is True

    def test_interval_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            PollingSettings(interval_seconds=0)
