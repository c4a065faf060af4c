"""Shared pytest fixtures for all tests."""

import pytest

from daylight.config import DaylightConfig
from daylight.day_window import ConfiguredTime, DayWindow
from daylight.mock_hardware import MockBridge
from daylight.state import DaylightState


@pytest.fixture
def mock_bridge():
    """Mock bridge with a ct light ("5") and a white-only light ("1")."""
    return MockBridge()


@pytest.fixture
def fresh_state():
    """Isolated DaylightState so tests don't share the global instance."""
    return DaylightState()


@pytest.fixture
def day_window():
    """12-hour window starting at epoch 0."""
    return DayWindow(start_of_day=0, end_of_day=43200)


@pytest.fixture
def mock_config():
    """Mock-mode configuration for London in UTC."""
    return DaylightConfig(
        latitude=51.5074,
        longitude=-0.1278,
        timezone="UTC",
        light_id="5",
        wake_up_time=ConfiguredTime(hour=7, minute=30),
        bed_time=ConfiguredTime(hour=22, minute=0),
        slack_seconds=1800,
        update_interval=0.05,
        mock_mode=True,
    )
