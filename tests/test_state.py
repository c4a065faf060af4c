"""Tests for controller state management."""

import pytest
import threading
import time
from datetime import datetime
from daylight.state import DaylightState


class TestDaylightState:
    """Tests for DaylightState class."""

    def test_initialization(self):
        """Should initialize with default values."""
        state = DaylightState()
        assert state.controller_state == "STOPPED"
        assert state.light_id is None
        assert state.brightness is None
        assert state.color_temperature is None
        assert state.iterations == 0
        assert state.failed_reads == 0
        assert state.failed_writes == 0
        assert isinstance(state.last_updated, datetime)

    def test_update_multiple_fields(self):
        """Should update multiple fields at once."""
        state = DaylightState()
        state.update(brightness=0.8, device_brightness=203, light_name="Desk")
        assert state.brightness == 0.8
        assert state.device_brightness == 203
        assert state.light_name == "Desk"

    def test_update_timestamp(self):
        """Should update last_updated timestamp on update."""
        state = DaylightState()
        old_timestamp = state.last_updated
        time.sleep(0.01)
        state.update(brightness=0.5)
        assert state.last_updated > old_timestamp

    def test_update_ignores_private_fields(self):
        """Should not update private fields (starting with _)."""
        state = DaylightState()
        state.update(_lock="invalid")
        assert not isinstance(state._lock, str)

    def test_update_ignores_invalid_fields(self):
        """Should ignore fields that don't exist."""
        state = DaylightState()
        state.update(invalid_field="value")
        assert not hasattr(state, "invalid_field")

    def test_increment(self):
        state = DaylightState()
        state.increment("iterations")
        state.increment("iterations")
        state.increment("failed_writes")
        assert state.iterations == 2
        assert state.failed_writes == 1

    def test_increment_ignores_unknown_counter(self):
        state = DaylightState()
        state.increment("brightness")
        assert state.brightness is None

    def test_snapshot(self):
        state = DaylightState()
        state.update(controller_state="RUNNING", light_id="5", brightness=0.4)
        snapshot = state.get_snapshot()

        assert snapshot["controller_state"] == "RUNNING"
        assert snapshot["light_id"] == "5"
        assert snapshot["brightness"] == 0.4
        assert isinstance(snapshot["last_updated"], str)
        assert "_lock" not in snapshot

    def test_concurrent_increments(self):
        """Should not lose increments across threads."""
        state = DaylightState()

        def worker():
            for _ in range(500):
                state.increment("iterations")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert state.iterations == 2000
