"""Tests for FastAPI endpoints."""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from daylight.errors import ConfigurationError


@pytest.fixture
def test_client(mock_config):
    """Create FastAPI test client running the controller on the mock bridge."""
    from daylight.main import app

    with patch("daylight.main.build_daylight_config", return_value=mock_config):
        with TestClient(app) as client:
            yield client


class TestStateEndpoint:
    """Tests for state query endpoint."""

    def test_get_state(self, test_client):
        """Should return the latest control loop snapshot."""
        response = test_client.get("/daylight/state")
        assert response.status_code == 200
        data = response.json()
        assert data["controller_state"] in ("RUNNING", "STOPPING", "STOPPED")
        assert data["light_id"] == "5"
        assert "brightness" in data
        assert "device_brightness" in data


class TestWindowEndpoint:
    """Tests for day window endpoint."""

    def test_get_window(self, test_client):
        response = test_client.get("/daylight/window")
        assert response.status_code == 200
        data = response.json()
        assert data["start_of_day"] < data["end_of_day"]
        assert data["wake_up_time"] == "07:30"
        assert data["bed_time"] == "22:00"
        assert data["slack_seconds"] == 1800
        assert data["end_of_day_iso"].endswith("+00:00")

    def test_window_covers_active_hours(self, test_client):
        """Should end no earlier than bed time plus slack."""
        data = test_client.get("/daylight/window").json()
        assert data["end_of_day_iso"][11:16] >= "22:30"


class TestPreviewEndpoint:
    """Tests for daily curve preview endpoint."""

    def test_default_preview(self, test_client):
        response = test_client.get("/daylight/preview")
        assert response.status_code == 200
        data = response.json()
        assert data["step_minutes"] == 15
        assert len(data["samples"]) == 96
        assert data["samples"][0]["time"] == "00:00"

    def test_hourly_preview(self, test_client):
        data = test_client.get("/daylight/preview", params={"step_minutes": 60}).json()
        assert len(data["samples"]) == 24

    def test_midnight_is_dark(self, test_client):
        samples = test_client.get("/daylight/preview").json()["samples"]
        assert samples[0]["brightness"] == 0.0
        assert samples[0]["color_temperature"] == 0.0

    def test_values_in_range(self, test_client):
        for sample in test_client.get("/daylight/preview").json()["samples"]:
            assert 0.0 <= sample["brightness"] <= 1.0
            assert 0.0 <= sample["color_temperature"] <= 1.0

    @pytest.mark.parametrize("step", [0, -15, 241])
    def test_invalid_step(self, test_client, step):
        response = test_client.get("/daylight/preview", params={"step_minutes": step})
        assert response.status_code == 422


class TestStartup:
    """Tests for lifespan startup and shutdown."""

    def test_controller_stopped_on_shutdown(self, mock_config):
        import daylight.main as main

        with patch("daylight.main.build_daylight_config", return_value=mock_config):
            with TestClient(main.app):
                assert main.controller.thread.is_alive()

        assert not main.controller.thread.is_alive()
        assert main.controller.lifecycle.value == "STOPPED"

    def test_configuration_error_aborts_startup(self):
        from daylight.main import app

        with patch("daylight.main.build_daylight_config", side_effect=ConfigurationError("Please set the env var LAT")):
            with pytest.raises(Exception):
                with TestClient(app):
                    pass

    def test_not_started(self):
        """Should answer 503 for window and preview before startup."""
        from daylight.main import app

        with patch("daylight.main.controller", None), patch("daylight.main.runtime_config", None):
            client = TestClient(app)
            assert client.get("/daylight/window").status_code == 503
            assert client.get("/daylight/preview").status_code == 503
