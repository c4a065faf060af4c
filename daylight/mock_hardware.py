"""
Mock bridge implementation for running without a Hue bridge.

Enable mock mode by setting MOCK_MODE=true in .env

Features:
- Simulated color temperature light and white-only light
- Compatible interface with daylight.bridge.HueBridge
- Failure injection for reads and writes
"""

import threading
from typing import Dict, List, Optional

from daylight.bridge import LightState
from daylight.errors import DeviceReadError, DeviceWriteError
from daylight.logger import logger
from daylight.mapper import ColorTemperatureBounds, DeviceSetting


def default_mock_lights() -> Dict[str, LightState]:
    """Lights every MockBridge starts with."""
    return {
        "1": LightState(light_id="1", name="Mock white lamp", on=True, brightness=254),
        "5": LightState(
            light_id="5",
            name="Mock ambiance lamp",
            on=True,
            brightness=254,
            color_temperature=366,
            ct_bounds=ColorTemperatureBounds(min=153, max=500),
        ),
    }


class MockBridge:
    """
    Mock Hue bridge.

    Drop-in replacement for daylight.bridge.HueBridge when MOCK_MODE=true
    """

    def __init__(self, lights: Optional[Dict[str, LightState]] = None):
        self.address = "mock"
        self.lights = lights if lights is not None else default_mock_lights()
        self.history: List[tuple[str, DeviceSetting]] = []
        self.lock = threading.Lock()

        # Failure injection: number of upcoming calls that should fail
        self.read_failures = 0
        self.write_failures = 0

        logger.info(f"[MOCK] Bridge ready with lights: {', '.join(sorted(self.lights))}")

    def __repr__(self) -> str:
        return f"MockBridge(lights={sorted(self.lights)})"

    def get_light(self, light_id: str) -> LightState:
        with self.lock:
            if self.read_failures > 0:
                self.read_failures -= 1
                raise DeviceReadError(f"[MOCK] Simulated read failure for light {light_id}")
            if light_id not in self.lights:
                raise DeviceReadError(f"Failed to get light {light_id}: resource, /lights/{light_id}, not available")
            return self.lights[light_id]

    def set_light_state(self, light_id: str, setting: DeviceSetting) -> list[dict]:
        with self.lock:
            if self.write_failures > 0:
                self.write_failures -= 1
                raise DeviceWriteError(f"[MOCK] Simulated write failure for light {light_id}")
            if light_id not in self.lights:
                raise DeviceWriteError(f"Failed to modify the light state: light {light_id} not available")

            light = self.lights[light_id]
            light.brightness = setting.brightness
            if setting.color_temperature is not None:
                light.color_temperature = setting.color_temperature
            self.history.append((light_id, setting))

            logger.debug(f"[MOCK] Light {light_id} set: {setting.to_hue_payload()}")
            return [
                {"success": {f"/lights/{light_id}/state/{key}": value}}
                for key, value in setting.to_hue_payload().items()
            ]
