"""
Daylight control loop.

Features:
- Periodic curve evaluation against the day window computed at startup
- One bridge read and one bridge write per iteration
- Per-iteration failure isolation (log and continue)
- Cooperative cancellation via threading.Event
- Blocking run() for headless mode, start()/stop() thread for API mode
"""

import threading
import time
from enum import Enum
from typing import Callable, Optional

from daylight.bridge import LightState
from daylight.day_window import DayWindow
from daylight.errors import DeviceReadError, DeviceWriteError
from daylight.lighting_math import evaluate
from daylight.logger import logger
from daylight.mapper import DeviceSetting, map_setting
from daylight.state import DaylightState, daylight_state

DEFAULT_UPDATE_INTERVAL = 1.5  # seconds
DEFAULT_STOP_TIMEOUT = 5.0  # seconds


def stop_timeout_for(bridge_timeout: float, update_interval: float) -> float:
    """
    Join timeout that outlasts one blocked iteration.

    An iteration makes one read and one write, each allowed bridge_timeout
    for connect and again for read.
    """
    return 4 * bridge_timeout + update_interval


class ControllerState(str, Enum):
    """Controller lifecycle."""
    RUNNING = "RUNNING"
    STOPPING = "STOPPING"
    STOPPED = "STOPPED"


class DaylightController:
    """
    Drives one light along the daylight curves.

    The bridge only needs get_light(light_id) and set_light_state(light_id, setting),
    see daylight.bridge.HueBridge and daylight.mock_hardware.MockBridge.
    """

    def __init__(
        self,
        bridge,
        light_id: str,
        window: DayWindow,
        update_interval: float = DEFAULT_UPDATE_INTERVAL,
        cancel_event: Optional[threading.Event] = None,
        clock: Callable[[], float] = time.time,
        state: DaylightState = daylight_state,
        stop_timeout: float = DEFAULT_STOP_TIMEOUT,
    ):
        """
        Initialize controller.

        Args:
            bridge: Bridge handle
            light_id: Target light
            window: Day window, read-only for the controller's lifetime
            update_interval: Seconds between iterations
            cancel_event: Shared cancellation token (created if not given)
            clock: Returns current epoch seconds
            state: Snapshot written after every iteration
            stop_timeout: Default seconds stop() waits for the loop thread
        """
        self.bridge = bridge
        self.light_id = light_id
        self.window = window
        self.update_interval = update_interval
        self.cancel_event = cancel_event if cancel_event is not None else threading.Event()
        self.clock = clock
        self.state = state
        self.stop_timeout = stop_timeout

        self.lifecycle = ControllerState.STOPPED
        self.lock = threading.Lock()
        self.thread: Optional[threading.Thread] = None

        self.state.update(controller_state=self.lifecycle.value, light_id=light_id)

    def _transition(self, lifecycle: ControllerState, expected: Optional[ControllerState] = None):
        """Move to a lifecycle state, optionally only from an expected one."""
        with self.lock:
            if expected is not None and self.lifecycle != expected:
                return
            if lifecycle != self.lifecycle:
                logger.info(f"Controller state: {self.lifecycle.value} → {lifecycle.value}")
            self.lifecycle = lifecycle
            self.state.update(controller_state=lifecycle.value)

    def initialize(self) -> LightState:
        """
        First read of the target light.

        Raises:
            DeviceReadError: If the light cannot be found (fatal at startup)
        """
        try:
            light = self.bridge.get_light(self.light_id)
        except DeviceReadError as e:
            raise DeviceReadError(f"Failed to get target light {self.light_id}: {e}") from e

        ct = "none" if light.ct_bounds is None else f"{light.ct_bounds.min}-{light.ct_bounds.max}"
        logger.info(f"Target light {self.light_id} '{light.name}' (ct range: {ct})")
        self.state.update(light_name=light.name)
        return light

    def step(self) -> DeviceSetting:
        """
        One iteration: read light, evaluate curves, map and dispatch.

        Raises:
            DeviceReadError: If the light read fails
            DeviceWriteError: If the dispatch fails
        """
        light = self.bridge.get_light(self.light_id)
        now = int(self.clock())

        sample = evaluate(self.window, now, with_color_temperature=light.ct_bounds is not None)
        setting = map_setting(sample, light.ct_bounds, light.max_brightness)

        if sample.color_temperature is None:
            logger.info(f"brightness: {sample.brightness:.5f}")
        else:
            logger.info(f"brightness: {sample.brightness:.5f}, color temperature: {sample.color_temperature:.5f}")

        self.state.update(
            light_name=light.name,
            brightness=sample.brightness,
            color_temperature=sample.color_temperature,
        )

        self.bridge.set_light_state(self.light_id, setting)

        self.state.update(
            device_brightness=setting.brightness,
            device_color_temperature=setting.color_temperature,
            last_error=None,
        )
        return setting

    def _iterate(self):
        """Run one step, isolating any failure to this iteration."""
        self.state.increment("iterations")
        try:
            self.step()
        except DeviceReadError as e:
            self.state.increment("failed_reads")
            self.state.update(last_error=str(e))
            logger.warning(f"Skipping iteration: {e}")
        except DeviceWriteError as e:
            self.state.increment("failed_writes")
            self.state.update(last_error=str(e))
            logger.error(str(e))
        except Exception as e:
            self.state.update(last_error=str(e))
            logger.error(f"Error in control loop: {e}", exc_info=True)

    def _loop(self):
        self._transition(ControllerState.RUNNING)
        logger.info("Control loop started")

        while not self.cancel_event.is_set():
            self._iterate()
            # Returns early when cancelled
            self.cancel_event.wait(self.update_interval)

        self._transition(ControllerState.STOPPING, expected=ControllerState.RUNNING)
        self._transition(ControllerState.STOPPED)
        logger.info("Control loop stopped")

    def run(self):
        """
        Run the control loop in the calling thread until cancel_event is set.

        Raises:
            DeviceReadError: If the first read of the target light fails
        """
        self.initialize()
        self._loop()

    def start(self):
        """
        Run the control loop in a background thread.

        Raises:
            DeviceReadError: If the first read of the target light fails
        """
        if self.thread and self.thread.is_alive():
            logger.warning("Control loop already running")
            return

        self.initialize()
        self.cancel_event.clear()
        self.thread = threading.Thread(target=self._loop, name="DaylightController", daemon=True)
        self.thread.start()

    def stop(self, timeout: Optional[float] = None):
        """Signal cancellation and wait for the loop to finish (stop_timeout by default)."""
        logger.info("Stopping control loop...")
        self.cancel_event.set()

        if self.thread and self.thread.is_alive():
            self._transition(ControllerState.STOPPING, expected=ControllerState.RUNNING)
            self.thread.join(timeout=self.stop_timeout if timeout is None else timeout)
            if self.thread.is_alive():
                logger.warning("Control loop thread did not stop within timeout")
