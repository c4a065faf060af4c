"""
Centralized controller state for the status API.

This module provides thread-safe tracking of the latest control loop
iteration, written by the controller thread and read by API handlers.
"""

from dataclasses import dataclass, field
from typing import Optional, Any
from datetime import datetime
import threading


@dataclass
class DaylightState:
    """
    Snapshot of the control loop.

    Thread-safe via internal lock. All updates should use the update() method.
    """

    # Controller lifecycle (see daylight.controller.ControllerState)
    controller_state: str = "STOPPED"

    # Target light
    light_id: Optional[str] = None
    light_name: Optional[str] = None

    # Latest curve sample (0.0-1.0)
    brightness: Optional[float] = None
    color_temperature: Optional[float] = None

    # Latest dispatched device setting
    device_brightness: Optional[int] = None
    device_color_temperature: Optional[int] = None

    # Loop counters
    iterations: int = 0
    failed_reads: int = 0
    failed_writes: int = 0
    last_error: Optional[str] = None

    # Last update timestamp
    last_updated: datetime = field(default_factory=datetime.now)

    # Thread-safe access lock
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def update(self, **kwargs) -> None:
        """
        Thread-safe state update.

        Args:
            **kwargs: State attributes to update

        Example:
            daylight_state.update(brightness=0.8, device_brightness=203)
        """
        with self._lock:
            for key, value in kwargs.items():
                if hasattr(self, key) and not key.startswith('_'):
                    setattr(self, key, value)
            self.last_updated = datetime.now()

    def increment(self, counter: str) -> None:
        """Thread-safe increment of one of the loop counters."""
        with self._lock:
            if counter in ("iterations", "failed_reads", "failed_writes"):
                setattr(self, counter, getattr(self, counter) + 1)
                self.last_updated = datetime.now()

    def get_snapshot(self) -> dict[str, Any]:
        """
        Get thread-safe snapshot of current state.

        Returns:
            dict: Current state as dictionary
        """
        with self._lock:
            return {
                "controller_state": self.controller_state,
                "light_id": self.light_id,
                "light_name": self.light_name,
                "brightness": self.brightness,
                "color_temperature": self.color_temperature,
                "device_brightness": self.device_brightness,
                "device_color_temperature": self.device_color_temperature,
                "iterations": self.iterations,
                "failed_reads": self.failed_reads,
                "failed_writes": self.failed_writes,
                "last_error": self.last_error,
                "last_updated": self.last_updated.isoformat(),
            }


# Global state instance
daylight_state = DaylightState()
