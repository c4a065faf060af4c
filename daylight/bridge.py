"""
Philips Hue bridge client (REST API v1).

Features:
- Bridge discovery via the Hue discovery endpoint
- Authenticated handle bound to one bridge address and username
- Light state reads including color temperature capability bounds
- Light state writes
- Every request bounded by a timeout so the control loop stays cancellable
"""

from dataclasses import dataclass
from typing import Any, Optional

import requests

from daylight.config import HUE_DISCOVERY_URL
from daylight.errors import DeviceReadError, DeviceWriteError, DiscoveryError
from daylight.logger import logger
from daylight.mapper import ColorTemperatureBounds, DeviceSetting, HUE_MAX_BRIGHTNESS

DEFAULT_TIMEOUT = 5.0


@dataclass
class LightState:
    """Light as reported by the bridge."""
    light_id: str
    name: str
    on: bool
    brightness: Optional[int] = None
    color_temperature: Optional[int] = None
    ct_bounds: Optional[ColorTemperatureBounds] = None  # None = no ct capability
    reachable: bool = True
    max_brightness: int = HUE_MAX_BRIGHTNESS

    @classmethod
    def from_api(cls, light_id: str, data: dict[str, Any]) -> "LightState":
        """Build from a GET /lights/<id> response body."""
        state = data.get("state", {})
        ct_caps = data.get("capabilities", {}).get("control", {}).get("ct")
        bounds = None
        if ct_caps and "min" in ct_caps and "max" in ct_caps:
            bounds = ColorTemperatureBounds(min=int(ct_caps["min"]), max=int(ct_caps["max"]))

        return cls(
            light_id=light_id,
            name=data.get("name", light_id),
            on=bool(state.get("on", False)),
            brightness=state.get("bri"),
            color_temperature=state.get("ct"),
            ct_bounds=bounds,
            reachable=bool(state.get("reachable", True)),
        )


def _api_errors(body: Any) -> list[str]:
    """Collect error descriptions from a Hue response body."""
    if not isinstance(body, list):
        return []
    return [
        item["error"].get("description", str(item["error"]))
        for item in body
        if isinstance(item, dict) and "error" in item
    ]


def discover_bridge(url: str = HUE_DISCOVERY_URL, timeout: float = DEFAULT_TIMEOUT) -> str:
    """
    Find a bridge on the local network.

    Returns:
        IP address of the last bridge reported by the discovery endpoint

    Raises:
        DiscoveryError: If discovery fails or reports no bridge
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        bridges = response.json()
    except (requests.RequestException, ValueError) as e:
        raise DiscoveryError(f"Failed to discover bridges: {e}") from e

    addresses = [b["internalipaddress"] for b in bridges if isinstance(b, dict) and b.get("internalipaddress")]
    if not addresses:
        raise DiscoveryError("No bridges found in the local network")

    address = addresses.pop()
    logger.info(f"Discovered Hue bridge at {address}")
    return address


class HueBridge:
    """
    Authenticated handle for one Hue bridge.

    Only the narrow contract the controller needs: read a light, write its state.
    """

    def __init__(self, address: str, username: str, timeout: float = DEFAULT_TIMEOUT):
        self.address = address
        self.username = username
        self.timeout = timeout
        self.session = requests.Session()
        logger.info(f"Hue bridge handle created for {address} (timeout={timeout}s)")

    def __repr__(self) -> str:
        return f"HueBridge(address={self.address!r})"

    def _url(self, path: str) -> str:
        return f"http://{self.address}/api/{self.username}/{path}"

    def get_light(self, light_id: str) -> LightState:
        """
        Read a light's state and capabilities.

        Raises:
            DeviceReadError: On network failure, timeout or a Hue error response
        """
        try:
            response = self.session.get(self._url(f"lights/{light_id}"), timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            raise DeviceReadError(f"Failed to get light {light_id}: {e}") from e

        errors = _api_errors(body)
        if errors:
            raise DeviceReadError(f"Failed to get light {light_id}: {'; '.join(errors)}")
        if not isinstance(body, dict):
            raise DeviceReadError(f"Failed to get light {light_id}: unexpected response {body!r}")

        return LightState.from_api(light_id, body)

    def set_light_state(self, light_id: str, setting: DeviceSetting) -> list[dict]:
        """
        Send a setting to a light.

        Returns:
            The bridge's list of "success" entries

        Raises:
            DeviceWriteError: On network failure, timeout or a Hue error response
        """
        payload = setting.to_hue_payload()
        try:
            response = self.session.put(
                self._url(f"lights/{light_id}/state"),
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            raise DeviceWriteError(f"Failed to modify the light state: {e}") from e

        errors = _api_errors(body)
        if errors:
            raise DeviceWriteError(f"Failed to modify the light state: {'; '.join(errors)}")

        logger.debug(f"Light {light_id} state set: {payload}")
        return body
