"""
Conversion of normalized curve samples into Hue device units.
"""

from dataclasses import dataclass
from typing import Any, Optional

from daylight.lighting_math import CurveSample, clamp

HUE_MAX_BRIGHTNESS = 254


@dataclass(frozen=True)
class ColorTemperatureBounds:
    """Color temperature range reported by the light, in mired."""
    min: int  # Coldest
    max: int  # Warmest


@dataclass(frozen=True)
class DeviceSetting:
    """Light state to dispatch to the bridge."""
    brightness: int
    color_temperature: Optional[int] = None

    def to_hue_payload(self) -> dict[str, Any]:
        """
        Body for PUT /api/<username>/lights/<id>/state.

        Color temperature is left out for lights without ct support.
        """
        payload: dict[str, Any] = {"bri": self.brightness}
        if self.color_temperature is not None:
            payload["ct"] = self.color_temperature
        return payload


def map_setting(
    sample: CurveSample,
    ct_bounds: Optional[ColorTemperatureBounds] = None,
    max_brightness: int = HUE_MAX_BRIGHTNESS,
) -> DeviceSetting:
    """
    Map a curve sample to device units.

    Args:
        sample: Normalized brightness and color temperature
        ct_bounds: Light's mired range, None if it has no ct capability
        max_brightness: Device brightness scale maximum

    Returns:
        DeviceSetting. Color temperature 0 (warmest) maps to ct_bounds.max,
        1 (coldest) maps to ct_bounds.min.
    """
    bri = round(clamp(sample.brightness) * max_brightness)

    ct = None
    if ct_bounds is not None and sample.color_temperature is not None:
        span = ct_bounds.max - ct_bounds.min
        ct = round((1 - clamp(sample.color_temperature)) * span) + ct_bounds.min
        ct = int(clamp(ct, ct_bounds.min, ct_bounds.max))

    return DeviceSetting(brightness=bri, color_temperature=ct)
