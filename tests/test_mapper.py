"""Tests for mapping curve samples to device units."""

import pytest

from daylight.lighting_math import CurveSample
from daylight.mapper import ColorTemperatureBounds, DeviceSetting, map_setting

HUE_CT = ColorTemperatureBounds(min=153, max=500)


class TestMapSetting:
    """Tests for map_setting()."""

    def test_warmest_maps_to_max_mired(self):
        setting = map_setting(CurveSample(brightness=0.5, color_temperature=0.0), HUE_CT)
        assert setting.color_temperature == 500

    def test_coldest_maps_to_min_mired(self):
        setting = map_setting(CurveSample(brightness=0.5, color_temperature=1.0), HUE_CT)
        assert setting.color_temperature == 153

    def test_intermediate_color_temperature(self):
        setting = map_setting(CurveSample(brightness=0.5, color_temperature=0.25), HUE_CT)
        assert setting.color_temperature == round(0.75 * 347) + 153

    @pytest.mark.parametrize("value,expected", [(0.0, 0), (0.5, 127), (1.0, 254), (0.4, 102)])
    def test_brightness_scale(self, value, expected):
        setting = map_setting(CurveSample(brightness=value))
        assert setting.brightness == expected

    def test_custom_brightness_scale(self):
        setting = map_setting(CurveSample(brightness=0.5), max_brightness=100)
        assert setting.brightness == 50

    def test_no_color_temperature_capability(self):
        """Should omit color temperature for lights without ct support."""
        setting = map_setting(CurveSample(brightness=1.0, color_temperature=0.3), None)
        assert setting.color_temperature is None

    def test_sample_without_color_temperature(self):
        setting = map_setting(CurveSample(brightness=1.0), HUE_CT)
        assert setting.color_temperature is None

    def test_out_of_range_sample_is_clamped(self):
        setting = map_setting(CurveSample(brightness=1.2, color_temperature=-0.5), HUE_CT)
        assert setting.brightness == 254
        assert setting.color_temperature == 500


class TestDeviceSetting:
    """Tests for the Hue payload."""

    def test_payload_with_color_temperature(self):
        assert DeviceSetting(brightness=200, color_temperature=300).to_hue_payload() == {"bri": 200, "ct": 300}

    def test_payload_without_color_temperature(self):
        assert DeviceSetting(brightness=200).to_hue_payload() == {"bri": 200}
