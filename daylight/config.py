"""
Configuration management with environment variable support.

All settings can be overridden via environment variables.
Automatically loads .env file if present.
"""

import os
from pathlib import Path
from typing import Literal, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from daylight.day_window import ConfiguredTime
from daylight.errors import ConfigurationError

# Load .env file from project root (one level up from daylight/)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Logging configuration
LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = os.getenv("LOG_LEVEL", "INFO")

# Mock bridge mode (for running without a Hue bridge on the network)
MOCK_MODE: bool = os.getenv("MOCK_MODE", "false").lower() == "true"

# Hue bridge configuration
HUE_USERNAME: str | None = os.getenv("HUE_USERNAME")
HUE_BRIDGE_IP: str | None = os.getenv("HUE_BRIDGE_IP")  # Skips discovery when set
HUE_DISCOVERY_URL: str = os.getenv("HUE_DISCOVERY_URL", "https://discovery.meethue.com/")
BRIDGE_TIMEOUT: str = os.getenv("BRIDGE_TIMEOUT", "5.0")  # seconds per request

# Location (required)
LAT: str | None = os.getenv("LAT")
LNG: str | None = os.getenv("LNG")
TIMEZONE: str | None = os.getenv("TIMEZONE")  # IANA name, empty = system local zone

# Target light and day schedule
LIGHT_ID: str = os.getenv("LIGHT_ID", "5")
WAKE_UP_TIME: str = os.getenv("WAKE_UP_TIME", "07:30")
BED_TIME: str = os.getenv("BED_TIME", "22:00")
SLACK_SECONDS: str = os.getenv("SLACK_SECONDS", "1800")  # 30 minutes

# Control loop
UPDATE_INTERVAL: str = os.getenv("UPDATE_INTERVAL", "1.5")  # seconds


class DaylightConfig(BaseModel):
    """Validated runtime configuration, built once at startup."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    timezone: Optional[str] = None
    light_id: str = Field(..., min_length=1)
    wake_up_time: ConfiguredTime
    bed_time: ConfiguredTime
    slack_seconds: int = Field(1800, ge=0)
    update_interval: float = Field(1.5, gt=0)
    username: Optional[str] = None
    bridge_ip: Optional[str] = None
    bridge_timeout: float = Field(5.0, gt=0)
    mock_mode: bool = False


def _require(name: str, value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise ConfigurationError(f"Please set the env var {name}")
    return value.strip()


def _parse_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"Invalid data in {name} env var: {value!r}") from None


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"Invalid data in {name} env var: {value!r}") from None


def build_daylight_config() -> DaylightConfig:
    """
    Build DaylightConfig from the module-level environment settings.

    Returns:
        Validated DaylightConfig

    Raises:
        ConfigurationError: If a required value is missing or invalid
    """
    latitude = _parse_float("LAT", _require("LAT", LAT))
    longitude = _parse_float("LNG", _require("LNG", LNG))

    username = HUE_USERNAME.strip() if HUE_USERNAME else None
    if not MOCK_MODE:
        username = _require("HUE_USERNAME", HUE_USERNAME)

    try:
        wake_up_time = ConfiguredTime.parse(WAKE_UP_TIME)
        bed_time = ConfiguredTime.parse(BED_TIME)
    except ValueError as e:
        raise ConfigurationError(f"Invalid day schedule: {e}") from e

    try:
        return DaylightConfig(
            latitude=latitude,
            longitude=longitude,
            timezone=TIMEZONE or None,
            light_id=LIGHT_ID,
            wake_up_time=wake_up_time,
            bed_time=bed_time,
            slack_seconds=_parse_int("SLACK_SECONDS", SLACK_SECONDS),
            update_interval=_parse_float("UPDATE_INTERVAL", UPDATE_INTERVAL),
            username=username,
            bridge_ip=HUE_BRIDGE_IP or None,
            bridge_timeout=_parse_float("BRIDGE_TIMEOUT", BRIDGE_TIMEOUT),
            mock_mode=MOCK_MODE,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
