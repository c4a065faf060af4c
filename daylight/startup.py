"""
Startup assembly: configuration → bridge → day window → controller.

Every failure here is fatal and raised as a DaylightError subclass.
"""

import threading
from datetime import date, datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from daylight.bridge import HueBridge, discover_bridge
from daylight.config import DaylightConfig, HUE_DISCOVERY_URL, build_daylight_config
from daylight.controller import DaylightController, stop_timeout_for
from daylight.day_window import DayWindow, compute_window
from daylight.errors import ConfigurationError
from daylight.logger import logger
from daylight.solar_time import resolve
from daylight.state import DaylightState, daylight_state


def resolve_timezone(config: DaylightConfig) -> tzinfo:
    """Configured IANA zone, or the system local zone."""
    if config.timezone:
        try:
            return ZoneInfo(config.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(f"Unknown timezone: {config.timezone}") from e
    return datetime.now().astimezone().tzinfo


def build_day_window(config: DaylightConfig, day: Optional[date] = None) -> DayWindow:
    """
    Compute today's day window from sun times and the configured schedule.

    Raises:
        AstronomicalComputationError: If there is no sunrise/sunset today
        ConfigurationError: If the schedule produces an inverted window
    """
    tz = resolve_timezone(config)
    if day is None:
        day = datetime.now(tz).date()

    sunrise, sunset = resolve(config.latitude, config.longitude, day, tz)
    logger.info(f"Sun times for {day.isoformat()}: sunrise={sunrise:%H:%M:%S}, sunset={sunset:%H:%M:%S}")

    window = compute_window(
        sunrise,
        sunset,
        config.wake_up_time,
        config.bed_time,
        slack_seconds=config.slack_seconds,
        day=day,
        tz=tz,
    )

    sod, eod = window.as_datetimes(tz)
    logger.info(
        f"Day window: sod: {sod.isoformat()}, eod: {eod.isoformat()} "
        f"(wake up {config.wake_up_time}, bed time {config.bed_time}, slack {config.slack_seconds}s)"
    )
    # Not recomputed after midnight
    logger.info(f"Day window is valid for {day.isoformat()} only")
    return window


def create_bridge(config: DaylightConfig):
    """
    Bridge handle for the configuration: mock, fixed address or discovered.

    Raises:
        DiscoveryError: If no bridge is found on the network
    """
    if config.mock_mode:
        logger.info("🎭 MOCK MODE ENABLED - Using simulated bridge")
        from daylight.mock_hardware import MockBridge
        return MockBridge()

    address = config.bridge_ip or discover_bridge(HUE_DISCOVERY_URL, timeout=config.bridge_timeout)
    return HueBridge(address, config.username, timeout=config.bridge_timeout)


def create_controller(
    config: Optional[DaylightConfig] = None,
    cancel_event: Optional[threading.Event] = None,
    state: DaylightState = daylight_state,
) -> DaylightController:
    """
    Assemble a controller from configuration (environment if not given).

    Raises:
        DaylightError: On any startup failure
    """
    if config is None:
        config = build_daylight_config()

    window = build_day_window(config)
    bridge = create_bridge(config)
    logger.info(f"Using bridge: {bridge!r}")

    return DaylightController(
        bridge,
        config.light_id,
        window,
        update_interval=config.update_interval,
        cancel_event=cancel_event,
        state=state,
        stop_timeout=stop_timeout_for(config.bridge_timeout, config.update_interval),
    )
