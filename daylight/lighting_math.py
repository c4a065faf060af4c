"""
Daylight curves for brightness and color temperature.

All functions take epoch seconds (start of day, end of day, now) and return
normalized values in [0, 1]. They are pure and deterministic.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional

from daylight.day_window import DayWindow

SUNRISE_TRANSITION = 60 * 60  # 1 hour from warmest to coldest
SUNSET_TRANSITION = 60 * 60 * 2  # 2 hours from coldest to warmest
FADE_TIME = 60 * 60 * 3  # 3 hours of fade in/out outside the day window
BASELINE = 0.4  # Brightness at start and end of day


@dataclass(frozen=True)
class CurveSample:
    """Normalized brightness and color temperature for one instant."""
    brightness: float
    color_temperature: Optional[float] = None  # None if the light has no ct


def clamp(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, x))


def ease_out_cubic(x: float) -> float:
    """Rises quickly, then levels off towards 1."""
    return 1 - (1 - x) ** 3


def color_temperature(
    sod: int,
    eod: int,
    now: int,
    sunrise_transition: int = SUNRISE_TRANSITION,
    sunset_transition: int = SUNSET_TRANSITION,
) -> float:
    """
    Normalized color temperature: 0 is warmest, 1 is coldest.

    Warmest outside the day window, coldest in the midday plateau, linear
    ramps after start of day and before end of day.
    """
    if now < sod or now > eod:
        value = 0.0
    elif sod + sunrise_transition < now < eod - sunset_transition:
        value = 1.0
    elif now <= sod + sunrise_transition:
        value = (now - sod) / sunrise_transition
    else:
        value = (eod - now) / sunset_transition

    # Short windows make the two ramps overlap
    return clamp(value)


def brightness(
    sod: int,
    eod: int,
    now: int,
    baseline: float = BASELINE,
    fade_time: int = FADE_TIME,
) -> float:
    """
    Normalized brightness.

    Off at night, linear fade from 0 to baseline in the fade_time before start
    of day (and back after end of day), eased rise to 1 at midday and eased
    fall back to baseline at end of day.
    """
    halfday = (eod - sod) / 2
    midday = sod + halfday

    if now < sod - fade_time or now > eod + fade_time:
        # Night
        value = 0.0
    elif now < sod:
        # Fade in
        value = (1 - (sod - now) / fade_time) * baseline
    elif now > eod:
        # Fade out
        value = (1 - (now - eod) / fade_time) * baseline
    elif now <= midday:
        # Morning
        value = ease_out_cubic((now - sod) / halfday) * (1 - baseline) + baseline
    else:
        # Afternoon
        value = ease_out_cubic((eod - now) / halfday) * (1 - baseline) + baseline

    return clamp(value)


def evaluate(window: DayWindow, now: int, with_color_temperature: bool = True) -> CurveSample:
    """Sample both curves for one instant."""
    sod, eod = window.start_of_day, window.end_of_day
    ct = color_temperature(sod, eod, now) if with_color_temperature else None
    return CurveSample(brightness=brightness(sod, eod, now), color_temperature=ct)


def preview_day(window: DayWindow, day: date, tz: Optional[tzinfo] = None, step_minutes: int = 15) -> list[dict]:
    """
    Curve table for a whole calendar day.

    Args:
        window: Day window to evaluate against
        day: Calendar day to tabulate
        tz: Zone for the sample times (system local zone by default)
        step_minutes: Minutes between samples (15 gives 96 rows on a regular day)

    Returns:
        List of {"time", "timestamp", "brightness", "color_temperature"} dicts
    """
    if step_minutes <= 0:
        raise ValueError(f"step_minutes must be positive, got {step_minutes}")

    midnight = datetime.combine(day, time(0, 0), tzinfo=tz)
    next_midnight = datetime.combine(day + timedelta(days=1), time(0, 0), tzinfo=tz)
    if tz is None:
        midnight = midnight.astimezone()
        next_midnight = next_midnight.astimezone()

    # Step in absolute time: DST days have 92 or 100 quarter-hour rows
    step = timedelta(minutes=step_minutes)
    moment = midnight.astimezone(timezone.utc)

    rows = []
    while moment < next_midnight:
        timestamp = int(moment.timestamp())
        sample = evaluate(window, timestamp)
        rows.append({
            "time": moment.astimezone(tz).strftime("%H:%M"),
            "timestamp": timestamp,
            "brightness": round(sample.brightness, 5),
            "color_temperature": round(sample.color_temperature, 5),
        })
        moment += step
    return rows
