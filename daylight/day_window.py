"""
Day window calculation.

The day window is the broader of the natural day (sunrise to sunset) and the
user's active hours (wake-up minus slack to bed time plus slack). The curve
functions in daylight.lighting_math are evaluated against it.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from daylight.errors import ConfigurationError

DEFAULT_SLACK_SECONDS = 30 * 60


class ConfiguredTime(BaseModel):
    """Wall-clock target (wake-up or bed time) for today in the local zone."""

    model_config = ConfigDict(frozen=True)

    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(0, ge=0, le=59)

    @classmethod
    def parse(cls, value: str) -> "ConfiguredTime":
        """
        Parse an "HH:MM" string.

        Raises:
            ValueError: If the string is malformed or out of range
        """
        parts = value.strip().split(":")
        if len(parts) != 2:
            raise ValueError(f"Expected HH:MM, got {value!r}")
        hour, minute = (int(p) for p in parts)
        return cls(hour=hour, minute=minute)

    def on(self, day: date, tz: Optional[tzinfo] = None) -> datetime:
        """Resolve this wall-clock time against a calendar day."""
        resolved = datetime.combine(day, time(self.hour, self.minute), tzinfo=tz)
        if tz is None:
            # Naive datetimes are interpreted in the system local zone
            resolved = resolved.astimezone()
        return resolved

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class DayWindow:
    """
    Effective lighting window for the current calendar day.

    Both bounds are epoch seconds. Computed once at startup and read-only
    afterwards; a process running past midnight keeps yesterday's window.
    """

    start_of_day: int
    end_of_day: int

    def __post_init__(self):
        if self.start_of_day >= self.end_of_day:
            raise ConfigurationError(
                f"Inverted day window: start_of_day={self.start_of_day} "
                f"is not before end_of_day={self.end_of_day}"
            )

    @property
    def duration(self) -> int:
        return self.end_of_day - self.start_of_day

    @property
    def midday(self) -> float:
        return self.start_of_day + self.duration / 2

    def as_datetimes(self, tz: Optional[tzinfo] = None) -> tuple[datetime, datetime]:
        """Window bounds as aware datetimes (system local zone by default)."""
        start = datetime.fromtimestamp(self.start_of_day, tz)
        end = datetime.fromtimestamp(self.end_of_day, tz)
        if tz is None:
            start, end = start.astimezone(), end.astimezone()
        return start, end


def compute_window(
    sunrise: datetime,
    sunset: datetime,
    wake_up_time: ConfiguredTime,
    bed_time: ConfiguredTime,
    slack_seconds: int = DEFAULT_SLACK_SECONDS,
    day: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> DayWindow:
    """
    Combine natural sunrise/sunset with the configured wake-up and bed time.

    Args:
        sunrise: Natural sunrise (aware datetime)
        sunset: Natural sunset (aware datetime)
        wake_up_time: Configured wake-up time
        bed_time: Configured bed time
        slack_seconds: Subtracted from wake-up, added to bed time
        day: Calendar day the configured times refer to (default: today in tz)
        tz: Zone of the configured times (default: system local zone)

    Returns:
        DayWindow with start_of_day = min(sunrise, wake_up - slack) and
        end_of_day = max(sunset, bed_time + slack)

    Raises:
        ConfigurationError: If slack is negative or the window is inverted
    """
    if slack_seconds < 0:
        raise ConfigurationError(f"Slack must not be negative, got {slack_seconds}s")

    if day is None:
        day = datetime.now(tz).date()

    adjusted_wake_up = int(wake_up_time.on(day, tz).timestamp()) - slack_seconds
    adjusted_bed_time = int(bed_time.on(day, tz).timestamp()) + slack_seconds

    start_of_day = min(int(sunrise.timestamp()), adjusted_wake_up)
    end_of_day = max(int(sunset.timestamp()), adjusted_bed_time)

    return DayWindow(start_of_day=start_of_day, end_of_day=end_of_day)
