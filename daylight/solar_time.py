"""
Astronomical sunrise/sunset calculation using Astral.
"""

from datetime import date, datetime, tzinfo

from astral import Observer
from astral.sun import sunrise, sunset
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from daylight.errors import AstronomicalComputationError, ConfigurationError


class GeoCoordinate(BaseModel):
    """Observer position in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


def resolve(latitude: float, longitude: float, day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """
    Natural sunrise and sunset for a calendar day at a location.

    Polar days and nights are not substituted with sentinel bounds: if the sun
    does not cross the horizon on that day, this fails.

    Args:
        latitude: Latitude (-90 to 90)
        longitude: Longitude (-180 to 180)
        day: Local calendar date
        tz: Zone for the returned datetimes and for interpreting `day`

    Returns:
        (sunrise, sunset) as aware datetimes in tz

    Raises:
        ConfigurationError: If the coordinates are out of range
        AstronomicalComputationError: If there is no sunrise or sunset
    """
    try:
        position = GeoCoordinate(latitude=latitude, longitude=longitude)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid coordinates: lat={latitude}, lng={longitude}") from e

    observer = Observer(latitude=position.latitude, longitude=position.longitude)

    try:
        rise = sunrise(observer, date=day, tzinfo=tz)
        set_ = sunset(observer, date=day, tzinfo=tz)
    except ValueError as e:
        # Astral raises ValueError when the sun never reaches the horizon
        raise AstronomicalComputationError(
            f"No sunrise/sunset on {day.isoformat()} at lat={latitude}, lng={longitude}: {e}"
        ) from e

    if set_ <= rise:
        raise AstronomicalComputationError(
            f"Degenerate sun times on {day.isoformat()} at lat={latitude}, lng={longitude}: "
            f"sunrise={rise.isoformat()}, sunset={set_.isoformat()}"
        )

    return rise, set_
