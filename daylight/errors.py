"""
Error taxonomy for the daylight controller.

Startup errors (configuration, discovery, first light read, sun times) abort
the process. Read/write errors raised inside the control loop only skip the
current iteration.
"""


class DaylightError(Exception):
    """Base class for all daylight errors."""


class ConfigurationError(DaylightError):
    """Missing or invalid configuration, including an inverted day window."""


class DiscoveryError(DaylightError):
    """No Hue bridge reachable on the local network."""


class DeviceReadError(DaylightError):
    """Reading the light state from the bridge failed."""


class DeviceWriteError(DaylightError):
    """Sending a light state to the bridge failed."""


class AstronomicalComputationError(DaylightError):
    """No sunrise or sunset for the given date and location."""
