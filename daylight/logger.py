"""
Logging for the daylight controller.

INFO and DEBUG go to stdout, WARNING and ERROR to stderr. The level comes
from LOG_LEVEL; an unknown name falls back to INFO instead of failing at import.
Records carry the thread name so control loop output can be told apart from
the API worker.
"""

import logging
import sys
from daylight.config import LOG_LEVEL

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
DEFAULT_LEVEL = "INFO"


class LevelFilter(logging.Filter):
    """Pass records between two levels, inclusive."""

    def __init__(self, level_min: int, level_max: int):
        super().__init__()
        self.level_min = level_min
        self.level_max = level_max

    def filter(self, record: logging.LogRecord) -> bool:
        return self.level_min <= record.levelno <= self.level_max


def resolve_level(name: str | None) -> str | None:
    """Normalize a LOG_LEVEL value, None if it is not a supported level."""
    level = (name or DEFAULT_LEVEL).strip().upper()
    return level if level in LEVELS else None


def setup_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """
    Configure the "daylight" logger.

    Args:
        level: Level name, case-insensitive

    Returns:
        Logger instance for daylight
    """
    resolved = resolve_level(level)

    logger = logging.getLogger("daylight")
    logger.setLevel(resolved or DEFAULT_LEVEL)
    logger.propagate = False
    logger.handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(LevelFilter(logging.DEBUG, logging.INFO))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)

    # "2025-01-15 14:30:45 - daylight - DaylightController - INFO - brightness: 0.40000"
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(threadName)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    stdout_handler.setFormatter(formatter)
    stderr_handler.setFormatter(formatter)

    logger.addHandler(stdout_handler)
    logger.addHandler(stderr_handler)

    # One line per bridge request at DEBUG is too chatty for a 1.5 s loop
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    if resolved is None:
        logger.warning(f"Unknown LOG_LEVEL {level!r}, using {DEFAULT_LEVEL}")

    return logger


logger = setup_logging()
