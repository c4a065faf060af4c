"""
Headless entry point: python -m daylight

Runs the control loop in the main thread until SIGINT/SIGTERM.
"""

import signal
import sys
import threading

from daylight.errors import DaylightError
from daylight.logger import logger
from daylight.startup import create_controller


def main() -> int:
    shutdown_event = threading.Event()

    def shutdown_handler(signum, frame):
        """Handle SIGTERM/SIGINT for graceful shutdown."""
        logger.info(f"Received signal {signum}, terminating gracefully")
        shutdown_event.set()

    signal.signal(signal.SIGTERM, shutdown_handler)
    signal.signal(signal.SIGINT, shutdown_handler)

    try:
        controller = create_controller(cancel_event=shutdown_event)
        controller.run()
    except DaylightError as e:
        logger.error(f"Startup failed: {e}")
        return 1

    logger.info("Shutdown complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
