"""
HTTP status API for the daylight controller.

IMPORTANT:
- Must run with ONE worker (uvicorn daylight.main:app)
- The control loop runs in a background thread started by the lifespan
"""

from fastapi import FastAPI, HTTPException, APIRouter, Query
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional
import asyncio

from daylight.config import build_daylight_config, DaylightConfig, LOG_LEVEL, MOCK_MODE
from daylight.controller import DaylightController
from daylight.errors import DaylightError
from daylight.lighting_math import preview_day
from daylight.logger import logger
from daylight.startup import create_controller, resolve_timezone
from daylight.state import daylight_state


# ============================================================================
# Runtime (set during lifespan startup)
# ============================================================================

controller: Optional[DaylightController] = None
runtime_config: Optional[DaylightConfig] = None


# ============================================================================
# FastAPI Lifespan (control loop thread)
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    Builds and starts the controller on startup, stops it on shutdown.
    Startup errors abort the application.
    """
    global controller, runtime_config

    logger.info("Daylight starting up")
    logger.info(f"Configuration: LOG_LEVEL={LOG_LEVEL}, MOCK_MODE={MOCK_MODE}")

    try:
        runtime_config = build_daylight_config()
        controller = await asyncio.to_thread(create_controller, runtime_config)
        await asyncio.to_thread(controller.start)
    except DaylightError as e:
        logger.error(f"Startup failed: {e}")
        raise

    # App is running
    yield

    logger.info("Starting graceful shutdown...")
    await asyncio.to_thread(controller.stop)
    logger.info("Shutdown complete")


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Daylight API",
    lifespan=lifespan,
    redoc_url=None,
    docs_url="/docs"
)

daylight_router = APIRouter(
    prefix="/daylight",
    tags=["Daylight"]
)


def _require_runtime() -> tuple[DaylightController, DaylightConfig]:
    if controller is None or runtime_config is None:
        raise HTTPException(status_code=503, detail="Controller not started")
    return controller, runtime_config


@daylight_router.get("/state")
async def get_state():
    """
    Get the latest control loop iteration.

    Useful for:
    - Debugging
    - Checking that the bridge accepts updates
    """
    try:
        return daylight_state.get_snapshot()
    except Exception as e:
        logger.error("Failed to get state", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@daylight_router.get("/window")
async def get_window():
    """Day window the curves are evaluated against."""
    ctrl, config = _require_runtime()
    try:
        tz = resolve_timezone(config)
        sod, eod = ctrl.window.as_datetimes(tz)
        return {
            "start_of_day": ctrl.window.start_of_day,
            "end_of_day": ctrl.window.end_of_day,
            "start_of_day_iso": sod.isoformat(),
            "end_of_day_iso": eod.isoformat(),
            "wake_up_time": str(config.wake_up_time),
            "bed_time": str(config.bed_time),
            "slack_seconds": config.slack_seconds,
        }
    except Exception as e:
        logger.error("Failed to get day window", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@daylight_router.get("/preview")
async def get_preview(step_minutes: int = Query(15, ge=1, le=240, description="Minutes between samples")):
    """Brightness and color temperature over today, one row per step."""
    ctrl, config = _require_runtime()
    try:
        tz = resolve_timezone(config)
        day = datetime.fromtimestamp(ctrl.window.midday, tz).date()
        return {
            "date": day.isoformat(),
            "step_minutes": step_minutes,
            "samples": preview_day(ctrl.window, day, tz, step_minutes),
        }
    except Exception as e:
        logger.error("Failed to build preview", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


# ============================================================================
# Register Routers
# ============================================================================

app.include_router(daylight_router)
