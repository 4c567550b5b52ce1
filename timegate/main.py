from __future__ import annotations

import platform
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import FastAPI, HTTPException, Query
from loguru import logger

from timegate.config import get_settings
from timegate.services.schedule_gate import check_gate
from timegate.services.time_ranges import TimeRangeError
from timegate.utils import configure_logging
from timegate.utils.config_validation import validate_runtime_config

settings = get_settings()
configure_logging("web", settings)

app = FastAPI(title="Time Gate")
validate_runtime_config(settings)

logger.info(
    "web boot",
    settings=settings.non_secret_dict(),
    python_version=platform.python_version(),
)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/config")
def config() -> Dict[str, Any]:
    data = settings.non_secret_dict()
    try:
        data["parsed_ranges"] = [{"start": r.start, "end": r.end} for r in settings.time_ranges()]
    except TimeRangeError as exc:
        data["parsed_ranges"] = None
        data["parse_error"] = str(exc)
    if settings.TIMEZONE:
        try:
            ZoneInfo(settings.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            data["timezone_error"] = str(exc)
    return data


@app.get("/schedule")
def schedule(minute: Optional[int] = Query(default=None, ge=0, le=1439)) -> Dict[str, Any]:
    try:
        decision = check_gate(settings, minute=minute)
    except (TimeRangeError, ZoneInfoNotFoundError, ValueError) as exc:
        logger.error(
            "schedule evaluation failed",
            error=str(exc),
            allowed_time_ranges=settings.ALLOWED_TIME_RANGES,
            timezone=settings.TIMEZONE,
        )
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return decision.as_dict()
