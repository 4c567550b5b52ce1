from __future__ import annotations

from zoneinfo import ZoneInfo

from loguru import logger

from timegate.config import Settings
from timegate.services.time_ranges import TimeRangeError


def validate_runtime_config(settings: Settings) -> None:
    """Validate configuration and abort early if values are inconsistent."""

    logger.info(
        "config resolved",
        allowed_time_ranges=settings.ALLOWED_TIME_RANGES,
        timezone=settings.TIMEZONE or "local",
        gate_enabled=settings.GATE_ENABLED,
        job_interval_seconds=settings.JOB_INTERVAL_SECONDS,
    )

    if settings.TIMEZONE:
        try:
            ZoneInfo(settings.TIMEZONE)
        except Exception as exc:  # noqa: BLE001
            raise RuntimeError(f"Invalid TIMEZONE: {settings.TIMEZONE}") from exc

    if settings.JOB_INTERVAL_SECONDS <= 0:
        raise RuntimeError("JOB_INTERVAL_SECONDS must be positive")

    if settings.MAX_SLEEP_SECONDS <= 0:
        raise RuntimeError("MAX_SLEEP_SECONDS must be positive")

    try:
        ranges = settings.time_ranges()
    except TimeRangeError as exc:
        raise RuntimeError(f"Invalid ALLOWED_TIME_RANGES: {exc}") from exc

    logger.info(
        "config time ranges",
        ranges=[{"start": r.start, "end": r.end} for r in ranges],
    )

    if not settings.GATE_ENABLED and settings.ALLOWED_TIME_RANGES.strip():
        logger.warning(
            "GATE_ENABLED is false; ALLOWED_TIME_RANGES is ignored",
            allowed_time_ranges=settings.ALLOWED_TIME_RANGES,
        )
