from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from timegate.config import Settings


def configure_logging(service_name: str, settings: "Settings | None" = None) -> None:
    """Configure Loguru for the web and worker services.

    Every record carries the service name plus the gate's configured ranges and
    timezone, so skipped or delayed runs can be read without the boot log.
    """

    level = os.getenv("LOG_LEVEL", "INFO").upper()
    json_logging = os.getenv("LOG_JSON", "false").lower() == "true"

    ranges = "all day"
    timezone = "local"
    if settings is not None:
        ranges = settings.ALLOWED_TIME_RANGES.strip() or ranges
        timezone = settings.TIMEZONE or timezone

    log_format = (
        "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {extra[service]:<6} | "
        "{extra[ranges]} @ {extra[timezone]} | {message}"
    )

    logger.remove()
    logger.configure(
        handlers=[
            {
                "sink": sys.stdout,
                "level": level,
                "format": log_format,
                "serialize": json_logging,
                "enqueue": True,
                "backtrace": False,
                "diagnose": False,
            }
        ],
        extra={"service": service_name, "ranges": ranges, "timezone": timezone},
    )


__all__: list[Any] = ["configure_logging"]
