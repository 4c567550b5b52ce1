from __future__ import annotations

import asyncio
import platform
from datetime import datetime
from typing import Any, Callable, Dict

from loguru import logger

from timegate.config import get_settings
from timegate.services.schedule_gate import check_gate
from timegate.utils import configure_logging
from timegate.utils.config_validation import validate_runtime_config

settings = get_settings()
configure_logging("worker", settings)
validate_runtime_config(settings)
logger.info(
    "worker boot",
    settings=settings.non_secret_dict(),
    python_version=platform.python_version(),
)


def run_gated_once(job: Callable[[], Any], now: datetime | None = None) -> Dict[str, Any]:
    decision = check_gate(settings, now)
    result: Dict[str, Any] = {"ran": False, "decision": decision, "error": None}

    if not decision.allowed:
        logger.info(
            "outside allowed time ranges; job skipped",
            **decision.as_dict(),
        )
        return result

    logger.debug("inside allowed time ranges", **decision.as_dict())
    try:
        job()
        result["ran"] = True
    except Exception as exc:  # noqa: BLE001
        result["error"] = str(exc)
        logger.exception("job failed", error=str(exc))
    return result


def next_pause_seconds(result: Dict[str, Any]) -> int:
    decision = result["decision"]
    if decision.allowed:
        return settings.JOB_INTERVAL_SECONDS
    sleep_seconds = int(decision.sleep.total_seconds())
    return max(1, min(sleep_seconds, settings.MAX_SLEEP_SECONDS))


def heartbeat() -> None:
    logger.info("heartbeat", ranges=settings.ALLOWED_TIME_RANGES or "all day")


async def worker_loop(job: Callable[[], Any] = heartbeat) -> None:
    while True:
        pause = settings.JOB_INTERVAL_SECONDS
        try:
            result = run_gated_once(job)
            pause = next_pause_seconds(result)
        except Exception as exc:  # noqa: BLE001
            logger.exception("worker loop error", error=str(exc))
        await asyncio.sleep(pause)


if __name__ == "__main__":
    asyncio.run(worker_loop())
