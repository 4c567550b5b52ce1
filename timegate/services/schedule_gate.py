from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from timegate.config import Settings, get_settings
from timegate.services.time_ranges import (
    ALL_DAY,
    MINUTES_PER_DAY,
    TimeRanges,
    calculate_sleep_duration,
    current_minute_of_day,
    find_next_allowed_time,
)


@dataclass(frozen=True)
class GateDecision:
    allowed: bool
    current_minute: int
    next_allowed_minute: Optional[int]
    sleep: timedelta
    ranges: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "allowed": self.allowed,
            "current_minute": self.current_minute,
            "current_time": format_minute(self.current_minute),
            "next_allowed_minute": self.next_allowed_minute,
            "next_allowed_time": (
                format_minute(self.next_allowed_minute)
                if self.next_allowed_minute is not None
                else None
            ),
            "sleep_seconds": int(self.sleep.total_seconds()),
            "ranges": self.ranges,
        }


def format_minute(minute: int) -> str:
    return f"{minute // 60:02d}:{minute % 60:02d}"


def evaluate_gate(ranges: TimeRanges, current_minute: int) -> GateDecision:
    """Decide whether ``current_minute`` is allowed and how long to wait if not.

    When no minute of the day is allowed the decision carries no next time and a
    full-day sleep.
    """
    if ranges.is_in_any_range(current_minute):
        return GateDecision(True, current_minute, None, timedelta(0), str(ranges))

    next_minute = find_next_allowed_time(current_minute, ranges)
    if not ranges.is_in_any_range(next_minute):
        return GateDecision(
            False, current_minute, None, timedelta(minutes=MINUTES_PER_DAY), str(ranges)
        )

    sleep = calculate_sleep_duration(current_minute, next_minute)
    return GateDecision(False, current_minute, next_minute, sleep, str(ranges))


def check_gate(
    settings: Settings | None = None,
    now: datetime | None = None,
    minute: int | None = None,
) -> GateDecision:
    """Evaluate the configured gate at ``minute``, or at ``now`` / the clock when omitted."""
    settings = settings or get_settings()
    if minute is None:
        current_minute = current_minute_of_day(now, settings.TIMEZONE or None)
    else:
        current_minute = minute
    if not settings.GATE_ENABLED:
        return evaluate_gate(TimeRanges((ALL_DAY,)), current_minute)
    return evaluate_gate(settings.time_ranges(), current_minute)
