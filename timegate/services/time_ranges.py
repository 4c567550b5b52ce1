from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Iterator, Tuple
from zoneinfo import ZoneInfo

MINUTES_PER_DAY = 24 * 60
LAST_MINUTE = MINUTES_PER_DAY - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")


class TimeRangeError(ValueError):
    """Base class for time range parsing failures."""


class FormatError(TimeRangeError):
    """Raised when a range token does not split into exactly two parts on '-'."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"time range must look like 'HH:MM-HH:MM': {token}")


class InvalidTimeError(TimeRangeError):
    """Raised when a start or end time fails hour/minute/integer validation."""

    def __init__(self, token: str, reason: str, side: str | None = None):
        self.token = token
        self.reason = reason
        self.side = side
        message = reason if side is None else f"invalid {side} time: {reason}"
        super().__init__(message)


@dataclass(frozen=True)
class TimeRange:
    """Half-open window of minutes-of-day. ``start > end`` wraps past midnight."""

    start: int
    end: int

    def is_in_range(self, minute: int) -> bool:
        if self.start <= self.end:
            return self.start <= minute < self.end
        return minute >= self.start or minute < self.end

    def __contains__(self, minute: int) -> bool:
        return self.is_in_range(minute)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


ALL_DAY = TimeRange(0, MINUTES_PER_DAY)


@dataclass(frozen=True)
class TimeRanges:
    ranges: Tuple[TimeRange, ...] = ()

    @classmethod
    def of(cls, ranges: Iterable[TimeRange]) -> "TimeRanges":
        return cls(tuple(ranges))

    def is_in_any_range(self, minute: int) -> bool:
        return any(r.is_in_range(minute) for r in self.ranges)

    def __contains__(self, minute: int) -> bool:
        return self.is_in_any_range(minute)

    def __iter__(self) -> Iterator[TimeRange]:
        return iter(self.ranges)

    def __len__(self) -> int:
        return len(self.ranges)

    def __getitem__(self, index: int) -> TimeRange:
        return self.ranges[index]

    def __str__(self) -> str:
        return ",".join(str(r) for r in self.ranges)


def current_minute_of_day(now: datetime | None = None, tz: str | None = None) -> int:
    """Return ``hour * 60 + minute`` for ``now`` (default: the wall clock).

    With ``tz`` set the clock is read in that zone; aware ``now`` values are
    converted to it. Otherwise host local time is used.
    """
    zone = ZoneInfo(tz) if tz else None
    if now is None:
        now = datetime.now(zone) if zone else datetime.now()
    elif zone is not None and now.tzinfo is not None:
        now = now.astimezone(zone)
    return now.hour * 60 + now.minute


def _parse_int(text: str) -> int | None:
    text = text.strip()
    if not _INT_RE.fullmatch(text):
        return None
    return int(text)


def parse_time_to_minutes(token: str) -> int:
    """Convert ``HH:MM`` (or a legacy bare minute count) to minutes since midnight."""
    if ":" in token:
        parts = token.split(":")
        if len(parts) != 2:
            raise InvalidTimeError(token, f"time must look like HH:MM: {token}")

        hour = _parse_int(parts[0])
        if hour is None or hour < 0 or hour > 23:
            raise InvalidTimeError(token, f"invalid hour: {parts[0]} (expected 0-23)")

        minute = _parse_int(parts[1])
        if minute is None or minute < 0 or minute > 59:
            raise InvalidTimeError(token, f"invalid minute: {parts[1]} (expected 0-59)")

        return hour * 60 + minute

    minutes = _parse_int(token)
    if minutes is None or minutes < 0 or minutes > MINUTES_PER_DAY:
        raise InvalidTimeError(
            token, f"invalid minutes: {token} (expected 0-{MINUTES_PER_DAY} or HH:MM)"
        )
    return minutes


def parse_time_ranges(spec: str) -> TimeRanges:
    """Parse ``"06:00-08:00,22:00-02:00"`` style specs.

    An empty spec, or one holding only separators, means the whole day. An end
    time of 23:59 is stretched to 1440 so the last minute is included.
    Overlapping, duplicate and ``start == end`` ranges are kept as given.
    """
    if spec == "":
        return TimeRanges((ALL_DAY,))

    ranges = []
    for token in spec.split(","):
        token = token.strip()
        if not token:
            continue

        parts = token.split("-")
        if len(parts) != 2:
            raise FormatError(token)

        try:
            start = parse_time_to_minutes(parts[0])
        except InvalidTimeError as exc:
            raise InvalidTimeError(parts[0], exc.reason, side="start") from exc

        try:
            end = parse_time_to_minutes(parts[1])
        except InvalidTimeError as exc:
            raise InvalidTimeError(parts[1], exc.reason, side="end") from exc

        if end == LAST_MINUTE:
            end = MINUTES_PER_DAY

        ranges.append(TimeRange(start, end))

    if not ranges:
        return TimeRanges((ALL_DAY,))
    return TimeRanges(tuple(ranges))


def find_next_allowed_time(current_minute: int, ranges: TimeRanges) -> int:
    """First allowed minute after ``current_minute``, wrapping into the next day.

    Returns ``current_minute`` unchanged when nothing matches; that value is not
    checked against ``ranges``.
    """
    for minute in range(current_minute + 1, MINUTES_PER_DAY):
        if ranges.is_in_any_range(minute):
            return minute

    for minute in range(0, current_minute):
        if ranges.is_in_any_range(minute):
            return minute

    return current_minute


def calculate_sleep_duration(current_minute: int, next_allowed_minute: int) -> timedelta:
    if next_allowed_minute > current_minute:
        minutes = next_allowed_minute - current_minute
    else:
        minutes = (MINUTES_PER_DAY - current_minute) + next_allowed_minute
    return timedelta(minutes=minutes)
