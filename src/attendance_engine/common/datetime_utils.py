from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterator, Union

TimeOfDay = Union[time, str]

_HH_MM = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
_HHMM = re.compile(r"^(\d{2})(\d{2})$")


def parse_time_of_day(value: TimeOfDay) -> time:
    """Accept a `time`, "HH:MM", "HH:MM:SS", "HHMM" or an ISO datetime string.

    Raises ValueError for anything else (callers turn it into a domain error).
    """
    if isinstance(value, datetime):
        return value.time().replace(tzinfo=None)
    if isinstance(value, time):
        return value.replace(tzinfo=None)
    if not isinstance(value, str):
        raise ValueError(f"Invalid time format: {value!r}")

    raw = value.strip()
    m = _HH_MM.match(raw) or _HHMM.match(raw)
    if m:
        hours = int(m.group(1))
        minutes = int(m.group(2))
        seconds = int(m.group(3) or 0) if m.re is _HH_MM else 0
        return time(hours, minutes, seconds)

    if "T" in raw:
        return datetime.fromisoformat(raw).time().replace(tzinfo=None, microsecond=0)

    raise ValueError(f"Invalid time format: {value!r}")


def anchor(day: date, tod: time, tz: tzinfo | None = None) -> datetime:
    """Wall-clock time on a given calendar day."""
    return datetime.combine(day, tod, tzinfo=tz)


def anchor_window(day: date, start: time, end: time, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """Absolute [start, end) for a wall-clock window on `day`.

    End not strictly after start moves to the next calendar day (overnight).
    """
    start_at = anchor(day, start, tz)
    end_at = anchor(day, end, tz)
    if end_at <= start_at:
        end_at = anchor(day + timedelta(days=1), end, tz)
    return start_at, end_at


def in_zone(instant: datetime, tz: tzinfo | None) -> datetime:
    """`instant` as wall-clock time in `tz`; naive input is taken to be in `tz`.

    Without a zone only naive instants are accepted (ValueError otherwise).
    """
    if tz is None:
        if instant.tzinfo is not None:
            raise ValueError(f"{instant.isoformat()} is timezone-aware but no attendance timezone is configured")
        return instant
    if instant.tzinfo is None:
        return instant.replace(tzinfo=tz)
    return instant.astimezone(tz)


def whole_minutes(delta: timedelta) -> int:
    return int(delta.total_seconds() // 60)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, never negative."""
    return max(whole_minutes(end - start), 0)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Inclusive date range."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
