"""
Time and clock utilities.

Key concepts:
  - Clock sources: the energy estimator never reads the system clock itself.
    Callers inject a timestamp, usually taken from a ``Clock``.  Tests use
    ``FixedClock`` so every call is reproducible.
  - Day numbering: the recommender numbers days 0 = Sunday … 6 = Saturday.
    ``datetime.weekday()`` numbers them 0 = Monday, so always go through
    ``day_of_week()``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Anything that can report the current moment."""

    def now(self) -> datetime: ...


class SystemClock:
    """Reads the local wall clock (hour-of-day rules use local time)."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedClock:
    """Always reports the same moment.

    Args:
        moment: The datetime returned by every ``now()`` call.
    """

    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


def day_of_week(moment: datetime) -> int:
    """Return the day number with 0 = Sunday and 6 = Saturday."""
    return moment.isoweekday() % 7


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp string.

    Accepts ``"2026-10-17T08:30"`` style strings with or without an offset.

    Raises:
        ValueError: If the string is not ISO-8601.
    """
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(
            f"Cannot parse timestamp '{value}'. Expected ISO-8601, e.g. 2026-10-17T08:30."
        ) from exc
