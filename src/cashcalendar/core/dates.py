"""
Date helpers for the cash-flow calendar.

Formatting is fixed to an English (en-GB) convention so output does not
depend on the process locale. "Today" is read through a `Clock` so callers
and tests can pin it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

DEFAULT_SOON_WINDOW_DAYS = 7


class Clock(Protocol):
    """Source of the current local day."""

    def today(self) -> date: ...


class SystemClock:
    """Wall-clock time source using the local timezone."""

    def today(self) -> date:
        return datetime.now().date()

    def __repr__(self) -> str:
        return "SystemClock()"


@dataclass(frozen=True)
class FixedClock:
    """Clock pinned to a given day, for tests and reproducible reports."""

    day: date

    def today(self) -> date:
        return self.day


def local_day(value: date | datetime) -> date:
    """Day a date or datetime falls on; aware datetimes use the local timezone."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def format_display_date(value: date | datetime) -> str:
    """
    Render a date as abbreviated weekday, day of month and abbreviated month.

    **Example:**
        ```python
        format_display_date(date(2026, 10, 18))  # 'Sun 18 Oct'
        ```
    """
    day = local_day(value)
    return f"{_WEEKDAYS[day.weekday()]} {day.day} {_MONTHS[day.month - 1]}"


def days_until(value: date | datetime, clock: Clock | None = None) -> int:
    """
    Signed number of calendar days from today to the given date.

    Both sides are reduced to their local day before subtracting, so a
    target a few hours into a day counts as that whole day. Negative values
    mean the date is in the past.

    The result is only valid for the instant of the call; do not cache it
    across a long-lived session.

    Args:
        value: Target date (a datetime is truncated to its date)
        clock: Source of "today"; defaults to the system clock
    """
    today = (clock or SystemClock()).today()
    return (local_day(value) - today).days


def days_label(days: int) -> str:
    """
    Presentation label for a day offset.

    **Example:**
        ```python
        days_label(-3)  # '3d overdue'
        days_label(0)   # 'Today'
        days_label(1)   # 'Tomorrow'
        days_label(5)   # '5d'
        ```
    """
    if days < 0:
        return f"{abs(days)}d overdue"
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    return f"{days}d"


def is_soon(days: int, window: int = DEFAULT_SOON_WINDOW_DAYS) -> bool:
    """True when the offset falls within the coming `window` days (excluding today)."""
    return 0 < days <= window
