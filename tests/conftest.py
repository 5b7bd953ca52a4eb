"""
Shared fixtures for CashCalendar tests.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest
from cashcalendar.core.dates import FixedClock
from cashcalendar.core.entry import Entry

TODAY = date(2026, 10, 18)


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture()
def make_entry():
    """Factory for entries dated relative to TODAY."""

    def _make(
        offset: int = 0,
        type: str = "out",
        amount=100,
        *,
        status: str = "pending",
        certainty: str = "complete",
        description: str | None = None,
    ) -> Entry:
        return Entry(
            date=TODAY + timedelta(days=offset),
            type=type,
            description=description or f"{type} {amount} @ {offset:+d}d",
            amount=amount,
            status=status,
            certainty=certainty,
        )

    return _make


@pytest.fixture()
def scenario_entries(make_entry) -> list[Entry]:
    """Two-entry calendar: +2d income 500 (high), +5d payment 300 (due)."""
    return [
        make_entry(2, "in", 500, status="pending", certainty="high"),
        make_entry(5, "out", 300, status="due", certainty="complete"),
    ]
