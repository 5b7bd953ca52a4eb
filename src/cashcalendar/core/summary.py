"""
Summary aggregator: headline planning figures for a cash-flow calendar.

The figures are always computed over the full, unfiltered entry set. The
display certainty toggle never reaches this module.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from .entry import Entry, EntryType, Status
from .money import ZERO, to_decimal


@dataclass(frozen=True, slots=True)
class Summary:
    """
    Headline statistics for one (entries, starting balance) pair.

    Attributes:
        starting_balance: Balance before any entry
        total_out: Sum of all outgoing amounts, whatever their certainty or status
        total_in_high_certainty: Sum of incoming amounts with complete/high certainty
        total_in_all: Sum of all incoming amounts
        net_position_high: starting + high-certainty inflow - total_out
        net_position_all: starting + all inflow - total_out
        next_critical: Earliest outgoing entry with status `due`, or None
    """

    starting_balance: Decimal
    total_out: Decimal
    total_in_high_certainty: Decimal
    total_in_all: Decimal
    net_position_high: Decimal
    net_position_all: Decimal
    next_critical: Entry | None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "starting_balance": float(self.starting_balance),
            "total_out": float(self.total_out),
            "total_in_high_certainty": float(self.total_in_high_certainty),
            "total_in_all": float(self.total_in_all),
            "net_position_high": float(self.net_position_high),
            "net_position_all": float(self.net_position_all),
            "next_critical": (
                self.next_critical.to_dict() if self.next_critical else None
            ),
        }


def next_critical_entry(entries: Iterable[Entry]) -> Entry | None:
    """Earliest outgoing entry still `due`; ties resolve to input order."""
    critical = [
        e for e in entries if e.type is EntryType.OUT and e.status is Status.DUE
    ]
    if not critical:
        return None
    return sorted(critical, key=lambda e: e.date)[0]


def summarize(
    entries: Iterable[Entry], starting_balance: Decimal | float | int
) -> Summary:
    """
    Compute headline figures over all entries.

    `total_out` is the committed, worst-case outflow; the two net positions
    give the planning range between high-certainty and all expected inflow.

    Args:
        entries: Full calendar, in any order
        starting_balance: Balance before any entry

    Returns:
        A new `Summary`
    """
    entries = list(entries)
    start = to_decimal(starting_balance)

    total_out = sum((e.amount for e in entries if e.type is EntryType.OUT), ZERO)
    total_in_all = sum((e.amount for e in entries if e.type is EntryType.IN), ZERO)
    total_in_high = sum(
        (e.amount for e in entries if e.type is EntryType.IN and e.is_high_certainty),
        ZERO,
    )

    return Summary(
        starting_balance=start,
        total_out=total_out,
        total_in_high_certainty=total_in_high,
        total_in_all=total_in_all,
        net_position_high=start + total_in_high - total_out,
        net_position_all=start + total_in_all - total_out,
        next_critical=next_critical_entry(entries),
    )
