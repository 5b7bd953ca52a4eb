"""
Projection engine: running balance over a chronologically ordered calendar.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

import pandas as pd

from .entry import Entry, EntryType
from .money import to_decimal

PROJECTION_COLUMNS = [
    "date",
    "type",
    "description",
    "amount",
    "signed_amount",
    "status",
    "certainty",
    "running_balance",
]


@dataclass(frozen=True, slots=True)
class Projection:
    """
    An entry paired with the balance after applying it.

    Attributes:
        entry: The underlying entry (never modified)
        running_balance: Balance after this entry's own effect, starting
            from the starting balance of the sequence it belongs to
    """

    entry: Entry
    running_balance: Decimal

    @property
    def date(self):
        return self.entry.date


def sort_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Entries by date ascending; ties keep their input order."""
    return sorted(entries, key=lambda e: e.date)


def project(
    entries: Iterable[Entry],
    starting_balance: Decimal | float | int,
    high_certainty_only: bool = False,
) -> list[Projection]:
    """
    Compute the running balance over a chronologically sorted calendar.

    Steps:
        1. Stable sort by date
        2. Optionally keep only `complete`/`high` certainty entries
        3. Fold from `starting_balance`: `in` adds, `out` subtracts and
           `event` leaves the balance unchanged

    Each projection carries the balance *after* its own entry.

    Args:
        entries: Calendar entries in any order
        starting_balance: Balance before the first entry
        high_certainty_only: The display toggle; drops medium/low entries

    Returns:
        New list of `Projection`, sorted by date. Input is left untouched.

    **Example:**
        ```python
        rows = project(entries, Decimal("1000"))
        rows[-1].running_balance  # closing balance
        ```
    """
    ordered = sort_entries(entries)
    if high_certainty_only:
        ordered = [e for e in ordered if e.is_high_certainty]

    balance = to_decimal(starting_balance)
    out: list[Projection] = []
    for entry in ordered:
        if entry.type is EntryType.IN:
            balance += entry.amount
        elif entry.type is EntryType.OUT:
            balance -= entry.amount
        out.append(Projection(entry=entry, running_balance=balance))
    return out


def projection_frame(projections: Sequence[Projection]) -> pd.DataFrame:
    """
    Tidy DataFrame with one row per projection.

    Money columns are floats and enum columns hold their string values, so
    the frame can go straight to charts or CSV. An empty projection gives an
    empty frame with the same columns.
    """
    rows = [
        {
            "date": pd.Timestamp(p.entry.date),
            "type": p.entry.type.value,
            "description": p.entry.description,
            "amount": float(p.entry.amount),
            "signed_amount": float(p.entry.signed_amount),
            "status": p.entry.status.value,
            "certainty": p.entry.certainty.value,
            "running_balance": float(p.running_balance),
        }
        for p in projections
    ]
    df = pd.DataFrame(rows, columns=PROJECTION_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    return df
